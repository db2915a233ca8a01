"""Path types in floating-point plane coordinates.

This module defines the curve-path structure consumed and produced by the
flattening pipeline:
- Point: A 2D point in plane units
- MoveTo, LineRun, CubicTo: The three segment shapes
- Path: An ordered sequence of segments, possibly with several subpaths
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from pathclip.exceptions import MalformedPathError


class SegmentKind(Enum):
    """Shape of a path segment."""

    MOVE = "move"
    LINE = "line"
    CUBIC = "cubic"


@dataclass(frozen=True, slots=True)
class Point:
    """A point in plane units (SVG user units).

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Absolute start point of a new subpath."""

    kind: ClassVar[SegmentKind] = SegmentKind.MOVE

    point: Point

    @property
    def end(self) -> Point:
        return self.point

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "points": [self.point.to_dict()]}


@dataclass(frozen=True, slots=True)
class LineRun:
    """Absolute points joined to the current position by straight edges."""

    kind: ClassVar[SegmentKind] = SegmentKind.LINE

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    @property
    def end(self) -> Point | None:
        return self.points[-1] if self.points else None

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "points": [p.to_dict() for p in self.points]}


@dataclass(frozen=True, slots=True)
class CubicTo:
    """Cubic Bezier starting at the current pen position.

    Control points and endpoint are absolute coordinates.
    """

    kind: ClassVar[SegmentKind] = SegmentKind.CUBIC

    control1: Point
    control2: Point
    end: Point

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "points": [self.control1.to_dict(), self.control2.to_dict(), self.end.to_dict()],
        }


Segment = MoveTo | LineRun | CubicTo


def _segment_from_dict(data: dict[str, Any]) -> Segment:
    points = [Point.from_dict(p) for p in data["points"]]
    kind = SegmentKind(data["kind"])
    if kind is SegmentKind.MOVE:
        return MoveTo(points[0])
    if kind is SegmentKind.LINE:
        return LineRun(tuple(points))
    return CubicTo(points[0], points[1], points[2])


@dataclass(frozen=True, slots=True)
class Path:
    """An ordered sequence of segments.

    A well-formed path starts with a MoveTo; every later MoveTo starts a
    new subpath. Paths are immutable values: operations return new paths.

    Attributes:
        segments: Segments in drawing order
    """

    segments: tuple[Segment, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __getitem__(self, index: int) -> Segment:
        return self.segments[index]

    def is_linear(self) -> bool:
        """Check whether the path holds only moves and line runs."""
        return all(not isinstance(seg, CubicTo) for seg in self.segments)

    @property
    def subpath_count(self) -> int:
        """Number of subpaths (MoveTo segments)."""
        return sum(1 for seg in self.segments if isinstance(seg, MoveTo))

    def points(self) -> list[Point]:
        """All on-path points in drawing order (control points excluded)."""
        result: list[Point] = []
        for seg in self.segments:
            if isinstance(seg, LineRun):
                result.extend(seg.points)
            else:
                result.append(seg.end)
        return result

    def to_commands(self) -> list[list[Any]]:
        """Convert to compact command lists such as ``["M", x, y]``."""
        commands: list[list[Any]] = []
        for seg in self.segments:
            if isinstance(seg, MoveTo):
                commands.append(["M", seg.point.x, seg.point.y])
            elif isinstance(seg, LineRun):
                command: list[Any] = ["L"]
                for p in seg.points:
                    command.extend((p.x, p.y))
                commands.append(command)
            else:
                commands.append(
                    [
                        "C",
                        seg.control1.x,
                        seg.control1.y,
                        seg.control2.x,
                        seg.control2.y,
                        seg.end.x,
                        seg.end.y,
                    ]
                )
        return commands

    @classmethod
    def from_commands(cls, commands: Sequence[Sequence[Any]]) -> "Path":
        """Build a path from compact command lists.

        Accepted forms are ``["M", x, y]``, ``["L", x1, y1, x2, y2, ...]``
        and ``["C", c1x, c1y, c2x, c2y, x, y]`` with absolute coordinates.

        Args:
            commands: Command lists in drawing order

        Returns:
            Path instance

        Raises:
            MalformedPathError: If a command has an unknown letter or the
                wrong number of coordinates
        """
        segments: list[Segment] = []
        for command in commands:
            if not command:
                raise MalformedPathError("Subpath is empty")
            letter = command[0]
            try:
                coords = [float(c) for c in command[1:]]
            except (TypeError, ValueError) as e:
                raise MalformedPathError(f"Subpath has a non-numeric coordinate: {e}") from e
            if letter == "M":
                if len(coords) != 2:
                    raise MalformedPathError(
                        f"Move needs exactly one point, got {len(coords)} coordinates"
                    )
                segments.append(MoveTo(Point(coords[0], coords[1])))
            elif letter == "L":
                if len(coords) % 2:
                    raise MalformedPathError("Line run has an odd number of coordinates")
                segments.append(
                    LineRun(tuple(Point(coords[i], coords[i + 1]) for i in range(0, len(coords), 2)))
                )
            elif letter == "C":
                if len(coords) != 6:
                    raise MalformedPathError(
                        f"Cubic needs exactly three points, got {len(coords)} coordinates"
                    )
                segments.append(
                    CubicTo(
                        Point(coords[0], coords[1]),
                        Point(coords[2], coords[3]),
                        Point(coords[4], coords[5]),
                    )
                )
            else:
                raise MalformedPathError(f"Subpath has an unknown segment: {letter}")
        return cls(tuple(segments))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"segments": [seg.to_dict() for seg in self.segments]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Path":
        """Deserialize from dictionary."""
        return cls(tuple(_segment_from_dict(s) for s in data["segments"]))
