"""Conversion between linear paths and integer polygon sets."""

from pathclip.core.linearize import require_leading_move
from pathclip.core.scaler import CoordinateScaler
from pathclip.domain import (
    CubicTo,
    IntegerPolygon,
    IntPoint,
    LineRun,
    MoveTo,
    Path,
    PolygonSet,
    Segment,
)
from pathclip.exceptions import MalformedPathError, PathError
from pathclip.utils.logging import ErrorReporter, report_error


def to_polygons(path: Path, scaler: CoordinateScaler) -> PolygonSet:
    """Convert a linear path into closed integer polygons.

    Each move opens a new polygon; line runs extend the open one.

    Args:
        path: Path holding only moves and line runs
        scaler: Plane to integer mapping

    Returns:
        One polygon per move, in path order

    Raises:
        MalformedPathError: If the path does not begin with a move or holds
            a cubic segment
    """
    first = require_leading_move(path)
    polygons: list[list[IntPoint]] = [[scaler.to_integer(first.point)]]

    for segment in path.segments[1:]:
        if isinstance(segment, MoveTo):
            polygons.append([scaler.to_integer(segment.point)])
        elif isinstance(segment, LineRun):
            polygons[-1].extend(scaler.to_integer(p) for p in segment.points)
        elif isinstance(segment, CubicTo):
            raise MalformedPathError("Subpath has a non-linear segment: cubic")
        else:
            raise MalformedPathError(f"Subpath has an unknown segment: {segment!r}")

    return tuple(IntegerPolygon(tuple(points)) for points in polygons)


def path_to_polygons(
    path: Path,
    scaler: CoordinateScaler,
    report: ErrorReporter | None = None,
) -> PolygonSet | None:
    """Convert a linear path to polygons, reporting failures instead of raising.

    Returns:
        Polygon set, or None if the path was rejected
    """
    try:
        return to_polygons(path, scaler)
    except PathError as e:
        report_error(e, report)
        return None


def polygons_to_path(polygons: PolygonSet, scaler: CoordinateScaler) -> Path:
    """Convert polygons back into a linear path.

    Each polygon becomes a move to its first point and a line run through
    the rest. Empty polygons are skipped.

    Args:
        polygons: Polygons in integer engine units
        scaler: Integer to plane mapping (same scale used going forward)

    Returns:
        Linear path in plane units
    """
    segments: list[Segment] = []
    for polygon in polygons:
        if not polygon.points:
            continue
        first, *rest = polygon.points
        segments.append(MoveTo(scaler.to_point(*first)))
        segments.append(LineRun(tuple(scaler.to_point(*p) for p in rest)))
    return Path(tuple(segments))
