"""Integer polygon types consumed by the polygon engine."""

from dataclasses import dataclass
from typing import Any

IntPoint = tuple[int, int]


@dataclass(frozen=True, slots=True)
class IntegerPolygon:
    """A closed polygon in integer engine units.

    The last point connects back to the first; the closing point is not
    repeated.

    Attributes:
        points: Vertices in order
    """

    points: tuple[IntPoint, ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "points", tuple((int(x), int(y)) for x, y in self.points)
        )

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Positive for counter-clockwise winding in a y-up frame.

        Returns:
            Signed area in square engine units
        """
        n = len(self.points)
        if n < 3:
            return 0.0

        area = 0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i][0] * self.points[j][1]
            area -= self.points[j][0] * self.points[i][1]

        return area / 2.0

    def bounding_box(self) -> tuple[int, int, int, int]:
        """Return (min_x, min_y, max_x, max_y); zeros when empty."""
        if not self.points:
            return (0, 0, 0, 0)

        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        return {"points": [list(p) for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IntegerPolygon":
        return cls(tuple((p[0], p[1]) for p in data["points"]))


PolygonSet = tuple[IntegerPolygon, ...]


def polygon_set(polygons: Any) -> PolygonSet:
    """Build a PolygonSet from nested point sequences or polygons."""
    return tuple(
        p if isinstance(p, IntegerPolygon) else IntegerPolygon(tuple(tuple(pt) for pt in p))
        for p in polygons
    )


def total_area(polygons: PolygonSet) -> float:
    """Sum of absolute polygon areas."""
    return sum(abs(p.signed_area()) for p in polygons)
