"""Mapping between plane coordinates and integer engine units."""

from dataclasses import dataclass

from pathclip.config import GeometryConfig
from pathclip.domain import IntPoint, Point


@dataclass(frozen=True, slots=True)
class CoordinateScaler:
    """Scales points into the integer domain and back.

    Forward conversion multiplies by ``scale`` and rounds to the nearest
    integer, ties to even (Python's ``round``). Inverse conversion divides
    by ``scale`` without re-rounding, so a round trip is exact up to
    ``0.5 / scale`` per coordinate.

    Attributes:
        scale: Integer units per plane unit
    """

    scale: int

    @classmethod
    def from_config(cls, config: GeometryConfig) -> "CoordinateScaler":
        return cls(config.scale)

    def to_integer(self, point: Point) -> IntPoint:
        return (round(point.x * self.scale), round(point.y * self.scale))

    def to_point(self, x: int, y: int) -> Point:
        return Point(x / self.scale, y / self.scale)
