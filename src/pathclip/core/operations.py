"""Boolean and offset operations on integer polygon sets.

GeometryOps wraps an injected PolygonEngine with the fill rules, join
style and tolerances this pipeline always uses. Every method returns a new
PolygonSet and leaves its inputs untouched.
"""

from pathclip.config import GeometryConfig
from pathclip.core.engine import (
    ClipOperation,
    ClipperEngine,
    EndType,
    FillRule,
    JoinType,
    PolygonEngine,
)
from pathclip.domain import PolygonSet


class GeometryOps:
    """Clean, clip and offset polygon sets.

    Example:
        ops = GeometryOps()
        cut = ops.difference(outline, holes)
        grown = ops.offset(cut, config.to_integer_distance(1.5))
    """

    def __init__(
        self,
        engine: PolygonEngine | None = None,
        config: GeometryConfig | None = None,
    ) -> None:
        """Initialize with a polygon engine.

        Args:
            engine: Polygon engine (defaults to ClipperEngine)
            config: Geometry configuration supplying tolerances
        """
        self.engine: PolygonEngine = engine if engine is not None else ClipperEngine()
        self.config = config if config is not None else GeometryConfig()

    def clean(self, polygons: PolygonSet) -> PolygonSet:
        """Merge near-duplicate vertices, then resolve self-intersections.

        Vertices closer than the configured clean distance are merged and
        the result is simplified under the even-odd rule.
        """
        cleaned = self.engine.clean_polygons(polygons, self.config.clean_distance)
        return self.engine.simplify_polygons(cleaned, FillRule.EVEN_ODD)

    def clip(
        self,
        subject: PolygonSet,
        clip: PolygonSet,
        operation: ClipOperation,
    ) -> PolygonSet:
        """Apply a boolean operation with even-odd fill on both operands."""
        if not subject and operation in (ClipOperation.INTERSECTION, ClipOperation.DIFFERENCE):
            return ()
        return self.engine.execute(
            subject, clip, operation, FillRule.EVEN_ODD, FillRule.EVEN_ODD
        )

    def difference(self, subject: PolygonSet, clip: PolygonSet) -> PolygonSet:
        """Subject minus clip."""
        return self.clip(subject, clip, ClipOperation.DIFFERENCE)

    def union(self, subject: PolygonSet, clip: PolygonSet) -> PolygonSet:
        return self.clip(subject, clip, ClipOperation.UNION)

    def intersection(self, subject: PolygonSet, clip: PolygonSet) -> PolygonSet:
        return self.clip(subject, clip, ClipOperation.INTERSECTION)

    def xor(self, subject: PolygonSet, clip: PolygonSet) -> PolygonSet:
        return self.clip(subject, clip, ClipOperation.XOR)

    def offset(self, polygons: PolygonSet, distance: float) -> PolygonSet:
        """Grow (positive) or shrink (negative) every polygon.

        Uses round joins and closed-polygon ends bounded by the configured
        arc tolerance; the result is cleaned before it is returned.

        Args:
            polygons: Polygons to offset
            distance: Offset in integer engine units

        Returns:
            Offset polygons, possibly empty when shrinking removes them
        """
        if not polygons:
            return ()
        offset = self.engine.offset_polygons(
            polygons,
            distance,
            JoinType.ROUND,
            EndType.CLOSED_POLYGON,
            self.config.arc_tolerance,
        )
        return self.engine.clean_polygons(offset, self.config.clean_distance)
