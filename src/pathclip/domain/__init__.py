"""Domain models for pathclip.

This module contains the value types flowing through the pipeline. All
models are designed to be:

- Immutable (frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of the polygon engine and SVG libraries

Key classes:
- Point: A 2D point in plane units
- MoveTo, LineRun, CubicTo: Path segments
- Path: A sequence of segments with subpaths
- IntegerPolygon: A closed polygon in integer engine units
"""

from pathclip.domain.path import (
    CubicTo,
    LineRun,
    MoveTo,
    Path,
    Point,
    Segment,
    SegmentKind,
)
from pathclip.domain.polygon import (
    IntegerPolygon,
    IntPoint,
    PolygonSet,
    polygon_set,
    total_area,
)

__all__: list[str] = [
    # Enums
    "SegmentKind",
    # Path types
    "Point",
    "MoveTo",
    "LineRun",
    "CubicTo",
    "Segment",
    "Path",
    # Polygon types
    "IntPoint",
    "IntegerPolygon",
    "PolygonSet",
    "polygon_set",
    "total_area",
]
