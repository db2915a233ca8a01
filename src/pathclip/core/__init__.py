"""Core processing algorithms for pathclip.

This module contains the geometry pipeline:

- Curve flattening (uniform sampling with doubling)
- Path linearization (cubic segments to line runs)
- Coordinate scaling (plane units to integer engine units)
- Polygon conversion (linear paths to polygon sets and back)
- Geometry operations (clean, boolean clipping, offsetting)

All pipeline functions are:
- Stateless (safe for use in worker processes)
- Pure (inputs are never modified)

Key functions:
- flatten_cubic: Flatten one cubic Bezier segment
- linearize_path: Flatten every curve of a path
- path_to_polygons: Convert a linear path to integer polygons
- polygons_to_path: Convert integer polygons to a linear path

Key classes:
- CoordinateScaler: Plane/integer coordinate mapping
- GeometryOps: Clean, clip and offset over a PolygonEngine
- ClipperEngine: PolygonEngine backed by pyclipper
- PathProcessor: Parallel batch processing
"""

from pathclip.core._bezier import flatten_cubic
from pathclip.core.converter import (
    path_to_polygons,
    polygons_to_path,
    to_polygons,
)
from pathclip.core.engine import (
    ClipOperation,
    ClipperEngine,
    EndType,
    FillRule,
    JoinType,
    PolygonEngine,
)
from pathclip.core.linearize import linearize, linearize_path
from pathclip.core.operations import GeometryOps
from pathclip.core.processor import PathProcessor, ProcessingResult, process_path
from pathclip.core.scaler import CoordinateScaler

__all__ = [
    # Engine
    "ClipOperation",
    "ClipperEngine",
    "EndType",
    "FillRule",
    "JoinType",
    "PolygonEngine",
    # Pipeline classes
    "CoordinateScaler",
    "GeometryOps",
    # Processor classes
    "PathProcessor",
    "ProcessingResult",
    # Pipeline functions
    "flatten_cubic",
    "linearize",
    "linearize_path",
    "path_to_polygons",
    "polygons_to_path",
    "process_path",
    "to_polygons",
]
