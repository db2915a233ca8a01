"""Converters between fontTools pen recordings and domain paths.

SVG path data is parsed by fontTools into pen commands. This module turns
those commands into curve-form paths (every drawn segment a cubic, as the
linearizer expects) and draws domain paths back onto any pen.
"""

import math
import re
from typing import Any

from fontTools.misc.transform import Identity, Transform
from fontTools.pens.basePen import (
    AbstractPen,
    decomposeQuadraticSegment,
    decomposeSuperBezierSegment,
)
from fontTools.pens.recordingPen import RecordingPen
from fontTools.pens.transformPen import TransformPen
from fontTools.svgLib.path import parse_path

from pathclip.domain import CubicTo, LineRun, MoveTo, Path, Point, Segment
from pathclip.exceptions import MalformedPathError

_TRANSFORM_RE = re.compile(r"([a-zA-Z]+)\s*\(([^)]*)\)")
_NUMBER_RE = re.compile(r"[-+]?(?:\d*\.\d+|\d+\.?)(?:[eE][-+]?\d+)?")


def parse_transform(text: str | None) -> Transform:
    """Parse an SVG transform list into a fontTools Transform.

    Supports matrix, translate, scale, rotate (with optional centre),
    skewX and skewY. Transforms apply right to left, as in SVG.

    Args:
        text: Value of a transform attribute (None or empty = identity)

    Returns:
        Combined transform

    Raises:
        MalformedPathError: If a transform is unknown or has the wrong
            number of arguments
    """
    t = Identity
    if not text:
        return t

    for name, raw_args in _TRANSFORM_RE.findall(text):
        args = [float(a) for a in _NUMBER_RE.findall(raw_args)]
        n = len(args)
        if name == "matrix" and n == 6:
            t = t.transform(args)
        elif name == "translate" and n in (1, 2):
            t = t.translate(args[0], args[1] if n == 2 else 0)
        elif name == "scale" and n in (1, 2):
            t = t.scale(args[0], args[1] if n == 2 else args[0])
        elif name == "rotate" and n in (1, 3):
            angle = math.radians(args[0])
            if n == 3:
                t = t.translate(args[1], args[2]).rotate(angle).translate(-args[1], -args[2])
            else:
                t = t.rotate(angle)
        elif name == "skewX" and n == 1:
            t = t.skew(math.radians(args[0]), 0)
        elif name == "skewY" and n == 1:
            t = t.skew(0, math.radians(args[0]))
        else:
            raise MalformedPathError(f"Unsupported transform: {name}({raw_args.strip()})")
    return t


def _point(pt: tuple[float, float]) -> Point:
    return Point(float(pt[0]), float(pt[1]))


def recording_to_path(recording: list[tuple[str, tuple[Any, ...]]]) -> Path:
    """Convert a RecordingPen recording to a curve-form path.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), ..., (x, y)))  # Quadratic
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))  # Cubic
    - ('closePath', ()) / ('endPath', ())

    Lines become cubics whose control points sit on their endpoints and
    quadratics are degree-elevated, so the result holds only moves and
    cubics. Closing a subpath away from its start adds a closing line.

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        Path of moves and cubics

    Raises:
        MalformedPathError: If the recording draws before any move or holds
            an unknown command
    """
    segments: list[Segment] = []
    current: Point | None = None
    subpath_start: Point | None = None
    is_open = False

    def ensure_open() -> Point:
        nonlocal is_open
        if current is None:
            raise MalformedPathError("Path does not begin with a move")
        if not is_open:
            # Drawing after a close continues from the subpath start
            segments.append(MoveTo(current))
            is_open = True
        return current

    def line_to(end: Point) -> None:
        nonlocal current
        start = ensure_open()
        segments.append(CubicTo(start, end, end))
        current = end

    for command, args in recording:
        if command == "moveTo":
            current = subpath_start = _point(args[0])
            segments.append(MoveTo(current))
            is_open = True
        elif command == "lineTo":
            line_to(_point(args[0]))
        elif command == "curveTo":
            ensure_open()
            curves = decomposeSuperBezierSegment(args) if len(args) > 3 else [args]
            for c1, c2, end in curves:
                segments.append(CubicTo(_point(c1), _point(c2), _point(end)))
                current = _point(end)
        elif command == "qCurveTo":
            if args[-1] is None:
                raise MalformedPathError("Closed quadratic contours are not supported")
            start = ensure_open()
            for control, end in decomposeQuadraticSegment(args):
                q, p = _point(control), _point(end)
                segments.append(
                    CubicTo(
                        Point(start.x + 2 / 3 * (q.x - start.x), start.y + 2 / 3 * (q.y - start.y)),
                        Point(p.x + 2 / 3 * (q.x - p.x), p.y + 2 / 3 * (q.y - p.y)),
                        p,
                    )
                )
                start = p
            current = start
        elif command == "closePath":
            if is_open and subpath_start is not None and current != subpath_start:
                line_to(subpath_start)
            current = subpath_start
            is_open = False
        elif command == "endPath":
            is_open = False
        else:
            raise MalformedPathError(f"Subpath has an unknown segment: {command}")

    return Path(tuple(segments))


def parse_path_data(d: str, transform: Transform | None = None) -> Path:
    """Parse SVG path data into a curve-form path.

    Args:
        d: Value of a path's ``d`` attribute
        transform: Transform applied to every coordinate (None = identity)

    Returns:
        Path of moves and cubics in plane units

    Raises:
        MalformedPathError: If the path data cannot be parsed
    """
    recorder = RecordingPen()
    pen: AbstractPen = recorder
    if transform is not None and transform != Identity:
        pen = TransformPen(recorder, transform)

    try:
        parse_path(d, pen)
    except (ValueError, IndexError) as e:
        raise MalformedPathError(f"Invalid path data: {e}") from e

    return recording_to_path(recorder.value)


def draw_path(path: Path, pen: AbstractPen, close_subpaths: bool = True) -> None:
    """Draw a domain path onto a fontTools pen.

    Args:
        path: Path to draw
        pen: Destination pen
        close_subpaths: Emit closePath at the end of each subpath (polygon
            output); otherwise endPath
    """
    is_open = False
    for segment in path:
        if isinstance(segment, MoveTo):
            if is_open:
                _finish(pen, close_subpaths)
            pen.moveTo(segment.point.to_tuple())
            is_open = True
        elif isinstance(segment, LineRun):
            for p in segment.points:
                pen.lineTo(p.to_tuple())
        else:
            pen.curveTo(
                segment.control1.to_tuple(),
                segment.control2.to_tuple(),
                segment.end.to_tuple(),
            )
    if is_open:
        _finish(pen, close_subpaths)


def _finish(pen: AbstractPen, close: bool) -> None:
    if close:
        pen.closePath()
    else:
        pen.endPath()
