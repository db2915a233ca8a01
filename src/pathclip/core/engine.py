"""Polygon engine capability and its pyclipper implementation.

GeometryOps only talks to the PolygonEngine protocol, so tests can swap
in a fake engine. ClipperEngine is the production engine.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol, TypeVar

import pyclipper

from pathclip.domain import IntegerPolygon, PolygonSet
from pathclip.exceptions import GeometryEngineError

T = TypeVar("T")


class FillRule(Enum):
    """Rule deciding polygon interiors."""

    EVEN_ODD = "even_odd"
    NON_ZERO = "non_zero"


class ClipOperation(Enum):
    """Boolean operation between subject and clip sets."""

    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"
    XOR = "xor"


class JoinType(Enum):
    """Corner treatment when offsetting."""

    ROUND = "round"
    SQUARE = "square"
    MITER = "miter"


class EndType(Enum):
    """How path ends are treated when offsetting."""

    CLOSED_POLYGON = "closed_polygon"
    CLOSED_LINE = "closed_line"


class PolygonEngine(Protocol):
    """Boolean and offset operations over integer polygon sets."""

    def clean_polygons(self, polygons: PolygonSet, distance: float) -> PolygonSet: ...

    def simplify_polygons(self, polygons: PolygonSet, fill_rule: FillRule) -> PolygonSet: ...

    def execute(
        self,
        subject: PolygonSet,
        clip: PolygonSet,
        operation: ClipOperation,
        subject_fill: FillRule,
        clip_fill: FillRule,
    ) -> PolygonSet: ...

    def offset_polygons(
        self,
        polygons: PolygonSet,
        delta: float,
        join: JoinType,
        end: EndType,
        arc_tolerance: float,
    ) -> PolygonSet: ...


_FILL_RULES = {
    FillRule.EVEN_ODD: pyclipper.PFT_EVENODD,
    FillRule.NON_ZERO: pyclipper.PFT_NONZERO,
}

_CLIP_TYPES = {
    ClipOperation.UNION: pyclipper.CT_UNION,
    ClipOperation.INTERSECTION: pyclipper.CT_INTERSECTION,
    ClipOperation.DIFFERENCE: pyclipper.CT_DIFFERENCE,
    ClipOperation.XOR: pyclipper.CT_XOR,
}

_JOIN_TYPES = {
    JoinType.ROUND: pyclipper.JT_ROUND,
    JoinType.SQUARE: pyclipper.JT_SQUARE,
    JoinType.MITER: pyclipper.JT_MITER,
}

_END_TYPES = {
    EndType.CLOSED_POLYGON: pyclipper.ET_CLOSEDPOLYGON,
    EndType.CLOSED_LINE: pyclipper.ET_CLOSEDLINE,
}


def _to_clipper(polygons: PolygonSet) -> list[list[tuple[int, int]]]:
    return [list(p.points) for p in polygons if p.points]


def _from_clipper(paths: Any) -> PolygonSet:
    return tuple(IntegerPolygon(tuple((pt[0], pt[1]) for pt in path)) for path in paths if path)


def _add_operand(clipper: Any, paths: list[list[tuple[int, int]]], poly_type: int) -> bool:
    """Add closed paths to a clipper; return False when none can bound area.

    Clipper ignores degenerate paths (fewer than three distinct points or
    all collinear) and pyclipper raises when an operand holds nothing else,
    so such an operand is left out of the operation.
    """
    if not paths:
        return False
    try:
        clipper.AddPaths(paths, poly_type, True)
    except pyclipper.ClipperException:
        return False
    return True


class ClipperEngine:
    """PolygonEngine backed by pyclipper (Clipper 6).

    Example:
        engine = ClipperEngine()
        result = engine.execute(a, b, ClipOperation.DIFFERENCE,
                                FillRule.EVEN_ODD, FillRule.EVEN_ODD)
    """

    def __init__(self, miter_limit: float = 2.0) -> None:
        self.miter_limit = miter_limit

    def _call(self, operation: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except pyclipper.ClipperException as e:
            raise GeometryEngineError(operation, str(e)) from e

    def clean_polygons(self, polygons: PolygonSet, distance: float) -> PolygonSet:
        paths = _to_clipper(polygons)
        if not paths:
            return ()
        return _from_clipper(
            self._call("clean", lambda: pyclipper.CleanPolygons(paths, distance))
        )

    def simplify_polygons(self, polygons: PolygonSet, fill_rule: FillRule) -> PolygonSet:
        paths = _to_clipper(polygons)
        if not paths:
            return ()
        return _from_clipper(
            self._call(
                "simplify",
                lambda: pyclipper.SimplifyPolygons(paths, _FILL_RULES[fill_rule]),
            )
        )

    def execute(
        self,
        subject: PolygonSet,
        clip: PolygonSet,
        operation: ClipOperation,
        subject_fill: FillRule,
        clip_fill: FillRule,
    ) -> PolygonSet:
        subject_paths = _to_clipper(subject)
        clip_paths = _to_clipper(clip)
        if not subject_paths and not clip_paths:
            return ()

        def run() -> Any:
            clipper = pyclipper.Pyclipper()
            added = _add_operand(clipper, subject_paths, pyclipper.PT_SUBJECT)
            added = _add_operand(clipper, clip_paths, pyclipper.PT_CLIP) or added
            if not added:
                return []
            return clipper.Execute(
                _CLIP_TYPES[operation],
                _FILL_RULES[subject_fill],
                _FILL_RULES[clip_fill],
            )

        return _from_clipper(self._call(operation.value, run))

    def offset_polygons(
        self,
        polygons: PolygonSet,
        delta: float,
        join: JoinType,
        end: EndType,
        arc_tolerance: float,
    ) -> PolygonSet:
        paths = _to_clipper(polygons)
        if not paths:
            return ()

        def run() -> Any:
            offsetter = pyclipper.PyclipperOffset(self.miter_limit, arc_tolerance)
            offsetter.AddPaths(paths, _JOIN_TYPES[join], _END_TYPES[end])
            return offsetter.Execute(delta)

        return _from_clipper(self._call("offset", run))
