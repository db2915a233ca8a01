"""Tests for polygon engine operations."""

from unittest.mock import patch

import pyclipper
import pytest

from pathclip.config import GeometryConfig
from pathclip.core import (
    ClipOperation,
    ClipperEngine,
    EndType,
    FillRule,
    GeometryOps,
    JoinType,
)
from pathclip.domain import IntegerPolygon, PolygonSet, polygon_set, total_area
from pathclip.exceptions import GeometryEngineError


def square(x: int, y: int, size: int) -> IntegerPolygon:
    """Counter-clockwise square with its lower-left corner at (x, y)."""
    return IntegerPolygon(((x, y), (x + size, y), (x + size, y + size), (x, y + size)))


class FakeEngine:
    """PolygonEngine that records calls and echoes its input."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def clean_polygons(self, polygons: PolygonSet, distance: float) -> PolygonSet:
        self.calls.append(("clean", distance))
        return polygons

    def simplify_polygons(self, polygons: PolygonSet, fill_rule: FillRule) -> PolygonSet:
        self.calls.append(("simplify", fill_rule))
        return polygons

    def execute(self, subject, clip, operation, subject_fill, clip_fill) -> PolygonSet:
        self.calls.append(("execute", operation, subject_fill, clip_fill))
        return subject

    def offset_polygons(self, polygons, delta, join, end, arc_tolerance) -> PolygonSet:
        self.calls.append(("offset", delta, join, end, arc_tolerance))
        return polygons


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def fake_ops(fake_engine: FakeEngine) -> GeometryOps:
    return GeometryOps(engine=fake_engine, config=GeometryConfig())


@pytest.fixture
def ops() -> GeometryOps:
    """GeometryOps backed by pyclipper."""
    return GeometryOps()


class TestGeometryOpsOrchestration:
    """Tests for how GeometryOps drives its engine."""

    def test_clean_then_simplify_even_odd(self, fake_ops: GeometryOps, fake_engine: FakeEngine):
        fake_ops.clean((square(0, 0, 10),))

        assert fake_engine.calls == [
            ("clean", 90.0),
            ("simplify", FillRule.EVEN_ODD),
        ]

    @pytest.mark.parametrize(
        "method,operation",
        [
            ("difference", ClipOperation.DIFFERENCE),
            ("union", ClipOperation.UNION),
            ("intersection", ClipOperation.INTERSECTION),
            ("xor", ClipOperation.XOR),
        ],
    )
    def test_boolean_operations_use_even_odd(
        self, fake_ops: GeometryOps, fake_engine: FakeEngine, method: str, operation: ClipOperation
    ):
        getattr(fake_ops, method)((square(0, 0, 10),), (square(5, 5, 10),))

        assert fake_engine.calls == [
            ("execute", operation, FillRule.EVEN_ODD, FillRule.EVEN_ODD),
        ]

    def test_empty_subject_short_circuits(self, fake_ops: GeometryOps, fake_engine: FakeEngine):
        assert fake_ops.difference((), (square(0, 0, 10),)) == ()
        assert fake_ops.intersection((), (square(0, 0, 10),)) == ()
        assert fake_engine.calls == []

    def test_offset_round_join_then_clean(self, fake_ops: GeometryOps, fake_engine: FakeEngine):
        fake_ops.offset((square(0, 0, 10),), 500)

        assert fake_engine.calls == [
            ("offset", 500, JoinType.ROUND, EndType.CLOSED_POLYGON, 225.0),
            ("clean", 90.0),
        ]

    def test_offset_of_nothing(self, fake_ops: GeometryOps, fake_engine: FakeEngine):
        assert fake_ops.offset((), 500) == ()
        assert fake_engine.calls == []

    def test_tolerances_follow_config(self, fake_engine: FakeEngine):
        ops = GeometryOps(engine=fake_engine, config=GeometryConfig(clipper_scale=1000))
        ops.offset((square(0, 0, 10),), 5)
        assert fake_engine.calls[0][-1] == pytest.approx(2.25)
        assert fake_engine.calls[1] == ("clean", pytest.approx(0.9))


class TestClipperEngine:
    """Tests against the real pyclipper engine."""

    def test_difference_of_identical_squares_is_empty(self, ops: GeometryOps):
        a = polygon_set([[(0, 0), (10, 0), (10, 10), (0, 10)]])
        assert ops.difference(a, a) == ()

    @pytest.mark.parametrize(
        "points",
        [
            [(0, 0), (1000, 0)],
            [(0, 0), (1000, 0), (2000, 0)],
        ],
        ids=["two-points", "collinear"],
    )
    def test_difference_of_degenerate_set_is_empty(self, ops: GeometryOps, points):
        """Test that a set with no area subtracts from itself to nothing."""
        a = polygon_set([points])
        assert ops.difference(a, a) == ()

    def test_degenerate_clip_keeps_subject(self, ops: GeometryOps):
        a = (square(0, 0, 1000),)
        result = ops.difference(a, polygon_set([[(0, 0), (5, 5)]]))
        assert total_area(result) == total_area(a)

    def test_degenerate_subject_union_gives_clip(self, ops: GeometryOps):
        b = (square(0, 0, 1000),)
        result = ops.union(polygon_set([[(0, 0), (5, 5)]]), b)
        assert total_area(result) == total_area(b)

    def test_difference_with_empty_clip_keeps_subject(self, ops: GeometryOps):
        a = (square(0, 0, 1000000),)
        result = ops.difference(a, ())
        assert total_area(result) == total_area(a)

    def test_union_area(self, ops: GeometryOps):
        result = ops.union((square(0, 0, 1000),), (square(500, 0, 1000),))
        assert len(result) == 1
        assert total_area(result) == 1500 * 1000

    def test_intersection_area(self, ops: GeometryOps):
        result = ops.intersection((square(0, 0, 1000),), (square(500, 500, 1000),))
        assert total_area(result) == 500 * 500

    def test_xor_area(self, ops: GeometryOps):
        result = ops.xor((square(0, 0, 1000),), (square(500, 0, 1000),))
        assert total_area(result) == 2 * 500 * 1000

    def test_clean_resolves_self_intersection(self, ops: GeometryOps):
        """Test that a bow-tie becomes two simple triangles."""
        bow_tie = polygon_set([[(0, 0), (1000000, 1000000), (1000000, 0), (0, 1000000)]])
        result = ops.clean(bow_tie)
        assert len(result) == 2
        assert total_area(result) == pytest.approx(2 * 0.25 * 10**12)

    def test_clean_merges_near_duplicate_vertices(self, ops: GeometryOps):
        polygon = IntegerPolygon(
            ((0, 0), (1000000, 0), (1000010, 5), (1000000, 1000000), (0, 1000000))
        )
        result = ops.clean((polygon,))
        assert len(result) == 1
        assert len(result[0]) == 4

    def test_offset_grows_with_round_corners(self, ops: GeometryOps):
        size, delta = 1000000, 100000
        result = ops.offset((square(0, 0, size),), delta)

        expected = size * size + 4 * size * delta + 3.141592653589793 * delta * delta
        assert len(result) == 1
        assert total_area(result) == pytest.approx(expected, rel=1e-3)

    def test_offset_round_trip(self, ops: GeometryOps):
        """Test that growing then shrinking restores roughly the same area."""
        original = (square(0, 0, 1000000),)
        result = ops.offset(ops.offset(original, 100000), -100000)
        assert total_area(result) == pytest.approx(total_area(original), rel=1e-3)

    def test_shrink_to_nothing(self, ops: GeometryOps):
        assert ops.offset((square(0, 0, 1000),), -1000) == ()

    def test_inputs_untouched(self, ops: GeometryOps):
        a = (square(0, 0, 1000),)
        b = (square(500, 500, 1000),)
        ops.difference(a, b)
        assert a == (square(0, 0, 1000),)
        assert b == (square(500, 500, 1000),)

    def test_empty_inputs(self):
        engine = ClipperEngine()
        assert engine.clean_polygons((), 1.0) == ()
        assert engine.simplify_polygons((), FillRule.EVEN_ODD) == ()
        assert engine.offset_polygons((), 10, JoinType.ROUND, EndType.CLOSED_POLYGON, 1.0) == ()
        assert (
            engine.execute((), (), ClipOperation.UNION, FillRule.EVEN_ODD, FillRule.EVEN_ODD)
            == ()
        )

    def test_engine_failure_wrapped(self):
        engine = ClipperEngine()
        with patch.object(
            pyclipper, "SimplifyPolygons", side_effect=pyclipper.ClipperException("boom")
        ):
            with pytest.raises(GeometryEngineError, match="simplify: boom"):
                engine.simplify_polygons((square(0, 0, 10),), FillRule.EVEN_ODD)
