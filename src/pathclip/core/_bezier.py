"""Internal cubic Bezier flattening.

This is an internal module containing the sampling loop used by
linearize_path. Not intended for public use.
"""

from pathclip.domain import Point
from pathclip.exceptions import ToleranceTooTightError


def _bernstein(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    mt = 1 - t
    return mt * mt * mt * p0 + 3 * mt * mt * t * p1 + 3 * mt * t * t * p2 + t * t * t * p3


def flatten_cubic(
    start: Point,
    control1: Point,
    control2: Point,
    end: Point,
    min_segments: int,
    min_segment_length: float,
    max_doublings: int = 20,
) -> list[Point]:
    """Flatten a cubic Bezier curve by uniform sampling with doubling.

    Samples the curve at ``min_segments`` uniform parameter steps. If any
    chord is longer than ``min_segment_length`` the samples are discarded,
    the step count doubles and sampling starts over.

    Args:
        start: Current pen position (not included in the result)
        control1: First control point
        control2: Second control point
        end: Curve endpoint (always the last returned point)
        min_segments: Initial number of segments, at least 1
        min_segment_length: Maximum allowed chord length
        max_doublings: How many times the segment count may double

    Returns:
        Points from after ``start`` up to and including ``end``. The count
        is ``min_segments * 2**k`` for some k, or 1 for a straight segment.

    Raises:
        ToleranceTooTightError: If the chords are still too long after
            ``max_doublings`` doublings
    """
    # Control points sitting on the endpoints make a straight line
    if start == control1 and end == control2:
        return [end]

    limit_sq = min_segment_length * min_segment_length
    num_segments = min_segments
    for _ in range(max_doublings + 1):
        result: list[Point] | None = []
        x, y = start.x, start.y
        for i in range(1, num_segments + 1):
            t = i / num_segments
            next_x = _bernstein(start.x, control1.x, control2.x, end.x, t)
            next_y = _bernstein(start.y, control1.y, control2.y, end.y, t)
            if (next_x - x) * (next_x - x) + (next_y - y) * (next_y - y) > limit_sq:
                result = None
                break
            result.append(Point(next_x, next_y))
            x, y = next_x, next_y

        if result is not None:
            return result

        num_segments *= 2

    raise ToleranceTooTightError(min_segment_length, num_segments // 2)
