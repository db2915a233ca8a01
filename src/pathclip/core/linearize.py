"""Path linearization.

Replaces every cubic segment of a path with a run of straight segments,
keeping subpath boundaries intact.
"""

from pathclip.config import FlattenConfig
from pathclip.core._bezier import flatten_cubic
from pathclip.domain import CubicTo, LineRun, MoveTo, Path, Segment
from pathclip.exceptions import MalformedPathError, PathError, ToleranceTooTightError
from pathclip.utils.logging import ErrorReporter, report_error


def require_leading_move(path: Path) -> MoveTo:
    """Return the path's leading move.

    Raises:
        MalformedPathError: If the path has fewer than two segments or does
            not start with a move
    """
    if len(path) < 2 or not isinstance(path[0], MoveTo):
        raise MalformedPathError("Path does not begin with a move")
    return path[0]


def linearize(path: Path, tolerances: FlattenConfig) -> Path:
    """Flatten all cubic segments of a path.

    Args:
        path: Path made of moves and cubics
        tolerances: Flattening tolerances

    Returns:
        Path holding only moves and line runs

    Raises:
        MalformedPathError: If the path does not begin with a move or holds
            a segment other than a move or cubic
        ToleranceTooTightError: If a curve cannot be flattened within the
            subdivision cap
    """
    first = require_leading_move(path)
    pen = first.point
    result: list[Segment] = [first]

    for segment in path.segments[1:]:
        if isinstance(segment, CubicTo):
            points = flatten_cubic(
                pen,
                segment.control1,
                segment.control2,
                segment.end,
                tolerances.min_segments,
                tolerances.min_segment_length,
                tolerances.max_doublings,
            )
            result.append(LineRun(tuple(points)))
            pen = segment.end
        elif isinstance(segment, MoveTo):
            result.append(segment)
            pen = segment.point
        else:
            raise MalformedPathError(f"Subpath has an unknown segment: {segment.kind.value}")

    return Path(tuple(result))


def linearize_path(
    path: Path,
    tolerances: FlattenConfig,
    report: ErrorReporter | None = None,
) -> Path | None:
    """Flatten a path, reporting failures instead of raising.

    Args:
        path: Path made of moves and cubics
        tolerances: Flattening tolerances
        report: Called with a message when the path is rejected

    Returns:
        Linear path, or None if the path was rejected
    """
    try:
        return linearize(path, tolerances)
    except (PathError, ToleranceTooTightError) as e:
        report_error(e, report)
        return None
