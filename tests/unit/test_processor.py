"""Tests for parallel processing orchestration."""

from unittest.mock import Mock, patch

import pytest
import structlog

from pathclip.config import FlattenConfig, GeometryConfig, PathClipSettings
from pathclip.core.processor import PathProcessor, ProcessingResult, process_path
from pathclip.domain import IntegerPolygon, Path, total_area


@pytest.fixture
def square_path() -> Path:
    """A 10 x 10 square drawn with straight cubics and closed."""
    return Path.from_commands(
        [
            ["M", 0, 0],
            ["C", 0, 0, 10, 0, 10, 0],
            ["C", 10, 0, 10, 10, 10, 10],
            ["C", 10, 10, 0, 10, 0, 10],
            ["C", 0, 10, 0, 0, 0, 0],
        ]
    )


@pytest.fixture
def curve_path() -> Path:
    """An open curve closed implicitly by the polygon conversion."""
    return Path.from_commands([["M", 0, 0], ["C", 0, 10, 10, 10, 10, 0]])


@pytest.fixture
def settings() -> PathClipSettings:
    """Create test settings."""
    return PathClipSettings(flatten=FlattenConfig(min_segments=1, min_segment_length=1.0))


@pytest.fixture
def processor(settings: PathClipSettings) -> PathProcessor:
    """Processor logging through structlog without touching the filesystem."""
    return PathProcessor(settings, logger=structlog.get_logger("test"))


def _args(settings: PathClipSettings) -> tuple[dict, dict]:
    return settings.flatten.model_dump(), settings.geometry.model_dump()


class TestProcessPath:
    """Tests for process_path function."""

    def test_square(self, square_path: Path, settings: PathClipSettings):
        result = process_path(square_path.to_dict(), *_args(settings))

        assert "error" not in result
        assert "duration_ms" in result
        polygons = [IntegerPolygon.from_dict(p) for p in result["polygons"]]
        assert len(polygons) == 1
        assert total_area(tuple(polygons)) == 100 * 100000**2

        output = Path.from_dict(result["path"])
        assert output.is_linear()
        assert output.subpath_count == 1

    def test_curve_flattened(self, curve_path: Path, settings: PathClipSettings):
        result = process_path(curve_path.to_dict(), *_args(settings))

        assert "error" not in result
        output = Path.from_dict(result["path"])
        assert len(output.points()) > 4

    def test_offset_grows_area(self, square_path: Path, settings: PathClipSettings):
        plain = process_path(square_path.to_dict(), *_args(settings))
        grown = process_path(square_path.to_dict(), *_args(settings), offset=1.0)

        def area(result: dict) -> float:
            return total_area(tuple(IntegerPolygon.from_dict(p) for p in result["polygons"]))

        assert area(grown) > area(plain)

    def test_clip_subtracted(self, square_path: Path, settings: PathClipSettings):
        scale = settings.geometry.scale
        clip = IntegerPolygon(((0, 0), (5 * scale, 0), (5 * scale, 10 * scale), (0, 10 * scale)))

        result = process_path(
            square_path.to_dict(), *_args(settings), clip_dicts=[clip.to_dict()]
        )

        polygons = tuple(IntegerPolygon.from_dict(p) for p in result["polygons"])
        assert total_area(polygons) == 50 * scale**2

    def test_clip_everything_gives_empty_path(self, square_path: Path, settings: PathClipSettings):
        scale = settings.geometry.scale
        clip = IntegerPolygon(
            ((-scale, -scale), (20 * scale, -scale), (20 * scale, 20 * scale), (-scale, 20 * scale))
        )

        result = process_path(
            square_path.to_dict(), *_args(settings), clip_dicts=[clip.to_dict()]
        )

        assert result["polygons"] == []
        assert len(Path.from_dict(result["path"])) == 0

    def test_rejected_path(self, settings: PathClipSettings):
        """Test that a malformed path is reported without a traceback."""
        path = Path.from_commands([["M", 0, 0], ["L", 1, 1]])

        result = process_path(path.to_dict(), *_args(settings))

        assert result["error_type"] == "MalformedPathError"
        assert "unknown segment" in result["error"]
        assert result["traceback"] is None

    def test_unexpected_error_has_traceback(self, settings: PathClipSettings):
        result = process_path({"segments": [{"kind": "bogus", "points": []}]}, *_args(settings))

        assert "error" in result
        assert result["traceback"] is not None


class TestPathProcessor:
    """Tests for PathProcessor class."""

    def test_init_configures_logging(self, settings: PathClipSettings):
        with patch("pathclip.core.processor.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            processor = PathProcessor(settings)

            assert processor.config == settings
            mock_logging.assert_called_once()

    def test_init_with_logger_skips_configuration(self, settings: PathClipSettings):
        with patch("pathclip.core.processor.configure_logging") as mock_logging:
            PathProcessor(settings, logger=Mock())
            mock_logging.assert_not_called()

    def test_process_inline(
        self, processor: PathProcessor, square_path: Path, curve_path: Path
    ):
        result = processor.process(
            [("square", square_path), ("curve", curve_path)], max_workers=1
        )

        assert isinstance(result, ProcessingResult)
        assert list(result.paths) == ["square", "curve"]
        assert result.stats.processed_count == 2
        assert result.stats.error_count == 0
        assert result.stats.polygons_out == 2
        assert result.stats.avg_path_time_ms is not None

    def test_errors_recorded(self, processor: PathProcessor, square_path: Path):
        bad = Path.from_commands([["M", 0, 0]])

        result = processor.process([("bad", bad), ("square", square_path)], max_workers=1)

        assert list(result.paths) == ["square"]
        assert result.stats.error_count == 1
        assert result.stats.errors[0][0] == "bad"
        assert "does not begin with a move" in result.stats.errors[0][1]

    def test_progress_callback(self, processor: PathProcessor, square_path: Path):
        callback = Mock()

        processor.process(
            [("a", square_path), ("b", square_path)],
            max_workers=1,
            progress_callback=callback,
        )

        assert callback.call_count == 2
        callback.assert_called_with(2, 2, "b", True)

    def test_duplicate_ids_rejected(self, processor: PathProcessor, square_path: Path):
        with pytest.raises(ValueError, match="unique"):
            processor.process([("a", square_path), ("a", square_path)])

    def test_process_parallel_keeps_input_order(
        self, processor: PathProcessor, square_path: Path, curve_path: Path
    ):
        paths = [(f"p{i}", square_path if i % 2 else curve_path) for i in range(6)]

        result = processor.process(paths, max_workers=2)

        assert list(result.paths) == [f"p{i}" for i in range(6)]
        assert result.stats.processed_count == 6

    def test_parallel_matches_inline(
        self, processor: PathProcessor, curve_path: Path
    ):
        inline = processor.process([("c", curve_path)], offset=0.5, max_workers=1)
        parallel = processor.process([("c", curve_path)], offset=0.5, max_workers=2)

        assert inline.paths == parallel.paths
        assert inline.polygons == parallel.polygons

    def test_geometry_config_passed_to_workers(self, square_path: Path):
        settings = PathClipSettings(geometry=GeometryConfig(clipper_scale=1000))
        processor = PathProcessor(settings, logger=structlog.get_logger("test"))

        result = processor.process([("square", square_path)], max_workers=1)

        polygon = result.polygons["square"][0]
        assert polygon.bounding_box() == (0, 0, 10000, 10000)
