"""Tests for configuration, logging utilities and the exception hierarchy."""

import logging
from pathlib import Path
from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from pathclip.config import FlattenConfig, GeometryConfig, PathClipSettings, get_default_settings
from pathclip.exceptions import (
    GeometryEngineError,
    GeometryError,
    MalformedPathError,
    PathClipError,
    PathError,
    ToleranceTooTightError,
    UnsupportedElementError,
)
from pathclip.utils import ProcessingLogger, configure_logging, report_error


class TestGeometryConfig:
    """Tests for GeometryConfig."""

    def test_defaults(self):
        config = GeometryConfig()
        assert config.scale == 100000
        assert config.px_per_inch == 90.0

    def test_derived_tolerances(self):
        config = GeometryConfig()
        assert config.clean_distance == pytest.approx(90.0)
        assert config.arc_tolerance == pytest.approx(225.0)

    def test_distance_conversions(self):
        config = GeometryConfig()
        assert config.to_integer_distance(1.5) == 150000
        assert config.inches_to_plane(0.1) == pytest.approx(9.0)

    def test_frozen(self):
        config = GeometryConfig()
        with pytest.raises(ValidationError):
            config.clipper_scale = 10  # type: ignore

    def test_invalid_scale(self):
        with pytest.raises(ValidationError):
            GeometryConfig(clipper_scale=0)


class TestFlattenConfig:
    """Tests for FlattenConfig."""

    def test_defaults(self):
        config = FlattenConfig()
        assert config.min_segments == 1
        assert config.min_segment_length == 9.0
        assert config.max_doublings == 20

    def test_max_segments(self):
        assert FlattenConfig(min_segments=3, max_doublings=4).max_segments == 48

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_segments": 0},
            {"min_segment_length": 0.0},
            {"min_segment_length": -1.0},
            {"max_doublings": 31},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValidationError):
            FlattenConfig(**kwargs)


class TestSettings:
    def test_default_settings(self):
        settings = get_default_settings()
        assert isinstance(settings, PathClipSettings)
        assert settings.processing.max_workers is None
        assert settings.logging.log_level == "WARNING"


class TestReportError:
    """Tests for the error reporting channel."""

    def test_report_called_with_message(self):
        report = Mock()
        report_error(MalformedPathError("Path does not begin with a move"), report)
        report.assert_called_once_with("Path does not begin with a move")

    def test_report_optional(self):
        report_error(MalformedPathError("mask is not supported"), None)


class TestProcessingLogger:
    """Tests for ProcessingLogger statistics."""

    def test_complete_and_error_counted(self):
        logger = ProcessingLogger(Mock())

        logger.log_path_start("a")
        logger.log_path_complete("a", polygon_count=3, duration_ms=2.0)
        logger.log_path_complete("b", polygon_count=1, duration_ms=4.0)
        logger.log_path_error("c", ValueError("bad"))

        stats = logger.stats
        assert stats.processed_count == 2
        assert stats.polygons_out == 4
        assert stats.error_count == 1
        assert stats.errors == [("c", "bad")]
        assert stats.avg_path_time_ms == 3.0

    def test_empty_stats(self):
        stats = ProcessingLogger(Mock()).stats
        assert stats.avg_path_time_ms is None
        assert stats.duration_seconds == 0.0


class TestConfigureLogging:
    def test_writes_log_file(self, tmp_path: Path):
        log_file = tmp_path / "run.log"
        root = logging.getLogger()
        handlers = list(root.handlers)
        try:
            logger = configure_logging(log_file=log_file, console_level="ERROR")
            logger.info("hello", path="p1")
        finally:
            for handler in root.handlers[:]:
                if handler not in handlers:
                    handler.close()
                    root.removeHandler(handler)

        assert "Logging initialized" in log_file.read_text(encoding="utf-8")


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(MalformedPathError, PathError)
        assert issubclass(UnsupportedElementError, PathError)
        assert issubclass(ToleranceTooTightError, GeometryError)
        assert issubclass(GeometryEngineError, GeometryError)
        assert issubclass(PathError, PathClipError)
        assert issubclass(GeometryError, PathClipError)

    def test_unsupported_element_message(self):
        error = UnsupportedElementError("ellipse")
        assert error.tag == "ellipse"
        assert str(error) == "ellipse is not supported; try converting the object to a path"

    def test_engine_error_message(self):
        error = GeometryEngineError("offset", "overflow")
        assert str(error) == "Polygon engine failed during offset: overflow"
