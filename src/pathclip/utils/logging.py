"""Logging utilities for pathclip."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog

from pathclip.exceptions import PathClipError

ErrorReporter = Callable[[str], None]

_logger = structlog.get_logger("pathclip")


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    error_count: int = 0
    polygons_out: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    path_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_path_time_ms(self) -> float | None:
        if not self.path_timings_ms:
            return None
        return sum(self.path_timings_ms) / len(self.path_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"pathclip_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("pathclip")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


def report_error(error: PathClipError, report: ErrorReporter | None) -> None:
    """Send an error to the caller's reporting channel.

    The error is always logged; ``report`` may be None when the caller
    only wants the no-result sentinel.
    """
    _logger.warning(
        "Path rejected",
        error=str(error),
        error_type=type(error).__name__,
    )
    if report is not None:
        report(str(error))


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_path_start(self, path_id: str) -> None:
        """Log start of path processing."""
        self._logger.debug("Processing path", path=path_id)

    def log_path_complete(
        self,
        path_id: str,
        polygon_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful path processing."""
        self._logger.info(
            "Path processed",
            path=path_id,
            polygons=polygon_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.polygons_out += polygon_count
        self._stats.path_timings_ms.append(duration_ms)

    def log_path_error(
        self,
        path_id: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log path processing error."""
        self._logger.error(
            "Path processing failed",
            path=path_id,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((path_id, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
