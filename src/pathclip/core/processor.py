"""Parallel processing orchestration for the path pipeline.

This module runs many independent paths through the flatten, convert,
clip and offset pipeline using ProcessPoolExecutor.

Key components:
- process_path: Top-level picklable function for parallel execution
- PathProcessor: Orchestrator class for batches of paths
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any

import structlog

from pathclip.config import FlattenConfig, GeometryConfig, PathClipSettings
from pathclip.core.converter import polygons_to_path, to_polygons
from pathclip.core.linearize import linearize
from pathclip.core.operations import GeometryOps
from pathclip.core.scaler import CoordinateScaler
from pathclip.domain import IntegerPolygon, Path, PolygonSet
from pathclip.exceptions import PathError, ToleranceTooTightError
from pathclip.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_path(
    path_dict: dict[str, Any],
    flatten_dict: dict[str, Any],
    geometry_dict: dict[str, Any],
    offset: float | None = None,
    clip_dicts: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Run one path through the pipeline.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor. Deserializes the path, flattens it, converts it to
    cleaned polygons, optionally subtracts clip polygons and offsets, then
    converts back.

    Args:
        path_dict: Serialized path (from Path.to_dict())
        flatten_dict: Serialized flattening tolerances
        geometry_dict: Serialized geometry configuration
        offset: Offset distance in plane units (None = no offset)
        clip_dicts: Serialized polygons to subtract, in engine units

    Returns:
        Dictionary containing either:
        - Success: {"path": path_dict, "polygons": [...], "duration_ms": float}
        - Error: {"error": str, "error_type": str, "traceback": str | None,
          "duration_ms": float}
    """
    start_time = time.time()

    try:
        flatten = FlattenConfig(**flatten_dict)
        geometry = GeometryConfig(**geometry_dict)
        scaler = CoordinateScaler.from_config(geometry)
        ops = GeometryOps(config=geometry)

        linear = linearize(Path.from_dict(path_dict), flatten)
        polygons = ops.clean(to_polygons(linear, scaler))

        if clip_dicts:
            clip = tuple(IntegerPolygon.from_dict(d) for d in clip_dicts)
            polygons = ops.difference(polygons, clip)

        if offset:
            polygons = ops.offset(polygons, geometry.to_integer_distance(offset))

        result_path = polygons_to_path(polygons, scaler)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "path": result_path.to_dict(),
            "polygons": [p.to_dict() for p in polygons],
            "duration_ms": duration_ms,
        }

    except (PathError, ToleranceTooTightError) as e:
        # Rejected input; no traceback needed
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "traceback": None,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


@dataclass
class ProcessingResult:
    """Outcome of a batch run, keyed by path id in input order."""

    paths: dict[str, Path] = field(default_factory=dict)
    polygons: dict[str, PolygonSet] = field(default_factory=dict)
    stats: ProcessingStats = field(default_factory=ProcessingStats)


class PathProcessor:
    """Orchestrates parallel processing of independent paths.

    Example:
        processor = PathProcessor(PathClipSettings())
        result = processor.process([("outline", path)], offset=1.5)
        outline = result.paths["outline"]
    """

    def __init__(
        self,
        config: PathClipSettings,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize path processor with configuration.

        Args:
            config: Settings containing geometry, flatten and processing config
            logger: Logger to use (configures file logging when None)
        """
        self.config = config
        if logger is None:
            logger = configure_logging(
                log_file=config.logging.log_file,
                console_level=config.logging.log_level,
                file_level=config.logging.file_log_level,
                quiet=False,
            )
        self.logger = logger
        self.processing_logger = ProcessingLogger(self.logger)

    def process(
        self,
        paths: Sequence[tuple[str, Path]],
        offset: float | None = None,
        clip: PolygonSet | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingResult:
        """Process paths, in parallel when more than one worker is allowed.

        Args:
            paths: (path_id, path) pairs; ids must be unique
            offset: Offset distance in plane units (None = no offset)
            clip: Polygons to subtract from every path, in engine units
            max_workers: Maximum worker processes (None = config default;
                1 runs in-process)
            progress_callback: Optional callback(completed, total, path_id, success)

        Returns:
            ProcessingResult with successful paths in input order

        Raises:
            ValueError: If path ids are not unique
            KeyboardInterrupt: If processing is cancelled by user
        """
        ids = [path_id for path_id, _ in paths]
        if len(set(ids)) != len(ids):
            raise ValueError("Path ids must be unique")

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.processing_logger = ProcessingLogger(self.logger)
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        self.logger.info(
            "Starting path processing",
            path_count=len(paths),
            offset=offset,
            clip_polygons=len(clip) if clip else 0,
            max_workers=max_workers,
        )

        args = (
            self.config.flatten.model_dump(),
            self.config.geometry.model_dump(),
            offset,
            [p.to_dict() for p in clip] if clip else None,
        )
        tasks = {path_id: path.to_dict() for path_id, path in paths}

        if max_workers == 1:
            raw = self._process_inline(tasks, args, progress_callback)
        else:
            raw = self._process_parallel(tasks, args, max_workers, stats, progress_callback)

        result = ProcessingResult(stats=stats)
        for path_id in ids:
            if path_id in raw:
                result.paths[path_id], result.polygons[path_id] = raw[path_id]

        stats.end_time = time.time()
        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            polygons=stats.polygons_out,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return result

    def _record(self, path_id: str, result: dict[str, Any]) -> tuple[Path, PolygonSet] | None:
        """Log a worker result; return the decoded output on success."""
        if "error" in result:
            self.processing_logger.log_path_error(
                path_id=path_id,
                error=Exception(result["error"]),
                traceback=result.get("traceback"),
            )
            return None

        polygons = tuple(IntegerPolygon.from_dict(p) for p in result["polygons"])
        self.processing_logger.log_path_complete(
            path_id=path_id,
            polygon_count=len(polygons),
            duration_ms=result.get("duration_ms", 0.0),
        )
        return Path.from_dict(result["path"]), polygons

    def _process_inline(
        self,
        tasks: dict[str, dict[str, Any]],
        args: tuple[Any, ...],
        progress_callback: Callable[[int, int, str, bool], None] | None,
    ) -> dict[str, tuple[Path, PolygonSet]]:
        outputs: dict[str, tuple[Path, PolygonSet]] = {}
        for completed, (path_id, path_dict) in enumerate(tasks.items(), start=1):
            self.processing_logger.log_path_start(path_id)
            output = self._record(path_id, process_path(path_dict, *args))
            if output is not None:
                outputs[path_id] = output
            if progress_callback is not None:
                progress_callback(completed, len(tasks), path_id, output is not None)
        return outputs

    def _process_parallel(
        self,
        tasks: dict[str, dict[str, Any]],
        args: tuple[Any, ...],
        max_workers: int | None,
        stats: ProcessingStats,
        progress_callback: Callable[[int, int, str, bool], None] | None,
    ) -> dict[str, tuple[Path, PolygonSet]]:
        outputs: dict[str, tuple[Path, PolygonSet]] = {}
        total = len(tasks)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for path_id, path_dict in tasks.items():
                future = executor.submit(process_path, path_dict, *args)
                pending_futures[future] = path_id

            try:
                for future in as_completed(list(pending_futures)):
                    path_id = pending_futures.pop(future)
                    output = None

                    try:
                        output = self._record(path_id, future.result())
                    except Exception as e:
                        # Executor-level error
                        self.processing_logger.log_path_error(
                            path_id=path_id,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    if output is not None:
                        outputs[path_id] = output

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, path_id, output is not None)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return outputs
