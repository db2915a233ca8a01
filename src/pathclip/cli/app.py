"""CLI application entry point for pathclip.

This module provides the main CLI interface using Typer.
"""

import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Annotated

import typer

from pathclip import __version__
from pathclip.cli.output import (
    SYM_OK,
    console,
    create_progress,
    print_cancellation_notice,
    print_error,
    print_header,
    print_path_table,
    print_processing_info,
    print_step,
    print_success,
    print_svg_info,
    print_warning,
)
from pathclip.config import (
    FlattenConfig,
    LoggingConfig,
    PathClipSettings,
    ProcessingConfig,
)
from pathclip.core import (
    CoordinateScaler,
    GeometryOps,
    PathProcessor,
    linearize_path,
    path_to_polygons,
)
from pathclip.domain import Path as CurvePath
from pathclip.domain import PolygonSet
from pathclip.exceptions import PathClipError, PathError, SvgLoadError, SvgSaveError
from pathclip.io import SvgReader, SvgWriter, curve_path_from_element
from pathclip.utils import report_error

# Create the Typer app
app = typer.Typer(
    name="pathclip",
    help="Flatten, clip and offset the paths of an SVG drawing.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]pathclip[/bold blue] v{__version__}")
        raise typer.Exit()


def _unique_id(base: str, seen: set[str]) -> str:
    """Return ``base``, or ``base-2``, ``base-3``, ... if already taken."""
    path_id = base
    suffix = 2
    while path_id in seen:
        path_id = f"{base}-{suffix}"
        suffix += 1
    seen.add(path_id)
    return path_id


def _read_paths(svg_path: Path, warnings: list[str]) -> tuple[int, list[tuple[str, CurvePath]]]:
    """Read curve paths from every usable element of an SVG file.

    Rejected elements are recorded in ``warnings`` and skipped. Repeated
    or missing element ids are replaced with unique ones.

    Returns:
        (drawable element count, [(path id, path), ...])

    Raises:
        SvgLoadError: If the file cannot be read or parsed
    """
    try:
        reader = SvgReader(svg_path)
        reader.load()
        elements = list(reader.iter_elements())
    except (OSError, ET.ParseError, PathError) as e:
        raise SvgLoadError(str(svg_path), str(e)) from e

    paths: list[tuple[str, CurvePath]] = []
    seen: set[str] = set()
    for index, element in enumerate(elements):
        path_id = _unique_id(element.element_id or f"{element.tag}{index}", seen)
        try:
            path = curve_path_from_element(element)
        except PathError as e:
            report_error(e, lambda msg, pid=path_id: warnings.append(f"{pid}: {msg}"))
            continue
        if path is not None:
            paths.append((path_id, path))

    return len(elements), paths


def _read_clip_polygons(
    svg_path: Path, settings: PathClipSettings, warnings: list[str]
) -> PolygonSet:
    """Flatten every path of an SVG file into one cleaned polygon set."""
    _, paths = _read_paths(svg_path, warnings)
    scaler = CoordinateScaler.from_config(settings.geometry)
    ops = GeometryOps(config=settings.geometry)

    combined: PolygonSet = ()
    for path_id, path in paths:

        def report(msg: str, pid: str = path_id) -> None:
            warnings.append(f"{pid}: {msg}")

        linear = linearize_path(path, settings.flatten, report)
        if linear is None:
            continue
        polygons = path_to_polygons(linear, scaler, report)
        if polygons:
            combined = ops.union(combined, ops.clean(polygons))
    return combined


@app.command()
def clip(
    input_svg: Annotated[
        Path,
        typer.Argument(
            help="Path to input SVG file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-clipped.svg)",
        ),
    ] = None,
    offset: Annotated[
        float | None,
        typer.Option(
            "--offset",
            "-d",
            help="Grow (positive) or shrink (negative) every path, in SVG units",
        ),
    ] = None,
    subtract: Annotated[
        Path | None,
        typer.Option(
            "--subtract",
            "-s",
            help="SVG whose paths are cut out of every input path",
        ),
    ] = None,
    min_segments: Annotated[
        int,
        typer.Option(
            "--min-segments",
            "-n",
            help="Minimum line segments per curve",
            min=1,
        ),
    ] = 1,
    min_segment_length: Annotated[
        float,
        typer.Option(
            "--min-segment-length",
            "-l",
            help="Maximum chord length when flattening curves, in SVG units",
            min=0.0,
        ),
    ] = 9.0,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    list_paths: Annotated[
        bool,
        typer.Option(
            "--list-paths",
            help="List all usable paths and exit",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Flatten and report without writing output",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Flatten the paths of an SVG drawing into polygons, clip and offset them.

    Curves are flattened to line segments no longer than
    --min-segment-length, converted to integer polygons, cleaned, optionally
    cut by the paths of --subtract and offset by --offset, then written back
    as SVG paths.

    Example:
        pathclip drawing.svg --offset 4.5

    This will create drawing-clipped.svg with every path grown by 4.5 units.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if min_segment_length <= 0:
        print_error("--min-segment-length must be greater than 0")
        raise typer.Exit(code=1)

    if not input_svg.exists():
        print_error(
            f"Input file not found: {input_svg}",
            details=f"The file '{input_svg}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_svg.is_file():
        print_error(
            f"Input path is not a file: {input_svg}",
            details="Please provide a path to an SVG file.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = PathClipSettings(
        flatten=FlattenConfig(
            min_segments=min_segments,
            min_segment_length=min_segment_length,
        ),
        processing=ProcessingConfig(
            max_workers=workers,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    try:
        if not quiet:
            print_step("Reading SVG")

        warnings: list[str] = []
        element_count, paths = _read_paths(input_svg, warnings)

        if not quiet:
            print_svg_info(str(input_svg), element_count, len(paths))
            for warning in warnings:
                print_warning(warning)

        if list_paths:
            print_path_table(
                [(pid, "curve", p.subpath_count, len(p.points())) for pid, p in paths]
            )
            raise typer.Exit(code=0)

        if dry_run:
            _handle_dry_run(paths, settings, quiet, verbose)
            raise typer.Exit(code=0)

        if not paths:
            if not quiet:
                console.print("\nNo usable paths found. Nothing to process.")
            raise typer.Exit(code=0)

        clip_polygons: PolygonSet | None = None
        if subtract is not None:
            if not quiet:
                print_step(f"Reading {subtract.name}")
            clip_warnings: list[str] = []
            clip_polygons = _read_clip_polygons(subtract, settings, clip_warnings)
            if not quiet:
                console.print(f"  {len(clip_polygons)} polygons to subtract")
                for warning in clip_warnings:
                    print_warning(warning)

        if not quiet:
            print_step("Processing")
            print_processing_info(workers or os.cpu_count() or 1, offset, is_auto=(workers is None))

        output_path = output if output is not None else SvgWriter.get_clipped_path(input_svg)
        processor = PathProcessor(settings)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(f"Processing {len(paths)} paths", total=len(paths))

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    result = processor.process(
                        paths,
                        offset=offset,
                        clip=clip_polygons,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                result = processor.process(
                    paths, offset=offset, clip=clip_polygons, max_workers=workers
                )
        except KeyboardInterrupt:
            if not quiet:
                print_cancellation_notice()
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            for path_id, message in result.stats.errors:
                print_warning(f"{path_id}: {message}")

        writer = SvgWriter(output_path)
        for path_id, path in result.paths.items():
            writer.add_path(path_id, path)
        writer.save()

        if not quiet:
            stats = result.stats
            print_success(
                output_path=str(output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                polygons=stats.polygons_out,
                errors=stats.error_count,
                avg_time_ms=stats.avg_path_time_ms,
            )

    except SvgLoadError as e:
        print_error(f"Could not load SVG: {e.reason}")
        raise typer.Exit(code=1)
    except SvgSaveError as e:
        print_error(f"Could not save SVG: {e.reason}")
        raise typer.Exit(code=1)
    except PathClipError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _handle_dry_run(
    paths: list[tuple[str, CurvePath]],
    settings: PathClipSettings,
    quiet: bool,
    verbose: bool,
) -> None:
    """Flatten every path and report the result without writing output."""
    if not quiet:
        print_step("Flattening (dry run)")

    rows: list[tuple[str, str, int, int]] = []
    total_points = 0
    for path_id, path in paths:
        errors: list[str] = []
        linear = linearize_path(path, settings.flatten, errors.append)
        if linear is None:
            rows.append((path_id, f"rejected: {errors[0] if errors else 'unknown'}", 0, 0))
            continue
        point_count = len(linear.points())
        total_points += point_count
        rows.append((path_id, "ok", linear.subpath_count, point_count))

    if not quiet:
        flattened = sum(1 for row in rows if row[1] == "ok")
        console.print("\n[bold]Analysis[/bold]\n")
        console.print(f"  Paths flattened       {flattened} of {len(rows)}")
        console.print(f"  Total points          {total_points}")
        console.print(f"  Max chord length      {settings.flatten.min_segment_length:g}")

        if verbose and rows:
            console.print()
            print_path_table(rows)

        console.print(f"\n[bold green]{SYM_OK} Dry run complete[/bold green] - no changes made")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
