"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for path processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]pathclip[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_svg_info(svg_path: str, element_count: int, path_count: int) -> None:
    """Print SVG document information.

    Args:
        svg_path: Path to the SVG file
        element_count: Number of drawable elements
        path_count: Number of usable path elements
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(svg_path)
    console.print(line)
    console.print(f"  {element_count:,} elements {SYM_DOT} {path_count:,} usable paths")


def print_warning(message: str) -> None:
    """Print a rejected-element warning."""
    line = Text(f"  {SYM_WARN} ", style="yellow")
    line.append(message)
    console.print(line)


def print_path_table(rows: list[tuple[str, str, int, int]]) -> None:
    """Print a table of paths.

    Args:
        rows: (path id, status, subpaths, points) per path
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Path")
    table.add_column("Status")
    table.add_column("Subpaths", justify="right")
    table.add_column("Points", justify="right")
    for path_id, status, subpaths, points in rows:
        table.add_row(path_id, status, str(subpaths), str(points))
    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int, offset: float | None, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        offset: Offset distance in plane units, if any
        is_auto: Whether the worker count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    offset_str = f"offset {offset:g}" if offset else "no offset"
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} {offset_str} {SYM_DOT} Ctrl+C to cancel")


def print_success(
    output_path: str,
    total_time_s: float,
    processed: int,
    polygons: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        total_time_s: Total processing time in seconds
        processed: Number of paths processed
        polygons: Total number of polygons written
        errors: Number of errors encountered
        avg_time_ms: Average processing time per path in milliseconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} paths {SYM_DOT} {polygons} polygons {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )
    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg per path")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress paths")
