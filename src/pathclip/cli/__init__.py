"""Command-line interface for pathclip.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for path processing
- Verbose/quiet output modes
- Dry-run mode for checking flattening tolerances
- Warnings for rejected SVG elements
"""

from pathclip.cli.app import cli, main

__all__ = ["cli", "main"]
