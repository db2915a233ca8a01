"""Utility functions for pathclip.

This module provides utility functions including:

- Logging setup and configuration
- The error-reporting channel used by the pipeline
- Processing statistics
"""

from pathclip.utils.logging import (
    ErrorReporter,
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
    report_error,
)

__all__ = [
    "ErrorReporter",
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
    "report_error",
]
