"""Configuration management for pathclip.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Scale factor and derived polygon tolerances
- FlattenConfig: Curve flattening tolerances
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- PathClipSettings: Main application settings
"""

from pathclip.config.settings import (
    FlattenConfig,
    GeometryConfig,
    LoggingConfig,
    PathClipSettings,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "FlattenConfig",
    "GeometryConfig",
    "LoggingConfig",
    "PathClipSettings",
    "ProcessingConfig",
    "get_default_settings",
]
