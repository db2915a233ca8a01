"""Configuration settings for pathclip."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class GeometryConfig(BaseModel):
    """Scale and tolerances bridging plane coordinates and polygon integers.

    Plane coordinates are SVG user units (pixels at ``px_per_inch``). Every
    conversion in a round trip must use the same instance, otherwise integer
    geometry is silently corrupted.
    """

    model_config = ConfigDict(frozen=True)

    px_per_inch: float = Field(
        default=90.0,
        gt=0.0,
        description="Nominal device resolution of plane units",
    )
    clipper_scale: int = Field(
        default=100000,
        ge=1,
        description="Integer polygon units per plane unit",
    )

    @property
    def scale(self) -> int:
        """Integer units per plane unit."""
        return self.clipper_scale

    @property
    def clean_distance(self) -> float:
        """Vertex merge distance used when cleaning polygons (1/100000 in)."""
        return self.clipper_scale * self.px_per_inch / 100000

    @property
    def arc_tolerance(self) -> float:
        """Maximum deviation of round offset joins (1/40000 in)."""
        return self.clipper_scale * self.px_per_inch / 40000

    def to_integer_distance(self, plane_distance: float) -> float:
        """Convert a distance in plane units to integer polygon units."""
        return plane_distance * self.clipper_scale

    def inches_to_plane(self, inches: float) -> float:
        """Convert inches to plane units."""
        return inches * self.px_per_inch


class FlattenConfig(BaseModel):
    """Tolerances for curve flattening."""

    model_config = ConfigDict(frozen=True)

    min_segments: int = Field(
        default=1,
        ge=1,
        description="Minimum number of segments per curve",
    )
    min_segment_length: float = Field(
        default=9.0,
        gt=0.0,
        description="Maximum chord length in plane units (0.1 in at 90 px/in)",
    )
    max_doublings: int = Field(
        default=20,
        ge=0,
        le=30,
        description="How many times the segment count may double before giving up",
    )

    @property
    def max_segments(self) -> int:
        """Largest segment count the flattener will try."""
        return self.min_segments * (2**self.max_doublings)


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PathClipSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    flatten: FlattenConfig = Field(default_factory=FlattenConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PathClipSettings:
    """Get default application settings."""
    return PathClipSettings()
