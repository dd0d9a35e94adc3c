"""Configuration settings for glyphpath."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class ContourStartPolicy(str, Enum):
    """What to do with a contour whose first point is off-curve."""

    NORMALIZE = "normalize"
    REJECT = "reject"


class ErrorPolicy(str, Enum):
    """How a batch treats a glyph that fails to decompose."""

    SKIP = "skip"
    PLACEHOLDER = "placeholder"
    ABORT = "abort"


class OutlineConfig(BaseModel):
    """Configuration for outline decomposition."""

    contour_start_policy: ContourStartPolicy = Field(
        default=ContourStartPolicy.NORMALIZE,
        description="Rotate off-curve-start contours to an on-curve point, or reject them",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    error_policy: ErrorPolicy = Field(
        default=ErrorPolicy.SKIP,
        description="Skip failing glyphs, substitute an empty outline, or abort the batch",
    )
    skip_empty: bool = Field(
        default=False,
        description="Leave glyphs without contours out of the output",
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


class GlyphPathSettings(BaseModel):
    """Main application settings."""

    outline: OutlineConfig = Field(default_factory=OutlineConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphPathSettings:
    """Get default application settings."""
    return GlyphPathSettings()
