"""Configuration management for glyphpath.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- OutlineConfig: Decomposition settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- GlyphPathSettings: Main application settings
"""

from glyphpath.config.settings import (
    ContourStartPolicy,
    ErrorPolicy,
    GlyphPathSettings,
    LoggingConfig,
    OutlineConfig,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "ContourStartPolicy",
    "ErrorPolicy",
    "GlyphPathSettings",
    "LoggingConfig",
    "OutlineConfig",
    "ProcessingConfig",
    "get_default_settings",
]
