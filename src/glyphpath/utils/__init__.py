"""Utility functions for glyphpath.

This module provides utility functions including:

- Logging setup and configuration
- Progress and statistics tracking for batch runs
"""

from glyphpath.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
