"""Command-line interface for glyphpath.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Face attribute listing
- Per-character decomposition as wire records, SVG path data or JSON
- Whole-font dumps with progress bars and error policies
"""

from glyphpath.cli.app import cli, main

__all__ = ["cli", "main"]
