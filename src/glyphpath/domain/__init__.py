"""Domain models for glyphpath.

This module contains the data types shared by the reader, the decomposition
engine and the output layer. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of fonttools implementation details

Key classes:
- Point, Tag: Outline points and their curve role
- RawOutline: Per-glyph point/tag/contour-end arrays
- MoveTo, LineTo, QuadTo, CubicTo, ClosePath: Path commands
- GlyphMetrics, LinearAdvances, GlyphRecord: A decomposed glyph
- FaceInfo: Face attributes
"""

from glyphpath.domain.commands import (
    ClosePath,
    CubicTo,
    FlatCommand,
    LineTo,
    MoveTo,
    PathCommand,
    QuadTo,
    flatten_commands,
    path_command_from_flat,
)
from glyphpath.domain.contour import TAG_CONIC, TAG_CUBIC, TAG_ON, Point, RawOutline, Tag
from glyphpath.domain.glyph import FaceInfo, GlyphMetrics, GlyphRecord, LinearAdvances

__all__: list[str] = [
    # Enums and raw tags
    "TAG_CONIC",
    "TAG_CUBIC",
    "TAG_ON",
    "Tag",
    # Outline types
    "Point",
    "RawOutline",
    # Path commands
    "ClosePath",
    "CubicTo",
    "FlatCommand",
    "LineTo",
    "MoveTo",
    "PathCommand",
    "QuadTo",
    "flatten_commands",
    "path_command_from_flat",
    # Glyph records
    "FaceInfo",
    "GlyphMetrics",
    "GlyphRecord",
    "LinearAdvances",
]
