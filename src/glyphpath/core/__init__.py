"""Core decomposition engine for glyphpath.

This module contains the algorithms that turn raw glyph outlines into
path commands:

- Tag classification (raw tag bytes to on-curve/quadratic/cubic)
- Contour decomposition (the per-contour state machine)
- Glyph assembly (all contours of a glyph plus its metrics)
- Command sinks (lists, flat wire records, fontTools pens)
- Batch processing (many glyphs, optionally in worker processes)

All decomposition services are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects)

Key functions:
- classify: Map a raw tag byte to a Tag
- split_contours: Slice a RawOutline into classified contours
- decompose_contour: Decompose one contour
- decompose_outline: Decompose every contour of a glyph
- assemble: Build a GlyphRecord
- emit: Feed commands to a sink
- to_svg_path: Render commands as SVG path data

Key classes:
- ContourDecomposer: The per-contour state machine
- GlyphAssembler: Glyph-id level API over an OutlineSource
- FontProcessor: Batch decomposition of a font face
"""

from glyphpath.core.assembler import (
    GlyphAssembler,
    OutlineSource,
    assemble,
    decompose_outline,
)
from glyphpath.core.classifier import classify, split_contours, to_raw_tag
from glyphpath.core.decomposer import (
    ContourDecomposer,
    decompose_contour,
    implied_midpoint,
)
from glyphpath.core.processor import BatchResult, FontProcessor, process_outline
from glyphpath.core.sink import (
    FlatSink,
    ListSink,
    PathCommandSink,
    PenSink,
    emit,
    to_svg_path,
)

__all__ = [
    # Processor classes
    "BatchResult",
    # Decomposition classes
    "ContourDecomposer",
    # Sinks
    "FlatSink",
    "FontProcessor",
    # Assembly
    "GlyphAssembler",
    "ListSink",
    "OutlineSource",
    "PathCommandSink",
    "PenSink",
    "assemble",
    # Classification
    "classify",
    "decompose_contour",
    "decompose_outline",
    "emit",
    "implied_midpoint",
    "process_outline",
    "split_contours",
    "to_raw_tag",
    "to_svg_path",
]
