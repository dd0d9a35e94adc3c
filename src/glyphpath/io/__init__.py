"""Font I/O layer for glyphpath.

This module handles reading font files using fonttools and writing
decomposed glyphs. It provides a clean abstraction layer between fonttools
and the decomposition engine.

Key responsibilities:
- Load TTF/OTF/TTC faces
- Convert fonttools glyph data to raw outlines and unscaled metrics
- Look up kerning and face attributes
- Write decomposed glyphs as JSON

Key classes:
- FontReader: Load a face and serve glyph data by index
- GlyphRecordWriter: Save decomposed glyphs
"""

from glyphpath.io.reader import FontReader
from glyphpath.io.writer import GlyphRecordWriter, load_glyph_records

__all__ = [
    "FontReader",
    "GlyphRecordWriter",
    "load_glyph_records",
]
