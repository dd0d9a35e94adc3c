"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class, which loads a font face with
fonttools and serves raw outlines, metrics, kerning and face attributes
by glyph index.
"""

from collections.abc import Iterator
from pathlib import Path

from fontTools.ttLib import TTCollection, TTFont

from glyphpath.domain import FaceInfo, GlyphMetrics, LinearAdvances, RawOutline
from glyphpath.exceptions import (
    FontFormatError,
    FontLoadError,
    GlyphNotFoundError,
    GlyphReadError,
)
from glyphpath.io.converter import (
    extract_face_info,
    extract_glyph_metrics,
    fonttools_glyph_to_outline,
    is_scalable,
    kerning_value,
)

_COLLECTION_TAG = b"ttcf"


class FontReader:
    """Loads one face of a TTF/OTF/TTC font and serves glyph data.

    Glyphs are addressed by glyph index, as in the font's glyph order.
    FontReader satisfies the OutlineSource protocol used by GlyphAssembler.

    Example:
        reader = FontReader(Path("font.ttf"))
        reader.load()
        outline = reader.get_outline(reader.char_index(ord("A")))
    """

    def __init__(self, font_path: Path, face_index: int = 0) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF, OTF or TTC font file
            face_index: Which face to load from a collection
        """
        self._font_path = font_path
        self._face_index = face_index
        self._font: TTFont | None = None
        self._num_faces = 1

    def load(self) -> None:
        """Load the font face.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the file cannot be parsed as a font
            FontFormatError: If the face has no scalable outlines
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            self._num_faces = self._count_faces()
            if not 0 <= self._face_index < self._num_faces:
                raise ValueError(
                    f"face index {self._face_index} out of range ({self._num_faces} faces)"
                )
            font = TTFont(str(self._font_path), fontNumber=self._face_index)
        except Exception as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

        if not is_scalable(font):
            font.close()
            raise FontFormatError(
                str(self._font_path),
                f"face {self._face_index} has no scalable outlines",
            )

        self._font = font

    def _count_faces(self) -> int:
        """Number of faces in the file (1 unless it is a collection)."""
        with open(self._font_path, "rb") as f:
            tag = f.read(4)
        if tag != _COLLECTION_TAG:
            return 1
        collection = TTCollection(str(self._font_path), lazy=True)
        try:
            return len(collection.fonts)
        finally:
            collection.close()

    def _loaded(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for glyf-based fonts, 'OpenType' for CFF/CFF2 fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._loaded()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._loaded()["head"].unitsPerEm

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the face.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._loaded()["maxp"].numGlyphs

    @property
    def face_info(self) -> FaceInfo:
        """Return face attributes.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return extract_face_info(
            self._loaded(),
            num_faces=self._num_faces,
            face_index=self._face_index,
        )

    def glyph_name(self, glyph_id: int) -> str:
        """Return the name of the glyph at ``glyph_id``.

        Raises:
            GlyphNotFoundError: If the index is outside the glyph order
        """
        glyph_order = self._loaded().getGlyphOrder()
        if not 0 <= glyph_id < len(glyph_order):
            raise GlyphNotFoundError(glyph_id)
        return glyph_order[glyph_id]

    def glyph_id(self, name: str) -> int:
        """Return the index of the glyph called ``name``.

        Raises:
            GlyphNotFoundError: If no glyph has that name
        """
        font = self._loaded()
        if name not in font.getGlyphOrder():
            raise GlyphNotFoundError(name)
        return font.getGlyphID(name)

    def iter_glyph_ids(self) -> Iterator[int]:
        """Iterate over all glyph indices in glyph order."""
        yield from range(len(self._loaded().getGlyphOrder()))

    def char_index(self, char_code: int) -> int:
        """Map a character code to a glyph index.

        Returns:
            Glyph index, or 0 (.notdef) if the character is not mapped
        """
        font = self._loaded()
        cmap = font.getBestCmap()
        if not cmap or char_code not in cmap:
            return 0
        return font.getGlyphID(cmap[char_code])

    def get_outline(self, glyph_id: int) -> RawOutline:
        """Return the unscaled outline of a glyph.

        Raises:
            GlyphNotFoundError: If the index is outside the glyph order
            GlyphReadError: If fonttools cannot read the glyph
        """
        name = self.glyph_name(glyph_id)
        try:
            return fonttools_glyph_to_outline(name, self._loaded())
        except Exception as e:
            raise GlyphReadError(name, str(e)) from e

    def get_metrics(self, glyph_id: int) -> tuple[GlyphMetrics, LinearAdvances]:
        """Return the unscaled metrics of a glyph.

        Raises:
            GlyphNotFoundError: If the index is outside the glyph order
            GlyphReadError: If fonttools cannot read the glyph
        """
        outline = self.get_outline(glyph_id)
        name = self.glyph_name(glyph_id)
        try:
            return extract_glyph_metrics(name, outline, self._loaded())
        except Exception as e:
            raise GlyphReadError(name, str(e)) from e

    def get_kerning(self, prev_glyph_id: int, glyph_id: int) -> tuple[int, int]:
        """Return the unscaled kerning between two glyphs.

        Returns:
            Tuple of (dx, dy); (0, 0) if the face has no kerning table
        """
        return kerning_value(
            self._loaded(),
            self.glyph_name(prev_glyph_id),
            self.glyph_name(glyph_id),
        )

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
