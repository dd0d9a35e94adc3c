"""JSON writer for decomposed glyphs.

This module provides the GlyphRecordWriter class for saving decomposed
glyphs, with their path commands in the flat wire shape, next to the
face attributes of the font they came from.
"""

import json
from pathlib import Path
from typing import Any

from glyphpath import __version__
from glyphpath.domain import FaceInfo, GlyphRecord

FORMAT_NAME = "glyphpath"


class GlyphRecordWriter:
    """Writes decomposed glyphs to a JSON document.

    The document looks like::

        {
          "format": "glyphpath",
          "version": "0.1.0",
          "face": {...},
          "glyphs": [{"glyph_id": 36, "glyph_name": "A",
                      "commands": [["move_to_abs", 0, 0], ...], ...}],
          "errors": [{"glyph_name": "B", "error": "..."}]
        }

    Example:
        writer = GlyphRecordWriter(Path("font-paths.json"), face_info)
        writer.add_glyph(record)
        writer.save()
    """

    def __init__(self, output_path: Path, face_info: FaceInfo | None = None) -> None:
        """Initialize the writer.

        Args:
            output_path: Path where the JSON document will be saved
            face_info: Face attributes to include, if known
        """
        self._output_path = output_path
        self._face_info = face_info
        self._glyphs: list[GlyphRecord] = []
        self._errors: list[tuple[str, str]] = []

    def add_glyph(self, record: GlyphRecord) -> None:
        """Queue a decomposed glyph for output."""
        self._glyphs.append(record)

    def add_error(self, glyph_name: str, error: str) -> None:
        """Record a glyph that could not be decomposed."""
        self._errors.append((glyph_name, error))

    def to_dict(self) -> dict[str, Any]:
        """Build the JSON document as a dictionary."""
        return {
            "format": FORMAT_NAME,
            "version": __version__,
            "face": self._face_info.to_dict() if self._face_info else None,
            "glyphs": [record.to_dict() for record in self._glyphs],
            "errors": [
                {"glyph_name": name, "error": error} for name, error in self._errors
            ],
        }

    def save(self) -> None:
        """Write the JSON document to the output path.

        Raises:
            OSError: If file cannot be written
        """
        with open(self._output_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
            f.write("\n")

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Generate the default output path for a font.

        Converts: font.ttf -> font-paths.json
                  Roboto-Regular.otf -> Roboto-Regular-paths.json

        Args:
            input_path: Font file path

        Returns:
            Path with -paths.json suffix next to the font
        """
        return input_path.parent / f"{input_path.stem}-paths.json"


def load_glyph_records(path: Path) -> list[GlyphRecord]:
    """Read glyph records back from a document written by GlyphRecordWriter.

    Raises:
        ValueError: If the file is not a glyphpath document
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict) or data.get("format") != FORMAT_NAME:
        raise ValueError(f"Not a {FORMAT_NAME} document: {path}")

    return [GlyphRecord.from_dict(item) for item in data["glyphs"]]
