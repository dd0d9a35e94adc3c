"""Glyph assembly from decomposed contours.

This module runs the contour decomposer over every contour of a glyph
outline and packages the result with the glyph's metrics.

Key components:
- OutlineSource: What the assembler needs from a font reader
- decompose_outline: Outline to command list, failing fast
- assemble: Pure aggregation into a GlyphRecord
- GlyphAssembler: Glyph-id level API over an OutlineSource
"""

from typing import Any, Protocol, runtime_checkable

import structlog

from glyphpath.config import ContourStartPolicy
from glyphpath.core.classifier import split_contours
from glyphpath.core.decomposer import ContourDecomposer
from glyphpath.domain import (
    GlyphMetrics,
    GlyphRecord,
    LinearAdvances,
    PathCommand,
    RawOutline,
)
from glyphpath.exceptions import DecompositionError

logger = structlog.get_logger(__name__)


@runtime_checkable
class OutlineSource(Protocol):
    """Read-only access to per-glyph outline data.

    Implemented by ``glyphpath.io.FontReader``; any object with these
    methods can feed a GlyphAssembler.
    """

    def get_outline(self, glyph_id: int) -> RawOutline: ...

    def get_metrics(self, glyph_id: int) -> tuple[GlyphMetrics, LinearAdvances]: ...

    def get_kerning(self, prev_glyph_id: int, glyph_id: int) -> tuple[int, int]: ...

    def char_index(self, char_code: int) -> int: ...


def decompose_outline(
    outline: RawOutline,
    start_policy: ContourStartPolicy = ContourStartPolicy.NORMALIZE,
) -> list[PathCommand]:
    """Decompose every contour of an outline, in order.

    Args:
        outline: Raw outline of one glyph
        start_policy: What to do with contours that start off-curve

    Returns:
        Concatenated command blocks, one per contour

    Raises:
        DecompositionError: On the first contour that fails; no partial
            command list is returned
    """
    decomposer = ContourDecomposer(start_policy)
    commands: list[PathCommand] = []

    for contour_index, contour in enumerate(split_contours(outline)):
        try:
            commands.extend(decomposer.decompose(contour))
        except DecompositionError as e:
            e.with_contour(contour_index)
            raise

    return commands


def assemble(
    commands: list[PathCommand],
    metrics: GlyphMetrics,
    linear_advances: LinearAdvances,
    face: Any = None,
    glyph_id: int | None = None,
    glyph_name: str | None = None,
) -> GlyphRecord:
    """Package decomposed commands and metrics into a GlyphRecord.

    Pure aggregation; the commands are taken as already valid.
    """
    return GlyphRecord(
        commands=commands,
        metrics=metrics,
        linear_advances=linear_advances,
        glyph_id=glyph_id,
        glyph_name=glyph_name,
        face=face,
    )


class GlyphAssembler:
    """Decomposes glyphs by id from an OutlineSource.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            assembler = GlyphAssembler(reader)
            record = assembler.load_glyph(reader.char_index(ord("A")))
    """

    def __init__(
        self,
        source: OutlineSource,
        start_policy: ContourStartPolicy = ContourStartPolicy.NORMALIZE,
    ) -> None:
        """Initialize the assembler.

        Args:
            source: Where outlines and metrics come from
            start_policy: What to do with contours that start off-curve
        """
        self.source = source
        self.start_policy = start_policy

    def decompose_glyph(self, glyph_id: int) -> list[PathCommand]:
        """Decompose the outline of one glyph.

        Raises:
            DecompositionError: If any contour of the glyph is malformed
        """
        outline = self.source.get_outline(glyph_id)
        try:
            return decompose_outline(outline, self.start_policy)
        except DecompositionError as e:
            logger.debug(
                "Glyph decomposition failed",
                glyph_id=glyph_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

    def load_glyph(self, glyph_id: int) -> GlyphRecord:
        """Decompose one glyph and attach its metrics.

        Raises:
            DecompositionError: If any contour of the glyph is malformed
        """
        commands = self.decompose_glyph(glyph_id)
        metrics, linear_advances = self.source.get_metrics(glyph_id)
        name_of = getattr(self.source, "glyph_name", None)

        return assemble(
            commands,
            metrics,
            linear_advances,
            face=self.source,
            glyph_id=glyph_id,
            glyph_name=name_of(glyph_id) if name_of is not None else None,
        )

    def load_char(self, char_code: int) -> GlyphRecord:
        """Decompose the glyph mapped to a character code.

        Unmapped characters resolve to glyph 0 (.notdef).
        """
        return self.load_glyph(self.source.char_index(char_code))

    def kerning(self, prev_glyph_id: int, glyph_id: int) -> tuple[int, int]:
        """Kerning between two glyphs, passed through from the source."""
        return self.source.get_kerning(prev_glyph_id, glyph_id)

    def kerning_for_chars(self, prev_char_code: int, char_code: int) -> tuple[int, int]:
        """Kerning between the glyphs mapped to two character codes."""
        return self.kerning(
            self.source.char_index(prev_char_code),
            self.source.char_index(char_code),
        )
