"""Unit tests for glyph assembly."""

import pytest

from glyphpath.config import ContourStartPolicy
from glyphpath.core.assembler import GlyphAssembler, OutlineSource, assemble, decompose_outline
from glyphpath.domain import (
    TAG_CONIC,
    TAG_CUBIC,
    TAG_ON,
    ClosePath,
    GlyphMetrics,
    LinearAdvances,
    LineTo,
    MoveTo,
    Point,
    QuadTo,
    RawOutline,
)
from glyphpath.exceptions import ContourStartError, IllFormedQuadraticError

SQUARE = RawOutline(
    points=(Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)),
    tags=(TAG_ON, TAG_ON, TAG_ON, TAG_ON),
    contour_ends=(3,),
)

# Second contour is malformed: a cubic control after a quadratic one
BROKEN = RawOutline(
    points=(
        Point(0, 0),
        Point(10, 0),
        Point(10, 10),
        Point(0, 0),
        Point(0, 50),
        Point(10, 60),
    ),
    tags=(TAG_ON, TAG_ON, TAG_ON, TAG_ON, TAG_CONIC, TAG_CUBIC),
    contour_ends=(2, 5),
)

OFF_CURVE_START = RawOutline(
    points=(Point(0, 100), Point(100, 100), Point(0, 0)),
    tags=(TAG_CONIC, TAG_ON, TAG_ON),
    contour_ends=(2,),
)


class FakeSource:
    """In-memory OutlineSource keyed by glyph id."""

    def __init__(self) -> None:
        self.outlines = {0: RawOutline(), 1: SQUARE, 2: BROKEN}
        self.names = {0: ".notdef", 1: "square", 2: "broken"}
        self.cmap = {ord("s"): 1, ord("b"): 2}
        self.kerning_pairs = {(1, 2): (-30, 0)}

    def get_outline(self, glyph_id: int) -> RawOutline:
        return self.outlines[glyph_id]

    def get_metrics(self, glyph_id: int) -> tuple[GlyphMetrics, LinearAdvances]:
        return (
            GlyphMetrics(width=10, height=10, hori_advance=20 + glyph_id),
            LinearAdvances(float(20 + glyph_id), 1000.0),
        )

    def get_kerning(self, prev_glyph_id: int, glyph_id: int) -> tuple[int, int]:
        return self.kerning_pairs.get((prev_glyph_id, glyph_id), (0, 0))

    def char_index(self, char_code: int) -> int:
        return self.cmap.get(char_code, 0)

    def glyph_name(self, glyph_id: int) -> str:
        return self.names[glyph_id]


class MinimalSource:
    """OutlineSource without glyph names."""

    def get_outline(self, glyph_id: int) -> RawOutline:  # noqa: ARG002
        return SQUARE

    def get_metrics(self, glyph_id: int) -> tuple[GlyphMetrics, LinearAdvances]:  # noqa: ARG002
        return GlyphMetrics(), LinearAdvances()

    def get_kerning(self, prev_glyph_id: int, glyph_id: int) -> tuple[int, int]:  # noqa: ARG002
        return (0, 0)

    def char_index(self, char_code: int) -> int:  # noqa: ARG002
        return 0


@pytest.fixture
def source() -> FakeSource:
    """Fake outline source."""
    return FakeSource()


class TestDecomposeOutline:
    """Tests for decompose_outline function."""

    def test_empty_outline(self) -> None:
        """Test an outline without contours gives no commands."""
        assert decompose_outline(RawOutline()) == []

    def test_contours_concatenated(self) -> None:
        """Test each contour contributes one block, in order."""
        outline = RawOutline(
            points=SQUARE.points + (Point(2, 2), Point(5, 8), Point(8, 2)),
            tags=SQUARE.tags + (TAG_ON, TAG_CONIC, TAG_ON),
            contour_ends=(3, 6),
        )

        commands = decompose_outline(outline)

        assert commands == [
            MoveTo(Point(0, 0)),
            LineTo(Point(10, 0)),
            LineTo(Point(10, 10)),
            LineTo(Point(0, 10)),
            LineTo(Point(0, 0)),
            ClosePath(),
            MoveTo(Point(2, 2)),
            QuadTo(Point(5, 8), Point(8, 2)),
            LineTo(Point(2, 2)),
            ClosePath(),
        ]

    def test_fails_fast_with_contour_index(self) -> None:
        """Test the failing contour is reported and nothing partial escapes."""
        with pytest.raises(IllFormedQuadraticError) as exc_info:
            decompose_outline(BROKEN)

        error = exc_info.value
        assert error.contour_index == 1
        assert error.point_index == 2
        assert str(error) == "ill-formed quadratic at contour 1, point 2"

    def test_start_policy_passed_through(self) -> None:
        """Test the start policy reaches the contour decomposer."""
        assert decompose_outline(OFF_CURVE_START)[0] == MoveTo(Point(100, 100))

        with pytest.raises(ContourStartError) as exc_info:
            decompose_outline(OFF_CURVE_START, ContourStartPolicy.REJECT)
        assert exc_info.value.contour_index == 0


class TestAssemble:
    """Tests for assemble function."""

    def test_pure_aggregation(self) -> None:
        """Test commands and metrics are packaged unchanged."""
        commands = decompose_outline(SQUARE)
        metrics = GlyphMetrics(width=10, height=10)
        linear = LinearAdvances(12.0, 1000.0)

        record = assemble(commands, metrics, linear, glyph_id=4, glyph_name="square")

        assert record.commands == commands
        assert record.metrics is metrics
        assert record.linear_advances is linear
        assert record.glyph_id == 4
        assert record.glyph_name == "square"
        assert record.face is None


class TestGlyphAssembler:
    """Tests for GlyphAssembler class."""

    def test_fake_source_satisfies_protocol(self, source: FakeSource) -> None:
        """Test the protocol is checkable at runtime."""
        assert isinstance(source, OutlineSource)

    def test_decompose_glyph(self, source: FakeSource) -> None:
        """Test a glyph id is decomposed from its outline."""
        commands = GlyphAssembler(source).decompose_glyph(1)
        assert commands[0] == MoveTo(Point(0, 0))
        assert commands[-1] == ClosePath()

    def test_decompose_glyph_error_propagates(self, source: FakeSource) -> None:
        """Test malformed glyphs raise instead of returning partial commands."""
        with pytest.raises(IllFormedQuadraticError):
            GlyphAssembler(source).decompose_glyph(2)

    def test_load_glyph(self, source: FakeSource) -> None:
        """Test the record carries metrics, name and face."""
        record = GlyphAssembler(source).load_glyph(1)

        assert record.glyph_id == 1
        assert record.glyph_name == "square"
        assert record.metrics.hori_advance == 21
        assert record.linear_advances.linear_hori_advance == 21.0
        assert record.face is source
        assert record.contour_count == 1

    def test_load_glyph_empty(self, source: FakeSource) -> None:
        """Test glyphs without contours load as empty records."""
        record = GlyphAssembler(source).load_glyph(0)
        assert record.is_empty()
        assert record.glyph_name == ".notdef"

    def test_load_glyph_without_names(self) -> None:
        """Test sources without glyph names leave the name unset."""
        record = GlyphAssembler(MinimalSource()).load_glyph(7)
        assert record.glyph_id == 7
        assert record.glyph_name is None

    def test_load_char(self, source: FakeSource) -> None:
        """Test characters resolve through the source's character map."""
        record = GlyphAssembler(source).load_char(ord("s"))
        assert record.glyph_id == 1

    def test_load_char_unmapped(self, source: FakeSource) -> None:
        """Test unmapped characters resolve to glyph 0."""
        record = GlyphAssembler(source).load_char(ord("?"))
        assert record.glyph_id == 0

    def test_kerning(self, source: FakeSource) -> None:
        """Test kerning is passed through from the source."""
        assembler = GlyphAssembler(source)
        assert assembler.kerning(1, 2) == (-30, 0)
        assert assembler.kerning(2, 1) == (0, 0)

    def test_kerning_for_chars(self, source: FakeSource) -> None:
        """Test kerning between characters uses their glyph ids."""
        assembler = GlyphAssembler(source)
        assert assembler.kerning_for_chars(ord("s"), ord("b")) == (-30, 0)
        assert assembler.kerning_for_chars(ord("b"), ord("s")) == (0, 0)
