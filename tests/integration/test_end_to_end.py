"""End-to-end tests: font file to path commands and back into fontTools pens."""

from pathlib import Path

import pytest
from fontTools.pens.boundsPen import ControlBoundsPen
from fontTools.pens.recordingPen import RecordingPen

from glyphpath.config import GlyphPathSettings, LoggingConfig
from glyphpath.core import FontProcessor, GlyphAssembler, PenSink, emit
from glyphpath.domain import ClosePath, CubicTo, LineTo, MoveTo, Point, QuadTo
from glyphpath.io import FontReader, load_glyph_records


class TestTrueTypeGlyphs:
    """Decomposition of glyf outlines."""

    def test_quadratic_glyph(self, truetype_font: Path) -> None:
        """Test a glyph with one quadratic segment."""
        with FontReader(truetype_font) as reader:
            record = GlyphAssembler(reader).load_char(ord("V"))

        assert record.commands == [
            MoveTo(Point(0, 700)),
            QuadTo(Point(300, 0), Point(600, 700)),
            LineTo(Point(0, 700)),
            ClosePath(),
        ]
        assert record.glyph_name == "V"
        assert record.metrics.hori_advance == 600

    def test_off_curve_only_glyph(self, truetype_font: Path) -> None:
        """Test a contour without on-curve points starts at an implied point."""
        with FontReader(truetype_font) as reader:
            record = GlyphAssembler(reader).load_char(ord("O"))

        assert record.commands[0] == MoveTo(Point(375, 125))
        assert record.commands[-2] == QuadTo(Point(500, 250), Point(375, 125))
        assert len(record.commands) == 6

    def test_kerning(self, truetype_font: Path) -> None:
        """Test kerning between characters."""
        with FontReader(truetype_font) as reader:
            assembler = GlyphAssembler(reader)
            assert assembler.kerning_for_chars(ord("A"), ord("V")) == (-80, 0)
            assert assembler.kerning_for_chars(ord("V"), ord("A")) == (0, 0)

    def test_no_kern_table(self, truetype_font_without_kerning: Path) -> None:
        """Test faces without a kern table report zero kerning."""
        with FontReader(truetype_font_without_kerning) as reader:
            assert GlyphAssembler(reader).kerning_for_chars(ord("A"), ord("V")) == (0, 0)

    def test_control_box_matches_metrics(self, truetype_font: Path) -> None:
        """Test replayed commands span exactly the glyph's control box."""
        with FontReader(truetype_font) as reader:
            assembler = GlyphAssembler(reader)
            for glyph_id in reader.iter_glyph_ids():
                record = assembler.load_glyph(glyph_id)
                if record.is_empty():
                    continue

                pen = ControlBoundsPen(None)
                emit(record.commands, PenSink(pen))

                m = record.metrics
                assert pen.bounds == (
                    m.hori_bearing_x,
                    m.hori_bearing_y - m.height,
                    m.hori_bearing_x + m.width,
                    m.hori_bearing_y,
                )


class TestCFFGlyphs:
    """Decomposition of CFF outlines."""

    def test_cubic_glyph(self, cff_font: Path) -> None:
        """Test a cubic segment closed by a straight line."""
        with FontReader(cff_font) as reader:
            record = GlyphAssembler(reader).load_char(ord("O"))

        assert record.commands == [
            MoveTo(Point(0, 0)),
            CubicTo(Point(0, 50), Point(50, 100), Point(100, 0)),
            LineTo(Point(0, 0)),
            ClosePath(),
        ]

    def test_replay_into_recording_pen(self, cff_font: Path) -> None:
        """Test commands replay as the same segments fontTools draws."""
        with FontReader(cff_font) as reader:
            record = GlyphAssembler(reader).load_char(ord("A"))

        pen = RecordingPen()
        emit(record.commands, PenSink(pen))

        assert pen.value == [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((250, 700),)),
            ("lineTo", ((500, 0),)),
            ("lineTo", ((0, 0),)),
            ("closePath", ()),
        ]


class TestBatchOutput:
    """Whole-font batches written to disk."""

    @pytest.mark.parametrize("font_fixture", ["truetype_font", "cff_font"])
    def test_dump_and_reload(
        self, font_fixture: str, request: pytest.FixtureRequest, tmp_path: Path
    ) -> None:
        """Test a saved batch matches direct decomposition."""
        font_path = request.getfixturevalue(font_fixture)
        output = tmp_path / "paths.json"
        processor = FontProcessor(
            GlyphPathSettings(logging=LoggingConfig(log_file=tmp_path / "run.log"))
        )

        result = processor.process(font_path, output_path=output, max_workers=1)

        assert result.errors == []
        reloaded = load_glyph_records(output)
        assert reloaded == result.records

        with FontReader(font_path) as reader:
            assembler = GlyphAssembler(reader)
            direct = [assembler.load_glyph(i) for i in reader.iter_glyph_ids()]
        assert [r.commands for r in direct] == [r.commands for r in reloaded]
        assert [r.metrics for r in direct] == [r.metrics for r in reloaded]
        assert "Batch complete" in (tmp_path / "run.log").read_text(encoding="utf-8")
