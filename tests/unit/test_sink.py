"""Unit tests for path command sinks."""

import pytest
from fontTools.pens.boundsPen import ControlBoundsPen
from fontTools.pens.recordingPen import RecordingPen

from glyphpath.core.sink import (
    FlatSink,
    ListSink,
    PathCommandSink,
    PenSink,
    emit,
    to_svg_path,
)
from glyphpath.domain import ClosePath, CubicTo, LineTo, MoveTo, Point, QuadTo


@pytest.fixture
def commands() -> list:
    """One contour using every command kind."""
    return [
        MoveTo(Point(0, 0)),
        LineTo(Point(100, 0)),
        QuadTo(Point(150, 50), Point(100, 100)),
        CubicTo(Point(80, 120), Point(20, 120), Point(0, 100)),
        LineTo(Point(0, 0)),
        ClosePath(),
    ]


class TestSinks:
    """Tests for the provided sinks."""

    def test_sinks_satisfy_protocol(self) -> None:
        """Test every sink has the append contract."""
        for sink in (ListSink(), FlatSink(), PenSink(RecordingPen())):
            assert isinstance(sink, PathCommandSink)

    def test_list_sink_keeps_order(self, commands: list) -> None:
        """Test commands arrive in emission order."""
        sink = emit(commands, ListSink())
        assert sink.commands == commands

    def test_flat_sink(self, commands: list) -> None:
        """Test commands are stored as wire records."""
        sink = emit(commands, FlatSink())

        assert sink.records[0] == ("move_to_abs", 0, 0)
        assert sink.records[2] == ("quad_to_abs", 150, 50, 100, 100)
        assert sink.records[-1] == ("close_path",)

    def test_emit_to_plain_list(self, commands: list) -> None:
        """Test any object with append works as a sink."""
        received: list = []
        emit(commands, received)
        assert received == commands


class TestPenSink:
    """Tests for replaying commands into fontTools pens."""

    def test_recording_pen(self, commands: list) -> None:
        """Test each command maps to the matching pen call."""
        pen = RecordingPen()
        emit(commands, PenSink(pen))

        assert pen.value == [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((100, 0),)),
            ("qCurveTo", ((150, 50), (100, 100))),
            ("curveTo", ((80, 120), (20, 120), (0, 100))),
            ("lineTo", ((0, 0),)),
            ("closePath", ()),
        ]

    def test_control_bounds_pen(self, commands: list) -> None:
        """Test replayed outlines can be measured with fontTools."""
        pen = ControlBoundsPen(None)
        emit(commands, PenSink(pen))
        assert pen.bounds == (0, 0, 150, 120)

    def test_rejects_other_objects(self) -> None:
        """Test non-commands raise TypeError."""
        with pytest.raises(TypeError, match="Not a path command"):
            PenSink(RecordingPen()).append("lineTo")  # type: ignore[arg-type]


class TestSvgPath:
    """Tests for to_svg_path function."""

    def test_svg_path_data(self) -> None:
        """Test commands render as SVG path data."""
        path = to_svg_path(
            [
                MoveTo(Point(0, 0)),
                LineTo(Point(100, 0)),
                QuadTo(Point(150, 50), Point(100, 100)),
                ClosePath(),
            ]
        )

        assert path.startswith("M0 0")
        assert "Q150 50 100 100" in path
        assert path.endswith("Z")

    def test_empty(self) -> None:
        """Test no commands give empty path data."""
        assert to_svg_path([]) == ""
