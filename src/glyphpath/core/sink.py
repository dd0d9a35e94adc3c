"""Consumers of path command streams.

The decomposition engine only promises to produce commands in traversal
order. Anything with an ``append(command)`` method can receive them:

- ListSink: Keeps the command objects
- FlatSink: Keeps wire records ``(tag, scalars...)``
- PenSink: Replays commands into a fontTools segment pen
"""

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from fontTools.pens.svgPathPen import SVGPathPen

from glyphpath.domain import (
    ClosePath,
    CubicTo,
    FlatCommand,
    LineTo,
    MoveTo,
    PathCommand,
    QuadTo,
)


@runtime_checkable
class PathCommandSink(Protocol):
    """Append-only receiver of path commands."""

    def append(self, command: PathCommand) -> None: ...


def emit(commands: Iterable[PathCommand], sink: PathCommandSink) -> PathCommandSink:
    """Feed commands to a sink in order and return the sink."""
    for command in commands:
        sink.append(command)
    return sink


class ListSink:
    """Collects command objects in a list."""

    def __init__(self) -> None:
        self.commands: list[PathCommand] = []

    def append(self, command: PathCommand) -> None:
        self.commands.append(command)


class FlatSink:
    """Collects flat wire records, the shape bindings and serializers persist."""

    def __init__(self) -> None:
        self.records: list[FlatCommand] = []

    def append(self, command: PathCommand) -> None:
        self.records.append(command.to_flat())


class PenSink:
    """Replays path commands into a fontTools segment pen.

    Works with any pen implementing the ``AbstractPen`` protocol, e.g.
    ``RecordingPen``, ``BoundsPen`` or ``SVGPathPen``.

    Example:
        pen = RecordingPen()
        emit(record.commands, PenSink(pen))
    """

    def __init__(self, pen: Any) -> None:
        self.pen = pen

    def append(self, command: PathCommand) -> None:
        if isinstance(command, MoveTo):
            self.pen.moveTo(command.point.to_tuple())
        elif isinstance(command, LineTo):
            self.pen.lineTo(command.point.to_tuple())
        elif isinstance(command, QuadTo):
            self.pen.qCurveTo(command.control.to_tuple(), command.end.to_tuple())
        elif isinstance(command, CubicTo):
            self.pen.curveTo(
                command.c1.to_tuple(),
                command.c2.to_tuple(),
                command.end.to_tuple(),
            )
        elif isinstance(command, ClosePath):
            self.pen.closePath()
        else:
            raise TypeError(f"Not a path command: {command!r}")


def to_svg_path(commands: Iterable[PathCommand]) -> str:
    """Render commands as SVG path data in font units (y up)."""
    pen = SVGPathPen(None)
    emit(commands, PenSink(pen))
    return pen.getCommands()
