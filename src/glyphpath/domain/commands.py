"""Path command types.

A decomposed glyph is an ordered list of path commands, one
``MoveTo ... ClosePath`` block per contour. Every command flattens to a
wire record ``(tag, scalars...)``:

    move_to_abs   x y
    line_to_abs   x y
    quad_to_abs   cx cy x y
    cubic_to_abs  c1x c1y c2x c2y x y
    close_path
"""

from collections.abc import Sequence
from dataclasses import dataclass

from glyphpath.domain.contour import Point

MOVE_TO = "move_to_abs"
LINE_TO = "line_to_abs"
QUAD_TO = "quad_to_abs"
CUBIC_TO = "cubic_to_abs"
CLOSE_PATH = "close_path"

FlatCommand = tuple[str | int, ...]


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new contour at ``point``."""

    point: Point

    tag = MOVE_TO

    def to_flat(self) -> FlatCommand:
        return (MOVE_TO, self.point.x, self.point.y)


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight segment to ``point``."""

    point: Point

    tag = LINE_TO

    def to_flat(self) -> FlatCommand:
        return (LINE_TO, self.point.x, self.point.y)


@dataclass(frozen=True, slots=True)
class QuadTo:
    """Quadratic Bezier segment through ``control`` to ``end``."""

    control: Point
    end: Point

    tag = QUAD_TO

    def to_flat(self) -> FlatCommand:
        return (QUAD_TO, self.control.x, self.control.y, self.end.x, self.end.y)


@dataclass(frozen=True, slots=True)
class CubicTo:
    """Cubic Bezier segment through ``c1`` and ``c2`` to ``end``."""

    c1: Point
    c2: Point
    end: Point

    tag = CUBIC_TO

    def to_flat(self) -> FlatCommand:
        return (
            CUBIC_TO,
            self.c1.x,
            self.c1.y,
            self.c2.x,
            self.c2.y,
            self.end.x,
            self.end.y,
        )


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current contour."""

    tag = CLOSE_PATH

    def to_flat(self) -> FlatCommand:
        return (CLOSE_PATH,)


PathCommand = MoveTo | LineTo | QuadTo | CubicTo | ClosePath

_ARITY = {MOVE_TO: 2, LINE_TO: 2, QUAD_TO: 4, CUBIC_TO: 6, CLOSE_PATH: 0}


def path_command_from_flat(record: Sequence[str | int]) -> PathCommand:
    """Rebuild a path command from its wire record.

    Args:
        record: Sequence of a command tag followed by its scalars

    Returns:
        The matching path command

    Raises:
        ValueError: If the tag is unknown or the scalar count is wrong
    """
    if not record:
        raise ValueError("Empty path command record")

    tag = record[0]
    if tag not in _ARITY:
        raise ValueError(f"Unknown path command tag: {tag!r}")

    values = [int(v) for v in record[1:]]
    if len(values) != _ARITY[tag]:
        raise ValueError(
            f"{tag} expects {_ARITY[tag]} scalars, got {len(values)}"
        )

    points = [Point(values[i], values[i + 1]) for i in range(0, len(values), 2)]

    if tag == MOVE_TO:
        return MoveTo(points[0])
    if tag == LINE_TO:
        return LineTo(points[0])
    if tag == QUAD_TO:
        return QuadTo(points[0], points[1])
    if tag == CUBIC_TO:
        return CubicTo(points[0], points[1], points[2])
    return ClosePath()


def flatten_commands(commands: Sequence[PathCommand]) -> list[FlatCommand]:
    """Flatten a command sequence into wire records."""
    return [command.to_flat() for command in commands]
