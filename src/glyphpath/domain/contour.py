"""Core outline types.

This module defines the outline data handed over by the font reader:
- Point: A 2D point in font design units
- Tag: Enum for the curve role of a point
- RawOutline: A glyph outline as flat point/tag/contour-end arrays
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

# Raw tag bytes, FreeType convention
TAG_CONIC = 0x00
TAG_ON = 0x01
TAG_CUBIC = 0x02


class Tag(Enum):
    """Curve role of an outline point.

    - ON_CURVE: Point the rendered curve passes through
    - QUADRATIC: Conic control point (TrueType)
    - CUBIC: Cubic control point (PostScript/CFF)
    """

    ON_CURVE = auto()
    QUADRATIC = auto()
    CUBIC = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in font design units.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units
    """

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True)
class RawOutline:
    """A glyph outline in the layout font rasterizers hand out.

    Points of all contours are stored back to back; ``contour_ends`` holds
    the inclusive index of the last point of each contour. Tags are the raw
    per-point bytes (bit 0 on-curve, bit 1 cubic when off-curve); higher
    bits are format-specific and carried through untouched.

    Attributes:
        points: All outline points in contour order
        tags: Raw tag byte for each point
        contour_ends: Inclusive end index of each contour
    """

    points: tuple[Point, ...] = ()
    tags: tuple[int, ...] = ()
    contour_ends: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if len(self.points) != len(self.tags):
            raise ValueError(
                f"Outline has {len(self.points)} points but {len(self.tags)} tags"
            )
        previous = -1
        for end in self.contour_ends:
            if end <= previous or end >= len(self.points):
                raise ValueError(f"Invalid contour end index {end}")
            previous = end
        if self.points and previous != len(self.points) - 1:
            raise ValueError(
                f"Last contour ends at {previous} but outline has {len(self.points)} points"
            )

    @property
    def contour_count(self) -> int:
        """Number of contours in the outline."""
        return len(self.contour_ends)

    def is_empty(self) -> bool:
        """Check if the outline has no contours (spaces, blank glyphs)."""
        return not self.contour_ends

    def contour_slices(self) -> list[tuple[int, int]]:
        """Return ``(start, stop)`` slice bounds for each contour."""
        slices = []
        start = 0
        for end in self.contour_ends:
            slices.append((start, end + 1))
            start = end + 1
        return slices

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "points": [p.to_tuple() for p in self.points],
            "tags": list(self.tags),
            "contour_ends": list(self.contour_ends),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawOutline":
        """Deserialize from dictionary."""
        return cls(
            points=tuple(Point(x, y) for x, y in data["points"]),
            tags=tuple(data["tags"]),
            contour_ends=tuple(data["contour_ends"]),
        )
