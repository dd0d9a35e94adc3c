"""Glyph and face records.

This module defines what a decomposed glyph looks like to callers:
its path commands together with the metrics the font reports for it,
and the face-level attributes passed through from the font.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

from glyphpath.domain.commands import (
    MOVE_TO,
    PathCommand,
    flatten_commands,
    path_command_from_flat,
)


@dataclass(frozen=True)
class GlyphMetrics:
    """Unscaled glyph metrics in font units.

    Attributes:
        width: Width of the outline's control box
        height: Height of the outline's control box
        hori_bearing_x: Left side bearing for horizontal layout
        hori_bearing_y: Top side bearing for horizontal layout
        hori_advance: Advance width for horizontal layout
        vert_bearing_x: Left side bearing for vertical layout
        vert_bearing_y: Top side bearing for vertical layout
        vert_advance: Advance height for vertical layout
    """

    width: int = 0
    height: int = 0
    hori_bearing_x: int = 0
    hori_bearing_y: int = 0
    hori_advance: int = 0
    vert_bearing_x: int = 0
    vert_bearing_y: int = 0
    vert_advance: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphMetrics":
        """Deserialize from dictionary."""
        return cls(**data)


@dataclass(frozen=True)
class LinearAdvances:
    """Unhinted advances in font units.

    Attributes:
        linear_hori_advance: Horizontal advance
        linear_vert_advance: Vertical advance
    """

    linear_hori_advance: float = 0.0
    linear_vert_advance: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LinearAdvances":
        """Deserialize from dictionary."""
        return cls(**data)


@dataclass
class GlyphRecord:
    """A decomposed glyph.

    The ``face`` reference points back at whatever loaded the glyph. It is
    not owned by the record and is left out of equality, repr and
    serialization.

    Attributes:
        commands: Path commands, one MoveTo...ClosePath block per contour
        metrics: Glyph metrics as reported by the font
        linear_advances: Unhinted advances
        glyph_id: Glyph index in the font, if known
        glyph_name: Glyph name in the font, if known
        face: Non-owning reference to the source face
    """

    commands: list[PathCommand]
    metrics: GlyphMetrics = field(default_factory=GlyphMetrics)
    linear_advances: LinearAdvances = field(default_factory=LinearAdvances)
    glyph_id: int | None = None
    glyph_name: str | None = None
    face: Any = field(default=None, repr=False, compare=False)

    def is_empty(self) -> bool:
        """Check if the glyph has no path commands."""
        return not self.commands

    @property
    def contour_count(self) -> int:
        """Number of contour blocks in the command stream."""
        return sum(1 for command in self.commands if command.tag == MOVE_TO)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary using flat command records."""
        return {
            "glyph_id": self.glyph_id,
            "glyph_name": self.glyph_name,
            "commands": [list(record) for record in flatten_commands(self.commands)],
            "metrics": self.metrics.to_dict(),
            "linear_advances": self.linear_advances.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphRecord":
        """Deserialize from dictionary."""
        return cls(
            commands=[path_command_from_flat(record) for record in data["commands"]],
            metrics=GlyphMetrics.from_dict(data["metrics"]),
            linear_advances=LinearAdvances.from_dict(data["linear_advances"]),
            glyph_id=data.get("glyph_id"),
            glyph_name=data.get("glyph_name"),
        )


@dataclass(frozen=True)
class FaceInfo:
    """Face-level attributes passed through from the font.

    Attributes:
        num_faces: Number of faces in the font file
        face_index: Index of this face in the file
        num_glyphs: Number of glyphs in the face
        family_name: Family name, if the face has one
        style_name: Style name, if the face has one
        units_per_em: Design units per em
        ascender: Typographic ascender
        descender: Typographic descender (usually negative)
        height: Default line height (ascender - descender + line gap)
        max_advance_width: Largest advance width
        max_advance_height: Largest advance height
        underline_position: Center of the underline relative to the baseline
        underline_thickness: Underline thickness
        bbox: Face bounding box (x_min, y_min, x_max, y_max)
    """

    num_faces: int
    face_index: int
    num_glyphs: int
    family_name: str | None
    style_name: str | None
    units_per_em: int
    ascender: int
    descender: int
    height: int
    max_advance_width: int
    max_advance_height: int
    underline_position: int
    underline_thickness: int
    bbox: tuple[int, int, int, int]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        data = asdict(self)
        data["bbox"] = list(self.bbox)
        return data
