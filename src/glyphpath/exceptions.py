"""Exception hierarchy for glyphpath."""


class GlyphPathError(Exception):
    """Base exception for all glyphpath errors."""

    pass


class FontError(GlyphPathError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontFormatError(FontError):
    """Unsupported or invalid font format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid font format '{path}': {details}")


class GlyphError(GlyphPathError):
    """Errors related to glyph lookup."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested glyph not found in font."""

    def __init__(self, glyph_id: int | str) -> None:
        self.glyph_id = glyph_id
        super().__init__(f"Glyph '{glyph_id}' not found in font")


class GlyphReadError(GlyphError):
    """Error reading a glyph outline or its metrics from the font."""

    def __init__(self, glyph_name: str, reason: str) -> None:
        self.glyph_name = glyph_name
        self.reason = reason
        super().__init__(f"Error reading glyph '{glyph_name}': {reason}")


class DecompositionError(GlyphPathError):
    """A contour could not be decomposed into path commands.

    Attributes:
        contour_index: Index of the failing contour within its glyph, if known
        point_index: Index of the offending point within its contour, if known
    """

    description = "decomposition failed"

    def __init__(
        self,
        point_index: int | None = None,
        contour_index: int | None = None,
    ) -> None:
        self.point_index = point_index
        self.contour_index = contour_index
        super().__init__(self._format())

    def _format(self) -> str:
        where = []
        if self.contour_index is not None:
            where.append(f"contour {self.contour_index}")
        if self.point_index is not None:
            where.append(f"point {self.point_index}")
        if where:
            return f"{self.description} at {', '.join(where)}"
        return self.description

    def with_contour(self, contour_index: int) -> "DecompositionError":
        """Attach the contour index and refresh the message."""
        self.contour_index = contour_index
        self.args = (self._format(),)
        return self


class IllFormedQuadraticError(DecompositionError):
    """A cubic control point follows a pending quadratic control point."""

    description = "ill-formed quadratic"


class IllFormedCubicError(DecompositionError):
    """A cubic run is not exactly two controls between on-curve points."""

    description = "ill-formed cubic"


class UnknownControlTagError(DecompositionError):
    """A tag combination outside the transition table."""

    description = "unknown control tag"


class ContourStartError(DecompositionError):
    """A contour starts off-curve and the start policy rejects it."""

    description = "contour starts off-curve"


class BatchAbortedError(GlyphPathError):
    """Batch decomposition stopped on the first failing glyph."""

    def __init__(self, glyph_name: str, reason: str) -> None:
        self.glyph_name = glyph_name
        self.reason = reason
        super().__init__(f"Batch aborted at glyph '{glyph_name}': {reason}")
