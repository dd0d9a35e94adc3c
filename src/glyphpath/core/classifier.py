"""Curve tag classification.

Raw outline tags follow the FreeType convention: bit 0 set means the point
is on the curve; for off-curve points bit 1 distinguishes a cubic control
(set) from a quadratic one (clear). Higher bits carry format-specific
hints and are never inspected.
"""

from glyphpath.domain.contour import TAG_CONIC, TAG_CUBIC, TAG_ON, Point, RawOutline, Tag

_CURVE_TAG_MASK = 0x03


def classify(raw_tag: int) -> Tag:
    """Map a raw tag byte to its curve role.

    Args:
        raw_tag: Raw per-point tag

    Returns:
        ON_CURVE, QUADRATIC or CUBIC
    """
    bits = raw_tag & _CURVE_TAG_MASK
    if bits & TAG_ON:
        return Tag.ON_CURVE
    if bits & TAG_CUBIC:
        return Tag.CUBIC
    return Tag.QUADRATIC


def to_raw_tag(tag: Tag) -> int:
    """Return the canonical raw byte for a curve role."""
    if tag is Tag.ON_CURVE:
        return TAG_ON
    if tag is Tag.CUBIC:
        return TAG_CUBIC
    return TAG_CONIC


def split_contours(outline: RawOutline) -> list[list[tuple[Point, Tag]]]:
    """Split an outline into classified contours.

    This is the only place raw tag bits are read; everything downstream
    works on ``Tag`` values.

    Args:
        outline: Raw outline from the font reader

    Returns:
        One list of (point, tag) pairs per contour, in outline order
    """
    return [
        [
            (outline.points[i], classify(outline.tags[i]))
            for i in range(start, stop)
        ]
        for start, stop in outline.contour_slices()
    ]
