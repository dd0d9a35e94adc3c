"""Converters from fonttools representations to domain models.

This module turns fonttools glyph data into the flat outline arrays and
unscaled metrics the decomposition engine consumes, following the layout
and conventions FreeType uses for unscaled glyph loads.
"""

from typing import Any

from fontTools.misc.roundTools import otRound
from fontTools.pens.recordingPen import RecordingPen
from fontTools.ttLib import TTFont
from fontTools.ttLib.tables._g_l_y_f import flagCubic, flagOnCurve

from glyphpath.domain import (
    TAG_CONIC,
    TAG_CUBIC,
    TAG_ON,
    FaceInfo,
    GlyphMetrics,
    LinearAdvances,
    Point,
    RawOutline,
)

# kern subtable coverage bit: value replaces the accumulated total
KERN_OVERRIDE = 0x08


def is_scalable(font: TTFont) -> bool:
    """Check whether the font carries vector outlines."""
    return "glyf" in font or "CFF " in font or "CFF2" in font


def fonttools_glyph_to_outline(name: str, font: TTFont) -> RawOutline:
    """Extract the raw outline of a glyph.

    TrueType glyphs are read straight from the ``glyf`` table so that the
    on-curve/off-curve flags survive as stored, with composite glyphs
    flattened into their components' points. CFF/CFF2 glyphs are drawn
    into a RecordingPen and converted from segments back to points.

    Args:
        name: Name of the glyph
        font: The TTFont object

    Returns:
        RawOutline with rounded integer coordinates
    """
    if "glyf" in font:
        return _glyf_to_outline(name, font)

    pen = RecordingPen()
    font.getGlyphSet()[name].draw(pen)
    return recording_to_outline(pen.value)


def _glyf_to_outline(name: str, font: TTFont) -> RawOutline:
    """Read a TrueType glyph's coordinates, contour ends and flags."""
    glyf_table = font["glyf"]
    glyph = glyf_table[name]

    if glyph.numberOfContours == 0:
        return RawOutline()

    coordinates, end_points, flags = glyph.getCoordinates(glyf_table)

    return RawOutline(
        points=tuple(Point(otRound(x), otRound(y)) for x, y in coordinates),
        tags=tuple(_glyf_flag_to_tag(flag) for flag in flags),
        contour_ends=tuple(end_points),
    )


def _glyf_flag_to_tag(flag: int) -> int:
    """Map a glyf point flag to a raw outline tag."""
    if flag & flagOnCurve:
        return TAG_ON
    if flag & flagCubic:
        return TAG_CUBIC
    return TAG_CONIC


def recording_to_outline(recording: list[tuple[str, tuple[Any, ...]]]) -> RawOutline:
    """Convert RecordingPen recording to a RawOutline.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), (x2, y2), ...))  # Quadratic, last may be None
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))  # Cubic
    - ('closePath', ())

    Contours are closed implicitly, so an on-curve end point that repeats
    the contour's start point is dropped.

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        RawOutline with one contour per moveTo/closePath block
    """
    points: list[Point] = []
    tags: list[int] = []
    contour_ends: list[int] = []
    start = 0

    def finish_contour() -> None:
        nonlocal start
        if len(points) == start:
            return
        if len(points) - start > 1 and tags[-1] == TAG_ON and points[-1] == points[start]:
            points.pop()
            tags.pop()
        contour_ends.append(len(points) - 1)
        start = len(points)

    def add(pt: tuple[float, float], tag: int) -> None:
        points.append(Point(otRound(pt[0]), otRound(pt[1])))
        tags.append(tag)

    for command, args in recording:
        if command == "moveTo":
            finish_contour()
            add(args[0], TAG_ON)

        elif command == "lineTo":
            add(args[0], TAG_ON)

        elif command == "qCurveTo":
            *controls, end = args
            for pt in controls:
                add(pt, TAG_CONIC)
            if end is not None:
                add(end, TAG_ON)

        elif command == "curveTo":
            *controls, end = args
            for pt in controls:
                add(pt, TAG_CUBIC)
            add(end, TAG_ON)

        elif command == "closePath" or command == "endPath":
            finish_contour()

    finish_contour()

    return RawOutline(
        points=tuple(points),
        tags=tuple(tags),
        contour_ends=tuple(contour_ends),
    )


def control_box(outline: RawOutline) -> tuple[int, int, int, int]:
    """Bounding box of all outline points, control points included.

    Returns:
        Tuple of (x_min, y_min, x_max, y_max); all zero for empty outlines
    """
    if not outline.points:
        return (0, 0, 0, 0)

    xs = [p.x for p in outline.points]
    ys = [p.y for p in outline.points]
    return (min(xs), min(ys), max(xs), max(ys))


def _vertical_line_metrics(font: TTFont) -> tuple[int, int, int]:
    """Ascender, descender and line gap the way FreeType picks them.

    ``hhea`` wins unless both of its values are zero; then the ``OS/2``
    typographic values, then the Windows ones.
    """
    hhea = font["hhea"]
    ascender, descender, line_gap = hhea.ascent, hhea.descent, hhea.lineGap

    os2 = font.get("OS/2")
    if ascender == 0 and descender == 0 and os2 is not None:
        ascender, descender, line_gap = (
            os2.sTypoAscender,
            os2.sTypoDescender,
            os2.sTypoLineGap,
        )
        if ascender == 0 and descender == 0:
            ascender, descender, line_gap = os2.usWinAscent, -os2.usWinDescent, 0

    return ascender, descender, line_gap


def extract_glyph_metrics(
    name: str,
    outline: RawOutline,
    font: TTFont,
) -> tuple[GlyphMetrics, LinearAdvances]:
    """Compute unscaled glyph metrics.

    Bearings come from the outline's control box, advances from ``hmtx``
    and ``vmtx``. Fonts without ``vmtx`` get synthesized vertical metrics:
    the advance is the ascender-descender distance and the glyph is
    centered in it.

    Args:
        name: Glyph name
        outline: The glyph's raw outline
        font: The TTFont object

    Returns:
        Tuple of (GlyphMetrics, LinearAdvances)
    """
    x_min, y_min, x_max, y_max = control_box(outline)
    width = x_max - x_min
    height = y_max - y_min

    advance_width = 0
    hmtx = font.get("hmtx")
    if hmtx is not None and name in hmtx.metrics:
        advance_width = hmtx.metrics[name][0]

    vmtx = font.get("vmtx")
    if vmtx is not None and name in vmtx.metrics:
        advance_height, top_bearing = vmtx.metrics[name]
    else:
        ascender, descender, _ = _vertical_line_metrics(font)
        advance_height = ascender - descender
        top_bearing = int((advance_height - height) / 2)

    metrics = GlyphMetrics(
        width=width,
        height=height,
        hori_bearing_x=x_min,
        hori_bearing_y=y_max,
        hori_advance=advance_width,
        vert_bearing_x=x_min - advance_width // 2,
        vert_bearing_y=top_bearing,
        vert_advance=advance_height,
    )
    linear = LinearAdvances(
        linear_hori_advance=float(advance_width),
        linear_vert_advance=float(advance_height),
    )
    return metrics, linear


def extract_face_info(font: TTFont, num_faces: int = 1, face_index: int = 0) -> FaceInfo:
    """Collect face attributes from a loaded font.

    Args:
        font: The TTFont object
        num_faces: Number of faces in the file (collections hold several)
        face_index: Index of this face in the file

    Returns:
        FaceInfo populated from head, hhea, vhea, post, maxp and name
    """
    head = font["head"]
    ascender, descender, line_gap = _vertical_line_metrics(font)
    height = ascender - descender + line_gap

    family_name = None
    style_name = None
    name_table = font.get("name")
    if name_table is not None:
        family_name = name_table.getBestFamilyName()
        style_name = name_table.getBestSubFamilyName()

    max_advance_height = height
    vhea = font.get("vhea")
    if vhea is not None:
        max_advance_height = vhea.advanceHeightMax

    underline_position = 0
    underline_thickness = 0
    post = font.get("post")
    if post is not None:
        underline_thickness = post.underlineThickness
        underline_position = post.underlinePosition - underline_thickness // 2

    return FaceInfo(
        num_faces=num_faces,
        face_index=face_index,
        num_glyphs=font["maxp"].numGlyphs,
        family_name=family_name,
        style_name=style_name,
        units_per_em=head.unitsPerEm,
        ascender=ascender,
        descender=descender,
        height=height,
        max_advance_width=font["hhea"].advanceWidthMax,
        max_advance_height=max_advance_height,
        underline_position=underline_position,
        underline_thickness=underline_thickness,
        bbox=(head.xMin, head.yMin, head.xMax, head.yMax),
    )


def kerning_value(font: TTFont, left: str, right: str) -> tuple[int, int]:
    """Look up a pair in the legacy ``kern`` table.

    Only horizontal format 0 subtables are used. Values from several
    subtables add up, unless a subtable sets the override bit, in which
    case its value replaces the running total. GPOS kerning is not
    consulted.

    Returns:
        Tuple of (dx, dy); (0, 0) if the font has no ``kern`` table or the
        pair is not listed
    """
    kern = font.get("kern")
    if kern is None:
        return (0, 0)

    total = 0
    for subtable in kern.kernTables:
        # Horizontal format 0 only; vertical, minimum and cross-stream are skipped
        if getattr(subtable, "format", None) != 0 or (subtable.coverage & 0x07) != 0x01:
            continue
        pairs = getattr(subtable, "kernTable", None)
        if not pairs or (left, right) not in pairs:
            continue
        value = pairs[(left, right)]
        total = value if subtable.coverage & KERN_OVERRIDE else total + value

    return (total, 0)
