"""Shared fixtures: tiny synthetic fonts built with fontTools FontBuilder."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.t2CharStringPen import T2CharStringPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import newTable
from fontTools.ttLib.tables._k_e_r_n import KernTable_format_0

UNITS_PER_EM = 1000
ASCENDER = 800
DESCENDER = -200

GLYPH_ORDER = [".notdef", "space", "A", "V", "O"]
CMAP = {0x20: "space", 0x41: "A", 0x56: "V", 0x4F: "O"}
ADVANCES = {".notdef": 500, "space": 250, "A": 600, "V": 600, "O": 500}

# Four quadratic controls and no on-curve point
O_CONTROLS = [(250, 0), (0, 250), (250, 500), (500, 250)]

A_V_KERNING = -80


def _setup_common(fb: FontBuilder, family_name: str) -> None:
    fb.setupHorizontalHeader(ascent=ASCENDER, descent=DESCENDER)
    fb.setupNameTable({"familyName": family_name, "styleName": "Regular"})
    fb.setupOS2(
        sTypoAscender=ASCENDER,
        sTypoDescender=DESCENDER,
        sTypoLineGap=0,
        usWinAscent=ASCENDER,
        usWinDescent=-DESCENDER,
    )
    fb.setupPost()


def build_truetype_font(path: Path, with_kerning: bool = True) -> Path:
    """Build a glyf-based font with line and quadratic glyphs."""
    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupCharacterMap(CMAP)

    glyphs = {}

    pen = TTGlyphPen(None)
    glyphs[".notdef"] = pen.glyph()

    pen = TTGlyphPen(None)
    glyphs["space"] = pen.glyph()

    # Triangle made of straight lines
    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((250, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    glyphs["A"] = pen.glyph()

    # One quadratic segment, closed with a straight line
    pen = TTGlyphPen(None)
    pen.moveTo((0, 700))
    pen.qCurveTo((300, 0), (600, 700))
    pen.closePath()
    glyphs["V"] = pen.glyph()

    # Closed curve without on-curve points
    pen = TTGlyphPen(None)
    pen.qCurveTo(*O_CONTROLS, None)
    pen.closePath()
    glyphs["O"] = pen.glyph()

    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics({name: (ADVANCES[name], 0) for name in GLYPH_ORDER})
    _setup_common(fb, "Glyph Test")

    if with_kerning:
        kern = newTable("kern")
        kern.version = 0
        subtable = KernTable_format_0()
        subtable.version = 0
        subtable.coverage = 1
        subtable.kernTable = {("A", "V"): A_V_KERNING}
        kern.kernTables = [subtable]
        fb.font["kern"] = kern

    fb.save(str(path))
    return path


def build_cff_font(path: Path) -> Path:
    """Build a CFF-based font with a cubic glyph."""
    fb = FontBuilder(UNITS_PER_EM, isTTF=False)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupCharacterMap(CMAP)

    charstrings = {}
    for name in GLYPH_ORDER:
        pen = T2CharStringPen(ADVANCES[name], None)
        if name == "O":
            pen.moveTo((0, 0))
            pen.curveTo((0, 50), (50, 100), (100, 0))
            pen.closePath()
        elif name in ("A", "V"):
            pen.moveTo((0, 0))
            pen.lineTo((250, 700))
            pen.lineTo((500, 0))
            pen.closePath()
        charstrings[name] = pen.getCharString()

    fb.setupCFF(
        psName="GlyphTestCFF-Regular",
        fontInfo={"FamilyName": "Glyph Test CFF", "FullName": "Glyph Test CFF Regular"},
        charStringsDict=charstrings,
        privateDict={},
    )
    fb.setupHorizontalMetrics({name: (ADVANCES[name], 0) for name in GLYPH_ORDER})
    _setup_common(fb, "Glyph Test CFF")

    fb.save(str(path))
    return path


@pytest.fixture
def truetype_font(tmp_path: Path) -> Path:
    """Path to a TrueType test font with a kern table."""
    return build_truetype_font(tmp_path / "GlyphTest.ttf")


@pytest.fixture
def truetype_font_without_kerning(tmp_path: Path) -> Path:
    """Path to a TrueType test font without a kern table."""
    return build_truetype_font(tmp_path / "GlyphTestNoKern.ttf", with_kerning=False)


@pytest.fixture
def cff_font(tmp_path: Path) -> Path:
    """Path to a CFF test font."""
    return build_cff_font(tmp_path / "GlyphTest.otf")
