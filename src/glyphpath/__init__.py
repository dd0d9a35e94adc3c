"""glyphpath - Decompose scalable font outlines into path commands.

glyphpath reads the per-glyph outlines of TrueType/OpenType fonts and turns
their contours of on-curve, quadratic and cubic control points into a
normalized stream of move, line, quadratic, cubic and close commands in
unscaled font design units.

Example:
    $ glyphpath glyph Roboto-Regular.ttf "Ag"

This prints the path commands for the glyphs of 'A' and 'g'.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
