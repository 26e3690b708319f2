#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/font.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.8
# LOG_REF: 2026-10-19
#

# Stroke glyphs on a unit square: x grows to the right, y grows downwards,
# (0, 0) is the top left corner and y == 1 is the baseline.
# Only what the dimension caption needs: digits, 'x' and 'm'.

_TL, _TR = (0.0, 0.0), (1.0, 0.0)
_ML, _MR = (0.0, 0.5), (1.0, 0.5)
_BL, _BR = (0.0, 1.0), (1.0, 1.0)

GLYPHS = {
    '0': [(_TL, _TR), (_TR, _BR), (_BR, _BL), (_BL, _TL), (_BL, _TR)],
    '1': [((0.5, 0.0), (0.5, 1.0)), ((0.2, 0.3), (0.5, 0.0)), ((0.2, 1.0), (0.8, 1.0))],
    '2': [(_TL, _TR), (_TR, _MR), (_MR, _ML), (_ML, _BL), (_BL, _BR)],
    '3': [(_TL, _TR), (_TR, _BR), (_BR, _BL), ((0.3, 0.5), _MR)],
    '4': [(_TL, _ML), (_ML, _MR), (_TR, _BR)],
    '5': [(_TR, _TL), (_TL, _ML), (_ML, _MR), (_MR, _BR), (_BR, _BL)],
    '6': [(_TR, _TL), (_TL, _BL), (_BL, _BR), (_BR, _MR), (_MR, _ML)],
    '7': [(_TL, _TR), (_TR, (0.4, 1.0))],
    '8': [(_TL, _TR), (_TR, _BR), (_BR, _BL), (_BL, _TL), (_ML, _MR)],
    '9': [(_MR, _ML), (_ML, _TL), (_TL, _TR), (_TR, _BR), (_BR, _BL)],
    'x': [((0.0, 0.4), _BR), ((1.0, 0.4), _BL)],
    'm': [((0.0, 0.4), _BL), ((0.0, 0.4), (1.0, 0.4)), ((0.5, 0.4), (0.5, 1.0)), ((1.0, 0.4), _BR)],
}

# glyph box and pen advance, relative to the glyph height
GLYPH_WIDTH = 0.6
GLYPH_ADVANCE = 0.9


def glyph_segments(char: str):
    """Line segments of a glyph, or an empty list for unknown characters."""
    return GLYPHS.get(char.lower(), [])


def text_width(text: str, size: float) -> float:
    if not text:
        return 0.0
    return (len(text) - 1) * GLYPH_ADVANCE * size + GLYPH_WIDTH * size
