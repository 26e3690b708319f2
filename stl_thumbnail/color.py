#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/color.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.2
# LOG_REF: 2026-10-19
#

from typing import NamedTuple


class RGBA(NamedTuple):
    """One 8-bit RGBA pixel."""
    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_floats(cls, r: float, g: float, b: float, a: float = 1.0) -> 'RGBA':
        """Clamp each channel to [0, 1] and truncate to 0-255."""
        return cls(_to_byte(r), _to_byte(g), _to_byte(b), _to_byte(a))

    @classmethod
    def from_hex(cls, hex_str: str) -> 'RGBA':
        rgba = parse_hex_color(hex_str)
        if rgba is None:
            raise ValueError(f"Invalid hex color: {hex_str!r}")
        return rgba

    def to_floats(self):
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)


def _to_byte(value: float) -> int:
    if not value > 0.0:   # also catches NaN
        return 0
    if value >= 1.0:
        return 255
    return int(value * 255.0)


def parse_hex_color(hex_str):
    """
    Parse a hex color string to an RGBA tuple.
    Accepts: '#RRGGBB', 'RRGGBB', '#RRGGBBAA' or 'RRGGBBAA' (case-insensitive).
    A missing alpha channel means fully opaque.
    Returns: RGBA with values 0-255, or None on failure.
    """
    if hex_str is None:
        return None
    val = str(hex_str).strip().lstrip('#')
    if len(val) not in (6, 8):
        return None
    try:
        r = int(val[0:2], 16)
        g = int(val[2:4], 16)
        b = int(val[4:6], 16)
        a = int(val[6:8], 16) if len(val) == 8 else 255
        return RGBA(r, g, b, a)
    except ValueError:
        return None


def over(fg, bg) -> RGBA:
    """
    Porter-Duff "A over B" for two colors given as float tuples
    (r, g, b, a) in [0, 1]. Returns the 8-bit result.
    """
    ra, ga, ba, alpha_a = fg
    rb, gb, bb, alpha_b = bg

    alpha_c = alpha_a + (1.0 - alpha_a) * alpha_b
    if alpha_c <= 0.0:
        return RGBA(0, 0, 0, 0)

    wa = alpha_a / alpha_c
    wb = (1.0 - alpha_a) * alpha_b / alpha_c
    return RGBA.from_floats(
        ra * wa + rb * wb,
        ga * wa + gb * wb,
        ba * wa + bb * wb,
        alpha_c
    )
