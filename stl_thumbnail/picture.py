#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/picture.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.9
# LOG_REF: 2026-10-19
#

import math

from .color import RGBA, over
from .font import GLYPH_ADVANCE, GLYPH_WIDTH, glyph_segments

TRANSPARENT = RGBA(0, 0, 0, 0)


class Picture:
    """
    RGBA8 framebuffer, row-major, 4 bytes per pixel.

    Reads and writes outside the canvas are silently ignored; reads return
    transparent black.
    """
    __slots__ = ('width', 'height', 'depth', 'data')

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid picture size {width}x{height}")
        self.width, self.height = int(width), int(height)
        self.depth = 4
        self.data = bytearray(self.width * self.height * self.depth)
        self.fill(RGBA(0, 0, 0, 255))

    @property
    def stride(self) -> int:
        return self.width * self.depth

    # ── Pixel access ────────────────────────────────────────────────────

    def set(self, x: int, y: int, rgba):
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return
        i = y * self.stride + x * self.depth
        self.data[i:i + 4] = bytes(rgba)

    def get(self, x: int, y: int) -> RGBA:
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return TRANSPARENT
        i = y * self.stride + x * self.depth
        return RGBA(*self.data[i:i + 4])

    def blend(self, x: int, y: int, fg):
        """Composite a float (r, g, b, a) color over the pixel at (x, y)."""
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return
        self.set(x, y, over(fg, self.get(x, y).to_floats()))

    def fill(self, rgba):
        self.data[:] = bytes(rgba) * (self.width * self.height)

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, rgba):
        """Fill [x0, x1) x [y0, y1), clipped to the canvas."""
        x0, x1 = max(0, x0), min(self.width, x1)
        y0, y1 = max(0, y0), min(self.height, y1)
        if x0 >= x1 or y0 >= y1:
            return

        row = bytes(rgba) * (x1 - x0)
        stride = self.stride
        for y in range(y0, y1):
            start = y * stride + x0 * self.depth
            self.data[start:start + len(row)] = row

    # ── Lines ───────────────────────────────────────────────────────────

    def line(self, x0: int, y0: int, x1: int, y1: int, rgba):
        """Bresenham's line algorithm, no antialiasing."""
        x, y = x0, y0

        dx = abs(x1 - x0)
        sx = 1 if x0 < x1 else -1
        dy = -abs(y1 - y0)
        sy = 1 if y0 < y1 else -1
        err = dx + dy
        while True:
            self.set(x, y, rgba)
            if x == x1 and y == y1:
                break

            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x += sx
            if e2 <= dx:
                err += dx
                y += sy

    def thick_line(self, x0: float, y0: float, x1: float, y1: float, width: float, rgba):
        """
        Antialiased line of the given stroke width. Coverage falls off with
        the distance of the pixel center to the segment and is composited
        with the "over" operator.
        """
        if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
            return

        half = width / 2.0
        reach = half + 1.0
        min_x = max(0, int(math.floor(min(x0, x1) - reach)))
        min_y = max(0, int(math.floor(min(y0, y1) - reach)))
        max_x = min(self.width - 1, int(math.ceil(max(x0, x1) + reach)))
        max_y = min(self.height - 1, int(math.ceil(max(y0, y1) + reach)))

        r, g, b, a = rgba.to_floats()
        dx, dy = x1 - x0, y1 - y0
        len2 = dx * dx + dy * dy

        for y in range(min_y, max_y + 1):
            for x in range(min_x, max_x + 1):
                # closest point on the segment
                t = 0.0
                if len2 > 0.0:
                    t = ((x - x0) * dx + (y - y0) * dy) / len2
                    t = min(1.0, max(0.0, t))
                dist = math.hypot(x - (x0 + t * dx), y - (y0 + t * dy))

                coverage = half + 0.5 - dist
                if coverage <= 0.0:
                    continue
                self.blend(x, y, (r, g, b, a * min(1.0, coverage)))

    # ── Text ────────────────────────────────────────────────────────────

    def stroke_string(self, x: float, y: float, text: str, size: float, rgba, width: float = None):
        """
        Stroke text with the built-in glyphs. (x, y) is the left end of the
        baseline and size the glyph height in pixels.
        """
        if width is None:
            width = max(1.0, size / 10.0)

        glyph_w = GLYPH_WIDTH * size
        top = y - size
        for char in text:
            for (ax, ay), (bx, by) in glyph_segments(char):
                self.thick_line(x + ax * glyph_w, top + ay * size,
                                x + bx * glyph_w, top + by * size,
                                width, rgba)
            x += GLYPH_ADVANCE * size

    # ── Export ──────────────────────────────────────────────────────────

    def to_bytes(self) -> bytes:
        """Independent copy of the RGBA pixel data."""
        return bytes(self.data)

    def to_bgra(self) -> bytes:
        """Independent copy of the pixel data in BGRA channel order."""
        bgra = bytearray(len(self.data))
        bgra[0::4] = self.data[2::4]
        bgra[1::4] = self.data[1::4]
        bgra[2::4] = self.data[0::4]
        bgra[3::4] = self.data[3::4]
        return bytes(bgra)

    def test_pattern(self):
        for i in range(min(self.width, self.height)):
            self.set(i, i, RGBA(255, 0, 0, 0))
