#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/zbuffer.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.7
# LOG_REF: 2026-10-19
#

import sys


class ZBuffer:
    """Per-pixel depth store. A larger value is closer under the camera convention."""
    __slots__ = ('w', 'h', 'data')

    # lowest finite float: "nothing drawn yet"
    EMPTY = -sys.float_info.max

    def __init__(self, w: int, h: int):
        self.w, self.h = w, h
        self.data = [self.EMPTY] * (w * h)

    def clear(self):
        self.data = [self.EMPTY] * (self.w * self.h)

    def get(self, x: int, y: int) -> float:
        if x < 0 or x >= self.w or y < 0 or y >= self.h:
            return self.EMPTY
        return self.data[y * self.w + x]

    def test_and_set(self, x: int, y: int, z: float) -> bool:
        if x < 0 or x >= self.w or y < 0 or y >= self.h:
            return False

        i = y * self.w + x
        if z > self.data[i]:
            self.data[i] = z
            return True
        return False
