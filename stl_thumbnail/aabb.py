#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/aabb.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.5
# LOG_REF: 2026-10-19
#

from .math_utils import Vec3, Mat4


class AABB:
    """
    Axis-aligned bounding box with ``lower`` and ``upper`` corners.

    A box built from an empty triangle sequence is the degenerate box at the
    origin; callers must not rely on it for anything but a safe default.
    """
    __slots__ = ('lower', 'upper')

    def __init__(self, lower: Vec3, upper: Vec3):
        self.lower = lower
        self.upper = upper

    def __repr__(self):
        return f"AABB(lower={self.lower}, upper={self.upper})"

    @classmethod
    def empty(cls) -> 'AABB':
        return cls(Vec3(0, 0, 0), Vec3(0, 0, 0))

    @classmethod
    def from_triangles(cls, triangles) -> 'AABB':
        inf = float('inf')
        lx = ly = lz = inf
        ux = uy = uz = -inf
        seen = False

        for t in triangles:
            seen = True
            for v in t.vertices:
                if v.x < lx: lx = v.x
                if v.y < ly: ly = v.y
                if v.z < lz: lz = v.z
                if v.x > ux: ux = v.x
                if v.y > uy: uy = v.y
                if v.z > uz: uz = v.z

        if not seen:
            return cls.empty()
        return cls(Vec3(lx, ly, lz), Vec3(ux, uy, uz))

    def size(self) -> Vec3:
        return self.upper - self.lower

    def center(self) -> Vec3:
        return self.lower + self.size() * 0.5

    def corners(self):
        lo, up = self.lower, self.upper
        for z in (lo.z, up.z):
            for y in (lo.y, up.y):
                for x in (lo.x, up.x):
                    yield Vec3(x, y, z)

    def apply_transform(self, transform: Mat4):
        """
        Transform the two corner points independently and use the results as
        the new bounds. This is not the exact envelope of the rotated box:
        it is only meant for framing the camera and placing the grid.
        """
        self.lower = transform.mul_vec3(self.lower)
        self.upper = transform.mul_vec3(self.upper)
