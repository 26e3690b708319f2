#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/projection.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.6
# LOG_REF: 2026-10-19
#

from .aabb import AABB
from .math_utils import Vec3, Mat4

ORIGIN = Vec3(0, 0, 0)
UP = Vec3(0, 0, -1)
NEAR = 0.0
FAR = 1.0


def view_projection(view_pos: Vec3, aspect_ratio: float, zoom: float) -> Mat4:
    """Orthographic view-projection looking from view_pos at the origin."""
    half_w = zoom * 0.5 * aspect_ratio
    half_h = zoom * 0.5
    proj = Mat4.ortho(half_w, -half_w, -half_h, half_h, NEAR, FAR)
    view = Mat4.look_at(view_pos, ORIGIN, UP)
    return proj @ view


def scale_for_unitsize(vp: Mat4, aabb: AABB) -> float:
    """
    Uniform scale that makes the larger screen-space extent of the box
    span the whole normalized device range [-1, 1].
    """
    min_x = min_y = float('inf')
    max_x = max_y = -float('inf')

    for corner in aabb.corners():
        p = vp.mul_vec3(corner)
        min_x = min(min_x, p.x)
        min_y = min(min_y, p.y)
        max_x = max(max_x, p.x)
        max_y = max(max_y, p.y)

    extent = max(abs(max_x - min_x), abs(max_y - min_y))
    if not extent > 0.0:
        # empty mesh or a single point, nothing to fit
        return 1.0
    return 1.0 / (extent / 2.0)
