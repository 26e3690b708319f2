import pytest

from stl_thumbnail.aabb import AABB
from stl_thumbnail.math_utils import Vec3
from stl_thumbnail.projection import scale_for_unitsize, view_projection


def test_origin_projects_to_canvas_center():
    vp = view_projection(Vec3(-1, 1, -1).normalize(), 1.0, 1.0)
    p = vp.mul_vec3(Vec3(0, 0, 0))
    assert p.x == pytest.approx(0.0, abs=1e-12)
    assert p.y == pytest.approx(0.0, abs=1e-12)


def test_view_along_z_keeps_screen_axes():
    # up is parallel to the view direction, so +Y is used instead
    vp = view_projection(Vec3(0, 0, -1), 1.0, 1.0)
    p = vp.mul_vec3(Vec3(0.25, 0.125, 0.0))
    assert p.x == pytest.approx(0.5)
    assert p.y == pytest.approx(0.25)


def test_larger_zoom_shrinks_the_model():
    near = view_projection(Vec3(0, 0, -1), 1.0, 1.0).mul_vec3(Vec3(0.25, 0, 0))
    far = view_projection(Vec3(0, 0, -1), 1.0, 2.0).mul_vec3(Vec3(0.25, 0, 0))
    assert far.x == pytest.approx(near.x / 2.0)


def test_fit_unit_triangle(unit_mesh):
    vp = view_projection(Vec3(0, 0, -1), 1.0, 1.0)
    assert scale_for_unitsize(vp, AABB.from_triangles(unit_mesh)) == pytest.approx(0.5)


def test_fit_uses_the_larger_extent():
    vp = view_projection(Vec3(0, 0, -1), 1.0, 1.0)
    box = AABB(Vec3(-1, -4, 0), Vec3(1, 4, 0))
    assert scale_for_unitsize(vp, box) == pytest.approx(0.125)


def test_fit_wide_canvas(unit_mesh):
    vp = view_projection(Vec3(0, 0, -1), 2.0, 1.0)
    assert scale_for_unitsize(vp, AABB.from_triangles(unit_mesh)) == pytest.approx(0.5)


def test_fit_empty_box_is_identity():
    vp = view_projection(Vec3(-1, 1, -1).normalize(), 1.0, 1.0)
    assert scale_for_unitsize(vp, AABB.from_triangles([])) == 1.0
