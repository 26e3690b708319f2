from stl_thumbnail.aabb import AABB
from stl_thumbnail.math_utils import Vec3, Mat4
from stl_thumbnail.mesh import Mesh, Triangle


def _mesh():
    return Mesh([Triangle([(1, 2, 3), (-1, -2, -3), (2, 3, 4)], (0, 0, 0))])


def test_bounds_of_single_triangle():
    aabb = AABB.from_triangles(_mesh())
    assert aabb.lower == Vec3(-1, -2, -3)
    assert aabb.upper == Vec3(2, 3, 4)


def test_center_and_size():
    aabb = AABB.from_triangles(_mesh())
    assert aabb.center() == Vec3(0.5, 0.5, 0.5)
    assert aabb.size() == Vec3(3, 5, 7)


def test_lower_never_exceeds_upper():
    mesh = Mesh([
        Triangle([(5, -3, 1), (0, 0, 0), (-2, 8, 1)], (0, 0, 1)),
        Triangle([(9, 9, -9), (1, 1, 1), (3, -7, 2)], (0, 0, 1)),
    ])
    aabb = AABB.from_triangles(mesh)
    for lo, up in zip(aabb.lower, aabb.upper):
        assert lo <= up
    assert aabb.lower == Vec3(-2, -7, -9)
    assert aabb.upper == Vec3(9, 9, 2)


def test_empty_sequence_is_degenerate_origin_box():
    aabb = AABB.from_triangles([])
    assert aabb.lower == Vec3(0, 0, 0)
    assert aabb.upper == Vec3(0, 0, 0)


def test_corners():
    corners = list(AABB(Vec3(0, 0, 0), Vec3(1, 2, 3)).corners())
    assert len(corners) == 8
    assert Vec3(1, 2, 3) in corners
    assert Vec3(0, 2, 0) in corners


def test_apply_transform_moves_both_corners():
    aabb = AABB(Vec3(-1, -1, -1), Vec3(1, 1, 1))
    aabb.apply_transform(Mat4.scale(2, 2, 2) @ Mat4.translation(1, 0, 0))
    assert aabb.lower == Vec3(0, -2, -2)
    assert aabb.upper == Vec3(4, 2, 2)
