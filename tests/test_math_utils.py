import math

from stl_thumbnail.math_utils import Vec3, Mat4


def close(a: Vec3, b: Vec3, tol=1e-9) -> bool:
    return all(abs(x - y) < tol for x, y in zip(a, b))


def test_vec3_basic_ops():
    a = Vec3(1, 2, 3)
    b = Vec3(-1, 0, 2)
    assert a + b == Vec3(0, 2, 5)
    assert a - b == Vec3(2, 2, 1)
    assert -a == Vec3(-1, -2, -3)
    assert a * 2 == Vec3(2, 4, 6)
    assert a.dot(b) == 5.0
    assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)


def test_normalize_zero_vector_stays_zero():
    assert Vec3(0, 0, 0).normalize() == Vec3(0, 0, 0)


def test_has_nan():
    assert Vec3(float("nan"), 0, 0).has_nan()
    assert not Vec3(1, 2, 3).has_nan()


def test_reflect():
    # a ray going down bounces back up
    assert close(Vec3(1, -1, 0).reflect(Vec3(0, 1, 0)), Vec3(1, 1, 0))


def test_translation_then_scale():
    m = Mat4.scale(2, 2, 2) @ Mat4.translation(1, 0, -1)
    assert m.mul_vec3(Vec3(0, 0, 0)) == Vec3(2, 0, -2)


def test_rotation_z_quarter_turn():
    p = Mat4.rotation_z(math.pi / 2).mul_vec3(Vec3(1, 0, 0))
    assert close(p, Vec3(0, 1, 0))


def test_ortho_maps_box_to_unit_cube():
    m = Mat4.ortho(-2, 2, -1, 1, 0, 1)
    assert close(m.mul_vec3(Vec3(2, 1, 0)), Vec3(1, 1, -1))
    assert close(m.mul_vec3(Vec3(-2, -1, -1)), Vec3(-1, -1, 1))


def test_look_at_moves_eye_to_origin():
    eye = Vec3(3, 4, 5)
    view = Mat4.look_at(eye, Vec3(0, 0, 0), Vec3(0, 0, -1))
    assert close(view.mul_vec3(eye), Vec3(0, 0, 0))
    # the target lies straight ahead on the negative view axis
    target = view.mul_vec3(Vec3(0, 0, 0))
    assert close(target, Vec3(0, 0, -eye.magnitude()))


def test_look_at_parallel_up_has_no_nan():
    view = Mat4.look_at(Vec3(0, 0, -1), Vec3(0, 0, 0), Vec3(0, 0, -1))
    for row in view.m:
        assert not any(math.isnan(v) for v in row)
