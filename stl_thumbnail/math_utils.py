#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/math_utils.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.1
# LOG_REF: 2026-10-19
#

import math


class Vec3:
    """Immutable 3-component vector."""
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float, y: float, z: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __repr__(self):
        return f"Vec3({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index):
        if index == 0: return self.x
        if index == 1: return self.y
        if index == 2: return self.z
        raise IndexError("Vec3 index out of range")

    def __eq__(self, other):
        if isinstance(other, Vec3):
            return self.x == other.x and self.y == other.y and self.z == other.z
        return NotImplemented

    __hash__ = None

    def __add__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar):
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other) -> 'Vec3':
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def mul_components(self, other) -> 'Vec3':
        return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> 'Vec3':
        m = self.magnitude()
        if m == 0:
            return Vec3(0, 0, 0)
        return self / m

    def reflect(self, normal: 'Vec3') -> 'Vec3':
        """Reflect this direction about a unit normal."""
        return self - normal * (2.0 * self.dot(normal))

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def has_nan(self) -> bool:
        # NaN never compares equal, so it has to be checked explicitly
        return math.isnan(self.x) or math.isnan(self.y) or math.isnan(self.z)

    @classmethod
    def of(cls, values) -> 'Vec3':
        """Build a Vec3 from any 3-element sequence."""
        if isinstance(values, Vec3):
            return values
        x, y, z = values
        return cls(x, y, z)


class Mat4:
    """4x4 Matrix using [row][col] storage.

    Vectors are columns and are multiplied on the right: ``m.mul_vec3(v)``
    computes ``m * (v, 1)``.
    """
    __slots__ = ('m',)

    def __init__(self, data=None):
        if data:
            self.m = [list(row) for row in data]
        else:
            self.m = [[0.0]*4 for _ in range(4)]

    def __repr__(self):
        rows = ", ".join("[" + ", ".join(f"{v:.3f}" for v in row) + "]" for row in self.m)
        return f"Mat4({rows})"

    @classmethod
    def identity(cls) -> 'Mat4':
        res = cls()
        for i in range(4):
            res.m[i][i] = 1.0
        return res

    @classmethod
    def translation(cls, x, y, z) -> 'Mat4':
        mat = cls.identity()
        mat.m[0][3] = x
        mat.m[1][3] = y
        mat.m[2][3] = z
        return mat

    @classmethod
    def scale(cls, sx, sy, sz) -> 'Mat4':
        mat = cls.identity()
        mat.m[0][0] = sx
        mat.m[1][1] = sy
        mat.m[2][2] = sz
        return mat

    @classmethod
    def rotation_z(cls, rad: float) -> 'Mat4':
        mat = cls.identity()
        c = math.cos(rad)
        s = math.sin(rad)
        mat.m[0][0] = c
        mat.m[0][1] = -s
        mat.m[1][0] = s
        mat.m[1][1] = c
        return mat

    @classmethod
    def ortho(cls, left, right, bottom, top, near, far) -> 'Mat4':
        """Right-handed orthographic projection, depth mapped to [-1, 1]."""
        mat = cls.identity()
        mat.m[0][0] = 2.0 / (right - left)
        mat.m[1][1] = 2.0 / (top - bottom)
        mat.m[2][2] = -2.0 / (far - near)
        mat.m[0][3] = -(right + left) / (right - left)
        mat.m[1][3] = -(top + bottom) / (top - bottom)
        mat.m[2][3] = -(far + near) / (far - near)
        return mat

    @classmethod
    def look_at(cls, eye: Vec3, center: Vec3, up: Vec3) -> 'Mat4':
        """Right-handed view matrix looking from eye towards center.

        If up is parallel to the view direction, +Y is used as up instead.
        """
        f = (center - eye).normalize()
        s = f.cross(up).normalize()
        if s.is_zero():
            s = f.cross(Vec3(0, 1, 0)).normalize()
        u = s.cross(f)

        mat = cls.identity()
        mat.m[0][0], mat.m[0][1], mat.m[0][2] = s.x, s.y, s.z
        mat.m[1][0], mat.m[1][1], mat.m[1][2] = u.x, u.y, u.z
        mat.m[2][0], mat.m[2][1], mat.m[2][2] = -f.x, -f.y, -f.z
        mat.m[0][3] = -s.dot(eye)
        mat.m[1][3] = -u.dot(eye)
        mat.m[2][3] = f.dot(eye)
        return mat

    def __matmul__(self, other):
        # Matrix multiplication
        if isinstance(other, Mat4):
            res = Mat4()
            for r in range(4):
                for c in range(4):
                    val = 0.0
                    for k in range(4):
                        val += self.m[r][k] * other.m[k][c]
                    res.m[r][c] = val
            return res
        return NotImplemented

    def mul_vec3(self, v: Vec3) -> Vec3:
        """Multiply with Vec3 as if w=1, return Vec3 (ignoring w result)."""
        x = self.m[0][0]*v.x + self.m[0][1]*v.y + self.m[0][2]*v.z + self.m[0][3]
        y = self.m[1][0]*v.x + self.m[1][1]*v.y + self.m[1][2]*v.z + self.m[1][3]
        z = self.m[2][0]*v.x + self.m[2][1]*v.y + self.m[2][2]*v.z + self.m[2][3]
        return Vec3(x, y, z)
