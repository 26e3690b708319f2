#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/mesh.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.3
# LOG_REF: 2026-10-19
#

from .math_utils import Vec3


class Triangle:
    """Three ordered vertices (the order defines the winding) plus a normal."""
    __slots__ = ('vertices', 'normal')

    def __init__(self, vertices, normal):
        v0, v1, v2 = vertices
        self.vertices = (Vec3.of(v0), Vec3.of(v1), Vec3.of(v2))
        self.normal = Vec3.of(normal)

    def __repr__(self):
        return f"Triangle({list(self.vertices)}, normal={self.normal})"

    def __eq__(self, other):
        if isinstance(other, Triangle):
            return self.vertices == other.vertices and self.normal == other.normal
        return NotImplemented

    __hash__ = None

    def face_normal(self) -> Vec3:
        """Normal from the vertices using the right hand rule."""
        v0, v1, v2 = self.vertices
        return (v1 - v0).cross(v2 - v0).normalize()


class Mesh:
    """Materialized triangle sequence; insertion order is render order."""

    def __init__(self, triangles=None):
        self.triangles = list(triangles) if triangles is not None else []

    def __len__(self):
        return len(self.triangles)

    def __getitem__(self, index):
        return self.triangles[index]

    def __iter__(self):
        return iter(self.triangles)

    def append(self, triangle: Triangle):
        self.triangles.append(triangle)


class StreamingMesh:
    """
    Lazy triangle sequence backed by a single parser.

    Every iteration rewinds the underlying stream and pulls triangles one at
    a time, so only one triangle is held in memory. The parser has a single
    cursor: starting a new iteration invalidates any iteration still in
    progress.
    """

    def __init__(self, parser):
        self.parser = parser

    def __iter__(self):
        return self.parser.iter_triangles()

    def count(self) -> int:
        return self.parser.count()

    def close(self):
        self.parser.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
