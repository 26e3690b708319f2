import struct

import pytest

from stl_thumbnail.mesh import Mesh, Triangle


# normal, (v0, v1, v2)
UNIT_TRIANGLE = ((0.0, 0.0, 1.0), ((-1.0, -1.0, 0.0), (1.0, -1.0, 0.0), (0.0, 1.0, 0.0)))


def make_binary_stl(records, header=b"binary test"):
    data = header.ljust(80, b"\0")[:80] + struct.pack("<I", len(records))
    for normal, (a, b, c) in records:
        data += struct.pack("<12fH", *normal, *a, *b, *c, 0)
    return data


def make_ascii_stl(records, name="test"):
    lines = [f"solid {name}"]
    for normal, vertices in records:
        lines.append("  facet normal {} {} {}".format(*normal))
        lines.append("    outer loop")
        for v in vertices:
            lines.append("      vertex {} {} {}".format(*v))
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return ("\n".join(lines) + "\n").encode("ascii")


def shifted(record, dz):
    normal, vertices = record
    return normal, tuple((x, y, z + dz) for x, y, z in vertices)


@pytest.fixture
def binary_stl():
    return make_binary_stl


@pytest.fixture
def ascii_stl():
    return make_ascii_stl


@pytest.fixture
def unit_record():
    return UNIT_TRIANGLE


@pytest.fixture
def unit_triangle():
    normal, vertices = UNIT_TRIANGLE
    return Triangle(vertices, normal)


@pytest.fixture
def unit_mesh(unit_triangle):
    return Mesh([unit_triangle])


@pytest.fixture
def stl_file(tmp_path):
    """Write a binary STL holding the unit triangle and return its path."""
    path = tmp_path / "triangle.stl"
    path.write_bytes(make_binary_stl([UNIT_TRIANGLE]))
    return path


@pytest.fixture
def shift():
    return shifted
