import pytest

from stl_thumbnail import ffi
from stl_thumbnail.config import RenderOptions
from stl_thumbnail.parser import Parser
from stl_thumbnail.rasterizer import RasterBackend


def test_render_hands_off_rgba(stl_file):
    before = ffi.outstanding_buffers()
    buf = ffi.render(str(stl_file), ffi.RenderSettings(32, 24))

    assert not buf.is_null
    assert buf.len == 32 * 24 * 4
    assert buf.stride == 32 * 4
    assert buf.depth == 4
    assert ffi.outstanding_buffers() == before + 1

    data = ffi.read_picture_buffer(buf)
    assert len(data) == buf.len
    assert data[3::4] == b"\xff" * (32 * 24)

    ffi.free_picture_buffer(buf)
    assert ffi.outstanding_buffers() == before


def test_double_free_is_rejected(stl_file):
    buf = ffi.render(str(stl_file), ffi.RenderSettings(8, 8))
    ffi.free_picture_buffer(buf)
    with pytest.raises(ValueError):
        ffi.free_picture_buffer(buf)
    with pytest.raises(ValueError):
        ffi.read_picture_buffer(buf)


def test_missing_file_gives_null_buffer(tmp_path):
    before = ffi.outstanding_buffers()
    buf = ffi.render(str(tmp_path / "missing.stl"), ffi.RenderSettings(8, 8))
    assert buf.is_null
    assert buf == ffi.PictureBuffer()
    assert ffi.read_picture_buffer(buf) == b""
    # releasing a null buffer is allowed
    ffi.free_picture_buffer(buf)
    assert ffi.outstanding_buffers() == before


def test_invalid_size_gives_null_buffer(stl_file):
    assert ffi.render(str(stl_file), ffi.RenderSettings(0, 8)).is_null


def test_render_bgra_from_bytes(binary_stl, unit_record):
    data = binary_stl([unit_record])
    buf = ffi.render_bgra_from_bytes(data, 16)
    try:
        assert buf.len == 16 * 16 * 4
        bgra = ffi.read_picture_buffer(buf)
    finally:
        ffi.free_picture_buffer(buf)

    with Parser.from_buffer(data) as parser:
        mesh = parser.read_all()
    backend = RasterBackend(16, 16, RenderOptions.for_thumbnail())
    aabb, scale = backend.fit_mesh_scale(mesh)
    pic = backend.render(mesh, scale, aabb)
    assert bgra == pic.to_bgra()
