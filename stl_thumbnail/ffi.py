#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/ffi.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.13
# LOG_REF: 2026-10-19
#

"""
Picture hand-off for foreign consumers (desktop thumbnailers, C callers).

render() allocates a fresh buffer and gives up ownership of it: the caller
receives only its address and length, and must release it by calling
free_picture_buffer() exactly once. Buffers are never freed automatically.
"""

import ctypes
import logging
from dataclasses import dataclass

from .config import RenderOptions
from .parser import Parser, StlError
from .rasterizer import RasterBackend

logger = logging.getLogger(__name__)

# the platform icon cache only gets readable captions from this size on
SIZE_HINT_MIN_SIZE = 256

# address -> ctypes array kept alive until free_picture_buffer()
_allocations = {}


@dataclass(frozen=True)
class RenderSettings:
    width: int
    height: int
    size_hint: bool = False
    timeout_ms: int = 0  # 0 disables


@dataclass(frozen=True)
class PictureBuffer:
    data: int = 0  # address of the first byte, 0 on failure
    len: int = 0
    stride: int = 0
    depth: int = 0

    @property
    def is_null(self) -> bool:
        return self.data == 0


def _hand_off(payload: bytes, stride: int, depth: int) -> PictureBuffer:
    array = (ctypes.c_ubyte * len(payload)).from_buffer_copy(payload)
    address = ctypes.addressof(array)
    _allocations[address] = array
    return PictureBuffer(address, len(payload), stride, depth)


def _render_parser(parser, options: RenderOptions, width: int, height: int, timeout_ms: int = 0):
    mesh = parser.read_all()
    backend = RasterBackend(width, height, options)
    aabb, scale = backend.fit_mesh_scale(mesh)
    return backend.render(mesh, scale, aabb, timeout=timeout_ms / 1000.0)


def render(path, settings: RenderSettings) -> PictureBuffer:
    """Render an STL file to RGBA. Free the buffer with free_picture_buffer."""
    options = RenderOptions.for_thumbnail(size_hint=settings.size_hint)
    try:
        with Parser.from_file(path, recalculate_normals=True) as parser:
            pic = _render_parser(parser, options, settings.width, settings.height, settings.timeout_ms)
    except (StlError, ValueError) as e:
        logger.error("Could not render '%s': %s", path, e)
        return PictureBuffer()

    return _hand_off(pic.to_bytes(), pic.stride, pic.depth)


def render_bgra_from_bytes(data, size: int) -> PictureBuffer:
    """
    Render in-memory STL data to a square BGRA bitmap, the layout expected
    by native bitmap APIs. Free the buffer with free_picture_buffer.
    """
    options = RenderOptions.for_thumbnail(size_hint=size >= SIZE_HINT_MIN_SIZE)
    try:
        with Parser.from_buffer(data) as parser:
            pic = _render_parser(parser, options, size, size)
    except (StlError, ValueError) as e:
        logger.error("Could not render thumbnail: %s", e)
        return PictureBuffer()

    return _hand_off(pic.to_bgra(), pic.stride, pic.depth)


def read_picture_buffer(buffer: PictureBuffer) -> bytes:
    """Copy the bytes of a live buffer."""
    if buffer.is_null:
        return b""
    if buffer.data not in _allocations:
        raise ValueError("Picture buffer is not allocated or was already released")
    return ctypes.string_at(buffer.data, buffer.len)


def free_picture_buffer(buffer: PictureBuffer):
    """Release a buffer returned by render(). Releasing a null buffer does nothing."""
    if buffer.is_null:
        return
    if _allocations.pop(buffer.data, None) is None:
        raise ValueError("Picture buffer is not allocated or was already released")


def outstanding_buffers() -> int:
    return len(_allocations)
