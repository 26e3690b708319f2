#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/parser.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.4
# LOG_REF: 2026-10-19
#

import enum
import io
import logging
import os
import struct

from .mesh import Mesh, Triangle

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
COUNT_SIZE = 4
TRIANGLE_SIZE = 50

# normal + 3 vertices as float32, then the 2-byte attribute field
_RECORD = struct.Struct('<12fH')
_COUNT = struct.Struct('<I')


class StlError(Exception):
    """Raised when an STL stream cannot be opened, read or seeked."""


class StlFormat(enum.Enum):
    BINARY = 'binary'
    ASCII = 'ascii'


class Parser:
    """
    Seekable triangle source over a binary or ascii STL stream.

    The format is detected once when the parser is created. The parser owns
    a single cursor: ``rewind`` moves it back to the first triangle and
    ``next_triangle`` pulls one triangle or returns None at the end.

    An ascii line that does not match the expected grammar ends the stream
    without an error, so a corrupt ascii file yields a truncated mesh.
    """

    def __init__(self, stream, recalculate_normals: bool = False, owns_stream: bool = False):
        self._stream = stream
        self._owns_stream = owns_stream
        self._generation = 0
        self._exhausted = False
        self.recalculate_normals = recalculate_normals

        try:
            self.format = self._deduce_format()
            self._first_triangle = self._find_first_triangle()
            self._stream.seek(self._first_triangle)
        except OSError as e:
            raise StlError(f"Could not read STL stream: {e}") from e

        logger.debug("Detected %s STL, first triangle at byte %d",
                     self.format.value, self._first_triangle)

    @classmethod
    def from_file(cls, path, recalculate_normals: bool = False) -> 'Parser':
        """Open an STL file. The parser owns and closes the file handle."""
        try:
            stream = open(path, 'rb')
        except OSError as e:
            raise StlError(f"Could not open '{path}': {e}") from e

        try:
            return cls(stream, recalculate_normals, owns_stream=True)
        except StlError:
            stream.close()
            raise

    @classmethod
    def from_buffer(cls, data, recalculate_normals: bool = False) -> 'Parser':
        """Wrap in-memory STL bytes or an already open seekable binary stream."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            return cls(io.BytesIO(bytes(data)), recalculate_normals, owns_stream=True)
        return cls(data, recalculate_normals)

    # ── Format detection ────────────────────────────────────────────────

    def _deduce_format(self) -> StlFormat:
        # The best way to tell 'ascii' and 'binary' files apart is to check
        # whether the declared triangle count matches the size of the file.
        # Malformed binary files therefore end up classified as ascii.
        self._stream.seek(HEADER_SIZE)
        count_bytes = self._stream.read(COUNT_SIZE)
        filesize = self._stream.seek(0, os.SEEK_END)
        if len(count_bytes) < COUNT_SIZE:
            return StlFormat.ASCII

        (triangles,) = _COUNT.unpack(count_bytes)
        if HEADER_SIZE + COUNT_SIZE + triangles * TRIANGLE_SIZE == filesize:
            return StlFormat.BINARY
        return StlFormat.ASCII

    def _find_first_triangle(self) -> int:
        if self.format is StlFormat.BINARY:
            return HEADER_SIZE + COUNT_SIZE

        self._stream.seek(0)
        self._stream.readline()  # solid ...
        return self._stream.tell()

    # ── Cursor ──────────────────────────────────────────────────────────

    def rewind(self):
        self._exhausted = False
        try:
            self._stream.seek(self._first_triangle)
        except OSError as e:
            raise StlError(f"Could not rewind STL stream: {e}") from e

    def next_triangle(self):
        """Pull the next triangle, or None once the stream is exhausted."""
        if self._exhausted:
            return None

        try:
            if self.format is StlFormat.BINARY:
                record = self._read_binary_triangle()
            else:
                record = self._read_ascii_triangle()
        except OSError as e:
            raise StlError(f"Could not read STL stream: {e}") from e

        if record is None:
            self._exhausted = True
            return None

        vertices, normal = record
        triangle = Triangle(vertices, normal)
        if self.recalculate_normals or triangle.normal.is_zero() or triangle.normal.has_nan():
            triangle.normal = triangle.face_normal()
        return triangle

    def iter_triangles(self):
        """Rewind, then yield triangles until the end of the stream."""
        self._generation += 1
        generation = self._generation
        self.rewind()
        while True:
            if generation != self._generation:
                raise RuntimeError("STL stream was restarted by another consumer")
            triangle = self.next_triangle()
            if triangle is None:
                return
            yield triangle

    def count(self) -> int:
        if self.format is StlFormat.BINARY:
            try:
                position = self._stream.tell()
                self._stream.seek(HEADER_SIZE)
                (triangles,) = _COUNT.unpack(self._stream.read(COUNT_SIZE))
                self._stream.seek(position)
            except OSError as e:
                raise StlError(f"Could not read STL stream: {e}") from e
            return triangles

        # no shortcut for ascii files
        triangles = sum(1 for _ in self.iter_triangles())
        self.rewind()
        return triangles

    def read_all(self) -> Mesh:
        mesh = Mesh(self.iter_triangles())
        logger.debug("Parsed %d triangles", len(mesh))
        return mesh

    # ── Record decoding ─────────────────────────────────────────────────

    def _read_binary_triangle(self):
        data = self._stream.read(TRIANGLE_SIZE)
        if len(data) < TRIANGLE_SIZE:
            return None

        values = _RECORD.unpack(data)  # trailing attribute field is ignored
        normal = values[0:3]
        vertices = (values[3:6], values[6:9], values[9:12])
        return vertices, normal

    def _read_ascii_line(self) -> str:
        line = self._stream.readline()
        return line.decode('utf-8', errors='replace').strip().lower()

    def _read_ascii_triangle(self):
        normal = _scan_floats(self._read_ascii_line(), ('facet', 'normal'))
        if normal is None:
            return None

        self._read_ascii_line()  # outer loop

        vertices = []
        for _ in range(3):
            vertex = _scan_floats(self._read_ascii_line(), ('vertex',))
            if vertex is None:
                return None
            vertices.append(vertex)

        self._read_ascii_line()  # endloop
        self._read_ascii_line()  # endfacet
        return vertices, normal

    # ── Lifetime ────────────────────────────────────────────────────────

    def close(self):
        if self._owns_stream:
            self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def _scan_floats(line: str, keywords):
    """Match '<keywords> f f f' and return the three floats, or None."""
    tokens = line.split()
    n = len(keywords)
    if len(tokens) != n + 3 or tuple(tokens[:n]) != keywords:
        return None
    try:
        return tuple(float(t) for t in tokens[n:])
    except ValueError:
        return None
