#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/__init__.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 1
# LOG_REF: 2026-10-19
#

from .math_utils import Vec3, Mat4
from .color import RGBA, parse_hex_color, over
from .mesh import Triangle, Mesh, StreamingMesh
from .parser import Parser, StlFormat, StlError
from .aabb import AABB
from .zbuffer import ZBuffer
from .picture import Picture
from .config import RenderOptions
from .rasterizer import RasterBackend
from .app import Settings, run
