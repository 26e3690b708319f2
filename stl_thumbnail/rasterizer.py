#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/rasterizer.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.11
# LOG_REF: 2026-10-19
#

import logging
import math
import time

from .aabb import AABB
from .color import RGBA
from .config import RenderOptions
from .font import text_width
from .math_utils import Vec3, Mat4
from .picture import Picture
from .projection import view_projection, scale_for_unitsize
from .zbuffer import ZBuffer

logger = logging.getLogger(__name__)

SPECULAR_EXPONENT = 16
SPECULAR_STRENGTH = 0.7

# grid pitch in model units (millimetres for most STL files)
GRID_PITCH = 10.0
GRID_MAX_LINES = 50
GRID_LINE_WIDTH = 1.0

SIZE_HINT_MARGIN = 3
SIZE_HINT_TEXT_RATIO = 16
SIZE_HINT_BANNER = RGBA(0x33, 0x33, 0x33, 0xFF)
SIZE_HINT_TEXT = RGBA(0xFF, 0xFF, 0xFF, 0xFF)


def edge_fn(ax, ay, bx, by, cx, cy) -> float:
    return (cx - ax) * (by - ay) - (cy - ay) * (bx - ax)


def to_screen(ndc: float, size: int) -> int:
    """Map a normalized device coordinate to a pixel index clamped to [0, size]."""
    s = (ndc + 1.0) / 2.0 * size
    if not s > 0.0:   # negative or NaN
        return 0
    if s >= size:
        return size
    return int(s)


class RasterBackend:
    """
    Orthographic software rasterizer.

    fit_mesh_scale(mesh) computes the bounding box and the scale that fills
    the canvas; render(mesh, scale, aabb) draws one frame into a new Picture.

    Depth convention: a larger interpolated depth wins the depth test. Together
    with the backface test against view_pos the model is seen from the side
    opposite to view_pos.
    """

    def __init__(self, width: int, height: int, render_options: RenderOptions = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid canvas size {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.aspect_ratio = self.width / self.height
        self.render_options = render_options if render_options is not None else RenderOptions()

    def view_projection(self, zoom: float) -> Mat4:
        return view_projection(self.render_options.view_pos, self.aspect_ratio, zoom)

    def fit_mesh_scale(self, mesh):
        """Return (aabb, scale) so that the mesh fills the entire canvas at zoom 1."""
        aabb = AABB.from_triangles(mesh)
        scale = scale_for_unitsize(self.view_projection(1.0), aabb)
        logger.debug("Fitted %s with scale %.4f", aabb, scale)
        return aabb, scale

    def render(self, mesh, model_scale: float, aabb: AABB = None, timeout: float = None) -> Picture:
        """
        Render the mesh into a new picture.

        timeout is in seconds; once exceeded, no further triangles are drawn
        and the partial picture is returned. None or 0 disables it.
        """
        opts = self.render_options
        start = time.perf_counter()

        pic = Picture(self.width, self.height)
        zbuf = ZBuffer(self.width, self.height)
        if aabb is None:
            aabb = AABB.from_triangles(mesh)

        pic.fill(RGBA.from_floats(*opts.background_color))

        vp = self.view_projection(opts.zoom)

        # center the model on the origin, then scale it to the canvas
        c = aabb.center()
        model = Mat4.scale(model_scale, model_scale, model_scale) @ Mat4.translation(-c.x, -c.y, -c.z)
        mvp = vp @ model

        # let the box match the transformed model
        bounds = AABB(aabb.lower, aabb.upper)
        bounds.apply_transform(model)

        # eye normal pointing towards the camera in world space
        eye_normal = opts.view_pos.normalize()

        if opts.grid_visible:
            self._draw_grid(pic, vp, bounds.lower.z, model_scale)
            self._draw_grid(pic, vp @ Mat4.rotation_z(math.pi / 2.0), bounds.lower.z, model_scale)

        consumed = 0
        for t in mesh:
            if timeout and time.perf_counter() - start > timeout:
                logger.warning("Render timed out after %d triangles", consumed)
                break
            consumed += 1
            self._draw_triangle(pic, zbuf, t, mvp, model, eye_normal)

        if opts.draw_size_hint and consumed:
            self._draw_size_hint(pic, aabb)

        logger.debug("Rendered %d triangles in %.1fms", consumed, (time.perf_counter() - start) * 1000)
        return pic

    # ── Triangles ───────────────────────────────────────────────────────

    def _draw_triangle(self, pic: Picture, zbuf: ZBuffer, t, mvp: Mat4, model: Mat4, eye_normal: Vec3):
        opts = self.render_options
        normal = -t.normal

        # backface culling
        if eye_normal.dot(normal) < 0.0:
            return

        v0, v1, v2 = (mvp.mul_vec3(v) for v in t.vertices)
        v0m, v1m, v2m = (model.mul_vec3(v) for v in t.vertices)

        # The inside test only accepts one winding, whose area is negative.
        # Degenerate and NaN triangles are dropped here as well.
        area = edge_fn(v0.x, v0.y, v1.x, v1.y, v2.x, v2.y)
        if not area < 0.0:
            return

        W, H = pic.width, pic.height

        # triangle bounding box in screen space
        smin_x = to_screen(min(v0.x, v1.x, v2.x), W)
        smin_y = to_screen(min(v0.y, v1.y, v2.y), H)
        smax_x = min(W - 1, to_screen(max(v0.x, v1.x, v2.x), W))
        smax_y = min(H - 1, to_screen(max(v0.y, v1.y, v2.y), H))

        light_pos = opts.light_pos
        view_pos = opts.view_pos
        light_color = Vec3.of(opts.light_color)
        ambient = Vec3.of(opts.ambient_color)
        model_color = Vec3.of(opts.model_color)

        for y in range(smin_y, smax_y + 1):
            # normalized screen coordinates [-1, 1]
            ny = 2.0 * (y / H - 0.5)
            for x in range(smin_x, smax_x + 1):
                nx = 2.0 * (x / W - 0.5)

                e01 = edge_fn(nx, ny, v0.x, v0.y, v1.x, v1.y)
                e12 = edge_fn(nx, ny, v1.x, v1.y, v2.x, v2.y)
                e20 = edge_fn(nx, ny, v2.x, v2.y, v0.x, v0.y)
                if e01 > 0.0 or e12 > 0.0 or e20 > 0.0:
                    continue

                # barycentric coordinates
                w0 = e12 / area
                w1 = e20 / area
                w2 = e01 / area

                depth = w0 * v0.z + w1 * v1.z + w2 * v2.z
                if not zbuf.test_and_set(x, y, depth):
                    continue

                # fragment position in world space
                fp = Vec3(
                    w0 * v0m.x + w1 * v1m.x + w2 * v2m.x,
                    w0 * v0m.y + w1 * v1m.y + w2 * v2m.y,
                    w0 * v0m.z + w1 * v1m.z + w2 * v2m.z,
                )

                light_normal = (light_pos - fp).normalize()
                view_normal = (view_pos - fp).normalize()
                reflect_dir = (-light_normal).reflect(normal)

                diffuse = max(0.0, normal.dot(light_normal))
                specular = view_normal.dot(reflect_dir) ** SPECULAR_EXPONENT * SPECULAR_STRENGTH

                color = (ambient + light_color * diffuse + light_color * specular).mul_components(model_color)
                pic.set(x, y, RGBA.from_floats(color.x, color.y, color.z, 1.0))

    # ── Decorations ─────────────────────────────────────────────────────

    def _draw_grid(self, pic: Picture, vp: Mat4, z: float, model_scale: float):
        """Lines parallel to the Y axis on the plane at height z."""
        spacing = GRID_PITCH * model_scale
        if not (spacing > 0.0 and math.isfinite(spacing) and math.isfinite(z)):
            return
        while 1.0 / spacing > GRID_MAX_LINES:
            spacing *= 10.0

        opts = self.render_options
        grid_color = RGBA.from_floats(*opts.grid_color, 1.0)
        W, H = pic.width, pic.height
        n = int(1.0 / spacing)

        for i in range(-n, n + 1):
            # to screen space
            sp0 = vp.mul_vec3(Vec3(i * spacing, 1.0, z))
            sp1 = vp.mul_vec3(Vec3(i * spacing, -1.0, z))
            x0, y0 = (sp0.x + 1.0) / 2.0 * W, (sp0.y + 1.0) / 2.0 * H
            x1, y1 = (sp1.x + 1.0) / 2.0 * W, (sp1.y + 1.0) / 2.0 * H

            if opts.grid_antialiased:
                pic.thick_line(x0, y0, x1, y1, GRID_LINE_WIDTH, grid_color)
            elif all(math.isfinite(v) for v in (x0, y0, x1, y1)):
                pic.line(int(x0), int(y0), int(x1), int(y1), grid_color)

    def _draw_size_hint(self, pic: Picture, aabb: AABB):
        text_size = pic.height // SIZE_HINT_TEXT_RATIO
        if text_size < 1:
            return

        size = aabb.size()
        text = "x".join(str(_truncate(v)) for v in size) + self.render_options.size_hint_unit

        top = pic.height - (text_size + SIZE_HINT_MARGIN * 2)
        pic.fill_rect(0, top, pic.width, pic.height, SIZE_HINT_BANNER)

        left = max(float(SIZE_HINT_MARGIN), (pic.width - text_width(text, text_size)) / 2.0)
        pic.stroke_string(left, pic.height - SIZE_HINT_MARGIN, text, text_size, SIZE_HINT_TEXT)


def _truncate(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return int(value)
