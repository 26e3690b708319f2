#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/app.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.14
# LOG_REF: 2026-10-19
#

import logging
from dataclasses import dataclass

from .config import RenderOptions, DEFAULT_ELEVATION
from .encoder import encode_gif, save_png
from .mesh import StreamingMesh
from .parser import Parser
from .rasterizer import RasterBackend

logger = logging.getLogger(__name__)

TURNTABLE_FRAMES = 45
TURNTABLE_STEP = 8.0  # degrees between frames


@dataclass
class Settings:
    """What to produce from one input file."""
    verbose: bool = False
    lazy: bool = False
    recalculate_normals: bool = False
    turntable: bool = False
    size_hint: bool = False
    timeout: float = None  # seconds per frame, None disables


def create_still(width, height, mesh, elevation_deg, path, settings: Settings):
    backend = RasterBackend(width, height,
                            RenderOptions.for_thumbnail(elevation_deg, settings.size_hint))
    aabb, scale = backend.fit_mesh_scale(mesh)
    pic = backend.render(mesh, scale, aabb, timeout=settings.timeout)
    save_png(pic, path)
    return pic


def create_turntable_animation(width, height, mesh, elevation_deg, path, settings: Settings):
    backend = RasterBackend(width, height,
                            RenderOptions.for_thumbnail(elevation_deg, settings.size_hint))

    # fit once from the still-image direction so the model keeps its size
    aabb, scale = backend.fit_mesh_scale(mesh)

    pictures = []
    for i in range(TURNTABLE_FRAMES):
        backend.render_options.set_orbit(i * TURNTABLE_STEP, elevation_deg)
        pictures.append(backend.render(mesh, scale, aabb, timeout=settings.timeout))
        logger.debug("Rendered turntable frame %d/%d", i + 1, TURNTABLE_FRAMES)

    encode_gif(path, pictures)
    return pictures


def create(width, height, mesh, elevation_deg, path, settings: Settings):
    if settings.turntable:
        return create_turntable_animation(width, height, mesh, elevation_deg, path, settings)
    return create_still(width, height, mesh, elevation_deg, path, settings)


def run(input_path, output_path, width: int = 256, height: int = 256,
        settings: Settings = None, elevation_deg: float = DEFAULT_ELEVATION):
    """Parse input_path and write a PNG (or GIF in turntable mode) to output_path."""
    if settings is None:
        settings = Settings()

    logger.debug("Size                  '%dx%d'", width, height)
    logger.debug("Input                 '%s'", input_path)
    logger.debug("Output                '%s'", output_path)
    logger.debug("Recalculate normals   '%s'", settings.recalculate_normals)
    logger.debug("Low memory usage mode '%s'", settings.lazy)
    logger.debug("Draw dimensions       '%s'", settings.size_hint)

    with Parser.from_file(input_path, settings.recalculate_normals) as parser:
        if settings.lazy:
            mesh = StreamingMesh(parser)
        else:
            mesh = parser.read_all()
        return create(width, height, mesh, elevation_deg, output_path, settings)
