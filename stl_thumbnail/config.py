#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/config.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.10
# LOG_REF: 2026-10-19
#

import math
from dataclasses import dataclass, field

from .math_utils import Vec3

# Default camera elevation above the ground plane for thumbnails
DEFAULT_ELEVATION = 25.0
DEFAULT_ZOOM = 1.05


@dataclass
class RenderOptions:
    """Camera, lighting and decoration settings for one render call.

    Colors are float tuples in [0, 1]; only the background has alpha.
    """
    view_pos: Vec3 = field(default_factory=lambda: Vec3(-1.0, 1.0, -1.0).normalize())
    light_pos: Vec3 = field(default_factory=lambda: Vec3(-1.0, 1.0, -1.5) * 5.0)
    light_color: tuple = (0.7, 0.7, 0.7)
    ambient_color: tuple = (0.4, 0.4, 0.4)
    model_color: tuple = (0.0, 0.45, 1.0)
    grid_color: tuple = (0.0, 0.0, 0.0)
    background_color: tuple = (1.0, 1.0, 1.0, 1.0)
    zoom: float = 1.0
    grid_visible: bool = True
    grid_antialiased: bool = True
    draw_size_hint: bool = False
    size_hint_unit: str = ""

    def __post_init__(self):
        self.view_pos = Vec3.of(self.view_pos)
        self.light_pos = Vec3.of(self.light_pos)

    def set_orbit(self, azimuth_deg: float, elevation_deg: float = DEFAULT_ELEVATION):
        """Place the eye on a turntable orbit around the Z axis."""
        azimuth = math.radians(azimuth_deg)
        elevation = math.radians(elevation_deg)
        self.view_pos = Vec3(math.cos(azimuth), math.sin(azimuth), -math.tan(elevation))

    @classmethod
    def for_thumbnail(cls, elevation_deg: float = DEFAULT_ELEVATION, size_hint: bool = False) -> 'RenderOptions':
        """Defaults used for still thumbnails."""
        elevation = math.radians(elevation_deg)
        return cls(
            view_pos=Vec3(1.0, 1.0, -math.tan(elevation)),
            zoom=DEFAULT_ZOOM,
            draw_size_hint=size_hint,
        )
