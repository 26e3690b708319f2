#
# PROJECT: stl-thumbnail
# MODULE: stl_thumbnail/encoder.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.12
# LOG_REF: 2026-10-19
#

import logging

from PIL import Image

logger = logging.getLogger(__name__)

# per-frame delay of turntable animations
FRAME_DELAY_MS = 60


def to_image(picture) -> Image.Image:
    """Wrap a copy of the picture's RGBA pixels in a Pillow image."""
    return Image.frombytes("RGBA", (picture.width, picture.height), picture.to_bytes())


def save_png(picture, path):
    to_image(picture).save(path, format="PNG")
    logger.debug("Wrote %dx%d PNG to %s", picture.width, picture.height, path)


def encode_gif(path, pictures, delay_ms: int = FRAME_DELAY_MS):
    """Write the pictures as an endlessly looping animated GIF."""
    if not pictures:
        raise ValueError("Cannot encode an animation without frames")

    frames = [to_image(pic) for pic in pictures]
    frames[0].save(
        path,
        format="GIF",
        save_all=True,
        append_images=frames[1:],
        duration=delay_ms,
        loop=0,
        disposal=2,
    )
    logger.debug("Wrote %d frame GIF to %s", len(frames), path)
