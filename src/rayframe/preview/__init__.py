"""Preview module for depth buffer output.

Components:
    export: PGM/PNG greyscale export of depth buffers

Example:
    >>> from rayframe.preview import save_image
    >>> save_image(depth, "out.pgm")
"""

from rayframe.preview.export import (
    DEFAULT_DEPTH_SCALE,
    depth_to_uint8,
    save_image,
    save_pgm,
    save_png,
)

__all__ = [
    "DEFAULT_DEPTH_SCALE",
    "depth_to_uint8",
    "save_pgm",
    "save_png",
    "save_image",
]
