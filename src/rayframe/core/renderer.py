"""Depth renderer: one intersection query per pixel.

The renderer drives a prepared scene with a camera and records, for each
pixel, the ray parameter of the nearest hit. Misses are stored as NaN so
that a hit at ``t = 0`` stays distinguishable from background.

Rendering is sequential. Intersection queries are read-only, so callers who
want parallelism can split ``camera.iter_rays()`` themselves.

Example:
    >>> from rayframe.camera.orthographic import OrthographicCamera
    >>> from rayframe.geometry.sphere import Sphere
    >>> renderer = DepthRenderer(Sphere(), OrthographicCamera(64, 36))
    >>> depth = renderer.render()
    >>> depth.shape
    (36, 64)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import numpy as np
import numpy.typing as npt

from rayframe.camera.orthographic import OrthographicCamera
from rayframe.scene.node import Render

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class DepthRenderer:
    """Renders a per-pixel hit-parameter buffer for a scene.

    Attributes:
        scene: Root node of the scene to render.
        camera: Camera generating one reference-frame ray per pixel.
    """

    def __init__(self, scene: Render, camera: OrthographicCamera) -> None:
        self.scene = scene
        self.camera = camera

    @property
    def width(self) -> int:
        return self.camera.width

    @property
    def height(self) -> int:
        return self.camera.height

    def render(self, callback: ProgressCallback | None = None) -> npt.NDArray[np.float64]:
        """Prepare the scene and intersect every pixel ray.

        ``prepare_render()`` is called once on the root before the pixel
        loop, so transform edits made since the last render are picked up.

        Args:
            callback: Optional callback called after each row with
                (rows_done, total_rows).

        Returns:
            Array of shape (height, width) with the hit parameter per pixel,
            NaN where the ray missed.
        """
        self.scene.prepare_render()

        depth = np.full((self.height, self.width), np.nan, dtype=np.float64)
        start_time = time.perf_counter()

        for row in range(self.height):
            for col in range(self.width):
                t = self.scene.intersect(self.camera.get_ray(col, row))
                if t is not None:
                    depth[row, col] = t
            logger.debug("Rendered row %d/%d", row + 1, self.height)
            if callback is not None:
                callback(row + 1, self.height)

        elapsed = time.perf_counter() - start_time
        logger.info(
            "Rendered %dx%d depth image in %.2fs (%.1f%% coverage)",
            self.width,
            self.height,
            elapsed,
            coverage(depth) * 100.0,
        )
        return depth


def coverage(depth: npt.NDArray[np.float64]) -> float:
    """Fraction of pixels in a depth buffer that hit something."""
    if depth.size == 0:
        return 0.0
    return float(np.count_nonzero(~np.isnan(depth))) / depth.size
