"""Camera module for primary ray generation.

Components:
    orthographic: Parallel-projection camera generating one ray per pixel

Cameras produce rays in the scene's reference frame; the scene root carries
them into its own body frame when intersecting.
"""

from rayframe.camera.orthographic import OrthographicCamera

__all__ = [
    "OrthographicCamera",
]
