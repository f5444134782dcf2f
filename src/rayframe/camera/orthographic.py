"""Orthographic camera producing a parallel ray grid.

Every pixel gets its own ray origin on a plane of constant z, and all rays
share the direction (0, 0, 1). Pixel (col, row) maps to

    x = (col / width  - 0.5) * view_width
    y = (row / height - 0.5) * view_height
    z = plane_z

The defaults frame the unit sphere at the origin: a 4 x 2.25 view (16:9)
from the plane z = -2, so an untransformed sphere is hit at t = 1 at the
image center.

Example:
    >>> camera = OrthographicCamera(width=16, height=9)
    >>> ray = camera.get_ray(8, 0)
    >>> (ray.origin.x, ray.origin.y, ray.origin.z)
    (0.0, -1.125, -2.0)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from rayframe.core.ray import Ray
from rayframe.core.vector import Direction, Position


@dataclass
class OrthographicCamera:
    """Configuration for an orthographic (parallel projection) camera.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        view_width: Width of the view rectangle in reference-frame units.
        view_height: Height of the view rectangle in reference-frame units.
        plane_z: Z coordinate of the plane holding the ray origins.
    """

    width: int = 1920
    height: int = 1080
    view_width: float = 4.0
    view_height: float = 2.25
    plane_z: float = -2.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image size must be positive, got {self.width}x{self.height}"
            )
        if self.view_width <= 0.0 or self.view_height <= 0.0:
            raise ValueError(
                f"View size must be positive, got {self.view_width}x{self.view_height}"
            )

    @property
    def direction(self) -> Direction:
        return Direction(0.0, 0.0, 1.0)

    def get_ray(self, col: int, row: int) -> Ray:
        """Generate the ray for pixel (col, row).

        Args:
            col: Pixel column, 0 at the left.
            row: Pixel row, 0 at the top of the output image.

        Returns:
            The ray in the reference frame.
        """
        x = (col / self.width - 0.5) * self.view_width
        y = (row / self.height - 0.5) * self.view_height
        return Ray(Position(x, y, self.plane_z), self.direction)

    def iter_rays(self) -> Iterator[tuple[int, int, Ray]]:
        """Yield ``(row, col, ray)`` for every pixel in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield row, col, self.get_ray(col, row)
