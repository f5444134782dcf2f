"""Ray data structure.

A ray is a half-line starting at a ``Position`` and extending along a
``Direction``. The direction need not be unit length: intersection solvers
account for its squared length, so the ray parameter ``t`` is preserved
when a ray is carried into another frame by an affine transform.

Example:
    >>> from rayframe.core.vector import Direction, Position
    >>> ray = Ray(origin=Position(0.0, 0.0, 0.0), direction=Direction(0.0, 0.0, -1.0))
    >>> ray_at(ray, 5.0)
    Position(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from rayframe.core.vector import Direction, Position


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            normalized, but must not be zero-length when intersected.
    """

    origin: Position
    direction: Direction

    def at(self, t: float) -> Position:
        """Return the point ``origin + t * direction``."""
        return ray_at(self, t)


def ray_at(ray: Ray, t: float) -> Position:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    d = ray.direction
    return ray.origin + Direction(t * d.x, t * d.y, t * d.z)


def make_ray(origin: tuple[float, float, float], direction: tuple[float, float, float]) -> Ray:
    """Create a ray from plain coordinate tuples.

    Args:
        origin: The starting point (x, y, z).
        direction: The direction vector (x, y, z).

    Returns:
        A new Ray instance.
    """
    return Ray(Position.from_iterable(origin), Direction.from_iterable(direction))
