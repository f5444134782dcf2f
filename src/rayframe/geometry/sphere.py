"""Unit sphere primitive and closed-form ray-sphere intersection.

In its body frame every sphere is the unit sphere ``x^2 + y^2 + z^2 = 1``.
Position and radius come from the node's transform list (translate, scale),
so the solver only ever deals with one canonical shape.

Substituting the ray ``r0 + t*v`` into the sphere equation gives

    (v.v) t^2 + 2(r0.v) t + (r0.r0 - 1) = 0

with

    a = v.v
    b = 2 (r0.v)
    c = r0.r0 - 1

The direction is not required to be unit length; ``a`` absorbs its squared
length, which keeps ``t`` meaningful after non-rigid transforms.

Example:
    >>> from rayframe.core.ray import make_ray
    >>> ray_sphere(make_ray((0.0, 0.0, -2.0), (0.0, 0.0, 1.0)))
    1.0
    >>> ray_sphere(make_ray((2.0, 2.0, -2.0), (0.0, 0.0, 1.0))) is None
    True
"""

from __future__ import annotations

import math

from rayframe.core.ray import Ray
from rayframe.core.vector import dot
from rayframe.errors import DegenerateRayError
from rayframe.scene.node import Render


def ray_sphere(ray: Ray) -> float | None:
    """Intersect a ray with the unit sphere centered at the origin.

    Root selection discards roots behind the ray origin and returns the
    smallest non-negative one:

    - both roots negative: the sphere is entirely behind the origin, miss
    - one root negative: return the other
    - both non-negative: return the smaller

    A ray starting inside the sphere therefore reports its exit point.

    Args:
        ray: The ray in the sphere's body frame.

    Returns:
        The nearest non-negative ray parameter, or None on a miss.

    Raises:
        DegenerateRayError: If the ray direction has zero or non-finite length.
    """
    r0 = ray.origin
    v = ray.direction

    a = dot(v, v)
    if not math.isfinite(a) or a == 0.0:
        raise DegenerateRayError(f"Ray direction {v!r} has zero or non-finite length")
    b = 2.0 * dot(r0, v)
    c = dot(r0, r0) - 1.0

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    tp = (-b + sqrt_d) / (2.0 * a)
    tm = (-b - sqrt_d) / (2.0 * a)

    if tp < 0.0 and tm < 0.0:
        return None
    if tp < 0.0:
        return tm
    if tm < 0.0:
        return tp
    return min(tp, tm)


class Sphere(Render):
    """A unit sphere in its body frame, placed by its transform list.

    Example:
        >>> sphere = Sphere(name="ball")
        >>> sphere.translate(0.0, 0.0, 5.0).uniform_scale(2.0)
        <Sphere 'ball' transforms=2>
        >>> sphere.prepare_render()
    """

    def intersect_local(self, ray: Ray) -> float | None:
        return ray_sphere(ray)
