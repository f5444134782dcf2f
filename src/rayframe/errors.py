"""Exception types raised by the intersection engine.

A ray that misses is never an error: intersection queries return ``None``.
These exceptions cover violated preconditions that would otherwise surface
as NaN or infinite values deep inside a render.
"""


class RayframeError(Exception):
    """Base class for all rayframe errors."""


class SingularMatrixError(RayframeError, ValueError):
    """Raised when inverting a matrix whose determinant is exactly zero.

    This typically means a transform list contains a zero scale factor, which
    collapses the body frame and has no inverse.
    """


class DegenerateRayError(RayframeError, ValueError):
    """Raised when a ray with a zero-length direction is intersected."""


class NotPreparedError(RayframeError, RuntimeError):
    """Raised when a node's frame cache is read before ``prepare_render()``."""
