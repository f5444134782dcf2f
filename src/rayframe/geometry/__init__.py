"""Geometry module for shape primitives.

This module provides primitive scene nodes and their intersection solvers:

Components:
    sphere: Unit sphere node with closed-form ray-sphere intersection

Every primitive is defined once, canonically, in its own body frame. Size,
position and orientation come from the node's transform list, and rays are
carried into the body frame before the solver runs. New primitives subclass
``rayframe.scene.node.Render`` and implement ``intersect_local``.
"""

from rayframe.geometry.sphere import Sphere, ray_sphere

__all__ = [
    "Sphere",
    "ray_sphere",
]
