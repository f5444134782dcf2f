"""Core module.

This module contains the fundamental building blocks for frame-based
ray intersection:

Components:
    vector: Position (w=1) and Direction (w=0) vectors and the dot product
    ray: Ray data structure
    matrix: Matrix3x3 and the affine HMatrix (linear part + translation)
    transforms: Primitive transform ops and the TransformList compositor
    renderer: Sequential depth renderer driving a scene with a camera

Positions and directions are distinct types: only positions pick up the
translation of an HMatrix.
"""

from rayframe.core.matrix import HMatrix, Matrix3x3
from rayframe.core.ray import Ray, make_ray, ray_at
from rayframe.core.transforms import (
    RotateX,
    RotateY,
    RotateZ,
    Scale,
    TransformList,
    TransformOp,
    Translate,
    UniformScale,
)
from rayframe.core.vector import Direction, Position, dot

# Note: renderer is NOT imported here since it depends on rayframe.scene and
# rayframe.camera, which themselves import from core.
# Import it directly when needed:
#   from rayframe.core.renderer import DepthRenderer

__all__ = [
    "Position",
    "Direction",
    "dot",
    "Ray",
    "ray_at",
    "make_ray",
    "Matrix3x3",
    "HMatrix",
    "TransformOp",
    "Translate",
    "UniformScale",
    "Scale",
    "RotateX",
    "RotateY",
    "RotateZ",
    "TransformList",
]
