"""Affine-frame ray intersection engine.

This package intersects rays with geometry placed in a shared reference frame
by chains of affine transforms (translate, scale, rotate). Each scene node
keeps its own transform list and caches the reference-from-body and
body-from-reference matrices, so intersection always happens against the
primitive's canonical definition in its own frame.

Subpackages:
    core: Vector algebra, affine matrices, transform lists, depth renderer
    geometry: Primitive nodes and intersection solvers (unit sphere)
    scene: Render node base class, unions, and scene configuration
    camera: Orthographic ray grid generation
    preview: Depth buffer export (PGM/PNG)

Example:
    >>> from rayframe.core import Direction, Position, Ray
    >>> from rayframe.geometry import Sphere
    >>> from rayframe.scene import Union
    >>> scene = Union()
    >>> scene.add(Sphere()).translate(0.0, 0.0, 3.0)
    <Sphere transforms=1>
    >>> scene.prepare_render()
    >>> scene.intersect(Ray(Position(0, 0, -2), Direction(0, 0, 1)))
    4.0
"""

__version__ = "0.1.0"
