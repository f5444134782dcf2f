"""Scene module for node trees and scene configuration.

Components:
    node: Render base class (transform list, frame cache, intersection)
    union: Composite node returning the nearest hit among its children
    config: Dict/JSON scene descriptions and tree builders

A scene is a tree of Render nodes. Build it, attach transforms, call
``prepare_render()`` on the root once, then call ``intersect(ray)`` per ray.
"""

from rayframe.scene.node import Render
from rayframe.scene.union import Union

# Note: config is NOT imported here to avoid a circular import with
# rayframe.geometry (primitives subclass Render, and config builds primitives).
# Import it directly when needed:
#   from rayframe.scene.config import scene_from_config

__all__ = [
    "Render",
    "Union",
]
