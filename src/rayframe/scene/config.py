"""Scene configuration: build node trees from plain dicts and JSON files.

A scene description is a nested dict, one per node:

    {
        "type": "union",
        "name": "pair",
        "transforms": [{"op": "translate", "offset": [0.0, 0.0, 5.0]}],
        "children": [
            {"type": "sphere", "transforms": [{"op": "translate", "offset": [-2, 0, 0]}]},
            {"type": "sphere", "transforms": [{"op": "uniform_scale", "factor": 0.5}]}
        ]
    }

Supported ops, listed in the same order as the node's transform list:

    translate       offset: [x, y, z]
    scale           factors: [x, y, z]
    uniform_scale   factor: s
    rotate_x/y/z    angle: radians, or degrees: degrees

Example:
    >>> config = SceneConfig(root={"type": "sphere"})
    >>> scene = scene_from_config(config)
    >>> scene.prepare_render()
"""

from __future__ import annotations

import json
import math
import numbers
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

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
from rayframe.core.vector import Direction
from rayframe.geometry.sphere import Sphere
from rayframe.scene.node import Render
from rayframe.scene.union import Union

_ROTATIONS: dict[str, type[RotateX] | type[RotateY] | type[RotateZ]] = {
    "rotate_x": RotateX,
    "rotate_y": RotateY,
    "rotate_z": RotateZ,
}


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        root: The root node description.
        version: Format version, for forward compatibility.
    """

    root: dict[str, Any] = field(default_factory=lambda: {"type": "union"})
    version: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"version": self.version, "root": self.root}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        """Accept either a wrapped ``{"version", "root"}`` dict or a bare node.

        Raises:
            ValueError: If ``data`` is not a dict.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Scene config must be a dict, got {type(data).__name__}")
        if "root" in data:
            return cls(root=data["root"], version=data.get("version", 1))
        return cls(root=data)


def _vector(op_config: dict[str, Any], key: str) -> Direction:
    values = op_config.get(key)
    if values is None:
        raise ValueError(f"Transform op {op_config.get('op')!r} requires {key!r}")
    try:
        return Direction.from_iterable(values)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"Invalid {key!r} for transform op {op_config.get('op')!r}: {values!r}"
        ) from e


def op_from_config(op_config: dict[str, Any]) -> TransformOp:
    """Build one transform op from its dict description.

    Raises:
        ValueError: If the op name is unknown or a parameter is missing or
            malformed.
    """
    if not isinstance(op_config, dict):
        raise ValueError(f"Transform op must be a dict, got {op_config!r}")
    op_name = str(op_config.get("op", "")).lower()

    if op_name == "translate":
        return Translate(_vector(op_config, "offset"))
    if op_name == "scale":
        return Scale(_vector(op_config, "factors"))
    if op_name == "uniform_scale":
        if "factor" not in op_config:
            raise ValueError("Transform op 'uniform_scale' requires 'factor'")
        return UniformScale(op_config["factor"])
    if op_name in _ROTATIONS:
        if "angle" in op_config:
            angle = op_config["angle"]
        elif "degrees" in op_config:
            degrees = op_config["degrees"]
            if isinstance(degrees, bool) or not isinstance(degrees, numbers.Real):
                raise ValueError(
                    f"Transform op {op_name!r} has non-numeric degrees: {degrees!r}"
                )
            angle = math.radians(degrees)
        else:
            raise ValueError(f"Transform op {op_name!r} requires 'angle' or 'degrees'")
        return _ROTATIONS[op_name](angle)

    raise ValueError(f"Unknown transform op: {op_name!r}")


def op_to_config(op: TransformOp) -> dict[str, Any]:
    """Describe one transform op as a dict."""
    if isinstance(op, Translate):
        return {"op": "translate", "offset": list(op.offset)}
    if isinstance(op, Scale):
        return {"op": "scale", "factors": list(op.factors)}
    if isinstance(op, UniformScale):
        return {"op": "uniform_scale", "factor": op.factor}
    for op_name, op_type in _ROTATIONS.items():
        if isinstance(op, op_type):
            return {"op": op_name, "angle": op.angle}
    raise ValueError(f"Cannot serialize transform op {op!r}")


def _list_field(node_config: dict[str, Any], key: str) -> list[Any]:
    values = node_config.get(key, [])
    if not isinstance(values, list):
        raise ValueError(f"Node field {key!r} must be a list, got {values!r}")
    return values


def _node_from_dict(node_config: dict[str, Any]) -> Render:
    if not isinstance(node_config, dict):
        raise ValueError(f"Scene node must be a dict, got {node_config!r}")
    node_type = str(node_config.get("type", "")).lower()
    transforms = TransformList(
        op_from_config(op_config) for op_config in _list_field(node_config, "transforms")
    )
    name = node_config.get("name")

    if node_type == "sphere":
        if node_config.get("children"):
            raise ValueError("A sphere node cannot have children")
        return Sphere(transforms=transforms, name=name)
    if node_type == "union":
        children = [_node_from_dict(child) for child in _list_field(node_config, "children")]
        return Union(children, transforms=transforms, name=name)

    raise ValueError(f"Unknown node type: {node_type!r}")


def scene_from_config(config: SceneConfig | dict[str, Any]) -> Render:
    """Build a node tree from a configuration.

    The returned tree is not prepared; call ``prepare_render()`` on it
    before intersecting.

    Args:
        config: A SceneConfig, or a dict accepted by ``SceneConfig.from_dict``.

    Returns:
        The root node.

    Raises:
        ValueError: If the configuration contains invalid data.
    """
    if not isinstance(config, SceneConfig):
        config = SceneConfig.from_dict(config)
    return _node_from_dict(config.root)


def _node_to_dict(node: Render) -> dict[str, Any]:
    if isinstance(node, Sphere):
        node_config: dict[str, Any] = {"type": "sphere"}
    elif isinstance(node, Union):
        node_config = {"type": "union"}
    else:
        raise ValueError(f"Cannot serialize node type {type(node).__name__}")

    if node.name is not None:
        node_config["name"] = node.name
    node_config["transforms"] = [op_to_config(op) for op in node.transforms]
    if isinstance(node, Union):
        node_config["children"] = [_node_to_dict(child) for child in node.children]
    return node_config


def scene_to_config(root: Render) -> SceneConfig:
    """Export a node tree to a configuration object."""
    return SceneConfig(root=_node_to_dict(root))


def load_scene(path: str | Path) -> Render:
    """Read a JSON scene file and build its node tree."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return scene_from_config(data)


def save_scene(root: Render, path: str | Path) -> None:
    """Write a node tree as a JSON scene file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(scene_to_config(root).to_dict(), f, indent=2)
