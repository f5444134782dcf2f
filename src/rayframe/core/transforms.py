"""Primitive transform ops and the transform-list compositor.

Each scene node owns a ``TransformList``: an ordered sequence of primitive
ops (translate, scale, rotate) describing how its body frame sits inside its
parent's frame. Every op converts to exactly one ``HMatrix`` and the list
folds to one net transform.

Ordering convention: later ops are applied closer to the object. For a list
``[op0, op1, ..., opN]`` the net transform is

    op0 @ op1 @ ... @ opN

so a body-frame point is first transformed by ``opN`` and last by ``op0``.
For example ``[RotateZ(pi/2), Translate(1, 0, 0)]`` moves the body origin to
(1, 0, 0) and then rotates it to (0, 1, 0).

Example:
    >>> import math
    >>> from rayframe.core.vector import Position
    >>> transforms = TransformList([RotateZ(math.pi / 2), Translate.by(1.0, 0.0, 0.0)])
    >>> net = transforms.fold()
    >>> p = net.apply_to_position(Position(0.0, 0.0, 0.0))
"""

from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from rayframe.core.matrix import HMatrix, Matrix3x3
from rayframe.core.vector import Direction


def _check_finite(name: str, *values: float) -> None:
    for value in values:
        if not isinstance(value, numbers.Real) or isinstance(value, bool):
            raise ValueError(f"{name} parameter must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ValueError(f"{name} parameter must be finite, got {value}")


class TransformOp(ABC):
    """A single named affine primitive."""

    @abstractmethod
    def to_matrix(self) -> HMatrix:
        """Return the canonical affine matrix for this op."""


@dataclass(frozen=True)
class Translate(TransformOp):
    """Translate by ``offset``: identity linear part, ``t = offset``."""

    offset: Direction

    def __post_init__(self) -> None:
        if not isinstance(self.offset, Direction):
            object.__setattr__(self, "offset", Direction.from_iterable(self.offset))
        _check_finite("Translate", *self.offset)

    @classmethod
    def by(cls, x: float, y: float, z: float) -> Translate:
        return cls(Direction(x, y, z))

    def to_matrix(self) -> HMatrix:
        return HMatrix(Matrix3x3.identity(), self.offset)


@dataclass(frozen=True)
class UniformScale(TransformOp):
    """Scale every axis by the same ``factor``."""

    factor: float

    def __post_init__(self) -> None:
        _check_finite("UniformScale", self.factor)

    def to_matrix(self) -> HMatrix:
        s = self.factor
        return HMatrix(Matrix3x3.diagonal(s, s, s), Direction.zero())


@dataclass(frozen=True)
class Scale(TransformOp):
    """Scale each axis independently by the components of ``factors``."""

    factors: Direction

    def __post_init__(self) -> None:
        if not isinstance(self.factors, Direction):
            object.__setattr__(self, "factors", Direction.from_iterable(self.factors))
        _check_finite("Scale", *self.factors)

    @classmethod
    def by(cls, x: float, y: float, z: float) -> Scale:
        return cls(Direction(x, y, z))

    def to_matrix(self) -> HMatrix:
        f = self.factors
        return HMatrix(Matrix3x3.diagonal(f.x, f.y, f.z), Direction.zero())


@dataclass(frozen=True)
class RotateX(TransformOp):
    """Right-handed rotation about the X axis by ``angle`` radians."""

    angle: float

    def __post_init__(self) -> None:
        _check_finite("RotateX", self.angle)

    def to_matrix(self) -> HMatrix:
        c = math.cos(self.angle)
        s = math.sin(self.angle)
        return HMatrix.from_rows([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


@dataclass(frozen=True)
class RotateY(TransformOp):
    """Right-handed rotation about the Y axis by ``angle`` radians."""

    angle: float

    def __post_init__(self) -> None:
        _check_finite("RotateY", self.angle)

    def to_matrix(self) -> HMatrix:
        c = math.cos(self.angle)
        s = math.sin(self.angle)
        return HMatrix.from_rows([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


@dataclass(frozen=True)
class RotateZ(TransformOp):
    """Right-handed rotation about the Z axis by ``angle`` radians."""

    angle: float

    def __post_init__(self) -> None:
        _check_finite("RotateZ", self.angle)

    def to_matrix(self) -> HMatrix:
        c = math.cos(self.angle)
        s = math.sin(self.angle)
        return HMatrix.from_rows([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


class TransformList:
    """An ordered, mutable sequence of transform ops with an explicit fold.

    The chaining helpers append one op each and return the list itself, so a
    placement reads in the same order as the fold:

        >>> transforms = TransformList().translate(0.0, 0.0, 5.0).uniform_scale(2.0)

    places a radius-2 body five units down +Z (the scale is applied first).
    """

    def __init__(self, ops: Iterable[TransformOp] = ()) -> None:
        self._ops: list[TransformOp] = []
        self.extend(ops)

    def __len__(self) -> int:
        return len(self._ops)

    def __iter__(self) -> Iterator[TransformOp]:
        return iter(self._ops)

    def __getitem__(self, index: int) -> TransformOp:
        return self._ops[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransformList):
            return NotImplemented
        return self._ops == other._ops

    def __repr__(self) -> str:
        return f"TransformList({self._ops!r})"

    def append(self, op: TransformOp) -> None:
        if not isinstance(op, TransformOp):
            raise TypeError(f"Expected a TransformOp, got {type(op).__name__}")
        self._ops.append(op)

    def extend(self, ops: Iterable[TransformOp]) -> None:
        for op in ops:
            self.append(op)

    def insert(self, index: int, op: TransformOp) -> None:
        if not isinstance(op, TransformOp):
            raise TypeError(f"Expected a TransformOp, got {type(op).__name__}")
        self._ops.insert(index, op)

    def clear(self) -> None:
        self._ops.clear()

    # Chaining helpers

    def translate(self, x: float, y: float, z: float) -> TransformList:
        self.append(Translate.by(x, y, z))
        return self

    def scale(self, x: float, y: float, z: float) -> TransformList:
        self.append(Scale.by(x, y, z))
        return self

    def uniform_scale(self, factor: float) -> TransformList:
        self.append(UniformScale(factor))
        return self

    def rotate_x(self, angle: float) -> TransformList:
        self.append(RotateX(angle))
        return self

    def rotate_y(self, angle: float) -> TransformList:
        self.append(RotateY(angle))
        return self

    def rotate_z(self, angle: float) -> TransformList:
        self.append(RotateZ(angle))
        return self

    def fold(self) -> HMatrix:
        """Compose the ops into one net transform.

        Folds right to left, so the last op is innermost (applied to body
        points first). An empty list folds to the identity.

        Returns:
            The net HMatrix mapping body-frame coordinates into the parent
            (reference) frame.
        """
        result = HMatrix.identity()
        for op in reversed(self._ops):
            result = op.to_matrix().compose(result)
        return result
