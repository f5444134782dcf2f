"""Positions and directions in 3-space.

Two vector types share the same three components but behave differently
under affine transforms:

- ``Position`` is a point, with an implicit homogeneous w=1. Translation
  moves it.
- ``Direction`` is a free vector, with an implicit w=0. Translation leaves it
  unchanged.

Adding a direction to a position gives a position, and adding two directions
gives a direction. Adding two positions has no affine meaning and raises
``TypeError``.

Example:
    >>> p = Position(1.0, 2.0, 3.0)
    >>> d = Direction(0.0, 0.0, 1.0)
    >>> p + d
    Position(x=1.0, y=2.0, z=4.0)
    >>> dot(p, d)
    3.0
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Union

import numpy as np
import numpy.typing as npt


def _components(values: Iterable[float]) -> tuple[float, float, float]:
    items = [float(v) for v in values]
    if len(items) != 3:
        raise ValueError(f"Expected 3 components, got {len(items)}")
    return items[0], items[1], items[2]


@dataclass(frozen=True)
class _Vector:
    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        # Frozen dataclass, so coerce through object.__setattr__.
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vector) -> float:
        """Dot product, ignoring the implied w component of either vector."""
        return dot(self, other)

    def as_array(self) -> npt.NDArray[np.float64]:
        """Return the components as a float64 array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)


@dataclass(frozen=True)
class Position(_Vector):
    """A point in 3-space that participates in translation.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
    """

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> Position:
        """Build a position from any 3-element iterable."""
        return cls(*_components(values))

    def __add__(self, other: object) -> Position:
        if isinstance(other, Direction):
            return Position(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, Position):
            raise TypeError("Cannot add two positions; add a Direction instead")
        return NotImplemented


@dataclass(frozen=True)
class Direction(_Vector):
    """A free vector in 3-space, invariant under translation.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> Direction:
        """Build a direction from any 3-element iterable."""
        return cls(*_components(values))

    @classmethod
    def zero(cls) -> Direction:
        return cls(0.0, 0.0, 0.0)

    def __add__(self, other: object) -> Direction | Position:
        if isinstance(other, Direction):
            return Direction(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, Position):
            return Position(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __neg__(self) -> Direction:
        return Direction(-self.x, -self.y, -self.z)


Vector = Union[Position, Direction]


def dot(a: Vector, b: Vector) -> float:
    """Compute a.x*b.x + a.y*b.y + a.z*b.z.

    Works for any mix of positions and directions; the implicit homogeneous
    coordinate never contributes.
    """
    return a.x * b.x + a.y * b.y + a.z * b.z
