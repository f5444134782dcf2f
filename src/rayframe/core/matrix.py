"""Affine transforms as a 3x3 linear part plus a translation.

An affine transform in 3-space is usually written as a 4x4 homogeneous
matrix whose bottom row is always (0, 0, 0, 1). This module stores only the
parts that carry information:

    HMatrix = [ M  T ]      p' = M @ p + T    (Position, w=1)
              [ 0  1 ]      d' = M @ d        (Direction, w=0)

The inverse of such a matrix is again affine:

    [ M^-1  -M^-1 @ T ]
    [ 0      1        ]

so inversion only ever needs the 3x3 inverse, computed in closed form with
Cramer's rule.

Example:
    >>> from rayframe.core.vector import Direction, Position
    >>> shift = HMatrix(Matrix3x3.identity(), Direction(1.0, 0.0, 0.0))
    >>> shift.apply_to_position(Position(0.0, 0.0, 0.0))
    Position(x=1.0, y=0.0, z=0.0)
    >>> shift.apply_to_direction(Direction(0.0, 0.0, 1.0))
    Direction(x=0.0, y=0.0, z=1.0)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from rayframe.core.ray import Ray
from rayframe.core.vector import Direction, Position
from rayframe.errors import SingularMatrixError


class Matrix3x3:
    """A 3x3 float64 matrix, the linear part of an affine transform.

    The backing array is copied on construction and marked read-only, so a
    ``Matrix3x3`` can be shared between cached transforms safely.

    Attributes:
        e: The (3, 3) element array, indexed ``e[row, col]``.
    """

    __slots__ = ("e",)

    def __init__(self, elements: npt.ArrayLike) -> None:
        e = np.array(elements, dtype=np.float64)
        if e.shape != (3, 3):
            raise ValueError(f"Matrix3x3 requires a (3, 3) array, got shape {e.shape}")
        e.setflags(write=False)
        self.e = e

    @classmethod
    def identity(cls) -> Matrix3x3:
        return cls(np.eye(3))

    @classmethod
    def diagonal(cls, x: float, y: float, z: float) -> Matrix3x3:
        """Build diag(x, y, z)."""
        return cls(np.diag([x, y, z]))

    def __repr__(self) -> str:
        rows = ", ".join(
            "[" + ", ".join(f"{v:.6g}" for v in row) + "]" for row in self.e
        )
        return f"Matrix3x3([{rows}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix3x3):
            return NotImplemented
        return bool(np.array_equal(self.e, other.e))

    def __hash__(self) -> int:
        return hash(self.e.tobytes())

    def __matmul__(self, other: Matrix3x3) -> Matrix3x3:
        if not isinstance(other, Matrix3x3):
            return NotImplemented
        return self.multiply(other)

    def multiply(self, other: Matrix3x3) -> Matrix3x3:
        """Standard matrix product, ``C[m][p] = sum_n A[m][n] * B[n][p]``."""
        return Matrix3x3(self.e @ other.e)

    def apply_to_position(self, p: Position) -> Position:
        """Linear map of a position (no translation at this level)."""
        x, y, z = self.e @ p.as_array()
        return Position(x, y, z)

    def apply_to_direction(self, d: Direction) -> Direction:
        x, y, z = self.e @ d.as_array()
        return Direction(x, y, z)

    def apply_negated_to_direction(self, d: Direction) -> Direction:
        """Compute ``-(M @ d)``, the translation column of an inverse."""
        x, y, z = -(self.e @ d.as_array())
        return Direction(x, y, z)

    def determinant(self) -> float:
        (a, b, c), (d, e, f), (g, h, i) = self.e.tolist()
        return a * (e * i - f * h) + b * (f * g - d * i) + c * (d * h - e * g)

    def invert(self) -> Matrix3x3:
        """Closed-form inverse via the adjugate (Cramer's rule).

        Returns:
            The inverse matrix.

        Raises:
            SingularMatrixError: If the determinant is exactly zero.
        """
        (a, b, c), (d, e, f), (g, h, i) = self.e.tolist()

        # Cofactors, already laid out transposed (the adjugate).
        c00 = e * i - f * h
        c01 = c * h - b * i
        c02 = b * f - c * e
        c10 = f * g - d * i
        c11 = a * i - c * g
        c12 = c * d - a * f
        c20 = d * h - e * g
        c21 = b * g - a * h
        c22 = a * e - b * d

        det = a * c00 + b * c10 + c * c20
        if det == 0.0:
            raise SingularMatrixError(f"Cannot invert singular matrix {self!r}")

        inv_det = 1.0 / det
        return Matrix3x3(
            [
                [c00 * inv_det, c01 * inv_det, c02 * inv_det],
                [c10 * inv_det, c11 * inv_det, c12 * inv_det],
                [c20 * inv_det, c21 * inv_det, c22 * inv_det],
            ]
        )

    def allclose(self, other: Matrix3x3, atol: float = 1e-9) -> bool:
        return bool(np.allclose(self.e, other.e, rtol=0.0, atol=atol))


@dataclass(frozen=True)
class HMatrix:
    """An affine transform: linear part ``m`` plus translation ``t``.

    Maps positions as ``p -> m @ p + t`` and directions as ``d -> m @ d``.

    Attributes:
        m: The linear part.
        t: The translation, stored as a Direction since it is added to
            positions rather than transformed itself.
    """

    m: Matrix3x3 = field(default_factory=Matrix3x3.identity)
    t: Direction = field(default_factory=Direction.zero)

    @classmethod
    def identity(cls) -> HMatrix:
        return cls(Matrix3x3.identity(), Direction.zero())

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[float]],
        translation: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> HMatrix:
        """Build from a nested 3x3 sequence and an optional translation."""
        return cls(Matrix3x3(rows), Direction.from_iterable(translation))

    def __matmul__(self, other: HMatrix) -> HMatrix:
        if not isinstance(other, HMatrix):
            return NotImplemented
        return self.compose(other)

    def compose(self, other: HMatrix) -> HMatrix:
        """Return the transform that applies ``other`` first, then ``self``.

        ``(A @ B).m = A.m @ B.m`` and ``(A @ B).t = A.m @ B.t + A.t``.
        """
        return HMatrix(
            self.m.multiply(other.m),
            self.m.apply_to_direction(other.t) + self.t,
        )

    def apply_to_position(self, p: Position) -> Position:
        return self.m.apply_to_position(p) + self.t

    def apply_to_direction(self, d: Direction) -> Direction:
        """Linear part only; translation does not affect directions."""
        return self.m.apply_to_direction(d)

    def apply_to_ray(self, ray: Ray) -> Ray:
        """Carry a ray into the frame this transform maps into.

        The ray parameter is preserved: a hit at ``t`` in one frame is the
        same point as a hit at ``t`` in the other.
        """
        return Ray(
            self.apply_to_position(ray.origin),
            self.apply_to_direction(ray.direction),
        )

    def invert(self) -> HMatrix:
        """Return the inverse transform.

        Raises:
            SingularMatrixError: If the linear part is singular.
        """
        m_inv = self.m.invert()
        return HMatrix(m_inv, m_inv.apply_negated_to_direction(self.t))

    def allclose(self, other: HMatrix, atol: float = 1e-9) -> bool:
        """Elementwise comparison of both parts within an absolute tolerance."""
        return self.m.allclose(other.m, atol=atol) and bool(
            np.allclose(self.t.as_array(), other.t.as_array(), rtol=0.0, atol=atol)
        )
