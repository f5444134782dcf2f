"""Render node base class: transform list, frame cache, and intersection.

Every scene node has a body frame in which its geometry is defined, placed
inside its parent's frame (the reference frame, for the root) by the node's
own ``TransformList``. Two matrices are cached per node:

    m_rb: reference-from-body, the folded transform list
    m_br: body-from-reference, its inverse

A node moves through two states:

    Uninitialized -- prepare_render() --> Prepared

Transforms may be edited in either state, but the cache is only refreshed by
``prepare_render()``; there is no dirty tracking. Intersection reads the
cache and raises ``NotPreparedError`` if it has never been filled.

Intersection never mutates the node, so a prepared tree can be queried
from several threads at once.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING

from rayframe.core.matrix import HMatrix
from rayframe.core.ray import Ray
from rayframe.core.transforms import TransformList
from rayframe.errors import NotPreparedError

if TYPE_CHECKING:
    from rayframe.scene.union import Union

logger = logging.getLogger(__name__)


class Render(ABC):
    """Base class for intersectable scene nodes.

    Subclasses implement ``intersect_local`` against their geometry in the
    body frame. Everything else (transform ownership, caching, moving rays
    between frames) lives here.

    Attributes:
        name: Optional label used in logs and scene configs.
        transforms: The node's own ordered transform ops.
        parent: The Union owning this node, or None for a root.
    """

    def __init__(
        self,
        transforms: TransformList | None = None,
        name: str | None = None,
    ) -> None:
        self.name = name
        self.transforms = transforms if transforms is not None else TransformList()
        self.parent: Union | None = None
        self._m_rb: HMatrix | None = None
        self._m_br: HMatrix | None = None

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<{type(self).__name__}{label} transforms={len(self.transforms)}>"

    # =========================================================================
    # Transforms
    # =========================================================================

    def get_transform_list(self) -> TransformList:
        """Mutable access to this node's ordered transform ops."""
        return self.transforms

    def translate(self, x: float, y: float, z: float) -> Render:
        """Append a translation and return the node for chaining."""
        self.transforms.translate(x, y, z)
        return self

    def scale(self, x: float, y: float, z: float) -> Render:
        self.transforms.scale(x, y, z)
        return self

    def uniform_scale(self, factor: float) -> Render:
        self.transforms.uniform_scale(factor)
        return self

    def rotate_x(self, angle: float) -> Render:
        self.transforms.rotate_x(angle)
        return self

    def rotate_y(self, angle: float) -> Render:
        self.transforms.rotate_y(angle)
        return self

    def rotate_z(self, angle: float) -> Render:
        self.transforms.rotate_z(angle)
        return self

    # =========================================================================
    # Frame cache
    # =========================================================================

    @property
    def is_prepared(self) -> bool:
        return self._m_rb is not None and self._m_br is not None

    @property
    def m_rb(self) -> HMatrix:
        """Reference-from-body transform, valid after ``prepare_render()``."""
        if self._m_rb is None:
            raise NotPreparedError(
                f"{self!r} has not been prepared. Call prepare_render() first."
            )
        return self._m_rb

    @property
    def m_br(self) -> HMatrix:
        """Body-from-reference transform, valid after ``prepare_render()``."""
        if self._m_br is None:
            raise NotPreparedError(
                f"{self!r} has not been prepared. Call prepare_render() first."
            )
        return self._m_br

    def prepare_render(self) -> None:
        """Fold and invert the transform list of this node and every descendant.

        Must be called before the first ``intersect`` and again after any
        transform edit on this node or an ancestor. All matrices in the
        subtree are computed before any cache is written.

        Raises:
            SingularMatrixError: If any folded transform in the subtree is
                not invertible. Every cache in the subtree is left untouched.
        """
        frames: list[tuple[Render, HMatrix, HMatrix]] = []
        for node in self.walk():
            m_rb = node.transforms.fold()
            frames.append((node, m_rb, m_rb.invert()))

        for node, m_rb, m_br in frames:
            node._m_rb = m_rb
            node._m_br = m_br
            logger.debug("Prepared %r with %d transform op(s)", node, len(node.transforms))

    def walk(self) -> Iterator[Render]:
        """Yield this node and every descendant, depth-first."""
        yield self

    # =========================================================================
    # Intersection
    # =========================================================================

    def intersect(self, ray: Ray) -> float | None:
        """Intersect a ray given in this node's parent (reference) frame.

        The ray is carried into the body frame through ``m_br`` and handed to
        ``intersect_local``. Affine maps preserve the ray parameter, so the
        returned ``t`` is valid in the caller's frame as well.

        Args:
            ray: The ray in the reference frame.

        Returns:
            The nearest non-negative ray parameter, or None on a miss.

        Raises:
            NotPreparedError: If ``prepare_render()`` was never called.
        """
        return self.intersect_local(self.m_br.apply_to_ray(ray))

    @abstractmethod
    def intersect_local(self, ray: Ray) -> float | None:
        """Intersect a ray already expressed in this node's body frame."""
