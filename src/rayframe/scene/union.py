"""Union: a composite node grouping child nodes under one transform.

A Union's own transform list places its body frame in the reference frame.
Each child's transform list places the child inside the Union's body frame,
so transforms compose down the tree without any node knowing its ancestors.

Example:
    >>> from rayframe.geometry.sphere import Sphere
    >>> group = Union(name="pair")
    >>> group.add(Sphere()).translate(-2.0, 0.0, 0.0)
    <Sphere transforms=1>
    >>> group.add(Sphere()).translate(2.0, 0.0, 0.0)
    <Sphere transforms=1>
    >>> group.translate(0.0, 0.0, 5.0)
    <Union 'pair' transforms=1>
    >>> group.prepare_render()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from rayframe.core.ray import Ray
from rayframe.core.transforms import TransformList
from rayframe.scene.node import Render

logger = logging.getLogger(__name__)


class Union(Render):
    """A node owning an ordered list of child nodes.

    Children are owned exclusively: a node can belong to at most one Union,
    and a Union cannot contain itself or one of its ancestors.
    """

    def __init__(
        self,
        children: Iterable[Render] = (),
        transforms: TransformList | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(transforms=transforms, name=name)
        self._children: list[Render] = []
        try:
            for child in children:
                self.add(child)
        except ValueError:
            # Release children claimed before the failure.
            for child in self._children:
                child.parent = None
            self._children.clear()
            raise

    @property
    def children(self) -> tuple[Render, ...]:
        """The owned children, in intersection order."""
        return tuple(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def add(self, child: Render) -> Render:
        """Take ownership of ``child`` and append it.

        Args:
            child: The node to add.

        Returns:
            The child, so its transforms can be chained.

        Raises:
            ValueError: If the child already has a parent, or adding it would
                create a cycle.
        """
        if child.parent is not None:
            raise ValueError(f"{child!r} is already owned by {child.parent!r}")

        # Walk up from self; the child must not be self or an ancestor.
        current: Render | None = self
        while current is not None:
            if current is child:
                raise ValueError(f"Adding {child!r} to {self!r} would create a cycle")
            current = current.parent

        child.parent = self
        self._children.append(child)
        return child

    def remove(self, child: Render) -> None:
        """Release ownership of ``child``.

        Raises:
            ValueError: If ``child`` is not owned by this Union.
        """
        if child.parent is not self:
            raise ValueError(f"{child!r} is not a child of {self!r}")
        self._children.remove(child)
        child.parent = None

    def walk(self) -> Iterator[Render]:
        yield self
        for child in self._children:
            yield from child.walk()

    def intersect_local(self, ray: Ray) -> float | None:
        """Return the nearest hit among all children.

        Each child receives the ray in this Union's body frame and maps it
        into its own body frame through its own ``m_br``. On an exact tie
        the earlier child wins. An empty Union never hits.
        """
        result: float | None = None
        for child in self._children:
            t = child.intersect(ray)
            if t is not None and (result is None or t < result):
                result = t
        return result
