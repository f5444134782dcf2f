"""Unit tests for render nodes and the Union composite.

Tests cover:
- Nearest-hit selection among children, independent of order
- Transform propagation from a Union to its children
- Nested unions
- Ownership rules (single parent, no cycles)
- Frame cache lifecycle (prepare, stale cache, re-prepare, failed prepare)
- Constructor rollback and tie-breaking between equal hits
"""

import math

import pytest

from rayframe.core.ray import make_ray


class TestUnionIntersection:
    """Tests for nearest-hit selection."""

    def test_nearest_child_wins(self, sphere_at, forward_ray):
        """Test spheres at z=5 and z=10 give t=4."""
        from rayframe.scene.union import Union

        scene = Union([sphere_at(0.0, 0.0, 10.0), sphere_at(0.0, 0.0, 5.0)])
        scene.prepare_render()
        assert scene.intersect(forward_ray) == pytest.approx(4.0)

    def test_child_order_does_not_matter(self, sphere_at, forward_ray):
        """Test reversing the children gives the same result."""
        from rayframe.scene.union import Union

        scene = Union([sphere_at(0.0, 0.0, 5.0), sphere_at(0.0, 0.0, 10.0)])
        scene.prepare_render()
        assert scene.intersect(forward_ray) == pytest.approx(4.0)

    def test_miss_all_children(self, sphere_at):
        """Test a ray missing every child returns None."""
        from rayframe.scene.union import Union

        scene = Union([sphere_at(0.0, 0.0, 5.0), sphere_at(0.0, 0.0, 10.0)])
        scene.prepare_render()
        assert scene.intersect(make_ray((5.0, 5.0, 0.0), (0.0, 0.0, 1.0))) is None

    def test_only_far_child_hit(self, sphere_at, forward_ray):
        """Test a single hit among misses is returned."""
        from rayframe.scene.union import Union

        scene = Union([sphere_at(3.0, 0.0, 5.0), sphere_at(0.0, 0.0, 10.0)])
        scene.prepare_render()
        assert scene.intersect(forward_ray) == pytest.approx(9.0)

    def test_tie_goes_to_earlier_child(self, forward_ray):
        """Test that on equal t the earlier child is the one reported."""
        from rayframe.scene.node import Render
        from rayframe.scene.union import Union

        class FixedHit(Render):
            def __init__(self, t, name):
                super().__init__(name=name)
                self.t = t

            def intersect_local(self, ray):
                return self.t

        # 0.0 == -0.0, but the sign shows which child won
        scene = Union([FixedHit(0.0, "first"), FixedHit(-0.0, "second")])
        scene.prepare_render()
        assert math.copysign(1.0, scene.intersect(forward_ray)) == 1.0

        scene = Union([FixedHit(-0.0, "first"), FixedHit(0.0, "second")])
        scene.prepare_render()
        assert math.copysign(1.0, scene.intersect(forward_ray)) == -1.0

    def test_empty_union_never_hits(self, forward_ray):
        """Test that a Union with no children returns None."""
        from rayframe.scene.union import Union

        scene = Union()
        scene.prepare_render()
        assert scene.intersect(forward_ray) is None


class TestTransformPropagation:
    """Tests for transforms composing down the tree."""

    def test_union_translation_moves_children(self, sphere_at, forward_ray):
        """Test a Union translated to z=10 moves its child sphere there."""
        from rayframe.scene.union import Union

        scene = Union([sphere_at(0.0, 0.0, 0.0)])
        scene.translate(0.0, 0.0, 10.0)
        scene.prepare_render()
        assert scene.intersect(forward_ray) == pytest.approx(9.0)

    def test_nested_unions_accumulate(self, forward_ray):
        """Test two nested unions each translated by 5 place the sphere at 10."""
        from rayframe.geometry.sphere import Sphere
        from rayframe.scene.union import Union

        inner = Union([Sphere()]).translate(0.0, 0.0, 5.0)
        outer = Union([inner]).translate(0.0, 0.0, 5.0)
        outer.prepare_render()
        assert outer.intersect(forward_ray) == pytest.approx(9.0)

    def test_union_rotation_moves_child_offset(self, sphere_at):
        """Test a child at x=2 inside a Union rotated 90 degrees about Z sits at y=2."""
        from rayframe.scene.union import Union

        scene = Union([sphere_at(2.0, 0.0, 0.0)]).rotate_z(math.pi / 2)
        scene.prepare_render()
        assert scene.intersect(make_ray((0.0, 2.0, -5.0), (0.0, 0.0, 1.0))) == pytest.approx(4.0)
        assert scene.intersect(make_ray((2.0, 0.0, -5.0), (0.0, 0.0, 1.0))) is None

    def test_union_scale_scales_children(self, sphere_at, forward_ray):
        """Test a Union scaled by 2 doubles both child offset and radius."""
        from rayframe.scene.union import Union

        scene = Union([sphere_at(0.0, 0.0, 5.0)]).uniform_scale(2.0)
        scene.prepare_render()
        # Center at z=10, radius 2
        assert scene.intersect(forward_ray) == pytest.approx(8.0)


class TestOwnership:
    """Tests for exclusive child ownership."""

    def test_add_sets_parent(self, sphere_at):
        """Test that add() records the parent and returns the child."""
        from rayframe.scene.union import Union

        scene = Union()
        child = sphere_at(0.0, 0.0, 0.0)
        assert scene.add(child) is child
        assert child.parent is scene
        assert scene.children == (child,)
        assert len(scene) == 1

    def test_child_cannot_have_two_parents(self, sphere_at):
        """Test adding an owned node to a second Union raises ValueError."""
        from rayframe.scene.union import Union

        child = sphere_at(0.0, 0.0, 0.0)
        Union([child])
        with pytest.raises(ValueError):
            Union([child])

    def test_failed_constructor_releases_children(self, sphere_at):
        """Test children claimed before a rejected child are released again."""
        from rayframe.scene.union import Union

        a, b = sphere_at(0.0, 0.0, 0.0, name="a"), sphere_at(0.0, 0.0, 1.0, name="b")
        Union([b])
        with pytest.raises(ValueError):
            Union([a, b])
        assert a.parent is None

        owner = Union([a])
        assert a.parent is owner

    def test_duplicate_child_in_constructor(self, sphere_at):
        """Test listing the same child twice raises and leaves it unowned."""
        from rayframe.scene.union import Union

        a = sphere_at(0.0, 0.0, 0.0)
        with pytest.raises(ValueError):
            Union([a, a])
        assert a.parent is None

    def test_union_cannot_contain_itself(self):
        """Test that adding a Union to itself raises ValueError."""
        from rayframe.scene.union import Union

        scene = Union()
        with pytest.raises(ValueError):
            scene.add(scene)

    def test_union_cannot_contain_ancestor(self):
        """Test that adding an ancestor raises ValueError."""
        from rayframe.scene.union import Union

        inner = Union()
        outer = Union([inner])
        with pytest.raises(ValueError):
            inner.add(outer)

    def test_remove_releases_child(self, sphere_at):
        """Test a removed child can be added elsewhere."""
        from rayframe.scene.union import Union

        child = sphere_at(0.0, 0.0, 0.0)
        first = Union([child])
        first.remove(child)
        assert child.parent is None
        assert len(first) == 0

        second = Union([child])
        assert child.parent is second

    def test_remove_unknown_child_raises(self, sphere_at):
        """Test removing a node the Union does not own raises ValueError."""
        from rayframe.scene.union import Union

        with pytest.raises(ValueError):
            Union().remove(sphere_at(0.0, 0.0, 0.0))

    def test_walk_is_depth_first(self):
        """Test walk() yields nodes in depth-first, child order."""
        from rayframe.geometry.sphere import Sphere
        from rayframe.scene.union import Union

        a, b, c = Sphere(name="a"), Sphere(name="b"), Sphere(name="c")
        inner = Union([b], name="inner")
        root = Union([a, inner, c], name="root")
        assert [node.name for node in root.walk()] == ["root", "a", "inner", "b", "c"]


class TestFrameCache:
    """Tests for the prepare_render lifecycle."""

    def test_prepare_fills_cache(self, sphere_at):
        """Test m_rb and m_br are inverses after prepare."""
        from rayframe.core.matrix import HMatrix

        sphere = sphere_at(1.0, 2.0, 3.0).rotate_x(0.4)
        assert not sphere.is_prepared
        sphere.prepare_render()
        assert sphere.is_prepared
        assert (sphere.m_rb @ sphere.m_br).allclose(HMatrix.identity())

    def test_unprepared_access_raises(self, sphere_at):
        """Test reading the cache before prepare raises NotPreparedError."""
        from rayframe.errors import NotPreparedError

        sphere = sphere_at(0.0, 0.0, 0.0)
        with pytest.raises(NotPreparedError):
            sphere.m_rb
        with pytest.raises(NotPreparedError):
            sphere.m_br

    def test_prepare_is_idempotent(self, sphere_at):
        """Test preparing twice without edits gives the same matrices."""
        sphere = sphere_at(1.0, -1.0, 4.0).uniform_scale(3.0)
        sphere.prepare_render()
        m_rb, m_br = sphere.m_rb, sphere.m_br
        sphere.prepare_render()
        assert sphere.m_rb == m_rb
        assert sphere.m_br == m_br

    def test_edits_need_reprepare(self, sphere_at, forward_ray):
        """Test that transform edits only take effect after prepare_render()."""
        sphere = sphere_at(0.0, 0.0, 5.0)
        sphere.prepare_render()
        sphere.translate(0.0, 0.0, 5.0)
        assert sphere.intersect(forward_ray) == pytest.approx(4.0)

        sphere.prepare_render()
        assert sphere.intersect(forward_ray) == pytest.approx(9.0)

    def test_union_prepares_children(self, sphere_at):
        """Test prepare_render on a Union prepares every descendant."""
        from rayframe.scene.union import Union

        inner = Union([sphere_at(0.0, 0.0, 1.0)])
        root = Union([sphere_at(0.0, 0.0, 2.0), inner])
        root.prepare_render()
        assert all(node.is_prepared for node in root.walk())

    def test_child_added_after_prepare_is_unprepared(self, sphere_at, forward_ray):
        """Test a late child raises NotPreparedError until the tree is re-prepared."""
        from rayframe.errors import NotPreparedError
        from rayframe.scene.union import Union

        scene = Union([sphere_at(0.0, 0.0, 10.0)])
        scene.prepare_render()
        scene.add(sphere_at(0.0, 0.0, 5.0))
        with pytest.raises(NotPreparedError):
            scene.intersect(forward_ray)

        scene.prepare_render()
        assert scene.intersect(forward_ray) == pytest.approx(4.0)

    def test_failed_prepare_keeps_previous_cache(self, sphere_at, forward_ray):
        """Test a singular edit leaves the last good matrices in place."""
        from rayframe.errors import SingularMatrixError

        sphere = sphere_at(0.0, 0.0, 5.0)
        sphere.prepare_render()
        sphere.scale(0.0, 1.0, 1.0)
        with pytest.raises(SingularMatrixError):
            sphere.prepare_render()
        assert sphere.intersect(forward_ray) == pytest.approx(4.0)

    def test_failed_subtree_prepare_keeps_every_cache(self, sphere_at, forward_ray):
        """Test a singular descendant leaves the whole tree on its previous matrices."""
        from rayframe.errors import SingularMatrixError
        from rayframe.scene.union import Union

        near, far = sphere_at(0.0, 0.0, 5.0), sphere_at(0.0, 0.0, 10.0)
        root = Union([near, far])
        root.prepare_render()
        before = [(node.m_rb, node.m_br) for node in root.walk()]

        root.translate(0.0, 0.0, 100.0)
        far.scale(0.0, 1.0, 1.0)
        with pytest.raises(SingularMatrixError):
            root.prepare_render()

        assert [(node.m_rb, node.m_br) for node in root.walk()] == before
        assert root.intersect(forward_ray) == pytest.approx(4.0)

    def test_unprepared_union_leaves_children_unprepared_on_failure(self, sphere_at):
        """Test a first prepare that fails leaves no node in the tree prepared."""
        from rayframe.errors import SingularMatrixError
        from rayframe.scene.union import Union

        root = Union([sphere_at(0.0, 0.0, 5.0), sphere_at(0.0, 0.0, 10.0).scale(1.0, 0.0, 1.0)])
        with pytest.raises(SingularMatrixError):
            root.prepare_render()
        assert not any(node.is_prepared for node in root.walk())

    def test_repr_includes_name(self):
        """Test the repr shows the node type and name."""
        from rayframe.geometry.sphere import Sphere

        assert repr(Sphere(name="ball")) == "<Sphere 'ball' transforms=0>"
