"""Pytest configuration for rayframe tests.

This module provides shared fixtures for building rays and small scenes.
"""

import pytest

from rayframe.core.ray import Ray
from rayframe.core.vector import Direction, Position
from rayframe.geometry.sphere import Sphere


@pytest.fixture
def forward_ray():
    """A ray from the reference origin looking down +Z."""
    return Ray(Position(0.0, 0.0, 0.0), Direction(0.0, 0.0, 1.0))


@pytest.fixture
def sphere_at():
    """Factory for unprepared unit spheres translated to (x, y, z)."""

    def _make(x: float, y: float, z: float, name: str | None = None) -> Sphere:
        sphere = Sphere(name=name)
        sphere.translate(x, y, z)
        return sphere

    return _make
