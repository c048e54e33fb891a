"""Pytest configuration for tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session, and the
two-sphere reference world most shading tests are written against.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


def make_default_world(outer_material=None, inner_material=None):
    """Build the reference world.

    - Outer unit sphere at the origin: color (0.8, 1.0, 0.6), diffuse 0.7,
      specular 0.2
    - Inner sphere scaled by 0.5, default material
    - White point light at (-10, 10, -10)

    Either sphere's material can be replaced.
    """
    from src.whitted.core.transform import scaling
    from src.whitted.core.tuples import Color, point
    from src.whitted.materials.material import Material
    from src.whitted.scene.light import PointLight
    from src.whitted.scene.objects import sphere
    from src.whitted.scene.world import World

    if outer_material is None:
        outer_material = Material.from_color(Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2)
    if inner_material is None:
        inner_material = Material()

    world = World()
    world.add(
        sphere(material=outer_material, name="outer"),
        sphere(scaling(0.5, 0.5, 0.5), inner_material, name="inner"),
    )
    world.add_light(PointLight(point(-10.0, 10.0, -10.0)))
    return world


@pytest.fixture
def default_world():
    """The reference two-sphere world with one white light."""
    return make_default_world()


@pytest.fixture
def world_factory():
    """Builder for the reference world with replaceable sphere materials."""
    return make_default_world
