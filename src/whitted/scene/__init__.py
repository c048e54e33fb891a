"""Scene module for assembling what gets traced.

Components:
    intersection: Intersection records, hit selection and precomputed hit data
    light: Point lights
    objects: Shapes placed in the world with a transform and material
    world: The object and light container, with shadow queries
    demo: A ready-made scene for examples and end-to-end tests

The demo scene also builds a camera, so import it directly from
``src.whitted.scene.demo``.
"""

from .intersection import (
    HitComputations,
    Intersection,
    Intersections,
    hit,
    prepare_computations,
)
from .light import PointLight
from .objects import SceneObject, glass_sphere, plane, sphere
from .world import World

__all__ = [
    "Intersection",
    "Intersections",
    "hit",
    "HitComputations",
    "prepare_computations",
    "PointLight",
    "SceneObject",
    "sphere",
    "glass_sphere",
    "plane",
    "World",
]
