"""Core tracing module.

This module contains the building blocks every other subpackage uses:

Components:
    config: Shared numeric tolerances and the default recursion depth
    tuples: Points, vectors and RGB colors
    transform: Invertible 4x4 affine transforms
    ray: Ray data structure
    shading: Recursive Whitted shading (color_at, shade_hit)
    canvas: Taichi-backed pixel buffer
    render: Pixel-loop driver

Only the leaf modules are re-exported here. shading, canvas and render
depend on the scene package, so import them directly, e.g.
``from src.whitted.core.shading import color_at``.
"""

from .config import DEFAULT_MAX_DEPTH, DETERMINANT_EPSILON, EPSILON
from .ray import Ray
from .transform import (
    IDENTITY,
    NonInvertibleTransformError,
    Transform,
    compose,
    identity,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .tuples import (
    BLACK,
    BLUE,
    GREEN,
    RED,
    WHITE,
    Color,
    Tuple,
    cross,
    dot,
    lerp,
    magnitude,
    normalize,
    point,
    reflect,
    vector,
)

__all__ = [
    "EPSILON",
    "DETERMINANT_EPSILON",
    "DEFAULT_MAX_DEPTH",
    "Tuple",
    "Color",
    "point",
    "vector",
    "magnitude",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "lerp",
    "BLACK",
    "WHITE",
    "RED",
    "GREEN",
    "BLUE",
    "Transform",
    "NonInvertibleTransformError",
    "IDENTITY",
    "compose",
    "identity",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "view_transform",
    "Ray",
]
