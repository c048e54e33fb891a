"""Shape primitives and their object-space intersection and normal functions.

Every shape lives in its own local space, untransformed and centered at the
origin:

- SPHERE: the unit sphere, radius 1 around the origin.
- PLANE: the infinite xz-plane with constant normal +y.

Shapes are a closed set of kinds. ``local_intersect`` and ``local_normal_at``
dispatch on the kind, and each kind must be handled by both functions.
Object-level transform handling lives in ``src.whitted.scene.objects``.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import point, vector
    >>> from src.whitted.geometry.shapes import ShapeKind, local_intersect
    >>> local_intersect(ShapeKind.SPHERE, Ray(point(0, 0, -5), vector(0, 0, 1)))
    [4.0, 6.0]
"""

import math
from enum import Enum

from src.whitted.core.config import EPSILON
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Tuple, dot, normalize, point, vector


class ShapeKind(Enum):
    """Enumeration of supported primitive shapes."""

    SPHERE = "sphere"
    PLANE = "plane"


_ORIGIN = point(0.0, 0.0, 0.0)
_PLANE_NORMAL = vector(0.0, 1.0, 0.0)


def _intersect_sphere(ray: Ray) -> list[float]:
    """Solve |o + t d|^2 = 1 for the unit sphere at the origin.

    Expanding gives a*t^2 + b*t + c = 0 with:
        a = d . d
        b = 2 (d . o)
        c = o . o - 1
    where o is the vector from the sphere center to the ray origin.
    """
    sphere_to_ray = ray.origin - _ORIGIN
    a = dot(ray.direction, ray.direction)
    b = 2.0 * dot(ray.direction, sphere_to_ray)
    c = dot(sphere_to_ray, sphere_to_ray) - 1.0

    discriminant = b * b - 4.0 * a * c
    # Tolerance scales with a so near-misses do not depend on the direction length
    if discriminant < -EPSILON * a:
        return []

    # Rounding can push a tangent ray's discriminant slightly negative
    sqrt_d = math.sqrt(max(discriminant, 0.0))
    t0 = (-b - sqrt_d) / (2.0 * a)
    t1 = (-b + sqrt_d) / (2.0 * a)
    return [t0, t1] if t0 <= t1 else [t1, t0]


def _intersect_plane(ray: Ray) -> list[float]:
    # Parallel and coplanar rays never register a hit
    if abs(ray.direction.y) < EPSILON:
        return []
    return [-ray.origin.y / ray.direction.y]


def local_intersect(kind: ShapeKind, local_ray: Ray) -> list[float]:
    """Intersect an object-space ray with a shape.

    Args:
        kind: The shape to test.
        local_ray: The ray already transformed into the shape's local space.

    Returns:
        The t values of every intersection in ascending order, including
        negative ones. A tangent ray against a sphere yields the same t twice.
    """
    if kind is ShapeKind.SPHERE:
        return _intersect_sphere(local_ray)
    if kind is ShapeKind.PLANE:
        return _intersect_plane(local_ray)
    raise ValueError(f"Unknown shape kind: {kind!r}")


def local_normal_at(kind: ShapeKind, local_point: Tuple) -> Tuple:
    """Surface normal of a shape at an object-space point.

    Args:
        kind: The shape to query.
        local_point: A point on the shape's surface, in local space.

    Returns:
        The unit-length local normal vector.
    """
    if kind is ShapeKind.SPHERE:
        return normalize(local_point - _ORIGIN)
    if kind is ShapeKind.PLANE:
        return _PLANE_NORMAL
    raise ValueError(f"Unknown shape kind: {kind!r}")
