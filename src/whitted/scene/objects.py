"""Scene objects: a shape placed in the world with a material.

A SceneObject pairs a ShapeKind with a Transform (object space to world
space), a Material and a shadow-casting flag. It converts world-space rays
into object space before delegating to the shape's local intersection test,
and converts local normals back to world space.

Objects compare and hash by identity, so two spheres with identical
parameters are still distinct objects in intersection lists.

Example:
    >>> from src.whitted.core.transform import translation
    >>> from src.whitted.scene.objects import sphere
    >>> ball = sphere(transform=translation(0, 1, 0))
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from src.whitted.core.ray import Ray
from src.whitted.core.transform import Transform, identity
from src.whitted.core.tuples import Tuple
from src.whitted.geometry.shapes import ShapeKind, local_intersect, local_normal_at
from src.whitted.materials.material import GLASS, Material
from src.whitted.scene.intersection import Intersection


@dataclass(frozen=True, eq=False)
class SceneObject:
    """A primitive instance in the world.

    Attributes:
        shape: Which primitive this object is.
        transform: Object-to-world transform. A raw 4x4 matrix is accepted
            and validated, raising NonInvertibleTransformError if singular.
        material: Surface appearance.
        casts_shadow: Whether the object blocks light for shadow rays.
        name: Optional label for logging and debugging.
    """

    shape: ShapeKind
    transform: Transform = field(default_factory=identity)
    material: Material = field(default_factory=Material)
    casts_shadow: bool = True
    name: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.transform, Transform):
            object.__setattr__(self, "transform", Transform(np.asarray(self.transform)))

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a world-space ray with this object.

        Returns:
            Intersections tagged with this object, ascending by t. t is the
            same in world and local space because the ray direction is
            transformed along with the origin.
        """
        local_ray = ray.to_local(self.transform)
        return [Intersection(t, self) for t in local_intersect(self.shape, local_ray)]

    def normal_at(self, world_point: Tuple) -> Tuple:
        """World-space unit normal at a point on the surface."""
        local_point = self.transform.apply_inverse(world_point)
        local_normal = local_normal_at(self.shape, local_point)
        return self.transform.apply_normal(local_normal)

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<SceneObject {self.shape.value}{label} at 0x{id(self):x}>"


def sphere(
    transform: Transform | None = None,
    material: Material | None = None,
    *,
    casts_shadow: bool = True,
    name: str | None = None,
) -> SceneObject:
    """A unit sphere at the origin, placed by ``transform``."""
    return SceneObject(
        ShapeKind.SPHERE,
        transform=transform if transform is not None else identity(),
        material=material if material is not None else Material(),
        casts_shadow=casts_shadow,
        name=name,
    )


def glass_sphere(
    transform: Transform | None = None,
    refractive_index: float = GLASS,
    *,
    casts_shadow: bool = True,
    name: str | None = None,
) -> SceneObject:
    """A fully transparent sphere, handy for refraction scenes."""
    return sphere(
        transform,
        Material(transparency=1.0, refractive_index=refractive_index),
        casts_shadow=casts_shadow,
        name=name,
    )


def plane(
    transform: Transform | None = None,
    material: Material | None = None,
    *,
    casts_shadow: bool = True,
    name: str | None = None,
) -> SceneObject:
    """The xz-plane through the origin, placed by ``transform``."""
    return SceneObject(
        ShapeKind.PLANE,
        transform=transform if transform is not None else identity(),
        material=material if material is not None else Material(),
        casts_shadow=casts_shadow,
        name=name,
    )
