"""Intersection records, hit selection and precomputed shading data.

An Intersection pairs a ray parameter t with the object that was struck.
Intersections keeps a list of them sorted ascending by t, negative values
included, and ``hit`` picks the nearest one at or in front of the ray origin.

``prepare_computations`` turns a hit into the HitComputations record that the
shading engine consumes: the hit point, eye and normal vectors, the points
nudged above and below the surface, the reflection vector, and the refractive
indices on both sides of the surface.

Example:
    >>> from src.whitted.scene.intersection import Intersection, Intersections
    >>> from src.whitted.scene.objects import sphere
    >>> s = sphere()
    >>> xs = Intersections([Intersection(5, s), Intersection(-3, s), Intersection(2, s)])
    >>> xs.hit().t
    2
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.whitted.core.config import EPSILON
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Tuple, dot, normalize, reflect

if TYPE_CHECKING:
    from src.whitted.scene.objects import SceneObject

# Refractive index assumed outside every object
EMPTY_SPACE_INDEX = 1.0


@dataclass(frozen=True, eq=False)
class Intersection:
    """A single ray/object intersection.

    Attributes:
        t: The ray parameter of the intersection.
        object: The object that was intersected.
    """

    t: float
    object: SceneObject

    def __repr__(self) -> str:
        return f"Intersection(t={self.t}, object={self.object!r})"


class Intersections(Sequence[Intersection]):
    """An immutable list of intersections sorted ascending by t."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Intersection] = ()) -> None:
        self._items = tuple(sorted(items, key=lambda i: i.t))

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._items)

    def hit(self) -> Intersection | None:
        """The intersection with the smallest non-negative t, if any."""
        return hit(self._items)

    def __repr__(self) -> str:
        return f"Intersections({list(self._items)!r})"


def hit(intersections: Iterable[Intersection]) -> Intersection | None:
    """Return the intersection with the smallest t >= 0.

    The input does not have to be sorted. Returns None when the input is
    empty or every t is negative.
    """
    best = None
    for candidate in intersections:
        if candidate.t >= 0.0 and (best is None or candidate.t < best.t):
            best = candidate
    return best


@dataclass(frozen=True, eq=False)
class HitComputations:
    """Everything the shading engine needs about one hit.

    Attributes:
        t: The ray parameter of the hit.
        object: The object that was hit.
        point: The world-space hit point.
        eyev: Unit vector from the hit point back toward the ray origin.
        normalv: Unit surface normal, flipped to face the eye when the ray
            hits the inside of the surface.
        inside: True when the ray originates inside the object.
        reflectv: The ray direction mirrored about the normal.
        over_point: The hit point nudged along the normal, used as origin for
            shadow and reflection rays.
        under_point: The hit point nudged against the normal, used as origin
            for refraction rays.
        n1: Refractive index of the medium the ray is leaving.
        n2: Refractive index of the medium the ray is entering.
    """

    t: float
    object: SceneObject
    point: Tuple
    eyev: Tuple
    normalv: Tuple
    inside: bool
    reflectv: Tuple
    over_point: Tuple
    under_point: Tuple
    n1: float
    n2: float


def _refractive_indices(hit_: Intersection, intersections: Iterable[Intersection]) -> tuple[float, float]:
    """Find (n1, n2) by walking the intersections up to the hit.

    Each intersection either enters or leaves its object. The list of
    objects currently containing the ray gives the medium on each side of
    the hit: the innermost container before the hit is n1, after it n2.
    """
    containers: list[SceneObject] = []
    n1 = n2 = EMPTY_SPACE_INDEX

    for candidate in intersections:
        is_hit = candidate is hit_
        if is_hit and containers:
            n1 = containers[-1].material.refractive_index

        for index, obj in enumerate(containers):
            if obj is candidate.object:
                del containers[index]
                break
        else:
            containers.append(candidate.object)

        if is_hit:
            n2 = containers[-1].material.refractive_index if containers else EMPTY_SPACE_INDEX
            break

    return n1, n2


def prepare_computations(
    hit_: Intersection,
    ray: Ray,
    intersections: Iterable[Intersection] | None = None,
) -> HitComputations:
    """Precompute shading data for a hit.

    Args:
        hit_: The intersection being shaded.
        ray: The ray that produced it.
        intersections: The full sorted intersection list for the ray. Needed
            to determine refractive indices; when omitted only the hit itself
            is considered.

    Returns:
        The HitComputations for the hit.
    """
    point = ray.position(hit_.t)
    # Ray directions need not be unit length
    eyev = normalize(-ray.direction)
    normalv = hit_.object.normal_at(point)

    inside = dot(normalv, eyev) < 0.0
    if inside:
        normalv = -normalv

    n1, n2 = _refractive_indices(hit_, intersections if intersections is not None else [hit_])

    return HitComputations(
        t=hit_.t,
        object=hit_.object,
        point=point,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        reflectv=reflect(ray.direction, normalv),
        over_point=point + normalv * EPSILON,
        under_point=point - normalv * EPSILON,
        n1=n1,
        n2=n2,
    )
