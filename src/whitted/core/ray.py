"""Ray data structure.

A ray is an origin point plus a direction vector. The direction is not
required to be unit length: intersection routines solve for t in whatever
units the direction defines, which is what keeps t invariant when a ray is
carried into an object's local space.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import point, vector
    >>> ray = Ray(point(2, 3, 4), vector(1, 0, 0))
    >>> ray.position(2.5)
    Tuple(4.5, 3.0, 4.0, 1.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.whitted.core.transform import Transform
from src.whitted.core.tuples import Tuple


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (w = 1).
        direction: The direction of travel (w = 0).
    """

    origin: Tuple
    direction: Tuple

    def __post_init__(self) -> None:
        if not self.origin.is_point():
            raise ValueError(f"Ray origin must be a point, got {self.origin!r}")
        if not self.direction.is_vector():
            raise ValueError(f"Ray direction must be a vector, got {self.direction!r}")

    def position(self, t: float) -> Tuple:
        """Compute the point origin + t * direction."""
        return self.origin + self.direction * t

    def transform(self, transform: Transform) -> Ray:
        """Return a new ray with both origin and direction transformed."""
        return Ray(transform.apply(self.origin), transform.apply(self.direction))

    def to_local(self, transform: Transform) -> Ray:
        """Carry a world-space ray into the space an object's transform maps from."""
        return Ray(transform.apply_inverse(self.origin), transform.apply_inverse(self.direction))
