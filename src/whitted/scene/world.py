"""The world: every object and light in a scene.

A World is assembled once before rendering and is treated as read-only while
rays are traced, so the same instance can be shared by every render worker.

Example:
    >>> from src.whitted.core.tuples import point
    >>> from src.whitted.scene.light import PointLight
    >>> from src.whitted.scene.objects import plane, sphere
    >>> from src.whitted.scene.world import World
    >>> world = World()
    >>> world.add(plane(), sphere())
    >>> world.add_light(PointLight(point(-10, 10, -10)))
"""

import logging
from dataclasses import dataclass, field

from src.whitted.core.config import EPSILON
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Tuple, magnitude, normalize
from src.whitted.scene.intersection import Intersections
from src.whitted.scene.light import PointLight
from src.whitted.scene.objects import SceneObject

logger = logging.getLogger(__name__)


@dataclass
class World:
    """A collection of scene objects and point lights.

    Attributes:
        objects: Objects in insertion order. Order only affects iteration,
            never the result of a trace.
        lights: Light sources; their contributions are summed.
    """

    objects: list[SceneObject] = field(default_factory=list)
    lights: list[PointLight] = field(default_factory=list)

    def add(self, *objects: SceneObject) -> None:
        """Append one or more objects."""
        self.objects.extend(objects)

    def add_light(self, *lights: PointLight) -> None:
        """Append one or more lights."""
        self.lights.extend(lights)

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a ray with every object.

        Returns:
            All intersections, sorted ascending by t, negative t included.
        """
        found = []
        for obj in self.objects:
            found.extend(obj.intersect(ray))
        return Intersections(found)

    def is_shadowed(self, point: Tuple, light: PointLight) -> bool:
        """Check whether something blocks the light from reaching a point.

        Callers pass a point already nudged off the surface (the hit's
        over_point) so the surface does not shadow itself.

        Args:
            point: The world-space point being lit.
            light: The light to test against.

        Returns:
            True if a shadow-casting object lies between the point and the
            light. Objects whose ``casts_shadow`` flag is False never block.
        """
        to_light = light.position - point
        distance = magnitude(to_light)
        if distance < EPSILON:
            # Nothing can sit between a point and a light at that point
            return False
        shadow_ray = Ray(point, normalize(to_light))

        for candidate in self.intersect(shadow_ray):
            if candidate.t < 0.0:
                continue
            if candidate.t >= distance:
                break
            if candidate.object.casts_shadow:
                return True
        return False

    def validate(self) -> None:
        """Log warnings for scenes that will render as flat background or ambient only."""
        if not self.objects:
            logger.warning("World has no objects; every pixel will be background")
        if not self.lights:
            logger.warning("World has no lights; surfaces receive no illumination")
