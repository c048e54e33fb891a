"""Demo scene exercising every surface feature of the tracer.

The scene consists of:
- A checkered floor plane with a faint mirror finish
- A small matte sphere (left) with a noise-perturbed ring pattern
- A large mirror sphere (center) that reflects the rest of the scene
- A glass sphere (right) that refracts the floor behind it and does not
  cast a shadow
- One white point light above and to the left of the camera

The camera looks slightly down at the mirror sphere from in front of it,
so the top rows of the image see only the background.

Example:
    >>> from src.whitted.scene.demo import create_demo_scene
    >>> world, camera = create_demo_scene(width=320, height=240)
"""

import math
from dataclasses import dataclass

from src.whitted.camera.camera import Camera
from src.whitted.core.transform import identity, scaling, view_transform
from src.whitted.core.tuples import Color, point, vector
from src.whitted.materials.material import GLASS, Material
from src.whitted.materials.patterns import checker, perturbed, ring, solid
from src.whitted.scene.light import PointLight
from src.whitted.scene.objects import plane, sphere
from src.whitted.scene.world import World

# Scene colors
FLOOR_LIGHT = Color(0.9, 0.9, 0.9)
FLOOR_DARK = Color(0.35, 0.35, 0.4)
MATTE_INNER = Color(0.9, 0.4, 0.1)
MATTE_OUTER = Color(0.95, 0.85, 0.3)
MIRROR_TINT = Color(0.1, 0.1, 0.12)
GLASS_TINT = Color(0.05, 0.08, 0.05)


@dataclass
class DemoSceneParams:
    """Adjustable parts of the demo scene.

    Attributes:
        light_position: World-space position of the point light.
        light_color: Intensity of the point light.
        floor_reflective: Mirror weight of the floor.
        noise_seed: Seed for the perturbed pattern on the matte sphere.
        field_of_view: Camera field of view in radians.
    """

    light_position: tuple[float, float, float] = (-10.0, 10.0, -10.0)
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    floor_reflective: float = 0.1
    noise_seed: int = 7
    field_of_view: float = math.pi / 3


def create_demo_scene(
    width: int = 160,
    height: int = 120,
    params: DemoSceneParams | None = None,
) -> tuple[World, Camera]:
    """Build the demo world and a camera framing it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        params: Optional overrides; defaults to DemoSceneParams().

    Returns:
        A tuple of (World, Camera).
    """
    if params is None:
        params = DemoSceneParams()

    floor = plane(
        material=Material(
            pattern=checker(FLOOR_LIGHT, FLOOR_DARK),
            specular=0.0,
            reflective=params.floor_reflective,
        ),
        name="floor",
    )

    rings = ring(MATTE_INNER, MATTE_OUTER, transform=scaling(0.2, 0.2, 0.2))
    matte = sphere(
        identity().scale(0.5, 0.5, 0.5).translate(-1.5, 0.5, 0.5),
        Material(
            pattern=perturbed(rings, scale=0.15, seed=params.noise_seed),
            diffuse=0.8,
            specular=0.3,
        ),
        name="matte",
    )

    mirror = sphere(
        identity().translate(0.0, 1.0, 0.5),
        Material(
            pattern=solid(MIRROR_TINT),
            diffuse=0.3,
            specular=1.0,
            shininess=300.0,
            reflective=0.9,
        ),
        name="mirror",
    )

    glass = sphere(
        identity().scale(0.6, 0.6, 0.6).translate(1.6, 0.6, -0.6),
        Material(
            pattern=solid(GLASS_TINT),
            ambient=0.0,
            diffuse=0.1,
            specular=1.0,
            shininess=300.0,
            reflective=0.1,
            transparency=0.9,
            refractive_index=GLASS,
        ),
        casts_shadow=False,
        name="glass",
    )

    world = World()
    world.add(floor, matte, mirror, glass)
    world.add_light(PointLight(point(*params.light_position), Color(*params.light_color)))

    camera = Camera(
        width,
        height,
        params.field_of_view,
        view_transform(point(0.0, 1.5, -5.0), point(0.0, 1.0, 0.0), vector(0.0, 1.0, 0.0)),
    )

    return world, camera
