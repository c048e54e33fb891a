"""Recursive Whitted shading.

The functions here compute the color seen along a ray:

- ``color_at`` intersects a ray with the world and shades the hit, or
  returns the background color on a miss.
- ``shade_hit`` adds the Phong surface color to the reflected and refracted
  contributions of a single hit.
- ``reflected_color`` and ``refracted_color`` spawn secondary rays and call
  back into ``color_at`` with one less unit of remaining depth.

The remaining depth is an explicit argument on every call. When it reaches
zero no further rays are spawned, which bounds the work done per primary ray
no matter how reflective or transparent the scene is. Nothing here mutates
the world, so the same world can be traced from many processes at once.
Colors are left unclamped; clamping happens when the image is exported.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.shading import color_at
    >>> from src.whitted.core.tuples import point, vector
    >>> color = color_at(world, Ray(point(0, 0, -5), vector(0, 0, 1)))
"""

import math

from src.whitted.core.config import DEFAULT_MAX_DEPTH
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import BLACK, Color, dot
from src.whitted.materials.material import lighting
from src.whitted.scene.intersection import HitComputations, prepare_computations
from src.whitted.scene.world import World

# Color returned for rays that escape the scene
BACKGROUND_COLOR = BLACK


def surface_color(world: World, comps: HitComputations) -> Color:
    """Sum the Phong contribution of every light at a hit.

    Each light is shadow-tested from the hit's over_point; a shadowed light
    contributes its ambient term only.
    """
    material = comps.object.material
    total = BLACK
    for light in world.lights:
        shadowed = world.is_shadowed(comps.over_point, light)
        total = total + lighting(
            material,
            comps.object,
            light,
            comps.over_point,
            comps.eyev,
            comps.normalv,
            shadowed,
        )
    return total


def reflected_color(
    world: World,
    comps: HitComputations,
    remaining: int = DEFAULT_MAX_DEPTH,
    *,
    background: Color = BACKGROUND_COLOR,
) -> Color:
    """Color arriving along the mirror direction, weighted by reflectivity.

    Returns black without casting a ray when the surface is not reflective
    or no depth remains.
    """
    reflective = comps.object.material.reflective
    if remaining <= 0 or reflective == 0.0:
        return BLACK

    reflect_ray = Ray(comps.over_point, comps.reflectv)
    return color_at(world, reflect_ray, remaining - 1, background=background) * reflective


def refracted_color(
    world: World,
    comps: HitComputations,
    remaining: int = DEFAULT_MAX_DEPTH,
    *,
    background: Color = BACKGROUND_COLOR,
) -> Color:
    """Color arriving through the surface by Snell's law, weighted by transparency.

    Returns black without casting a ray when the surface is opaque, no
    depth remains, or the angle causes total internal reflection.
    """
    transparency = comps.object.material.transparency
    if remaining <= 0 or transparency == 0.0:
        return BLACK

    n_ratio = comps.n1 / comps.n2
    cos_i = dot(comps.eyev, comps.normalv)
    sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
    if sin2_t > 1.0:
        # Total internal reflection
        return BLACK

    cos_t = math.sqrt(1.0 - sin2_t)
    direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
    refract_ray = Ray(comps.under_point, direction)
    return color_at(world, refract_ray, remaining - 1, background=background) * transparency


def shade_hit(
    world: World,
    comps: HitComputations,
    remaining: int = DEFAULT_MAX_DEPTH,
    *,
    background: Color = BACKGROUND_COLOR,
) -> Color:
    """Total color at a hit: surface lighting plus reflected and refracted light.

    Args:
        world: The scene being traced.
        comps: Precomputed data for the hit.
        remaining: How many more levels of secondary rays may be spawned.
        background: Color for secondary rays that escape the scene.

    Returns:
        The unclamped color.
    """
    surface = surface_color(world, comps)
    reflected = reflected_color(world, comps, remaining, background=background)
    refracted = refracted_color(world, comps, remaining, background=background)
    return surface + reflected + refracted


def color_at(
    world: World,
    ray: Ray,
    remaining: int = DEFAULT_MAX_DEPTH,
    *,
    background: Color = BACKGROUND_COLOR,
) -> Color:
    """Color seen along a ray.

    Args:
        world: The scene being traced.
        ray: The ray to follow.
        remaining: How many more levels of secondary rays may be spawned.
        background: Color returned when the ray hits nothing.

    Returns:
        The unclamped color.
    """
    xs = world.intersect(ray)
    hit = xs.hit()
    if hit is None:
        return background

    comps = prepare_computations(hit, ray, xs)
    return shade_hit(world, comps, remaining, background=background)
