"""Phong surface materials.

A Material carries the Phong weights (ambient, diffuse, specular, shininess),
the secondary-ray weights (reflective, transparency) with the refractive
index used for Snell's law, and a Pattern giving the surface color.

Example:
    >>> from src.whitted.core.tuples import Color
    >>> from src.whitted.materials.material import GLASS, Material
    >>> from src.whitted.materials.patterns import solid
    >>> glass = Material(pattern=solid(Color(0.1, 0.1, 0.1)), transparency=0.9,
    ...                  refractive_index=GLASS)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from src.whitted.core.config import EPSILON
from src.whitted.core.tuples import BLACK, WHITE, Color, Tuple, dot, magnitude, normalize, reflect
from src.whitted.materials.patterns import Pattern, pattern_at_object, solid

if TYPE_CHECKING:
    from src.whitted.scene.light import PointLight
    from src.whitted.scene.objects import SceneObject

# Common refractive indices
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.5
DIAMOND = 2.417


@dataclass(frozen=True)
class Material:
    """Surface appearance parameters.

    The ambient, diffuse and specular weights are independent and need not
    sum to 1.

    Attributes:
        pattern: Maps surface points to the base color.
        ambient: Fraction of the light's color applied everywhere.
        diffuse: Weight of the Lambertian term.
        specular: Weight of the highlight term.
        shininess: Highlight exponent; larger values give smaller highlights.
        reflective: Weight of the mirror-reflected color, in [0, 1].
        transparency: Weight of the refracted color, in [0, 1].
        refractive_index: Index of refraction, > 0.
    """

    pattern: Pattern = field(default_factory=lambda: solid(WHITE))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular", "shininess"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        for name in ("reflective", "transparency"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.refractive_index <= 0.0:
            raise ValueError(f"refractive_index must be positive, got {self.refractive_index}")

    @classmethod
    def from_color(cls, color: Color, **params: float) -> Material:
        """Build a material with a solid color and optional overrides."""
        return cls(pattern=solid(color), **params)

    def evolve(self, **changes: object) -> Material:
        """Return a copy with some fields changed (validated again)."""
        return replace(self, **changes)


def lighting(
    material: Material,
    obj: SceneObject,
    light: PointLight,
    position: Tuple,
    eyev: Tuple,
    normalv: Tuple,
    in_shadow: bool = False,
) -> Color:
    """Phong illumination of one surface point by one light.

    Args:
        material: The surface material.
        obj: The object being shaded (its transform places the pattern).
        light: The light source.
        position: The world-space point being shaded.
        eyev: Unit vector from the point toward the eye.
        normalv: Unit surface normal at the point.
        in_shadow: Whether the light is blocked. Shadowed points keep only
            the ambient term.

    Returns:
        ambient + diffuse + specular for this light.
    """
    color = pattern_at_object(material.pattern, obj, position)
    effective_color = color * light.intensity
    ambient = effective_color * material.ambient

    if in_shadow:
        return ambient

    to_light = light.position - position
    # A light at the point itself has no direction to shade with
    if magnitude(to_light) < EPSILON:
        return ambient

    lightv = normalize(to_light)
    light_dot_normal = dot(lightv, normalv)

    # Light on the other side of the surface
    if light_dot_normal < 0.0:
        return ambient

    diffuse = effective_color * (material.diffuse * light_dot_normal)

    reflectv = reflect(-lightv, normalv)
    reflect_dot_eye = dot(reflectv, eyev)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        factor = reflect_dot_eye**material.shininess
        specular = light.intensity * (material.specular * factor)

    return ambient + diffuse + specular
