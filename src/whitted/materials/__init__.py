"""Materials module for surface appearance.

Components:
    material: Phong material parameters and the per-light lighting function
    patterns: Procedural pattern trees (stripe, gradient, ring, checker,
        radial gradient, blends and noise-perturbed patterns)
"""

from .material import AIR, DIAMOND, GLASS, VACUUM, WATER, Material, lighting
from .patterns import (
    Pattern,
    PatternKind,
    blend,
    checker,
    gradient,
    pattern_at,
    pattern_at_object,
    perlin_noise,
    perturbed,
    radial_gradient,
    ring,
    solid,
    stripe,
)

__all__ = [
    "Material",
    "lighting",
    "VACUUM",
    "AIR",
    "WATER",
    "GLASS",
    "DIAMOND",
    "Pattern",
    "PatternKind",
    "solid",
    "stripe",
    "gradient",
    "ring",
    "checker",
    "radial_gradient",
    "blend",
    "perturbed",
    "perlin_noise",
    "pattern_at",
    "pattern_at_object",
]
