"""Procedural surface patterns.

A Pattern maps a point in its own local space to a color. Patterns form a
plain recursive tree: every node has a kind, its own transform, and either
colors or child patterns.

Leaf kinds:
    SOLID: One color everywhere.
    STRIPE: Alternates on floor(x).
    GRADIENT: Linear blend along x using the fractional part of x.
    RING: Alternates on floor(sqrt(x^2 + z^2)).
    CHECKER: Alternates on floor(x) + floor(y) + floor(z).
    RADIAL_GRADIENT: Linear blend using the fractional part of the distance
        from the local y-axis.

Composite kinds:
    Any two-way kind above may hold two child patterns instead of two
    colors. The selection (or blend) rule picks a child, and the child is
    evaluated at the point carried through its own transform.
    BLEND: Averages the colors of all children.
    PERTURBED: Jitters the point with seeded Perlin noise before
        evaluating its single child.

Evaluation is pure: the same pattern and point always give the same color.
The noise used by PERTURBED is derived only from the pattern's explicit seed.

Example:
    >>> from src.whitted.core.tuples import BLACK, WHITE, point
    >>> from src.whitted.materials.patterns import checker, pattern_at
    >>> pattern_at(checker(WHITE, BLACK), point(1.01, 0, 0))
    Color(0.0, 0.0, 0.0)
"""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from src.whitted.core.config import EPSILON
from src.whitted.core.transform import Transform, identity
from src.whitted.core.tuples import BLACK, WHITE, Color, Tuple, lerp, point

if TYPE_CHECKING:
    from src.whitted.scene.objects import SceneObject


class PatternKind(Enum):
    """Enumeration of pattern node kinds."""

    SOLID = "solid"
    STRIPE = "stripe"
    GRADIENT = "gradient"
    RING = "ring"
    CHECKER = "checker"
    RADIAL_GRADIENT = "radial_gradient"
    BLEND = "blend"
    PERTURBED = "perturbed"


# Kinds that choose between (or blend) exactly two colors or children
TWO_WAY_KINDS = frozenset(
    {
        PatternKind.STRIPE,
        PatternKind.GRADIENT,
        PatternKind.RING,
        PatternKind.CHECKER,
        PatternKind.RADIAL_GRADIENT,
    }
)


@dataclass(frozen=True, eq=False)
class Pattern:
    """A node in a pattern tree.

    Attributes:
        kind: Which color rule this node applies.
        colors: Leaf colors (one for SOLID, two for two-way kinds).
        children: Child patterns for composite nodes.
        transform: Maps pattern space into the space of the parent (the
            object for a root pattern).
        scale: Jitter amplitude for PERTURBED nodes.
        seed: Noise seed for PERTURBED nodes.
    """

    kind: PatternKind
    colors: tuple[Color, ...] = ()
    children: tuple[Pattern, ...] = ()
    transform: Transform = field(default_factory=identity)
    scale: float = 0.0
    seed: int = 0

    def __post_init__(self) -> None:
        n_colors, n_children = len(self.colors), len(self.children)

        if self.kind is PatternKind.SOLID:
            valid = n_colors == 1 and n_children == 0
        elif self.kind in TWO_WAY_KINDS:
            valid = (n_colors, n_children) in ((2, 0), (0, 2))
        elif self.kind is PatternKind.BLEND:
            valid = n_colors == 0 and n_children >= 1
        elif self.kind is PatternKind.PERTURBED:
            valid = n_colors == 0 and n_children == 1
        else:
            valid = False

        if not valid:
            raise ValueError(
                f"{self.kind.value} pattern cannot hold {n_colors} colors "
                f"and {n_children} children"
            )
        if not isinstance(self.transform, Transform):
            raise TypeError(f"Pattern transform must be a Transform, got {type(self.transform)}")
        if self.scale < 0.0:
            raise ValueError(f"Perturbation scale must be non-negative, got {self.scale}")

    def with_transform(self, transform: Transform) -> Pattern:
        """Return a copy of this node with a different transform."""
        return replace(self, transform=transform)


# =============================================================================
# Constructors
# =============================================================================


def solid(color: Color) -> Pattern:
    return Pattern(PatternKind.SOLID, colors=(color,))


def _two_way(
    kind: PatternKind,
    a: Color | Pattern,
    b: Color | Pattern,
    transform: Transform | None,
) -> Pattern:
    transform = transform if transform is not None else identity()
    if isinstance(a, Color) and isinstance(b, Color):
        return Pattern(kind, colors=(a, b), transform=transform)
    # Mixed arguments become a nested pattern with solid leaves
    children = tuple(x if isinstance(x, Pattern) else solid(x) for x in (a, b))
    return Pattern(kind, children=children, transform=transform)


def stripe(
    a: Color | Pattern = WHITE, b: Color | Pattern = BLACK, transform: Transform | None = None
) -> Pattern:
    return _two_way(PatternKind.STRIPE, a, b, transform)


def gradient(
    a: Color | Pattern = WHITE, b: Color | Pattern = BLACK, transform: Transform | None = None
) -> Pattern:
    return _two_way(PatternKind.GRADIENT, a, b, transform)


def ring(
    a: Color | Pattern = WHITE, b: Color | Pattern = BLACK, transform: Transform | None = None
) -> Pattern:
    return _two_way(PatternKind.RING, a, b, transform)


def checker(
    a: Color | Pattern = WHITE, b: Color | Pattern = BLACK, transform: Transform | None = None
) -> Pattern:
    return _two_way(PatternKind.CHECKER, a, b, transform)


def radial_gradient(
    a: Color | Pattern = WHITE, b: Color | Pattern = BLACK, transform: Transform | None = None
) -> Pattern:
    return _two_way(PatternKind.RADIAL_GRADIENT, a, b, transform)


def blend(*patterns: Pattern, transform: Transform | None = None) -> Pattern:
    """Average the colors of several patterns evaluated at the same point."""
    return Pattern(
        PatternKind.BLEND,
        children=tuple(patterns),
        transform=transform if transform is not None else identity(),
    )


def perturbed(
    pattern: Pattern, scale: float = 0.2, seed: int = 0, transform: Transform | None = None
) -> Pattern:
    """Jitter the lookup point of ``pattern`` with seeded Perlin noise."""
    return Pattern(
        PatternKind.PERTURBED,
        children=(pattern,),
        transform=transform if transform is not None else identity(),
        scale=scale,
        seed=seed,
    )


# =============================================================================
# Perlin noise
# =============================================================================


@functools.lru_cache(maxsize=32)
def _permutation(seed: int) -> tuple[int, ...]:
    """Doubled 256-entry permutation table derived from the seed."""
    perm = np.random.default_rng(seed).permutation(256)
    return tuple(int(v) for v in np.concatenate([perm, perm]))


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _mix(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float, z: float) -> float:
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h in (12, 14):
        v = x
    else:
        v = z
    return (u if h & 1 == 0 else -u) + (v if h & 2 == 0 else -v)


def perlin_noise(x: float, y: float, z: float, seed: int = 0) -> float:
    """Improved Perlin gradient noise in roughly [-1, 1].

    The result is zero at every integer lattice point and varies smoothly
    in between. Identical (x, y, z, seed) always gives the same value.
    """
    p = _permutation(seed)

    fx, fy, fz = math.floor(x), math.floor(y), math.floor(z)
    xi, yi, zi = fx & 255, fy & 255, fz & 255
    xf, yf, zf = x - fx, y - fy, z - fz
    u, v, w = _fade(xf), _fade(yf), _fade(zf)

    a = p[xi] + yi
    aa = p[a] + zi
    ab = p[a + 1] + zi
    b = p[xi + 1] + yi
    ba = p[b] + zi
    bb = p[b + 1] + zi

    return _mix(
        w,
        _mix(
            v,
            _mix(u, _grad(p[aa], xf, yf, zf), _grad(p[ba], xf - 1, yf, zf)),
            _mix(u, _grad(p[ab], xf, yf - 1, zf), _grad(p[bb], xf - 1, yf - 1, zf)),
        ),
        _mix(
            v,
            _mix(u, _grad(p[aa + 1], xf, yf, zf - 1), _grad(p[ba + 1], xf - 1, yf, zf - 1)),
            _mix(
                u,
                _grad(p[ab + 1], xf, yf - 1, zf - 1),
                _grad(p[bb + 1], xf - 1, yf - 1, zf - 1),
            ),
        ),
    )


# =============================================================================
# Evaluation
# =============================================================================


def _band(value: float) -> int:
    # Nudge by EPSILON so surface points that land a rounding error below
    # an integer boundary (e.g. y = -1e-17 on a plane) pick the upper band
    return math.floor(value + EPSILON)


def _child_color(child: Pattern, parent_point: Tuple) -> Color:
    return pattern_at(child, child.transform.apply_inverse(parent_point))


def _select(pattern: Pattern, index: int, local_point: Tuple) -> Color:
    if pattern.children:
        return _child_color(pattern.children[index], local_point)
    return pattern.colors[index]


def _interpolate(pattern: Pattern, fraction: float, local_point: Tuple) -> Color:
    if pattern.children:
        a = _child_color(pattern.children[0], local_point)
        b = _child_color(pattern.children[1], local_point)
    else:
        a, b = pattern.colors
    return lerp(a, b, fraction)


def pattern_at(pattern: Pattern, local_point: Tuple) -> Color:
    """Evaluate a pattern at a point already in the pattern's own space.

    Args:
        pattern: The pattern tree to evaluate.
        local_point: The point in pattern space.

    Returns:
        The pattern color at that point.
    """
    kind = pattern.kind
    x, y, z = local_point.x, local_point.y, local_point.z

    if kind is PatternKind.SOLID:
        return pattern.colors[0]

    if kind is PatternKind.STRIPE:
        return _select(pattern, _band(x) % 2, local_point)

    if kind is PatternKind.RING:
        return _select(pattern, _band(math.hypot(x, z)) % 2, local_point)

    if kind is PatternKind.CHECKER:
        return _select(pattern, (_band(x) + _band(y) + _band(z)) % 2, local_point)

    if kind is PatternKind.GRADIENT:
        return _interpolate(pattern, x - math.floor(x), local_point)

    if kind is PatternKind.RADIAL_GRADIENT:
        distance = math.hypot(x, z)
        return _interpolate(pattern, distance - math.floor(distance), local_point)

    if kind is PatternKind.BLEND:
        total = BLACK
        for child in pattern.children:
            total = total + _child_color(child, local_point)
        return total / len(pattern.children)

    if kind is PatternKind.PERTURBED:
        seed, scale = pattern.seed, pattern.scale
        jittered = point(
            x + perlin_noise(x, y, z, seed) * scale,
            y + perlin_noise(x, y, z + 1.0, seed) * scale,
            z + perlin_noise(x, y, z + 2.0, seed) * scale,
        )
        return _child_color(pattern.children[0], jittered)

    raise ValueError(f"Unknown pattern kind: {kind!r}")


def pattern_at_object(pattern: Pattern, obj: SceneObject, world_point: Tuple) -> Color:
    """Evaluate a pattern attached to an object at a world-space point.

    The point is carried into object space by the object's inverse transform,
    then into pattern space by the pattern's inverse transform.
    """
    object_point = obj.transform.apply_inverse(world_point)
    pattern_point = pattern.transform.apply_inverse(object_point)
    return pattern_at(pattern, pattern_point)
