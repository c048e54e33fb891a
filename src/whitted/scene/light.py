"""Point light sources."""

from dataclasses import dataclass, field

from src.whitted.core.tuples import WHITE, Color, Tuple


@dataclass(frozen=True, eq=False)
class PointLight:
    """A light with no size, emitting equally in every direction.

    Attributes:
        position: Where the light sits in world space (a point).
        intensity: The light's color and brightness.
    """

    position: Tuple
    intensity: Color = field(default_factory=lambda: WHITE)

    def __post_init__(self) -> None:
        if not self.position.is_point():
            raise ValueError(f"Light position must be a point, got {self.position!r}")
