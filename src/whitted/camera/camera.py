"""Pinhole camera mapping pixel coordinates to primary rays.

The camera sits at the origin of camera space looking toward -z, with a
virtual image plane one unit in front of it. Its transform is the
world-to-camera view transform (usually built with ``view_transform``), so
its inverse carries camera-space rays into the world.

The canvas is ``hsize`` pixels wide and ``vsize`` pixels tall. The field of
view spans the longer of the two dimensions:

- half_view = tan(field_of_view / 2)
- landscape (hsize >= vsize): half_width = half_view,
  half_height = half_view / aspect
- portrait: half_width = half_view * aspect, half_height = half_view
- pixel_size = 2 * half_width / hsize

Example:
    >>> import math
    >>> from src.whitted.camera.camera import Camera
    >>> from src.whitted.core.transform import view_transform
    >>> from src.whitted.core.tuples import point, vector
    >>> camera = Camera(
    ...     hsize=160,
    ...     vsize=120,
    ...     field_of_view=math.pi / 3,
    ...     transform=view_transform(point(0, 1.5, -5), point(0, 1, 0), vector(0, 1, 0)),
    ... )
    >>> ray = camera.ray_for_pixel(80, 60)
"""

import math
from dataclasses import dataclass, field

from src.whitted.core.ray import Ray
from src.whitted.core.transform import Transform, identity, view_transform
from src.whitted.core.tuples import Tuple, normalize, point


@dataclass(frozen=True, eq=False)
class Camera:
    """A pinhole camera.

    Attributes:
        hsize: Canvas width in pixels.
        vsize: Canvas height in pixels.
        field_of_view: Angle covered by the longer image side, in radians.
        transform: World-to-camera view transform.
        half_width: Half the image plane width at unit distance (derived).
        half_height: Half the image plane height at unit distance (derived).
        pixel_size: World-space size of one pixel on the image plane (derived).
    """

    hsize: int
    vsize: int
    field_of_view: float
    transform: Transform = field(default_factory=identity)
    half_width: float = field(init=False)
    half_height: float = field(init=False)
    pixel_size: float = field(init=False)

    def __post_init__(self) -> None:
        if self.hsize <= 0 or self.vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {self.hsize}x{self.vsize}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(
                f"Field of view must be in (0, pi) radians, got {self.field_of_view}"
            )

        half_view = math.tan(self.field_of_view / 2.0)
        aspect = self.hsize / self.vsize
        if aspect >= 1.0:
            half_width, half_height = half_view, half_view / aspect
        else:
            half_width, half_height = half_view * aspect, half_view

        object.__setattr__(self, "half_width", half_width)
        object.__setattr__(self, "half_height", half_height)
        object.__setattr__(self, "pixel_size", (half_width * 2.0) / self.hsize)

    @classmethod
    def looking_at(
        cls,
        hsize: int,
        vsize: int,
        field_of_view: float,
        from_point: Tuple,
        to_point: Tuple,
        up: Tuple,
    ) -> "Camera":
        """Build a camera placed with ``view_transform``."""
        return cls(hsize, vsize, field_of_view, view_transform(from_point, to_point, up))

    def ray_for_pixel(self, px: float, py: float) -> Ray:
        return ray_for_pixel(self, px, py)


def ray_for_pixel(camera: Camera, px: float, py: float) -> Ray:
    """Primary ray through the center of pixel (px, py).

    Pixel (0, 0) is the top-left corner of the canvas; x grows to the right
    and y grows downward.

    Args:
        camera: The camera to shoot from.
        px: Pixel column.
        py: Pixel row.

    Returns:
        A world-space ray with a unit-length direction.
    """
    # Offset from the canvas edge to the pixel center
    x_offset = (px + 0.5) * camera.pixel_size
    y_offset = (py + 0.5) * camera.pixel_size

    # Camera looks toward -z, so +x is to the left
    world_x = camera.half_width - x_offset
    world_y = camera.half_height - y_offset

    pixel = camera.transform.apply_inverse(point(world_x, world_y, -1.0))
    origin = camera.transform.apply_inverse(point(0.0, 0.0, 0.0))
    direction = normalize(pixel - origin)
    return Ray(origin, direction)
