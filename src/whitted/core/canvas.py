"""Taichi-backed pixel buffer.

A Canvas stores one linear RGB color per pixel in a Taichi vector field of
shape (width, height), indexed [x, y] with (0, 0) at the top-left. Values are
kept unclamped; ``to_uint8`` runs a Taichi kernel that clamps each channel to
[0, 1] and truncates it to an 8-bit value for export.

Taichi must be initialized (``ti.init``) before a Canvas is created.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.canvas import Canvas
    >>> from src.whitted.core.tuples import RED
    >>> canvas = Canvas(10, 20)
    >>> canvas.write_pixel(2, 3, RED)
    >>> canvas.pixel_at(2, 3)
    Color(1.0, 0.0, 0.0)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.whitted.core.tuples import BLACK, Color


@ti.kernel
def _quantize(pixels: ti.template(), out: ti.types.ndarray()):
    """Clamp to [0, 1] and scale to 0..255, writing (height, width, 3) bytes."""
    for x, y in pixels:
        for c in ti.static(range(3)):
            value = ti.min(ti.max(pixels[x, y][c], 0.0), 1.0)
            out[y, x, c] = ti.cast(value * 255.0, ti.u8)


class Canvas:
    """A width x height grid of colors.

    Attributes:
        width: Number of pixel columns.
        height: Number of pixel rows.
        pixels: The underlying Taichi field, shape (width, height).
    """

    def __init__(self, width: int, height: int, fill: Color = BLACK) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.pixels = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))
        self.pixels.fill((fill.red, fill.green, fill.blue))

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} canvas"
            )

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Store a color at column x, row y."""
        self._check_bounds(x, y)
        self.pixels[x, y] = [color.red, color.green, color.blue]

    def pixel_at(self, x: int, y: int) -> Color:
        """Read back the color at column x, row y."""
        self._check_bounds(x, y)
        value = self.pixels[x, y]
        return Color(float(value[0]), float(value[1]), float(value[2]))

    def from_numpy(self, image: npt.ArrayLike) -> None:
        """Fill the canvas from a (height, width, 3) array in row-major image order."""
        array = np.asarray(image, dtype=np.float32)
        if array.shape != (self.height, self.width, 3):
            raise ValueError(
                f"Expected image of shape {(self.height, self.width, 3)}, got {array.shape}"
            )
        # Image arrays are (row, column); the field is (x, y)
        self.pixels.from_numpy(np.ascontiguousarray(np.transpose(array, (1, 0, 2))))

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """The canvas as a (height, width, 3) float32 array, unclamped."""
        return np.ascontiguousarray(np.transpose(self.pixels.to_numpy(), (1, 0, 2)))

    def to_uint8(self) -> npt.NDArray[np.uint8]:
        """The canvas as (height, width, 3) bytes, each channel clamped then scaled by 255."""
        out = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        _quantize(self.pixels, out)
        return out

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
