"""Homogeneous tuples (points and vectors) and RGB colors.

A Tuple is a 4-component (x, y, z, w) value stored in a NumPy array. The w
component distinguishes points (w = 1) from vectors (w = 0), and the
arithmetic operators refuse combinations that would break that distinction,
such as adding two points or scaling a point.

Example:
    >>> from src.whitted.core.tuples import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 1.0, 0.0)
    >>> p + v * 2.0
    Tuple(1.0, 4.0, 3.0, 1.0)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.whitted.core.config import EPSILON

POINT_W = 1.0
VECTOR_W = 0.0


class Tuple:
    """A point or vector in homogeneous coordinates.

    Attributes:
        data: The (x, y, z, w) components as a float64 NumPy array.
    """

    __slots__ = ("data",)

    def __init__(self, x: float, y: float, z: float, w: float) -> None:
        self.data = np.array([x, y, z, w], dtype=np.float64)

    @classmethod
    def from_array(cls, data: npt.ArrayLike) -> Tuple:
        """Wrap a length-4 array without re-validating the w component."""
        result = cls.__new__(cls)
        result.data = np.asarray(data, dtype=np.float64).reshape(4)
        return result

    @property
    def x(self) -> float:
        return float(self.data[0])

    @property
    def y(self) -> float:
        return float(self.data[1])

    @property
    def z(self) -> float:
        return float(self.data[2])

    @property
    def w(self) -> float:
        return float(self.data[3])

    def is_point(self) -> bool:
        return abs(self.data[3] - POINT_W) < EPSILON

    def is_vector(self) -> bool:
        return abs(self.data[3] - VECTOR_W) < EPSILON

    def _require_vector(self, operation: str) -> None:
        if not self.is_vector():
            raise ValueError(f"Cannot {operation} a point: {self!r}")

    def __add__(self, other: Tuple) -> Tuple:
        if self.is_point() and other.is_point():
            raise ValueError("Cannot add two points")
        return Tuple.from_array(self.data + other.data)

    def __sub__(self, other: Tuple) -> Tuple:
        if self.is_vector() and other.is_point():
            raise ValueError("Cannot subtract a point from a vector")
        return Tuple.from_array(self.data - other.data)

    def __neg__(self) -> Tuple:
        self._require_vector("negate")
        return Tuple.from_array(-self.data)

    def __mul__(self, scalar: float) -> Tuple:
        self._require_vector("scale")
        return Tuple.from_array(self.data * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        self._require_vector("scale")
        return Tuple.from_array(self.data / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return bool(np.all(np.abs(self.data - other.data) < EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self):
        return iter(float(c) for c in self.data)

    def __repr__(self) -> str:
        return f"Tuple({self.x}, {self.y}, {self.z}, {self.w})"


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w = 1)."""
    return Tuple(x, y, z, POINT_W)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w = 0)."""
    return Tuple(x, y, z, VECTOR_W)


def magnitude(v: Tuple) -> float:
    """Euclidean length of a vector."""
    v._require_vector("measure")
    return float(np.sqrt(np.dot(v.data, v.data)))


def normalize(v: Tuple) -> Tuple:
    """Scale a vector to unit length.

    Raises:
        ValueError: If v is a point or has zero length.
    """
    length = magnitude(v)
    if length == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    return Tuple.from_array(v.data / length)


def dot(a: Tuple, b: Tuple) -> float:
    """Dot product over all four components."""
    return float(np.dot(a.data, b.data))


def cross(a: Tuple, b: Tuple) -> Tuple:
    """Cross product of two vectors (the w component is ignored)."""
    a._require_vector("cross")
    b._require_vector("cross")
    c = np.cross(a.data[:3], b.data[:3])
    return vector(c[0], c[1], c[2])


def reflect(incident: Tuple, normal: Tuple) -> Tuple:
    """Reflect an incident vector about a normal: r = d - 2 (d . n) n."""
    return incident - normal * (2.0 * dot(incident, normal))


class Color:
    """An unclamped linear RGB color.

    Attributes:
        data: The (red, green, blue) channels as a float64 NumPy array.
    """

    __slots__ = ("data",)

    def __init__(self, red: float, green: float, blue: float) -> None:
        self.data = np.array([red, green, blue], dtype=np.float64)

    @classmethod
    def from_array(cls, data: npt.ArrayLike) -> Color:
        result = cls.__new__(cls)
        result.data = np.asarray(data, dtype=np.float64).reshape(3)
        return result

    @property
    def red(self) -> float:
        return float(self.data[0])

    @property
    def green(self) -> float:
        return float(self.data[1])

    @property
    def blue(self) -> float:
        return float(self.data[2])

    def __add__(self, other: Color) -> Color:
        return Color.from_array(self.data + other.data)

    def __sub__(self, other: Color) -> Color:
        return Color.from_array(self.data - other.data)

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color is the Hadamard (channel-wise) product
        if isinstance(other, Color):
            return Color.from_array(self.data * other.data)
        return Color.from_array(self.data * other)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Color:
        return Color.from_array(self.data / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.all(np.abs(self.data - other.data) < EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self):
        return iter(float(c) for c in self.data)

    def is_close(self, other: Color, tolerance: float = EPSILON) -> bool:
        """Channel-wise comparison with a caller-chosen tolerance."""
        return bool(np.all(np.abs(self.data - other.data) < tolerance))

    def __repr__(self) -> str:
        return f"Color({self.red}, {self.green}, {self.blue})"


def lerp(a: Color, b: Color, fraction: float) -> Color:
    """Linear interpolation between two colors."""
    return a + (b - a) * fraction


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
