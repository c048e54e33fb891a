"""Invertible 4x4 affine transforms.

A Transform wraps a NumPy 4x4 matrix together with its inverse and
inverse-transpose, both computed once at construction. Construction fails
with NonInvertibleTransformError when the matrix is singular and with
ValueError when its last row is not 0 0 0 1, so every Transform that exists
can be inverted and maps points to points and vectors to vectors.

Composition follows matrix order: ``compose(a, b)`` applies b first, then a.
The fluent methods read in application order instead:

Example:
    >>> import math
    >>> from src.whitted.core.transform import identity
    >>> from src.whitted.core.tuples import point
    >>> t = identity().rotate_x(math.pi / 2).scale(5, 5, 5).translate(10, 5, 7)
    >>> t @ point(1, 0, 1)
    Tuple(15.0, 0.0, 7.0, 1.0)
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from src.whitted.core.config import DETERMINANT_EPSILON, EPSILON
from src.whitted.core.tuples import Tuple, cross, normalize


_AFFINE_ROW = np.array([0.0, 0.0, 0.0, 1.0])


class NonInvertibleTransformError(ValueError):
    """Raised when a transform matrix has a (near) zero determinant."""


class Transform:
    """An invertible affine transform.

    Attributes:
        matrix: The 4x4 forward matrix.
        inverse_matrix: The cached inverse of ``matrix``.
        inverse_transpose: The cached transpose of ``inverse_matrix``, used
            to carry normals from object space to world space.
    """

    __slots__ = ("matrix", "inverse_matrix", "inverse_transpose")

    def __init__(self, matrix: npt.ArrayLike) -> None:
        m = np.array(matrix, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"Transform matrix must be 4x4, got shape {m.shape}")
        # Projective matrices would turn points and vectors into neither
        if not np.all(np.abs(m[3] - _AFFINE_ROW) < EPSILON):
            raise ValueError(f"Transform matrix must be affine (last row 0 0 0 1), got {m[3].tolist()}")

        det = float(np.linalg.det(m))
        if not math.isfinite(det) or abs(det) < DETERMINANT_EPSILON:
            raise NonInvertibleTransformError(
                f"Transform is not invertible (determinant {det:.3e})"
            )

        self.matrix = m
        self.inverse_matrix = np.linalg.inv(m)
        self.inverse_transpose = self.inverse_matrix.T.copy()

    @property
    def inverse(self) -> Transform:
        """The inverse transform."""
        return Transform(self.inverse_matrix)

    def apply(self, t: Tuple) -> Tuple:
        """Multiply a point or vector by the matrix.

        Vectors have w = 0, so the translation column has no effect on them.
        """
        return Tuple.from_array(self.matrix @ t.data)

    def apply_inverse(self, t: Tuple) -> Tuple:
        """Multiply a point or vector by the inverse matrix."""
        return Tuple.from_array(self.inverse_matrix @ t.data)

    def apply_normal(self, local_normal: Tuple) -> Tuple:
        """Carry an object-space normal into world space.

        Normals are multiplied by the inverse-transpose, which keeps them
        perpendicular to the surface under non-uniform scaling and shear.
        The translation part leaks into w, so w is reset before normalizing.
        """
        n = self.inverse_transpose @ local_normal.data
        n[3] = 0.0
        return normalize(Tuple.from_array(n))

    def __matmul__(self, other: Transform | Tuple) -> Transform | Tuple:
        if isinstance(other, Transform):
            return compose(self, other)
        if isinstance(other, Tuple):
            return self.apply(other)
        return NotImplemented

    def is_close(self, other: Transform, tolerance: float = EPSILON) -> bool:
        """Elementwise comparison of the forward matrices."""
        return bool(np.all(np.abs(self.matrix - other.matrix) < tolerance))

    # Fluent chaining: each call applies the new operation after the
    # existing ones.

    def translate(self, x: float, y: float, z: float) -> Transform:
        return compose(translation(x, y, z), self)

    def scale(self, x: float, y: float, z: float) -> Transform:
        return compose(scaling(x, y, z), self)

    def rotate_x(self, radians: float) -> Transform:
        return compose(rotation_x(radians), self)

    def rotate_y(self, radians: float) -> Transform:
        return compose(rotation_y(radians), self)

    def rotate_z(self, radians: float) -> Transform:
        return compose(rotation_z(radians), self)

    def shear(
        self, xy: float, xz: float, yx: float, yz: float, zx: float, zy: float
    ) -> Transform:
        return compose(shearing(xy, xz, yx, yz, zx, zy), self)

    def __repr__(self) -> str:
        rows = ", ".join(str(row.tolist()) for row in self.matrix)
        return f"Transform([{rows}])"


def compose(a: Transform, b: Transform) -> Transform:
    """Return the transform equivalent to applying b, then a."""
    return Transform(a.matrix @ b.matrix)


def identity() -> Transform:
    return Transform(np.eye(4))


def translation(x: float, y: float, z: float) -> Transform:
    m = np.eye(4)
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return Transform(m)


def scaling(x: float, y: float, z: float) -> Transform:
    """Scale along each axis. Any zero factor makes the transform singular."""
    return Transform(np.diag([x, y, z, 1.0]))


def rotation_x(radians: float) -> Transform:
    c, s = math.cos(radians), math.sin(radians)
    return Transform(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Transform:
    c, s = math.cos(radians), math.sin(radians)
    return Transform(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Transform:
    c, s = math.cos(radians), math.sin(radians)
    return Transform(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Transform:
    """Shear each coordinate in proportion to the other two.

    For example ``xy`` moves x in proportion to y.
    """
    return Transform(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def view_transform(from_point: Tuple, to_point: Tuple, up: Tuple) -> Transform:
    """Orient the world relative to an eye at ``from_point`` looking at ``to_point``.

    Args:
        from_point: Eye position (point).
        to_point: Point being looked at.
        up: Approximate up direction (vector); need not be normalized or
            exactly perpendicular to the view direction.

    Returns:
        The world-to-camera transform.
    """
    forward = normalize(to_point - from_point)
    left = cross(forward, normalize(up))
    true_up = cross(left, forward)
    orientation = np.array(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transform(orientation @ translation(-from_point.x, -from_point.y, -from_point.z).matrix)


IDENTITY = identity()
