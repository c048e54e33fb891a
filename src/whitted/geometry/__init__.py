"""Geometry module for primitive shapes.

Components:
    shapes: The closed set of shape kinds (sphere, plane) with their
        object-space intersection and normal functions
"""

from .shapes import ShapeKind, local_intersect, local_normal_at

__all__ = [
    "ShapeKind",
    "local_intersect",
    "local_normal_at",
]
