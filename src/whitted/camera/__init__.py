"""Camera module for primary ray generation.

Components:
    camera: Pinhole camera placed with a view transform

Pixel (0, 0) is the top-left corner of the image; rays pass through pixel
centers.
"""

from .camera import Camera, ray_for_pixel

__all__ = [
    "Camera",
    "ray_for_pixel",
]
