"""Unit tests for the pinhole camera.

Tests cover:
- Derived half extents and pixel size for landscape and portrait canvases
- Primary rays through the center and the corner of the canvas
- Rays from a transformed camera
- Construction validation
"""

import math

import pytest


class TestCameraGeometry:
    """Tests for the derived image plane geometry."""

    def test_defaults(self):
        """Test a new camera has the identity transform."""
        from src.whitted.camera.camera import Camera
        from src.whitted.core.transform import IDENTITY

        camera = Camera(160, 120, math.pi / 2)
        assert camera.hsize == 160
        assert camera.vsize == 120
        assert camera.transform.is_close(IDENTITY)

    def test_pixel_size_horizontal_canvas(self):
        """Test the pixel size of a landscape canvas."""
        from src.whitted.camera.camera import Camera

        camera = Camera(200, 125, math.pi / 2)
        assert abs(camera.pixel_size - 0.01) < 1e-9

    def test_pixel_size_vertical_canvas(self):
        """Test the pixel size of a portrait canvas."""
        from src.whitted.camera.camera import Camera

        camera = Camera(125, 200, math.pi / 2)
        assert abs(camera.pixel_size - 0.01) < 1e-9

    def test_half_extents_follow_aspect(self):
        """Test the longer side spans the full field of view."""
        from src.whitted.camera.camera import Camera

        landscape = Camera(200, 100, math.pi / 2)
        assert abs(landscape.half_width - 1.0) < 1e-9
        assert abs(landscape.half_height - 0.5) < 1e-9

        portrait = Camera(100, 200, math.pi / 2)
        assert abs(portrait.half_width - 0.5) < 1e-9
        assert abs(portrait.half_height - 1.0) < 1e-9


class TestRayForPixel:
    """Tests for primary ray generation."""

    def test_ray_through_center(self):
        """Test the center pixel looks straight down -z."""
        from src.whitted.camera.camera import Camera
        from src.whitted.core.tuples import point, vector

        ray = Camera(201, 101, math.pi / 2).ray_for_pixel(100, 50)
        assert ray.origin == point(0.0, 0.0, 0.0)
        assert ray.direction == vector(0.0, 0.0, -1.0)

    def test_ray_through_corner(self):
        """Test the top-left pixel's ray."""
        from src.whitted.camera.camera import Camera, ray_for_pixel
        from src.whitted.core.tuples import point, vector

        ray = ray_for_pixel(Camera(201, 101, math.pi / 2), 0, 0)
        assert ray.origin == point(0.0, 0.0, 0.0)
        assert ray.direction == vector(0.66519, 0.33259, -0.66851)

    def test_ray_from_transformed_camera(self):
        """Test a rotated and translated camera."""
        from src.whitted.camera.camera import Camera
        from src.whitted.core.transform import compose, rotation_y, translation
        from src.whitted.core.tuples import point, vector

        camera = Camera(201, 101, math.pi / 2, compose(rotation_y(math.pi / 4), translation(0.0, -2.0, 5.0)))
        ray = camera.ray_for_pixel(100, 50)
        half = math.sqrt(2.0) / 2.0
        assert ray.origin == point(0.0, 2.0, -5.0)
        assert ray.direction == vector(half, 0.0, -half)

    def test_directions_are_unit_length(self):
        """Test every primary ray direction is normalized."""
        from src.whitted.camera.camera import Camera
        from src.whitted.core.tuples import magnitude

        camera = Camera(7, 5, math.pi / 3)
        for py in range(camera.vsize):
            for px in range(camera.hsize):
                assert abs(magnitude(camera.ray_for_pixel(px, py).direction) - 1.0) < 1e-9

    def test_looking_at(self):
        """Test the looking_at constructor places the camera with a view transform."""
        from src.whitted.camera.camera import Camera
        from src.whitted.core.tuples import point, vector

        camera = Camera.looking_at(
            11, 11, math.pi / 3, point(0.0, 0.0, -5.0), point(0.0, 0.0, 0.0), vector(0.0, 1.0, 0.0)
        )
        ray = camera.ray_for_pixel(5, 5)
        assert ray.origin == point(0.0, 0.0, -5.0)
        assert ray.direction == vector(0.0, 0.0, 1.0)


class TestCameraValidation:
    """Tests for invalid camera parameters."""

    @pytest.mark.parametrize("hsize, vsize", [(0, 10), (10, 0), (-5, 10)])
    def test_non_positive_size(self, hsize, vsize):
        """Test a zero or negative canvas size is rejected."""
        from src.whitted.camera.camera import Camera

        with pytest.raises(ValueError, match="size must be positive"):
            Camera(hsize, vsize, math.pi / 2)

    @pytest.mark.parametrize("fov", [0.0, -0.5, math.pi, 4.0])
    def test_field_of_view_out_of_range(self, fov):
        """Test a field of view outside (0, pi) is rejected."""
        from src.whitted.camera.camera import Camera

        with pytest.raises(ValueError, match="Field of view"):
            Camera(10, 10, fov)
