"""Tests for the preview module.

This module tests the preview/display, preview/export and preview/compare
functionality including:
- Tone mapping functions (Reinhard with and without a white point, exposure)
- Gamma correction
- Saving canvases and arrays through Pillow (PNG and PPM)
- RMSE computation and comparison against saved reference images
- Matplotlib previews on a non-interactive backend
"""

import numpy as np
import pytest
from PIL import Image as PILImage


class TestToneMapping:
    """Test Reinhard and exposure tone mapping."""

    def test_reinhard_formula(self):
        """Test Reinhard formula: L / (1 + L)."""
        from src.whitted.preview.display import tone_map_reinhard

        for val in [0.0, 0.5, 1.0, 2.0, 10.0]:
            image = np.full((2, 2, 3), val, dtype=np.float32)
            assert np.allclose(tone_map_reinhard(image), val / (1.0 + val), atol=1e-6)

    def test_reinhard_clamps_negative(self):
        """Test that Reinhard clamps negative values to zero."""
        from src.whitted.preview.display import tone_map_reinhard

        image = np.full((2, 2, 3), -1.0, dtype=np.float32)
        assert np.all(tone_map_reinhard(image) == 0.0)

    def test_exposure_formula(self):
        """Test exposure formula: 1 - exp(-c * exposure)."""
        from src.whitted.preview.display import tone_map_exposure

        image = np.full((2, 2, 3), 0.5, dtype=np.float32)
        result = tone_map_exposure(image, exposure=2.0)
        assert np.allclose(result, 1.0 - np.exp(-1.0), atol=1e-6)

    def test_exposure_higher_value_brighter(self):
        """Test that a higher exposure gives a brighter image."""
        from src.whitted.preview.display import tone_map_exposure

        image = np.full((2, 2, 3), 0.3, dtype=np.float32)
        assert np.all(tone_map_exposure(image, 2.0) > tone_map_exposure(image, 1.0))

    def test_exposure_must_be_positive(self):
        """Test that a non-positive exposure is rejected."""
        from src.whitted.preview.display import tone_map_exposure

        with pytest.raises(ValueError, match="Exposure must be positive"):
            tone_map_exposure(np.ones((1, 1, 3), dtype=np.float32), 0.0)

    def test_reinhard_white_point_maps_to_one(self):
        """Test the extended curve sends the white point to 1 and clips above it."""
        from src.whitted.preview.display import tone_map_reinhard

        image = np.array([[[0.0, 4.0, 8.0]]], dtype=np.float32)
        result = tone_map_reinhard(image, white=4.0)
        assert abs(result[0, 0, 0]) < 1e-7
        assert abs(result[0, 0, 1] - 1.0) < 1e-6
        assert result[0, 0, 2] == 1.0

    def test_reinhard_white_point_brighter_than_plain(self):
        """Test a white point lifts mid-tones compared with the plain curve."""
        from src.whitted.preview.display import tone_map_reinhard

        image = np.full((2, 2, 3), 1.0, dtype=np.float32)
        assert np.all(tone_map_reinhard(image, white=2.0) > tone_map_reinhard(image))

    def test_reinhard_white_point_must_be_positive(self):
        """Test that a non-positive white point is rejected."""
        from src.whitted.preview.display import tone_map_reinhard

        with pytest.raises(ValueError, match="White point"):
            tone_map_reinhard(np.ones((1, 1, 3), dtype=np.float32), white=0.0)


class TestApplyGamma:
    """Test gamma correction."""

    def test_gamma_1_no_change(self):
        """Test that gamma 1.0 leaves the image untouched."""
        from src.whitted.preview.display import apply_gamma

        image = np.random.default_rng(0).random((4, 4, 3)).astype(np.float32)
        assert np.array_equal(apply_gamma(image, 1.0), image)

    def test_gamma_brightens_midtones(self):
        """Test that gamma 2.2 brightens mid-gray."""
        from src.whitted.preview.display import apply_gamma

        image = np.full((2, 2, 3), 0.5, dtype=np.float32)
        assert np.allclose(apply_gamma(image, 2.2), 0.5 ** (1.0 / 2.2), atol=1e-6)

    def test_gamma_must_be_positive(self):
        """Test that a non-positive gamma is rejected."""
        from src.whitted.preview.display import apply_gamma

        with pytest.raises(ValueError, match="Gamma must be positive"):
            apply_gamma(np.zeros((1, 1, 3), dtype=np.float32), 0.0)


class TestProcessImageForDisplay:
    """Test the full display pipeline."""

    def test_output_always_in_unit_range(self):
        """Test out-of-range input is clamped."""
        from src.whitted.preview.display import process_image_for_display

        image = np.array([[[-1.0, 0.5, 5.0]]], dtype=np.float32)
        for tone_map in ("none", "reinhard", "exposure"):
            result = process_image_for_display(image, tone_map=tone_map)
            assert np.all(result >= 0.0)
            assert np.all(result <= 1.0)

    def test_invalid_tone_map_raises(self):
        """Test that an unknown tone mapping method is rejected."""
        from src.whitted.preview.display import process_image_for_display

        with pytest.raises(ValueError, match="Unknown tone mapping"):
            process_image_for_display(np.zeros((1, 1, 3), dtype=np.float32), tone_map="filmic")

    def test_as_image_array_accepts_canvas(self):
        """Test a Canvas converts to an (H, W, 3) array."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.preview.display import as_image_array

        array = as_image_array(Canvas(5, 4))
        assert array.shape == (4, 5, 3)
        assert array.dtype == np.float32

    def test_as_image_array_rejects_bad_shape(self):
        """Test that a grayscale array is rejected."""
        from src.whitted.preview.display import as_image_array

        with pytest.raises(ValueError, match="shape"):
            as_image_array(np.zeros((4, 5)))


class TestSaveCanvas:
    """Test writing canvases to disk."""

    @staticmethod
    def _canvas():
        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import Color

        canvas = Canvas(5, 3)
        canvas.write_pixel(0, 0, Color(1.5, 0.0, 0.0))
        canvas.write_pixel(2, 1, Color(0.0, 0.5, 0.0))
        canvas.write_pixel(4, 2, Color(-0.5, 0.0, 1.0))
        return canvas

    def test_save_png_linear(self, tmp_path):
        """Test a PNG written without tone mapping or gamma holds the clamped bytes."""
        from src.whitted.preview.export import save_canvas

        canvas = self._canvas()
        filepath = tmp_path / "out.png"
        save_canvas(canvas, filepath, gamma=1.0)

        assert filepath.exists()
        with PILImage.open(filepath) as img:
            assert img.mode == "RGB"
            assert img.size == (5, 3)
            data = np.asarray(img)
        assert np.array_equal(data, canvas.to_uint8())
        assert data[0, 0].tolist() == [255, 0, 0]
        assert data[2, 4].tolist() == [0, 0, 255]

    def test_save_ppm(self, tmp_path):
        """Test the extension selects the PPM format."""
        from src.whitted.preview.export import save_canvas

        filepath = tmp_path / "nested" / "out.ppm"
        save_canvas(self._canvas(), filepath, gamma=1.0)

        assert filepath.read_bytes().startswith(b"P6")
        with PILImage.open(filepath) as img:
            assert img.size == (5, 3)

    def test_save_with_tone_mapping(self, tmp_path):
        """Test tone mapping and gamma change the written bytes."""
        from src.whitted.preview.export import save_canvas

        canvas = self._canvas()
        linear = tmp_path / "linear.png"
        mapped = tmp_path / "mapped.png"
        save_canvas(canvas, linear, gamma=1.0)
        save_canvas(canvas, mapped, tone_map="reinhard", gamma=2.2)

        with PILImage.open(linear) as a, PILImage.open(mapped) as b:
            assert not np.array_equal(np.asarray(a), np.asarray(b))

    def test_save_png_from_array(self, tmp_path):
        """Test saving a float array directly."""
        from src.whitted.preview.export import save_png_from_array

        image = np.full((4, 6, 3), 0.5, dtype=np.float32)
        filepath = tmp_path / "array.png"
        save_png_from_array(image, filepath, gamma=1.0)

        with PILImage.open(filepath) as img:
            assert img.size == (6, 4)
            assert np.all(np.asarray(img) == 127)


class TestImageToUint8:
    """Test float to byte conversion."""

    def test_black_and_white(self):
        """Test black maps to 0 and white to 255."""
        from src.whitted.preview.export import image_to_uint8

        image = np.zeros((1, 2, 3), dtype=np.float32)
        image[0, 1] = 1.0
        result = image_to_uint8(image, gamma=1.0)
        assert result.dtype == np.uint8
        assert result[0, 0].tolist() == [0, 0, 0]
        assert result[0, 1].tolist() == [255, 255, 255]


class TestComputeRmse:
    """Test RMSE computation."""

    def test_identical_images(self):
        """Test RMSE of identical images is 0."""
        from src.whitted.preview.compare import compute_rmse

        image = np.random.default_rng(1).random((5, 5, 3))
        assert compute_rmse(image, image) == 0.0

    def test_different_images(self):
        """Test RMSE of a uniform offset equals the offset."""
        from src.whitted.preview.compare import compute_rmse

        a = np.zeros((5, 5, 3))
        b = np.full((5, 5, 3), 0.25)
        assert abs(compute_rmse(a, b) - 0.25) < 1e-12

    def test_shape_mismatch_raises(self):
        """Test that images of different shapes are rejected."""
        from src.whitted.preview.compare import compute_rmse

        with pytest.raises(ValueError, match="Image shapes must match"):
            compute_rmse(np.zeros((2, 2, 3)), np.zeros((3, 2, 3)))

    def test_accepts_canvas(self):
        """Test a canvas can be compared with an array directly."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import Color
        from src.whitted.preview.compare import compute_rmse

        canvas = Canvas(3, 2, Color(0.5, 0.5, 0.5))
        assert abs(compute_rmse(canvas, np.full((2, 3, 3), 0.5))) < 1e-7


class TestCompareToReference:
    """Test comparing renders with reference images on disk."""

    def test_load_reference_scales_to_unit_range(self, tmp_path):
        """Test 8-bit pixels are read back as floats in [0, 1]."""
        from src.whitted.preview.compare import load_reference

        pixels = np.zeros((2, 2, 3), dtype=np.uint8)
        pixels[0, 0] = [255, 0, 51]
        path = tmp_path / "ref.png"
        PILImage.fromarray(pixels).save(path)

        reference = load_reference(path)
        assert reference.shape == (2, 2, 3)
        assert np.allclose(reference[0, 0], [1.0, 0.0, 0.2])

    def test_saved_canvas_matches_itself(self, tmp_path):
        """Test a canvas compared with its own saved image has zero RMSE."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import Color
        from src.whitted.preview.compare import compare_to_reference
        from src.whitted.preview.export import save_canvas

        canvas = Canvas(4, 3, Color(1.0, 0.0, 1.0))
        canvas.write_pixel(1, 1, Color(0.0, 1.0, 0.0))
        path = tmp_path / "ref.png"
        save_canvas(canvas, path, gamma=1.0)

        result = compare_to_reference(canvas, path, gamma=1.0)
        assert result.rmse == 0.0
        assert result.rendered.shape == result.reference.shape == (3, 4, 3)

    def test_different_render_has_positive_rmse(self, tmp_path, caplog):
        """Test a changed render is detected and the RMSE is logged."""
        import logging

        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import Color
        from src.whitted.preview.compare import compare_to_reference
        from src.whitted.preview.export import save_canvas

        path = tmp_path / "ref.png"
        save_canvas(Canvas(2, 2), path, gamma=1.0)

        with caplog.at_level(logging.INFO, logger="src.whitted.preview.compare"):
            result = compare_to_reference(Canvas(2, 2, Color(1.0, 1.0, 1.0)), path, gamma=1.0)
        assert abs(result.rmse - 1.0) < 1e-9
        assert "RMSE against" in caplog.text

    def test_size_mismatch_raises(self, tmp_path):
        """Test a reference of another size is rejected."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.preview.compare import compare_to_reference
        from src.whitted.preview.export import save_canvas

        path = tmp_path / "ref.png"
        save_canvas(Canvas(2, 2), path, gamma=1.0)
        with pytest.raises(ValueError, match="Image shapes must match"):
            compare_to_reference(Canvas(3, 2), path, gamma=1.0)


class TestMatplotlibPreview:
    """Test figure building without opening windows."""

    @pytest.fixture(autouse=True)
    def agg_backend(self, monkeypatch):
        """Use the non-interactive backend and suppress plt.show."""
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        monkeypatch.setattr(plt, "show", lambda *args, **kwargs: None)
        yield
        plt.close("all")

    def test_show_preview_sets_title(self):
        """Test the default title reports the image size."""
        import matplotlib.pyplot as plt

        from src.whitted.core.canvas import Canvas
        from src.whitted.preview.display import show_preview

        show_preview(Canvas(8, 6), tone_map="reinhard", block=False)
        ax = plt.gcf().axes[0]
        assert ax.get_title() == "Render Preview - 8x6 (reinhard)"

    def test_show_comparison_returns_rmse(self):
        """Test the comparison view reports display-space RMSE."""
        from src.whitted.preview.compare import show_comparison

        a = np.zeros((4, 4, 3), dtype=np.float32)
        b = np.ones((4, 4, 3), dtype=np.float32)
        assert abs(show_comparison(a, b, gamma=1.0, block=False) - 1.0) < 1e-9
        assert show_comparison(a, a, block=False) == 0.0
