"""Image export utilities for rendered canvases.

This module writes canvases and image arrays to disk through Pillow, with
optional tone mapping and gamma correction. The file format follows the
extension of the output path.

Supported formats:
    - PNG (8-bit RGB)
    - PPM (8-bit binary pixmap)
    - Anything else Pillow can write in RGB mode (BMP, TIFF, ...)

Example:
    >>> from src.whitted.core.render import render
    >>> from src.whitted.preview.export import save_canvas
    >>> from src.whitted.scene.demo import create_demo_scene
    >>>
    >>> world, camera = create_demo_scene()
    >>> save_canvas(render(camera, world), "demo.png", tone_map="reinhard")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.whitted.preview.display import ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    from src.whitted.core.canvas import Canvas


def save_canvas(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> None:
    """Save a rendered canvas as an 8-bit RGB image.

    With no tone mapping and gamma 1.0 the canvas's own quantization kernel
    is used, so each channel is clamped to [0, 1] and truncated to
    channel * 255.

    Args:
        canvas: The canvas to save.
        filepath: Output file path; the extension selects the format.
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value (default 2.2 for sRGB).
        exposure: Exposure value for exposure tone mapping (default 1.0).
    """
    if tone_map == "none" and gamma == 1.0:
        image_uint8 = canvas.to_uint8()
    else:
        image_uint8 = image_to_uint8(
            canvas.to_numpy(), tone_map=tone_map, gamma=gamma, exposure=exposure
        )

    _write(image_uint8, filepath)


def save_png_from_array(
    image: npt.NDArray[np.float32],
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> None:
    """Save a linear (H, W, 3) NumPy array as an 8-bit image.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path (usually ending in .png).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value (default 2.2 for sRGB).
        exposure: Exposure value for exposure tone mapping (default 1.0).
    """
    _write(image_to_uint8(image, tone_map=tone_map, gamma=gamma, exposure=exposure), filepath)


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8 for display/export.

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value (default 2.2 for sRGB).
        exposure: Exposure value for exposure tone mapping (default 1.0).

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    processed = process_image_for_display(
        image,
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    )
    return (processed * 255).astype(np.uint8)


def _write(image_uint8: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    PILImage.fromarray(image_uint8).save(path)
