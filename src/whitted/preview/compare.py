"""Comparing renders against each other and against saved reference images.

Reference images on disk are already display-encoded (tone mapped, gamma
corrected, 8-bit), so a render is pushed through the same display pipeline
before it is compared. RMSE is reported in [0, 1] channel units.

Example:
    >>> from src.whitted.preview.compare import compare_to_reference
    >>> result = compare_to_reference(canvas, "reference.png", gamma=1.0)
    >>> result.rmse
    0.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.whitted.preview.display import ToneMapMethod, as_image_array, process_image_for_display

if TYPE_CHECKING:
    from src.whitted.core.canvas import Canvas

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Comparison:
    """Outcome of comparing a render with a reference image.

    Attributes:
        rendered: The render in display space, (H, W, 3) in [0, 1].
        reference: The reference image, (H, W, 3) in [0, 1].
        rmse: Root mean squared difference between the two.
    """

    rendered: npt.NDArray[np.float32]
    reference: npt.NDArray[np.float32]
    rmse: float


def compute_rmse(image_a: Canvas | npt.ArrayLike, image_b: Canvas | npt.ArrayLike) -> float:
    """Root mean squared difference between two (H, W, 3) images.

    Raises:
        ValueError: If the shapes differ.
    """
    a = as_image_array(image_a)
    b = as_image_array(image_b)
    if a.shape != b.shape:
        raise ValueError(f"Image shapes must match: {a.shape} vs {b.shape}")
    squared = np.square(np.subtract(a, b, dtype=np.float64))
    return float(np.sqrt(squared.mean()))


def load_reference(filepath: str | Path) -> npt.NDArray[np.float32]:
    """Read an image file as an RGB float array in [0, 1]."""
    with PILImage.open(filepath) as img:
        pixels = np.asarray(img.convert("RGB"), dtype=np.float32)
    return pixels / 255.0


def compare_to_reference(
    image: Canvas | npt.ArrayLike,
    reference_path: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> Comparison:
    """Compare a render with an image saved earlier under the same display settings.

    Raises:
        ValueError: If the reference size differs from the render.
    """
    rendered = process_image_for_display(
        as_image_array(image), tone_map=tone_map, gamma=gamma, exposure=exposure
    )
    reference = load_reference(reference_path)
    rmse = compute_rmse(rendered, reference)
    logger.info("RMSE against %s: %.6f", reference_path, rmse)
    return Comparison(rendered=rendered, reference=reference, rmse=rmse)


def show_comparison(
    image_a: Canvas | npt.ArrayLike,
    image_b: Canvas | npt.ArrayLike,
    *,
    labels: tuple[str, str] = ("A", "B"),
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Show two images side by side next to their amplified difference.

    Both images go through the same display pipeline. Pass tone_map="none"
    and gamma=1.0 for images that are already display-encoded.

    Returns:
        RMSE between the two images in display space.
    """
    import matplotlib.pyplot as plt

    shown = [
        process_image_for_display(as_image_array(img), tone_map=tone_map, gamma=gamma)
        for img in (image_a, image_b)
    ]
    rmse = compute_rmse(shown[0], shown[1])
    diff = np.clip(np.abs(shown[0] - shown[1]) * diff_scale, 0.0, 1.0)

    fig, axes = plt.subplots(1, 3, figsize=figsize)
    titles = (labels[0], labels[1], f"Difference ({diff_scale}x) - RMSE: {rmse:.6f}")
    for ax, img, title in zip(axes, (*shown, diff), titles):
        ax.imshow(img)
        ax.set_title(title)
        ax.axis("off")

    plt.tight_layout()
    plt.show(block=block)

    return rmse
