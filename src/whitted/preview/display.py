"""Matplotlib-based preview display for rendered canvases.

This module turns the unclamped linear colors produced by the tracer into a
displayable image and shows it with Matplotlib.

Features:
    - Tone mapping (Reinhard, exposure-based) for over-bright highlights
    - Gamma correction (sRGB 2.2)
    - A Matplotlib preview window

Comparisons against other renders or reference files live in
``preview.compare``.

Example:
    >>> from src.whitted.core.render import render
    >>> from src.whitted.preview.display import show_preview
    >>> from src.whitted.scene.demo import create_demo_scene
    >>>
    >>> world, camera = create_demo_scene()
    >>> show_preview(render(camera, world), tone_map="reinhard")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from src.whitted.core.canvas import Canvas


# Type alias for tone mapping options
ToneMapMethod = Literal["none", "reinhard", "exposure"]


def as_image_array(image: Canvas | npt.ArrayLike) -> npt.NDArray[np.float32]:
    """Return a (H, W, 3) float32 array for a Canvas or array-like image."""
    if hasattr(image, "to_numpy"):
        image = image.to_numpy()
    array = np.asarray(image, dtype=np.float32)
    if array.ndim != 3 or array.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {array.shape}")
    return array


def tone_map_reinhard(
    image: npt.NDArray[np.float32],
    white: float | None = None,
) -> npt.NDArray[np.float32]:
    """Compress unbounded channel values into [0, 1) with Reinhard's curve.

    Each channel c maps to c / (1 + c). With a ``white`` point the extended
    curve c * (1 + c / white^2) / (1 + c) is used instead, which sends
    ``white`` itself to exactly 1 so bright highlights are not washed out.
    Negative channels are treated as black.
    """
    c = np.clip(image, 0.0, None).astype(np.float32)
    if white is None:
        return c / (1.0 + c)
    if white <= 0.0:
        raise ValueError(f"White point must be positive, got {white}")
    mapped = c * (1.0 + c / np.float32(white * white)) / (1.0 + c)
    return np.minimum(mapped, 1.0)


def tone_map_exposure(
    image: npt.NDArray[np.float32],
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Film-like response 1 - exp(-exposure * c); larger exposure is brighter."""
    if exposure <= 0.0:
        raise ValueError(f"Exposure must be positive, got {exposure}")
    c = np.clip(image, 0.0, None).astype(np.float32)
    return -np.expm1(-exposure * c)


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Encode [0, 1] linear values as c ** (1 / gamma).

    Values are clamped to [0, 1] first. A gamma of 1.0 returns the input
    untouched, unclamped.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image
    return np.clip(image, 0.0, 1.0).astype(np.float32) ** np.float32(1.0 / gamma)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Tone map, gamma correct and clamp an image to [0, 1].

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value (default 2.2 for sRGB).
        exposure: Exposure value for exposure tone mapping (default 1.0).

    Returns:
        Processed image ready for display, in [0, 1] range.
    """
    result = np.array(image, dtype=np.float32, copy=True)

    if tone_map == "reinhard":
        result = tone_map_reinhard(result)
    elif tone_map == "exposure":
        result = tone_map_exposure(result, exposure)
    elif tone_map != "none":
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = apply_gamma(result, gamma)
    result = np.clip(result, 0.0, 1.0)
    return result.astype(np.float32)


def show_preview(
    image: Canvas | npt.ArrayLike,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered canvas (or image array) in a Matplotlib figure.

    Args:
        image: The Canvas or linear (H, W, 3) array to show.
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value (default 2.2 for sRGB).
        exposure: Exposure value for exposure tone mapping (default 1.0).
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    array = as_image_array(image)
    display_image = process_image_for_display(
        array,
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    )

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = array.shape[:2]
        title = f"Render Preview - {width}x{height}"
        if tone_map != "none":
            title += f" ({tone_map})"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)

