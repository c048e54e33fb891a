"""Preview and export module.

Components:
    display: Tone mapping, gamma correction and the Matplotlib preview window
    export: Writing canvases and arrays to image files via Pillow
    compare: RMSE against other renders or reference images, side-by-side view
"""

from .compare import Comparison, compare_to_reference, compute_rmse, load_reference, show_comparison
from .display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from .export import image_to_uint8, save_canvas, save_png_from_array

__all__ = [
    "ToneMapMethod",
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "show_preview",
    "save_canvas",
    "save_png_from_array",
    "image_to_uint8",
    "Comparison",
    "compute_rmse",
    "load_reference",
    "compare_to_reference",
    "show_comparison",
]
