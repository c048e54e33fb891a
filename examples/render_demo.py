#!/usr/bin/env python3
"""Render the demo scene.

This script renders the demo scene (checkered floor, matte, mirror and glass
spheres) with the recursive Whitted tracer and writes the image to disk.
The output format follows the file extension (PNG, PPM, ...).

Usage:
    python -m examples.render_demo [options]

Options:
    --width WIDTH         Image width in pixels (default: 320)
    --height HEIGHT       Image height in pixels (default: 240)
    --max-depth DEPTH     Reflection/refraction depth limit (default: 5)
    --workers N           Worker processes (default: 1)
    --background R G B    Color of rays that escape the scene (default: 0 0 0)
    --light X Y Z         Light position (default: -10 10 -10)
    --seed SEED           Noise seed for the perturbed pattern (default: 7)
    --output OUTPUT       Output file path (default: demo.png)
    --tone-map METHOD     none, reinhard or exposure (default: none)
    --gamma GAMMA         Gamma correction (default: 1.0)
    --compare REFERENCE   Report the RMSE against a saved reference image
    --preview             Show the result in a Matplotlib window
    --log-level LEVEL     Logging level (default: INFO)

Example:
    python -m examples.render_demo --width 640 --height 480 --workers 4
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti

logger = logging.getLogger("src.whitted.examples.render_demo")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the Whitted demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=320, help="Image width in pixels (default: 320)")
    parser.add_argument("--height", type=int, default=240, help="Image height in pixels (default: 240)")
    parser.add_argument(
        "--max-depth",
        type=int,
        default=5,
        help="Reflection/refraction depth limit (default: 5)",
    )
    parser.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")
    parser.add_argument(
        "--background",
        type=float,
        nargs=3,
        default=(0.0, 0.0, 0.0),
        metavar=("R", "G", "B"),
        help="Color of rays that escape the scene (default: 0 0 0)",
    )
    parser.add_argument(
        "--light",
        type=float,
        nargs=3,
        default=(-10.0, 10.0, -10.0),
        metavar=("X", "Y", "Z"),
        help="Light position (default: -10 10 -10)",
    )
    parser.add_argument("--seed", type=int, default=7, help="Noise seed (default: 7)")
    parser.add_argument("--output", type=str, default="demo.png", help="Output file path (default: demo.png)")
    parser.add_argument(
        "--tone-map",
        choices=["none", "reinhard", "exposure"],
        default="none",
        help="Tone mapping method (default: none)",
    )
    parser.add_argument("--gamma", type=float, default=1.0, help="Gamma correction (default: 1.0)")
    parser.add_argument(
        "--compare",
        type=str,
        default=None,
        metavar="REFERENCE",
        help="Report the RMSE against a saved reference image",
    )
    parser.add_argument("--preview", action="store_true", help="Show the result in a Matplotlib window")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level (default: INFO)")
    return parser.parse_args()


def render_demo(args: argparse.Namespace) -> Path:
    """Build the demo scene from the arguments, render it and save it.

    Returns:
        Path to the saved image file.
    """
    # Imported after ti.init so the Canvas field lands on the chosen backend
    from src.whitted.core.render import RenderConfig, render
    from src.whitted.core.tuples import Color
    from src.whitted.preview.compare import compare_to_reference, show_comparison
    from src.whitted.preview.display import show_preview
    from src.whitted.preview.export import save_canvas
    from src.whitted.scene.demo import DemoSceneParams, create_demo_scene

    params = DemoSceneParams(light_position=tuple(args.light), noise_seed=args.seed)
    world, camera = create_demo_scene(args.width, args.height, params)

    config = RenderConfig(
        max_depth=args.max_depth,
        background=Color(*args.background),
        workers=args.workers,
    )

    start_time = time.time()
    canvas = render(camera, world, config)

    output_file = Path(args.output)
    save_canvas(canvas, output_file, tone_map=args.tone_map, gamma=args.gamma)
    logger.info("Saved to %s (%.2fs total)", output_file.absolute(), time.time() - start_time)

    comparison = None
    if args.compare:
        comparison = compare_to_reference(canvas, args.compare, tone_map=args.tone_map, gamma=args.gamma)

    if args.preview:
        if comparison is not None:
            # Both images are display-encoded already
            show_comparison(
                comparison.rendered,
                comparison.reference,
                labels=("Render", Path(args.compare).name),
                gamma=1.0,
            )
        else:
            show_preview(canvas, tone_map=args.tone_map, gamma=args.gamma)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from src.whitted.logging_config import setup_logging

    setup_logging(args.log_level)

    # The tracer runs on the host; Taichi only backs the canvas
    ti.init(arch=ti.cpu)

    try:
        render_demo(args)
        return 0
    except (ValueError, OSError) as e:
        logger.error("Render failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
