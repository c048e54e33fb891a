"""Pixel-loop driver.

``render`` traces one primary ray per pixel through ``color_at`` and collects
the results into a Canvas. The world and camera are read-only while
tracing, so rows are independent: with ``workers > 1`` they are farmed out
to a multiprocessing Pool, each worker receiving its own copy of the scene
once through the pool initializer.

Example:
    >>> from src.whitted.core.render import RenderConfig, render
    >>> from src.whitted.scene.demo import create_demo_scene
    >>> world, camera = create_demo_scene(width=64, height=48)
    >>> canvas = render(camera, world, RenderConfig(max_depth=4, workers=4))
"""

import logging
import multiprocessing
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from src.whitted.camera.camera import Camera, ray_for_pixel
from src.whitted.core.canvas import Canvas
from src.whitted.core.config import DEFAULT_MAX_DEPTH
from src.whitted.core.shading import BACKGROUND_COLOR, color_at
from src.whitted.core.tuples import Color
from src.whitted.scene.world import World

logger = logging.getLogger(__name__)

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class RenderConfig:
    """Settings for a render pass.

    Attributes:
        max_depth: Levels of reflection/refraction allowed per primary ray.
        background: Color of rays that hit nothing.
        workers: Number of processes. 1 traces in the calling process.
        log_every_rows: Emit a DEBUG progress line after this many rows.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    background: Color = field(default_factory=lambda: BACKGROUND_COLOR)
    workers: int = 1
    log_every_rows: int = 16

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.log_every_rows < 1:
            raise ValueError(f"log_every_rows must be at least 1, got {self.log_every_rows}")


def render_pixel(
    camera: Camera,
    world: World,
    px: int,
    py: int,
    max_depth: int = DEFAULT_MAX_DEPTH,
    background: Color = BACKGROUND_COLOR,
) -> Color:
    """Trace the primary ray through one pixel."""
    return color_at(world, ray_for_pixel(camera, px, py), max_depth, background=background)


def _render_row(
    camera: Camera, world: World, config: RenderConfig, py: int
) -> npt.NDArray[np.float32]:
    row = np.empty((camera.hsize, 3), dtype=np.float32)
    for px in range(camera.hsize):
        color = render_pixel(camera, world, px, py, config.max_depth, config.background)
        row[px] = color.data
    return row


# Scene copy held by each pool worker (set by the initializer)
_worker_state: dict = {}


def _init_worker(camera: Camera, world: World, config: RenderConfig) -> None:
    _worker_state["camera"] = camera
    _worker_state["world"] = world
    _worker_state["config"] = config


def _render_row_in_worker(py: int) -> tuple[int, npt.NDArray[np.float32]]:
    state = _worker_state
    return py, _render_row(state["camera"], state["world"], state["config"], py)


def render(
    camera: Camera,
    world: World,
    config: RenderConfig | None = None,
    callback: ProgressCallback | None = None,
) -> Canvas:
    """Render the world as seen by the camera.

    Args:
        camera: Supplies the canvas size and primary rays.
        world: The scene to trace.
        config: Render settings (defaults to ``RenderConfig()``).
        callback: Optional progress hook, called after each finished row
            with (rows_done, total_rows). Rows may finish out of order when
            several workers are used.

    Returns:
        A Canvas of camera.hsize x camera.vsize unclamped colors.
    """
    config = config if config is not None else RenderConfig()
    world.validate()

    height, width = camera.vsize, camera.hsize
    image = np.zeros((height, width, 3), dtype=np.float32)

    logger.info(
        "Rendering %dx%d with %d objects, %d lights, max depth %d, %d worker(s)",
        width,
        height,
        len(world.objects),
        len(world.lights),
        config.max_depth,
        config.workers,
    )
    start = time.perf_counter()

    def row_done(py: int, row: npt.NDArray[np.float32], rows_done: int) -> None:
        image[py] = row
        if rows_done % config.log_every_rows == 0 or rows_done == height:
            logger.debug("Rendered %d/%d rows", rows_done, height)
        if callback is not None:
            callback(rows_done, height)

    if config.workers == 1:
        for py in range(height):
            row_done(py, _render_row(camera, world, config, py), py + 1)
    else:
        with multiprocessing.Pool(
            processes=config.workers,
            initializer=_init_worker,
            initargs=(camera, world, config),
        ) as pool:
            for rows_done, (py, row) in enumerate(
                pool.imap_unordered(_render_row_in_worker, range(height)), start=1
            ):
                row_done(py, row, rows_done)

    canvas = Canvas(width, height)
    canvas.from_numpy(image)

    logger.info("Finished render in %.2fs", time.perf_counter() - start)
    return canvas
