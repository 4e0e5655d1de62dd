"""Render driver: scene in, colour buffer out.

This module wraps the integrator kernels with the per-render bookkeeping:
- Scene validation before any work starts
- One view setup per render, shared by every pixel
- Row-band rendering with progress callbacks
- Cooperative cancellation between bands (e.g. for a deadline)

Every render reloads the scene and view into the Taichi fields, so calling
render() twice on the same scene returns identical buffers.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from rray.core.render import render
    >>> from rray.scene.reference import create_reference_scene
    >>>
    >>> image = render(create_reference_scene())
    >>> image.shape
    (240, 320, 3)
"""

from collections.abc import Callable

import numpy as np
import numpy.typing as npt

from rray.camera.view import compute_view_setup, setup_view
from rray.core.integrator import get_image_numpy, render_rows, render_single_pixel, setup_render_target
from rray.core.pixels import Color, Pixel, PixelGrid
from rray.scene.intersection import load_scene
from rray.scene.model import Scene, validate_scene

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# Returns True when the render should stop
CancelCheck = Callable[[], bool]


class RenderCancelledError(RuntimeError):
    """Raised when a render is stopped by its cancellation check."""


def prepare_scene(scene: Scene) -> None:
    """Validate a scene and load it and its view into the Taichi fields.

    Args:
        scene: The scene to load.

    Raises:
        DegenerateSceneError: If the scene cannot be rendered.
        RuntimeError: If the scene exceeds the primitive or light capacity.
    """
    validate_scene(scene)
    view = compute_view_setup(scene)
    load_scene(scene)
    setup_view(scene, view)


def render(
    scene: Scene,
    *,
    parallel: bool = True,
    rows_per_batch: int | None = None,
    callback: ProgressCallback | None = None,
    should_cancel: CancelCheck | None = None,
) -> npt.NDArray[np.uint8]:
    """Render a scene to an 8-bit colour buffer.

    Args:
        scene: The scene to render.
        parallel: Evaluate pixels with the parallel kernel. The serial
            kernel gives byte-identical output.
        rows_per_batch: Number of rows per kernel launch. Defaults to the
            whole image in one batch.
        callback: Optional callback called after each batch with
            (rows_done, total_rows).
        should_cancel: Optional check polled before each batch. When it
            returns True the render stops with RenderCancelledError.

    Returns:
        Array of shape (height, width, 3) with dtype uint8, indexed [y, x]
        with row 0 at the top of the image.

    Raises:
        DegenerateSceneError: If the scene cannot be rendered.
        ValueError: If the image is larger than the render target.
        RenderCancelledError: If should_cancel() returned True.

    Example:
        >>> def progress(done, total):
        ...     print(f"Rows: {done}/{total}")
        >>> image = render(scene, rows_per_batch=16, callback=progress)
    """
    prepare_scene(scene)
    setup_render_target(scene.width, scene.height)

    grid = PixelGrid(scene.width, scene.height)
    batch = rows_per_batch if rows_per_batch is not None else scene.height

    for y_start, y_end in grid.row_bands(batch):
        if should_cancel is not None and should_cancel():
            raise RenderCancelledError(
                f"Render cancelled after {y_start} of {scene.height} rows"
            )
        render_rows(y_start, y_end, parallel=parallel)
        if callback is not None:
            callback(y_end, scene.height)

    return get_image_numpy()


def render_pixel(scene: Scene, pixel: Pixel) -> Color:
    """Render a single pixel of a scene.

    Useful for probing one pixel without rendering the whole image.

    Args:
        scene: The scene to render.
        pixel: The pixel to evaluate.

    Returns:
        The pixel's colour.

    Raises:
        DegenerateSceneError: If the scene cannot be rendered.
        ValueError: If the pixel lies outside the image.
    """
    if not (0 <= pixel.x < scene.width and 0 <= pixel.y < scene.height):
        raise ValueError(
            f"Pixel ({pixel.x}, {pixel.y}) is outside the {scene.width}x{scene.height} image"
        )
    prepare_scene(scene)
    return render_single_pixel(pixel)
