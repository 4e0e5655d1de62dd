"""Phong shading integrator and rendering kernels.

This module turns rays into colours and fills the colour buffer. For each
primary ray the shader:

    1. Resolves the nearest hit; a miss returns BACKGROUND_COLOR.
    2. Casts a shadow ray from the hit point toward every light. A light
       contributes only if the shadow ray hits nothing at all. Shadow rays
       are unbounded, so an occluder beyond the light still casts a shadow.
    3. Sums the Phong diffuse and specular contributions of the lit lights
       and adds the ambient term.
    4. Scales each channel by 255, clamps to [0, 255] and truncates to an
       integer. NaN channels become 0.

The colour buffer is preallocated and indexed [y, x] so that row 0 is the
top of the image. Pixels are independent, so the parallel kernel and the
serialised kernel write identical results.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from rray.camera.view import setup_view
    >>> from rray.core.integrator import render_rows, setup_render_target, get_image_numpy
    >>> from rray.scene.intersection import load_scene
    >>>
    >>> load_scene(scene)
    >>> setup_view(scene)
    >>> setup_render_target(scene.width, scene.height)
    >>> render_rows(0, scene.height)
    >>> image = get_image_numpy()
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from rray.camera.view import get_pixel_ray
from rray.core.pixels import Color, Pixel
from rray.core.ray import normalize
from rray.materials.phong import ambient_term, phong_contribution
from rray.scene.intersection import (
    ambient_colour,
    get_material,
    light_colours,
    light_positions,
    nearest_hit,
    num_lights,
)

# Type alias for 3D vectors
vec3 = tm.vec3
ivec3 = tm.ivec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Colour of pixels whose ray hits nothing (dark gray)
BACKGROUND_COLOR = Color(26, 26, 26)

# Largest 8-bit channel value
MAX_CHANNEL = 255.0

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# 8-bit colours stored as i32, indexed [y, x]
_color_buffer = ti.Vector.field(3, dtype=ti.i32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())

# Result of single-pixel and single-ray queries
_probe_colour = ti.Vector.field(3, dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffer.

    Sets the active image dimensions and clears the buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions exceed maximum supported size.
    """
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the colour buffer to zero."""
    _color_buffer.fill(0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Shading
# =============================================================================


@ti.func
def _is_nan(value: ti.f32) -> ti.i32:
    """NaN test on the bit pattern, unaffected by fast-math folding."""
    bits = ti.bit_cast(value, ti.i32)
    return (bits & 0x7FFFFFFF) > 0x7F800000


@ti.func
def to_color(radiance: vec3) -> ivec3:
    """Convert a linear colour to clamped 8-bit channels.

    Args:
        radiance: Colour with channels nominally in [0, 1].

    Returns:
        Integer channels trunc(clamp(255 * c, 0, 255)); NaN maps to 0.
    """
    result = ivec3(0, 0, 0)
    for c in ti.static(range(3)):
        value = radiance[c] * MAX_CHANNEL
        if not _is_nan(value):
            result[c] = ti.cast(tm.clamp(value, 0.0, MAX_CHANNEL), ti.i32)
    return result


@ti.func
def shade(ray_direction: vec3, ray_origin: vec3) -> ivec3:
    """Compute the colour seen along a ray.

    Args:
        ray_direction: The ray direction (need not be normalized).
        ray_origin: The ray origin.

    Returns:
        The 8-bit RGB colour of the nearest surface, lit by ambient light
        and every unoccluded point light, or BACKGROUND_COLOR on a miss.
    """
    colour = ivec3(BACKGROUND_COLOR.r, BACKGROUND_COLOR.g, BACKGROUND_COLOR.b)

    hit_record = nearest_hit(ray_direction, ray_origin)

    if hit_record.hit == 1:
        hit_point = ray_origin + ray_direction * hit_record.distance
        normal = normalize(hit_record.normal)
        view_direction = normalize(ray_direction)
        material = get_material(hit_record.primitive)

        diffuse_sum = vec3(0.0, 0.0, 0.0)
        specular_sum = vec3(0.0, 0.0, 0.0)

        for i in range(num_lights[None]):
            shadow_ray = light_positions[i] - hit_point
            blocker = nearest_hit(shadow_ray, hit_point)
            if blocker.hit == 0:
                diffuse, specular = phong_contribution(
                    material,
                    normal,
                    normalize(shadow_ray),
                    view_direction,
                    light_colours[i],
                )
                diffuse_sum += diffuse
                specular_sum += specular

        total = diffuse_sum + specular_sum + ambient_term(material, ambient_colour[None])
        colour = to_color(total)

    return colour


@ti.func
def trace_pixel(x: ti.i32, y: ti.i32) -> ivec3:
    """Shade the primary ray through pixel (x, y)."""
    ray = get_pixel_ray(x, y)
    return shade(ray.direction, ray.origin)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_rows_parallel(y_start: ti.i32, y_end: ti.i32, width: ti.i32):
    """Render rows [y_start, y_end) with the outer loop parallelized."""
    for y, x in ti.ndrange((y_start, y_end), width):
        _color_buffer[y, x] = trace_pixel(x, y)


@ti.kernel
def _render_rows_serial(y_start: ti.i32, y_end: ti.i32, width: ti.i32):
    """Render rows [y_start, y_end) one pixel at a time, in grid order."""
    ti.loop_config(serialize=True)
    for y, x in ti.ndrange((y_start, y_end), width):
        _color_buffer[y, x] = trace_pixel(x, y)


@ti.kernel
def _render_single_pixel(x: ti.i32, y: ti.i32):
    """Render one pixel into the probe field without touching the colour buffer."""
    # One-iteration outer loop so the light and primitive loops stay serial
    for _ in range(1):
        _probe_colour[None] = trace_pixel(x, y)


@ti.kernel
def _shade_single_ray(direction: vec3, origin: vec3):
    for _ in range(1):
        _probe_colour[None] = shade(direction, origin)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_rows(y_start: int, y_end: int, parallel: bool = True) -> None:
    """Render a band of rows into the colour buffer.

    Scene and view must already be loaded (load_scene, setup_view).

    Args:
        y_start: First row to render.
        y_end: One past the last row to render.
        parallel: Use the parallel kernel. The serial kernel produces the
            same colours.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    y_start = max(0, y_start)
    y_end = min(height, y_end)
    if y_end <= y_start or width == 0:
        return

    if parallel:
        _render_rows_parallel(y_start, y_end, width)
    else:
        _render_rows_serial(y_start, y_end, width)


def render_single_pixel(pixel: Pixel) -> Color:
    """Render one pixel of the loaded scene and view.

    Args:
        pixel: The pixel coordinates.

    Returns:
        The pixel's colour.
    """
    _render_single_pixel(pixel.x, pixel.y)
    color = _probe_colour[None]
    return Color(int(color[0]), int(color[1]), int(color[2]))


def shade_ray(
    direction: tuple[float, float, float],
    origin: tuple[float, float, float],
) -> Color:
    """Shade an arbitrary ray against the loaded scene.

    Args:
        direction: The ray direction.
        origin: The ray origin.

    Returns:
        The colour seen along the ray.
    """
    _shade_single_ray(vec3(*direction), vec3(*origin))
    color = _probe_colour[None]
    return Color(int(color[0]), int(color[1]), int(color[2]))


def get_image_numpy() -> npt.NDArray[np.uint8]:
    """Get the rendered image as a NumPy array.

    Returns:
        Array of shape (height, width, 3) with dtype uint8, indexed [y, x]
        with row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()

    full_image = _color_buffer.to_numpy()
    image = full_image[:height, :width, :]

    return image.astype(np.uint8)
