"""View setup and per-pixel primary ray generation.

The view setup derives the image-plane geometry from the scene once per
render:

    aspect_ratio  = width / height
    view_distance = height / tan(fov / 2)
    horizontal    = normalize(cross(view, up))
    top_left      = camera + view * view_distance
                    - horizontal * width / 2 - up * height / 2

The image plane is measured in pixels: pixel (x, y) sits at

    top_left + horizontal * (aspect_ratio * x) + up * y

and its primary ray starts at the camera and points at that position. The
up vector is used as given, so the row index grows along it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from rray.camera.view import compute_view_setup, setup_view, get_pixel_ray
    >>> view = compute_view_setup(scene)
    >>> setup_view(scene, view)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_pixel_ray(0, 0)  # Ray through the top-left pixel
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

from rray.core.ray import Ray, make_ray, vec3
from rray.scene.model import DegenerateSceneError, Scene

# =============================================================================
# View Data Structures
# =============================================================================


class DegenerateViewError(DegenerateSceneError):
    """The view and up vectors do not span an image plane."""


@dataclass(frozen=True)
class ViewSetup:
    """Image-plane geometry derived from a scene.

    Attributes:
        aspect_ratio: Image width divided by image height.
        view_distance: Distance from the camera to the image plane, in
            multiples of the view vector's length.
        horizontal: Unit vector along which the column index grows.
        top_left: World-space position of pixel (0, 0).
    """

    aspect_ratio: float
    view_distance: float
    horizontal: tuple[float, float, float]
    top_left: tuple[float, float, float]


# =============================================================================
# Taichi Fields for View State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_up = ti.Vector.field(3, dtype=ti.f32, shape=())
_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())
_top_left = ti.Vector.field(3, dtype=ti.f32, shape=())
_aspect_ratio = ti.field(dtype=ti.f32, shape=())


# =============================================================================
# View Setup (Python-side, called once per render)
# =============================================================================


def compute_view_setup(scene: Scene) -> ViewSetup:
    """Derive the image-plane geometry of a scene.

    Args:
        scene: The scene to view.

    Returns:
        The ViewSetup for the scene.

    Raises:
        DegenerateViewError: If view and up are zero or parallel, so the
            horizontal axis is undefined.
    """
    width = float(scene.width)
    height = float(scene.height)

    aspect_ratio = width / height
    view_distance = height / math.tan(math.radians(scene.fov) / 2.0)

    camera = np.array(scene.camera, dtype=np.float64)
    view = np.array(scene.view, dtype=np.float64)
    up = np.array(scene.up, dtype=np.float64)

    horizontal = np.cross(view, up)
    norm = np.linalg.norm(horizontal)
    if norm < 1e-12:
        raise DegenerateViewError(
            f"View direction {scene.view} and up vector {scene.up} do not span an image plane"
        )
    horizontal = horizontal / norm

    center = camera + view * view_distance
    top_left = center + horizontal * (width / -2.0) + up * (height / -2.0)

    return ViewSetup(
        aspect_ratio=aspect_ratio,
        view_distance=view_distance,
        horizontal=(float(horizontal[0]), float(horizontal[1]), float(horizontal[2])),
        top_left=(float(top_left[0]), float(top_left[1]), float(top_left[2])),
    )


def setup_view(scene: Scene, view: ViewSetup | None = None) -> ViewSetup:
    """Store the view geometry in Taichi fields for ray generation.

    Args:
        scene: The scene supplying the camera position and up vector.
        view: A precomputed ViewSetup. Computed from the scene if omitted.

    Returns:
        The ViewSetup that was stored.

    Raises:
        DegenerateViewError: If the view setup has to be computed and the
            scene's view and up vectors are degenerate.
    """
    if view is None:
        view = compute_view_setup(scene)

    _camera_origin[None] = list(scene.camera)
    _camera_up[None] = list(scene.up)
    _horizontal[None] = list(view.horizontal)
    _top_left[None] = list(view.top_left)
    _aspect_ratio[None] = view.aspect_ratio

    return view


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_pixel_position(x: ti.i32, y: ti.i32) -> vec3:
    """World-space position of pixel (x, y) on the image plane."""
    return (
        _top_left[None]
        + _horizontal[None] * (_aspect_ratio[None] * ti.cast(x, ti.f32))
        + _camera_up[None] * ti.cast(y, ti.f32)
    )


@ti.func
def get_pixel_ray(x: ti.i32, y: ti.i32) -> Ray:
    """Generate the primary ray through pixel (x, y).

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).

    Returns:
        A Ray from the camera position toward the pixel's image-plane
        position. The direction is not normalized.
    """
    origin = _camera_origin[None]
    return make_ray(origin, get_pixel_position(x, y) - origin)


# =============================================================================
# Utility Functions
# =============================================================================


def get_view_info() -> dict[str, tuple[float, float, float] | float]:
    """Get the stored view state for debugging.

    Returns:
        Dictionary with origin, up, horizontal, top_left and aspect_ratio.
    """
    origin_vec = _camera_origin[None]
    up_vec = _camera_up[None]
    h_vec = _horizontal[None]
    tl_vec = _top_left[None]

    return {
        "origin": (float(origin_vec[0]), float(origin_vec[1]), float(origin_vec[2])),
        "up": (float(up_vec[0]), float(up_vec[1]), float(up_vec[2])),
        "horizontal": (float(h_vec[0]), float(h_vec[1]), float(h_vec[2])),
        "top_left": (float(tl_vec[0]), float(tl_vec[1]), float(tl_vec[2])),
        "aspect_ratio": float(_aspect_ratio[None]),
    }
