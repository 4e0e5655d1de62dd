"""Camera module for view setup and primary ray generation.

Components:
    view: Image-plane geometry and the per-pixel ray mapper

Camera responsibilities:
    - Derive aspect ratio, image-plane distance and screen axes from the scene
    - Locate the top-left pixel in world space
    - Map integer pixel coordinates to world-space primary rays

There is one ray per pixel through the pixel's corner position; no jitter
or sub-pixel sampling is applied.
"""

from .view import (
    DegenerateViewError,
    ViewSetup,
    compute_view_setup,
    get_pixel_position,
    get_pixel_ray,
    get_view_info,
    setup_view,
)

__all__ = [
    "ViewSetup",
    "DegenerateViewError",
    "compute_view_setup",
    "setup_view",
    "get_pixel_position",
    "get_pixel_ray",
    "get_view_info",
]
