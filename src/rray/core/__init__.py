"""Core rendering module.

This module contains the fundamental building blocks of the renderer:

Components:
    ray: Ray data structure and vector utilities
    pixels: Pixel records and the re-iterable pixel grid
    integrator: Phong shader, per-pixel trace and rendering kernels
    render: Render driver with row-band progress and cancellation

Each primary ray is resolved against every primitive in the scene, shaded
with ambient, diffuse and specular terms and tested for hard shadows against
each point light. There are no secondary bounces.

All compute-intensive operations use Taichi kernels.
"""

from .pixels import Color, Pixel, PixelGrid
from .ray import (
    Ray,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    mul,
    near_zero,
    normalize,
    ray_at,
    reflect,
    vec3,
)

# Note: integrator and render are NOT imported here because they declare
# Taichi fields. Import them directly from rray.core.integrator or
# rray.core.render once ti.init() has been called.

__all__ = [
    "Color",
    "Pixel",
    "PixelGrid",
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "mul",
    "reflect",
    "near_zero",
]
