"""Output module for writing rendered images.

Components:
    ppm: Plain-text PPM (P3) serialization
    export: PNG export via Pillow and extension-based format dispatch

All functions take the (height, width, 3) colour buffer returned by
rray.core.render.render().
"""

from .export import load_png, save_image, save_png, to_uint8
from .ppm import format_ppm, save_ppm, write_ppm

__all__ = [
    "format_ppm",
    "write_ppm",
    "save_ppm",
    "save_png",
    "save_image",
    "load_png",
    "to_uint8",
]
