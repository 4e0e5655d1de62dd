"""Image export utilities for rendered colour buffers.

Supported formats:
    - PNG (8-bit RGB via Pillow)
    - PPM (plain-text P3, see rray.output.ppm)

Example:
    >>> from rray.output.export import save_image
    >>> from rray.core.render import render
    >>>
    >>> image = render(scene)
    >>> save_image(image, "output.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from rray.output.ppm import save_ppm

PNG_EXTENSIONS = (".png",)
PPM_EXTENSIONS = (".ppm", ".pnm")


def to_uint8(buffer: npt.NDArray[np.integer]) -> npt.NDArray[np.uint8]:
    """Clamp a colour buffer to [0, 255] and convert it to uint8.

    Args:
        buffer: Array of shape (height, width, 3).

    Returns:
        uint8 array of the same shape.

    Raises:
        ValueError: If the buffer does not have shape (height, width, 3).
    """
    if buffer.ndim != 3 or buffer.shape[2] != 3:
        raise ValueError(f"Colour buffer must have shape (height, width, 3), got {buffer.shape}")
    return np.clip(buffer, 0, 255).astype(np.uint8)


def save_png(buffer: npt.NDArray[np.integer], filepath: str | Path) -> None:
    """Save a colour buffer as an 8-bit RGB PNG file.

    Args:
        buffer: Array of shape (height, width, 3) indexed [y, x].
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(to_uint8(buffer))
    pil_image.save(filepath)


def save_image(buffer: npt.NDArray[np.integer], filepath: str | Path) -> None:
    """Save a colour buffer, choosing the format from the file extension.

    Args:
        buffer: Array of shape (height, width, 3) indexed [y, x].
        filepath: Output path ending in .png, .ppm or .pnm.

    Raises:
        ValueError: If the extension is not supported.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix in PNG_EXTENSIONS:
        save_png(buffer, filepath)
    elif suffix in PPM_EXTENSIONS:
        save_ppm(buffer, filepath)
    else:
        raise ValueError(
            f"Unsupported image format '{suffix}'. "
            f"Use one of: {', '.join(PNG_EXTENSIONS + PPM_EXTENSIONS)}"
        )


def load_png(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Load an RGB image file into a (height, width, 3) uint8 array."""
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGB"), dtype=np.uint8)
