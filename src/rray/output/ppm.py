"""Plain-text PPM (P3) output.

The P3 format written here is:

    P3
    <width> <height>
    255
    <r> <g> <b> <r> <g> <b> ...     (one line per row, top row first)

Each channel is a decimal integer in [0, 255]. Every triple is followed by
a single space, so each row line ends with a trailing space.

Example:
    >>> import numpy as np
    >>> from rray.output.ppm import format_ppm
    >>> format_ppm(np.array([[[1, 2, 3]]], dtype=np.uint8))
    'P3\\n1 1\\n255\\n1 2 3 \\n'
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt

from rray.core.pixels import PixelGrid

MAX_VALUE = 255


def _check_buffer(buffer: npt.NDArray[np.integer]) -> None:
    if buffer.ndim != 3 or buffer.shape[2] != 3:
        raise ValueError(f"Colour buffer must have shape (height, width, 3), got {buffer.shape}")


def format_ppm(buffer: npt.NDArray[np.integer]) -> str:
    """Serialize a colour buffer as P3 text.

    Args:
        buffer: Array of shape (height, width, 3) indexed [y, x].

    Returns:
        The complete P3 document.

    Raises:
        ValueError: If the buffer does not have shape (height, width, 3).
    """
    _check_buffer(buffer)
    height, width = buffer.shape[0], buffer.shape[1]
    channels = np.clip(buffer, 0, MAX_VALUE).astype(np.int64)

    lines = ["P3", f"{width} {height}", str(MAX_VALUE)]
    for row in PixelGrid(width, height).rows():
        lines.append(
            "".join(
                f"{channels[p.y, p.x, 0]} {channels[p.y, p.x, 1]} {channels[p.y, p.x, 2]} "
                for p in row
            )
        )
    return "\n".join(lines) + "\n"


def write_ppm(buffer: npt.NDArray[np.integer], stream: TextIO) -> None:
    """Write a colour buffer as P3 text to an open text stream."""
    stream.write(format_ppm(buffer))


def save_ppm(buffer: npt.NDArray[np.integer], filepath: str | Path) -> None:
    """Save a colour buffer as a P3 file.

    Args:
        buffer: Array of shape (height, width, 3) indexed [y, x].
        filepath: Output file path.
    """
    with open(filepath, "w", encoding="ascii", newline="\n") as f:
        write_ppm(buffer, f)
