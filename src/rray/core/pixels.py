"""Pixel and colour records and the pixel grid generator.

The grid enumerates integer pixel coordinates of the output raster in
row-major order: row y = 0 (the top of the image) first, and within a row
from x = 0 (left) to x = width - 1. The rendering kernels walk the same
order with ``ti.ndrange(height, width)``, and the colour buffer is indexed
``[y, x]`` so both agree.

Example:
    >>> grid = PixelGrid(3, 2)
    >>> list(grid)[:2]
    [Pixel(x=0, y=0), Pixel(x=1, y=0)]
    >>> list(grid.row_bands(1))
    [(0, 1), (1, 2)]
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import NamedTuple


class Pixel(NamedTuple):
    """Integer coordinates of one output pixel.

    Attributes:
        x: Column, 0 at the left edge.
        y: Row, 0 at the top edge.
    """

    x: int
    y: int


class Color(NamedTuple):
    """An 8-bit RGB colour, each channel in [0, 255]."""

    r: int
    g: int
    b: int


@dataclass(frozen=True)
class PixelGrid:
    """All pixel coordinates of a width x height raster.

    The grid holds no iteration state, so it can be enumerated any number
    of times. A zero width or height gives an empty grid.

    Attributes:
        width: Number of columns.
        height: Number of rows.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Pixel grid dimensions must be non-negative, got {self.width}x{self.height}"
            )

    def __iter__(self) -> Iterator[Pixel]:
        for y in range(self.height):
            for x in range(self.width):
                yield Pixel(x, y)

    def __len__(self) -> int:
        return self.width * self.height

    def rows(self) -> Iterator[list[Pixel]]:
        """Yield the pixels of each row, top row first."""
        for y in range(self.height):
            yield [Pixel(x, y) for x in range(self.width)]

    def row_bands(self, rows_per_band: int) -> Iterator[tuple[int, int]]:
        """Split the rows into consecutive half-open bands.

        Args:
            rows_per_band: Maximum number of rows in each band (positive).

        Yields:
            (y_start, y_end) pairs covering [0, height) without overlap.
            Nothing is yielded for an empty grid.

        Raises:
            ValueError: If rows_per_band is not positive.
        """
        if rows_per_band <= 0:
            raise ValueError(f"rows_per_band must be positive, got {rows_per_band}")
        if self.width == 0:
            return
        for y_start in range(0, self.height, rows_per_band):
            yield y_start, min(y_start + rows_per_band, self.height)
