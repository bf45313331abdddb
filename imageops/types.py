"""
Type definitions for the image operations.

The Image value is the one data structure every operation consumes and
produces. Pixels live in a single row-major numpy buffer of shape
(height, width, 3), so the rectangular shape is enforced by the array
itself rather than by a list of rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from config import CHANNEL_COUNT, CHANNEL_DEPTH, MIN_CHANNEL_DEPTH

# A single pixel as an (r, g, b) triple of ints
Pixel = tuple[int, int, int]


@dataclass(frozen=True, eq=False, repr=False)
class Image:
    """An immutable RGB raster image.

    The constructor copies and validates its input, then marks the copy
    read-only. Operations never mutate an Image; they build a new one.

    Attributes:
        pixels: Channel values as a (height, width, 3) uint8 array.
                Row order is top-to-bottom, column order left-to-right.
        depth: Maximum channel value (255 for 8-bit images).
    """

    pixels: np.ndarray
    depth: int = CHANNEL_DEPTH

    def __post_init__(self):
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray):
            raise TypeError(f"Expected numpy.ndarray, got {type(pixels).__name__}")

        if pixels.ndim != 3 or pixels.shape[2] != CHANNEL_COUNT:
            raise ValueError(
                f"Image must be a (height, width, {CHANNEL_COUNT}) array, "
                f"got shape {pixels.shape}"
            )

        if pixels.size and not np.issubdtype(pixels.dtype, np.integer):
            raise TypeError(f"Channel values must be integers, got dtype {pixels.dtype}")

        if isinstance(self.depth, bool) or not isinstance(self.depth, (int, np.integer)):
            raise TypeError(f"depth must be int, got {type(self.depth).__name__}")

        if not MIN_CHANNEL_DEPTH <= self.depth <= CHANNEL_DEPTH:
            raise ValueError(
                f"depth must be between {MIN_CHANNEL_DEPTH} and {CHANNEL_DEPTH}, "
                f"got {self.depth}"
            )

        if pixels.size:
            low, high = int(pixels.min()), int(pixels.max())
            if low < 0 or high > self.depth:
                raise ValueError(
                    f"Channel values must be within [0, {self.depth}], "
                    f"got range [{low}, {high}]"
                )

        stored = np.array(pixels, dtype=np.uint8, order="C")
        stored.setflags(write=False)
        object.__setattr__(self, "pixels", stored)
        object.__setattr__(self, "depth", int(self.depth))

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Sequence[Sequence[int]]],
        depth: int = CHANNEL_DEPTH,
        width: int | None = None,
        height: int | None = None,
    ) -> Image:
        """Build an Image from nested rows of (r, g, b) triples.

        Args:
            rows: Top-to-bottom rows, each a left-to-right sequence of triples.
            depth: Maximum channel value.
            width: Declared pixels per row. Derived from the first row if omitted.
            height: Declared row count. Derived from the grid if omitted.

        Raises:
            ValueError: If the grid is ragged, a pixel is not a triple, or the
                        grid disagrees with the declared width/height.
        """
        grid = [list(row) for row in rows]
        if height is None:
            height = len(grid)
        if len(grid) != height:
            raise ValueError(f"Expected {height} rows, got {len(grid)}")
        if width is None:
            width = len(grid[0]) if grid else 0

        for y, row in enumerate(grid):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} pixels, expected {width}")
            for x, pixel in enumerate(row):
                if len(pixel) != CHANNEL_COUNT:
                    raise ValueError(
                        f"Pixel at ({x}, {y}) has {len(pixel)} channels, "
                        f"expected {CHANNEL_COUNT}"
                    )

        pixels = np.array(grid, dtype=np.int64).reshape(height, width, CHANNEL_COUNT)
        return cls(pixels, depth=depth)

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        color: Pixel = (0, 0, 0),
        depth: int = CHANNEL_DEPTH,
    ) -> Image:
        """Build a single-color image."""
        if width < 0 or height < 0:
            raise ValueError(f"Dimensions must be non-negative, got {width}x{height}")
        pixels = np.empty((height, width, CHANNEL_COUNT), dtype=np.int64)
        pixels[...] = color
        return cls(pixels, depth=depth)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        """(width, height) of the image."""
        return self.width, self.height

    def pixel(self, x: int, y: int) -> Pixel:
        """Return the pixel at column x, row y as plain ints."""
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def rows(self) -> list[list[Pixel]]:
        """Return the pixel grid as nested lists of (r, g, b) tuples."""
        return [[tuple(int(v) for v in px) for px in row] for row in self.pixels]

    def copy(self) -> Image:
        return Image(self.pixels, depth=self.depth)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return (
            self.depth == other.depth
            and self.pixels.shape == other.pixels.shape
            and np.array_equal(self.pixels, other.pixels)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height}, depth={self.depth})"
