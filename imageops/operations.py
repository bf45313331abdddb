"""
The image transformations.

Every function here is pure: it reads an Image and returns a new Image,
leaving the input untouched. Output depth always equals input depth.

- sepia, increase_intensity: per-pixel color formulas (truncate, then clamp)
- flip_horizontal, flip_vertical, rotate_180: pixel rearrangement only
- edge_detect: neighbor comparison; output is one column and one row smaller
"""

import logging
import math

import numpy as np

from config import (
    CHANNEL_SELECTORS,
    MAX_EDGE_THRESHOLD,
    MIN_EDGE_THRESHOLD,
    SEPIA_MATRIX,
)

from .pixels import color_distances, truncate_and_clamp
from .types import Image

logger = logging.getLogger(__name__)


def sepia(image: Image) -> Image:
    """Apply a sepia tone to every pixel.

    For each pixel (r, g, b):
        newRed   = 0.393*r + 0.769*g + 0.189*b
        newGreen = 0.349*r + 0.686*g + 0.168*b
        newBlue  = 0.272*r + 0.534*g + 0.131*b
    computed in float64, truncated toward zero and clamped to [0, depth].

    Examples:
        >>> sepia(Image.from_rows([[(100, 150, 200)]])).pixel(0, 0)
        (192, 171, 133)
    """
    px = image.pixels.astype(np.float64)
    r, g, b = px[..., 0], px[..., 1], px[..., 2]

    channels = [
        truncate_and_clamp(wr * r + wg * g + wb * b, image.depth)
        for wr, wg, wb in SEPIA_MATRIX
    ]
    return Image(np.stack(channels, axis=-1), depth=image.depth)


def increase_intensity(image: Image, intensity: float, channel: str) -> Image:
    """Scale one color channel by an intensity factor.

    The selected channel is multiplied by `intensity`, truncated toward zero
    and clamped to [0, depth]; the other two channels pass through.
    Factors below 1 darken the channel, factors above 1 brighten it.

    Args:
        image: Input image.
        intensity: Non-negative scaling factor.
        channel: 'r', 'g' or 'b'. Any other selector leaves the image unchanged.

    Raises:
        ValueError: If intensity is NaN or infinite.
    """
    if not math.isfinite(intensity):
        raise ValueError(f"intensity must be finite, got {intensity}")

    index = CHANNEL_SELECTORS.get(channel) if isinstance(channel, str) else None
    if index is None:
        logger.debug("Unrecognized channel %r, returning image unchanged", channel)
        return image.copy()

    result = image.pixels.astype(np.int64)
    scaled = image.pixels[..., index].astype(np.float64) * float(intensity)
    result[..., index] = truncate_and_clamp(scaled, image.depth)
    return Image(result, depth=image.depth)


def flip_horizontal(image: Image) -> Image:
    """Mirror each row: the pixel at column i moves to column width-1-i."""
    return Image(image.pixels[:, ::-1], depth=image.depth)


def flip_vertical(image: Image) -> Image:
    """Reverse the row order; pixels keep their column."""
    return Image(image.pixels[::-1], depth=image.depth)


def rotate_180(image: Image) -> Image:
    """Rotate by 180 degrees: (x, y) moves to (width-1-x, height-1-y).

    Implemented as a horizontal flip followed by a vertical flip.
    """
    return flip_vertical(flip_horizontal(image))


def edge_detect(image: Image, threshold: float) -> Image:
    """Mark pixels whose color differs sharply from a neighbor.

    Each pixel is compared with the pixel to its right and the pixel below
    it. If either color distance is strictly greater than `threshold`, the
    output pixel is black (0, 0, 0); otherwise it is white (depth, depth, depth).

    The last column and last row have no right/below neighbor and are
    dropped, so the output is (width-1) x (height-1). Images one pixel
    wide or tall produce an empty result.

    Args:
        image: Input image.
        threshold: Distance above which a pixel is an edge. Expected in the
                   open range (0, 255); other values are still compared.

    Returns:
        Black-and-white image one column and one row smaller than the input.
    """
    if not MIN_EDGE_THRESHOLD < threshold < MAX_EDGE_THRESHOLD:
        logger.warning(
            "Edge threshold %s is outside the expected range (%d, %d)",
            threshold, MIN_EDGE_THRESHOLD, MAX_EDGE_THRESHOLD,
        )

    px = image.pixels
    current = px[:-1, :-1]
    right = px[:-1, 1:]
    below = px[1:, :-1]

    limit = float(threshold)
    edges = (color_distances(current, right) > limit) | (color_distances(current, below) > limit)

    black = np.zeros(3, dtype=np.int64)
    white = np.full(3, image.depth, dtype=np.int64)
    result = np.where(edges[..., np.newaxis], black, white)

    logger.debug(
        "Edge detection %dx%d -> %dx%d, %d edge pixels",
        image.width, image.height, result.shape[1], result.shape[0], int(edges.sum()),
    )
    return Image(result, depth=image.depth)
