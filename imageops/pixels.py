"""
Per-pixel numeric helpers shared by the operations.

All functions are pure and work on numpy arrays of channel values.
Float-to-int conversion always truncates toward zero, never rounds.
"""

import math
from typing import Sequence

import numpy as np

from config import CHANNEL_DEPTH


def clamp(values: np.ndarray, low: int = 0, high: int = CHANNEL_DEPTH) -> np.ndarray:
    """Constrain channel values to the closed range [low, high]."""
    return np.clip(values, low, high)


def truncate_and_clamp(values: np.ndarray, high: int = CHANNEL_DEPTH) -> np.ndarray:
    """Truncate float channel values toward zero, then clamp them to [0, high].

    Clamping runs on the truncated floats before the integer cast so huge
    products (e.g. a large intensity factor) cannot overflow int64. Both
    bounds are integers, so the result is the same as clamping afterwards.

    Examples:
        >>> truncate_and_clamp(np.array([192.45, 0.99, -0.5, 400.0]))
        array([192,   0,   0, 255])
    """
    return clamp(np.trunc(values), 0, high).astype(np.int64)


def color_distance(first: Sequence[int], second: Sequence[int]) -> float:
    """Euclidean distance between two pixels in RGB space."""
    dr = float(first[0] - second[0])
    dg = float(first[1] - second[1])
    db = float(first[2] - second[2])
    return math.sqrt(dr * dr + dg * dg + db * db)


def color_distances(first: np.ndarray, second: np.ndarray) -> np.ndarray:
    """Element-wise color_distance over two equally shaped (..., 3) arrays."""
    diff = first.astype(np.float64) - second.astype(np.float64)
    return np.sqrt((diff * diff).sum(axis=-1))
