"""Pytest configuration and shared image fixtures."""
import numpy as np
import pytest

from imageops import Image


@pytest.fixture
def checker_2x2():
    """Black/white 2x2 checkerboard."""
    return Image.from_rows([
        [(0, 0, 0), (255, 255, 255)],
        [(255, 255, 255), (0, 0, 0)],
    ])


@pytest.fixture
def random_image():
    """Deterministic 7x5 image with arbitrary channel values."""
    rng = np.random.default_rng(1234)
    return Image(rng.integers(0, 256, (5, 7, 3), dtype=np.uint8))


@pytest.fixture
def gradient_3x2():
    """3 wide, 2 tall image with distinct pixels."""
    return Image.from_rows([
        [(1, 1, 1), (2, 2, 2), (3, 3, 3)],
        [(4, 4, 4), (5, 5, 5), (6, 6, 6)],
    ])
