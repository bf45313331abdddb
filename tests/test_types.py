"""Unit tests for the Image value type."""

import numpy as np
import pytest

from imageops import Image


class TestImageConstruction:
    """Tests for Image validation."""

    def test_dimensions_from_array(self):
        image = Image(np.zeros((4, 6, 3), dtype=np.uint8))
        assert image.width == 6
        assert image.height == 4
        assert image.shape == (6, 4)
        assert image.depth == 255

    def test_invalid_type_raises(self):
        with pytest.raises(TypeError, match="Expected numpy.ndarray"):
            Image([[(0, 0, 0)]])

    def test_wrong_channel_count_raises(self):
        with pytest.raises(ValueError, match="array"):
            Image(np.zeros((2, 2, 4), dtype=np.uint8))

    def test_2d_array_raises(self):
        with pytest.raises(ValueError):
            Image(np.zeros((2, 2), dtype=np.uint8))

    def test_float_array_raises(self):
        with pytest.raises(TypeError, match="integers"):
            Image(np.zeros((2, 2, 3), dtype=np.float64))

    def test_channel_above_depth_raises(self):
        with pytest.raises(ValueError, match="within"):
            Image(np.full((1, 1, 3), 300, dtype=np.int64))

    def test_negative_channel_raises(self):
        with pytest.raises(ValueError, match="within"):
            Image(np.full((1, 1, 3), -1, dtype=np.int64))

    def test_depth_above_8_bit_raises(self):
        with pytest.raises(ValueError, match="depth"):
            Image(np.zeros((1, 1, 3), dtype=np.uint8), depth=65535)

    def test_zero_area_is_valid(self):
        image = Image(np.zeros((0, 3, 3), dtype=np.uint8))
        assert image.shape == (3, 0)

    def test_input_array_is_copied(self):
        source = np.zeros((2, 2, 3), dtype=np.uint8)
        image = Image(source)
        source[0, 0] = (9, 9, 9)
        assert image.pixel(0, 0) == (0, 0, 0)

    def test_pixels_are_read_only(self):
        image = Image(np.zeros((2, 2, 3), dtype=np.uint8))
        with pytest.raises(ValueError):
            image.pixels[0, 0, 0] = 1


class TestFromRows:
    """Tests for building an Image from nested rows."""

    def test_row_major_layout(self, gradient_3x2):
        assert gradient_3x2.width == 3
        assert gradient_3x2.height == 2
        assert gradient_3x2.pixel(0, 0) == (1, 1, 1)
        assert gradient_3x2.pixel(2, 0) == (3, 3, 3)
        assert gradient_3x2.pixel(0, 1) == (4, 4, 4)

    def test_rows_round_trip(self, gradient_3x2):
        assert gradient_3x2.rows() == [
            [(1, 1, 1), (2, 2, 2), (3, 3, 3)],
            [(4, 4, 4), (5, 5, 5), (6, 6, 6)],
        ]

    def test_ragged_rows_raise(self):
        with pytest.raises(ValueError, match="Row 1 has 1 pixels"):
            Image.from_rows([[(0, 0, 0), (0, 0, 0)], [(0, 0, 0)]])

    def test_declared_width_mismatch_raises(self):
        with pytest.raises(ValueError, match="expected 3"):
            Image.from_rows([[(0, 0, 0), (0, 0, 0)]], width=3)

    def test_declared_height_mismatch_raises(self):
        with pytest.raises(ValueError, match="Expected 2 rows"):
            Image.from_rows([[(0, 0, 0)]], height=2)

    def test_pixel_not_a_triple_raises(self):
        with pytest.raises(ValueError, match="channels"):
            Image.from_rows([[(0, 0)]])

    def test_empty_rows(self):
        image = Image.from_rows([])
        assert image.shape == (0, 0)


class TestEquality:
    def test_equal_images(self, gradient_3x2):
        assert gradient_3x2 == Image.from_rows(gradient_3x2.rows())

    def test_different_pixels(self, gradient_3x2):
        other = Image.from_rows([
            [(1, 1, 1), (2, 2, 2), (3, 3, 3)],
            [(4, 4, 4), (5, 5, 5), (7, 7, 7)],
        ])
        assert gradient_3x2 != other

    def test_different_depth(self):
        pixels = np.zeros((1, 1, 3), dtype=np.uint8)
        assert Image(pixels, depth=255) != Image(pixels, depth=100)

    def test_different_shape_same_size(self):
        a = Image(np.zeros((2, 3, 3), dtype=np.uint8))
        b = Image(np.zeros((3, 2, 3), dtype=np.uint8))
        assert a != b

    def test_blank(self):
        image = Image.blank(3, 2, color=(10, 20, 30))
        assert image.shape == (3, 2)
        assert all(px == (10, 20, 30) for row in image.rows() for px in row)
