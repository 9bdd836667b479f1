"""
Tests for the Volume data model.
"""

import unittest
import numpy as np

from core.errors import InvalidDimensionsError, RenderError
from core.volume import Volume


class TestVolumeConstruction(unittest.TestCase):
    """Construction-time validation."""

    def test_from_buffer_uses_x_fastest_layout(self):
        width, height, depth = 4, 3, 2
        buffer = np.arange(width * height * depth, dtype=np.float64)
        volume = Volume.from_buffer(buffer, width, height, depth)

        self.assertEqual(volume.shape, (depth, height, width))
        for z in range(depth):
            for y in range(height):
                for x in range(width):
                    self.assertEqual(volume.value_at(x, y, z), buffer[volume.index(x, y, z)])
        self.assertEqual(volume.index(1, 2, 1), 1 * 4 * 3 + 2 * 4 + 1)

    def test_buffer_length_mismatch_rejected(self):
        with self.assertRaises(InvalidDimensionsError):
            Volume.from_buffer(np.zeros(10), 2, 2, 2)

    def test_zero_dimension_rejected(self):
        with self.assertRaises(InvalidDimensionsError):
            Volume.from_buffer([], 0, 4, 4)
        with self.assertRaises(InvalidDimensionsError):
            Volume(np.zeros((0, 4, 4)))

    def test_non_3d_rejected(self):
        with self.assertRaises(InvalidDimensionsError):
            Volume(np.zeros((4, 4)))

    def test_errors_are_value_errors(self):
        self.assertTrue(issubclass(InvalidDimensionsError, RenderError))
        self.assertTrue(issubclass(InvalidDimensionsError, ValueError))


class TestVolumeImmutability(unittest.TestCase):
    """A volume never changes after construction."""

    def test_data_is_read_only(self):
        volume = Volume(np.zeros((2, 2, 2)))
        with self.assertRaises(ValueError):
            volume.data[0, 0, 0] = 1.0

    def test_source_array_changes_do_not_leak(self):
        source = np.zeros((2, 2, 2))
        volume = Volume(source)
        source[0, 0, 0] = 5.0
        self.assertEqual(volume.value_at(0, 0, 0), 0.0)

    def test_origin_is_read_only(self):
        source = np.array([1.0, 2.0, 3.0])
        volume = Volume(np.zeros((2, 2, 2)), origin=source)
        with self.assertRaises(ValueError):
            volume.origin[2] = 5.0
        source[2] = 5.0
        np.testing.assert_array_equal(volume.origin, [1.0, 2.0, 3.0])


class TestVolumeAccess(unittest.TestCase):
    """Accessors and bounds."""

    def setUp(self):
        self.volume = Volume.from_buffer(np.arange(24, dtype=np.float64), 4, 3, 2)

    def test_dimensions(self):
        self.assertEqual((self.volume.width, self.volume.height, self.volume.depth), (4, 3, 2))

    def test_contains(self):
        self.assertTrue(self.volume.contains(3, 2, 1))
        self.assertFalse(self.volume.contains(4, 0, 0))
        self.assertFalse(self.volume.contains(0, -1, 0))

    def test_value_at_out_of_bounds(self):
        with self.assertRaises(IndexError):
            self.volume.value_at(0, 0, 2)

    def test_value_range(self):
        self.assertEqual(self.volume.value_range(), (0.0, 23.0))


if __name__ == '__main__':
    unittest.main()
