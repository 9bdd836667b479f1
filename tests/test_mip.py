"""
Tests for maximum intensity projection.
"""

import unittest
import numpy as np

from core.errors import InvalidWindowError
from core.volume import Volume
from rendering.mip import MIP_SENTINEL, project_max, render_mip
from rendering.raycast import COMPACT_GEOMETRY, MIP_GEOMETRY, sample_rays
from rendering.windowing import window_transform
from simulation.phantom import generate_phantom
from tests.volumes import (
    centroid, constant_volume, image_position, rotation_matrices, volume_with_block, volume_with_voxels
)


class TestRayGeometry(unittest.TestCase):
    """Sample positions of the rotated ray set."""

    def test_sample_count(self):
        self.assertEqual(MIP_GEOMETRY.num_samples(100), 150)
        self.assertEqual(COMPACT_GEOMETRY.num_samples(100), 100)

    def test_unrotated_rays_walk_z(self):
        volume = constant_volume(8, 6, 16)
        samples = sample_rays(volume, 0, 6, 0.0, 0.0, MIP_GEOMETRY)
        self.assertEqual(samples.sz.shape, (6, 8, 24))

        # Pixel (px=3, py=2): x and y fixed, z runs from -4 to 19
        np.testing.assert_array_equal(samples.sx[2, 3], np.full(24, 3))
        np.testing.assert_array_equal(samples.sy[2, 3], np.full(24, 2))
        np.testing.assert_array_equal(samples.sz[2, 3], np.arange(24) - 4)

    def test_row_block_offsets(self):
        volume = constant_volume(8, 6, 16)
        full = sample_rays(volume, 0, 6, 20.0, 35.0, MIP_GEOMETRY)
        block = sample_rays(volume, 2, 5, 20.0, 35.0, MIP_GEOMETRY)
        np.testing.assert_array_equal(block.sy, full.sy[2:5])
        np.testing.assert_array_equal(block.sz, full.sz[2:5])


class TestRotationConvention(unittest.TestCase):
    """Rays rotate about Y first, then about X."""

    def setUp(self):
        # Block of voxels x 11..13, y 7..9, z 3..5; its center sits at
        # (4.5, 0.5, -3.5) from the volume center
        self.volume = volume_with_block(16, center=(12, 8, 4))
        self.offset = (4.5, 0.5, -3.5)
        rx, ry = rotation_matrices(30, 60)
        self.expected = image_position(self.offset, rx @ ry, 16, 16)
        self.opposite_sign = image_position(self.offset, rx @ ry.T, 16, 16)
        self.x_first = image_position(self.offset, ry @ rx, 16, 16)

    def test_conventions_are_distinguishable(self):
        self.assertGreater(np.linalg.norm(self.expected - self.opposite_sign), 3.0)
        self.assertGreater(np.linalg.norm(self.expected - self.x_first), 2.0)

    def test_block_projects_where_rotation_places_it(self):
        bright = project_max(self.volume, 30, 60) == 1000.0
        self.assertTrue(bright.any())

        # Pixel (13, 6) looks straight through the block
        self.assertTrue(bright[6, 13])
        position = centroid(bright)
        self.assertLess(np.linalg.norm(position - self.expected), 1.0)
        self.assertGreater(np.linalg.norm(position - self.opposite_sign), 2.0)
        self.assertGreater(np.linalg.norm(position - self.x_first), 1.0)

    def test_y_rotation_alone_moves_block_sideways(self):
        # +90 about Y maps ray z onto volume x and ray x onto volume -z, so
        # the block at z 3..5 shows in columns 11..13
        bright = project_max(self.volume, 0, 90) == 1000.0
        expected = np.zeros((16, 16), dtype=bool)
        expected[7:10, 11:14] = True
        np.testing.assert_array_equal(bright, expected)


class TestRenderMIP(unittest.TestCase):
    """Windowed projection output."""

    def test_zero_rotation_equals_axis_maximum(self):
        width, height, depth = 64, 64, 40
        data = np.full((depth, height, width), -1000.0)
        data[:, 32, 32] = 100.0
        volume = Volume(data)

        image = render_mip(volume, 0, 0, 100, 200)
        self.assertEqual(image.pixels[32, 32], window_transform(100, 100, 200))
        self.assertEqual(image.pixels[32, 33], window_transform(-1000, 100, 200))
        self.assertEqual(image.shape, (height, width))

    def test_zero_rotation_matches_numpy_max(self):
        volume = generate_phantom(24, 20, 16, rng=np.random.default_rng(3))
        projected = project_max(volume, 0, 0)
        np.testing.assert_array_equal(projected, volume.data.max(axis=0))

    def test_center_voxel_visible_at_any_rotation(self):
        volume = volume_with_voxels(16, 16, 16, {(8, 8, 8): 1000.0}, background=-1000.0)
        for rotation in [(0, 0), (30, 45), (-70, 10), (90, 90)]:
            image = render_mip(volume, rotation[0], rotation[1], 400, 1500)
            self.assertEqual(image.pixels[8, 8], window_transform(1000, 400, 1500))

    def test_rays_missing_volume_get_sentinel(self):
        volume = constant_volume(32, 32, 8, value=500.0)
        projected = project_max(volume, 0, 90)

        # Rotated 90 degrees about Y, the leftmost column samples z = 20
        self.assertTrue(np.all(projected[:, 0] == MIP_SENTINEL))
        self.assertTrue(np.all(projected[:, 16] == 500.0))

        image = render_mip(volume, 0, 90, 100, 200)
        self.assertTrue(np.all(image.pixels[:, 0] == window_transform(MIP_SENTINEL, 100, 200)))
        self.assertTrue(np.all(image.pixels[:, 16] == 255))

    def test_values_below_sentinel_floor_at_sentinel(self):
        volume = constant_volume(8, 8, 8, value=-3000.0)
        projected = project_max(volume, 0, 0)
        self.assertTrue(np.all(projected == MIP_SENTINEL))

    def test_deterministic(self):
        a = generate_phantom(32, 32, 24, rng=np.random.default_rng(11))
        b = generate_phantom(32, 32, 24, rng=np.random.default_rng(11))
        first = render_mip(a, 15, -25, 400, 1500)
        second = render_mip(b, 15, -25, 400, 1500)
        self.assertEqual(first.tobytes(), second.tobytes())

    def test_invalid_window_rejected(self):
        volume = constant_volume(4, 4, 4)
        with self.assertRaises(InvalidWindowError):
            render_mip(volume, 0, 0, 40, 0)

    def test_volume_unchanged(self):
        volume = generate_phantom(16, 16, 12, rng=np.random.default_rng(5))
        before = volume.data.copy()
        render_mip(volume, 10, 20, 400, 1500)
        np.testing.assert_array_equal(volume.data, before)


if __name__ == '__main__':
    unittest.main()
