"""
Ray Geometry

Shared orthographic ray set for the MIP and surface renderers.

Each output pixel (px, py) owns one ray along the volume's native z axis,
centered on the volume midpoint and rotated about Y, then about X. Sample t
sits at z = t - bias_factor * depth before rotation, so the ray starts in
front of the volume and sweeps sample_factor * depth samples through it.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np

from core.volume import Volume


@dataclass(frozen=True)
class RayGeometry:
    """
    Ray sweep constants.

    Attributes:
        sample_factor: Samples per ray as a multiple of the volume depth
        bias_factor: Offset of the first sample behind the center, in depths
    """
    sample_factor: float
    bias_factor: float

    def num_samples(self, depth: int) -> int:
        return int(self.sample_factor * depth)


# 1.5 depths of samples starting 0.75 depths in front of the center covers
# the volume at any rotation angle
MIP_GEOMETRY = RayGeometry(sample_factor=1.5, bias_factor=0.75)
SURFACE_GEOMETRY = MIP_GEOMETRY

# Single-depth sweep; corners drop out of view when rotated
COMPACT_GEOMETRY = RayGeometry(sample_factor=1.0, bias_factor=0.5)


def rotation_terms(rotation_x: float, rotation_y: float) -> Tuple[float, float, float, float]:
    """Return (cos X, sin X, cos Y, sin Y) for rotation angles in degrees."""
    ax = np.radians(rotation_x)
    ay = np.radians(rotation_y)
    return float(np.cos(ax)), float(np.sin(ax)), float(np.cos(ay)), float(np.sin(ay))


@dataclass
class RaySamples:
    """
    Voxel coordinates of every sample of a block of rays.

    All arrays have shape (rows, width, samples); axis 2 is t.
    """
    sx: np.ndarray
    sy: np.ndarray
    sz: np.ndarray

    def inside(self, volume: Volume, margin: int = 0) -> np.ndarray:
        """Mask of samples at least margin voxels away from every face."""
        return (
            (self.sx >= margin) & (self.sx < volume.width - margin) &
            (self.sy >= margin) & (self.sy < volume.height - margin) &
            (self.sz >= margin) & (self.sz < volume.depth - margin)
        )

    def values(self, volume: Volume, mask: np.ndarray, fill: float) -> np.ndarray:
        """Gather voxel values where mask is set, fill elsewhere."""
        flat_index = np.where(
            mask,
            self.sz * (volume.width * volume.height) + self.sy * volume.width + self.sx,
            0
        )
        return np.where(mask, volume.data.ravel()[flat_index], fill)


def sample_rays(
    volume: Volume,
    row_start: int,
    row_stop: int,
    rotation_x: float,
    rotation_y: float,
    geometry: RayGeometry
) -> RaySamples:
    """
    Compute sample voxel coordinates for output rows [row_start, row_stop).

    Args:
        volume: Volume being rendered
        row_start: First output row
        row_stop: One past the last output row
        rotation_x: Rotation about X in degrees (applied second)
        rotation_y: Rotation about Y in degrees (applied first)
        geometry: Ray sweep constants

    Returns:
        RaySamples with floor-rounded integer coordinates
    """
    width, height, depth = volume.width, volume.height, volume.depth
    cos_x, sin_x, cos_y, sin_y = rotation_terms(rotation_x, rotation_y)

    # Ray-space coordinates relative to the volume center
    x = (np.arange(width, dtype=np.float64) - width / 2)[None, :, None]
    y = (np.arange(row_start, row_stop, dtype=np.float64) - height / 2)[:, None, None]
    z = (np.arange(geometry.num_samples(depth), dtype=np.float64) - geometry.bias_factor * depth)[None, None, :]

    # Y rotation, then X rotation
    x1 = x * cos_y + z * sin_y
    z1 = -x * sin_y + z * cos_y
    y1 = y * cos_x - z1 * sin_x
    z2 = y * sin_x + z1 * cos_x

    shape = np.broadcast_shapes(x1.shape, y1.shape, z2.shape)
    return RaySamples(
        sx=np.broadcast_to(np.floor(x1 + width / 2).astype(np.int64), shape),
        sy=np.floor(y1 + height / 2).astype(np.int64),
        sz=np.floor(z2 + depth / 2).astype(np.int64),
    )
