"""
Slice Extractor

Nearest-voxel extraction of axis-aligned planes from a Volume.
"""

import logging
import numpy as np

from core.base import RenderedImage, ViewPlane
from core.volume import Volume
from .windowing import window_transform


def slice_count(volume: Volume, plane: ViewPlane) -> int:
    """Number of slices along the axis perpendicular to a plane."""
    if plane == ViewPlane.AXIAL:
        return volume.depth
    elif plane == ViewPlane.CORONAL:
        return volume.height
    return volume.width


def slice_index(slice_fraction: float, axis_length: int) -> int:
    """
    Convert a slice position in percent to a voxel index.

    Args:
        slice_fraction: Position along the axis, 0-100
        axis_length: Number of voxels along the axis

    Returns:
        floor(fraction/100 * (axis_length - 1)), clamped to the axis
    """
    idx = int(np.floor((slice_fraction / 100.0) * (axis_length - 1)))
    return max(0, min(idx, axis_length - 1))


def extract_slice(volume: Volume, plane: ViewPlane, slice_fraction: float) -> np.ndarray:
    """
    Extract raw HU values of one plane on a (height, width) canvas.

    Axial rows/columns walk y/x. Coronal rows walk z and columns walk x.
    Sagittal rows walk z and columns walk y. Canvas positions that fall
    outside the volume (for example rows past the depth) are NaN.

    Args:
        volume: Source volume
        plane: Slicing plane
        slice_fraction: Slice position in percent (0-100)

    Returns:
        float64 array (volume.height, volume.width)
    """
    idx = slice_index(slice_fraction, slice_count(volume, plane))
    data = volume.data

    if plane == ViewPlane.AXIAL:
        return data[idx, :, :].copy()

    if plane == ViewPlane.CORONAL:
        plane_data = data[:, idx, :]  # (Z, X)
    else:
        plane_data = data[:, :, idx]  # (Z, Y)

    canvas = np.full((volume.height, volume.width), np.nan)
    rows = min(plane_data.shape[0], volume.height)
    cols = min(plane_data.shape[1], volume.width)
    canvas[:rows, :cols] = plane_data[:rows, :cols]
    return canvas


def render_slice(
    volume: Volume,
    plane: ViewPlane,
    slice_fraction: float,
    window_center: float,
    window_width: float
) -> RenderedImage:
    """Extract a plane and window it for display."""
    raw = extract_slice(volume, plane, slice_fraction)
    logging.debug(f"Slice {plane.value} @ {slice_fraction}%: "
                  f"index {slice_index(slice_fraction, slice_count(volume, plane))}")
    return RenderedImage(window_transform(raw, window_center, window_width))
