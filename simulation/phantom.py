"""
Phantom Generator

Builds a synthetic head CT volume from nested ellipsoidal regions.
Used as a demonstration and test data source in place of a DICOM loader.
"""

from typing import List, Optional, Tuple
import logging
import numpy as np

from config import EllipsoidRegion, PhantomConfig, DEFAULT_PHANTOM
from core.errors import InvalidDimensionsError
from core.volume import Volume


def ellipsoid_distance(
    region: EllipsoidRegion,
    shape: Tuple[int, int, int],
    reference_shape: Tuple[int, int, int]
) -> np.ndarray:
    """
    Normalized ellipsoid distance for every voxel of a grid.

    A value <= 1.0 means the voxel lies inside the region. Region geometry
    is scaled from reference_shape to the grid size per axis.

    Args:
        region: Region to evaluate
        shape: Grid shape (depth, height, width)
        reference_shape: Grid the region is defined on (width, height, depth)

    Returns:
        Distance array of the given shape
    """
    depth, height, width = shape
    scale = np.array([width, height, depth], dtype=np.float64) / np.array(reference_shape, dtype=np.float64)
    center = np.array(region.center) * scale
    radii = np.array(region.radii) * scale

    # Offsets from the volume center, broadcast to (Z, Y, X)
    dx = (np.arange(width) - width / 2 - center[0])[None, None, :]
    dy = (np.arange(height) - height / 2 - center[1])[None, :, None]
    dz = (np.arange(depth) - depth / 2 - center[2])[:, None, None]

    return np.sqrt((dx / radii[0])**2 + (dy / radii[1])**2 + (dz / radii[2])**2)


def region_masks(
    shape: Tuple[int, int, int],
    config: PhantomConfig = DEFAULT_PHANTOM
) -> List[np.ndarray]:
    """Membership mask of every configured region, in evaluation order."""
    return [
        ellipsoid_distance(region, shape, config.reference_shape) <= 1.0
        for region in config.regions
    ]


def generate_phantom(
    width: int,
    height: int,
    depth: int,
    rng: Optional[np.random.Generator] = None,
    config: PhantomConfig = DEFAULT_PHANTOM
) -> Volume:
    """
    Generate a synthetic head phantom.

    Every voxel starts as background; each region then claims the voxels
    inside it, so later regions override earlier ones.

    Args:
        width: Extent along x
        height: Extent along y
        depth: Extent along z
        rng: Random source for region values (a fresh unseeded one if None)
        config: Region table and background

    Returns:
        Volume with values base + uniform(0, spread) of the winning region
    """
    for name, dim in (("width", width), ("height", height), ("depth", depth)):
        if dim <= 0:
            raise InvalidDimensionsError(f"{name} must be positive, got {dim}")

    if rng is None:
        rng = np.random.default_rng()

    shape = (depth, height, width)
    base = np.full(shape, config.background_base, dtype=np.float64)
    spread = np.full(shape, config.background_spread, dtype=np.float64)

    for region, mask in zip(config.regions, region_masks(shape, config)):
        base[mask] = region.base
        spread[mask] = region.spread
        logging.debug(f"Phantom region '{region.name}': {int(mask.sum())} voxels")

    # One uniform draw per voxel, in buffer order
    data = base + rng.random(shape) * spread

    logging.info(f"Phantom generated: {width}x{height}x{depth}, "
                 f"{len(config.regions)} regions")
    return Volume(data)
