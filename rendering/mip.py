"""
MIP Ray Caster

Maximum intensity projection through a rotated orthographic ray set.
"""

from typing import Optional
import logging
import time
import numpy as np

from core.base import RenderedImage
from core.volume import Volume
from .backends import RenderBackend, get_backend
from .raycast import MIP_GEOMETRY, RayGeometry, sample_rays
from .windowing import validate_window_width, window_transform

# Value of a ray that never enters the volume
MIP_SENTINEL = -2000.0


def project_max(
    volume: Volume,
    rotation_x: float,
    rotation_y: float,
    geometry: RayGeometry = MIP_GEOMETRY,
    backend: Optional[RenderBackend] = None
) -> np.ndarray:
    """
    Maximum HU value along every ray.

    Args:
        volume: Volume to project
        rotation_x: Rotation about X in degrees
        rotation_y: Rotation about Y in degrees
        geometry: Ray sweep constants
        backend: Row executor (sequential if None)

    Returns:
        float64 array (height, width); rays with no in-bounds sample hold
        MIP_SENTINEL
    """
    backend = backend or get_backend()

    def project_rows(start: int, stop: int) -> np.ndarray:
        samples = sample_rays(volume, start, stop, rotation_x, rotation_y, geometry)
        values = samples.values(volume, samples.inside(volume), MIP_SENTINEL)
        return np.maximum(values.max(axis=2), MIP_SENTINEL)

    return backend.map_rows(project_rows, volume.height)


def render_mip(
    volume: Volume,
    rotation_x: float,
    rotation_y: float,
    window_center: float,
    window_width: float,
    geometry: RayGeometry = MIP_GEOMETRY,
    backend: Optional[RenderBackend] = None
) -> RenderedImage:
    """
    Render a windowed maximum intensity projection.

    Args:
        volume: Volume to project
        rotation_x: Rotation about X in degrees
        rotation_y: Rotation about Y in degrees
        window_center: Window center in HU
        window_width: Window width in HU
        geometry: Ray sweep constants
        backend: Row executor (sequential if None)

    Returns:
        RenderedImage (height, width) uint8
    """
    validate_window_width(window_width)

    start = time.perf_counter()
    max_values = project_max(volume, rotation_x, rotation_y, geometry, backend)
    image = RenderedImage(window_transform(max_values, window_center, window_width))

    logging.debug(f"MIP rendered {volume.width}x{volume.height} "
                  f"at rotation ({rotation_x:.1f}, {rotation_y:.1f}) "
                  f"in {time.perf_counter() - start:.3f}s")
    return image
