"""
Surface Ray Caster

First-hit isosurface rendering with central-difference gradient shading.

Each ray stops at the first sample whose value exceeds the threshold. The
hit is shaded with a fixed directional light (Lambert term over an ambient
floor) and darkened with depth. Hits need all six axis neighbours for the
gradient, so voxels on the outer one-voxel border never register.
"""

from typing import Optional, Tuple
import logging
import time
import numpy as np

from config import ShadingConfig, DEFAULT_SHADING
from core.base import RenderedImage
from core.volume import Volume
from .backends import RenderBackend, get_backend
from .raycast import SURFACE_GEOMETRY, RayGeometry, sample_rays


def central_gradient(volume: Volume, sx: np.ndarray, sy: np.ndarray, sz: np.ndarray) -> np.ndarray:
    """
    Central-difference gradient at interior voxels.

    Args:
        volume: Source volume
        sx, sy, sz: Integer voxel coordinates at least one voxel inside

    Returns:
        Array (..., 3) of (gx, gy, gz)
    """
    data = volume.data
    gx = data[sz, sy, sx + 1] - data[sz, sy, sx - 1]
    gy = data[sz, sy + 1, sx] - data[sz, sy - 1, sx]
    gz = data[sz + 1, sy, sx] - data[sz - 1, sy, sx]
    return np.stack([gx, gy, gz], axis=-1)


def surface_normals(
    gradient: np.ndarray,
    default_normal: Tuple[float, float, float] = DEFAULT_SHADING.default_normal
) -> np.ndarray:
    """Normalize gradients; zero-length gradients get default_normal."""
    magnitude = np.linalg.norm(gradient, axis=-1, keepdims=True)
    flat = magnitude == 0
    normals = gradient / np.where(flat, 1.0, magnitude)
    return np.where(flat, np.asarray(default_normal, dtype=np.float64), normals)


def shade(
    normals: np.ndarray,
    t: np.ndarray,
    shading: ShadingConfig = DEFAULT_SHADING
) -> np.ndarray:
    """
    Lambert shading with ambient floor and depth attenuation.

    Args:
        normals: Unit normals (..., 3)
        t: Sample index of each hit along its ray
        shading: Lighting parameters

    Returns:
        float64 intensities in [0, 255]
    """
    light = np.asarray(shading.light_direction, dtype=np.float64)
    light = light / np.linalg.norm(light)

    diffuse = np.maximum(0.0, -(normals @ light))
    lit = np.clip(255.0 * (shading.ambient + (1.0 - shading.ambient) * diffuse), 0.0, 255.0)
    attenuation = np.maximum(shading.min_attenuation, 1.0 - t / shading.attenuation_distance)
    return lit * attenuation


def render_surface(
    volume: Volume,
    rotation_x: float,
    rotation_y: float,
    threshold: float,
    geometry: RayGeometry = SURFACE_GEOMETRY,
    shading: ShadingConfig = DEFAULT_SHADING,
    backend: Optional[RenderBackend] = None
) -> RenderedImage:
    """
    Render a shaded first-hit surface.

    Args:
        volume: Volume to render
        rotation_x: Rotation about X in degrees
        rotation_y: Rotation about Y in degrees
        threshold: A sample is a hit when its value is strictly greater
        geometry: Ray sweep constants
        shading: Lighting parameters
        backend: Row executor (sequential if None)

    Returns:
        RenderedImage (height, width) uint8; rays without a hit are 0
    """
    backend = backend or get_backend()
    start = time.perf_counter()

    def shade_rows(row_start: int, row_stop: int) -> np.ndarray:
        samples = sample_rays(volume, row_start, row_stop, rotation_x, rotation_y, geometry)
        interior = samples.inside(volume, margin=1)
        hits = interior & (samples.values(volume, interior, -np.inf) > threshold)

        has_hit = hits.any(axis=2)
        first_t = np.argmax(hits, axis=2)  # Index of the first True along each ray

        out = np.zeros(has_hit.shape, dtype=np.uint8)
        if not has_hit.any():
            return out

        rows, cols = np.nonzero(has_hit)
        t = first_t[rows, cols]
        hx = samples.sx[rows, cols, t]
        hy = samples.sy[rows, cols, t]
        hz = samples.sz[rows, cols, t]

        normals = surface_normals(central_gradient(volume, hx, hy, hz), shading.default_normal)
        intensity = shade(normals, t.astype(np.float64), shading)
        out[rows, cols] = np.rint(np.clip(intensity, 0, 255)).astype(np.uint8)
        return out

    image = RenderedImage(backend.map_rows(shade_rows, volume.height))

    logging.debug(f"Surface rendered {volume.width}x{volume.height} "
                  f"at threshold {threshold} in {time.perf_counter() - start:.3f}s")
    return image


def tint(
    image: RenderedImage,
    color: Tuple[float, float, float] = DEFAULT_SHADING.tint
) -> RenderedImage:
    """
    Expand a grayscale render into RGB with per-channel multipliers.

    Args:
        image: Grayscale RenderedImage
        color: (r, g, b) multipliers in [0, 1]

    Returns:
        RenderedImage (height, width, 3) uint8
    """
    rgb = image.pixels[..., None].astype(np.float64) * np.asarray(color, dtype=np.float64)
    return RenderedImage(np.rint(np.clip(rgb, 0, 255)).astype(np.uint8))
