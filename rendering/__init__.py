"""
Rendering Package

Slice extraction, windowing, and ray-cast projections of CT volumes.
"""

from .windowing import window_transform, validate_window_width
from .slicer import extract_slice, render_slice, slice_index, slice_count
from .raycast import RayGeometry, MIP_GEOMETRY, SURFACE_GEOMETRY, COMPACT_GEOMETRY
from .mip import render_mip, project_max, MIP_SENTINEL
from .surface import render_surface, tint
from .engine import render
from .backends import RenderBackend, CPUBackend, ThreadedBackend, get_backend

__all__ = [
    'window_transform',
    'validate_window_width',
    'extract_slice',
    'render_slice',
    'slice_index',
    'slice_count',
    'RayGeometry',
    'MIP_GEOMETRY',
    'SURFACE_GEOMETRY',
    'COMPACT_GEOMETRY',
    'render_mip',
    'project_max',
    'MIP_SENTINEL',
    'render_surface',
    'tint',
    'render',
    'RenderBackend',
    'CPUBackend',
    'ThreadedBackend',
    'get_backend',
]
