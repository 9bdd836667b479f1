"""
Render Engine

Single entry point that dispatches a render call on ViewParameters.mode.
"""

from typing import Optional
import logging

from core.base import RenderMode, RenderedImage, ViewParameters
from core.volume import Volume
from .backends import RenderBackend
from .mip import render_mip
from .slicer import render_slice
from .surface import render_surface


def render(
    volume: Volume,
    params: ViewParameters,
    backend: Optional[RenderBackend] = None
) -> RenderedImage:
    """
    Render a volume with the given view parameters.

    Modes are independent: the volume is never modified and no state is
    carried between calls.

    Args:
        volume: Volume to render
        params: View configuration for this call
        backend: Row executor for the 3D modes (sequential if None)

    Returns:
        Fresh RenderedImage
    """
    logging.debug(f"Render request: mode={params.mode.value}")

    if params.mode == RenderMode.SLICE:
        return render_slice(
            volume, params.view_plane, params.slice_fraction,
            params.window_center, params.window_width
        )
    elif params.mode == RenderMode.MIP:
        return render_mip(
            volume, params.rotation.x, params.rotation.y,
            params.window_center, params.window_width,
            backend=backend
        )
    elif params.mode == RenderMode.SURFACE:
        return render_surface(
            volume, params.rotation.x, params.rotation.y,
            params.surface_threshold,
            backend=backend
        )
    raise ValueError(f"Unknown render mode: {params.mode}")
