"""
Core Package

Contains the volume data model, view parameters, and error types.
"""

from .base import (
    ViewPlane,
    RenderMode,
    Rotation,
    ViewParameters,
    RenderedImage,
    default_window_for_mode,
)
from .errors import RenderError, InvalidDimensionsError, InvalidWindowError
from .volume import Volume

__all__ = [
    'ViewPlane',
    'RenderMode',
    'Rotation',
    'ViewParameters',
    'RenderedImage',
    'default_window_for_mode',
    'RenderError',
    'InvalidDimensionsError',
    'InvalidWindowError',
    'Volume',
]
