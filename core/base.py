"""
Core Base Classes

View parameters and rendered output passed between the caller and the
renderers. The core keeps no session state: every render call receives a
ViewParameters value and returns a fresh RenderedImage.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple
import numpy as np

from config import WindowPreset, DEFAULT_RENDER


class ViewPlane(Enum):
    """Axis-aligned slicing planes."""
    AXIAL = "axial"  # Fixed z
    CORONAL = "coronal"  # Fixed y
    SAGITTAL = "sagittal"  # Fixed x


class RenderMode(Enum):
    """Available rendering modes."""
    SLICE = "slice"
    MIP = "mip"
    SURFACE = "surface"


@dataclass(frozen=True)
class Rotation:
    """Volume rotation in degrees, applied about Y first, then X."""
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class ViewParameters:
    """
    Immutable per-call view configuration.

    Attributes:
        window_center: Window center in HU
        window_width: Window width in HU (must be > 0)
        view_plane: Plane used in SLICE mode
        slice_fraction: Slice position as a percentage [0, 100]
        rotation: Rotation used in MIP and SURFACE modes
        mode: Which renderer to run
        surface_threshold: First-hit threshold in HU (SURFACE mode only)
    """
    window_center: float = WindowPreset.DEFAULT.center
    window_width: float = WindowPreset.DEFAULT.width
    view_plane: ViewPlane = ViewPlane.AXIAL
    slice_fraction: float = 50.0
    rotation: Rotation = field(default_factory=Rotation)
    mode: RenderMode = RenderMode.SLICE
    surface_threshold: float = DEFAULT_RENDER.default_surface_threshold

    def with_window(self, preset: WindowPreset) -> "ViewParameters":
        """Copy with the window taken from a preset."""
        return replace(self, window_center=preset.center, window_width=preset.width)

    def rotated(self, dx: float, dy: float) -> "ViewParameters":
        """Copy with rotation deltas (degrees) accumulated onto the current rotation."""
        return replace(self, rotation=Rotation(self.rotation.x + dx, self.rotation.y + dy))

    def with_mode(self, mode: RenderMode, default_window: bool = True) -> "ViewParameters":
        """
        Copy switched to another render mode.

        Args:
            mode: Target mode
            default_window: Also switch to the mode's usual window preset
        """
        params = replace(self, mode=mode)
        if default_window:
            params = params.with_window(default_window_for_mode(mode))
        return params


def default_window_for_mode(mode: RenderMode) -> WindowPreset:
    """Window preset a viewer typically switches to when entering a mode."""
    if mode in (RenderMode.MIP, RenderMode.SURFACE):
        return WindowPreset.BONE
    return WindowPreset.DEFAULT


@dataclass
class RenderedImage:
    """
    8-bit rendered output.

    Attributes:
        pixels: uint8 array (height, width) or (height, width, 3), row-major
    """
    pixels: np.ndarray

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.pixels.shape

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def channels(self) -> int:
        return 1 if self.pixels.ndim == 2 else self.pixels.shape[2]

    def tobytes(self) -> bytes:
        """Raw row-major pixel bytes."""
        return np.ascontiguousarray(self.pixels).tobytes()
