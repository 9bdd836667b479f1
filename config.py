"""
CT Viewer Configuration

Contains constants and default settings for the rendering engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class WindowPreset(Enum):
    """Window/Level presets as (center, width) in HU."""
    DEFAULT = (40.0, 400.0)
    BRAIN = (40.0, 80.0)
    BONE = (400.0, 1500.0)
    SOFT_TISSUE = (50.0, 350.0)
    LUNG = (-600.0, 1500.0)
    LIVER = (60.0, 160.0)

    @property
    def center(self) -> float:
        return self.value[0]

    @property
    def width(self) -> float:
        return self.value[1]


@dataclass(frozen=True)
class EllipsoidRegion:
    """
    Ellipsoidal phantom region.

    Geometry is expressed on the reference grid of PhantomConfig and is
    scaled to the requested volume size by the generator.

    Attributes:
        name: Region label used in logs
        center: (x, y, z) offset from the volume center
        radii: (x, y, z) semi-axes
        base: Lowest HU value assigned inside the region
        spread: Width of the uniform random range added to base
    """
    name: str
    center: Tuple[float, float, float]
    radii: Tuple[float, float, float]
    base: float
    spread: float


# Skull semi-axes on the reference grid; the brain is the same ellipsoid
# shrunk to 85%, so the bone shell sits between the two.
_SKULL_RADII = (50.0, 55.0, 40.0)
_INNER_SCALE = 0.85


@dataclass
class PhantomConfig:
    """
    Configuration for the synthetic head phantom.

    Regions are evaluated in order; the last region containing a voxel
    decides its value. Voxels outside every region get the background.
    """
    reference_shape: Tuple[int, int, int] = (128, 128, 100)  # (width, height, depth)
    background_base: float = -1000.0  # Air
    background_spread: float = 50.0
    regions: Tuple[EllipsoidRegion, ...] = field(default_factory=lambda: (
        EllipsoidRegion("bone", (0.0, 0.0, 0.0), _SKULL_RADII, 800.0, 400.0),
        EllipsoidRegion(
            "brain", (0.0, 0.0, 0.0),
            tuple(r * _INNER_SCALE for r in _SKULL_RADII), 30.0, 20.0
        ),
        EllipsoidRegion("ventricles", (0.0, 0.0, -5.0), (15.0, 10.0, 20.0), 0.0, 10.0),
        EllipsoidRegion("lesion", (20.0, -10.0, 5.0), (12.0, 12.0, 12.0), 60.0, 20.0),
    ))


@dataclass
class ShadingConfig:
    """Lighting parameters for first-hit surface rendering."""
    light_direction: Tuple[float, float, float] = (-0.5, -0.6, -0.6)  # Normalized on use
    ambient: float = 0.3
    attenuation_distance: float = 200.0  # Samples until depth darkening bottoms out
    min_attenuation: float = 0.5
    default_normal: Tuple[float, float, float] = (0.0, 0.0, 1.0)
    tint: Tuple[float, float, float] = (1.0, 0.95, 0.85)  # RGB multipliers for bone coloring


@dataclass
class RenderConfig:
    """Configuration for render execution."""
    max_workers: int = 1  # 1 = sequential CPU backend
    rows_per_block: int = 16  # Output rows evaluated per work item
    default_surface_threshold: float = 300.0  # HU


@dataclass
class DICOMConfig:
    """Configuration for DICOM export."""
    patient_name: str = "Anonymous^Patient"
    patient_id: str = "PHANTOM001"
    study_description: str = "Synthetic Head CT"
    series_description: str = "Phantom Series"
    manufacturer: str = "CT Viewer"
    institution_name: str = "Research Institution"


# Default configurations
DEFAULT_PHANTOM = PhantomConfig()
DEFAULT_SHADING = ShadingConfig()
DEFAULT_RENDER = RenderConfig()
DEFAULT_DICOM = DICOMConfig()
