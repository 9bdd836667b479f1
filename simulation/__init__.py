"""
Simulation package for synthetic CT data.

Contains the procedural head phantom used in place of a DICOM loader.
"""

from .phantom import generate_phantom, ellipsoid_distance, region_masks

__all__ = [
    "generate_phantom",
    "ellipsoid_distance",
    "region_masks",
]
