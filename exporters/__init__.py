"""
Exporters Package

Contains exporters that write volumes to external formats.
"""

from .dicom import DICOMExporter

__all__ = ['DICOMExporter']
