"""
DICOM Exporter

Writes a Volume as a CT DICOM series so phantoms can be inspected in
external medical imaging software.
"""

from pathlib import Path
from datetime import datetime
from typing import Optional, Callable
import logging
import numpy as np

try:
    from pydicom.dataset import FileDataset, FileMetaDataset
    from pydicom.uid import (
        generate_uid,
        ExplicitVRLittleEndian,
        CTImageStorage,
    )
    HAS_PYDICOM = True
except ImportError:
    HAS_PYDICOM = False

from config import DICOMConfig, DEFAULT_DICOM
from core.volume import Volume
from rendering.windowing import validate_window_width

# DICOM stores HU as: stored = (HU - intercept) / slope
RESCALE_SLOPE = 1.0
RESCALE_INTERCEPT = -1024.0


def hu_to_stored(slice_data: np.ndarray) -> np.ndarray:
    """Convert HU values to unsigned 16-bit stored pixel values."""
    stored = np.rint((slice_data - RESCALE_INTERCEPT) / RESCALE_SLOPE)
    return np.clip(stored, 0, 65535).astype(np.uint16)


class DICOMExporter:
    """
    Exports volumes as DICOM series.

    One CT Image Storage file is written per axial slice. All files of an
    export share the study, series and frame-of-reference UIDs.
    """

    def __init__(self, config: DICOMConfig = DEFAULT_DICOM):
        """
        Initialize DICOM exporter with metadata.

        Args:
            config: Patient, study and equipment metadata
        """
        if not HAS_PYDICOM:
            raise ImportError(
                "pydicom is required for DICOM export. "
                "Install it with: pip install pydicom"
            )

        self.config = config
        self.reset_uids()

    def reset_uids(self) -> None:
        """Generate new UIDs and timestamps for a new series."""
        self.study_instance_uid = generate_uid()
        self.series_instance_uid = generate_uid()
        self.frame_of_reference_uid = generate_uid()

        now = datetime.now()
        self.study_date = now.strftime("%Y%m%d")
        self.study_time = now.strftime("%H%M%S.%f")

    def export(
        self,
        volume: Volume,
        output_dir: str | Path,
        window_center: float = 40.0,
        window_width: float = 400.0,
        progress_callback: Optional[Callable[[float], None]] = None
    ) -> list[Path]:
        """
        Export a volume as a DICOM series.

        Args:
            volume: Volume to export
            output_dir: Directory to save DICOM files (created if missing)
            window_center: Default display window center in HU
            window_width: Default display window width in HU
            progress_callback: Optional callback(progress: 0.0-1.0)

        Returns:
            List of paths to created DICOM files, in slice order
        """
        validate_window_width(window_width)
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        created_files = []
        for z in range(volume.depth):
            ds = self._create_dataset(volume, z, window_center, window_width)
            ds.PixelData = hu_to_stored(volume.data[z]).tobytes()

            filename = output_dir / f"CT_{z:04d}.dcm"
            ds.save_as(filename, enforce_file_format=True)
            created_files.append(filename)

            if progress_callback is not None:
                progress_callback((z + 1) / volume.depth)

        logging.info(f"Exported {len(created_files)} DICOM slices to {output_dir}")
        return created_files

    def _create_dataset(
        self,
        volume: Volume,
        slice_index: int,
        window_center: float,
        window_width: float
    ) -> "FileDataset":
        """Create a DICOM dataset for a single axial slice."""
        config = self.config

        file_meta = FileMetaDataset()
        file_meta.MediaStorageSOPClassUID = CTImageStorage
        file_meta.MediaStorageSOPInstanceUID = generate_uid()
        file_meta.TransferSyntaxUID = ExplicitVRLittleEndian

        ds = FileDataset(
            filename_or_obj="",
            dataset={},
            file_meta=file_meta,
            preamble=b"\x00" * 128
        )

        # Patient and study
        ds.PatientName = config.patient_name
        ds.PatientID = config.patient_id
        ds.StudyInstanceUID = self.study_instance_uid
        ds.StudyDate = self.study_date
        ds.StudyTime = self.study_time
        ds.StudyID = "1"
        ds.StudyDescription = config.study_description

        # Series and equipment
        ds.SeriesInstanceUID = self.series_instance_uid
        ds.SeriesNumber = 1
        ds.Modality = "CT"
        ds.SeriesDescription = config.series_description
        ds.FrameOfReferenceUID = self.frame_of_reference_uid
        ds.Manufacturer = config.manufacturer
        ds.InstitutionName = config.institution_name

        # Image pixel module
        ds.ImageType = ["DERIVED", "SECONDARY", "AXIAL"]
        ds.SamplesPerPixel = 1
        ds.PhotometricInterpretation = "MONOCHROME2"
        ds.Rows = volume.height
        ds.Columns = volume.width
        ds.BitsAllocated = 16
        ds.BitsStored = 16
        ds.HighBit = 15
        ds.PixelRepresentation = 0  # Unsigned

        # Geometry (isotropic voxels)
        voxel_size = float(volume.voxel_size)
        position_z = float(volume.origin[2]) + slice_index * voxel_size
        ds.PixelSpacing = [voxel_size, voxel_size]
        ds.SliceThickness = voxel_size
        ds.ImagePositionPatient = [float(volume.origin[0]), float(volume.origin[1]), position_z]
        ds.ImageOrientationPatient = [1, 0, 0, 0, 1, 0]
        ds.SliceLocation = position_z
        ds.InstanceNumber = slice_index + 1

        ds.SOPClassUID = CTImageStorage
        ds.SOPInstanceUID = file_meta.MediaStorageSOPInstanceUID

        # Rescale and display window
        ds.RescaleSlope = str(RESCALE_SLOPE)
        ds.RescaleIntercept = str(RESCALE_INTERCEPT)
        ds.RescaleType = "HU"
        ds.WindowCenter = str(window_center)
        ds.WindowWidth = str(window_width)

        ds.ImageComments = f"Phantom slice {slice_index + 1} of {volume.depth}"
        return ds
