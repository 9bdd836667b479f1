"""
CT Volume Data Structure

Defines the immutable scalar volume shared by every renderer.
"""

from dataclasses import dataclass, field
from typing import Sequence, Tuple
import numpy as np

from .errors import InvalidDimensionsError


@dataclass(frozen=True, eq=False)
class Volume:
    """
    Read-only 3D scalar field in Hounsfield-like units.

    The array is stored as (Z, Y, X) = (depth, height, width), so the
    C-order linear index of voxel (x, y, z) is z*width*height + y*width + x.

    Attributes:
        data: 3D float array (depth, height, width), made read-only
        voxel_size: Voxel edge length in mm (export metadata only)
        origin: World coordinates of voxel (0, 0, 0) (export metadata only)
    """
    data: np.ndarray
    voxel_size: float = 1.0
    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        data = np.asarray(self.data)
        if data.ndim != 3:
            raise InvalidDimensionsError(
                f"Volume data must be 3D, got {data.ndim}D array"
            )
        if min(data.shape) <= 0:
            raise InvalidDimensionsError(
                f"Volume dimensions must be positive, got shape {data.shape}"
            )

        # Private read-only copy
        data = np.array(data, dtype=np.float64, copy=True)
        data.flags.writeable = False
        object.__setattr__(self, "data", data)
        origin = np.array(self.origin, dtype=np.float64, copy=True)
        origin.flags.writeable = False
        object.__setattr__(self, "origin", origin)

    @classmethod
    def from_buffer(
        cls,
        buffer: Sequence[float],
        width: int,
        height: int,
        depth: int,
        **kwargs
    ) -> "Volume":
        """
        Build a volume from a flat buffer in x-fastest order.

        Args:
            buffer: Flat scalar values of length width*height*depth
            width: Extent along x
            height: Extent along y
            depth: Extent along z

        Returns:
            Volume wrapping a reshaped copy of the buffer

        Raises:
            InvalidDimensionsError: If a dimension is not positive or the
                buffer length does not match
        """
        for name, dim in (("width", width), ("height", height), ("depth", depth)):
            if int(dim) != dim or dim <= 0:
                raise InvalidDimensionsError(f"{name} must be a positive integer, got {dim}")

        flat = np.asarray(buffer, dtype=np.float64).ravel()
        expected = width * height * depth
        if flat.size != expected:
            raise InvalidDimensionsError(
                f"Buffer length {flat.size} does not match "
                f"{width}x{height}x{depth} = {expected}"
            )
        return cls(flat.reshape(depth, height, width), **kwargs)

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Array shape (depth, height, width)."""
        return self.data.shape

    @property
    def width(self) -> int:
        return self.data.shape[2]

    @property
    def height(self) -> int:
        return self.data.shape[1]

    @property
    def depth(self) -> int:
        return self.data.shape[0]

    def index(self, x: int, y: int, z: int) -> int:
        """Linear buffer index of voxel (x, y, z)."""
        return z * self.width * self.height + y * self.width + x

    def contains(self, x: int, y: int, z: int) -> bool:
        """Whether (x, y, z) addresses a voxel inside the volume."""
        return 0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.depth

    def value_at(self, x: int, y: int, z: int) -> float:
        """Get the scalar value at voxel (x, y, z)."""
        if not self.contains(x, y, z):
            raise IndexError(f"Voxel ({x}, {y}, {z}) outside volume {self.width}x{self.height}x{self.depth}")
        return float(self.data[z, y, x])

    def value_range(self) -> Tuple[float, float]:
        """Minimum and maximum scalar value."""
        return float(self.data.min()), float(self.data.max())
