"""
CPU Backend for Rendering

Evaluates row blocks one after another on the calling thread.
"""

from typing import List
import numpy as np

from .base import RenderBackend, RowBlock, RowFunction


class CPUBackend(RenderBackend):
    """Sequential reference backend."""

    @property
    def name(self) -> str:
        return "CPU (sequential)"

    def map_blocks(self, func: RowFunction, blocks: List[RowBlock]) -> List[np.ndarray]:
        return [func(start, stop) for start, stop in blocks]
