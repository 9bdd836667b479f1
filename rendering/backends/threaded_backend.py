"""
Threaded Backend for Rendering

Evaluates row blocks on a fixed-size thread pool.
"""

from typing import List, Optional
import concurrent.futures
import os
import numpy as np

from config import DEFAULT_RENDER
from core.errors import RenderError
from .base import RenderBackend, RowBlock, RowFunction


class ThreadedBackend(RenderBackend):
    """Row-parallel backend using ThreadPoolExecutor."""

    def __init__(
        self,
        max_workers: Optional[int] = None,
        rows_per_block: int = DEFAULT_RENDER.rows_per_block
    ):
        """
        Initialize threaded backend.

        Args:
            max_workers: Pool size (defaults to the CPU count)
            rows_per_block: Output rows per submitted work item

        Raises:
            RenderError: If max_workers is less than 1
        """
        super().__init__(rows_per_block)
        if max_workers is None:
            max_workers = os.cpu_count() or 1
        elif max_workers < 1:
            raise RenderError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers

    @property
    def name(self) -> str:
        return f"CPU ({self.max_workers} threads)"

    def map_blocks(self, func: RowFunction, blocks: List[RowBlock]) -> List[np.ndarray]:
        results: List[Optional[np.ndarray]] = [None] * len(blocks)

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_block = {
                executor.submit(func, start, stop): i
                for i, (start, stop) in enumerate(blocks)
            }

            for future in concurrent.futures.as_completed(future_to_block):
                results[future_to_block[future]] = future.result()

        return results
