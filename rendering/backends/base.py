"""
Base Render Backend

Abstract interface for evaluating a renderer over blocks of output rows.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Tuple
import numpy as np

from config import DEFAULT_RENDER

# A row block is the half-open range [start, stop) of output rows
RowBlock = Tuple[int, int]
RowFunction = Callable[[int, int], np.ndarray]


def split_rows(height: int, rows_per_block: int) -> List[RowBlock]:
    """Split [0, height) into consecutive blocks of at most rows_per_block rows."""
    rows_per_block = max(1, rows_per_block)
    return [
        (start, min(start + rows_per_block, height))
        for start in range(0, height, rows_per_block)
    ]


class RenderBackend(ABC):
    """Abstract base class for render backends."""

    def __init__(self, rows_per_block: int = DEFAULT_RENDER.rows_per_block):
        self.rows_per_block = rows_per_block

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name for logging."""
        pass

    @abstractmethod
    def map_blocks(self, func: RowFunction, blocks: List[RowBlock]) -> List[np.ndarray]:
        """
        Evaluate func on every row block.

        Args:
            func: Callable(start, stop) returning the rows [start, stop)
            blocks: Row blocks to evaluate

        Returns:
            Results in the same order as blocks
        """
        pass

    def map_rows(self, func: RowFunction, height: int) -> np.ndarray:
        """
        Evaluate a row function over [0, height) and stack the result.

        The output does not depend on the backend: blocks are reassembled
        by position, never by completion order.

        Args:
            func: Callable(start, stop) returning an array whose first axis
                has stop - start rows
            height: Total number of output rows

        Returns:
            Concatenated array with height rows
        """
        blocks = split_rows(height, self.rows_per_block)
        return np.concatenate(self.map_blocks(func, blocks), axis=0)
