"""
Render Backends

Provides sequential and thread-pool backends for row-parallel rendering.
"""

from typing import Optional

from config import DEFAULT_RENDER
from .base import RenderBackend, split_rows
from .cpu_backend import CPUBackend
from .threaded_backend import ThreadedBackend


def get_backend(
    max_workers: Optional[int] = DEFAULT_RENDER.max_workers,
    rows_per_block: int = DEFAULT_RENDER.rows_per_block
) -> RenderBackend:
    """
    Get the appropriate render backend.

    Args:
        max_workers: Number of worker threads; 1 selects the sequential
            backend, None sizes the pool to the CPU count
        rows_per_block: Output rows per work item

    Returns:
        RenderBackend instance
    """
    if max_workers == 1:
        return CPUBackend(rows_per_block)
    return ThreadedBackend(max_workers, rows_per_block)


__all__ = [
    'RenderBackend',
    'CPUBackend',
    'ThreadedBackend',
    'get_backend',
    'split_rows',
]
