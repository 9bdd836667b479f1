"""
Windowing Transform

Maps HU values onto 8-bit display intensity through a (center, width) window.
"""

from typing import Union
import numpy as np

from core.errors import InvalidWindowError


def validate_window_width(width: float) -> float:
    """Return width as float, rejecting zero, negative, and non-finite widths."""
    width = float(width)
    if not np.isfinite(width) or width <= 0:
        raise InvalidWindowError(f"Window width must be positive, got {width}")
    return width


def window_transform(
    value: Union[float, np.ndarray],
    center: float,
    width: float
) -> Union[np.uint8, np.ndarray]:
    """
    Apply windowing to convert HU values to display range [0, 255].

    Values at center - width/2 map to 0 and values at center + width/2 map
    to 255; everything in between is linear and rounded to nearest. NaN
    marks a missing sample and maps to 0.

    Args:
        value: Scalar or array of HU values
        center: Center of the window in HU
        width: Width of the window in HU

    Returns:
        uint8 scalar or array matching the input shape

    Raises:
        InvalidWindowError: If width is not a positive finite number
    """
    width = validate_window_width(width)
    lower = center - width / 2
    normalized = (np.asarray(value, dtype=np.float64) - lower) / width
    intensity = np.nan_to_num(np.clip(normalized * 255, 0, 255), nan=0.0)

    result = np.rint(intensity).astype(np.uint8)
    if result.ndim == 0:
        return np.uint8(result)
    return result
