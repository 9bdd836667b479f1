"""
Render Errors

Exceptions raised for contract violations in the rendering core.
"""


class RenderError(ValueError):
    """Base class for invalid inputs to the rendering core."""
    pass


class InvalidDimensionsError(RenderError):
    """Volume dimensions are non-positive or do not match the buffer."""
    pass


class InvalidWindowError(RenderError):
    """Window width is not a positive finite number."""
    pass
