"""
Typed errors raised by the layout kernels.
"""


class InfovizError(Exception):
    """Base error for the package."""


class ConfigurationError(InfovizError, ValueError):
    """Invalid layout or geometry configuration (rejected at setter time)."""


class LayoutDataError(InfovizError, ValueError):
    """An item is missing a column or holds a non-numeric value."""
