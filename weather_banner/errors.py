from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when input data cannot be turned into a chart."""


class ScaleError(ChartDataError):
    """Raised when no readable tick scale exists for a value range."""
