"""Blueprint exports."""

from . import charts, journal

__all__ = [
    "charts",
    "journal",
]
