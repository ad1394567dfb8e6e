"""Google API services."""

from . import drive

__all__ = [
    "drive",
]
