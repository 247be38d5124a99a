"""Utility functions and helpers for sqlshape."""

from sqlshape.utils.decorators import traced
from sqlshape.utils.naming import underscore_name

__all__ = [
    "traced",
    "underscore_name",
]
