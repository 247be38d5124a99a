"""Statement descriptions consumed by the statement builder."""

from sqlshape.operations.select import Selector

__all__ = ["Selector"]
