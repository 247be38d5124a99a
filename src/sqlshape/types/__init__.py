from sqlshape.types.base import ShapeBaseModel
from sqlshape.types.nullable import Nullable, is_nullable_type
from sqlshape.types.query import Query

__all__ = [
    "ShapeBaseModel",
    "Query",
    "Nullable",
    "is_nullable_type",
]
