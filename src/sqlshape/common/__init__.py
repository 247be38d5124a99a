"""Common building blocks shared by every sqlshape layer."""

from sqlshape.common.exceptions import (
    ConfigurationError,
    ErrorCode,
    InvalidColumnError,
    InvalidFieldError,
    MetadataError,
    NoRowsError,
    ResultMappingError,
    SQLShapeError,
    UnsupportedExpressionError,
)

__all__ = [
    "ErrorCode",
    "SQLShapeError",
    "ConfigurationError",
    "MetadataError",
    "InvalidFieldError",
    "InvalidColumnError",
    "UnsupportedExpressionError",
    "NoRowsError",
    "ResultMappingError",
]
