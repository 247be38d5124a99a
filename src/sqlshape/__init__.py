"""sqlshape: typed SELECT building and result mapping over record shapes."""

from sqlshape.__version__ import __version__
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
from sqlshape.expressions import (
    Avg,
    AvgDistinct,
    Count,
    CountDistinct,
    Max,
    Min,
    Sum,
    SumDistinct,
    all_,
    any_,
    asc,
    col,
    columns,
    desc,
    exists,
    not_,
    raw,
    some,
    table_of,
)
from sqlshape.metadata import MetaRegistry, column, embedded, get_registry
from sqlshape.operations import Selector
from sqlshape.session import Session, open_session
from sqlshape.types import Nullable, Query

__all__ = [
    "__version__",
    # Sessions
    "Session",
    "open_session",
    "Selector",
    "Query",
    # Record shapes
    "MetaRegistry",
    "get_registry",
    "column",
    "embedded",
    "Nullable",
    # Expressions
    "col",
    "columns",
    "raw",
    "table_of",
    "asc",
    "desc",
    "not_",
    "exists",
    "all_",
    "some",
    "any_",
    "Avg",
    "AvgDistinct",
    "Count",
    "CountDistinct",
    "Max",
    "Min",
    "Sum",
    "SumDistinct",
    # Errors
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
