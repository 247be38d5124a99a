from sqlshape.constants.sql import (
    DIALECT_PRESETS,
    AggregateFunction,
    DialectName,
    JoinType,
    Operator,
    OrderDirection,
    PlaceholderStyle,
    Quantifier,
    QueryType,
)

__all__ = [
    "QueryType",
    "Operator",
    "JoinType",
    "OrderDirection",
    "AggregateFunction",
    "Quantifier",
    "PlaceholderStyle",
    "DialectName",
    "DIALECT_PRESETS",
]
