"""Expression tree used to describe a SELECT statement.

Example:
    >>> sub = session.select(Order).select(col("user_id")).as_subquery("sub")
    >>> session.select(User).where(col("id").in_(sub), col("age").ge(18))
"""

from sqlshape.expressions.aggregate import (
    Aggregate,
    Avg,
    AvgDistinct,
    Count,
    CountDistinct,
    Max,
    Min,
    Sum,
    SumDistinct,
)
from sqlshape.expressions.column import Column, ColumnGroup, col, columns
from sqlshape.expressions.order import OrderBy, asc, desc
from sqlshape.expressions.predicate import (
    Comparable,
    Expr,
    Predicate,
    SubqueryExpr,
    ValueExpr,
    ValuesExpr,
    all_,
    any_,
    exists,
    not_,
    some,
)
from sqlshape.expressions.raw import RawExpr, raw
from sqlshape.expressions.table import (
    Join,
    JoinBuilder,
    Subquery,
    Table,
    TableReference,
    table_of,
)

__all__ = [
    "Aggregate",
    "Avg",
    "AvgDistinct",
    "Count",
    "CountDistinct",
    "Max",
    "Min",
    "Sum",
    "SumDistinct",
    "Column",
    "ColumnGroup",
    "col",
    "columns",
    "OrderBy",
    "asc",
    "desc",
    "Comparable",
    "Expr",
    "Predicate",
    "SubqueryExpr",
    "ValueExpr",
    "ValuesExpr",
    "all_",
    "any_",
    "exists",
    "not_",
    "some",
    "RawExpr",
    "raw",
    "Join",
    "JoinBuilder",
    "Subquery",
    "Table",
    "TableReference",
    "table_of",
]
