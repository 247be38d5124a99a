from dataclasses import dataclass, replace
from typing import Optional

from sqlshape.constants import AggregateFunction
from sqlshape.expressions.predicate import Comparable, Expr


@dataclass(frozen=True, eq=False)
class Aggregate(Comparable, Expr):
    """``FN([DISTINCT] column)`` over a field of the primary table."""

    fn: AggregateFunction
    field: str
    distinct: bool = False
    alias: Optional[str] = None

    def as_(self, alias: str) -> "Aggregate":
        return replace(self, alias=alias)


def Avg(field: str) -> Aggregate:
    return Aggregate(AggregateFunction.AVG, field)


def Count(field: str) -> Aggregate:
    return Aggregate(AggregateFunction.COUNT, field)


def Sum(field: str) -> Aggregate:
    return Aggregate(AggregateFunction.SUM, field)


def Max(field: str) -> Aggregate:
    return Aggregate(AggregateFunction.MAX, field)


def Min(field: str) -> Aggregate:
    return Aggregate(AggregateFunction.MIN, field)


def AvgDistinct(field: str) -> Aggregate:
    return Aggregate(AggregateFunction.AVG, field, distinct=True)


def CountDistinct(field: str) -> Aggregate:
    return Aggregate(AggregateFunction.COUNT, field, distinct=True)


def SumDistinct(field: str) -> Aggregate:
    return Aggregate(AggregateFunction.SUM, field, distinct=True)
