"""Predicates and comparison operands.

Nothing is validated here; field names are only resolved when the
statement is built, so an unknown name surfaces as ``InvalidFieldError``
from ``build()``.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from sqlshape.constants import Operator, Quantifier
from sqlshape.expressions.table import Subquery


class Expr:
    """Marker base for nodes that render themselves as SQL operands."""


@dataclass(frozen=True, eq=False)
class ValueExpr(Expr):
    """A single bound argument."""

    value: Any


@dataclass(frozen=True, eq=False)
class ValuesExpr(Expr):
    """A parenthesised list of bound arguments for IN / NOT IN."""

    values: Tuple[Any, ...]


@dataclass(frozen=True, eq=False)
class SubqueryExpr(Expr):
    subquery: Subquery
    quantifier: Optional[Quantifier] = None


@dataclass(frozen=True, eq=False)
class Predicate(Expr):
    """A boolean SQL fragment.

    Leaves hold ``left op right``. ``AND``/``OR`` nodes hold two predicates,
    ``NOT`` and ``EXISTS`` nodes only a right-hand side. A predicate without
    an operator wraps a raw fragment held in ``left``.
    """

    left: Any
    op: Optional[Operator]
    right: Any = None

    def and_(self, other: "Predicate") -> "Predicate":
        return Predicate(self, Operator.AND, other)

    def or_(self, other: "Predicate") -> "Predicate":
        return Predicate(self, Operator.OR, other)


def _operand(value: Any) -> Any:
    if isinstance(value, Expr):
        return value
    if isinstance(value, Subquery):
        return SubqueryExpr(value)
    return ValueExpr(value)


def _set_operand(values: Tuple[Any, ...]) -> Expr:
    if len(values) == 1:
        if isinstance(values[0], Subquery):
            return SubqueryExpr(values[0])
        if isinstance(values[0], SubqueryExpr):
            return values[0]
    return ValuesExpr(tuple(values))


class Comparable:
    """Comparison methods shared by columns and aggregates."""

    def eq(self, value: Any) -> Predicate:
        return Predicate(self, Operator.EQ, _operand(value))

    def neq(self, value: Any) -> Predicate:
        return Predicate(self, Operator.NEQ, _operand(value))

    def lt(self, value: Any) -> Predicate:
        return Predicate(self, Operator.LT, _operand(value))

    def le(self, value: Any) -> Predicate:
        return Predicate(self, Operator.LE, _operand(value))

    def gt(self, value: Any) -> Predicate:
        return Predicate(self, Operator.GT, _operand(value))

    def ge(self, value: Any) -> Predicate:
        return Predicate(self, Operator.GE, _operand(value))

    def like(self, pattern: Any) -> Predicate:
        return Predicate(self, Operator.LIKE, _operand(pattern))

    def not_like(self, pattern: Any) -> Predicate:
        return Predicate(self, Operator.NOT_LIKE, _operand(pattern))

    def in_(self, *values: Any) -> Predicate:
        """``IN``: each value binds one placeholder; a lone subquery is inlined.

        A single list argument binds as one value, ``in_()`` renders FALSE.
        """
        return Predicate(self, Operator.IN, _set_operand(values))

    def not_in(self, *values: Any) -> Predicate:
        return Predicate(self, Operator.NOT_IN, _set_operand(values))


def not_(predicate: Predicate) -> Predicate:
    return Predicate(None, Operator.NOT, predicate)


def exists(subquery: Subquery) -> Predicate:
    return Predicate(None, Operator.EXISTS, SubqueryExpr(subquery))


def all_(subquery: Subquery) -> SubqueryExpr:
    return SubqueryExpr(subquery, Quantifier.ALL)


def some(subquery: Subquery) -> SubqueryExpr:
    return SubqueryExpr(subquery, Quantifier.SOME)


def any_(subquery: Subquery) -> SubqueryExpr:
    return SubqueryExpr(subquery, Quantifier.ANY)
