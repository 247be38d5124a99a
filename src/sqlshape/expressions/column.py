from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from sqlshape.expressions.predicate import Comparable, Expr


@dataclass(frozen=True, eq=False)
class Column(Comparable, Expr):
    """A field reference, optionally scoped to a table or subquery.

    ``name`` is the record field name, not the SQL column name. Without a
    ``table`` the name resolves against select-list aliases first, then the
    primary table of the statement.
    """

    name: str
    table: Optional[Any] = None
    alias: Optional[str] = None

    def as_(self, alias: str) -> "Column":
        return replace(self, alias=alias)


@dataclass(frozen=True, eq=False)
class ColumnGroup(Expr):
    """Several unqualified columns of the primary table."""

    names: Tuple[str, ...]


def col(name: str) -> Column:
    return Column(name)


def columns(*names: str) -> ColumnGroup:
    return ColumnGroup(tuple(names))
