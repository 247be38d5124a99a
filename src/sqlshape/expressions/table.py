"""Table references: plain tables, joins and aliased subqueries.

Every reference can start a join; joins nest, so ``t1.join(t2).on(...)``
can itself be joined again::

    t1 = table_of(User).as_("t1")
    t2 = table_of(Order).as_("t2")
    ref = t1.join(t2).on(t1.c("id").eq(t2.c("user_id")))
"""

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Optional, Tuple

from sqlshape.constants import JoinType

if TYPE_CHECKING:
    from sqlshape.expressions.column import Column
    from sqlshape.operations.select import Selector


class TableReference:
    """Mixin for anything that can appear after FROM."""

    def join(self, right: "TableReference") -> "JoinBuilder":
        return JoinBuilder(self, right, JoinType.INNER)

    def left_join(self, right: "TableReference") -> "JoinBuilder":
        return JoinBuilder(self, right, JoinType.LEFT)

    def right_join(self, right: "TableReference") -> "JoinBuilder":
        return JoinBuilder(self, right, JoinType.RIGHT)


@dataclass(frozen=True)
class Table(TableReference):
    shape: type
    alias: Optional[str] = None

    def as_(self, alias: str) -> "Table":
        return replace(self, alias=alias)

    def c(self, name: str) -> "Column":
        """Column ``name`` scoped to this table."""
        from sqlshape.expressions.column import Column
        return Column(name, table=self)


def table_of(shape) -> Table:
    """Table reference for a record shape (class or instance)."""
    if not isinstance(shape, type):
        shape = type(shape)
    return Table(shape)


@dataclass(frozen=True, eq=False)
class Join(TableReference):
    left: TableReference
    right: TableReference
    kind: JoinType
    on: Tuple[Any, ...] = ()
    using: Tuple[str, ...] = ()


@dataclass(frozen=True, eq=False)
class JoinBuilder:
    """Half-built join waiting for its ON or USING condition."""

    left: TableReference
    right: TableReference
    kind: JoinType

    def on(self, *predicates) -> Join:
        return Join(self.left, self.right, self.kind, on=tuple(predicates))

    def using(self, *fields: str) -> Join:
        return Join(self.left, self.right, self.kind, using=tuple(fields))


@dataclass(frozen=True, eq=False)
class Subquery(TableReference):
    """A selector rendered inline as ``(SELECT ...) AS alias``.

    ``columns`` is the inner select list at the time the subquery was
    taken; it decides which names ``c()`` may reference. An empty tuple
    exposes every column of the inner primary table.
    """

    selector: "Selector"
    alias: str
    columns: Tuple[Any, ...] = field(default=())

    def c(self, name: str) -> "Column":
        from sqlshape.expressions.column import Column
        return Column(name, table=self)
