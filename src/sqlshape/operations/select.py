"""Fluent SELECT builder bound to a session."""

from typing import TYPE_CHECKING, Any, Generic, List, Mapping, Optional, Tuple, TypeVar

from sqlshape.constants import QueryType
from sqlshape.expressions.order import OrderBy
from sqlshape.expressions.table import Subquery, TableReference
from sqlshape.types import Query

if TYPE_CHECKING:
    from sqlshape.session import Session

T = TypeVar("T")


class Selector(Generic[T]):
    """Describes one SELECT statement whose rows map onto ``result_type``.

    Every fluent method mutates the selector and returns it, so a selector
    belongs to the code that created it. ``where`` and ``having`` replace
    their previous predicates; the arguments of one call are ANDed.

    Example:
        >>> users = (
        ...     session.select(User)
        ...     .where(col("age").ge(18))
        ...     .order_by(asc("age"), desc("id"))
        ...     .limit(10)
        ...     .fetch_all()
        ... )
    """

    operation_type = QueryType.SELECT

    def __init__(self, result_type: Any, session: "Session"):
        self.result_type = result_type
        self.session = session
        self.columns: Tuple[Any, ...] = ()
        self.table: Optional[TableReference] = None
        self.where_predicates: Tuple[Any, ...] = ()
        self.having_predicates: Tuple[Any, ...] = ()
        self.group_by_fields: Tuple[str, ...] = ()
        self.order_by_items: Tuple[OrderBy, ...] = ()
        self.is_distinct = False
        self.limit_value: Optional[int] = None
        self.offset_value: Optional[int] = None

    def select(self, *selectables: Any) -> "Selector[T]":
        self.columns = tuple(selectables)
        return self

    def from_(self, table: TableReference) -> "Selector[T]":
        self.table = table
        return self

    def where(self, *predicates: Any) -> "Selector[T]":
        self.where_predicates = tuple(predicates)
        return self

    def having(self, *predicates: Any) -> "Selector[T]":
        self.having_predicates = tuple(predicates)
        return self

    def distinct(self) -> "Selector[T]":
        self.is_distinct = True
        return self

    def group_by(self, *fields: str) -> "Selector[T]":
        self.group_by_fields = tuple(fields)
        return self

    def order_by(self, *orders: OrderBy) -> "Selector[T]":
        self.order_by_items = tuple(orders)
        return self

    def limit(self, limit: int) -> "Selector[T]":
        """Cap the row count. ``0`` means no limit and renders no LIMIT clause."""
        self.limit_value = limit
        return self

    def offset(self, offset: int) -> "Selector[T]":
        """Skip leading rows. ``0`` renders no OFFSET clause."""
        self.offset_value = offset
        return self

    def as_subquery(self, alias: str) -> Subquery:
        return Subquery(self, alias, self.columns)

    def build(self) -> Query:
        return self.session.builder.build_query(self)

    def fetch_one(self, context: Optional[Mapping[str, Any]] = None) -> T:
        """Run the statement with ``LIMIT 1`` and map the single row.

        Raises:
            NoRowsError: If the statement matched nothing.
        """
        return self.session.querier.fetch_one(self, context)

    def fetch_all(self, context: Optional[Mapping[str, Any]] = None) -> List[T]:
        return self.session.querier.fetch_all(self, context)
