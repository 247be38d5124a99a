"""SELECT statement rendering.

Clause order is fixed::

    SELECT [DISTINCT] list FROM table [WHERE] [GROUP BY] [ORDER BY]
    [HAVING] [OFFSET ?] [LIMIT ?];

Rendering appends to a single ``BuildState``; any resolution failure raises
out of ``build_query`` and the partial buffer is discarded with the state.
"""

from functools import reduce
from typing import Any, Dict, Optional, Set

from sqlshape.common.exceptions import (
    InvalidFieldError,
    MetadataError,
    UnsupportedExpressionError,
)
from sqlshape.constants import Operator
from sqlshape.expressions import (
    Aggregate,
    Column,
    ColumnGroup,
    Join,
    Predicate,
    RawExpr,
    Subquery,
    SubqueryExpr,
    Table,
    ValueExpr,
    ValuesExpr,
)
from sqlshape.logging import get_logger
from sqlshape.metadata import MetaRegistry, TableMeta, is_record_shape
from sqlshape.query_builder.base import BaseQueryBuilder, BuildState
from sqlshape.settings import DialectSettings
from sqlshape.types import Query

logger = get_logger(__name__)


class _Scope:
    """Name resolution context of one SELECT level."""

    def __init__(self, primary: TableMeta):
        self.primary = primary
        self.aliases: Set[str] = set()


class StatementBuilder(BaseQueryBuilder):
    """Builds parameterized SQL for selectors.

    Example:
        >>> builder = StatementBuilder(DialectSettings(), get_registry())
        >>> builder.build_query(session.select(User).where(col("id").eq(1)))
        Query(sql='SELECT `id`,`name` FROM `user` WHERE `id`=?;', args=(1,))
    """

    def __init__(self, dialect: DialectSettings, registry: MetaRegistry):
        super().__init__(dialect)
        self.registry = registry

    def _build_select(self, operation) -> Query:
        state = BuildState(self.dialect)
        self._render_select(operation, state)
        state.write(";")
        query = Query(sql=state.sql, args=tuple(state.args))
        logger.debug(
            "Statement built",
            extra={"sql": query.sql, "arg_count": len(query.args)},
        )
        return query

    # -- statement ---------------------------------------------------------

    def _render_select(self, selector, state: BuildState) -> None:
        scope = _Scope(self._primary_meta(selector))

        state.write("SELECT ")
        if selector.is_distinct:
            state.write("DISTINCT ")
        self._render_select_list(selector, scope, state)

        state.write(" FROM ")
        table = selector.table if selector.table is not None else Table(scope.primary.shape)
        self._render_table(table, scope, state)

        if selector.where_predicates:
            state.write(" WHERE ")
            self._render_predicate(_fold(selector.where_predicates), scope, state)

        if selector.group_by_fields:
            state.write(" GROUP BY ")
            for i, name in enumerate(selector.group_by_fields):
                if i:
                    state.write(",")
                state.write_quoted(self._primary_column(name, scope))

        if selector.order_by_items:
            state.write(" ORDER BY ")
            first = True
            for order in selector.order_by_items:
                for name in order.fields:
                    if not first:
                        state.write(",")
                    first = False
                    state.write_quoted(self._primary_column(name, scope))
                    state.write(f" {order.direction.value}")

        if selector.having_predicates:
            state.write(" HAVING ")
            self._render_predicate(_fold(selector.having_predicates), scope, state)

        if selector.offset_value:
            state.write(" OFFSET ")
            state.bind(selector.offset_value)

        if selector.limit_value:
            state.write(" LIMIT ")
            state.bind(selector.limit_value)

    def _primary_meta(self, selector) -> TableMeta:
        if isinstance(selector.table, Table):
            return self.registry.get(selector.table.shape)
        if not is_record_shape(selector.result_type):
            raise MetadataError(
                f"cannot derive a table for result type {selector.result_type!r}; "
                "select from an explicit table",
                details={"result_type": repr(selector.result_type)},
            )
        return self.registry.get(selector.result_type)

    # -- select list -------------------------------------------------------

    def _render_select_list(self, selector, scope: _Scope, state: BuildState) -> None:
        if not selector.columns:
            state.write(",".join(self.dialect.quote(c.column_name) for c in scope.primary.columns))
            return

        for i, item in enumerate(selector.columns):
            if i:
                state.write(",")
            if isinstance(item, Column):
                self._render_column(item, scope, state)
                self._render_alias(item.alias, scope, state)
            elif isinstance(item, ColumnGroup):
                state.write(",".join(
                    self.dialect.quote(self._primary_column(name, scope)) for name in item.names
                ))
            elif isinstance(item, Aggregate):
                self._render_aggregate(item, scope, state)
                self._render_alias(item.alias, scope, state)
            elif isinstance(item, RawExpr):
                self._render_raw(item, state)
            else:
                raise UnsupportedExpressionError(item)

    def _render_alias(self, alias: Optional[str], scope: _Scope, state: BuildState) -> None:
        if alias:
            state.write(" AS ")
            state.write_quoted(alias)
            scope.aliases.add(alias)

    # -- tables ------------------------------------------------------------

    def _render_table(self, table, scope: _Scope, state: BuildState) -> None:
        if isinstance(table, Table):
            state.write_quoted(self.registry.get(table.shape).table_name)
            if table.alias:
                state.write(" AS ")
                state.write_quoted(table.alias)
        elif isinstance(table, Subquery):
            state.write("(")
            self._render_select(table.selector, state)
            state.write(") AS ")
            state.write_quoted(table.alias)
        elif isinstance(table, Join):
            state.write("(")
            self._render_table(table.left, scope, state)
            state.write(f" {table.kind.value} ")
            self._render_table(table.right, scope, state)
            if table.on:
                state.write(" ON ")
                self._render_predicate(_fold(table.on), scope, state)
            if table.using:
                state.write(" USING (")
                state.write(",".join(
                    self.dialect.quote(self._using_column(name, table, scope)) for name in table.using
                ))
                state.write(")")
            state.write(")")
        else:
            raise UnsupportedExpressionError(table)

    def _using_column(self, name: str, join: Join, scope: _Scope) -> str:
        for side in (join.left, join.right):
            meta = self._reference_meta(side)
            if meta is not None and name in meta.field_map:
                return meta.field_map[name].column_name
        if name in scope.primary.field_map:
            return scope.primary.field_map[name].column_name
        raise InvalidFieldError(name)

    def _reference_meta(self, table) -> Optional[TableMeta]:
        if isinstance(table, Table):
            return self.registry.get(table.shape)
        if isinstance(table, Subquery):
            return self._primary_meta(table.selector)
        return None

    # -- predicates and operands ---------------------------------------------

    def _render_predicate(self, predicate: Predicate, scope: _Scope, state: BuildState) -> None:
        if not isinstance(predicate, Predicate):
            raise UnsupportedExpressionError(predicate)
        op = predicate.op
        if op is None:
            self._render_operand(predicate.left, scope, state)
        elif op in (Operator.AND, Operator.OR):
            state.write("(")
            self._render_predicate(predicate.left, scope, state)
            state.write(f"){op.value}(")
            self._render_predicate(predicate.right, scope, state)
            state.write(")")
        elif op == Operator.NOT:
            state.write("NOT (")
            self._render_predicate(predicate.right, scope, state)
            state.write(")")
        elif op == Operator.EXISTS:
            state.write(op.value)
            self._render_operand(predicate.right, scope, state)
        elif (
            op in (Operator.IN, Operator.NOT_IN)
            and isinstance(predicate.right, ValuesExpr)
            and not predicate.right.values
        ):
            state.write(Operator.FALSE.value)
        else:
            self._render_operand(predicate.left, scope, state)
            state.write(op.value)
            self._render_operand(predicate.right, scope, state)

    def _render_operand(self, expr: Any, scope: _Scope, state: BuildState) -> None:
        if isinstance(expr, Column):
            self._render_column(expr, scope, state)
        elif isinstance(expr, Aggregate):
            self._render_aggregate(expr, scope, state)
        elif isinstance(expr, ValueExpr):
            state.bind(expr.value)
        elif isinstance(expr, ValuesExpr):
            state.write("(")
            for i, value in enumerate(expr.values):
                if i:
                    state.write(",")
                state.bind(value)
            state.write(")")
        elif isinstance(expr, SubqueryExpr):
            if expr.quantifier is not None:
                state.write(f"{expr.quantifier.value} ")
            state.write("(")
            self._render_select(expr.subquery.selector, state)
            state.write(")")
        elif isinstance(expr, RawExpr):
            self._render_raw(expr, state)
        elif isinstance(expr, Predicate):
            state.write("(")
            self._render_predicate(expr, scope, state)
            state.write(")")
        else:
            raise UnsupportedExpressionError(expr)

    def _render_raw(self, expr: RawExpr, state: BuildState) -> None:
        state.write(expr.sql)
        state.args.extend(expr.args)

    def _render_aggregate(self, agg: Aggregate, scope: _Scope, state: BuildState) -> None:
        state.write(f"{agg.fn.value}(")
        if agg.distinct:
            state.write("DISTINCT ")
        state.write_quoted(self._primary_column(agg.field, scope))
        state.write(")")

    # -- name resolution ---------------------------------------------------

    def _render_column(self, column: Column, scope: _Scope, state: BuildState) -> None:
        owner = column.table
        if owner is None:
            if column.name in scope.aliases:
                state.write_quoted(column.name)
            else:
                state.write_quoted(self._primary_column(column.name, scope))
        elif isinstance(owner, Table):
            meta = self.registry.get(owner.shape)
            if column.name not in meta.field_map:
                raise InvalidFieldError(column.name)
            if owner.alias:
                state.write_quoted(owner.alias)
                state.write(".")
            state.write_quoted(meta.field_map[column.name].column_name)
        elif isinstance(owner, Subquery):
            exposed = self._exposed_columns(owner)
            if column.name not in exposed:
                raise InvalidFieldError(column.name)
            state.write_quoted(owner.alias)
            state.write(".")
            state.write_quoted(exposed[column.name])
        else:
            raise UnsupportedExpressionError(owner)

    def _primary_column(self, name: str, scope: _Scope) -> str:
        meta = scope.primary.field_map.get(name)
        if meta is None:
            raise InvalidFieldError(name)
        return meta.column_name

    def _exposed_columns(self, subquery: Subquery) -> Dict[str, str]:
        """Names a subquery makes visible to its parent, mapped to column names."""
        inner = self._primary_meta(subquery.selector)
        if not subquery.columns:
            return {c.field_name: c.column_name for c in inner.columns}

        exposed: Dict[str, str] = {}
        for item in subquery.columns:
            if isinstance(item, (Column, Aggregate)) and item.alias:
                exposed[item.alias] = item.alias
            elif isinstance(item, Column) and isinstance(item.table, Subquery):
                nested = self._exposed_columns(item.table)
                if item.name in nested:
                    exposed[item.name] = nested[item.name]
            elif isinstance(item, Column):
                meta = inner
                if isinstance(item.table, Table):
                    meta = self.registry.get(item.table.shape)
                if item.name in meta.field_map:
                    exposed[item.name] = meta.field_map[item.name].column_name
            elif isinstance(item, ColumnGroup):
                for name in item.names:
                    if name in inner.field_map:
                        exposed[name] = inner.field_map[name].column_name
        return exposed


def _fold(predicates) -> Predicate:
    for predicate in predicates:
        if not isinstance(predicate, Predicate):
            raise UnsupportedExpressionError(predicate)
    return reduce(lambda acc, p: acc.and_(p), predicates)
