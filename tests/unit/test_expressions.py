"""Unit tests for expression construction."""

from sqlshape import Avg, CountDistinct, all_, col, columns, exists, not_, raw, table_of
from sqlshape.constants import AggregateFunction, JoinType, Operator, Quantifier
from sqlshape.expressions import (
    Join,
    Predicate,
    SubqueryExpr,
    ValueExpr,
    ValuesExpr,
)
from sqlshape.types import Query

from shapes import User, UserPhone


class TestExpressions:
    """Expressions are plain data; nothing is resolved until build."""

    def test_unknown_names_are_accepted(self):
        """Test that field names are not checked until build."""
        predicate = col("does_not_exist").eq(1)

        assert predicate.op == Operator.EQ
        assert isinstance(predicate.right, ValueExpr)

    def test_alias_returns_a_copy(self):
        """Test that aliasing leaves the original untouched."""
        column = col("age")
        aliased = column.as_("years")

        assert column.alias is None
        assert aliased.alias == "years"

    def test_columns_group(self):
        """Test column groups."""
        assert columns("id", "age").names == ("id", "age")

    def test_aggregates(self):
        """Test aggregate construction."""
        agg = CountDistinct("first_name").as_("n")

        assert agg.fn == AggregateFunction.COUNT
        assert agg.distinct is True
        assert Avg("age").distinct is False

    def test_column_operand_is_kept(self):
        """Test column-to-column comparisons."""
        t1 = table_of(User).as_("t1")
        predicate = t1.c("id").eq(col("user_id"))

        assert predicate.right.name == "user_id"
        assert predicate.left.table is t1

    def test_in_operands(self, session):
        """Test IN operand forms."""
        sub = session.select(UserPhone).as_subquery("sub")

        assert isinstance(col("id").in_(sub).right, SubqueryExpr)
        assert col("id").in_(1, 2).right.values == (1, 2)
        assert col("id").in_([1, 2]).right.values == ([1, 2],)
        assert isinstance(col("id").not_in().right, ValuesExpr)

    def test_combinators(self, session):
        """Test predicate combinators."""
        sub = session.select(UserPhone).as_subquery("sub")
        p = col("id").eq(1).and_(col("age").gt(2))

        assert p.op == Operator.AND
        assert not_(p).op == Operator.NOT
        assert exists(sub).op == Operator.EXISTS
        assert all_(sub).quantifier == Quantifier.ALL
        assert isinstance(raw("1=1").as_predicate(), Predicate)

    def test_join_builder(self):
        """Test join construction."""
        t1, t2 = table_of(User), table_of(UserPhone)

        join = t1.left_join(t2).using("id")

        assert isinstance(join, Join)
        assert join.kind == JoinType.LEFT
        assert join.using == ("id",)
        assert join.on == ()

    def test_table_of_instance(self):
        """Test table_of with a record instance."""
        assert table_of(User()).shape is User

    def test_query_value(self):
        """Test the Query value type."""
        query = Query(sql="SELECT 1;", args=(1, "a"))

        assert str(query) == "SELECT 1;"
        assert query.to_dict() == {"sql": "SELECT 1;", "args": [1, "a"]}
