"""Unit tests for SELECT statement building."""

from unittest.mock import Mock

import pytest

from sqlshape import (
    Avg,
    AvgDistinct,
    Count,
    CountDistinct,
    InvalidFieldError,
    Max,
    MetadataError,
    Session,
    UnsupportedExpressionError,
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
from sqlshape.constants.sql import QueryType
from sqlshape.settings import DialectSettings

from shapes import AuditedUser, Badge, User, UserPhone

ALL_USER = "SELECT `id`,`first_name`,`age`,`last_name` FROM `user`"
ALL_AUDITED = "SELECT `create_time`,`update_time`,`id`,`first_name`,`age`,`last_name` FROM `audited_user`"
PHONES = "(SELECT `user_id`,`phone` FROM `user_phone`)"


def _user_ids(s):
    return s.select(UserPhone).select(col("user_id")).as_subquery("sub")


def _subquery_over_subquery(s):
    sub1 = s.select(UserPhone).select(col("user_id").as_("uid")).as_subquery("sub1")
    sub2 = s.select(UserPhone).select(sub1.c("uid")).from_(sub1).as_subquery("sub2")
    return s.select(User).select(sub2.c("uid")).from_(sub2)


SELECT_CASES = [
    ("no columns", lambda s: s.select(User), ALL_USER + ";", ()),
    ("columns", lambda s: s.select(User).select(columns("id", "first_name")),
     "SELECT `id`,`first_name` FROM `user`;", ()),
    ("column alias", lambda s: s.select(User).select(col("id"), col("first_name").as_("name")),
     "SELECT `id`,`first_name` AS `name` FROM `user`;", ()),
    ("aggregate alias", lambda s: s.select(User).select(col("id"), Avg("age").as_("avg_age")),
     "SELECT `id`,AVG(`age`) AS `avg_age` FROM `user`;", ()),
    ("aggregate distinct", lambda s: s.select(User).select(col("id"), AvgDistinct("age")),
     "SELECT `id`,AVG(DISTINCT `age`) FROM `user`;", ()),
    ("order by", lambda s: s.select(User).order_by(asc("age"), desc("id")),
     ALL_USER + " ORDER BY `age` ASC,`id` DESC;", ()),
    ("order by several fields", lambda s: s.select(User).order_by(asc("age", "id")),
     ALL_USER + " ORDER BY `age` ASC,`id` ASC;", ()),
    ("group by", lambda s: s.select(User).group_by("age", "id"),
     ALL_USER + " GROUP BY `age`,`id`;", ()),
    ("offset", lambda s: s.select(User).order_by(asc("age"), desc("id")).offset(10),
     ALL_USER + " ORDER BY `age` ASC,`id` DESC OFFSET ?;", (10,)),
    ("offset limit", lambda s: s.select(User).order_by(asc("age"), desc("id")).offset(10).limit(100),
     ALL_USER + " ORDER BY `age` ASC,`id` DESC OFFSET ? LIMIT ?;", (10, 100)),
    ("zero offset and limit", lambda s: s.select(User).offset(0).limit(0), ALL_USER + ";", ()),
    ("where", lambda s: s.select(User).where(col("id").eq(10)),
     ALL_USER + " WHERE `id`=?;", (10,)),
    ("empty where", lambda s: s.select(User).where(), ALL_USER + ";", ()),
    ("where and", lambda s: s.select(User).where(col("id").eq(1), col("age").ge(18)),
     ALL_USER + " WHERE (`id`=?) AND (`age`>=?);", (1, 18)),
    ("where or", lambda s: s.select(User).where(col("id").neq(1).or_(col("age").lt(18))),
     ALL_USER + " WHERE (`id`!=?) OR (`age`<?);", (1, 18)),
    ("where not", lambda s: s.select(User).where(not_(col("age").le(18))),
     ALL_USER + " WHERE NOT (`age`<=?);", (18,)),
    ("having aggregate", lambda s: s.select(User).group_by("first_name").having(Avg("age").eq(18)),
     ALL_USER + " GROUP BY `first_name` HAVING AVG(`age`)=?;", (18,)),
    ("empty having", lambda s: s.select(User).group_by("first_name").having(),
     ALL_USER + " GROUP BY `first_name`;", ()),
    ("having alias",
     lambda s: s.select(User).select(col("id"), col("first_name"), Avg("age").as_("avg_age"))
     .group_by("first_name").having(col("avg_age").lt(20)),
     "SELECT `id`,`first_name`,AVG(`age`) AS `avg_age` FROM `user` GROUP BY `first_name` HAVING `avg_age`<?;",
     (20,)),
    ("in", lambda s: s.select(User).select(columns("id")).where(col("id").in_(1, 2, 3)),
     "SELECT `id` FROM `user` WHERE `id` IN (?,?,?);", (1, 2, 3)),
    ("not in", lambda s: s.select(User).select(columns("id")).where(col("id").not_in(1, 2, 3)),
     "SELECT `id` FROM `user` WHERE `id` NOT IN (?,?,?);", (1, 2, 3)),
    ("in single container", lambda s: s.select(User).select(columns("id")).where(col("id").in_([1, 2, 3])),
     "SELECT `id` FROM `user` WHERE `id` IN (?);", ([1, 2, 3],)),
    ("in empty", lambda s: s.select(User).select(columns("id")).where(col("id").in_()),
     "SELECT `id` FROM `user` WHERE FALSE;", ()),
    ("in empty spread", lambda s: s.select(User).select(columns("id")).where(col("id").in_(*[])),
     "SELECT `id` FROM `user` WHERE FALSE;", ()),
    ("not in empty", lambda s: s.select(User).select(columns("id")).where(col("id").not_in()),
     "SELECT `id` FROM `user` WHERE FALSE;", ()),
    ("like", lambda s: s.select(User).where(col("first_name").like("zhang%")),
     ALL_USER + " WHERE `first_name` LIKE ?;", ("zhang%",)),
    ("not like", lambda s: s.select(User).where(col("first_name").not_like("%ming")),
     ALL_USER + " WHERE `first_name` NOT LIKE ?;", ("%ming",)),
    ("like pattern verbatim", lambda s: s.select(User).where(col("first_name").like("老[^1-4]")),
     ALL_USER + " WHERE `first_name` LIKE ?;", ("老[^1-4]",)),
    ("having like", lambda s: s.select(User).group_by("first_name").having(col("last_name").like("%li")),
     ALL_USER + " GROUP BY `first_name` HAVING `last_name` LIKE ?;", ("%li",)),
    ("distinct", lambda s: s.select(User).select(col("first_name")).distinct(),
     "SELECT DISTINCT `first_name` FROM `user`;", ()),
    ("count distinct", lambda s: s.select(User).select(CountDistinct("first_name")),
     "SELECT COUNT(DISTINCT `first_name`) FROM `user`;", ()),
    ("having count distinct",
     lambda s: s.select(User).select(col("first_name")).group_by("first_name")
     .having(CountDistinct("first_name").eq("jack")),
     "SELECT `first_name` FROM `user` GROUP BY `first_name` HAVING COUNT(DISTINCT `first_name`)=?;",
     ("jack",)),
    ("raw column", lambda s: s.select(User).select(raw("COUNT(*)")),
     "SELECT COUNT(*) FROM `user`;", ()),
    ("raw predicate", lambda s: s.select(User).where(raw("`age` BETWEEN ? AND ?", 18, 30).as_predicate()),
     ALL_USER + " WHERE `age` BETWEEN ? AND ?;", (18, 30)),
    ("scalar result from table",
     lambda s: s.select(int).select(Count("id")).from_(table_of(User)),
     "SELECT COUNT(`id`) FROM `user`;", ()),
]

SUBQUERY_CASES = [
    ("from subquery", lambda s: s.select(User).from_(s.select(UserPhone).as_subquery("sub")),
     ALL_USER.replace("`user`", f"{PHONES} AS `sub`") + ";", ()),
    ("in subquery", lambda s: s.select(User).select(columns("id")).where(col("id").in_(_user_ids(s))),
     "SELECT `id` FROM `user` WHERE `id` IN (SELECT `user_id` FROM `user_phone`);", ()),
    ("all", lambda s: s.select(User).where(col("id").gt(all_(_user_ids(s)))),
     ALL_USER + " WHERE `id`>ALL (SELECT `user_id` FROM `user_phone`);", ()),
    ("some and any", lambda s: s.select(User).where(col("id").gt(some(_user_ids(s))), col("id").lt(any_(_user_ids(s)))),
     ALL_USER + " WHERE (`id`>SOME (SELECT `user_id` FROM `user_phone`))"
     " AND (`id`<ANY (SELECT `user_id` FROM `user_phone`));", ()),
    ("exists", lambda s: s.select(User).where(exists(_user_ids(s))),
     ALL_USER + " WHERE EXISTS (SELECT `user_id` FROM `user_phone`);", ()),
    ("exists with aggregate", lambda s: s.select(User).select(Max("id")).where(exists(_user_ids(s))),
     "SELECT MAX(`id`) FROM `user` WHERE EXISTS (SELECT `user_id` FROM `user_phone`);", ()),
    ("not exists", lambda s: s.select(User).where(not_(exists(_user_ids(s)))),
     ALL_USER + " WHERE NOT (EXISTS (SELECT `user_id` FROM `user_phone`));", ()),
    ("subquery arguments in order",
     lambda s: s.select(User).where(
         col("age").gt(18),
         col("id").in_(s.select(UserPhone).select(col("user_id")).where(col("phone").eq("123")).as_subquery("p")),
     ).limit(5),
     ALL_USER + " WHERE (`age`>?) AND (`id` IN (SELECT `user_id` FROM `user_phone` WHERE `phone`=?)) LIMIT ?;",
     (18, "123", 5)),
    ("subquery over subquery", _subquery_over_subquery,
     "SELECT `sub2`.`uid` FROM (SELECT `sub1`.`uid` FROM (SELECT `user_id` AS `uid` FROM `user_phone`) AS `sub1`) AS `sub2`;",
     ()),
]


def _join(s):
    t1 = table_of(User).as_("t1")
    t2 = table_of(UserPhone)
    return s.select(User).from_(t1.join(t2).on(t1.c("id").eq(t2.c("user_id"))))


def _multi_join(kind):
    def build(s):
        t1 = table_of(User).as_("t1")
        t2 = table_of(UserPhone).as_("t2")
        t3 = table_of(Badge).as_("t3")
        first = getattr(t1, kind)(t2).on(t1.c("id").eq(t2.c("user_id")))
        return s.select(User).from_(getattr(first, kind)(t3).on(t2.c("user_id").eq(t3.c("id"))))
    return build


def _join_subquery(kind):
    def build(s):
        t1 = table_of(User)
        sub = s.select(UserPhone).as_subquery("sub")
        ref = getattr(t1, kind)(sub).on(t1.c("id").eq(sub.c("user_id")))
        return s.select(User).select(sub.c("user_id")).from_(ref).where()
    return build


def _subquery_using(s):
    sub1 = s.select(UserPhone).as_subquery("sub1")
    sub2 = s.select(UserPhone).as_subquery("sub2")
    return s.select(User).select(sub1.c("user_id")).from_(sub1.right_join(sub2).using("id"))


def _nested_subquery_using(s):
    sub1 = s.select(UserPhone).as_subquery("sub1")
    sub2 = s.select(UserPhone).from_(sub1).as_subquery("sub2")
    o1 = table_of(User).as_("o1")
    return s.select(User).from_(sub2.join(o1).using("id"))


JOIN_CASES = [
    ("join", _join,
     ALL_USER.replace("`user`", "(`user` AS `t1` JOIN `user_phone` ON `t1`.`id`=`user_id`)") + ";", ()),
    ("multiple join", _multi_join("join"),
     ALL_USER.replace("`user`", "((`user` AS `t1` JOIN `user_phone` AS `t2` ON `t1`.`id`=`t2`.`user_id`)"
                                " JOIN `badge` AS `t3` ON `t2`.`user_id`=`t3`.`id`)") + ";", ()),
    ("left multiple join", _multi_join("left_join"),
     ALL_USER.replace("`user`", "((`user` AS `t1` LEFT JOIN `user_phone` AS `t2` ON `t1`.`id`=`t2`.`user_id`)"
                                " LEFT JOIN `badge` AS `t3` ON `t2`.`user_id`=`t3`.`id`)") + ";", ()),
    ("right multiple join", _multi_join("right_join"),
     ALL_USER.replace("`user`", "((`user` AS `t1` RIGHT JOIN `user_phone` AS `t2` ON `t1`.`id`=`t2`.`user_id`)"
                                " RIGHT JOIN `badge` AS `t3` ON `t2`.`user_id`=`t3`.`id`)") + ";", ()),
    ("join using",
     lambda s: s.select(User).from_(table_of(User).as_("t1").join(table_of(UserPhone)).using("first_name", "last_name")),
     ALL_USER.replace("`user`", "(`user` AS `t1` JOIN `user_phone` USING (`first_name`,`last_name`))") + ";", ()),
    ("join subquery", _join_subquery("join"),
     f"SELECT `sub`.`user_id` FROM (`user` JOIN {PHONES} AS `sub` ON `id`=`sub`.`user_id`);", ()),
    ("left join subquery", _join_subquery("left_join"),
     f"SELECT `sub`.`user_id` FROM (`user` LEFT JOIN {PHONES} AS `sub` ON `id`=`sub`.`user_id`);", ()),
    ("right join subquery", _join_subquery("right_join"),
     f"SELECT `sub`.`user_id` FROM (`user` RIGHT JOIN {PHONES} AS `sub` ON `id`=`sub`.`user_id`);", ()),
    ("subqueries joined using", _subquery_using,
     f"SELECT `sub1`.`user_id` FROM ({PHONES} AS `sub1` RIGHT JOIN {PHONES} AS `sub2` USING (`id`));", ()),
    ("nested subquery joined using", _nested_subquery_using,
     ALL_USER.replace(
         "`user`",
         f"((SELECT `user_id`,`phone` FROM {PHONES} AS `sub1`) AS `sub2` JOIN `user` AS `o1` USING (`id`))",
     ) + ";", ()),
]

EMBEDDED_CASES = [
    ("all columns", lambda s: s.select(AuditedUser), ALL_AUDITED + ";", ()),
    ("embedded column", lambda s: s.select(AuditedUser).select(columns("id", "first_name", "create_time")),
     "SELECT `id`,`first_name`,`create_time` FROM `audited_user`;", ()),
    ("embedded alias", lambda s: s.select(AuditedUser).select(col("id"), col("create_time").as_("creation")),
     "SELECT `id`,`create_time` AS `creation` FROM `audited_user`;", ()),
    ("embedded aggregate", lambda s: s.select(AuditedUser).select(col("id"), Max("create_time").as_("max_time")),
     "SELECT `id`,MAX(`create_time`) AS `max_time` FROM `audited_user`;", ()),
    ("order by embedded", lambda s: s.select(AuditedUser).order_by(asc("age"), desc("create_time")),
     ALL_AUDITED + " ORDER BY `age` ASC,`create_time` DESC;", ()),
    ("group by embedded", lambda s: s.select(AuditedUser).group_by("create_time", "id"),
     ALL_AUDITED + " GROUP BY `create_time`,`id`;", ()),
    ("where embedded", lambda s: s.select(AuditedUser).where(col("id").eq(10), col("create_time").eq(100)),
     ALL_AUDITED + " WHERE (`id`=?) AND (`create_time`=?);", (10, 100)),
    ("having embedded alias",
     lambda s: s.select(AuditedUser).select(col("id"), col("first_name"), Avg("create_time").as_("create"))
     .group_by("first_name").having(col("create").lt(20)),
     "SELECT `id`,`first_name`,AVG(`create_time`) AS `create` FROM `audited_user`"
     " GROUP BY `first_name` HAVING `create`<?;", (20,)),
]

INVALID_FIELD_CASES = [
    ("select", lambda s: s.select(User).select(col("invalid")), "invalid"),
    ("column group", lambda s: s.select(User).select(columns("id", "invalid")), "invalid"),
    ("aggregate", lambda s: s.select(User).select(Max("invalid")), "invalid"),
    ("order by", lambda s: s.select(User).order_by(asc("invalid")), "invalid"),
    ("group by", lambda s: s.select(User).group_by("invalid"), "invalid"),
    ("where", lambda s: s.select(User).where(col("invalid").eq(1)), "invalid"),
    ("having", lambda s: s.select(User).group_by("first_name").having(col("invalid").lt(20)), "invalid"),
    ("aggregate with subquery", lambda s: s.select(User).select(Max("invalid")).where(exists(_user_ids(s))),
     "invalid"),
    ("embedded", lambda s: s.select(AuditedUser).select(col("invalid")), "invalid"),
    ("table column", lambda s: s.select(User).where(table_of(User).c("invalid").eq(1)), "invalid"),
    ("subquery column",
     lambda s: s.select(User).select(s.select(UserPhone).as_subquery("sub").c("invalid"))
     .from_(table_of(User).join(s.select(UserPhone).as_subquery("sub")).on(col("id").eq(1))),
     "invalid"),
    ("using", lambda s: s.select(User).from_(table_of(User).join(table_of(UserPhone)).using("invalid")), "invalid"),
]


def _invalid_in_select_and_on(s):
    t1 = table_of(User)
    sub = s.select(UserPhone).as_subquery("sub")
    ref = t1.join(sub).on(t1.c("id").eq(sub.c("invalid")))
    return s.select(User).select(sub.c("item_id")).from_(ref)


def _invalid_with_subquery_columns(s):
    t1 = table_of(User)
    sub = s.select(UserPhone).select(col("user_id")).as_subquery("sub")
    ref = t1.join(sub).on(t1.c("id").eq(sub.c("user_id")))
    return s.select(User).select(sub.c("phone")).from_(ref)


class TestSelectBuilder:
    """Test rendered SQL and argument order."""

    @pytest.mark.parametrize(
        "name, build, want_sql, want_args",
        SELECT_CASES + SUBQUERY_CASES + JOIN_CASES + EMBEDDED_CASES,
        ids=[c[0] for c in SELECT_CASES + SUBQUERY_CASES + JOIN_CASES + EMBEDDED_CASES],
    )
    def test_build(self, session, name, build, want_sql, want_args):
        """Test rendered SQL and bound arguments."""
        query = build(session).build()

        assert query.sql == want_sql
        assert query.args == want_args
        assert str(query) == want_sql

    @pytest.mark.parametrize(
        "name, build, field_name",
        INVALID_FIELD_CASES,
        ids=[c[0] for c in INVALID_FIELD_CASES],
    )
    def test_invalid_field(self, session, name, build, field_name):
        """Test that unknown fields raise InvalidFieldError."""
        with pytest.raises(InvalidFieldError) as exc_info:
            build(session).build()

        assert exc_info.value.field_name == field_name
        assert exc_info.value.details["field"] == field_name

    def test_select_list_is_resolved_before_join_condition(self, session):
        """Test that the select list is resolved before the join condition."""
        with pytest.raises(InvalidFieldError) as exc_info:
            _invalid_in_select_and_on(session).build()

        assert exc_info.value.field_name == "item_id"

    def test_subquery_exposes_only_its_select_list(self, session):
        """Test that a subquery exposes only its selected columns."""
        with pytest.raises(InvalidFieldError) as exc_info:
            _invalid_with_subquery_columns(session).build()

        assert exc_info.value.field_name == "phone"

    def test_subquery_exposes_aliases(self, session):
        """Test that subquery aliases are visible to the parent."""
        sub = session.select(UserPhone).select(col("user_id").as_("uid")).as_subquery("sub")

        query = session.select(User).select(sub.c("uid")).from_(sub).build()

        assert query.sql == "SELECT `sub`.`uid` FROM (SELECT `user_id` AS `uid` FROM `user_phone`) AS `sub`;"

    def test_unsupported_selectable(self, session):
        """Test rejection of unknown select list items."""
        with pytest.raises(UnsupportedExpressionError):
            session.select(User).select(object()).build()

    @pytest.mark.parametrize(
        "build",
        [
            lambda s: s.select(User).where(raw("1=1")),
            lambda s: s.select(User).where(col("id").eq(1), raw("1=1")),
            lambda s: s.select(User).group_by("age").having(col("age")),
            lambda s: s.select(User).from_(table_of(User).join(table_of(UserPhone)).on(raw("1=1"))),
        ],
        ids=["where raw", "where raw after predicate", "having column", "join on raw"],
    )
    def test_non_predicate_condition(self, session, build):
        """Test that conditions which are not predicates raise UnsupportedExpressionError."""
        with pytest.raises(UnsupportedExpressionError) as exc_info:
            build(session).build()

        assert exc_info.value.details["expression_type"] in ("RawExpr", "Column")

    def test_scalar_result_needs_a_table(self, session):
        """Test that a scalar result type needs an explicit table."""
        with pytest.raises(MetadataError):
            session.select(int).select(Count("id")).build()

    def test_selector_can_be_built_twice(self, session):
        """Test that building does not mutate the selector."""
        selector = session.select(User).where(col("id").eq(1))

        assert selector.build() == selector.build()


class TestDialects:
    """Test quoting and placeholder conventions."""

    def test_postgres_numbers_placeholders_across_subqueries(self, registry):
        """Test numbered placeholders continue into subqueries."""
        session = Session(dialect=DialectSettings(name="postgres"), registry=registry)
        sub = session.select(UserPhone).select(col("user_id")).where(col("phone").eq("123")).as_subquery("p")

        query = session.select(User).select(col("id")).where(
            col("age").gt(18), col("id").in_(sub), col("first_name").in_("a", "b"),
        ).limit(10).build()

        assert query.sql == (
            'SELECT "id" FROM "user" WHERE (("age">$1) AND ("id" IN '
            '(SELECT "user_id" FROM "user_phone" WHERE "phone"=$2))) AND ("first_name" IN ($3,$4)) LIMIT $5;'
        )
        assert query.args == (18, "123", "a", "b", 10)

    def test_format_placeholders(self, registry):
        """Test format-style placeholders."""
        dialect = DialectSettings(name="custom", identifier_quote='"', placeholder="format")
        session = Session(dialect=dialect, registry=registry)

        query = session.select(User).select(col("id")).where(col("id").eq(1)).build()

        assert query.sql == 'SELECT "id" FROM "user" WHERE "id"=%s;'

    def test_numeric_placeholders(self, registry):
        """Test numeric placeholders."""
        dialect = DialectSettings(name="sqlite", placeholder="numeric")
        session = Session(dialect=dialect, registry=registry)

        query = session.select(User).select(col("id")).where(col("id").eq(1), col("age").eq(2)).build()

        assert query.sql == "SELECT `id` FROM `user` WHERE (`id`=:1) AND (`age`=:2);"


class TestBuildQueryDispatch:
    """Test statement kind dispatch."""

    def test_unsupported_statement_kind(self, session):
        """Test that only SELECT is dispatched."""
        operation = Mock()
        operation.operation_type = QueryType.DELETE

        with pytest.raises(NotImplementedError):
            session.builder.build_query(operation)
