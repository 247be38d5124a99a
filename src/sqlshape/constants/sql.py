"""SQL and query-related constants.

These enums are Layer 0: every other module may import them without
creating circular dependencies.
"""

from enum import Enum


class QueryType(str, Enum):
    """Statement kinds known to the statement builder.

    Only SELECT is rendered today; the remaining kinds are reserved so that
    the builder dispatch table can grow without changing callers.
    """

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class Operator(str, Enum):
    """Predicate operators and the text emitted for them."""

    EQ = "="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    NEQ = "!="
    LIKE = " LIKE "
    NOT_LIKE = " NOT LIKE "
    IN = " IN "
    NOT_IN = " NOT IN "
    EXISTS = "EXISTS "
    NOT = "NOT "
    AND = " AND "
    OR = " OR "
    FALSE = "FALSE"


class JoinType(str, Enum):
    INNER = "JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"


class OrderDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class AggregateFunction(str, Enum):
    AVG = "AVG"
    COUNT = "COUNT"
    SUM = "SUM"
    MAX = "MAX"
    MIN = "MIN"


class Quantifier(str, Enum):
    """Quantifiers for subquery comparisons (``x > ALL (...)``)."""

    ALL = "ALL"
    SOME = "SOME"
    ANY = "ANY"


class PlaceholderStyle(str, Enum):
    """Bind parameter rendering styles.

    QMARK and FORMAT emit a fixed token; NUMERIC and DOLLAR emit the
    1-based position of the argument.
    """

    QMARK = "qmark"
    FORMAT = "format"
    NUMERIC = "numeric"
    DOLLAR = "dollar"


class DialectName(str, Enum):
    MYSQL = "mysql"
    SQLITE = "sqlite"
    POSTGRES = "postgres"
    CUSTOM = "custom"


# Preset identifier quote / placeholder pairs per dialect
DIALECT_PRESETS = {
    DialectName.MYSQL: ("`", PlaceholderStyle.QMARK),
    DialectName.SQLITE: ("`", PlaceholderStyle.QMARK),
    DialectName.POSTGRES: ('"', PlaceholderStyle.DOLLAR),
}
