from dataclasses import dataclass
from typing import Any, Tuple

from sqlshape.expressions.predicate import Expr, Predicate


@dataclass(frozen=True, eq=False)
class RawExpr(Expr):
    """Caller-written SQL emitted verbatim, with its own bound arguments.

    The text is never parsed, so its placeholders must already match the
    session dialect.
    """

    sql: str
    args: Tuple[Any, ...] = ()

    def as_predicate(self) -> Predicate:
        return Predicate(self, None)


def raw(sql: str, *args: Any) -> RawExpr:
    return RawExpr(sql, tuple(args))
