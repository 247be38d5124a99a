from typing import Any, Tuple

from pydantic import Field

from sqlshape.types.base import ShapeBaseModel


class Query(ShapeBaseModel):
    """A built statement: SQL text plus positional arguments.

    ``args`` follows placeholder emission order exactly. The string form of
    a Query is its SQL text.
    """

    sql: str
    args: Tuple[Any, ...] = Field(default_factory=tuple)

    def __str__(self) -> str:
        return self.sql
