from sqlshape.query_builder.base import BaseQueryBuilder, BuildState
from sqlshape.query_builder.statement_builder import StatementBuilder

__all__ = [
    "BaseQueryBuilder",
    "BuildState",
    "StatementBuilder",
]
