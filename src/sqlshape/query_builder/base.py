from abc import ABC, abstractmethod
from typing import Any, List

from sqlshape.constants.sql import QueryType
from sqlshape.settings import DialectSettings
from sqlshape.types import Query


class BuildState:
    """Output buffer and argument list shared by one build.

    Subqueries render into the same state as their parent, so positional
    placeholders keep counting across nesting levels.
    """

    def __init__(self, dialect: DialectSettings):
        self.dialect = dialect
        self.parts: List[str] = []
        self.args: List[Any] = []

    def write(self, text: str) -> None:
        self.parts.append(text)

    def write_quoted(self, identifier: str) -> None:
        self.parts.append(self.dialect.quote(identifier))

    def bind(self, value: Any) -> None:
        """Append ``value`` to the arguments and emit its placeholder."""
        self.args.append(value)
        self.parts.append(self.dialect.placeholder_for(len(self.args)))

    @property
    def sql(self) -> str:
        return "".join(self.parts)


class BaseQueryBuilder(ABC):
    """Base interface for statement builders.

    Builders turn statement descriptions into SQL text plus positional
    arguments. They do NOT execute anything; that belongs to the executor.
    Identifiers are always quoted with the dialect quote character and
    values are always bound, never inlined.
    """

    def __init__(self, dialect: DialectSettings):
        self.dialect = dialect

    @abstractmethod
    def _build_select(self, operation) -> Query:
        """Build a SELECT statement.

        Args:
            operation: Selector describing the statement

        Returns:
            Query with the SQL text and its arguments
        """
        pass

    def build_query(self, operation) -> Query:
        """Build SQL from a statement description.

        Args:
            operation: Statement description carrying an ``operation_type``

        Returns:
            Built Query

        Raises:
            NotImplementedError: If the statement kind is not supported
            InvalidFieldError: If a field does not resolve in its scope
        """
        operation_mapping = {
            QueryType.SELECT: self._build_select,
        }

        builder_method = operation_mapping.get(operation.operation_type)
        if builder_method:
            return builder_method(operation)

        raise NotImplementedError(
            f"Operation type {operation.operation_type} not supported by {self.__class__.__name__}"
        )
