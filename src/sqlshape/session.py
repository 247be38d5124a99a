"""Sessions bundle an executor, a dialect profile and a metadata registry."""

from typing import Any, Optional

from sqlshape.logging import get_logger
from sqlshape.metadata import MetaRegistry, get_registry
from sqlshape.operations import Selector
from sqlshape.protocols import QueryExecutor
from sqlshape.querier import Querier
from sqlshape.query_builder import StatementBuilder
from sqlshape.settings import DialectSettings, get_settings
from sqlshape.settings.main import _Settings

logger = get_logger(__name__)


class Session:
    """Entry point for building and running statements.

    Args:
        executor: Runs built statements; optional when only ``build()`` is used
        dialect: Identifier quote and placeholder conventions, MySQL-style by default
        registry: Metadata registry, the process-wide one by default

    Example:
        >>> session = Session(executor=my_executor)
        >>> session.select(User).where(col("id").eq(1)).fetch_one()
        User(id=1, ...)
    """

    def __init__(
        self,
        executor: Optional[QueryExecutor] = None,
        dialect: Optional[DialectSettings] = None,
        registry: Optional[MetaRegistry] = None,
    ):
        self.executor = executor
        self.dialect = dialect or DialectSettings()
        self.registry = registry or get_registry()
        self.builder = StatementBuilder(self.dialect, self.registry)
        self.querier = Querier(executor, self.builder, self.registry)

    def select(self, result_type: Any) -> Selector:
        return Selector(result_type, self)


def open_session(settings: Optional[_Settings] = None) -> Session:
    """Create a session with an ``SQLEngine`` configured from settings.

    Args:
        settings: Settings to use, the process-wide settings by default

    Raises:
        ConfigurationError: If no database URL is configured
    """
    from sqlshape.engine import SQLEngine

    settings = settings or get_settings()
    executor = SQLEngine(settings.engine)
    # fail fast on a missing or malformed URL
    engine = executor.engine
    logger.info(
        "Session opened",
        extra={"dialect": settings.dialect.name.value, "db.system": engine.dialect.name},
    )
    return Session(executor=executor, dialect=settings.dialect)
