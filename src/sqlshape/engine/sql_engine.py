"""SQLAlchemy-backed executor."""

import time
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError

from sqlshape.common.exceptions import ConfigurationError, ErrorCode
from sqlshape.logging import get_logger
from sqlshape.settings import EngineSettings
from sqlshape.utils import traced

logger = get_logger(__name__)

_MAX_STATEMENT_ATTRIBUTE = 4096


class BufferedRows:
    """Fully fetched result rows, detached from the connection."""

    def __init__(self, keys: Sequence[str], rows: List[Tuple[Any, ...]]):
        self._keys = tuple(keys)
        self._rows = rows

    def keys(self) -> Tuple[str, ...]:
        return self._keys

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)


class SQLEngine:
    """Runs statements through a pooled SQLAlchemy engine.

    The engine is created on first use from ``EngineSettings``. Rows are
    buffered before the connection goes back to the pool. Backend errors
    are logged and re-raised unchanged; nothing is retried here.

    Example:
        >>> executor = SQLEngine(EngineSettings(database_url="sqlite://"))
        >>> rows = executor.query("SELECT ? AS `n`", (1,))
        >>> list(rows)
        [(1,)]
    """

    def __init__(self, settings: Optional[EngineSettings] = None, engine: Optional[Engine] = None):
        self.settings = settings or EngineSettings()
        self._engine = engine

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        url = self.settings.database_url
        if not url:
            raise ConfigurationError(
                "No database URL configured; set SQLSHAPE_ENGINE__DATABASE_URL",
                details={"setting": "engine.database_url"},
            )

        try:
            parsed = make_url(url)
        except ArgumentError as e:
            raise ConfigurationError(
                "Invalid database URL",
                error_code=ErrorCode.CONFIG_INVALID,
                cause=e,
            )

        options: Dict[str, Any] = {
            "pool_pre_ping": self.settings.pool_pre_ping,
            "echo": self.settings.echo,
        }
        # sqlite uses a single-connection pool without sizing options
        if parsed.get_backend_name() != "sqlite":
            options.update(
                pool_size=self.settings.pool_size,
                max_overflow=self.settings.max_overflow,
                pool_timeout=self.settings.pool_timeout,
            )

        engine = create_engine(parsed, **options)
        logger.info("Created SQL engine", extra={"db.system": parsed.get_backend_name()})
        return engine

    def _span_attributes(self, sql: str, args: Sequence[Any] = (), context=None) -> Dict[str, Any]:
        statement = (sql or "").strip()
        if len(statement) > _MAX_STATEMENT_ATTRIBUTE:
            statement = f"{statement[:_MAX_STATEMENT_ATTRIBUTE - 3]}..."
        backend = make_url(self.settings.database_url).get_backend_name() if self.settings.database_url else "sql"
        return {
            "db.system": backend,
            "db.operation": "query",
            "db.statement": statement,
            "db.statement.args": len(args),
        }

    @traced(
        span_name="sqlshape.engine.query",
        attribute_getter=lambda self, sql, args=(), context=None: self._span_attributes(sql, args),
    )
    def query(
        self,
        sql: str,
        args: Sequence[Any],
        context: Optional[Mapping[str, Any]] = None,
    ) -> BufferedRows:
        """Execute ``sql`` and buffer every row.

        Args:
            sql: Statement text
            args: Positional arguments
            context: SQLAlchemy execution options for this call

        Returns:
            BufferedRows with the column names and rows
        """
        start_time = time.time()
        payload = {"db.statement.args": str(len(args))}
        parameters = tuple(args) if args else None

        try:
            with self.engine.connect() as conn:
                result = conn.exec_driver_sql(
                    sql,
                    parameters,
                    execution_options=dict(context or {}),
                )
                rows = BufferedRows(list(result.keys()), [tuple(row) for row in result])
        except Exception as exc:
            duration = time.time() - start_time
            logger.error(
                "SQL query failed",
                extra={**payload, "duration.seconds": f"{duration:.6f}", "error": str(exc)},
                exc_info=True,
            )
            raise

        duration = time.time() - start_time
        logger.info(
            "SQL query executed",
            extra={**payload, "duration.seconds": f"{duration:.6f}", "rows": str(len(rows))},
        )
        return rows

    def dispose(self) -> None:
        """Close pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
