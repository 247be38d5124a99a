from threading import Lock
from typing import Any, Dict, List, Mapping, Optional

from sqlshape.common.exceptions import ConfigurationError, NoRowsError
from sqlshape.logging import get_logger
from sqlshape.metadata import MetaRegistry
from sqlshape.protocols import QueryExecutor
from sqlshape.query_builder import StatementBuilder
from sqlshape.querier.mapper import ResultMapper
from sqlshape.utils import traced

logger = get_logger(__name__)


def _fetch_attributes(querier, selector, context=None) -> Dict[str, Any]:
    return {
        "db.operation": selector.operation_type.value,
        "sqlshape.result_type": getattr(selector.result_type, "__name__", repr(selector.result_type)),
    }


class Querier:
    """Builds, executes and maps selectors.

    Mappers are cached per result type, so the result kind of a type is
    decided once per querier.
    """

    def __init__(
        self,
        executor: Optional[QueryExecutor],
        builder: StatementBuilder,
        registry: MetaRegistry,
    ):
        self.executor = executor
        self.builder = builder
        self.registry = registry
        self._mappers: Dict[Any, ResultMapper] = {}
        self._lock = Lock()

    def _mapper(self, result_type: Any) -> ResultMapper:
        mapper = self._mappers.get(result_type)
        if mapper is None:
            with self._lock:
                mapper = self._mappers.get(result_type)
                if mapper is None:
                    mapper = self._mappers[result_type] = ResultMapper(result_type, self.registry)
        return mapper

    def _run(self, selector, context: Optional[Mapping[str, Any]]) -> List[Any]:
        if self.executor is None:
            raise ConfigurationError("Session has no executor; cannot run statements")
        mapper = self._mapper(selector.result_type)
        query = self.builder.build_query(selector)
        rows = self.executor.query(query.sql, query.args, context)
        return mapper.map_rows(list(rows.keys()), rows)

    @traced(span_name="sqlshape.querier.fetch_one", attribute_getter=_fetch_attributes)
    def fetch_one(self, selector, context: Optional[Mapping[str, Any]] = None) -> Any:
        """Run ``selector`` limited to one row.

        Raises:
            NoRowsError: If no row matched.
        """
        selector.limit(1)
        results = self._run(selector, context)
        if not results:
            raise NoRowsError()
        return results[0]

    @traced(span_name="sqlshape.querier.fetch_all", attribute_getter=_fetch_attributes)
    def fetch_all(self, selector, context: Optional[Mapping[str, Any]] = None) -> List[Any]:
        results = self._run(selector, context)
        logger.debug("Rows mapped", extra={"rows": len(results)})
        return results
