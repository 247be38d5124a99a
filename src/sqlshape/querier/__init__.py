from sqlshape.querier.mapper import ResultKind, ResultMapper, result_kind
from sqlshape.querier.querier import Querier

__all__ = ["Querier", "ResultKind", "ResultMapper", "result_kind"]
