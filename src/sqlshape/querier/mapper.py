"""Row to result-type mapping.

The result kind of a type is decided once. For record shapes the column
plan is computed once per result set from its column names, then applied
to each row.
"""

from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import TypeAdapter, ValidationError

from sqlshape.common.exceptions import InvalidColumnError, result_mapping_error
from sqlshape.metadata import ColumnMeta, MetaRegistry, TableMeta, is_record_shape, unwrap_optional
from sqlshape.types.nullable import is_nullable_type


class ResultKind(str, Enum):
    SCALAR = "scalar"
    NULLABLE = "nullable"
    RECORD = "record"


def result_kind(result_type: Any) -> ResultKind:
    if is_record_shape(result_type):
        return ResultKind.RECORD
    if is_nullable_type(result_type) or unwrap_optional(result_type)[1]:
        return ResultKind.NULLABLE
    return ResultKind.SCALAR


@lru_cache(maxsize=None)
def _adapter_for(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def convert_value(annotation: Any, raw: Any, column: str) -> Any:
    """Validate one backend value against ``annotation``.

    Raises:
        ResultMappingError: If the value does not fit the type.
    """
    try:
        if is_nullable_type(annotation):
            return annotation.from_db(raw)
        return _adapter_for(annotation).validate_python(raw)
    except (ValidationError, TypeError, ValueError) as e:
        raise result_mapping_error(
            f"cannot convert column {column} to {getattr(annotation, '__name__', annotation)}",
            column=column,
            value=raw,
            cause=e,
        )


class ResultMapper:
    """Maps result rows onto one result type."""

    def __init__(self, result_type: Any, registry: MetaRegistry):
        self.result_type = result_type
        self.kind = result_kind(result_type)
        self.meta: Optional[TableMeta] = (
            registry.get(result_type) if self.kind == ResultKind.RECORD else None
        )

    def map_rows(self, keys: Sequence[str], rows) -> List[Any]:
        if self.kind == ResultKind.RECORD:
            plan = self._plan(keys)
            return [self._map_record(plan, row) for row in rows]

        if len(keys) != 1:
            raise result_mapping_error(
                f"expected exactly one column for {self._type_name()}, got {len(keys)}",
                details={"columns": list(keys)},
            )
        return [self._map_scalar(keys[0], row[0]) for row in rows]

    def _type_name(self) -> str:
        return getattr(self.result_type, "__name__", repr(self.result_type))

    def _map_scalar(self, column: str, raw: Any) -> Any:
        if raw is None and self.kind == ResultKind.SCALAR:
            raise result_mapping_error(
                f"NULL value for non-nullable {self._type_name()}",
                column=column,
            )
        return convert_value(self.result_type, raw, column)

    def _plan(self, keys: Sequence[str]) -> List[Tuple[int, ColumnMeta]]:
        plan = []
        for i, key in enumerate(keys):
            column = self.meta.column_map.get(key)
            if column is None:
                raise InvalidColumnError(key)
            plan.append((i, column))
        return plan

    def _map_record(self, plan: List[Tuple[int, ColumnMeta]], row: Sequence[Any]) -> Any:
        data: Dict[str, Any] = {}
        for i, column in plan:
            value = convert_value(column.annotation, row[i], column.column_name)
            target = data
            for step in column.path[:-1]:
                target = target.setdefault(step, {})
            target[column.path[-1]] = value
        return _construct(self.result_type, data)


def _construct(shape: type, data: Dict[str, Any]) -> Any:
    # values are already validated; unselected required fields become None
    values: Dict[str, Any] = {}
    for name, info in shape.model_fields.items():
        if name in data:
            value = data[name]
            if isinstance(value, dict) and is_record_shape(info.annotation):
                value = _construct(info.annotation, value)
            values[name] = value
        elif info.is_required():
            values[name] = None
    return shape.model_construct(**values)
