"""Process-wide registry of table descriptors.

The registry is a read-through cache keyed by record shape. Cache hits are
lock free. Misses derive the ``TableMeta`` under one registry-wide
re-entrant lock, so concurrent callers for the same shape wait and then
read the published descriptor, and every caller sees the same object.
Embedded shapes are resolved on the deriving thread while it holds that
lock, which keeps cycles that span shapes detectable on a single stack.
"""

import threading
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

from sqlshape.common.exceptions import (
    ErrorCode,
    MetadataError,
    duplicate_column_error,
    unsupported_field_type_error,
)
from sqlshape.logging import get_logger
from sqlshape.metadata.model import (
    ColumnMeta,
    ColumnSpec,
    EmbeddedSpec,
    TableMeta,
    is_record_shape,
    is_scalar_type,
)
from sqlshape.utils.naming import underscore_name

logger = get_logger(__name__)


def _find_marker(metadata: list, marker_type: type):
    for item in metadata:
        if isinstance(item, marker_type):
            return item
    return None


class MetaRegistry:
    """Derives and caches one ``TableMeta`` per record shape.

    Example:
        >>> registry = MetaRegistry()
        >>> meta = registry.get(User)
        >>> meta.table_name
        'user'
        >>> registry.get(User) is meta
        True
    """

    def __init__(self):
        self._metas: Dict[type, TableMeta] = {}
        self._lock = threading.RLock()
        self._local = threading.local()

    def get(self, shape) -> TableMeta:
        """Return the descriptor for ``shape`` (a record class or instance).

        Raises:
            MetadataError: If the shape cannot be turned into a table.
        """
        if not isinstance(shape, type):
            shape = type(shape)

        meta = self._metas.get(shape)
        if meta is not None:
            return meta

        with self._lock:
            meta = self._metas.get(shape)
            if meta is not None:
                return meta
            meta = self._derive(shape)
            self._metas[shape] = meta
            logger.debug(
                "Table metadata registered",
                extra={"shape": shape.__name__, "table": meta.table_name, "columns": len(meta.columns)},
            )
            return meta

    def _in_progress(self) -> List[type]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    def _derive(self, shape: type) -> TableMeta:
        if not is_record_shape(shape):
            raise MetadataError(
                f"{shape!r} is not a record shape",
                details={"shape": getattr(shape, "__name__", repr(shape))},
            )

        stack = self._in_progress()
        if shape in stack:
            raise MetadataError(
                f"{shape.__name__} embeds itself",
                error_code=ErrorCode.RECURSIVE_EMBEDDING,
                details={"shape": shape.__name__},
            )
        stack.append(shape)
        try:
            columns = self._collect_columns(shape)
        finally:
            stack.pop()

        field_map: Dict[str, ColumnMeta] = {}
        column_map: Dict[str, ColumnMeta] = {}
        for c in columns:
            if c.field_name in field_map or c.column_name in column_map:
                raise duplicate_column_error(shape, c.column_name, c.field_name)
            field_map[c.field_name] = c
            column_map[c.column_name] = c

        table_name = getattr(shape, "__table_name__", None) or underscore_name(shape.__name__)
        primary_keys = tuple(c.field_name for c in columns if c.primary_key)
        return TableMeta(
            shape=shape,
            table_name=table_name,
            columns=tuple(columns),
            field_map=MappingProxyType(field_map),
            column_map=MappingProxyType(column_map),
            primary_keys=primary_keys,
            auto_increment=any(c.auto_increment for c in columns),
        )

    def _collect_columns(self, shape: type) -> List[ColumnMeta]:
        columns: List[ColumnMeta] = []
        for name, info in shape.model_fields.items():
            annotation = info.annotation
            spec: Optional[ColumnSpec] = _find_marker(info.metadata, ColumnSpec)
            marked_embedded = _find_marker(info.metadata, EmbeddedSpec) is not None

            if is_record_shape(annotation):
                inner = self.get(annotation)
                columns.extend(_prefixed(inner.columns, (name,)))
                continue
            if marked_embedded:
                raise unsupported_field_type_error(shape, name, annotation)
            if not is_scalar_type(annotation):
                raise unsupported_field_type_error(shape, name, annotation)

            spec = spec or ColumnSpec()
            columns.append(ColumnMeta(
                field_name=name,
                column_name=spec.name or underscore_name(name),
                annotation=annotation,
                path=(name,),
                primary_key=spec.primary_key,
                auto_increment=spec.auto_increment,
            ))
        return columns


def _prefixed(columns: Tuple[ColumnMeta, ...], prefix: Tuple[str, ...]) -> List[ColumnMeta]:
    return [
        ColumnMeta(
            field_name=c.field_name,
            column_name=c.column_name,
            annotation=c.annotation,
            path=prefix + c.path,
            primary_key=c.primary_key,
            auto_increment=c.auto_increment,
        )
        for c in columns
    ]


_default_registry = MetaRegistry()


def get_registry() -> MetaRegistry:
    """Return the process-wide registry shared by sessions without their own."""
    return _default_registry
