"""Record shape metadata: table descriptors and their registry."""

from sqlshape.metadata.model import (
    ColumnMeta,
    ColumnSpec,
    EmbeddedSpec,
    TableMeta,
    column,
    embedded,
    is_record_shape,
    is_scalar_type,
    unwrap_optional,
)
from sqlshape.metadata.registry import MetaRegistry, get_registry

__all__ = [
    "ColumnMeta",
    "ColumnSpec",
    "EmbeddedSpec",
    "TableMeta",
    "MetaRegistry",
    "column",
    "embedded",
    "get_registry",
    "is_record_shape",
    "is_scalar_type",
    "unwrap_optional",
]
