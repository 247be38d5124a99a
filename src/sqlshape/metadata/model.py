"""Table and column descriptors derived from record shapes.

A record shape is a ``pydantic.BaseModel`` subclass. Per-field markers are
attached with ``typing.Annotated``::

    class User(BaseModel):
        id: Annotated[int, column(primary_key=True, auto_increment=True)] = 0
        first_name: str = ""
        nick: Annotated[str, column(name="nickname")] = ""
        audit: Audit = Audit()          # embedded, columns spliced in
"""

import datetime
import decimal
import enum
import types
import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union, get_args, get_origin

from pydantic import BaseModel

from sqlshape.types.nullable import is_nullable_type

_SCALAR_TYPES = (
    bool,
    int,
    float,
    str,
    bytes,
    decimal.Decimal,
    datetime.date,
    datetime.datetime,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
)


@dataclass(frozen=True)
class ColumnSpec:
    """Per-field column marker: name override and key flags."""

    name: Optional[str] = None
    primary_key: bool = False
    auto_increment: bool = False


@dataclass(frozen=True)
class EmbeddedSpec:
    """Explicit marker for a field whose record columns are flattened."""


def column(
    name: Optional[str] = None,
    *,
    primary_key: bool = False,
    auto_increment: bool = False,
) -> ColumnSpec:
    return ColumnSpec(name=name, primary_key=primary_key, auto_increment=auto_increment)


def embedded() -> EmbeddedSpec:
    return EmbeddedSpec()


@dataclass(frozen=True)
class ColumnMeta:
    """One column of a table descriptor.

    Attributes:
        field_name: Attribute name on the record shape that owns the column
        column_name: SQL identifier
        annotation: Declared Python type of the field
        path: Attribute path from the root shape; longer than one element
            for columns contributed by embedded shapes
    """

    field_name: str
    column_name: str
    annotation: Any
    path: Tuple[str, ...]
    primary_key: bool = False
    auto_increment: bool = False


@dataclass(frozen=True)
class TableMeta:
    """Immutable descriptor of the table behind a record shape."""

    shape: type
    table_name: str
    columns: Tuple[ColumnMeta, ...]
    field_map: Mapping[str, ColumnMeta]
    column_map: Mapping[str, ColumnMeta]
    primary_keys: Tuple[str, ...]
    auto_increment: bool


def is_record_shape(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseModel) and not is_nullable_type(tp)


def unwrap_optional(tp: Any) -> Tuple[Any, bool]:
    """Strip ``None`` from ``Optional[X]``; returns the inner type and whether it was optional."""
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1 and len(args) != len(get_args(tp)):
            return args[0], True
    return tp, False


def is_scalar_type(tp: Any) -> bool:
    inner, _ = unwrap_optional(tp)
    if is_nullable_type(inner):
        return True
    if not isinstance(inner, type):
        return False
    if issubclass(inner, enum.Enum):
        return True
    return issubclass(inner, _SCALAR_TYPES)
