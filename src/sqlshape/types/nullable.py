"""Nullable scalar wrapper."""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class Nullable(BaseModel, Generic[T]):
    """A scalar that may be NULL in the database.

    A NULL is absorbed as the zero value of ``T`` with ``valid=False``
    instead of failing the mapping.

    Example:
        >>> Nullable[str].from_db(None)
        Nullable[str](value='', valid=False)
        >>> Nullable[str].from_db("ming")
        Nullable[str](value='ming', valid=True)
    """

    model_config = ConfigDict(frozen=True)

    value: T
    valid: bool = False

    @classmethod
    def inner_type(cls) -> Any:
        args = cls.__pydantic_generic_metadata__.get("args") or ()
        return args[0] if args else Any

    @classmethod
    def zero_value(cls) -> Any:
        inner = cls.inner_type()
        if inner is Any:
            return None
        try:
            return inner()
        except TypeError:
            return None

    @classmethod
    def from_db(cls, raw: Optional[Any]) -> "Nullable[T]":
        if raw is None:
            return cls.model_construct(value=cls.zero_value(), valid=False)
        return cls(value=raw, valid=True)


def is_nullable_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, Nullable)
