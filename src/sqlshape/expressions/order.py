from dataclasses import dataclass
from typing import Tuple

from sqlshape.constants import OrderDirection


@dataclass(frozen=True)
class OrderBy:
    fields: Tuple[str, ...]
    direction: OrderDirection


def asc(*fields: str) -> OrderBy:
    return OrderBy(tuple(fields), OrderDirection.ASC)


def desc(*fields: str) -> OrderBy:
    return OrderBy(tuple(fields), OrderDirection.DESC)
