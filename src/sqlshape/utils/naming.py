"""Identifier case conventions."""

import re

_UPPER_RUN = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")


def underscore_name(name: str) -> str:
    """Convert ``CamelCase``/``mixedCase`` identifiers to ``snake_case``.

    Already snake-cased names come back unchanged, so ``first_name`` and
    ``FirstName`` both map to ``first_name``.

    Examples:
        >>> underscore_name("TestModel")
        'test_model'
        >>> underscore_name("UserID")
        'user_id'
    """
    name = _UPPER_RUN.sub(r"\1_\2", name)
    name = _LOWER_UPPER.sub(r"\1_\2", name)
    return name.lower()
