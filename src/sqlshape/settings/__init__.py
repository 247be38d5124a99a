"""Settings for sqlshape, built on Pydantic Settings.

Configuration Sources (precedence order):
    1. Environment variables (prefix ``SQLSHAPE_``, nested with ``__``)
    2. ``.env`` file in the working directory
    3. Default values in code

Quick Start:
    >>> from sqlshape.settings import get_settings
    >>> settings = get_settings()
    >>> settings.dialect.name
    <DialectName.MYSQL: 'mysql'>

Environment Variable Naming:
    SQLSHAPE_LOG_LEVEL=DEBUG
    SQLSHAPE_DIALECT__NAME=postgres
    SQLSHAPE_ENGINE__DATABASE_URL=sqlite:///app.db
"""

from .main import _Settings, get_settings, _reload_settings
from .base import SQLShapeBaseSettings
from .dialect import DialectSettings
from .engine import EngineSettings

__all__ = [
    "get_settings",
    "DialectSettings",
    "EngineSettings",
    "SQLShapeBaseSettings",
]
