from typing import Optional

from pydantic import Field

from .base import SQLShapeBaseSettings
from .dialect import DialectSettings
from .engine import EngineSettings


class _Settings(SQLShapeBaseSettings):

    dialect: DialectSettings = Field(
        default_factory=DialectSettings,
        description="Identifier quoting and placeholder conventions"
    )
    engine: EngineSettings = Field(
        default_factory=EngineSettings,
        description="SQLAlchemy engine configuration"
    )


_settings: Optional[_Settings] = None


def get_settings() -> _Settings:
    """Return the process-wide settings, loading them on first use.

    Example:
        >>> settings = get_settings()
        >>> settings.dialect.quote("first_name")
        '`first_name`'
    """
    global _settings
    if _settings is None:
        _settings = _Settings()
    return _settings


def _reload_settings() -> _Settings:
    """Force reload settings from the environment."""
    global _settings
    _settings = _Settings()
    return _settings
