from typing import Optional

from pydantic import BaseModel, Field


class EngineSettings(BaseModel):
    """SQLAlchemy engine configuration for the bundled executor.

    Only consulted when a session is opened from settings; callers passing
    their own executor never touch these values.
    """

    database_url: Optional[str] = Field(
        default=None,
        description="SQLAlchemy database URL, e.g. sqlite:///app.db or mysql+pymysql://..."
    )
    pool_size: int = Field(default=5, ge=1, le=100)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, ge=1)
    pool_pre_ping: bool = Field(
        default=True,
        description="Verify pooled connections before use"
    )
    echo: bool = Field(default=False, description="Echo SQL through SQLAlchemy's logger")
