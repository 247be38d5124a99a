"""Dialect profile settings.

A dialect profile only changes how identifiers and bind parameters are
rendered. Field resolution and validation never depend on it.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sqlshape.constants import DIALECT_PRESETS, DialectName, PlaceholderStyle


class DialectSettings(BaseModel):
    """Identifier quoting and placeholder conventions.

    ``identifier_quote`` and ``placeholder`` default to the preset of
    ``name``; setting either explicitly overrides the preset. The ``custom``
    dialect has no preset and needs both.

    Environment variables (nested under SQLSHAPE_DIALECT__):
        SQLSHAPE_DIALECT__NAME=postgres
        SQLSHAPE_DIALECT__IDENTIFIER_QUOTE="
        SQLSHAPE_DIALECT__PLACEHOLDER=dollar
    """

    model_config = ConfigDict(frozen=True)

    name: DialectName = Field(
        default=DialectName.MYSQL,
        description="Dialect preset (mysql, sqlite, postgres, custom)"
    )
    identifier_quote: Optional[str] = Field(
        default=None,
        description="Single character used to quote identifiers"
    )
    placeholder: Optional[PlaceholderStyle] = Field(
        default=None,
        description="Bind parameter style (qmark, format, numeric, dollar)"
    )

    @field_validator("identifier_quote")
    @classmethod
    def validate_identifier_quote(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) != 1:
            raise ValueError(f"identifier_quote must be a single character, got {v!r}")
        return v

    @model_validator(mode="before")
    @classmethod
    def apply_preset(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        name = DialectName(data.get("name") or DialectName.MYSQL)
        preset = DIALECT_PRESETS.get(name)
        if preset is None:
            if data.get("identifier_quote") is None or data.get("placeholder") is None:
                raise ValueError(
                    "custom dialect requires both identifier_quote and placeholder"
                )
            return data
        quote, placeholder = preset
        if data.get("identifier_quote") is None:
            data["identifier_quote"] = quote
        if data.get("placeholder") is None:
            data["placeholder"] = placeholder
        return data

    def quote(self, identifier: str) -> str:
        """Quote an identifier, doubling any embedded quote character."""
        q = self.identifier_quote
        return f"{q}{identifier.replace(q, q + q)}{q}"

    def placeholder_for(self, position: int) -> str:
        """Render the placeholder for the 1-based argument ``position``."""
        if self.placeholder == PlaceholderStyle.QMARK:
            return "?"
        if self.placeholder == PlaceholderStyle.FORMAT:
            return "%s"
        if self.placeholder == PlaceholderStyle.NUMERIC:
            return f":{position}"
        return f"${position}"
