"""Base model class for sqlshape value objects with serialization support."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class ShapeBaseModel(BaseModel):
    """Base model for immutable sqlshape value objects.

    Provides common functionality:
    - Serialization to dictionary via to_dict()
    - Frozen instances, so built values can be shared freely
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization."""
        data = self.model_dump(by_alias=False)

        def convert_nested(obj):
            if isinstance(obj, dict):
                return {k: convert_nested(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert_nested(item) for item in obj]
            elif hasattr(obj, 'value') and not isinstance(obj, (str, bytes)):  # Handle enums
                return obj.value
            return obj

        return convert_nested(data)
