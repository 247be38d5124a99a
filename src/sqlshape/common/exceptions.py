from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for sqlshape.

    Each category has its own prefix so an error can be identified without
    matching on the exception class.

    Attributes:
        CONFIG_*: Configuration errors
        METADATA_*: Record shape / table descriptor errors
        BUILD_*: Statement building errors
        RESULT_*: Result mapping errors
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_002"

    # Metadata errors
    METADATA_ERROR = "METADATA_001"
    UNSUPPORTED_FIELD_TYPE = "METADATA_002"
    DUPLICATE_COLUMN = "METADATA_003"
    RECURSIVE_EMBEDDING = "METADATA_004"

    # Build errors
    INVALID_FIELD = "BUILD_001"
    UNSUPPORTED_EXPRESSION = "BUILD_002"

    # Result errors
    NO_ROWS = "RESULT_001"
    INVALID_COLUMN = "RESULT_002"
    RESULT_MAPPING_ERROR = "RESULT_003"


class SQLShapeError(Exception):
    """Base exception for all sqlshape errors.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    default_code: ErrorCode = ErrorCode.METADATA_ERROR

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.cause = cause

        # lazy import to avoid circular dependency
        from sqlshape.logging import get_logger
        logger = get_logger(__name__)
        logger.debug(
            message,
            extra={
                "error_code": self.error_code.value,
                "error_details": self.details,
            },
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


class ConfigurationError(SQLShapeError):
    default_code = ErrorCode.CONFIG_ERROR


class MetadataError(SQLShapeError):
    """Raised when a record shape cannot be turned into a table descriptor."""

    default_code = ErrorCode.METADATA_ERROR


class InvalidFieldError(SQLShapeError):
    """Raised when a field name is not present in the resolved table scope."""

    default_code = ErrorCode.INVALID_FIELD

    def __init__(self, field_name: str, **kwargs):
        self.field_name = field_name
        details = kwargs.pop("details", {})
        details["field"] = field_name
        super().__init__(f"unknown field {field_name}", details=details, **kwargs)


class InvalidColumnError(SQLShapeError):
    """Raised when a result column cannot be mapped onto the result type."""

    default_code = ErrorCode.INVALID_COLUMN

    def __init__(self, column_name: str, **kwargs):
        self.column_name = column_name
        details = kwargs.pop("details", {})
        details["column"] = column_name
        super().__init__(f"unknown column {column_name}", details=details, **kwargs)


class UnsupportedExpressionError(SQLShapeError):
    default_code = ErrorCode.UNSUPPORTED_EXPRESSION

    def __init__(self, expression: Any, **kwargs):
        self.expression = expression
        details = kwargs.pop("details", {})
        details["expression_type"] = type(expression).__name__
        super().__init__(
            f"unsupported expression type {type(expression).__name__}",
            details=details,
            **kwargs,
        )


class NoRowsError(SQLShapeError):
    """Raised by fetch_one when the statement matched no rows."""

    default_code = ErrorCode.NO_ROWS

    def __init__(self, message: str = "no rows in result set", **kwargs):
        super().__init__(message, **kwargs)


class ResultMappingError(SQLShapeError):
    default_code = ErrorCode.RESULT_MAPPING_ERROR


# Helper functions for common error scenarios
def unsupported_field_type_error(shape: type, field_name: str, annotation: Any) -> MetadataError:
    """Create a MetadataError for a field whose type cannot become a column."""
    return MetadataError(
        f"field {shape.__name__}.{field_name} has unsupported type {annotation!r}",
        error_code=ErrorCode.UNSUPPORTED_FIELD_TYPE,
        details={"shape": shape.__name__, "field": field_name},
    )


def duplicate_column_error(shape: type, column_name: str, field_name: str) -> MetadataError:
    """Create a MetadataError for two fields deriving the same column."""
    return MetadataError(
        f"duplicate column {column_name} derived from {shape.__name__}.{field_name}",
        error_code=ErrorCode.DUPLICATE_COLUMN,
        details={"shape": shape.__name__, "field": field_name, "column": column_name},
    )


def result_mapping_error(
    message: str,
    column: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> ResultMappingError:
    """Create a result mapping error.

    Args:
        message: Error message
        column: Result column being mapped
        value: Offending backend value
        **kwargs: Additional error details

    Returns:
        ResultMappingError with RESULT_MAPPING_ERROR code
    """
    details = kwargs.pop("details", {})
    if column:
        details["column"] = column
    if value is not None:
        details["value"] = repr(value)[:200]
    return ResultMappingError(message, details=details, **kwargs)
