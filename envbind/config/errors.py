"""Exceptions raised by the record mapper."""

from typing import Any, Dict, Optional


class EnvBindError(Exception):
    """Base exception for all envbind errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class InvalidTargetError(EnvBindError, TypeError):
    """Raised when the target is not a usable dataclass instance."""


class UnsupportedTypeError(EnvBindError, TypeError):
    """Raised when a tagged field has a type the mapper cannot coerce to."""

    def __init__(self, field_name: str, field_type: Any):
        type_name = getattr(field_type, "__name__", repr(field_type))
        super().__init__(
            f"error setting field {field_name}: unsupported type {type_name}",
            details={"field": field_name, "type": type_name},
        )
        self.field_name = field_name
        self.field_type = field_type


class CoercionError(EnvBindError, ValueError):
    """Raised when an environment value cannot be parsed into the field type."""

    def __init__(self, field_name: str, key: str, value: str, target_type: type, reason: str = ""):
        message = (
            f"error setting field {field_name}: cannot parse {key}={value!r} "
            f"as {target_type.__name__}"
        )
        if reason:
            message += f" ({reason})"
        super().__init__(
            message,
            details={"field": field_name, "key": key, "value": value, "type": target_type.__name__},
        )
        self.field_name = field_name
        self.key = key
        self.value = value
        self.target_type = target_type
