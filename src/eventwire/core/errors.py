"""
Error hierarchy for eventwire codecs and event schemas.

Every decode/encode failure is raised as an ``EventwireError`` subclass that
names the wire field which failed. Codec errors intentionally do not derive
from ``ValueError``: pydantic only collects ``ValueError``/``AssertionError``
from validators, so these propagate out of model validation unchanged and
short-circuit at the first failing field.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

_MAX_VALUE_REPR = 120


class ErrorCategory(str, Enum):
    """Broad classification of failures."""

    DECODE = "decode"
    ENCODE = "encode"
    SERIALIZATION = "serialization"
    CONFIGURATION = "configuration"


def _safe_repr(value: Any) -> str:
    try:
        text = repr(value)
    except Exception:  # pragma: no cover - exotic __repr__
        text = f"<{type(value).__name__}>"
    if len(text) > _MAX_VALUE_REPR:
        text = text[: _MAX_VALUE_REPR - 3] + "..."
    return text


def json_type_name(value: Any) -> str:
    """Return the JSON type name for a decoded Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


class EventwireError(Exception):
    """Base class for all eventwire errors."""

    default_category = ErrorCategory.DECODE

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        category: ErrorCategory | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = _safe_repr(value) if value is not None else None
        self.category = category or self.default_category
        self.cause = cause

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message

    def with_field(self, field: str) -> EventwireError:
        """Prefix the failing field with an outer path segment."""
        self.field = f"{field}.{self.field}" if self.field else field
        return self

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "error": type(self).__name__,
            "category": self.category.value,
            "message": self.message,
        }
        if self.field is not None:
            data["field"] = self.field
        if self.value is not None:
            data["value"] = self.value
        if self.cause is not None:
            data["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return data


class MalformedJsonError(EventwireError):
    """Document is not valid JSON, or lacks the expected top-level shape."""

    default_category = ErrorCategory.SERIALIZATION


class InvalidMethodError(EventwireError):
    """Method string matches no canonical or registered verb."""


class InvalidHeaderNameError(EventwireError):
    """Header name is empty or not a valid HTTP token."""


class InvalidHeaderValueError(EventwireError):
    """Header value has an unsupported JSON type or forbidden characters."""


class InvalidBodyEncodingError(EventwireError):
    """Body is flagged base64 but is not valid base64."""


class TypeMismatchError(EventwireError):
    """A field holds a different JSON type than the one expected."""

    def __init__(
        self,
        expected: str,
        actual: Any,
        *,
        field: str | None = None,
        message: str | None = None,
    ) -> None:
        self.expected = expected
        self.actual = json_type_name(actual)
        super().__init__(
            message or f"expected {expected}, got {self.actual}",
            field=field,
            value=actual,
        )


class ConfigurationError(EventwireError):
    """Invalid eventwire configuration or registry usage."""

    default_category = ErrorCategory.CONFIGURATION


__all__ = [
    "ErrorCategory",
    "EventwireError",
    "MalformedJsonError",
    "InvalidMethodError",
    "InvalidHeaderNameError",
    "InvalidHeaderValueError",
    "InvalidBodyEncodingError",
    "TypeMismatchError",
    "ConfigurationError",
    "json_type_name",
]
