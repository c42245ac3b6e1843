"""HTTP method codec and extension-method registry.

Method tokens are compared case-insensitively on decode and always encode in
their canonical upper-case form, so ``"get"`` and ``"GET"`` decode to the same
value and both re-encode as ``"GET"``.

Only the nine standard verbs are recognized by default. Producers that emit
non-standard tokens can be supported by registering them up front:

Example:
    from eventwire import register_method

    register_method("PURGE")
    decode_method("purge")  # -> "PURGE"

or through configuration with ``EVENTWIRE_CODECS__EXTENSION_METHODS='["PURGE"]'``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from .errors import (
    ConfigurationError,
    ErrorCategory,
    InvalidMethodError,
    TypeMismatchError,
)
from .settings import Settings, get_settings
from .tokens import is_token


class HttpMethod(str, Enum):
    """Canonical HTTP verbs."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    CONNECT = "CONNECT"
    TRACE = "TRACE"

    def __str__(self) -> str:
        return self.value


# Standard verbs decode to HttpMethod members, registered extensions to str
Method = Union[HttpMethod, str]

_extension_methods: set[str] = set()


def register_method(name: str) -> str:
    """Register a non-standard method token.

    Args:
        name: Method token (e.g., "PURGE"). Will be uppercased.

    Returns:
        The canonical token.

    Raises:
        ConfigurationError: If the token is invalid or already known.
    """
    token = name.strip()
    if not is_token(token):
        raise ConfigurationError(f"'{name}' is not a valid HTTP method token")
    token = token.upper()
    if token in HttpMethod.__members__ or token in _extension_methods:
        raise ConfigurationError(f"Method '{token}' already exists")
    _extension_methods.add(token)
    return token


def get_extension_methods(settings: Settings | None = None) -> frozenset[str]:
    """Registered plus configured extension tokens."""
    cfg = settings if settings is not None else get_settings()
    return frozenset(_extension_methods.union(cfg.codecs.extension_methods))


def _reset_registry() -> None:
    """Reset the extension registry (for testing only)."""
    _extension_methods.clear()


def _canonicalize(
    token: str, field: str | None, settings: Settings | None
) -> Method:
    # Only ASCII token chars reach upper(), so no Unicode fold lands on a verb
    upper = token.upper() if is_token(token) else ""
    member = HttpMethod.__members__.get(upper)
    if member is not None:
        return member
    if upper in get_extension_methods(settings):
        return upper
    raise InvalidMethodError(
        f"unrecognized HTTP method '{token}'",
        field=field,
        value=token,
    )


def decode_method(
    value: Any,
    *,
    field: str | None = "method",
    settings: Settings | None = None,
) -> Method:
    """Decode a JSON string into a canonical method.

    Raises:
        TypeMismatchError: value is not a string.
        InvalidMethodError: the token is neither standard nor registered.
    """
    if isinstance(value, HttpMethod):
        return value
    if not isinstance(value, str):
        raise TypeMismatchError("string", value, field=field)
    return _canonicalize(value, field, settings)


def encode_method(
    method: Method,
    *,
    field: str | None = "method",
    settings: Settings | None = None,
) -> str:
    """Encode a method as its canonical upper-case token.

    Plain strings are re-validated so an invalid token assigned after decode
    fails here instead of reaching the wire.
    """
    if isinstance(method, HttpMethod):
        return method.value
    try:
        return str(_canonicalize(method, field, settings))
    except InvalidMethodError as e:
        e.category = ErrorCategory.ENCODE
        raise


__all__ = [
    "HttpMethod",
    "Method",
    "register_method",
    "get_extension_methods",
    "decode_method",
    "encode_method",
]
