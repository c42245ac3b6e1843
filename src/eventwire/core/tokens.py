"""RFC 7230 token and field-value character rules shared by the codecs."""

from __future__ import annotations

import string
from typing import Final

_TCHARS: Final[frozenset[str]] = frozenset(
    string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~"
)

# CR, LF and NUL would allow header splitting once the value hits the wire
_FORBIDDEN_VALUE_CHARS: Final[frozenset[str]] = frozenset("\r\n\x00")


def is_token(value: str) -> bool:
    """Return True when ``value`` is a non-empty RFC 7230 token."""
    return bool(value) and all(ch in _TCHARS for ch in value)


def is_field_value(value: str) -> bool:
    return not any(ch in _FORBIDDEN_VALUE_CHARS for ch in value)
