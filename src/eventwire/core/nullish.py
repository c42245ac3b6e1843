"""
Nullish boolean codec.

Event producers send flags such as ``isBase64Encoded`` as ``true``,
``false``, ``null`` or not at all. All of those materialize as a definite
``bool``: absent and ``null`` collapse to ``False``. The collapse is lossy on
purpose; encoding never re-emits ``null``, so ``decode(encode(x)) == x`` holds
for the value while the wire form is normalized.
"""

from __future__ import annotations

from typing import Any

from .errors import TypeMismatchError
from .missing import MISSING, is_nullish


def decode_nullish_boolean(value: Any = MISSING, *, field: str | None = None) -> bool:
    """Decode a JSON boolean, ``null`` or absent field into a ``bool``.

    Raises:
        TypeMismatchError: the value is a string, number, object or array.
            No truthy coercion is attempted.
    """
    if is_nullish(value):
        return False
    if isinstance(value, bool):
        return value
    raise TypeMismatchError("boolean or null", value, field=field)


def encode_nullish_boolean(value: bool) -> bool:
    """Encode to a definite JSON boolean."""
    return bool(value)


__all__ = ["decode_nullish_boolean", "encode_nullish_boolean"]
