"""
JSON document loading and dumping for event payloads.

Wraps orjson so that the schema layer gets eventwire errors instead of
``orjson.JSONDecodeError``/``TypeError``, and exposes encoded documents as
bytes without an intermediate ``str``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import orjson

from .errors import ErrorCategory, EventwireError, MalformedJsonError, json_type_name


@dataclass
class SerializedView:
    """A lightweight container exposing zero-copy friendly views."""

    data: bytes

    @property
    def view(self) -> memoryview:
        return memoryview(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def decode(self) -> str:
        return self.data.decode("utf-8")


def load_document(data: bytes | bytearray | memoryview | str) -> dict[str, Any]:
    """Parse a JSON document whose top level must be an object.

    Raises:
        MalformedJsonError: invalid JSON or a non-object top level.
    """
    try:
        parsed = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise MalformedJsonError(
            f"invalid JSON: {e}",
            cause=e,
        ) from e
    if not isinstance(parsed, dict):
        raise MalformedJsonError(
            f"expected a JSON object at top level, got {json_type_name(parsed)}"
        )
    return parsed


def dump_document(payload: Mapping[str, Any]) -> SerializedView:
    """Serialize a mapping of plain JSON types to bytes.

    Key order is preserved as given; header names and query keys rely on it.
    """
    try:
        data = orjson.dumps(payload)
    except TypeError as e:
        raise EventwireError(
            "Serialization failed",
            category=ErrorCategory.SERIALIZATION,
            cause=e,
        ) from e
    return SerializedView(data=data)


__all__ = ["SerializedView", "load_document", "dump_document"]
