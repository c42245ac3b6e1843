"""
Dual-encoding body payloads and the body codec.

Event producers carry bodies as a JSON string that is either the raw UTF-8
text or base64 of arbitrary bytes, chosen by a sibling ``isBase64Encoded``
flag. ``Body`` holds the bytes together with the kind it was built as, and
``encode_body`` derives the wire string and flag back from it.

Base64 handling is strict by default: standard alphabet, ``=`` padding
required, no stray characters. Output always uses the standard padded
alphabet.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from enum import Enum
from typing import Any

from . import diagnostics
from .errors import InvalidBodyEncodingError, TypeMismatchError
from .missing import MISSING, is_nullish
from .settings import Settings, get_settings


class BodyKind(str, Enum):
    """How a body was constructed."""

    EMPTY = "empty"
    TEXT = "text"
    BINARY = "binary"


class BodyEncodingPolicy(str, Enum):
    """How ``encode_body`` chooses between text and base64 on the wire."""

    PRESERVE = "preserve"  # text as text, binary as base64
    BINARY = "binary"  # always base64
    TEXT = "text"  # text when the bytes are valid UTF-8


@dataclass(frozen=True, eq=False)
class Body:
    """Immutable body payload: bytes plus the kind it was built as.

    Equality compares kind and bytes, except that every zero-length body is
    equal to every other: an empty wire string carries no kind.
    """

    data: bytes = b""
    kind: BodyKind = BodyKind.EMPTY

    @classmethod
    def empty(cls) -> Body:
        return cls()

    @classmethod
    def text(cls, value: str) -> Body:
        return cls(data=value.encode("utf-8"), kind=BodyKind.TEXT)

    @classmethod
    def binary(cls, value: bytes | bytearray | memoryview) -> Body:
        return cls(data=bytes(value), kind=BodyKind.BINARY)

    @property
    def is_base64_encoded(self) -> bool:
        return self.kind is BodyKind.BINARY

    @property
    def is_empty(self) -> bool:
        return self.kind is BodyKind.EMPTY

    def as_text(self) -> str:
        """Decode the payload as UTF-8 (raises ``UnicodeDecodeError``)."""
        return self.data.decode("utf-8")

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __bool__(self) -> bool:
        return bool(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Body):
            return NotImplemented
        if not self.data and not other.data:
            return True
        return self.kind is other.kind and self.data == other.data

    def __hash__(self) -> int:
        if not self.data:
            return hash(b"")
        return hash((self.kind, self.data))

    def __repr__(self) -> str:
        return f"Body(kind={self.kind.value!r}, data={self.data[:32]!r}{'...' if len(self.data) > 32 else ''})"


def _b64decode(value: str, *, field: str | None, settings: Settings | None) -> bytes:
    cfg = (settings if settings is not None else get_settings()).codecs
    candidate = value
    relaxed = False
    if cfg.accept_urlsafe_base64 and ("-" in candidate or "_" in candidate):
        candidate = candidate.replace("-", "+").replace("_", "/")
        relaxed = True
    if cfg.accept_unpadded_base64 and len(candidate) % 4:
        candidate += "=" * (-len(candidate) % 4)
        relaxed = True
    if len(candidate) % 4:
        raise InvalidBodyEncodingError(
            "base64 body length is not a multiple of 4 (missing padding?)",
            field=field,
            value=value,
        )
    try:
        decoded = base64.b64decode(candidate, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidBodyEncodingError(
            f"body is not valid base64: {e}",
            field=field,
            value=value,
            cause=e,
        ) from e
    if relaxed:
        diagnostics.debug(
            "body",
            "accepted non-canonical base64 body",
            field=field,
            length=len(value),
        )
    return decoded


def decode_body(
    value: Any = MISSING,
    is_base64_encoded: bool = False,
    *,
    field: str | None = "body",
    settings: Settings | None = None,
) -> Body | None:
    """Decode a wire body string according to its base64 flag.

    Absent or ``null`` decodes to ``None``.

    Raises:
        TypeMismatchError: the body is not a string.
        InvalidBodyEncodingError: flagged base64 but not valid base64.
    """
    if isinstance(value, Body):
        return value
    if is_nullish(value):
        return None
    if not isinstance(value, str):
        raise TypeMismatchError("string", value, field=field)
    if is_base64_encoded:
        return Body.binary(_b64decode(value, field=field, settings=settings))
    return Body.text(value)


def encode_body(
    body: Body | None,
    *,
    policy: BodyEncodingPolicy = BodyEncodingPolicy.PRESERVE,
) -> tuple[str | None, bool]:
    """Encode a body into ``(wire_string, is_base64_encoded)``.

    ``None`` encodes as ``(None, False)`` and an empty body as ``("", False)``.
    """
    if body is None:
        return None, False
    if body.is_empty and policy is not BodyEncodingPolicy.BINARY:
        return "", False
    as_base64 = policy is BodyEncodingPolicy.BINARY or (
        policy is BodyEncodingPolicy.PRESERVE and body.is_base64_encoded
    )
    if not as_base64:
        try:
            return body.as_text(), False
        except UnicodeDecodeError:
            # bytes that are not UTF-8 can only go out as base64
            pass
    return base64.b64encode(body.data).decode("ascii"), True


__all__ = [
    "Body",
    "BodyKind",
    "BodyEncodingPolicy",
    "decode_body",
    "encode_body",
]
