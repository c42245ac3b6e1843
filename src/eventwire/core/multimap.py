"""
Ordered multimaps for headers and query parameters, plus their codecs.

Wire convention (shared by ``headers`` and ``queryStringParameters``): a JSON
object whose values are either a single string or an array of strings.

    {"accept": "*/*", "x-forwarded-for": ["10.0.0.1", "10.0.0.2"]}

Decoding yields one ``(name, value)`` entry per string, in object order then
array order. Encoding groups entries by name and picks the shape from the
value count: one value encodes as a bare string, several as an array. A
one-element array therefore re-encodes as a bare string; that normalization
is intentional and consumers rely on it.

``HeaderMultimap`` keys are case-insensitive. The casing of the first
occurrence of a name is kept for iteration and encoding, so decoding
``{"X-A": "1", "x-a": ["2", "3"]}`` gives one ``X-A`` group with values
``["1", "2", "3"]``.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, TypeVar

from . import diagnostics
from .errors import (
    ErrorCategory,
    InvalidHeaderNameError,
    InvalidHeaderValueError,
    TypeMismatchError,
    json_type_name,
)
from .missing import MISSING, is_nullish
from .tokens import is_field_value, is_token

_M = TypeVar("_M", bound="OrderedMultimap")

_NO_DEFAULT: Any = object()


class OrderedMultimap:
    """Ordered sequence of ``(name, value)`` pairs with multi-valued lookup.

    Subclasses decide how names are compared (``_key``) and which names and
    values are acceptable (``_check_name``/``_check_value``).
    """

    __slots__ = ("_entries", "_display")

    def __init__(self, pairs: Iterable[tuple[str, str]] | None = None) -> None:
        self._entries: list[tuple[str, str]] = []
        # lookup key -> display name (first-seen casing)
        self._display: dict[str, str] = {}
        if pairs is not None:
            self.extend(pairs)

    # Hooks --------------------------------------------------------------
    def _key(self, name: str) -> str:
        return name

    def _check_name(self, name: Any) -> str:
        if not isinstance(name, str):
            raise TypeMismatchError("string", name)
        return name

    def _check_value(self, name: str, value: Any) -> str:
        if not isinstance(value, str):
            raise TypeMismatchError("string", value, field=name)
        return value

    # Mutation -----------------------------------------------------------
    def add(self, name: str, value: str) -> None:
        """Append a value for ``name`` after any existing ones."""
        name = self._check_name(name)
        value = self._check_value(name, value)
        key = self._key(name)
        display = self._display.setdefault(key, name)
        self._entries.append((display, value))

    def extend(self, pairs: Iterable[tuple[str, str]]) -> None:
        for name, value in pairs:
            self.add(name, value)

    def set(self, name: str, value: str) -> None:
        """Replace every value of ``name`` with a single value.

        The entry keeps the position of the first existing occurrence.
        """
        name = self._check_name(name)
        value = self._check_value(name, value)
        key = self._key(name)
        if key not in self._display:
            self.add(name, value)
            return
        display = self._display[key]
        replaced: list[tuple[str, str]] = []
        placed = False
        for entry_name, entry_value in self._entries:
            if self._key(entry_name) != key:
                replaced.append((entry_name, entry_value))
            elif not placed:
                replaced.append((display, value))
                placed = True
        self._entries = replaced

    def remove(self, name: str) -> list[str]:
        """Remove every value of ``name`` and return them (empty if absent)."""
        key = self._key(name)
        removed = [v for n, v in self._entries if self._key(n) == key]
        if removed:
            self._entries = [(n, v) for n, v in self._entries if self._key(n) != key]
            del self._display[key]
        return removed

    def clear(self) -> None:
        self._entries.clear()
        self._display.clear()

    # Lookup -------------------------------------------------------------
    def get(self, name: str, default: Any = None) -> Any:
        """First value for ``name`` or ``default``."""
        key = self._key(name)
        for entry_name, value in self._entries:
            if self._key(entry_name) == key:
                return value
        return default

    def get_all(self, name: str) -> list[str]:
        key = self._key(name)
        return [v for n, v in self._entries if self._key(n) == key]

    def __getitem__(self, name: str) -> str:
        value = self.get(name, _NO_DEFAULT)
        if value is _NO_DEFAULT:
            raise KeyError(name)
        return value

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._display

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        """Number of value entries, not distinct names."""
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def names(self) -> list[str]:
        """Distinct display names in first-seen order."""
        return list(self._display.values())

    def items(self) -> list[tuple[str, str]]:
        """All ``(name, value)`` pairs in sequence order."""
        return list(self._entries)

    def grouped(self) -> dict[str, list[str]]:
        """Display name -> values, names in first-seen order."""
        groups: dict[str, list[str]] = {display: [] for display in self._display.values()}
        for name, value in self._entries:
            groups[name].append(value)
        return groups

    def copy(self: _M) -> _M:
        clone = type(self)()
        clone._entries = list(self._entries)
        clone._display = dict(self._display)
        return clone

    def _logical(self) -> dict[str, list[str]]:
        logical: dict[str, list[str]] = {}
        for name, value in self._entries:
            logical.setdefault(self._key(name), []).append(value)
        return logical

    def __eq__(self, other: object) -> bool:
        # Equal when every name group holds the same values in the same
        # order; name order and display casing do not matter.
        if not isinstance(other, OrderedMultimap) or type(other) is not type(self):
            return NotImplemented
        return self._logical() == other._logical()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._entries!r})"


class HeaderMultimap(OrderedMultimap):
    """Case-insensitive header multimap keeping first-seen name casing."""

    __slots__ = ()

    def _key(self, name: str) -> str:
        return name.lower()

    def _check_name(self, name: Any) -> str:
        if not isinstance(name, str):
            raise InvalidHeaderNameError(
                f"header name must be a string, got {json_type_name(name)}",
                value=name,
            )
        if not name:
            raise InvalidHeaderNameError("header name must not be empty")
        if not is_token(name):
            raise InvalidHeaderNameError(
                f"invalid header name '{name}'",
                field=name,
                value=name,
            )
        return name

    def _check_value(self, name: str, value: Any) -> str:
        if not isinstance(value, str):
            raise InvalidHeaderValueError(
                f"header value must be a string, got {json_type_name(value)}",
                field=name,
                value=value,
            )
        if not is_field_value(value):
            raise InvalidHeaderValueError(
                "header value contains CR, LF or NUL",
                field=name,
                value=value,
            )
        return value


class QueryMap(OrderedMultimap):
    """Case-sensitive multimap for query string parameters."""

    __slots__ = ()


def _decode_multimap(
    target: OrderedMultimap,
    value: Any,
    *,
    field: str,
    value_error: type[Exception],
) -> None:
    if not isinstance(value, dict):
        raise TypeMismatchError("object", value, field=field)
    for name, raw in value.items():
        if isinstance(raw, str):
            values: list[Any] = [raw]
        elif isinstance(raw, list):
            values = raw
        else:
            raise value_error(  # type: ignore[call-arg]
                f"expected string or array of strings, got {json_type_name(raw)}",
                field=f"{field}.{name}",
                value=raw,
            )
        for item in values:
            if not isinstance(item, str):
                raise value_error(  # type: ignore[call-arg]
                    f"array entries must be strings, got {json_type_name(item)}",
                    field=f"{field}.{name}",
                    value=item,
                )
            target.add(name, item)


def _encode_multimap(source: OrderedMultimap) -> dict[str, str | list[str]]:
    encoded: dict[str, str | list[str]] = {}
    for name, values in source.grouped().items():
        encoded[name] = values[0] if len(values) == 1 else list(values)
    return encoded


def decode_headers(value: Any = MISSING, *, field: str = "headers") -> HeaderMultimap:
    """Decode the header-object convention into a ``HeaderMultimap``.

    Absent or ``null`` decodes to an empty multimap.

    Raises:
        TypeMismatchError: the field is not an object.
        InvalidHeaderNameError: empty or non-token header name.
        InvalidHeaderValueError: a value that is not a string or array of strings.
    """
    if isinstance(value, HeaderMultimap):
        return value
    headers = HeaderMultimap()
    if is_nullish(value):
        return headers
    try:
        _decode_multimap(headers, value, field=field, value_error=InvalidHeaderValueError)
    except (InvalidHeaderNameError, InvalidHeaderValueError) as e:
        if e.field is None or not e.field.startswith(f"{field}."):
            e.with_field(field)
        raise
    groups = len({name.lower() for name in value})
    if groups < len(value):
        diagnostics.debug(
            "headers",
            "merged header names differing only in case",
            field=field,
            names=len(value),
            groups=groups,
        )
    return headers


def encode_headers(headers: HeaderMultimap, *, field: str = "headers") -> dict[str, str | list[str]]:
    """Encode a ``HeaderMultimap`` using the count-derived shape.

    Raises:
        InvalidHeaderNameError: an entry with an empty name was smuggled in.
    """
    for name, _ in headers.items():
        if not name:
            raise InvalidHeaderNameError(
                "header name must not be empty",
                field=field,
                category=ErrorCategory.ENCODE,
            )
    return _encode_multimap(headers)


def decode_query(value: Any = MISSING, *, field: str = "queryStringParameters") -> QueryMap:
    """Decode query parameters; absent or ``null`` is an empty map."""
    if isinstance(value, QueryMap):
        return value
    query = QueryMap()
    if is_nullish(value):
        return query
    _decode_multimap(query, value, field=field, value_error=_QueryValueError)
    return query


def encode_query(query: QueryMap) -> dict[str, str | list[str]]:
    return _encode_multimap(query)


class _QueryValueError(TypeMismatchError):
    def __init__(self, message: str, *, field: str | None = None, value: Any = None) -> None:
        super().__init__("string or array of strings", value, field=field, message=message)


__all__ = [
    "OrderedMultimap",
    "HeaderMultimap",
    "QueryMap",
    "decode_headers",
    "encode_headers",
    "decode_query",
    "encode_query",
]
