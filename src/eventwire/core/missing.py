"""Sentinel for a field that is structurally absent from its JSON object."""

from __future__ import annotations

from enum import Enum
from typing import Any, Final, Mapping


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing.MISSING


def lookup(obj: Mapping[str, Any], key: str) -> Any:
    """Return ``obj[key]`` or ``MISSING`` when the key is absent."""
    return obj.get(key, MISSING)


def is_nullish(value: Any) -> bool:
    """True for an absent field or JSON null."""
    return value is MISSING or value is None
