"""
Internal diagnostics for eventwire.

Diagnostics are structured, opt-in messages about decode failures and the
normalizations codecs apply silently (case merges, relaxed base64). They go
through the stdlib ``logging`` logger ``eventwire.diagnostics`` with the
fields serialized as compact JSON, and are suppressed unless
``EVENTWIRE_CORE__INTERNAL_LOGGING_ENABLED`` is set.

Emitting a diagnostic never raises.
"""

from __future__ import annotations

import logging
from typing import Any

import orjson

from .settings import get_settings

_logger = logging.getLogger("eventwire.diagnostics")


def _is_enabled() -> bool:
    try:
        return bool(get_settings().core.internal_logging_enabled)
    except Exception:
        return False


def _emit(level: int, component: str, message: str, fields: dict[str, Any]) -> None:
    if not _is_enabled():
        return
    try:
        payload = orjson.dumps(
            {"component": component, **fields},
            default=str,
            option=orjson.OPT_SORT_KEYS,
        ).decode("utf-8")
        _logger.log(level, "[%s] %s %s", component, message, payload)
    except Exception:
        # Diagnostics must never break decoding
        pass


def warn(component: str, message: str, **fields: Any) -> None:
    """Emit a WARNING diagnostic."""
    _emit(logging.WARNING, component, message, fields)


def debug(component: str, message: str, **fields: Any) -> None:
    """Emit a DEBUG diagnostic."""
    _emit(logging.DEBUG, component, message, fields)


__all__ = ["warn", "debug"]
