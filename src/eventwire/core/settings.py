"""
Configuration models for eventwire using Pydantic v2 Settings.

Settings are read from ``EVENTWIRE_``-prefixed environment variables with
``__`` as the nested delimiter, e.g.
``EVENTWIRE_CODECS__ACCEPT_URLSAFE_BASE64=true``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)

from .tokens import is_token

LATEST_CONFIG_SCHEMA_VERSION = "1.0"


class CoreSettings(BaseModel):
    """Library-wide behavior."""

    # Structured internal diagnostics for decode failures and normalizations
    internal_logging_enabled: bool = Field(
        default=False,
        description="Emit DEBUG/WARN diagnostics through the eventwire logger",
    )


class CodecSettings(BaseModel):
    """Codec leniency knobs.

    Defaults are strict: only standard padded base64 is accepted and only the
    nine canonical HTTP verbs decode.
    """

    accept_urlsafe_base64: bool = Field(
        default=False,
        description="Accept the URL-safe base64 alphabet ('-' and '_') on decode",
    )
    accept_unpadded_base64: bool = Field(
        default=False,
        description="Accept base64 bodies with the trailing '=' padding stripped",
    )
    extension_methods: list[str] = Field(
        default_factory=list,
        description="Non-standard HTTP method tokens accepted in addition to the canonical verbs",
    )

    @field_validator("extension_methods", mode="before")
    @classmethod
    def _parse_extension_methods(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return _parse_env_list(value)
        return value

    @field_validator("extension_methods")
    @classmethod
    def _ensure_tokens(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for item in value:
            token = item.strip()
            if not is_token(token):
                raise ValueError(f"'{item}' is not a valid HTTP method token")
            token = token.upper()
            if token not in normalized:
                normalized.append(token)
        return normalized


def _parse_env_list(raw: str) -> list[str]:
    """Parse a JSON list or a comma separated string."""
    raw = raw.strip()
    if not raw:
        return []
    if raw.startswith("["):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return [str(item) for item in parsed]
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings(BaseSettings):
    """Top-level configuration model."""

    schema_version: str = Field(default=LATEST_CONFIG_SCHEMA_VERSION)

    core: CoreSettings = Field(default_factory=CoreSettings)
    codecs: CodecSettings = Field(default_factory=CodecSettings)

    model_config = SettingsConfigDict(
        env_prefix="EVENTWIRE_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, loaded from the environment once."""
    return Settings()


def reset_settings_cache() -> None:
    """Drop cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()


__all__ = [
    "CoreSettings",
    "CodecSettings",
    "Settings",
    "get_settings",
    "reset_settings_cache",
    "LATEST_CONFIG_SCHEMA_VERSION",
]
