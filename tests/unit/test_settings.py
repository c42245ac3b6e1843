from __future__ import annotations

import pytest
from pydantic import ValidationError

from eventwire.core.settings import CodecSettings, Settings, get_settings, reset_settings_cache


def test_defaults_are_strict() -> None:
    settings = Settings()

    assert settings.core.internal_logging_enabled is False
    assert settings.codecs.accept_urlsafe_base64 is False
    assert settings.codecs.accept_unpadded_base64 is False
    assert settings.codecs.extension_methods == []


def test_nested_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVENTWIRE_CORE__INTERNAL_LOGGING_ENABLED", "true")
    monkeypatch.setenv("EVENTWIRE_CODECS__ACCEPT_URLSAFE_BASE64", "1")
    monkeypatch.setenv("EVENTWIRE_CODECS__EXTENSION_METHODS", '["purge", "PROPFIND"]')

    settings = Settings()

    assert settings.core.internal_logging_enabled is True
    assert settings.codecs.accept_urlsafe_base64 is True
    assert settings.codecs.extension_methods == ["PURGE", "PROPFIND"]


def test_extension_methods_csv_and_dedupe() -> None:
    codecs = CodecSettings(extension_methods="purge, PURGE ,mkcol,")

    assert codecs.extension_methods == ["PURGE", "MKCOL"]


def test_extension_methods_none_is_empty() -> None:
    assert CodecSettings(extension_methods=None).extension_methods == []


def test_extension_methods_reject_invalid_tokens() -> None:
    with pytest.raises(ValidationError, match="not a valid HTTP method token"):
        CodecSettings(extension_methods=["BAD VERB"])


def test_get_settings_is_cached_until_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    monkeypatch.setenv("EVENTWIRE_CODECS__ACCEPT_UNPADDED_BASE64", "true")

    assert get_settings() is first
    assert first.codecs.accept_unpadded_base64 is False

    reset_settings_cache()

    assert get_settings().codecs.accept_unpadded_base64 is True


def test_to_dict() -> None:
    data = Settings().to_dict()

    assert data["schema_version"] == "1.0"
    assert data["codecs"]["extension_methods"] == []
