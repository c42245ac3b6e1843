"""Tests for Body payloads and the body codec."""

from __future__ import annotations

import pytest

from eventwire import (
    Body,
    BodyEncodingPolicy,
    BodyKind,
    InvalidBodyEncodingError,
    Settings,
    TypeMismatchError,
    decode_body,
    encode_body,
)
from eventwire.core.settings import CodecSettings


class TestBody:
    def test_text_view(self) -> None:
        body = Body.text("héllo")

        assert body.kind is BodyKind.TEXT
        assert bytes(body) == "héllo".encode("utf-8")
        assert body.as_text() == "héllo"
        assert body.is_base64_encoded is False

    def test_binary_view(self) -> None:
        body = Body.binary(bytearray(b"\x00\xff"))

        assert body.kind is BodyKind.BINARY
        assert body.data == b"\x00\xff"
        assert body.is_base64_encoded is True
        with pytest.raises(UnicodeDecodeError):
            body.as_text()

    def test_empty(self) -> None:
        body = Body.empty()

        assert body.is_empty
        assert len(body) == 0
        assert not body

    def test_equality_includes_kind(self) -> None:
        assert Body.text("a") == Body.text("a")
        assert Body.text("a") != Body.binary(b"a")

    def test_zero_length_bodies_are_equal_across_kinds(self) -> None:
        assert Body.empty() == Body.text("")
        assert Body.empty() == Body.binary(b"")
        assert hash(Body.empty()) == hash(Body.text("")) == hash(Body.binary(b""))
        assert Body.empty() != Body.text(" ")

    def test_is_immutable(self) -> None:
        body = Body.text("a")
        with pytest.raises(AttributeError):
            body.data = b"b"  # type: ignore[misc]


class TestDecodeBody:
    def test_absent_and_null_decode_to_none(self) -> None:
        assert decode_body() is None
        assert decode_body(None, True) is None

    def test_text_taken_verbatim(self) -> None:
        body = decode_body("hello", False)

        assert body == Body.text("hello")

    def test_base64_decoded_to_binary(self) -> None:
        body = decode_body("aGVsbG8=", True)

        assert body == Body.binary(b"hello")

    def test_text_and_base64_yield_same_bytes(self) -> None:
        assert bytes(decode_body("hello", False)) == bytes(decode_body("aGVsbG8=", True))

    def test_base64_flag_does_not_apply_to_text(self) -> None:
        body = decode_body("aGVsbG8=", False)

        assert body.as_text() == "aGVsbG8="

    @pytest.mark.parametrize(
        "value",
        [
            "aGVsbG8",  # missing padding
            "aGVsbG8=!",  # stray character
            "aGVs bG8=",  # whitespace
            "aGVsbG8-",  # url-safe alphabet
            "=aGVsbG8",
        ],
    )
    def test_invalid_base64_rejected(self, value: str) -> None:
        with pytest.raises(InvalidBodyEncodingError) as exc_info:
            decode_body(value, True)

        assert exc_info.value.field == "body"

    def test_empty_string_with_base64_flag(self) -> None:
        body = decode_body("", True)

        assert body == Body.binary(b"")

    @pytest.mark.parametrize("value", [1, True, ["a"], {"a": "b"}])
    def test_non_string_is_type_mismatch(self, value: object) -> None:
        with pytest.raises(TypeMismatchError):
            decode_body(value, False)

    def test_urlsafe_accepted_when_configured(self) -> None:
        settings = Settings(codecs=CodecSettings(accept_urlsafe_base64=True))

        body = decode_body("-_8=", True, settings=settings)

        assert body == Body.binary(b"\xfb\xff")

    def test_unpadded_accepted_when_configured(self) -> None:
        settings = Settings(codecs=CodecSettings(accept_unpadded_base64=True))

        body = decode_body("aGVsbG8", True, settings=settings)

        assert body == Body.binary(b"hello")

    def test_env_configured_leniency(
        self, monkeypatch: pytest.MonkeyPatch, fresh_settings: None
    ) -> None:
        monkeypatch.setenv("EVENTWIRE_CODECS__ACCEPT_UNPADDED_BASE64", "true")

        assert decode_body("aGVsbG8", True) == Body.binary(b"hello")


class TestEncodeBody:
    def test_text_preserved(self) -> None:
        assert encode_body(Body.text("hello")) == ("hello", False)

    def test_binary_as_standard_padded_base64(self) -> None:
        assert encode_body(Body.binary(b"hello")) == ("aGVsbG8=", True)
        assert encode_body(Body.binary(b"\xfb\xff")) == ("+/8=", True)

    def test_binary_policy(self) -> None:
        body = decode_body("hello", False)

        assert encode_body(body, policy=BodyEncodingPolicy.BINARY) == ("aGVsbG8=", True)

    def test_text_policy_prefers_text(self) -> None:
        body = Body.binary(b"hello")

        assert encode_body(body, policy=BodyEncodingPolicy.TEXT) == ("hello", False)

    def test_text_policy_falls_back_for_non_utf8(self) -> None:
        body = Body.binary(b"\xff\xfe")

        assert encode_body(body, policy=BodyEncodingPolicy.TEXT) == ("//4=", True)

    def test_none_and_empty(self) -> None:
        assert encode_body(None) == (None, False)
        assert encode_body(Body.empty()) == ("", False)
        assert encode_body(Body.empty(), policy=BodyEncodingPolicy.BINARY) == ("", True)

    @pytest.mark.parametrize(
        "body", [Body.text("hello"), Body.binary(b"\x00\x01\x02"), Body.binary(b""), Body.text("")]
    )
    def test_decode_of_encode_is_identity(self, body: Body) -> None:
        wire, flag = encode_body(body)

        assert decode_body(wire, flag) == body

    @pytest.mark.parametrize("policy", list(BodyEncodingPolicy))
    def test_empty_body_survives_every_policy(self, policy: BodyEncodingPolicy) -> None:
        wire, flag = encode_body(Body.empty(), policy=policy)

        assert decode_body(wire, flag) == Body.empty()

    def test_non_canonical_input_normalizes_on_encode(self) -> None:
        settings = Settings(codecs=CodecSettings(accept_urlsafe_base64=True, accept_unpadded_base64=True))
        body = decode_body("-_8", True, settings=settings)

        assert encode_body(body) == ("+/8=", True)
