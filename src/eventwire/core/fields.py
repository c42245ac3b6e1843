"""
Pydantic field adapters that splice the codecs into event models.

Each alias is an ``Annotated`` type pairing a plain validator (decode) with a
plain serializer (encode), so an event schema only has to declare which field
uses which codec:

    class Request(EventModel):
        headers: HeadersField = Field(default_factory=HeaderMultimap)
        method: MethodField
        is_base64_encoded: NullishBool = False

Decode errors carry the wire (camelCase) name of the field they failed on.
Serializers only see a plain ``SerializationInfo`` with no field name, and
pydantic wraps anything they raise, so ``EventModel.to_mapping`` runs the
fail-fast encode checks itself before dumping.
"""

from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import PlainSerializer, PlainValidator, SerializationInfo, ValidationInfo
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo

from .body import Body, BodyEncodingPolicy, encode_body
from .errors import TypeMismatchError
from .methods import Method, decode_method, encode_method
from .multimap import (
    HeaderMultimap,
    QueryMap,
    decode_headers,
    decode_query,
    encode_headers,
    encode_query,
)
from .nullish import decode_nullish_boolean, encode_nullish_boolean

BODY_POLICY_CONTEXT_KEY = "body_policy"


def wire_name(info: ValidationInfo) -> str:
    name = info.field_name
    return to_camel(name) if name else ""


def body_policy_from_context(context: Any) -> BodyEncodingPolicy:
    if isinstance(context, dict):
        policy = context.get(BODY_POLICY_CONTEXT_KEY)
        if policy is not None:
            return BodyEncodingPolicy(policy)
    return BodyEncodingPolicy.PRESERVE


def _validate_headers(value: Any, info: ValidationInfo) -> HeaderMultimap:
    return decode_headers(value, field=wire_name(info))


def _serialize_headers(value: HeaderMultimap) -> dict[str, Any]:
    return encode_headers(value)


def _validate_query(value: Any, info: ValidationInfo) -> QueryMap:
    return decode_query(value, field=wire_name(info))


def _validate_method(value: Any, info: ValidationInfo) -> Method:
    return decode_method(value, field=wire_name(info))


def _serialize_method(value: Method) -> str:
    return encode_method(value)


def is_method_field(field_info: FieldInfo) -> bool:
    """True when the model field was declared as ``MethodField``."""
    return any(
        isinstance(meta, PlainSerializer) and meta.func is _serialize_method
        for meta in field_info.metadata
    )


def _validate_nullish(value: Any, info: ValidationInfo) -> bool:
    return decode_nullish_boolean(value, field=wire_name(info))


def _validate_body(value: Any, info: ValidationInfo) -> Optional[Body]:
    # Raw wire strings are decoded by the owning model, which can see the
    # sibling isBase64Encoded flag; only decoded payloads reach this point.
    if value is None or isinstance(value, Body):
        return value
    raise TypeMismatchError("Body", value, field=wire_name(info))


def _serialize_body(value: Optional[Body], info: SerializationInfo) -> Optional[str]:
    wire, _ = encode_body(value, policy=body_policy_from_context(info.context))
    return wire


HeadersField = Annotated[
    HeaderMultimap,
    PlainValidator(_validate_headers),
    PlainSerializer(_serialize_headers),
]

QueryField = Annotated[
    QueryMap,
    PlainValidator(_validate_query),
    PlainSerializer(lambda value: encode_query(value)),
]

MethodField = Annotated[
    Method,
    PlainValidator(_validate_method),
    PlainSerializer(_serialize_method, return_type=str),
]

NullishBool = Annotated[
    bool,
    PlainValidator(_validate_nullish),
    PlainSerializer(encode_nullish_boolean, return_type=bool),
]

BodyField = Annotated[
    Optional[Body],
    PlainValidator(_validate_body),
    PlainSerializer(_serialize_body),
]


__all__ = [
    "HeadersField",
    "QueryField",
    "MethodField",
    "NullishBool",
    "BodyField",
    "BODY_POLICY_CONTEXT_KEY",
    "body_policy_from_context",
    "wire_name",
    "is_method_field",
]
