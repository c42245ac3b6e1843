"""
Base model for event schemas.

``EventModel`` provides the decode/encode entrypoints shared by every event
record and response record:

- ``Model.from_json(data)`` / ``Model.from_mapping(obj)`` decode, failing at
  the first invalid field with an ``EventwireError`` that names it;
- ``model.to_mapping()`` / ``model.to_json()`` encode back to the wire shape.

Models that declare a ``body`` field get the dual-encoding body convention:
the wire string is decoded according to the sibling ``isBase64Encoded`` flag,
and on encode the flag is derived from the payload.
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    ValidationError,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ..core import diagnostics
from ..core.body import BodyEncodingPolicy, decode_body, encode_body
from ..core.errors import EventwireError, MalformedJsonError, TypeMismatchError
from ..core.fields import BODY_POLICY_CONTEXT_KEY, body_policy_from_context, is_method_field
from ..core.methods import encode_method
from ..core.missing import MISSING
from ..core.multimap import HeaderMultimap, encode_headers
from ..core.nullish import decode_nullish_boolean
from ..core.serialization import dump_document, load_document

_E = TypeVar("_E", bound="EventModel")

_BODY_FIELD = "body"
_FLAG_FIELD = "is_base64_encoded"
_FLAG_ALIAS = "isBase64Encoded"

# pydantic error type -> JSON type name reported in TypeMismatchError
_EXPECTED_TYPES: dict[str, str] = {
    "string_type": "string",
    "int_type": "integer",
    "int_from_float": "integer",
    "float_type": "number",
    "bool_type": "boolean",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
    "list_type": "array",
}


def _location(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc)


def translate_validation_error(error: ValidationError) -> EventwireError:
    """Map the first pydantic error to an eventwire error kind."""
    first = error.errors(include_url=False)[0]
    field = _location(first.get("loc", ())) or None
    err_type = first.get("type", "")
    if err_type == "missing":
        return MalformedJsonError("missing required field", field=field)
    expected = _EXPECTED_TYPES.get(err_type)
    if expected is not None:
        return TypeMismatchError(expected, first.get("input"), field=field)
    return MalformedJsonError(first.get("msg", "invalid value"), field=field)


def _check_encodable(model: BaseModel, prefix: str = "") -> None:
    # Raise codec errors with their wire path before pydantic can wrap them
    for name, info in type(model).model_fields.items():
        value = getattr(model, name)
        path = f"{prefix}{info.alias or name}"
        if isinstance(value, BaseModel):
            _check_encodable(value, f"{path}.")
        elif isinstance(value, HeaderMultimap):
            encode_headers(value, field=path)
        elif is_method_field(info):
            encode_method(value, field=path)


class EventModel(BaseModel):
    """Base for event schemas: camelCase wire names, codec-aware (de)serialization."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _decode_wire_body(cls, data: Any) -> Any:
        if _BODY_FIELD not in cls.model_fields or not isinstance(data, dict):
            return data
        raw_flag = data.get(_FLAG_ALIAS, data.get(_FLAG_FIELD, MISSING))
        flag = decode_nullish_boolean(raw_flag, field=_FLAG_ALIAS)
        data = dict(data)
        data[_BODY_FIELD] = decode_body(
            data.get(_BODY_FIELD, MISSING), flag, field=_BODY_FIELD
        )
        return data

    @model_validator(mode="after")
    def _sync_body_flag(self) -> Any:
        if _BODY_FIELD in type(self).model_fields:
            body = getattr(self, _BODY_FIELD)
            if body is not None and getattr(self, _FLAG_FIELD) != body.is_base64_encoded:
                setattr(self, _FLAG_FIELD, body.is_base64_encoded)
        return self

    @model_serializer(mode="wrap")
    def _encode_wire_body(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        if _BODY_FIELD not in type(self).model_fields or not isinstance(data, dict):
            return data
        body = getattr(self, _BODY_FIELD)
        if body is None:
            data.pop(_BODY_FIELD, None)
            return data
        _, flag = encode_body(body, policy=body_policy_from_context(info.context))
        data[_FLAG_ALIAS if info.by_alias else _FLAG_FIELD] = flag
        return data

    @classmethod
    def from_mapping(cls: type[_E], data: Mapping[str, Any]) -> _E:
        """Decode an already-parsed JSON object.

        Raises:
            EventwireError: the first field that fails to decode.
        """
        if not isinstance(data, Mapping):
            raise MalformedJsonError(
                f"{cls.__name__} expects a JSON object, got {type(data).__name__}"
            )
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            translated = translate_validation_error(e)
            diagnostics.warn("schema", "decode failed", model=cls.__name__, error=translated.to_dict())
            raise translated from e
        except EventwireError as e:
            diagnostics.warn("schema", "decode failed", model=cls.__name__, error=e.to_dict())
            raise

    @classmethod
    def from_json(cls: type[_E], data: bytes | bytearray | memoryview | str) -> _E:
        """Parse and decode a JSON document."""
        return cls.from_mapping(load_document(data))

    def to_mapping(
        self, *, body_policy: BodyEncodingPolicy | None = None
    ) -> dict[str, Any]:
        """Encode to plain JSON types using wire field names.

        Raises:
            EventwireError: a value mutated after decode cannot be encoded.
        """
        _check_encodable(self)
        context = {BODY_POLICY_CONTEXT_KEY: body_policy} if body_policy is not None else None
        return self.model_dump(mode="json", by_alias=True, context=context)

    def to_json(self, *, body_policy: BodyEncodingPolicy | None = None) -> bytes:
        """Encode to a JSON document."""
        return dump_document(self.to_mapping(body_policy=body_policy)).data


__all__ = ["EventModel", "translate_validation_error"]
