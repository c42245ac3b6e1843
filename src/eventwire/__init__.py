"""
Public entrypoints for eventwire.

Normalization and round-trip codecs for loosely-typed cloud event payloads:
multi-valued headers, HTTP verbs, nullish booleans and dual-encoding bodies,
plus the VPC Lattice request/response schemas composed from them.

Example:
    from eventwire import VpcLatticeEventV2

    event = VpcLatticeEventV2.from_json(raw)
    event.headers.get_all("x-forwarded-for")
    event.method  # HttpMethod.GET
    raw_again = event.to_json()
"""

from __future__ import annotations

from ._version import __version__
from .core.body import Body, BodyEncodingPolicy, BodyKind, decode_body, encode_body
from .core.errors import (
    ConfigurationError,
    ErrorCategory,
    EventwireError,
    InvalidBodyEncodingError,
    InvalidHeaderNameError,
    InvalidHeaderValueError,
    InvalidMethodError,
    MalformedJsonError,
    TypeMismatchError,
)
from .core.methods import HttpMethod, Method, decode_method, encode_method, register_method
from .core.missing import MISSING
from .core.multimap import (
    HeaderMultimap,
    QueryMap,
    decode_headers,
    decode_query,
    encode_headers,
    encode_query,
)
from .core.nullish import decode_nullish_boolean, encode_nullish_boolean
from .core.settings import Settings, get_settings
from .events.base import EventModel
from .events.vpc_lattice import (
    Identity,
    VpcLatticeEventContext,
    VpcLatticeEventV2,
    VpcLatticeResponse,
    decode_event,
    decode_response,
    encode_event,
)

VERSION = __version__

__all__ = [
    # Codecs
    "decode_nullish_boolean",
    "encode_nullish_boolean",
    "decode_method",
    "encode_method",
    "register_method",
    "decode_headers",
    "encode_headers",
    "decode_query",
    "encode_query",
    "decode_body",
    "encode_body",
    # Types
    "HttpMethod",
    "Method",
    "HeaderMultimap",
    "QueryMap",
    "Body",
    "BodyKind",
    "BodyEncodingPolicy",
    "MISSING",
    # Schemas
    "EventModel",
    "Identity",
    "VpcLatticeEventContext",
    "VpcLatticeEventV2",
    "VpcLatticeResponse",
    "decode_event",
    "decode_response",
    "encode_event",
    # Errors
    "ErrorCategory",
    "EventwireError",
    "MalformedJsonError",
    "InvalidMethodError",
    "InvalidHeaderNameError",
    "InvalidHeaderValueError",
    "InvalidBodyEncodingError",
    "TypeMismatchError",
    "ConfigurationError",
    # Configuration
    "Settings",
    "get_settings",
    "__version__",
    "VERSION",
]
