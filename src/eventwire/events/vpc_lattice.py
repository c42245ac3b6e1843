"""VPC Lattice Lambda target request and response schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, StrictInt, StrictStr

from ..core.fields import BodyField, HeadersField, MethodField, NullishBool, QueryField
from ..core.multimap import HeaderMultimap, QueryMap
from .base import EventModel


class Identity(EventModel):
    """Caller identity attached by VPC Lattice."""

    principal: Optional[StrictStr] = None
    principal_org_id: Optional[StrictStr] = Field(default=None, alias="principalOrgID")
    session_name: Optional[StrictStr] = None
    source_vpc_arn: Optional[StrictStr] = None
    type_: Optional[StrictStr] = Field(default=None, alias="type")


class VpcLatticeEventContext(EventModel):
    identity: Identity
    region: StrictStr
    service_arn: StrictStr
    service_network_arn: StrictStr
    target_group_arn: StrictStr
    time_epoch: StrictStr


class VpcLatticeEventV2(EventModel):
    """Request delivered to a Lambda function behind a VPC Lattice target group."""

    headers: HeadersField = Field(default_factory=HeaderMultimap)
    method: MethodField
    path: Optional[StrictStr] = None
    query_string_parameters: QueryField = Field(default_factory=QueryMap)
    request_context: VpcLatticeEventContext
    version: StrictStr
    body: BodyField = None
    is_base64_encoded: NullishBool = False


class VpcLatticeResponse(EventModel):
    """Response returned by the Lambda target; ``body`` is omitted when absent."""

    status_code: StrictInt
    status_description: Optional[StrictStr] = None
    headers: HeadersField = Field(default_factory=HeaderMultimap)
    body: BodyField = None
    is_base64_encoded: NullishBool = False


def decode_event(data: bytes | str) -> VpcLatticeEventV2:
    return VpcLatticeEventV2.from_json(data)


def decode_response(data: bytes | str) -> VpcLatticeResponse:
    return VpcLatticeResponse.from_json(data)


def encode_event(record: EventModel) -> bytes:
    return record.to_json()


__all__ = [
    "Identity",
    "VpcLatticeEventContext",
    "VpcLatticeEventV2",
    "VpcLatticeResponse",
    "decode_event",
    "decode_response",
    "encode_event",
]
