"""Event schemas composed from the eventwire codecs."""

from .base import EventModel
from .vpc_lattice import (
    Identity,
    VpcLatticeEventContext,
    VpcLatticeEventV2,
    VpcLatticeResponse,
)

__all__ = [
    "EventModel",
    "Identity",
    "VpcLatticeEventContext",
    "VpcLatticeEventV2",
    "VpcLatticeResponse",
]
