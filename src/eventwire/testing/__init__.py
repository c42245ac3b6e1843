"""
Testing utilities for eventwire schemas.

Provides bundled sample documents and round-trip validators for checking
that a schema re-encodes what it decodes.

Basic utilities are always available. Pytest fixtures require pytest:
`pip install eventwire[testing]`

Example:
    from eventwire import VpcLatticeEventV2
    from eventwire.testing import assert_round_trip, load_sample

    def test_my_event():
        assert_round_trip(VpcLatticeEventV2, load_sample("vpc_lattice_request_get"))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from typing import Any, TypeVar

from ..events.base import EventModel

_E = TypeVar("_E", bound=EventModel)

SAMPLES: tuple[str, ...] = (
    "vpc_lattice_request_get",
    "vpc_lattice_request_post",
    "vpc_lattice_response",
)


class RoundTripError(AssertionError):
    """Raised when a record does not survive decode -> encode -> decode."""


@dataclass
class RoundTripResult:
    """Outcome of a decode -> encode -> decode cycle."""

    first: EventModel
    second: EventModel
    encoded: bytes
    differences: list[str] = field(default_factory=list)

    @property
    def equal(self) -> bool:
        return not self.differences

    def raise_if_unequal(self) -> None:
        if self.differences:
            raise RoundTripError(
                f"{type(self.first).__name__} changed across a round trip: "
                + "; ".join(self.differences)
            )


def load_sample(name: str) -> bytes:
    """Return the raw bytes of a bundled sample document."""
    if name not in SAMPLES:
        raise KeyError(f"unknown sample '{name}', expected one of {SAMPLES}")
    return resources.files(__package__).joinpath("data", f"{name}.json").read_bytes()


def check_round_trip(model: type[_E], data: bytes | str) -> RoundTripResult:
    """Decode ``data``, re-encode it and decode the output again."""
    first = model.from_json(data)
    encoded = first.to_json()
    second = model.from_json(encoded)
    differences = [
        name
        for name in type(first).model_fields
        if getattr(first, name) != getattr(second, name)
    ]
    return RoundTripResult(first=first, second=second, encoded=encoded, differences=differences)


def assert_round_trip(model: type[_E], data: bytes | str) -> _E:
    """Assert ``data`` round-trips through ``model`` and return the first decode."""
    result = check_round_trip(model, data)
    result.raise_if_unequal()
    return result.first  # type: ignore[return-value]


__all__ = [
    "SAMPLES",
    "RoundTripError",
    "RoundTripResult",
    "load_sample",
    "check_round_trip",
    "assert_round_trip",
]
