"""Telegrams specific to SCI-P, the point (switch) protocol."""

from __future__ import annotations

from enum import IntEnum
from typing import TypeVar

from scilink.factory import InvalidMessageTypeError, InvalidPayloadLengthError
from scilink.telegram import ProtocolType, Telegram


class ScipMessageType(IntEnum):
    """Message types defined by SCI-P."""

    CHANGE_LOCATION = 0x0100
    LOCATION_STATUS = 0x0B00
    TIMEOUT = 0x0C00


class PointTargetLocation(IntEnum):
    """Target locations a point can be commanded to."""

    CHANGE_TO_RIGHT = 0x01
    CHANGE_TO_LEFT = 0x02


class PointLocation(IntEnum):
    """Locations a point can report."""

    RIGHT = 0x01
    LEFT = 0x02
    NO_TARGET_LOCATION = 0x03
    BUMPED = 0x04


_E = TypeVar("_E", bound=IntEnum)


def _enum_or_int(enum_cls: type[_E], value: int) -> _E | int:
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _first_payload_byte(telegram: Telegram, message_type: ScipMessageType) -> int:
    if telegram.message_type != message_type:
        raise InvalidMessageTypeError(
            f"expected message type {int(message_type):#06x}, "
            f"got {telegram.message_type:#06x}"
        )
    if not telegram.payload:
        raise InvalidPayloadLengthError(f"{message_type.name} telegram without payload")
    return telegram.payload[0]


def create_change_location(
    sender: str | bytes, receiver: str | bytes, location: PointTargetLocation
) -> Telegram:
    """Create a change location command."""
    return Telegram(
        ProtocolType.P,
        ScipMessageType.CHANGE_LOCATION,
        sender,
        receiver,
        bytes([location]),
    )


def create_location_status(
    sender: str | bytes, receiver: str | bytes, location: PointLocation
) -> Telegram:
    """Create a location status message."""
    return Telegram(
        ProtocolType.P,
        ScipMessageType.LOCATION_STATUS,
        sender,
        receiver,
        bytes([location]),
    )


def create_timeout(sender: str | bytes, receiver: str | bytes) -> Telegram:
    """Create a timeout message."""
    return Telegram(ProtocolType.P, ScipMessageType.TIMEOUT, sender, receiver)


def parse_change_location(telegram: Telegram) -> PointTargetLocation | int:
    """Return the target location carried by a change location command."""
    raw = _first_payload_byte(telegram, ScipMessageType.CHANGE_LOCATION)
    return _enum_or_int(PointTargetLocation, raw)


def parse_location_status(telegram: Telegram) -> PointLocation | int:
    """Return the location carried by a location status message."""
    raw = _first_payload_byte(telegram, ScipMessageType.LOCATION_STATUS)
    return _enum_or_int(PointLocation, raw)