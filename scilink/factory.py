"""Creation and payload parsing of the telegrams common to all SCI protocols."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from scilink.telegram import ProtocolType, SciError, Telegram, VersionCheckResult


class SciMessageType(IntEnum):
    """Message types shared by all SCI protocols."""

    VERSION_REQUEST = 0x2400
    VERSION_RESPONSE = 0x2500
    STATUS_REQUEST = 0x2100
    STATUS_BEGIN = 0x2200
    STATUS_FINISH = 0x2300


class ParseError(SciError):
    """Raised when a telegram payload cannot be parsed."""


class InvalidMessageTypeError(ParseError):
    """Raised when a telegram has a different message type than expected."""


class InvalidPayloadLengthError(ParseError):
    """Raised when a telegram payload has an unusable length."""


@dataclass(frozen=True)
class VersionResponse:
    """Parsed content of a version response."""

    btp_version: int
    result: VersionCheckResult | int
    checksum: bytes


def _require_type(telegram: Telegram, message_type: int) -> None:
    if telegram.message_type != message_type:
        raise InvalidMessageTypeError(
            f"expected message type {message_type:#06x}, "
            f"got {telegram.message_type:#06x}"
        )


def create_base_telegram(
    protocol_type: ProtocolType,
    sender: str | bytes,
    receiver: str | bytes,
    message_type: int,
) -> Telegram:
    """Create a telegram with an empty payload."""
    return Telegram(protocol_type, int(message_type), sender, receiver)


def create_version_request(
    protocol_type: ProtocolType, sender: str | bytes, receiver: str | bytes, version: int
) -> Telegram:
    """Create a version request carrying the ESTW version."""
    return Telegram(
        protocol_type, SciMessageType.VERSION_REQUEST, sender, receiver, bytes([version])
    )


def create_version_response(
    protocol_type: ProtocolType,
    sender: str | bytes,
    receiver: str | bytes,
    version: int,
    version_check_result: VersionCheckResult,
    checksum: bytes,
) -> Telegram:
    """Create a version response with the BTP version, check result and checksum."""
    checksum = bytes(checksum)
    if len(checksum) > 0xFF:
        raise ValueError("checksum longer than 255 bytes")
    payload = bytes([version_check_result, version, len(checksum)]) + checksum
    return Telegram(
        protocol_type, SciMessageType.VERSION_RESPONSE, sender, receiver, payload
    )


def create_status_request(
    protocol_type: ProtocolType, sender: str | bytes, receiver: str | bytes
) -> Telegram:
    """Create a status request."""
    return create_base_telegram(
        protocol_type, sender, receiver, SciMessageType.STATUS_REQUEST
    )


def create_status_begin(
    protocol_type: ProtocolType, sender: str | bytes, receiver: str | bytes
) -> Telegram:
    """Create a status begin telegram."""
    return create_base_telegram(
        protocol_type, sender, receiver, SciMessageType.STATUS_BEGIN
    )


def create_status_finish(
    protocol_type: ProtocolType, sender: str | bytes, receiver: str | bytes
) -> Telegram:
    """Create a status finish telegram."""
    return create_base_telegram(
        protocol_type, sender, receiver, SciMessageType.STATUS_FINISH
    )


def parse_version_request(telegram: Telegram) -> int:
    """Return the ESTW version carried by a version request."""
    _require_type(telegram, SciMessageType.VERSION_REQUEST)
    if not telegram.payload:
        raise InvalidPayloadLengthError("version request without payload")
    return telegram.payload[0]


def parse_version_response(telegram: Telegram) -> VersionResponse:
    """Return the content of a version response."""
    _require_type(telegram, SciMessageType.VERSION_RESPONSE)
    payload = telegram.payload
    if not 4 <= len(payload) <= 128:
        raise InvalidPayloadLengthError(
            f"invalid version response payload length: {len(payload)}"
        )
    raw_result, btp_version, checksum_len = payload[0], payload[1], payload[2]
    if checksum_len > len(payload) - 3:
        raise InvalidPayloadLengthError(
            f"checksum length {checksum_len} exceeds payload"
        )
    try:
        result: VersionCheckResult | int = VersionCheckResult(raw_result)
    except ValueError:
        result = raw_result
    return VersionResponse(btp_version, result, payload[3 : 3 + checksum_len])