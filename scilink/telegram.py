"""SCI telegrams: the common data model and its wire encoding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

MAX_TELEGRAM_LENGTH = 128
"""Maximum length of an encoded telegram in bytes."""

HEADER_LENGTH = 43
"""Length of an encoded telegram without its payload."""

MAX_PAYLOAD_LENGTH = 85
"""Maximum number of payload bytes a telegram can carry."""

NAME_LENGTH = 20
"""Length of a padded SCI name in bytes."""

NAME_PADDING = b"_"
"""Byte used to pad SCI names to their full length."""

SCI_VERSION = 0x01
"""Version of this SCI implementation."""


class ProtocolType(IntEnum):
    """Protocol identifier carried in the first byte of a telegram."""

    P = 0x40
    LS = 0x30


class VersionCheckResult(IntEnum):
    """Allowed results of a BTP version check."""

    NOT_ALLOWED_TO_USE = 0x00
    VERSIONS_ARE_NOT_EQUAL = 0x01
    VERSIONS_ARE_EQUAL = 0x02


class SciError(Exception):
    """Base class for all SCI errors."""


class TelegramError(SciError, ValueError):
    """Raised when bytes do not form a valid SCI telegram."""


class UnknownSciNameError(SciError):
    """Raised when a telegram is addressed to a SCI name with no known RaSTA ID."""


def pad_name(name: str | bytes) -> bytes:
    """Return ``name`` padded with underscores to the full SCI name length."""
    raw = name.encode("latin-1") if isinstance(name, str) else bytes(name)
    raw = raw.split(b"\0", 1)[0]
    if len(raw) > NAME_LENGTH:
        raise ValueError(f"SCI name longer than {NAME_LENGTH} bytes: {raw!r}")
    return raw.ljust(NAME_LENGTH, NAME_PADDING)


def name_string(field: bytes) -> str:
    """Return a sender or receiver field as a string, padding included."""
    return bytes(field[:NAME_LENGTH]).split(b"\0", 1)[0].decode("latin-1")


def _name_field(value: str | bytes) -> bytes:
    if isinstance(value, (bytes, bytearray)) and len(value) == NAME_LENGTH:
        return bytes(value)
    return pad_name(value)


@dataclass(frozen=True)
class Telegram:
    """A SCI telegram with padded sender and receiver names."""

    protocol_type: ProtocolType
    message_type: int
    sender: bytes
    receiver: bytes
    payload: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "protocol_type", ProtocolType(self.protocol_type))
        if not 0 <= self.message_type <= 0xFFFF:
            raise ValueError(f"message type out of range: {self.message_type:#x}")
        object.__setattr__(self, "sender", _name_field(self.sender))
        object.__setattr__(self, "receiver", _name_field(self.receiver))
        payload = bytes(self.payload)
        if len(payload) > MAX_PAYLOAD_LENGTH:
            raise ValueError(
                f"payload of {len(payload)} bytes exceeds {MAX_PAYLOAD_LENGTH}"
            )
        object.__setattr__(self, "payload", payload)

    @property
    def sender_name(self) -> str:
        """The sender field as a string."""
        return name_string(self.sender)

    @property
    def receiver_name(self) -> str:
        """The receiver field as a string."""
        return name_string(self.receiver)


def encode_telegram(telegram: Telegram) -> bytes:
    """Encode ``telegram`` into its wire form."""
    return b"".join(
        (
            bytes([telegram.protocol_type]),
            telegram.message_type.to_bytes(2, "little"),
            telegram.sender,
            telegram.receiver,
            telegram.payload,
        )
    )


def decode_telegram(data: bytes) -> Telegram:
    """Decode a telegram from ``data``; raise TelegramError if it is not one."""
    data = bytes(data)
    if not HEADER_LENGTH <= len(data) <= MAX_TELEGRAM_LENGTH:
        raise TelegramError(f"invalid telegram length: {len(data)}")
    try:
        protocol = ProtocolType(data[0])
    except ValueError:
        raise TelegramError(f"invalid protocol type: {data[0]:#04x}") from None
    return Telegram(
        protocol_type=protocol,
        message_type=int.from_bytes(data[1:3], "little"),
        sender=data[3:23],
        receiver=data[23:43],
        payload=data[43:],
    )