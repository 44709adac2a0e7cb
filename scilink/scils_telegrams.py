"""Telegrams specific to SCI-LS, the light signal protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TypeVar

from scilink.factory import InvalidMessageTypeError, InvalidPayloadLengthError
from scilink.telegram import ProtocolType, Telegram


class ScilsMessageType(IntEnum):
    """Message types defined by SCI-LS."""

    SHOW_SIGNAL_ASPECT = 0x0100
    CHANGE_BRIGHTNESS = 0x0200
    SIGNAL_ASPECT_STATUS = 0x0300
    BRIGHTNESS_STATUS = 0x0400


class Main(IntEnum):
    """Main signal aspects."""

    HP_0 = 0x01
    HP_0_PLUS_SH1 = 0x02
    HP_0_WITH_DRIVING_INDICATOR = 0x03
    KS_1 = 0x04
    KS_1_FLASHING = 0x05
    KS_1_FLASHING_WITH_ADDITIONAL_LIGHT = 0x06
    KS_2 = 0x07
    KS_2_WITH_ADDITIONAL_LIGHT = 0x08
    SH_1 = 0x09
    ID_LIGHT = 0x0A
    HP_0_HV = 0xA0
    HP_1 = 0xA1
    HP_2 = 0xA2
    VR_0 = 0xB0
    VR_1 = 0xB1
    VR_2 = 0xB2
    OFF = 0xFF


class Additional(IntEnum):
    """Additional signal aspects."""

    ZS_1 = 0x01
    ZS_7 = 0x02
    ZS_8 = 0x03
    ZS_6 = 0x04
    ZS_13 = 0x05
    OFF = 0xFF


class Zs3(IntEnum):
    """Speed indicator values for zs3 and zs3v."""

    INDEX_1 = 0x01
    INDEX_2 = 0x02
    INDEX_3 = 0x03
    INDEX_4 = 0x04
    INDEX_5 = 0x05
    INDEX_6 = 0x06
    INDEX_7 = 0x07
    INDEX_8 = 0x08
    INDEX_9 = 0x09
    INDEX_10 = 0x0A
    INDEX_11 = 0x0B
    INDEX_12 = 0x0C
    INDEX_13 = 0x0D
    INDEX_14 = 0x0E
    INDEX_15 = 0x0F
    OFF = 0xFF


class Zs2(IntEnum):
    """Direction indicator letters for zs2 and zs2v."""

    LETTER_A = 0x01
    LETTER_B = 0x02
    LETTER_C = 0x03
    LETTER_D = 0x04
    LETTER_E = 0x05
    LETTER_F = 0x06
    LETTER_G = 0x07
    LETTER_H = 0x08
    LETTER_I = 0x09
    LETTER_J = 0x0A
    LETTER_K = 0x0B
    LETTER_L = 0x0C
    LETTER_M = 0x0D
    LETTER_N = 0x0E
    LETTER_O = 0x0F
    LETTER_P = 0x10
    LETTER_Q = 0x11
    LETTER_R = 0x12
    LETTER_S = 0x13
    LETTER_T = 0x14
    LETTER_U = 0x15
    LETTER_V = 0x16
    LETTER_W = 0x17
    LETTER_X = 0x18
    LETTER_Y = 0x19
    LETTER_Z = 0x1A
    OFF = 0xFF


class DeprecationInformation(IntEnum):
    """Depreciation information values."""

    TYPE_1 = 0x01
    TYPE_2 = 0x02
    TYPE_3 = 0x03
    NO_INFORMATION = 0xFF


class DrivewayInformation(IntEnum):
    """Driveway information, carried in one nibble."""

    WAY_1 = 0x1
    WAY_2 = 0x2
    WAY_3 = 0x3
    WAY_4 = 0x4
    NO_INFORMATION = 0xF


class DarkSwitching(IntEnum):
    """Whether the signal shows its aspect or is switched dark."""

    SHOW = 0x01
    DARK = 0xFF


class Brightness(IntEnum):
    """Signal luminosity."""

    DAY = 0x01
    NIGHT = 0x02
    UNDEFINED = 0xFF


@dataclass(frozen=True)
class SignalAspect:
    """A signal aspect configuration; the defaults show nothing."""

    main: Main | int = Main.OFF
    additional: Additional | int = Additional.OFF
    zs3: Zs3 | int = Zs3.OFF
    zs3v: Zs3 | int = Zs3.OFF
    zs2: Zs2 | int = Zs2.OFF
    zs2v: Zs2 | int = Zs2.OFF
    deprecation_information: DeprecationInformation | int = (
        DeprecationInformation.NO_INFORMATION
    )
    upstream_driveway_information: DrivewayInformation | int = (
        DrivewayInformation.NO_INFORMATION
    )
    downstream_driveway_information: DrivewayInformation | int = (
        DrivewayInformation.NO_INFORMATION
    )
    dark_switching: DarkSwitching | int = DarkSwitching.SHOW


_E = TypeVar("_E", bound=IntEnum)

_SHOW_PAYLOAD_LENGTH = 9
_STATUS_PAYLOAD_LENGTH = 7


def _enum_or_int(enum_cls: type[_E], value: int) -> _E | int:
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _checked_payload(
    telegram: Telegram, message_type: ScilsMessageType, length: int
) -> bytes:
    if telegram.message_type != message_type:
        raise InvalidMessageTypeError(
            f"expected message type {int(message_type):#06x}, "
            f"got {telegram.message_type:#06x}"
        )
    if len(telegram.payload) < length:
        raise InvalidPayloadLengthError(
            f"{message_type.name} payload needs {length} bytes, "
            f"got {len(telegram.payload)}"
        )
    return telegram.payload


def _aspect_head(signal_aspect: SignalAspect) -> bytes:
    return bytes(
        [
            signal_aspect.main,
            signal_aspect.additional,
            signal_aspect.zs3,
            signal_aspect.zs3v,
            signal_aspect.zs2,
            signal_aspect.zs2v,
        ]
    )


def _parse_head(payload: bytes) -> dict[str, object]:
    return {
        "main": _enum_or_int(Main, payload[0]),
        "additional": _enum_or_int(Additional, payload[1]),
        "zs3": _enum_or_int(Zs3, payload[2]),
        "zs3v": _enum_or_int(Zs3, payload[3]),
        "zs2": _enum_or_int(Zs2, payload[4]),
        "zs2v": _enum_or_int(Zs2, payload[5]),
    }


def create_show_signal_aspect(
    sender: str | bytes, receiver: str | bytes, signal_aspect: SignalAspect
) -> Telegram:
    """Create a show signal aspect command."""
    driveway = ((signal_aspect.downstream_driveway_information & 0x0F) << 4) | (
        signal_aspect.upstream_driveway_information & 0x0F
    )
    payload = _aspect_head(signal_aspect) + bytes(
        [signal_aspect.deprecation_information, driveway, signal_aspect.dark_switching]
    )
    return Telegram(
        ProtocolType.LS, ScilsMessageType.SHOW_SIGNAL_ASPECT, sender, receiver, payload
    )


def create_signal_aspect_status(
    sender: str | bytes, receiver: str | bytes, signal_aspect: SignalAspect
) -> Telegram:
    """Create a signal aspect status message."""
    payload = _aspect_head(signal_aspect) + bytes([signal_aspect.dark_switching])
    return Telegram(
        ProtocolType.LS,
        ScilsMessageType.SIGNAL_ASPECT_STATUS,
        sender,
        receiver,
        payload,
    )


def create_change_brightness(
    sender: str | bytes, receiver: str | bytes, brightness: Brightness
) -> Telegram:
    """Create a change brightness command."""
    return Telegram(
        ProtocolType.LS,
        ScilsMessageType.CHANGE_BRIGHTNESS,
        sender,
        receiver,
        bytes([brightness]),
    )


def create_brightness_status(
    sender: str | bytes, receiver: str | bytes, brightness: Brightness
) -> Telegram:
    """Create a brightness status message."""
    return Telegram(
        ProtocolType.LS,
        ScilsMessageType.BRIGHTNESS_STATUS,
        sender,
        receiver,
        bytes([brightness]),
    )


def parse_show_signal_aspect(telegram: Telegram) -> SignalAspect:
    """Return the signal aspect carried by a show signal aspect command."""
    payload = _checked_payload(
        telegram, ScilsMessageType.SHOW_SIGNAL_ASPECT, _SHOW_PAYLOAD_LENGTH
    )
    driveway = payload[7]
    return SignalAspect(
        **_parse_head(payload),  # type: ignore[arg-type]
        deprecation_information=_enum_or_int(DeprecationInformation, payload[6]),
        upstream_driveway_information=_enum_or_int(
            DrivewayInformation, driveway & 0x0F
        ),
        downstream_driveway_information=_enum_or_int(
            DrivewayInformation, (driveway & 0xF0) >> 4
        ),
        dark_switching=_enum_or_int(DarkSwitching, payload[8]),
    )


def parse_signal_aspect_status(telegram: Telegram) -> SignalAspect:
    """Return the signal aspect carried by a signal aspect status message.

    Depreciation and driveway information are not part of this message and keep
    their defaults.
    """
    payload = _checked_payload(
        telegram, ScilsMessageType.SIGNAL_ASPECT_STATUS, _STATUS_PAYLOAD_LENGTH
    )
    return SignalAspect(
        **_parse_head(payload),  # type: ignore[arg-type]
        dark_switching=_enum_or_int(DarkSwitching, payload[6]),
    )


def parse_change_brightness(telegram: Telegram) -> Brightness | int:
    """Return the brightness carried by a change brightness command."""
    payload = _checked_payload(telegram, ScilsMessageType.CHANGE_BRIGHTNESS, 1)
    return _enum_or_int(Brightness, payload[0])


def parse_brightness_status(telegram: Telegram) -> Brightness | int:
    """Return the brightness carried by a brightness status message."""
    payload = _checked_payload(telegram, ScilsMessageType.BRIGHTNESS_STATUS, 1)
    return _enum_or_int(Brightness, payload[0])