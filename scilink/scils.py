"""SCI-LS endpoint: sends and receives light signal telegrams over a RaSTA connection."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from scilink.factory import (
    ParseError,
    SciMessageType,
    create_status_begin,
    create_status_finish,
    create_status_request,
    create_version_request,
    create_version_response,
    parse_version_request,
    parse_version_response,
)
from scilink.hashmap import HashMap
from scilink.scils_telegrams import (
    Brightness,
    ScilsMessageType,
    SignalAspect,
    create_brightness_status,
    create_change_brightness,
    create_show_signal_aspect,
    create_signal_aspect_status,
    parse_brightness_status,
    parse_change_brightness,
    parse_show_signal_aspect,
    parse_signal_aspect_status,
)
from scilink.telegram import (
    ProtocolType,
    Telegram,
    TelegramError,
    UnknownSciNameError,
    VersionCheckResult,
    decode_telegram,
    encode_telegram,
    name_string,
    pad_name,
)

SendFunction = Callable[[int, bytes], None]
"""Callable that hands encoded telegram bytes to the RaSTA connection with the given ID."""


@dataclass
class ScilsNotifications:
    """Callbacks invoked when SCI-LS telegrams arrive; each receives the endpoint and sender name first."""

    on_version_request_received: Optional[Callable[["Scils", str, int], None]] = None
    on_version_response_received: Optional[
        Callable[["Scils", str, int, "VersionCheckResult | int", bytes], None]
    ] = None
    on_status_request_received: Optional[Callable[["Scils", str], None]] = None
    on_status_begin_received: Optional[Callable[["Scils", str], None]] = None
    on_status_finish_received: Optional[Callable[["Scils", str], None]] = None
    on_show_signal_aspect_received: Optional[
        Callable[["Scils", str, SignalAspect], None]
    ] = None
    on_signal_aspect_status_received: Optional[
        Callable[["Scils", str, SignalAspect], None]
    ] = None
    on_change_brightness_received: Optional[
        Callable[["Scils", str, "Brightness | int"], None]
    ] = None
    on_brightness_status_received: Optional[
        Callable[["Scils", str, "Brightness | int"], None]
    ] = None


def _key(sci_name: str | bytes) -> str:
    return name_string(pad_name(sci_name))


class Scils:
    """A SCI-LS instance on top of a RaSTA connection."""

    def __init__(self, sci_name: str, send: SendFunction) -> None:
        self.sci_name = sci_name
        self.notifications = ScilsNotifications()
        self._send = send
        self._rasta_ids = HashMap()

    def register_sci_name(self, sci_name: str | bytes, rasta_id: int) -> None:
        """Record the RaSTA ID of a remote SCI name unless it is already known."""
        key = _key(sci_name)
        if key not in self._rasta_ids:
            self._rasta_ids.put(key, rasta_id)

    def _send_telegram(self, telegram: Telegram) -> None:
        data = encode_telegram(telegram)
        key = name_string(telegram.receiver)
        try:
            rasta_id = self._rasta_ids.get(key)
        except KeyError:
            raise UnknownSciNameError(f"no RaSTA ID known for SCI name {key!r}") from None
        self._send(rasta_id, data)

    def send_version_request(self, receiver: str | bytes, estw_version: int) -> None:
        """Send a version request carrying the ESTW version."""
        self._send_telegram(
            create_version_request(ProtocolType.LS, self.sci_name, receiver, estw_version)
        )

    def send_version_response(
        self,
        receiver: str | bytes,
        btp_version: int,
        result: VersionCheckResult,
        checksum: bytes,
    ) -> None:
        """Send a version response."""
        self._send_telegram(
            create_version_response(
                ProtocolType.LS, self.sci_name, receiver, btp_version, result, checksum
            )
        )

    def send_status_request(self, receiver: str | bytes) -> None:
        """Send a status request."""
        self._send_telegram(create_status_request(ProtocolType.LS, self.sci_name, receiver))

    def send_status_begin(self, receiver: str | bytes) -> None:
        """Send a status begin telegram."""
        self._send_telegram(create_status_begin(ProtocolType.LS, self.sci_name, receiver))

    def send_status_finish(self, receiver: str | bytes) -> None:
        """Send a status finish telegram."""
        self._send_telegram(create_status_finish(ProtocolType.LS, self.sci_name, receiver))

    def send_show_signal_aspect(
        self, receiver: str | bytes, signal_aspect: SignalAspect
    ) -> None:
        """Send a show signal aspect command."""
        self._send_telegram(
            create_show_signal_aspect(self.sci_name, receiver, signal_aspect)
        )

    def send_signal_aspect_status(
        self, receiver: str | bytes, signal_aspect: SignalAspect
    ) -> None:
        """Send a signal aspect status message."""
        self._send_telegram(
            create_signal_aspect_status(self.sci_name, receiver, signal_aspect)
        )

    def send_change_brightness(self, receiver: str | bytes, brightness: Brightness) -> None:
        """Send a change brightness command."""
        self._send_telegram(create_change_brightness(self.sci_name, receiver, brightness))

    def send_brightness_status(self, receiver: str | bytes, brightness: Brightness) -> None:
        """Send a brightness status message."""
        self._send_telegram(create_brightness_status(self.sci_name, receiver, brightness))

    def on_rasta_receive(self, rasta_id: int, data: bytes) -> None:
        """Handle application data received from the RaSTA connection with ``rasta_id``.

        Data that is not a SCI-LS telegram, or whose payload cannot be parsed, is ignored.
        """
        try:
            telegram = decode_telegram(data)
        except TelegramError:
            return
        if telegram.protocol_type != ProtocolType.LS:
            return

        self.register_sci_name(telegram.sender, rasta_id)
        try:
            self._dispatch(telegram)
        except ParseError:
            return

    def _dispatch(self, telegram: Telegram) -> None:
        sender = telegram.sender_name
        n = self.notifications
        message_type = telegram.message_type

        if message_type == SciMessageType.VERSION_REQUEST:
            version = parse_version_request(telegram)
            if n.on_version_request_received is not None:
                n.on_version_request_received(self, sender, version)
        elif message_type == SciMessageType.VERSION_RESPONSE:
            response = parse_version_response(telegram)
            if n.on_version_response_received is not None:
                n.on_version_response_received(
                    self, sender, response.btp_version, response.result, response.checksum
                )
        elif message_type == SciMessageType.STATUS_REQUEST:
            if n.on_status_request_received is not None:
                n.on_status_request_received(self, sender)
        elif message_type == SciMessageType.STATUS_BEGIN:
            if n.on_status_begin_received is not None:
                n.on_status_begin_received(self, sender)
        elif message_type == SciMessageType.STATUS_FINISH:
            if n.on_status_finish_received is not None:
                n.on_status_finish_received(self, sender)
        elif message_type == ScilsMessageType.SHOW_SIGNAL_ASPECT:
            aspect = parse_show_signal_aspect(telegram)
            if n.on_show_signal_aspect_received is not None:
                n.on_show_signal_aspect_received(self, sender, aspect)
        elif message_type == ScilsMessageType.SIGNAL_ASPECT_STATUS:
            aspect = parse_signal_aspect_status(telegram)
            if n.on_signal_aspect_status_received is not None:
                n.on_signal_aspect_status_received(self, sender, aspect)
        elif message_type == ScilsMessageType.CHANGE_BRIGHTNESS:
            brightness = parse_change_brightness(telegram)
            if n.on_change_brightness_received is not None:
                n.on_change_brightness_received(self, sender, brightness)
        elif message_type == ScilsMessageType.BRIGHTNESS_STATUS:
            brightness = parse_brightness_status(telegram)
            if n.on_brightness_status_received is not None:
                n.on_brightness_status_received(self, sender, brightness)