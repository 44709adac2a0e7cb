"""SCI-P endpoint: sends and receives point telegrams over a RaSTA connection."""

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
from scilink.scip_telegrams import (
    PointLocation,
    PointTargetLocation,
    ScipMessageType,
    create_change_location,
    create_location_status,
    create_timeout,
    parse_change_location,
    parse_location_status,
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
class ScipNotifications:
    """Callbacks invoked when SCI-P telegrams arrive; each receives the endpoint and sender name first."""

    on_version_request_received: Optional[Callable[["Scip", str, int], None]] = None
    on_version_response_received: Optional[
        Callable[["Scip", str, int, "VersionCheckResult | int", bytes], None]
    ] = None
    on_status_request_received: Optional[Callable[["Scip", str], None]] = None
    on_status_begin_received: Optional[Callable[["Scip", str], None]] = None
    on_status_finish_received: Optional[Callable[["Scip", str], None]] = None
    on_change_location_received: Optional[
        Callable[["Scip", str, "PointTargetLocation | int"], None]
    ] = None
    on_location_status_received: Optional[
        Callable[["Scip", str, "PointLocation | int"], None]
    ] = None
    on_timeout_received: Optional[Callable[["Scip", str], None]] = None


def _key(sci_name: str | bytes) -> str:
    return name_string(pad_name(sci_name))


class Scip:
    """A SCI-P instance on top of a RaSTA connection."""

    def __init__(self, sci_name: str, send: SendFunction) -> None:
        self.sci_name = sci_name
        self.notifications = ScipNotifications()
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
            create_version_request(ProtocolType.P, self.sci_name, receiver, estw_version)
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
                ProtocolType.P, self.sci_name, receiver, btp_version, result, checksum
            )
        )

    def send_status_request(self, receiver: str | bytes) -> None:
        """Send a status request."""
        self._send_telegram(create_status_request(ProtocolType.P, self.sci_name, receiver))

    def send_status_begin(self, receiver: str | bytes) -> None:
        """Send a status begin telegram."""
        self._send_telegram(create_status_begin(ProtocolType.P, self.sci_name, receiver))

    def send_status_finish(self, receiver: str | bytes) -> None:
        """Send a status finish telegram."""
        self._send_telegram(create_status_finish(ProtocolType.P, self.sci_name, receiver))

    def send_change_location(
        self, receiver: str | bytes, new_location: PointTargetLocation
    ) -> None:
        """Send a change location command."""
        self._send_telegram(create_change_location(self.sci_name, receiver, new_location))

    def send_location_status(
        self, receiver: str | bytes, current_location: PointLocation
    ) -> None:
        """Send a location status message."""
        self._send_telegram(
            create_location_status(self.sci_name, receiver, current_location)
        )

    def send_timeout(self, receiver: str | bytes) -> None:
        """Send a timeout message."""
        self._send_telegram(create_timeout(self.sci_name, receiver))

    def on_rasta_receive(self, rasta_id: int, data: bytes) -> None:
        """Handle application data received from the RaSTA connection with ``rasta_id``.

        Data that is not a SCI-P telegram, or whose payload cannot be parsed, is ignored.
        """
        try:
            telegram = decode_telegram(data)
        except TelegramError:
            return
        if telegram.protocol_type != ProtocolType.P:
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
        elif message_type == ScipMessageType.CHANGE_LOCATION:
            target = parse_change_location(telegram)
            if n.on_change_location_received is not None:
                n.on_change_location_received(self, sender, target)
        elif message_type == ScipMessageType.LOCATION_STATUS:
            location = parse_location_status(telegram)
            if n.on_location_status_received is not None:
                n.on_location_status_received(self, sender, location)
        elif message_type == ScipMessageType.TIMEOUT:
            if n.on_timeout_received is not None:
                n.on_timeout_received(self, sender)