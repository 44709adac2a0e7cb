import pytest

from scilink.factory import (
    create_status_begin,
    create_status_finish,
    create_status_request,
    create_version_request,
    create_version_response,
)
from scilink.scils import Scils
from scilink.scils_telegrams import (
    Additional,
    Brightness,
    DarkSwitching,
    DeprecationInformation,
    DrivewayInformation,
    Main,
    ScilsMessageType,
    SignalAspect,
    Zs2,
    Zs3,
    create_brightness_status,
    create_change_brightness,
    create_show_signal_aspect,
    create_signal_aspect_status,
)
from scilink.scip_telegrams import create_timeout
from scilink.telegram import (
    ProtocolType,
    Telegram,
    UnknownSciNameError,
    VersionCheckResult,
    decode_telegram,
    encode_telegram,
)

PAD_AB = bytes([0x61, 0x62] + [0x5F] * 18)
PAD_CD = bytes([0x63, 0x64] + [0x5F] * 18)
PADDED_CD = "cd" + "_" * 18
PADDED_ESTW = "ESTW" + "_" * 16

ASPECT = SignalAspect(
    main=Main.HP_0,
    additional=Additional.ZS_13,
    zs3=Zs3.INDEX_10,
    zs3v=Zs3.OFF,
    zs2=Zs2.OFF,
    zs2v=Zs2.LETTER_Z,
    deprecation_information=DeprecationInformation.TYPE_3,
    upstream_driveway_information=DrivewayInformation.WAY_3,
    downstream_driveway_information=DrivewayInformation.WAY_2,
    dark_switching=DarkSwitching.SHOW,
)


class Recorder:
    def __init__(self):
        self.sent = []
        self.calls = []

    def send(self, rasta_id, data):
        self.sent.append((rasta_id, data))

    def record(self, name):
        def callback(*args):
            self.calls.append((name,) + args)

        return callback


@pytest.fixture
def rec():
    return Recorder()


@pytest.fixture
def ls(rec):
    endpoint = Scils("ab", rec.send)
    endpoint.register_sci_name("cd", 0x61)
    return endpoint


def _check_sent(rec, expected, message_type):
    assert len(rec.sent) == 1
    rasta_id, sent = rec.sent[0]
    assert rasta_id == 0x61
    assert sent == expected
    decoded = decode_telegram(sent)
    assert decoded.message_type == message_type
    assert decoded.receiver_name == PADDED_CD
    assert encode_telegram(decoded) == expected


def test_send_show_signal_aspect_wire_bytes(ls, rec):
    ls.send_show_signal_aspect("cd", ASPECT)
    expected = (
        bytes([0x30, 0x00, 0x01])
        + PAD_AB
        + PAD_CD
        + bytes([0x01, 0x05, 0x0A, 0xFF, 0xFF, 0x1A, 0x03, 0x23, 0x01])
    )
    _check_sent(rec, expected, ScilsMessageType.SHOW_SIGNAL_ASPECT)


def test_send_signal_aspect_status_wire_bytes(ls, rec):
    ls.send_signal_aspect_status("cd", ASPECT)
    expected = (
        bytes([0x30, 0x00, 0x03])
        + PAD_AB
        + PAD_CD
        + bytes([0x01, 0x05, 0x0A, 0xFF, 0xFF, 0x1A, 0x01])
    )
    _check_sent(rec, expected, ScilsMessageType.SIGNAL_ASPECT_STATUS)


def test_send_change_brightness_wire_bytes(ls, rec):
    ls.send_change_brightness("cd", Brightness.DAY)
    expected = bytes([0x30, 0x00, 0x02]) + PAD_AB + PAD_CD + bytes([0x01])
    _check_sent(rec, expected, ScilsMessageType.CHANGE_BRIGHTNESS)


def test_send_version_request_matches_factory(ls, rec):
    ls.send_version_request("cd", 0x01)
    expected = encode_telegram(create_version_request(ProtocolType.LS, "ab", "cd", 0x01))
    assert rec.sent == [(0x61, expected)]


def test_send_version_response_matches_factory(ls, rec):
    ls.send_version_response(
        "cd", 0x02, VersionCheckResult.VERSIONS_ARE_EQUAL, b"\xde\xad"
    )
    expected = encode_telegram(
        create_version_response(
            ProtocolType.LS,
            "ab",
            "cd",
            0x02,
            VersionCheckResult.VERSIONS_ARE_EQUAL,
            b"\xde\xad",
        )
    )
    assert rec.sent == [(0x61, expected)]


@pytest.mark.parametrize(
    "method, factory",
    [
        ("send_status_request", create_status_request),
        ("send_status_begin", create_status_begin),
        ("send_status_finish", create_status_finish),
    ],
)
def test_send_status_telegrams(ls, rec, method, factory):
    getattr(ls, method)("cd")
    expected = encode_telegram(factory(ProtocolType.LS, "ab", "cd"))
    assert rec.sent == [(0x61, expected)]


def test_send_to_unknown_name_raises(ls, rec):
    with pytest.raises(UnknownSciNameError):
        ls.send_status_request("nobody")
    assert rec.sent == []


def test_register_does_not_overwrite(ls, rec):
    ls.register_sci_name("cd", 0x99)
    ls.send_status_begin("cd")
    expected = encode_telegram(create_status_begin(ProtocolType.LS, "ab", "cd"))
    assert rec.sent == [(0x61, expected)]


def test_register_accepts_padded_name(rec):
    endpoint = Scils("ab", rec.send)
    endpoint.register_sci_name(PAD_CD, 7)
    endpoint.send_status_request("cd")
    assert rec.sent[0][0] == 7


def test_receive_show_signal_aspect_and_reply(rec):
    endpoint = Scils("BTP", rec.send)
    endpoint.notifications.on_show_signal_aspect_received = rec.record("show")
    data = encode_telegram(create_show_signal_aspect("ESTW", "BTP", ASPECT))
    endpoint.on_rasta_receive(0x62, data)
    assert rec.calls == [("show", endpoint, PADDED_ESTW, ASPECT)]

    endpoint.send_signal_aspect_status(PADDED_ESTW, ASPECT)
    rasta_id, sent = rec.sent[0]
    assert rasta_id == 0x62
    reply = decode_telegram(sent)
    assert reply.message_type == ScilsMessageType.SIGNAL_ASPECT_STATUS
    assert reply.receiver_name == PADDED_ESTW


def test_receive_signal_aspect_status(rec):
    endpoint = Scils("BTP", rec.send)
    endpoint.notifications.on_signal_aspect_status_received = rec.record("status")
    data = encode_telegram(create_signal_aspect_status("ESTW", "BTP", ASPECT))
    endpoint.on_rasta_receive(1, data)
    assert len(rec.calls) == 1
    name, _, sender, aspect = rec.calls[0]
    assert (name, sender) == ("status", PADDED_ESTW)
    assert aspect.main == Main.HP_0
    assert aspect.zs2v == Zs2.LETTER_Z
    assert aspect.dark_switching == DarkSwitching.SHOW


@pytest.mark.parametrize(
    "factory, attribute",
    [
        (create_change_brightness, "on_change_brightness_received"),
        (create_brightness_status, "on_brightness_status_received"),
    ],
)
def test_receive_brightness(rec, factory, attribute):
    endpoint = Scils("BTP", rec.send)
    setattr(endpoint.notifications, attribute, rec.record(attribute))
    endpoint.on_rasta_receive(1, encode_telegram(factory("ESTW", "BTP", Brightness.UNDEFINED)))
    assert rec.calls == [(attribute, endpoint, PADDED_ESTW, Brightness.UNDEFINED)]


def test_receive_version_request(rec):
    endpoint = Scils("BTP", rec.send)
    endpoint.notifications.on_version_request_received = rec.record("vreq")
    data = encode_telegram(create_version_request(ProtocolType.LS, "ESTW", "BTP", 0x42))
    endpoint.on_rasta_receive(1, data)
    assert rec.calls == [("vreq", endpoint, PADDED_ESTW, 0x42)]


def test_receive_version_response(rec):
    endpoint = Scils("BTP", rec.send)
    endpoint.notifications.on_version_response_received = rec.record("vresp")
    data = encode_telegram(
        create_version_response(
            ProtocolType.LS,
            "ESTW",
            "BTP",
            0x01,
            VersionCheckResult.VERSIONS_ARE_EQUAL,
            b"\x0a\x0b",
        )
    )
    endpoint.on_rasta_receive(1, data)
    assert rec.calls == [
        (
            "vresp",
            endpoint,
            PADDED_ESTW,
            0x01,
            VersionCheckResult.VERSIONS_ARE_EQUAL,
            b"\x0a\x0b",
        )
    ]


@pytest.mark.parametrize(
    "factory, attribute",
    [
        (create_status_request, "on_status_request_received"),
        (create_status_begin, "on_status_begin_received"),
        (create_status_finish, "on_status_finish_received"),
    ],
)
def test_receive_status_telegrams(rec, factory, attribute):
    endpoint = Scils("BTP", rec.send)
    setattr(endpoint.notifications, attribute, rec.record(attribute))
    endpoint.on_rasta_receive(1, encode_telegram(factory(ProtocolType.LS, "ESTW", "BTP")))
    assert rec.calls == [(attribute, endpoint, PADDED_ESTW)]


def test_scip_telegram_is_ignored(rec):
    endpoint = Scils("BTP", rec.send)
    endpoint.notifications.on_status_request_received = rec.record("req")
    endpoint.on_rasta_receive(
        1, encode_telegram(create_status_request(ProtocolType.P, "ESTW", "BTP"))
    )
    assert rec.calls == []
    with pytest.raises(UnknownSciNameError):
        endpoint.send_status_request("ESTW")


def test_garbage_is_ignored(rec):
    endpoint = Scils("BTP", rec.send)
    endpoint.notifications.on_status_request_received = rec.record("req")
    endpoint.on_rasta_receive(1, b"\x30")
    endpoint.on_rasta_receive(1, bytes(129))
    assert rec.calls == []


def test_unparseable_payload_still_registers_sender(rec):
    endpoint = Scils("BTP", rec.send)
    endpoint.notifications.on_show_signal_aspect_received = rec.record("show")
    short = Telegram(
        ProtocolType.LS, ScilsMessageType.SHOW_SIGNAL_ASPECT, "X", "BTP", b"\x01"
    )
    endpoint.on_rasta_receive(5, encode_telegram(short))
    assert rec.calls == []
    endpoint.send_status_begin("X")
    assert rec.sent[0][0] == 5


def test_unknown_message_type_registers_sender(rec):
    endpoint = Scils("BTP", rec.send)
    unknown = Telegram(ProtocolType.LS, 0x0900, "Y", "BTP")
    endpoint.on_rasta_receive(9, encode_telegram(unknown))
    endpoint.send_status_finish("Y")
    assert rec.sent[0][0] == 9


def test_missing_callback_is_harmless(rec):
    endpoint = Scils("BTP", rec.send)
    endpoint.on_rasta_receive(
        3, encode_telegram(create_change_brightness("ESTW", "BTP", Brightness.DAY))
    )
    endpoint.send_brightness_status("ESTW", Brightness.DAY)
    assert rec.sent[0][0] == 3


def test_other_protocol_timeout_not_dispatched(rec):
    endpoint = Scils("BTP", rec.send)
    endpoint.notifications.on_show_signal_aspect_received = rec.record("show")
    endpoint.on_rasta_receive(1, encode_telegram(create_timeout("ESTW", "BTP")))
    assert rec.calls == []