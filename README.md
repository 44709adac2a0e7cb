# scilink

`scilink` builds, encodes, decodes and dispatches SCI telegrams: the messages
common to all SCI protocols, plus those of SCI-P (points) and SCI-LS (light
signals). It works on top of any transport that can deliver a telegram's
bytes to a peer identified by a numeric RaSTA id.

## Installation

```
pip install scilink
```

To run the test suite:

```
pip install "scilink[test]"
pytest
```

## Telegrams (`scilink.telegram`)

An encoded telegram is a 43-byte header followed by up to 85 bytes of
payload:

| bytes  | content                                              |
|--------|------------------------------------------------------|
| 0      | protocol type (`ProtocolType.P` = 0x40, `ProtocolType.LS` = 0x30) |
| 1–2    | message type, little-endian                          |
| 3–22   | sender name, padded with `_` to 20 bytes             |
| 23–42  | receiver name, padded with `_` to 20 bytes           |
| 43–    | payload                                              |

`Telegram` is a frozen dataclass with `protocol_type`, `message_type`,
`sender`, `receiver` and `payload`. Names given as strings are padded for
you; `sender_name` and `receiver_name` return the padded fields as strings
(`"ab__________________"`). A name longer than 20 bytes, a message type
outside 0–0xFFFF or a payload longer than 85 bytes raises `ValueError`.

- `pad_name(name)` pads a name to 20 bytes.
- `name_string(field)` turns a name field back into a string, padding included.
- `encode_telegram(telegram)` returns the wire bytes.
- `decode_telegram(data)` returns a `Telegram`, or raises `TelegramError`
  when the data is shorter than 43 bytes, longer than 128 bytes, or starts
  with an unknown protocol byte.

`SciError` is the base of all errors the package raises itself;
`TelegramError` is also a `ValueError`.

## Common messages (`scilink.factory`)

```python
from scilink.telegram import ProtocolType, VersionCheckResult, encode_telegram, decode_telegram
from scilink.factory import (
    create_version_request, parse_version_request,
    create_version_response, parse_version_response,
)

request = create_version_request(ProtocolType.LS, "ab", "cd", 0x01)
assert parse_version_request(decode_telegram(encode_telegram(request))) == 0x01

response = create_version_response(
    ProtocolType.LS, "ab", "cd", 0x02, VersionCheckResult.VERSIONS_ARE_EQUAL, b"\xde\xad"
)
parsed = parse_version_response(response)
assert parsed.checksum == b"\xde\xad"
```

Also available: `create_base_telegram`, `create_status_request`,
`create_status_begin` and `create_status_finish`. The message types are in
`SciMessageType`. The `parse_*` functions raise `InvalidMessageTypeError`
when the telegram has another message type and `InvalidPayloadLengthError`
when the payload is too short (or, for a version response, outside 4–128
bytes or shorter than its stated checksum); both derive from `ParseError`.
`parse_version_response` returns a `VersionResponse` with `btp_version`,
`result` and `checksum`.

## SCI-P telegrams (`scilink.scip_telegrams`)

`create_change_location`, `create_location_status` and `create_timeout`
build SCI-P telegrams; `parse_change_location` and `parse_location_status`
read them back. Values come from `PointTargetLocation` and `PointLocation`;
a byte that is not a known member is returned as a plain `int`.

## SCI-LS telegrams (`scilink.scils_telegrams`)

`SignalAspect` is a frozen dataclass whose fields use the enums `Main`,
`Additional`, `Zs3`, `Zs2`, `DeprecationInformation`, `DrivewayInformation`
and `DarkSwitching`. `SignalAspect()` is the default aspect: everything off
or without information, dark switching set to show.

- `create_show_signal_aspect` / `parse_show_signal_aspect` (9-byte payload,
  upstream and downstream driveway information packed into one byte)
- `create_signal_aspect_status` / `parse_signal_aspect_status` (7-byte
  payload; depreciation and driveway information keep their defaults when
  parsed)
- `create_change_brightness` / `parse_change_brightness`
- `create_brightness_status` / `parse_brightness_status`, using `Brightness`

## Endpoints (`scilink.scip`, `scilink.scils`)

`Scip` and `Scils` take their own SCI name and a send function
`send(rasta_id, data)` that hands encoded bytes to your transport.

```python
from scilink.scip import Scip
from scilink.scip_telegrams import PointLocation

sent = []

def send(rasta_id, data):
    sent.append((rasta_id, data))  # hand the bytes to your RaSTA connection here

point = Scip("BTP", send)
point.register_sci_name("ESTW", 0x61)
point.send_location_status("ESTW", PointLocation.RIGHT)

def on_change(instance, sender, location):
    instance.send_location_status(sender, PointLocation(location))

point.notifications.on_change_location_received = on_change
```

Pass every application message your transport receives to
`on_rasta_receive(rasta_id, data)`. Data that is not a telegram of the
endpoint's protocol, or whose payload cannot be parsed, is ignored.
Otherwise the sender's name is registered with that RaSTA id (an existing
registration is kept) and the matching callback in `notifications`
(`ScipNotifications` / `ScilsNotifications`) is called with the endpoint,
the sender's padded name and the parsed values. Callbacks left as `None`
are skipped.

Every `send_*` method looks the receiver up by name; a name that was never
registered and never seen as a sender raises `UnknownSciNameError`.

```python
from scilink.scils import Scils
from scilink.scils_telegrams import SignalAspect, Main

signal = Scils("C", send)
signal.register_sci_name("S", 0x61)
signal.send_show_signal_aspect("S", SignalAspect(main=Main.HP_0))
```

## Name lookups (`scilink.hashmap`)

`HashMap` is the string-keyed, open-addressing map the endpoints use to keep
SCI names and RaSTA ids together. It offers `put`, `get` and `remove` (the
last two raise `KeyError` for a missing key), `values()`, `len()` and `in`.
`crc32(data)` is the checksum it hashes keys with (zero start value, no
final xor).

## What it does not do

`scilink` has no RaSTA or network layer: it opens no connections, sends no
packets itself and reads no configuration files. Delivering bytes is left to
the `send` function you pass in and to whatever calls `on_rasta_receive`.
It provides no command-line program.