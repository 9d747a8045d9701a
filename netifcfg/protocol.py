"""Wire format shared by the applier service and the interactive client.

Requests are short text packets of the form ``<command>]<fields>``:

* ``1]<interface>]<address>]<mask>`` configures an interface,
* ``2]<interface>`` asks for an interface's address,
* ``3`` (NUL terminated) ends the session.

Replies start with a single digit result code. A successful ``show`` reply
carries the description after a two character prefix.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

PACKET_SIZE = 1024
PORT = 8000
FIELD_SEPARATOR = "]"
END_REPLY = b"OK"

_ENCODING = "utf-8"


class Command(str, enum.Enum):
    """First character of a request packet."""

    CONFIGURE = "1"
    SHOW = "2"
    END = "3"


class ResultCode(enum.IntEnum):
    """Result of an interface operation, sent back as one digit."""

    OK = 0
    INTERFACE_INACTIVE = 1
    ADDRESS_FAILED = 2
    MASK_FAILED = 3


class ProtocolError(Exception):
    """A packet did not follow the wire format."""


@dataclass(frozen=True)
class Request:
    """A decoded request packet."""

    command: Command
    interface: str = ""
    address: str = ""
    mask: str = ""


def _octets(address: str) -> list[int] | None:
    parts = address.split(".")
    if len(parts) != 4:
        return None
    octets = []
    for part in parts:
        if not 1 <= len(part) <= 3 or not (part.isascii() and part.isdigit()):
            return None
        if len(part) > 1 and part.startswith("0"):
            return None
        value = int(part)
        if value > 255:
            return None
        octets.append(value)
    return octets


def _to_int(address: str) -> int:
    octets = _octets(address)
    if octets is None:
        raise ValueError(f"not a dotted IPv4 address: {address!r}")
    return int.from_bytes(bytes(octets), "big")


def is_valid_ipv4(address: str) -> bool:
    """Return True if *address* is a strict dotted-quad IPv4 address."""
    return _octets(address) is not None


def is_valid_subnet_mask(mask: str) -> bool:
    """Return True if *mask* is an IPv4 address whose one bits are contiguous from the top."""
    if not is_valid_ipv4(mask):
        return False
    inverted = ~_to_int(mask) & 0xFFFFFFFF
    return inverted & (inverted + 1) == 0


def prefix_length(mask: str) -> int:
    """Count the one bits of a dotted IPv4 mask."""
    return bin(_to_int(mask)).count("1")


def _encode(text: str) -> bytes:
    return text.encode(_ENCODING)


def encode_configure(interface: str, address: str, mask: str) -> bytes:
    """Build a configure request packet."""
    return _encode(FIELD_SEPARATOR.join((Command.CONFIGURE.value, interface, address, mask)))


def encode_show(interface: str) -> bytes:
    """Build a show request packet."""
    return _encode(FIELD_SEPARATOR.join((Command.SHOW.value, interface)))


def encode_end() -> bytes:
    """Build the end-of-session packet (the command digit and its terminating NUL)."""
    return _encode(Command.END.value) + b"\0"


def _decode(data: bytes) -> str:
    text = data.split(b"\0", 1)[0][: PACKET_SIZE - 1]
    try:
        return text.decode(_ENCODING)
    except UnicodeDecodeError as exc:
        raise ProtocolError("packet is not valid text") from exc


def parse_request(data: bytes) -> Request:
    """Decode a request packet, raising ProtocolError for unknown commands."""
    text = _decode(data)
    if not text:
        raise ProtocolError("empty request")
    try:
        command = Command(text[0])
    except ValueError as exc:
        raise ProtocolError(f"unknown command {text[0]!r}") from exc

    body = text[2:]
    if command is Command.CONFIGURE:
        interface, _, rest = body.partition(FIELD_SEPARATOR)
        address, _, mask = rest.partition(FIELD_SEPARATOR)
        return Request(command, interface, address, mask)
    if command is Command.SHOW:
        return Request(command, body)
    return Request(command)


def format_show_reply(interface: str, address: str, prefix: int) -> bytes:
    """Build the successful reply to a show request."""
    return _encode(f"{ResultCode.OK.value}[Interface: {interface}, Configured IP:{address}/{prefix}")


def parse_reply_code(data: bytes) -> ResultCode:
    """Read the result code at the start of a reply."""
    head = data[:1]
    if not head or not head.isdigit():
        raise ProtocolError(f"reply does not start with a result code: {data!r}")
    try:
        return ResultCode(int(head))
    except ValueError as exc:
        raise ProtocolError(f"unknown result code {head.decode()!r}") from exc