"""Reading and setting the IPv4 address and netmask of a network interface."""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass

from .protocol import ResultCode, is_valid_ipv4, prefix_length

SIOCGIFFLAGS = 0x8913
SIOCGIFADDR = 0x8915
SIOCSIFADDR = 0x8916
SIOCGIFNETMASK = 0x891B
SIOCSIFNETMASK = 0x891C

IFNAMSIZ = 16
_IFREQ_SIZE = 40
_SOCKADDR_OFFSET = IFNAMSIZ

_MESSAGES = {
    ResultCode.INTERFACE_INACTIVE: "interface is not active",
    ResultCode.ADDRESS_FAILED: "could not access the IPv4 address",
    ResultCode.MASK_FAILED: "could not access the subnet mask",
}


class InterfaceError(Exception):
    """An interface operation failed; ``code`` tells which step."""

    def __init__(self, code: ResultCode, interface: str) -> None:
        self.code = ResultCode(code)
        self.interface = interface
        super().__init__(f"{interface}: {_MESSAGES.get(self.code, 'failed')}")


@dataclass(frozen=True)
class InterfaceAddress:
    """The IPv4 address and netmask configured on an interface."""

    name: str
    address: str
    netmask: str

    @property
    def prefix(self) -> int:
        return prefix_length(self.netmask)


def _ifreq(name: str, sockaddr: bytes = b"") -> bytes:
    raw_name = name.encode()[: IFNAMSIZ - 1]
    return struct.pack(f"{IFNAMSIZ}s", raw_name) + sockaddr.ljust(_IFREQ_SIZE - IFNAMSIZ, b"\0")


def _sockaddr_in(address: str) -> bytes:
    return struct.pack("=HH4s8x", socket.AF_INET, 0, socket.inet_aton(address))


def _address_from(ifreq: bytes) -> str:
    start = _SOCKADDR_OFFSET + 4
    return socket.inet_ntoa(ifreq[start : start + 4])


def _ioctl(sock: socket.socket, request: int, ifreq: bytes) -> bytes:
    import fcntl

    return fcntl.ioctl(sock.fileno(), request, ifreq)


def _step(sock: socket.socket, request: int, ifreq: bytes, code: ResultCode, name: str) -> bytes:
    try:
        return _ioctl(sock, request, ifreq)
    except OSError as exc:
        raise InterfaceError(code, name) from exc


def configure_interface(name: str, address: str, mask: str) -> None:
    """Set the IPv4 address and netmask of interface *name*.

    Raises InterfaceError whose code names the step that failed.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        _step(sock, SIOCGIFFLAGS, _ifreq(name), ResultCode.INTERFACE_INACTIVE, name)

        if not is_valid_ipv4(address):
            raise InterfaceError(ResultCode.ADDRESS_FAILED, name)
        _step(sock, SIOCSIFADDR, _ifreq(name, _sockaddr_in(address)), ResultCode.ADDRESS_FAILED, name)

        if not is_valid_ipv4(mask):
            raise InterfaceError(ResultCode.MASK_FAILED, name)
        _step(sock, SIOCSIFNETMASK, _ifreq(name, _sockaddr_in(mask)), ResultCode.MASK_FAILED, name)


def get_interface_address(name: str) -> InterfaceAddress:
    """Read the IPv4 address and netmask of interface *name*."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        request = _ifreq(name, struct.pack("=H", socket.AF_INET))
        _step(sock, SIOCGIFFLAGS, request, ResultCode.INTERFACE_INACTIVE, name)
        address = _address_from(_step(sock, SIOCGIFADDR, request, ResultCode.ADDRESS_FAILED, name))
        netmask = _address_from(_step(sock, SIOCGIFNETMASK, request, ResultCode.MASK_FAILED, name))
    return InterfaceAddress(name, address, netmask)