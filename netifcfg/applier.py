"""Service that applies interface configuration requests received over TCP."""

from __future__ import annotations

import argparse
import socket
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from .interfaces import InterfaceAddress, InterfaceError, configure_interface, get_interface_address
from .protocol import (
    END_REPLY,
    PACKET_SIZE,
    PORT,
    Command,
    ProtocolError,
    ResultCode,
    format_show_reply,
    parse_request,
)

EXIT_ERROR_SOCKET = 1
EXIT_ERROR_BINDING = 2
EXIT_ERROR_COMMUNICATION = 3
EXIT_ERROR_SOCKET_CONFIG = 4
EXIT_ERROR_LISTEN = 5
EXIT_ERROR_ACCEPT = 6

ConfigureFunc = Callable[[str, str, str], None]
QueryFunc = Callable[[str], InterfaceAddress]


class _ServerError(OSError):
    """A socket step of the service failed; ``exit_code`` tells which."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@contextmanager
def _step(message: str, exit_code: int) -> Iterator[None]:
    try:
        yield
    except _ServerError:
        raise
    except OSError as exc:
        raise _ServerError(message, exit_code) from exc


def _code_reply(code: ResultCode) -> bytes:
    # The digit followed by its terminating NUL.
    return str(int(code)).encode() + b"\0"


class Applier:
    """Turns request packets into reply packets using the given interface operations."""

    def __init__(self, configure: ConfigureFunc, query: QueryFunc) -> None:
        self.configure = configure
        self.query = query
        self.finished = False

    def handle(self, data: bytes) -> bytes:
        """Answer one request packet; an end request sets ``finished``."""
        request = parse_request(data)
        if request.command is Command.CONFIGURE:
            try:
                self.configure(request.interface, request.address, request.mask)
            except InterfaceError as exc:
                return _code_reply(exc.code)
            return _code_reply(ResultCode.OK)
        if request.command is Command.SHOW:
            try:
                info = self.query(request.interface)
            except InterfaceError as exc:
                return _code_reply(exc.code)
            return format_show_reply(request.interface, info.address, info.prefix)
        self.finished = True
        return END_REPLY


def serve(host: str, port: int, applier: Applier) -> None:
    """Accept one client and answer its requests until it ends the session."""
    with _step("could not create the socket", EXIT_ERROR_SOCKET):
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    with server:
        with _step("could not configure the socket", EXIT_ERROR_SOCKET_CONFIG):
            server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        with _step("could not bind the socket to the address", EXIT_ERROR_BINDING):
            server.bind((host, port))
        with _step("could not listen for connection requests", EXIT_ERROR_LISTEN):
            server.listen(1)
        print("Applier waiting for a connection request")

        with _step("could not accept a connection request", EXIT_ERROR_ACCEPT):
            connection, _ = server.accept()
        with connection:
            print("Applier ready to receive messages")
            while not applier.finished:
                with _step("could not receive the message", EXIT_ERROR_COMMUNICATION):
                    data = connection.recv(PACKET_SIZE - 1)
                reply = applier.handle(data)
                if applier.finished:
                    try:
                        connection.sendall(reply)
                    except OSError:
                        pass
                    break
                with _step("could not send the message", EXIT_ERROR_COMMUNICATION):
                    connection.sendall(reply)
    print("End of program requested by the interactive client")


def main(argv: list[str] | None = None) -> int:
    """Run the applier service; returns the process exit status."""
    parser = argparse.ArgumentParser(description="Apply interface configuration requests.")
    parser.add_argument("--host", default="", help="address to listen on (default: all)")
    parser.add_argument("--port", type=int, default=PORT, help=f"TCP port (default: {PORT})")
    args = parser.parse_args(argv)

    applier = Applier(configure_interface, get_interface_address)
    try:
        serve(args.host, args.port, applier)
    except _ServerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code
    except ProtocolError as exc:
        print(f"Unknown command, probable communication problem: {exc}", file=sys.stderr)
        return EXIT_ERROR_COMMUNICATION
    return 0


if __name__ == "__main__":
    sys.exit(main())