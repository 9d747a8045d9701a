"""Interactive client that sends interface requests to the applier service."""

from __future__ import annotations

import argparse
import socket
import sys
from collections.abc import Callable
from typing import Protocol, TextIO

from .protocol import (
    END_REPLY,
    PACKET_SIZE,
    PORT,
    Command,
    ProtocolError,
    ResultCode,
    encode_configure,
    encode_end,
    encode_show,
    is_valid_ipv4,
    is_valid_subnet_mask,
    parse_reply_code,
)

EXIT_ERROR_SOCKET = 1
EXIT_ERROR_CONNECTION = 2
EXIT_ERROR_COMMUNICATION = 3
EXIT_ERROR_INPUT = 4

INTERFACE_LIMIT = 49
ADDRESS_LIMIT = 19

MENU = (
    "Enter one of the numbers to run a command:\n"
    "1 - Configure the IP address of an interface\n"
    "2 - Show the IP address of a given interface\n"
    "3 - End the program"
)

_CONFIGURE_ERRORS = {
    ResultCode.INTERFACE_INACTIVE: "Interface is inactive",
    ResultCode.ADDRESS_FAILED: "Failed to configure the IP address",
    ResultCode.MASK_FAILED: "Failed to configure the subnet mask",
}

_SHOW_ERRORS = {
    ResultCode.INTERFACE_INACTIVE: "Interface is inactive",
    ResultCode.ADDRESS_FAILED: "Failed to get the IP address of the interface",
    ResultCode.MASK_FAILED: "Failed to get the subnet mask of the interface",
}


class _Connection(Protocol):
    def sendall(self, data: bytes) -> None: ...

    def recv(self, size: int) -> bytes: ...

    def close(self) -> None: ...


class Session:
    """A conversation with the applier, driven by answers from *ask*."""

    def __init__(
        self,
        connection: _Connection,
        ask: Callable[[str], str] = input,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.connection = connection
        self.ask = ask
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr

    def _say(self, text: str) -> None:
        print(text, file=self.out)

    def _complain(self, text: str, end: str = "\n") -> None:
        print(text, end=end, file=self.err)

    def _token(self, prompt: str, limit: int) -> str:
        while True:
            words = self.ask(prompt).split()
            if words:
                return words[0][:limit]
            self._complain("Invalid input, try again.")
            prompt = ""

    def _exchange(self, packet: bytes) -> bytes:
        self.connection.sendall(packet)
        self._say("Message sent")
        return self.connection.recv(PACKET_SIZE - 1)

    def configure(self) -> None:
        """Ask for an interface, address and mask and have the applier set them."""
        interface = self._token("Enter the name of the network interface: ", INTERFACE_LIMIT)
        address = self._token("Enter the new IP address: ", ADDRESS_LIMIT)
        while not is_valid_ipv4(address):
            self._complain("Invalid IP, enter a valid IP: ", end="")
            address = self._token("", ADDRESS_LIMIT)
        mask = self._token("Enter the new subnet mask: ", ADDRESS_LIMIT)
        while not is_valid_subnet_mask(mask):
            self._complain("Invalid mask, enter a valid mask: ", end="")
            mask = self._token("", ADDRESS_LIMIT)

        code = parse_reply_code(self._exchange(encode_configure(interface, address, mask)))
        if code is ResultCode.OK:
            self._say("Configuration done successfully")
        else:
            self._complain(_CONFIGURE_ERRORS[code])

    def show(self) -> None:
        """Ask for an interface and print the address the applier reports."""
        interface = self._token("Enter the name of the network interface: ", INTERFACE_LIMIT)
        reply = self._exchange(encode_show(interface))
        try:
            code = parse_reply_code(reply)
        except ProtocolError:
            self._complain(f"Error {reply[:1].decode(errors='replace')} is unknown")
            return
        if code is ResultCode.OK:
            text = reply.split(b"\0", 1)[0][2:]
            self._say(text.decode(errors="replace"))
        else:
            self._complain(_SHOW_ERRORS[code])

    def end(self) -> None:
        """Tell the applier to stop and close the connection once it agrees."""
        reply = self._exchange(encode_end()).split(b"\0", 1)[0]
        if reply != END_REPLY:
            raise ProtocolError(f"reply {reply!r} differs from the expected one")
        self._say("OK reply from the applier, ending program")
        self.connection.close()

    def run(self) -> None:
        """Show the menu and carry out commands until the session is ended."""
        while True:
            self._say(MENU)
            choice = self._read_command()
            if choice == int(Command.CONFIGURE.value):
                self.configure()
            elif choice == int(Command.SHOW.value):
                self.show()
            elif choice == int(Command.END.value):
                self.end()
                return
            else:
                self._say(f"The command: {choice} is invalid, please enter a valid command")

    def _read_command(self) -> int:
        while True:
            words = self.ask("").split()
            if words:
                try:
                    return int(words[0])
                except ValueError:
                    pass
            self._complain("Invalid input, try again.")


def connect(host: str = "127.0.0.1", port: int = PORT) -> socket.socket:
    """Open a TCP connection to the applier."""
    return socket.create_connection((host, port))


def main(argv: list[str] | None = None) -> int:
    """Run the interactive client; returns the process exit status."""
    parser = argparse.ArgumentParser(description="Configure network interfaces through the applier.")
    parser.add_argument("--host", default="127.0.0.1", help="applier address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=PORT, help=f"applier port (default: {PORT})")
    args = parser.parse_args(argv)

    try:
        connection = connect(args.host, args.port)
    except OSError:
        print("Error trying to connect to the server", file=sys.stderr)
        return EXIT_ERROR_CONNECTION

    with connection:
        try:
            Session(connection).run()
        except EOFError:
            print("Input ended, terminating the program", file=sys.stderr)
            return EXIT_ERROR_INPUT
        except (OSError, ProtocolError) as exc:
            print(f"Communication error, terminating the program: {exc}", file=sys.stderr)
            return EXIT_ERROR_COMMUNICATION
    return 0


if __name__ == "__main__":
    sys.exit(main())