# netifcfg

netifcfg sets and reads the IPv4 address and subnet mask of a Linux network
interface. It has two commands that talk over TCP, by default on port 8000:

- `netifcfg-applier` is the server. It accepts one client, applies its
  requests to the interfaces and exits when the client ends the session.
- `netifcfg-interactive` is a menu-driven client. It connects to the applier
  (by default on `127.0.0.1`) and asks you what to do.

## Installation

```
pip install .
```

## Usage

Start the applier first. Changing interface addresses needs root privileges:

```
sudo netifcfg-applier
```

Options: `--host` (address to listen on, default all addresses) and `--port`
(default 8000).

Then, in another terminal, start the client:

```
netifcfg-interactive
```

Options: `--host` (default `127.0.0.1`) and `--port` (default 8000).

The client shows this menu and reads a number:

```
1 - Configure the IP address of an interface
2 - Show the IP address of a given interface
3 - End the program
```

- **Configure** asks for an interface name, an IPv4 address and a subnet mask.
  It keeps asking until the address is a strict dotted-quad IPv4 address and
  the mask is a contiguous netmask such as `255.255.255.0`. The interface
  name is cut to 49 characters, the address and mask to 19.
- **Show** asks for an interface name and prints its address in CIDR form,
  for example `Interface: eth0, Configured IP:192.168.0.10/24`.
- **End** tells the applier to stop; once it answers `OK`, both programs exit.

If an interface does not exist or is down, or an address or mask cannot be
read or set, the client prints the reason and returns to the menu.

### Exit status

`netifcfg-applier`: 0 on a normal end, 1 socket could not be created,
2 bind failed, 3 communication error (including an unknown or empty request,
for example when the client disconnects without ending the session),
4 socket option could not be set, 5 listen failed, 6 accept failed.

`netifcfg-interactive`: 0 on a normal end, 2 could not connect,
3 communication error (including an unknown result code after a configure
request or a reply other than `OK` to the end request), 4 input ended.

## Wire protocol

Each request is one packet whose first character is the command:

| Request                      | Meaning                           |
|------------------------------|-----------------------------------|
| `1]<iface>]<address>]<mask>` | configure an interface            |
| `2]<iface>`                  | show an interface's address       |
| `3` followed by a NUL byte   | end the session                   |

A configure reply, and a failed show reply, is one digit followed by a NUL
byte. A successful show reply is `0[` followed by the description. The digits
mean: `0` success, `1` interface inactive, `2` address step failed, `3` mask
step failed. A request to end the session gets the reply `OK`.

## Library use

- `netifcfg.protocol` has the `Command` and `ResultCode` enums, the `Request`
  dataclass, `ProtocolError`, and the functions `encode_configure`,
  `encode_show`, `encode_end`, `parse_request`, `format_show_reply`,
  `parse_reply_code`, `is_valid_ipv4`, `is_valid_subnet_mask` and
  `prefix_length`.
- `netifcfg.interfaces` has `configure_interface(name, address, mask)` and
  `get_interface_address(name)`, which returns an `InterfaceAddress` with
  `name`, `address`, `netmask` and `prefix`. Failures raise `InterfaceError`,
  whose `code` is the `ResultCode` of the step that failed.
- `netifcfg.applier.Applier(configure, query)` turns one request packet into a
  reply with `handle(data)`; `serve(host, port, applier)` runs it over TCP.
- `netifcfg.interactive.Session(connection, ask, out, err)` runs the client
  dialogue with `run()`, `configure()`, `show()` and `end()`;
  `connect(host, port)` opens the TCP connection.

## Limitations

- Only IPv4 is handled, and interface access uses Linux ioctl calls, so the
  applier works on Linux only.
- The applier serves a single client connection and then exits; it is not a
  long-running multi-client daemon.
- Changes are applied to the running system only; nothing is saved to
  configuration files.