import pytest

from netifcfg.protocol import (
    Command,
    ProtocolError,
    Request,
    ResultCode,
    encode_configure,
    encode_end,
    encode_show,
    format_show_reply,
    is_valid_ipv4,
    is_valid_subnet_mask,
    parse_reply_code,
    parse_request,
    prefix_length,
)


@pytest.mark.parametrize("address", ["10.0.0.1", "0.0.0.0", "255.255.255.255", "192.168.1.20"])
def test_valid_ipv4(address):
    assert is_valid_ipv4(address) is True


@pytest.mark.parametrize(
    "address",
    ["", "10.0.0", "10.0.0.1.1", "256.0.0.1", "10.0.0.01", "a.b.c.d", "10..0.1", " 10.0.0.1", "1234.0.0.1"],
)
def test_invalid_ipv4(address):
    assert is_valid_ipv4(address) is False


@pytest.mark.parametrize("mask", ["255.255.255.0", "255.255.255.255", "0.0.0.0", "255.128.0.0", "255.255.255.252"])
def test_valid_subnet_masks(mask):
    assert is_valid_subnet_mask(mask) is True


@pytest.mark.parametrize("mask", ["255.0.255.0", "0.255.255.255", "255.255.255.1", "300.0.0.0", "mask"])
def test_invalid_subnet_masks(mask):
    assert is_valid_subnet_mask(mask) is False


def test_prefix_length_of_common_masks():
    assert prefix_length("255.255.255.0") == 24
    assert prefix_length("0.0.0.0") == 0
    assert prefix_length("255.255.255.255") == 32


def test_prefix_length_grows_with_each_octet():
    lengths = [prefix_length(m) for m in ("255.0.0.0", "255.255.0.0", "255.255.255.0")]
    assert lengths == sorted(lengths)
    assert lengths[1] - lengths[0] == lengths[2] - lengths[1]


def test_prefix_length_rejects_bad_mask():
    with pytest.raises(ValueError):
        prefix_length("not-a-mask")


def test_encode_configure_wire_format():
    assert encode_configure("eth0", "10.0.0.1", "255.255.255.0") == b"1]eth0]10.0.0.1]255.255.255.0"


def test_encode_show_wire_format():
    assert encode_show("eth0") == b"2]eth0"


def test_encode_end_is_nul_terminated():
    assert encode_end() == b"3\0"


def test_configure_round_trip():
    request = parse_request(encode_configure("enp0s3", "192.168.1.20", "255.255.0.0"))
    assert request == Request(Command.CONFIGURE, "enp0s3", "192.168.1.20", "255.255.0.0")


def test_show_round_trip():
    assert parse_request(encode_show("wlan0")) == Request(Command.SHOW, "wlan0")


def test_end_round_trip():
    assert parse_request(encode_end()).command is Command.END


def test_parse_request_stops_at_nul():
    request = parse_request(encode_show("lo") + b"\0garbage")
    assert request.interface == "lo"


def test_parse_configure_with_missing_fields():
    request = parse_request(b"1]eth0")
    assert (request.interface, request.address, request.mask) == ("eth0", "", "")


@pytest.mark.parametrize("data", [b"", b"\0", b"9]eth0", b"x"])
def test_parse_request_rejects_unknown(data):
    with pytest.raises(ProtocolError):
        parse_request(data)


def test_format_show_reply():
    reply = format_show_reply("eth0", "10.0.0.1", 24)
    assert reply == b"0[Interface: eth0, Configured IP:10.0.0.1/24"
    assert parse_reply_code(reply) is ResultCode.OK


@pytest.mark.parametrize("code", list(ResultCode))
def test_reply_code_round_trip(code):
    assert parse_reply_code(str(code.value).encode() + b"\0") is code


@pytest.mark.parametrize("data", [b"", b"9", b"OK", b"\0"])
def test_parse_reply_code_rejects_bad_reply(data):
    with pytest.raises(ProtocolError):
        parse_reply_code(data)