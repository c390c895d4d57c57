import logging
import socket
from unittest.mock import patch

import pytest

import printsnmp.transport as tpt
from printsnmp.exc import Timeout
from printsnmp.transport import Endpoint, parse_peer


@pytest.fixture
def mocked_socket():
    addrinfo = [
        (socket.AF_INET, socket.SOCK_DGRAM, 17, "", ("192.0.2.1", 161))
    ]
    with patch("printsnmp.transport.socket.getaddrinfo") as gai, patch(
        "printsnmp.transport.socket.socket"
    ) as sck:
        gai.return_value = addrinfo
        yield sck()


@pytest.mark.parametrize(
    "peer, expected",
    [
        ("192.0.2.1", Endpoint("192.0.2.1", 161)),
        (" 192.0.2.1 ", Endpoint("192.0.2.1", 161)),
        ("192.0.2.1:1161", Endpoint("192.0.2.1", 1161)),
        ("printer.example.com", Endpoint("printer.example.com", 161)),
        ("printer.example.com:162", Endpoint("printer.example.com", 162)),
        ("[2001:db8::1]", Endpoint("2001:db8::1", 161)),
        ("[2001:db8::1]:1161", Endpoint("2001:db8::1", 1161)),
        ("2001:db8::1", Endpoint("2001:db8::1", 161)),
        ("::1", Endpoint("::1", 161)),
    ],
)
def test_parse_peer(peer, expected):
    assert parse_peer(peer) == expected


def test_parse_peer_default_port():
    assert parse_peer("192.0.2.1", 1161) == Endpoint("192.0.2.1", 1161)


@pytest.mark.parametrize(
    "peer",
    [
        "",
        "   ",
        "192.0.2.1:snmp",
        "192.0.2.1:0",
        "192.0.2.1:70000",
        "[2001:db8::1",
        "[2001:db8::1]1161",
    ],
)
def test_parse_peer_invalid(peer):
    with pytest.raises(ValueError):
        parse_peer(peer)


def test_endpoint_str():
    assert str(Endpoint("192.0.2.1", 161)) == "192.0.2.1:161"
    assert str(Endpoint("2001:db8::1", 161)) == "[2001:db8::1]:161"


def test_send(mocked_socket):
    """
    A packet should be sent once and the response returned.
    """
    mocked_socket.recv.return_value = b"response"
    transport = tpt.UDPTransport(Endpoint("192.0.2.1", 161), timeout=2)
    result = transport.send(b"request")
    assert result == b"response"
    mocked_socket.settimeout.assert_called_with(2)
    mocked_socket.connect.assert_called_with(("192.0.2.1", 161))
    mocked_socket.send.assert_called_once_with(b"request")


def test_send_resends_on_timeout(mocked_socket):
    """
    An unanswered packet should be sent again.
    """
    mocked_socket.recv.side_effect = [socket.timeout(), b"response"]
    transport = tpt.UDPTransport(Endpoint("192.0.2.1", 161), retries=3)
    result = transport.send(b"request")
    assert result == b"response"
    assert mocked_socket.send.call_count == 2


def test_send_timeout(mocked_socket):
    """
    After the last retry, a Timeout should be raised.
    """
    mocked_socket.recv.side_effect = socket.timeout()
    transport = tpt.UDPTransport(
        Endpoint("192.0.2.1", 161), timeout=2, retries=3
    )
    with pytest.raises(Timeout) as exc:
        transport.send(b"request")
    assert exc.value.message == "2 second timeout exceeded on UDP transport."
    assert mocked_socket.send.call_count == 3


def test_send_logs_hexdump(mocked_socket, caplog):
    mocked_socket.recv.return_value = b"response"
    transport = tpt.UDPTransport(Endpoint("192.0.2.1", 161))
    with caplog.at_level(logging.DEBUG, logger="printsnmp.transport"):
        transport.send(b"request")
    assert "Sending packet to 192.0.2.1:161" in caplog.text
    assert "Received packet from 192.0.2.1:161" in caplog.text
    assert "72 65 71" in caplog.text, "hexdump of request not found"


def test_close_idempotent(mocked_socket):
    transport = tpt.UDPTransport(Endpoint("192.0.2.1", 161))
    transport.close()
    transport.close()
    mocked_socket.close.assert_called_once_with()


def test_send_after_close(mocked_socket):
    transport = tpt.UDPTransport(Endpoint("192.0.2.1", 161))
    transport.close()
    with pytest.raises(OSError):
        transport.send(b"request")


def test_connect_error_closes_socket(mocked_socket):
    mocked_socket.connect.side_effect = OSError("Network is unreachable")
    with pytest.raises(OSError):
        tpt.UDPTransport(Endpoint("192.0.2.1", 161))
    mocked_socket.close.assert_called_once_with()


def test_unresolvable_host():
    with patch("printsnmp.transport.socket.getaddrinfo") as gai:
        gai.side_effect = socket.gaierror("Name or service not known")
        with pytest.raises(OSError):
            tpt.UDPTransport(Endpoint("no-such-printer.invalid", 161))
