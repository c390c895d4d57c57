"""
Low-Level network transport.

This module mainly exist to enable a "seam" for mocking/patching out during
testing. Sessions talk to the network only through a
:py:class:`~.TTransport` created by a :py:class:`~.TTransportFactory`; the
default factory is :py:class:`~.UDPTransport`.
"""

import logging
import socket
from typing import NamedTuple, Optional

from typing_extensions import Protocol
from x690.util import visible_octets

from .const import DEFAULT_PORT, DEFAULT_RETRIES, DEFAULT_TIMEOUT
from .const import MESSAGE_MAX_SIZE
from .exc import Timeout

LOG = logging.getLogger(__name__)


class Endpoint(NamedTuple):
    """
    A tuple representing an UDP endpoint where a connection should be made to.
    """

    host: str
    port: int

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class TTransport(Protocol):
    """
    A typing-protocol for objects exchanging one datagram per call with a
    single peer.
    """

    def send(self, packet: bytes) -> bytes:  # pragma: no cover
        """
        Send *packet* and block until the response arrives.
        """
        ...

    def close(self) -> None:  # pragma: no cover
        """
        Release the underlying socket.
        """
        ...


class TTransportFactory(Protocol):
    """
    A typing-protocol for callables which open a transport to an endpoint.
    """

    # pylint: disable=too-few-public-methods

    def __call__(
        self, endpoint: Endpoint, timeout: int, retries: int
    ) -> TTransport:  # pragma: no cover
        ...


def parse_peer(peer: str, default_port: int = DEFAULT_PORT) -> Endpoint:
    """
    Split a peer address into host and port.

    >>> parse_peer("192.0.2.1")
    Endpoint(host='192.0.2.1', port=161)
    >>> parse_peer("printer.example.com:1161")
    Endpoint(host='printer.example.com', port=1161)
    >>> parse_peer("[2001:db8::1]:1161")
    Endpoint(host='2001:db8::1', port=1161)
    >>> parse_peer("2001:db8::1")
    Endpoint(host='2001:db8::1', port=161)
    """
    peer = peer.strip()
    if not peer:
        raise ValueError("Empty peer address")
    port = ""
    if peer.startswith("["):
        host, sep, tail = peer[1:].partition("]")
        if not sep:
            raise ValueError(f"Unterminated IPv6 address in {peer!r}")
        if tail:
            if not tail.startswith(":"):
                raise ValueError(f"Unexpected data after address in {peer!r}")
            port = tail[1:]
    elif peer.count(":") == 1:
        host, _, port = peer.partition(":")
    else:
        host = peer
    if not port:
        return Endpoint(host, default_port)
    if not port.isdigit() or not 0 < int(port) < 65536:
        raise ValueError(f"Invalid port {port!r} in {peer!r}")
    return Endpoint(host, int(port))


class UDPTransport:
    """
    A connected UDP socket to one peer.

    Instantiating resolves the endpoint and creates the socket, so errors
    surface when a session is opened and not on the first request.
    """

    def __init__(
        self,
        endpoint: Endpoint,
        timeout: int = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.retries = retries
        family, _, _, _, sockaddr = socket.getaddrinfo(
            endpoint.host, endpoint.port, type=socket.SOCK_DGRAM
        )[0]
        self.sock: Optional[socket.socket] = socket.socket(
            family, socket.SOCK_DGRAM
        )
        try:
            self.sock.settimeout(timeout)
            self.sock.connect(sockaddr)
        except OSError:
            self.sock.close()
            raise

    def send(self, packet: bytes) -> bytes:
        """
        Sends *packet* to the peer and returns the raw bytes of the first
        datagram coming back.

        An unanswered packet is sent again until *retries* attempts have been
        made. After that a :py:exc:`~printsnmp.exc.Timeout` is raised.
        """
        if self.sock is None:
            raise OSError(f"Transport to {self.endpoint} is closed")

        if LOG.isEnabledFor(logging.DEBUG):
            hexdump = visible_octets(packet)
            LOG.debug("Sending packet to %s\n%s", self.endpoint, hexdump)

        retries = self.retries
        while True:
            self.sock.send(packet)
            try:
                response = self.sock.recv(MESSAGE_MAX_SIZE)
                break
            except socket.timeout as exc:
                retries -= 1
                if retries <= 0:
                    raise Timeout(
                        f"{self.timeout} second timeout exceeded on UDP "
                        "transport."
                    ) from exc
                LOG.debug("Resending UDP packet. %d retries left", retries)

        if LOG.isEnabledFor(logging.DEBUG):
            hexdump = visible_octets(response)
            LOG.debug("Received packet from %s:\n%s", self.endpoint, hexdump)
        return response

    def close(self) -> None:
        """
        Closes the socket. Calling this more than once has no effect.
        """
        if self.sock is None:
            return
        self.sock.close()
        self.sock = None
        LOG.debug("Socket to %s closed", self.endpoint)
