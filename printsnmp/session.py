"""
Sessions bind one peer address and one community to a transport.

A session is opened at the start of a walk, used for every request of that
walk and closed when the walk ends, whatever the outcome. Sessions are never
shared between walks.

Example::

    >>> with Session.open("192.0.2.1", "public") as session:  # doctest: +SKIP
    ...     content = session.exchange(
    ...         BulkGetRequest(1, 0, 64, ObjectIdentifier("1.3.6.1.2.1.43"))
    ...     )
"""
import logging
from enum import Enum
from typing import Any, Optional

from x690 import decode
from x690.exc import X690Error
from x690.types import Integer, OctetString, Sequence

from .config import WalkConfig
from .const import SNMP_VERSION_2C
from .exc import InvalidResponseMessage, SessionOpenError, SnmpError
from .pdu import BulkGetRequest, GetResponse, PDUContent
from .transport import TTransport, TTransportFactory, UDPTransport, parse_peer
from .util import validate_response_id

LOG = logging.getLogger(__name__)


class SessionState(Enum):
    """
    Lifecycle of a :py:class:`~.Session`. States are only ever traversed in
    declaration order.
    """

    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


class Session:
    """
    A stateful handle on one SNMPv2c peer.

    :param peer: The agent address: ``host``, ``host:port``, ``[ipv6]`` or
        ``[ipv6]:port``.
    :param community: The community string, sent in clear text.
    :param config: Timeouts, retries and the default port.
    :param transport_factory: Creates the transport when the session is
        opened. Defaults to :py:class:`~printsnmp.transport.UDPTransport`.
    """

    def __init__(
        self,
        peer: str,
        community: str,
        config: Optional[WalkConfig] = None,
        transport_factory: Optional[TTransportFactory] = None,
    ) -> None:
        self.peer = peer
        self.community = community
        self.config = config or WalkConfig()
        self.transport_factory = transport_factory or UDPTransport
        self.state = SessionState.UNOPENED
        self._transport: Optional[TTransport] = None

    @classmethod
    def open(
        cls,
        peer: str,
        community: str,
        config: Optional[WalkConfig] = None,
        transport_factory: Optional[TTransportFactory] = None,
    ) -> "Session":
        """
        Create a session and open it.

        :raises SessionOpenError: if the peer cannot be parsed or resolved or
            the transport cannot be created.
        """
        session = cls(peer, community, config, transport_factory)
        session.connect()
        return session

    def connect(self) -> None:
        """
        Open the transport to the peer.
        """
        if self.state is not SessionState.UNOPENED:
            raise SessionOpenError(
                f"session to {self.peer} is {self.state.value}"
            )
        try:
            endpoint = parse_peer(self.peer, self.config.port)
            self._transport = self.transport_factory(
                endpoint, self.config.timeout, self.config.retries
            )
        except (OSError, ValueError) as exc:
            raise SessionOpenError(str(exc) or type(exc).__name__) from exc
        self.state = SessionState.OPEN
        LOG.debug("Opened SNMP session to %s", endpoint)

    def exchange(self, pdu: BulkGetRequest) -> PDUContent:
        """
        Wrap *pdu* into an SNMPv2c message, send it and return the content of
        the response.

        :raises printsnmp.exc.ErrorResponse: if the agent answered with a
            non-zero error-status.
        :raises printsnmp.exc.Timeout: if the agent did not answer.
        :raises printsnmp.exc.SnmpError: if the response does not match the
            request.
        """
        if self.state is not SessionState.OPEN or self._transport is None:
            raise SnmpError(f"Session to {self.peer} is {self.state.value}")

        community = self.community.encode("utf8")
        packet = Sequence(
            [Integer(SNMP_VERSION_2C), OctetString(community), pdu]
        )
        raw_response = self._transport.send(bytes(packet))

        try:
            message, _ = decode(raw_response, enforce_type=Sequence)
            version, response_community, response = message
        except (X690Error, IndexError, TypeError, ValueError) as exc:
            raise InvalidResponseMessage(
                f"Unable to decode response from {self.peer}: {exc}"
            ) from exc

        if version.value != SNMP_VERSION_2C:
            raise InvalidResponseMessage(
                "Incorrect SNMP version on response message"
            )
        if response_community.value != community:
            raise InvalidResponseMessage(
                "Incorrect community in response message!"
            )
        if not isinstance(response, GetResponse):
            raise InvalidResponseMessage(
                f"Unexpected PDU in response: {type(response).__name__}"
            )

        try:
            content = response.value
        except (X690Error, IndexError, TypeError, ValueError) as exc:
            raise InvalidResponseMessage(
                f"Unable to decode response PDU from {self.peer}: {exc}"
            ) from exc
        validate_response_id(pdu.request_id, content.request_id)
        content.raise_for_status()
        return content

    def close(self) -> None:
        """
        Release the transport. Safe to call in any state and any number of
        times. Errors while closing are logged and otherwise ignored.
        """
        transport, self._transport = self._transport, None
        previous, self.state = self.state, SessionState.CLOSED
        if previous is not SessionState.OPEN or transport is None:
            return
        try:
            transport.close()
        except Exception:  # pylint: disable=broad-except
            LOG.debug(
                "Ignoring error while closing session to %s",
                self.peer,
                exc_info=True,
            )
        else:
            LOG.debug("Closed SNMP session to %s", self.peer)

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Session {self.peer!r} ({self.state.value})>"
