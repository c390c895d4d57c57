"""
Global configuration for pytest
"""
from itertools import zip_longest
from typing import Any, Dict, Iterator, List, Optional
from unittest.mock import call, patch

import pytest
from x690.types import Integer, ObjectIdentifier, OctetString, Sequence
from x690.util import visible_octets

from printsnmp.pdu import GetResponse, PDUContent
from printsnmp.transport import Endpoint
from printsnmp.varbind import VarBind

#: The request-id used by every request sent during a test
REQUEST_ID = 123


def make_response(
    *varbinds: VarBind,
    error_status: int = 0,
    error_index: int = 0,
    request_id: int = REQUEST_ID,
    community: bytes = b"public",
    version: int = 1,
) -> bytes:
    """
    Build the raw bytes of a GetResponse message as an agent would send it.
    """
    message = Sequence(
        [
            Integer(version),
            OctetString(community),
            GetResponse(
                PDUContent(
                    request_id,
                    list(varbinds),
                    error_status=error_status,
                    error_index=error_index,
                )
            ),
        ]
    )
    return bytes(message)


def make_batch(root: str, *suffixes: str) -> List[VarBind]:
    """
    Varbinds with OIDs below *root*, each carrying its suffix as value.
    """
    return [
        VarBind(
            ObjectIdentifier(f"{root}.{suffix}"),
            OctetString(suffix.encode("ascii")),
        )
        for suffix in suffixes
    ]


class FakeTransport:
    """
    Replays programmed responses instead of talking to the network.
    """

    def __init__(self, factory: "FakeTransportFactory", endpoint: Endpoint):
        self.factory = factory
        self.endpoint = endpoint
        self.closed = False

    def send(self, packet: bytes) -> bytes:
        self.factory.mock_calls.append(call(self.endpoint, packet))
        self.factory.sent.append(packet)
        value = next(self.factory.values_for(self.endpoint.host))
        if isinstance(value, BaseException):
            raise value
        return value

    def close(self) -> None:
        if self.factory.close_error is not None:
            raise self.factory.close_error
        self.closed = True


class FakeTransportFactory:
    """
    Stands in for :py:class:`printsnmp.transport.UDPTransport`.

    Responses are either raw bytes or exceptions which are raised instead of
    returning a response.
    """

    def __init__(self) -> None:
        self.mock_calls: List[Any] = []
        self.sent: List[bytes] = []
        self.transports: List[FakeTransport] = []
        self.open_error: Optional[BaseException] = None
        self.close_error: Optional[BaseException] = None
        self._values: Dict[Optional[str], Iterator[Any]] = {None: iter([])}

    def set_values(self, values: List[Any], host: Optional[str] = None):
        self._values[host] = iter(values)

    def values_for(self, host: str) -> Iterator[Any]:
        if host in self._values:
            return self._values[host]
        return self._values[None]

    def __call__(
        self, endpoint: Endpoint, timeout: int, retries: int
    ) -> FakeTransport:
        if self.open_error is not None:
            raise self.open_error
        transport = FakeTransport(self, endpoint)
        self.transports.append(transport)
        return transport


@pytest.fixture
def transport():
    """
    A fake transport factory. Requests sent while it is active always use
    :py:data:`REQUEST_ID` as request-id.
    """
    factory = FakeTransportFactory()
    with patch("printsnmp.bulk.get_request_id") as gri:
        gri.return_value = REQUEST_ID
        yield factory


def get_byte_diff(a: bytes, b: bytes) -> List[str]:
    comparisons = []
    a = bytearray(a)
    b = bytearray(b)

    def char_repr(c: int) -> str:
        if 0x1F < c < 0x80:
            # bytearray to prevent accidental pre-mature str conv
            # str to prevent b'' suffix in repr's output
            return repr(str(bytearray([c]).decode("ascii")))
        return "."

    hexdump_a = visible_octets(a).splitlines()
    hexdump_b = visible_octets(b).splitlines()
    hexdiff = zip_longest(hexdump_a, hexdump_b)
    comparisons.append(" Hex Dumps ".center(141, "-"))
    comparisons.extend(
        [
            "%s   %s   %s" % (left, " " if left == right else "≠", right)
            for left, right in hexdiff
        ]
    )
    comparisons.append(141 * "-")

    for offset, (char_a, char_b) in enumerate(zip_longest(a, b)):
        comp, marker = ("==", "") if char_a == char_b else ("!=", ">>")

        # Overflows are marked as "None" by "zip_longest"
        if char_a is None:
            char_ah = char_ar = "?"
        else:
            char_ah = f"0x{char_a:02x}"
            char_ar = char_repr(char_a)

        if char_b is None:
            char_bh = char_br = "?"
        else:
            char_bh = f"0x{char_b:02x}"
            char_br = char_repr(char_b)
        comparisons.append(
            f"{marker:<3} Offset {offset:4d}: "
            f"{char_ah:^4} {comp} {char_bh:^4} | "
            f"{char_ar:>3} {comp} {char_br:>3}"
        )
    return comparisons


def pytest_assertrepr_compare(op, left, right):
    if isinstance(left, bytes) and isinstance(right, bytes) and op == "==":
        output = ["Bytes differ"]
        output.extend(get_byte_diff(left, right))
        return output
