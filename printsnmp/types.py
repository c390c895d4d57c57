"""
SMI Types which are not defined in the x690 protocol (see also
:py:mod:`x690`) and the conversion of received values into the plain strings
stored in a walk result.

Importing this module registers the application-class types with the x690
type registry. Without it, values such as counters or time-ticks would be
decoded as unknown types. :py:func:`printsnmp.config.initialize` takes care
of the import.

See `RFC 2578`_ for the definition of the types.

.. _RFC 2578: https://tools.ietf.org/html/rfc2578
"""
# pylint: disable=too-few-public-methods

from ipaddress import IPv4Address, ip_address
from string import printable
from typing import Any, Union

from x690.types import (
    _SENTINEL_UNINITIALISED,
    UNINITIALISED,
    Integer,
    Null,
    ObjectIdentifier,
    OctetString,
)
from x690.types import X690Type as Type
from x690.util import TypeClass

from printsnmp.pdu import EndOfMibView, NoSuchInstance, NoSuchObject

_PRINTABLE = frozenset(printable.encode("ascii"))


class IpAddress(Type[IPv4Address]):
    """
    SNMP Type for IPv4 Addresses
    """

    NATURE = OctetString.NATURE
    TYPECLASS = TypeClass.APPLICATION
    TAG = 0x00

    def encode_raw(self) -> bytes:
        numeric = int(self.value)
        return numeric.to_bytes(4, "big")

    @staticmethod
    def decode_raw(data: bytes, slc: slice = slice(None)) -> IPv4Address:
        """
        Converts raw-bytes to an ip-address instance

        >>> IpAddress.decode_raw(b"\\xc0\\x00\\x02\\x01")
        IPv4Address('192.0.2.1')
        """
        value = ip_address(int.from_bytes(data[slc], "big"))
        return value  # type: ignore

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IpAddress) and self.value == other.value


class Counter(Integer):
    """
    32 bit wrapping counter (``Counter32``).
    """

    SIGNED = False
    TYPECLASS = TypeClass.APPLICATION
    TAG = 0x01

    def __init__(
        self, value: Union[int, _SENTINEL_UNINITIALISED] = UNINITIALISED
    ) -> None:
        if not isinstance(value, _SENTINEL_UNINITIALISED):
            value = max(value, 0) & 0xFFFFFFFF
        super().__init__(value)


class Gauge(Integer):
    """
    Non-negative 32 bit value which may go up and down (``Gauge32``), for
    example a marker supply level.
    """

    SIGNED = False
    TYPECLASS = TypeClass.APPLICATION
    TAG = 0x02


class TimeTicks(Integer):
    """
    Hundredths of a second since some epoch, typically the agent's boot.
    """

    SIGNED = False
    TYPECLASS = TypeClass.APPLICATION
    TAG = 0x03


class Opaque(OctetString):
    """
    Arbitrary binary data passed through transparently by the protocol.
    """

    TYPECLASS = TypeClass.APPLICATION
    TAG = 0x04


class NsapAddress(Integer):
    TYPECLASS = TypeClass.APPLICATION
    TAG = 0x05


class Counter64(Integer):
    """
    64 bit wrapping counter, only available in SNMPv2.
    """

    SIGNED = False
    TYPECLASS = TypeClass.APPLICATION
    TAG = 0x06

    def __init__(
        self, value: Union[int, _SENTINEL_UNINITIALISED] = UNINITIALISED
    ) -> None:
        if not isinstance(value, _SENTINEL_UNINITIALISED):
            value = max(value, 0) & 0xFFFFFFFFFFFFFFFF
        super().__init__(value)


def render_ticks(ticks: int) -> str:
    """
    Format time-ticks as ``days:hours:minutes:seconds.hundredths``.

    >>> render_ticks(794602)
    '0:2:12:26.02'
    """
    centis = ticks % 100
    seconds = ticks // 100
    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    return "%d:%d:%02d:%02d.%02d" % (days, hours, minutes, seconds, centis)


def render_octets(data: bytes) -> str:
    """
    Printable octet-strings are rendered as text, everything else as a hex
    dump. A single trailing NUL byte is tolerated in text values as many
    printers terminate strings that way.

    >>> render_octets(b"HP LaserJet\\x00")
    'HP LaserJet'
    >>> render_octets(b"\\x00\\x1b\\xa9")
    '00 1B A9'
    """
    text = data[:-1] if data.endswith(b"\x00") else data
    if all(char in _PRINTABLE for char in text):
        return text.decode("ascii")
    return " ".join("%02X" % char for char in data)


def render_value(value: Type[Any]) -> str:
    """
    Convert a decoded varbind value into the string stored in a walk result.

    >>> render_value(Integer(3))
    '3'
    >>> render_value(ObjectIdentifier("1.3.6.1.2.1.43"))
    '1.3.6.1.2.1.43'
    """
    if isinstance(value, (Null, NoSuchObject, NoSuchInstance, EndOfMibView)):
        return ""
    if isinstance(value, TimeTicks):
        return render_ticks(value.value)
    if isinstance(value, OctetString):
        return render_octets(value.value)
    if isinstance(value, ObjectIdentifier):
        return ".".join(str(node) for node in value.nodes)
    if isinstance(value, Integer):
        return str(value.value)
    return str(value.pythonize())
