"""
Models for the SNMP PDUs exchanged during a walk.

Only two PDUs are ever put on the wire: the :py:class:`~.BulkGetRequest`
sent to the agent and the :py:class:`~.GetResponse` coming back. Both share
the common PDU layout:

request-id
    A unique ID used to match requests with responses.

error-status
    An integer defining an error-state. A non-zero value is mapped to a
    subclass of :py:exc:`printsnmp.exc.ErrorResponse` by
    :py:meth:`PDUContent.raise_for_status`. For GETBULK requests this field
    carries "non-repeaters".

error-index
    If applicable, this identifies the Request OID that caused the error
    (1-indexed). For GETBULK requests this field carries "max-repetitions".

varbinds
    A key/value pair representing the payload of the PDU. For requests, the
    value is :py:class:`x690.types.Null`
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from x690 import decode
from x690.types import (
    _SENTINEL_UNINITIALISED,
    UNINITIALISED,
    Integer,
    Null,
    ObjectIdentifier,
    Sequence,
    TWrappedPyType,
)
from x690.types import X690Type as Type
from x690.util import TypeClass, TypeInfo, TypeNature, encode_length

from .exc import EmptyMessage, ErrorResponse, FaultySNMPImplementation
from .varbind import VarBind


@dataclass(frozen=True)
class PDUContent:
    """
    A helper class to wrap PDU data into a single "value" variable for x.690
    types.
    """

    request_id: int
    varbinds: List[VarBind]
    error_status: int = 0
    error_index: int = 0

    def raise_for_status(self) -> None:
        """
        Raise the :py:exc:`~printsnmp.exc.ErrorResponse` subclass matching a
        non-zero error-status. Does nothing for "noError".
        """
        if not self.error_status:
            return
        offending_oid: Optional[ObjectIdentifier] = None
        if 0 < self.error_index <= len(self.varbinds):
            offending_oid = self.varbinds[self.error_index - 1].oid
        raise ErrorResponse.construct(self.error_status, offending_oid)


class PDU(Type[PDUContent]):
    """
    The superclass for SNMP Messages
    """

    #: The typeclass identifier for type-detection in :py:mod:`x690`
    TYPECLASS = TypeClass.CONTEXT

    #: The tag for type-detection in :py:mod:`x690`
    TAG = 0

    @classmethod
    def decode_raw(cls, data: bytes, slc: slice = slice(None)) -> PDUContent:
        """
        Converts the raw bytes of a PDU body into a :py:class:`~.PDUContent`.

        The error-status is only decoded here. Use
        :py:meth:`~.PDUContent.raise_for_status` once the response is known
        to answer the request.

        :raises printsnmp.exc.FaultySNMPImplementation: if a varbind is not
            an (OID, value) pair.
        """
        if not data:
            raise EmptyMessage("No data to decode!")
        request_id, nxt = decode(data, slc.start or 0, enforce_type=Integer)
        error_status, nxt = decode(data, nxt, enforce_type=Integer)
        error_index, nxt = decode(data, nxt, enforce_type=Integer)
        values, nxt = decode(data, nxt, enforce_type=Sequence)

        varbinds = []
        for item in values:  # type: ignore
            try:
                oid, value = item
            except (TypeError, ValueError) as exc:
                raise FaultySNMPImplementation(
                    f"Malformed varbind in response: {item!r}"
                ) from exc
            if not isinstance(oid, ObjectIdentifier):
                raise FaultySNMPImplementation(
                    f"Varbind name is not an OBJECT IDENTIFIER: {oid!r}"
                )
            varbinds.append(VarBind(oid, value))

        return PDUContent(
            request_id.value, varbinds, error_status.value, error_index.value
        )

    def encode_raw(self) -> bytes:
        """
        Encodes this instance into raw x.690 bytes (excluding type & length)
        """
        wrapped_varbinds = [
            Sequence([vb.oid, vb.value]) for vb in self.value.varbinds
        ]
        data: List[Type[Any]] = [
            Integer(self.value.request_id),
            Integer(self.value.error_status),
            Integer(self.value.error_index),
            Sequence(wrapped_varbinds),  # type: ignore
        ]
        return b"".join([bytes(chunk) for chunk in data])

    def __repr__(self) -> str:
        return "%s(%r, %r)" % (
            self.__class__.__name__,
            self.value.request_id,
            self.value.varbinds,
        )

    def __eq__(self, other: Any) -> bool:
        # pylint: disable=unidiomatic-typecheck
        return type(other) == type(self) and self.value == other.value


class _SentinelMixin:
    """
    Shared constructor for the "exception" values an SNMPv2 agent puts in
    place of a varbind value.
    """

    # pylint: disable=too-few-public-methods

    def __init__(
        self,
        value: Union[TWrappedPyType, _SENTINEL_UNINITIALISED] = UNINITIALISED,
    ) -> None:
        if value is UNINITIALISED:
            super().__init__(value=None)
        else:
            super().__init__(value=value)


class NoSuchObject(_SentinelMixin, Type[None]):
    TYPECLASS = TypeClass.CONTEXT
    NATURE = [TypeNature.PRIMITIVE]
    TAG = 0


class NoSuchInstance(_SentinelMixin, Type[None]):
    TYPECLASS = TypeClass.CONTEXT
    NATURE = [TypeNature.PRIMITIVE]
    TAG = 1


class EndOfMibView(_SentinelMixin, Type[None]):
    """
    Marks the end of the agent's MIB. A walk stops when it sees this value.
    """

    TYPECLASS = TypeClass.CONTEXT
    NATURE = [TypeNature.PRIMITIVE]
    TAG = 2


class GetResponse(PDU):
    """
    The response to any SNMP request, including GETBULK.
    """

    TAG = 2


class BulkGetRequest(PDU):
    """
    Represents a SNMP GetBulk request
    """

    # pylint: disable=abstract-method

    TYPECLASS = TypeClass.CONTEXT
    TAG = 5

    def __init__(
        self,
        request_id: int,
        non_repeaters: int,
        max_repeaters: int,
        *oids: ObjectIdentifier,
    ) -> None:
        # pylint: disable=super-init-not-called
        self.request_id = request_id
        self.non_repeaters = non_repeaters
        self.max_repeaters = max_repeaters
        self.varbinds = [VarBind(oid, Null()) for oid in oids]

    def __bytes__(self) -> bytes:
        wrapped_varbinds = [
            Sequence([vb.oid, vb.value]) for vb in self.varbinds
        ]
        data: List[Type[Any]] = [
            Integer(self.request_id),
            Integer(self.non_repeaters),
            Integer(self.max_repeaters),
            Sequence(wrapped_varbinds),  # type: ignore
        ]
        payload = b"".join([bytes(chunk) for chunk in data])

        tinfo = TypeInfo(TypeClass.CONTEXT, TypeNature.CONSTRUCTED, self.TAG)
        length = encode_length(len(payload))
        return bytes(tinfo) + length + payload

    def __repr__(self) -> str:
        oids = [repr(oid) for oid, _ in self.varbinds]
        return "%s(%r, %r, %r, %s)" % (
            self.__class__.__name__,
            self.request_id,
            self.non_repeaters,
            self.max_repeaters,
            ", ".join(oids),
        )

    def __eq__(self, other: Any) -> bool:
        # pylint: disable=unidiomatic-typecheck
        return (
            type(other) == type(self)
            and self.request_id == other.request_id
            and self.non_repeaters == other.non_repeaters
            and self.max_repeaters == other.max_repeaters
            and self.varbinds == other.varbinds
        )
