"""
Exceptions for the printsnmp package.

The response-status errors in this module are based on :rfc:`3416`. A walk
never lets any of these escape: they are converted into messages on the
:py:class:`~printsnmp.response.BulkwalkResponse`.
"""

import socket
from typing import Optional

from x690.types import ObjectIdentifier


class SnmpError(Exception):
    """
    Generic exception originating from the printsnmp package. Every SNMP
    related error inherits from this class.
    """

    # pylint: disable=too-few-public-methods


class SessionOpenError(SnmpError):
    """
    Raised when a session to a peer cannot be opened. This happens before
    any request is sent, for example when the peer name does not resolve.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Open SNMP session error: {reason}")
        self.reason = reason


class RequestError(SnmpError):
    """
    Raised when a GETBULK exchange fails below the protocol level: the
    packet could not be sent, no response arrived in time or the response
    could not be decoded.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"SNMP request error: {reason}")
        self.reason = reason


class ErrorResponse(SnmpError):
    """
    A superclass used when the SNMP agent responded with a non-zero
    "error-status".
    """

    #: Default message to report for this error (if not overridden)
    DEFAULT_MESSAGE: str = "unknown error"

    #: The "error-status" value
    IDENTIFIER: int = 0

    #: the raw (int) value of the error-status as returned by the SNMP agent.
    error_status: int

    #: the OID identified in the error message which caused the error.
    offending_oid: Optional[ObjectIdentifier]

    @staticmethod
    def construct(
        error_status: int,
        offending_oid: Optional[ObjectIdentifier],
        message: str = "",
    ) -> "ErrorResponse":
        """
        Creates a new instance of an ErrorResponse class, using the proper
        subclass for the given *error_status* value. The message is optional,
        and if not specified, will use the default message for the given class.
        """
        classes = {
            cls.IDENTIFIER: cls for cls in ErrorResponse.__subclasses__()
        }
        if error_status in classes:
            cls = classes[error_status]
            return cls(offending_oid, message)
        return ErrorResponse(offending_oid, message, error_status=error_status)

    def __init__(
        self,
        offending_oid: Optional[ObjectIdentifier],
        message: str = "",
        error_status: int = 0,
    ) -> None:
        error_status = error_status or self.IDENTIFIER
        super().__init__(
            "%s (status-code: %r) on OID %s"
            % (
                message or self.DEFAULT_MESSAGE,
                error_status,
                "unknown" if offending_oid is None else offending_oid,
            )
        )
        self.error_status = error_status
        self.offending_oid = offending_oid


class TooBig(ErrorResponse):
    """
    The response to a request would not fit into a single message on the
    agent side. Walks react to this by asking for fewer repetitions.
    """

    DEFAULT_MESSAGE = "SNMP response was too big!"
    IDENTIFIER = 1


class NoSuchOID(ErrorResponse):
    """
    SNMPv1 style "noSuchName". A v2c agent should not send this for GETBULK
    but some printers do.
    """

    DEFAULT_MESSAGE = "No such name/oid"
    IDENTIFIER = 2


class BadValue(ErrorResponse):
    """
    SNMPv1 style "badValue", sent by some agents instead of "genErr".
    """

    DEFAULT_MESSAGE = "Bad value"
    IDENTIFIER = 3


class GenErr(ErrorResponse):
    """
    The agent failed to process the request for a reason not covered by the
    other error classes.
    """

    DEFAULT_MESSAGE = "General Error (genErr)"
    IDENTIFIER = 5


class NoAccess(ErrorResponse):
    """
    The community has no access to the requested subtree.
    """

    DEFAULT_MESSAGE = "No Access!"
    IDENTIFIER = 6


class ResourceUnavailable(ErrorResponse):
    """
    The agent ran out of resources while building the response.
    """

    DEFAULT_MESSAGE = "Resource unavailable"
    IDENTIFIER = 13


class AuthorizationError(ErrorResponse):
    """
    The community is not authorized for the request.
    """

    DEFAULT_MESSAGE = "Authorization error"
    IDENTIFIER = 16


class EmptyMessage(SnmpError):
    """
    Raised when trying to decode an SNMP-Message with no content.
    """


class Timeout(socket.timeout):
    """
    Raised by the transport when no response arrived after the last resend.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FaultySNMPImplementation(SnmpError):
    """
    Exception which indicates an unexpected response from an SNMP agent, for
    example a walk which does not move forward.
    """


class InvalidResponseId(SnmpError):
    """
    Exception which is raised when a response is received that did not
    correspond to the request-id
    """


class InvalidResponseMessage(SnmpError):
    """
    Raised when the envelope of a response does not match the request (wrong
    protocol version or community).
    """
