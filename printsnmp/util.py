"""
Collection of utility functions for the printsnmp package.
"""
from random import randint

from x690.types import ObjectIdentifier

from printsnmp.exc import InvalidResponseId


def has_prefix(oid: ObjectIdentifier, prefix: ObjectIdentifier) -> bool:
    """
    Whether the leading nodes of *oid* are the nodes of *prefix*. An OID is
    its own prefix.

    >>> has_prefix(ObjectIdentifier("1.3.6.1.2.1.43.5.1"),
    ...            ObjectIdentifier("1.3.6.1.2.1.43"))
    True
    >>> has_prefix(ObjectIdentifier("1.3.6.1.2.1.44"),
    ...            ObjectIdentifier("1.3.6.1.2.1.43"))
    False
    """
    head = prefix.nodes
    return oid.nodes[: len(head)] == head


def comes_before(left: ObjectIdentifier, right: ObjectIdentifier) -> bool:
    """
    Lexicographic ordering of OIDs, node by node. A parent sorts before its
    children.

    >>> comes_before(ObjectIdentifier("1.2"), ObjectIdentifier("1.10"))
    True
    >>> comes_before(ObjectIdentifier("1"), ObjectIdentifier("1.1"))
    True
    >>> comes_before(ObjectIdentifier("1.1"), ObjectIdentifier("1.1"))
    False
    """
    return left.nodes < right.nodes


def validate_response_id(request_id: int, response_id: int) -> None:
    """
    Compare request and response IDs and raise an appropriate error.

    Raises an appropriate error if the IDs differ. Otherwise returns

    This helper method ensures we're always returning the same exception type
    on invalid response IDs.
    """
    if response_id != request_id:
        raise InvalidResponseId(
            f"Invalid response ID {response_id} for request id {request_id}"
        )


def get_request_id() -> int:  # pragma: no cover
    """
    Generates a SNMP request ID.

    This returns a simple integer used to validate if a given response
    matches with the given request. Random IDs keep a late answer to an
    earlier request from being mistaken for the current one.
    """
    return randint(1, 2**31 - 1)
