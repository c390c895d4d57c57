"""
Key/value pairs as they travel on the wire and as they are stored in a walk
result.
"""
from typing import Any, NamedTuple

from x690.types import Null, ObjectIdentifier, X690Type


class VarBind(NamedTuple):
    """
    A "VarBind" is a 2-tuple containing an object-identifier and the
    corresponding (still typed) value.
    """

    oid: ObjectIdentifier = ObjectIdentifier()
    value: X690Type[Any] = Null()


class OidValue(NamedTuple):
    """
    An object-identifier paired with its value rendered as string. This is
    what a walk collects.
    """

    oid: ObjectIdentifier
    value: str = ""
