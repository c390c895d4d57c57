"""
This module contains the high-level functions to access the library. Care is
taken to make this as pythonic as possible and hide as many of the gory
implementations as possible.

Walking the Printer-MIB of one printer::

    >>> from printsnmp import bulkwalk
    >>> with bulkwalk("192.0.2.1", "public") as response:  # doctest: +SKIP
    ...     for oid, value in response:
    ...         print(oid, value)
"""

from x690.types import ObjectIdentifier

# !!! DO NOT REMOVE !!! The following import triggers the processing of SNMP
# Types and thus populates the Registry. If this is not included, Non x.690
# SNMP types will not be properly detected!
import printsnmp.types
from printsnmp.config import WalkConfig, initialize
from printsnmp.const import PRINTER_OID
from printsnmp.manager import Manager
from printsnmp.response import BulkwalkResponse, Termination
from printsnmp.session import Session
from printsnmp.varbind import OidValue
from printsnmp.variables import VariableSet
from printsnmp.version import VERSION
from printsnmp.walk import bulkwalk

__version__ = VERSION

__all__ = [
    "BulkwalkResponse",
    "Manager",
    "ObjectIdentifier",
    "OidValue",
    "PRINTER_OID",
    "Session",
    "Termination",
    "VariableSet",
    "WalkConfig",
    "__version__",
    "bulkwalk",
    "initialize",
]
