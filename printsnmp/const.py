"""
This file contains various values used to avoid magic numbers and strings in
the application.
"""
from x690.types import ObjectIdentifier

#: Root of the Printer-MIB (:rfc:`3805`). Walks default to this subtree.
PRINTER_OID = ObjectIdentifier("1.3.6.1.2.1.43")

#: The "non-repeaters" field of every GETBULK request sent by a walk
NON_REPEATERS = 0

#: Initial "max-repetitions" of a walk. 128 causes some printers to simply
#: not respond.
MAX_REPETITIONS = 64

#: SNMP message version field for community based SNMPv2
SNMP_VERSION_2C = 1

#: UDP timeout (in seconds) which is used if not manually overridden
DEFAULT_TIMEOUT = 6

#: Number of times a request packet is sent out before giving up
DEFAULT_RETRIES = 3

#: Standard SNMP agent port
DEFAULT_PORT = 161

#: Community used by the manager if not overridden
DEFAULT_COMMUNITY = "public"

#: Maximum number of walks a manager runs at the same time
DEFAULT_MAX_CONNECTIONS = 100

#: Largest payload of a single UDP datagram
MESSAGE_MAX_SIZE = 65507
