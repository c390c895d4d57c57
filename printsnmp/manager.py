"""
Walk the Printer-MIB of many printers at once.

A :py:class:`~.Manager` runs one :py:func:`~printsnmp.walk.bulkwalk` per
host on a bounded thread pool. Querying printers is best effort: hosts which
fail to answer simply end up with fewer (or no) variables, the errors are
only logged.

Example::

    >>> manager = Manager()  # doctest: +SKIP
    >>> results = manager.walk_hosts(["192.0.2.1"])  # doctest: +SKIP
    >>> serial = "1.3.6.1.2.1.43.5.1.1.17.1"
    >>> results["192.0.2.1"].get_value(OID(serial))  # doctest: +SKIP
    'CNB1234567'
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from threading import Lock
from typing import Dict, Iterable, List, Optional

from .config import WalkConfig, initialize
from .const import DEFAULT_COMMUNITY, DEFAULT_MAX_CONNECTIONS, PRINTER_OID
from .exc import SnmpError
from .transport import TTransportFactory
from .variables import VariableSet
from .walk import bulkwalk

LOG = logging.getLogger(__name__)


class Manager:
    """
    Runs Printer-MIB walks against a list of hosts.

    Only one :py:meth:`~.walk_hosts` call may run at a time on a manager.

    :param community: The SNMPv2c community used for every host.
    :param max_connections: How many walks may run at the same time.
    :param config: Timeouts, retries, port and initial max-repetitions.
    :param transport_factory: Replaces the UDP transport (used in tests).
    """

    def __init__(
        self,
        community: str = DEFAULT_COMMUNITY,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
        config: Optional[WalkConfig] = None,
        transport_factory: Optional[TTransportFactory] = None,
    ) -> None:
        if max_connections < 1:
            raise ValueError(
                f"max_connections must be positive, got {max_connections}"
            )
        initialize()
        self.community = community
        self.max_connections = max_connections
        self.config = config or WalkConfig()
        self.transport_factory = transport_factory
        self._in_use = Lock()
        self._closed = False

    def walk_host(self, hostname: str) -> VariableSet:
        """
        Walk the Printer-MIB of a single host.

        Errors are logged and the values collected up to the error are
        returned. A host which fails in an unexpected way yields an empty
        set so the other hosts of a query are not affected.
        """
        try:
            response = bulkwalk(
                hostname,
                self.community,
                PRINTER_OID,
                self.config,
                self.transport_factory,
            )
        except Exception:  # pylint: disable=broad-except
            LOG.warning("Unable to walk %s", hostname, exc_info=True)
            return VariableSet()
        with response:
            for error in response.errors:
                LOG.debug("Walk of %s: %s", hostname, error)
            return VariableSet.from_values(response.values)

    def walk_hosts(self, hostnames: Iterable[str]) -> Dict[str, VariableSet]:
        """
        Walk the Printer-MIB of every host in *hostnames*.

        Duplicate host names are walked only once. Every host is present in
        the result, hosts which could not be queried map to an empty
        :py:class:`~printsnmp.variables.VariableSet`.

        :raises printsnmp.exc.SnmpError: if this manager is already walking
            or has been shut down.
        """
        if not self._in_use.acquire(blocking=False):
            raise SnmpError("Tried to query printers via SNMP twice")
        try:
            if self._closed:
                raise SnmpError("SNMP manager has been shut down")
            hosts: List[str] = list(dict.fromkeys(hostnames))
            if not hosts:
                return {}
            output: Dict[str, VariableSet] = {}
            workers = min(self.max_connections, len(hosts))
            LOG.debug("Walking %d hosts with %d workers", len(hosts), workers)
            with ThreadPoolExecutor(max_workers=workers) as executor:
                future_to_host = {
                    executor.submit(self.walk_host, host): host
                    for host in hosts
                }
                for future in as_completed(future_to_host):
                    output[future_to_host[future]] = future.result()
            return {host: output[host] for host in hosts}
        finally:
            self._in_use.release()

    def quit(self) -> None:
        """
        Wait for a running :py:meth:`~.walk_hosts` call to finish and shut
        the manager down. Calling this more than once has no effect.
        """
        with self._in_use:
            if self._closed:
                return
            self._closed = True
        LOG.debug("SNMP manager shut down")
