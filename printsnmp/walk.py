"""
Walk a whole MIB subtree using GETBULK requests.

The walk keeps asking for the OIDs following the last one it received until
the agent returns an OID outside the subtree. If the agent reports that a
response would be too big, the number of requested repetitions is halved and
the same request is sent again. Failures stop the walk but never discard the
values collected so far: :py:func:`~.bulkwalk` always returns a
:py:class:`~printsnmp.response.BulkwalkResponse`.

Example::

    >>> from printsnmp import bulkwalk
    >>> response = bulkwalk("192.0.2.1", "public")  # doctest: +SKIP
    >>> for oid, value in response:  # doctest: +SKIP
    ...     print(oid, value)
    1.3.6.1.2.1.43.5.1.1.17.1 CNB1234567
    1.3.6.1.2.1.43.6.1.1.2.1.1 Front Cover
    ...
"""
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from x690.types import ObjectIdentifier

from .bulk import request
from .config import WalkConfig, initialize
from .const import MAX_REPETITIONS, PRINTER_OID
from .exc import (
    ErrorResponse,
    FaultySNMPImplementation,
    RequestError,
    SessionOpenError,
    TooBig,
)
from .pdu import EndOfMibView
from .response import (
    BulkwalkResponse,
    ErrorAccumulator,
    Termination,
    materialize,
)
from .session import Session
from .transport import TTransportFactory
from .types import render_value
from .util import comes_before, has_prefix
from .varbind import OidValue, VarBind

LOG = logging.getLogger(__name__)


class WalkState(Enum):
    """
    States of a :py:class:`~.SubtreeWalker`. ``DONE`` is terminal.
    """

    REQUESTING = "requesting"
    ACCEPTING = "accepting"
    BACKOFF = "backoff"
    DONE = "done"


class SubtreeWalker:
    """
    The request loop of a single walk over *root* on an open *session*.

    Each call to :py:meth:`~.step` performs one state transition. Every
    transition either moves the cursor forward, lowers
    :py:attr:`~.max_repetitions` or ends the walk, so the walk always
    terminates on an agent which returns a finite subtree.
    """

    def __init__(
        self,
        session: Session,
        root: ObjectIdentifier = PRINTER_OID,
        max_repetitions: int = MAX_REPETITIONS,
    ) -> None:
        self.session = session
        self.root = root
        #: The OID the next request continues after
        self.cursor = root
        #: Repetitions asked for in the next request. Never increases.
        self.max_repetitions = max_repetitions
        self.state = WalkState.REQUESTING
        self.termination = Termination.RUNNING
        self.values: List[OidValue] = []
        self.errors = ErrorAccumulator()
        self._batch: List[VarBind] = []
        self._handlers: Dict[WalkState, Callable[[], WalkState]] = {
            WalkState.REQUESTING: self._request,
            WalkState.ACCEPTING: self._accept,
            WalkState.BACKOFF: self._backoff,
        }

    def step(self) -> WalkState:
        """
        Perform one transition and return the new state.
        """
        if self.state is WalkState.DONE:
            return self.state
        handler = self._handlers[self.state]
        try:
            new_state = handler()
        except FaultySNMPImplementation as exc:
            self.errors.add(str(exc))
            new_state = self._finish(Termination.ERROR)
        LOG.debug("%s -> %s", self.state.name, new_state.name)
        self.state = new_state
        return new_state

    def run(self) -> BulkwalkResponse:
        """
        Step until the walk is done and return the collected response.
        """
        while self.state is not WalkState.DONE:
            self.step()
        LOG.debug(
            "Walk over %s on %r finished (%s) with %d values and %d errors",
            self.root,
            self.session,
            self.termination.value,
            len(self.values),
            len(self.errors),
        )
        return materialize(self.values, self.errors, self.termination)

    def _finish(self, termination: Termination) -> WalkState:
        self.termination = termination
        return WalkState.DONE

    def _request(self) -> WalkState:
        try:
            self._batch = request(
                self.session, self.max_repetitions, self.cursor
            )
        except TooBig:
            return WalkState.BACKOFF
        except ErrorResponse as exc:
            self.errors.add(
                f"SNMP response error ({exc.error_status}): {exc}"
            )
            return self._finish(Termination.ERROR)
        except RequestError as exc:
            self.errors.add(str(exc))
            return self._finish(Termination.ERROR)
        return WalkState.ACCEPTING

    def _backoff(self) -> WalkState:
        if self.max_repetitions <= 1:
            # The agent cannot even return a single varbind. What has been
            # collected so far is returned without an error message.
            LOG.debug(
                "%r still too big at max-repetitions=1, giving up at %s",
                self.session,
                self.cursor,
            )
            return self._finish(Termination.OVERSIZE_RETRY_EXHAUSTED)
        self.max_repetitions = max(self.max_repetitions // 2, 1)
        LOG.debug(
            "Response too big, retrying with max-repetitions=%d",
            self.max_repetitions,
        )
        return WalkState.REQUESTING

    def _accept(self) -> WalkState:
        batch, self._batch = self._batch, []
        if not batch:
            return self._finish(Termination.END_OF_MIB)
        for varbind in batch:
            if not has_prefix(varbind.oid, self.root):
                return self._finish(Termination.SUBTREE_BOUNDARY)
            if isinstance(varbind.value, EndOfMibView):
                return self._finish(Termination.END_OF_MIB)
            if not comes_before(self.cursor, varbind.oid):
                raise FaultySNMPImplementation(
                    f"SNMP response error: {self.session.peer} returned "
                    f"{varbind.oid} which does not follow {self.cursor}"
                )
            self.values.append(
                OidValue(varbind.oid, render_value(varbind.value))
            )
            self.cursor = varbind.oid
        return WalkState.REQUESTING


def bulkwalk(
    peer: str,
    community: str,
    root: Union[str, ObjectIdentifier] = PRINTER_OID,
    config: Optional[WalkConfig] = None,
    transport_factory: Optional[TTransportFactory] = None,
) -> BulkwalkResponse:
    """
    Walk the subtree *root* (the Printer-MIB by default) on *peer*.

    This opens a session, runs a :py:class:`~.SubtreeWalker` and closes the
    session again on every path. Network and SNMP failures are reported in
    :py:attr:`~printsnmp.response.BulkwalkResponse.errors` instead of being
    raised.

    :param peer: The agent address, optionally with port.
    :param community: The SNMPv2c community.
    :param root: The subtree to walk.
    :param config: Timeouts, retries, port and initial max-repetitions.
    :param transport_factory: Replaces the UDP transport (used in tests).
    """
    initialize()
    config = config or WalkConfig()
    if isinstance(root, str):
        root = ObjectIdentifier(root)

    try:
        session = Session.open(peer, community, config, transport_factory)
    except SessionOpenError as exc:
        LOG.debug("Unable to walk %s: %s", peer, exc)
        errors = ErrorAccumulator()
        errors.add(str(exc))
        return materialize([], errors, Termination.ERROR)

    try:
        walker = SubtreeWalker(session, root, config.max_repetitions)
        return walker.run()
    finally:
        session.close()
