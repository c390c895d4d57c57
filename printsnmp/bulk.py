"""
Execution of a single GETBULK request.

This is the only place where a walk touches the session. It does not retry
anything itself: whatever goes wrong is raised and the walk decides what to
do about it.
"""
import logging
from typing import List

from x690.types import ObjectIdentifier

from .const import NON_REPEATERS
from .exc import ErrorResponse, RequestError, SnmpError, Timeout
from .pdu import BulkGetRequest
from .session import Session
from .util import get_request_id
from .varbind import VarBind

LOG = logging.getLogger(__name__)


def request(
    session: Session, max_repetitions: int, starting_oid: ObjectIdentifier
) -> List[VarBind]:
    """
    Sends one GETBULK request for the OIDs following *starting_oid* and
    returns the varbinds of the response in the order the agent sent them.

    "non-repeaters" is always ``0``.

    :param session: An open session.
    :param max_repetitions: How many varbinds the agent may return at most.
    :param starting_oid: The OID the agent should continue after.
    :raises printsnmp.exc.ErrorResponse: if the agent answered with an
        error-status (:py:exc:`~printsnmp.exc.TooBig` for ``tooBig``).
    :raises printsnmp.exc.RequestError: for any failure below the protocol
        level.
    """
    if max_repetitions < 1:
        raise ValueError(
            f"max_repetitions must be positive, got {max_repetitions}"
        )
    pdu = BulkGetRequest(
        get_request_id(), NON_REPEATERS, max_repetitions, starting_oid
    )
    LOG.debug("GETBULK %s on %r", starting_oid, session)
    try:
        content = session.exchange(pdu)
    except ErrorResponse:
        raise
    except Timeout as exc:
        raise RequestError(exc.message) from exc
    except (OSError, SnmpError) as exc:
        raise RequestError(str(exc) or type(exc).__name__) from exc
    LOG.debug(
        "Received %d varbinds for max-repetitions=%d",
        len(content.varbinds),
        max_repetitions,
    )
    return content.varbinds
