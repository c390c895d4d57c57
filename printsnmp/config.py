"""
Configuration of walks and the one-time setup of the library.

:py:func:`~.initialize` is the required startup state of the package. It must
run once per process before the first session is opened.
:py:func:`printsnmp.walk.bulkwalk` and :py:class:`printsnmp.manager.Manager`
call it themselves, so applications only need to call it when they use
:py:class:`printsnmp.session.Session` directly.
"""
import logging
from dataclasses import dataclass, replace
from importlib import import_module
from threading import Lock
from typing import Any

from .const import (
    DEFAULT_PORT,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    MAX_REPETITIONS,
)

LOG = logging.getLogger(__name__)

_INIT_LOCK = Lock()
_INITIALISED = False


@dataclass(frozen=True)
class WalkConfig:
    """
    Tunables of a single walk.
    """

    #: Seconds to wait for each response
    timeout: int = DEFAULT_TIMEOUT
    #: Number of times a request is sent before giving up
    retries: int = DEFAULT_RETRIES
    #: Agent port used when the peer address does not name one
    port: int = DEFAULT_PORT
    #: Initial "max-repetitions" of the GETBULK requests
    max_repetitions: int = MAX_REPETITIONS

    def __post_init__(self) -> None:
        if self.max_repetitions < 1:
            raise ValueError(
                f"max_repetitions must be positive, got {self.max_repetitions}"
            )
        if self.retries < 1:
            raise ValueError(f"retries must be positive, got {self.retries}")

    def replace(self, **kwargs: Any) -> "WalkConfig":
        """
        Returns a copy of this config with the given fields changed.

        >>> WalkConfig().replace(timeout=2).timeout
        2
        """
        return replace(self, **kwargs)


def initialize() -> None:
    """
    Prepare the library for use. Safe to call any number of times and from
    any thread; only the first call has an effect.

    * Registers the SMI application types with the x690 type registry so
      received counters, gauges, time-ticks and addresses decode properly.
    * Attaches a :py:class:`logging.NullHandler` to the package logger so the
      library stays silent unless the application configures logging.
    """
    global _INITIALISED  # pylint: disable=global-statement
    with _INIT_LOCK:
        if _INITIALISED:
            return
        # !!! DO NOT REMOVE !!! Importing the types populates the x690
        # registry. Without it, non-x690 SNMP types are not detected.
        import_module("printsnmp.types")
        logging.getLogger("printsnmp").addHandler(logging.NullHandler())
        _INITIALISED = True
    LOG.debug("printsnmp initialised")


def is_initialized() -> bool:
    """
    Whether :py:func:`~.initialize` has run in this process.
    """
    return _INITIALISED
