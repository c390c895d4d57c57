"""
The result of a walk.

A walk collects values and error messages into two independent, ordered
lists and hands both to the caller in a :py:class:`~.BulkwalkResponse`. The
caller inspects :py:attr:`~.BulkwalkResponse.errors` to tell a complete
result from a partial one.
"""
from enum import Enum
from typing import Any, Iterator, List, Sequence, Tuple

from .varbind import OidValue


class Termination(Enum):
    """
    Why a walk stopped.
    """

    #: Not finished yet
    RUNNING = "running"
    #: The agent returned an OID outside the walked subtree. This is the
    #: normal end of a walk.
    SUBTREE_BOUNDARY = "subtree-boundary"
    #: The agent has nothing more to return (empty batch or
    #: ``endOfMibView``).
    END_OF_MIB = "end-of-mib"
    #: The agent kept answering "tooBig" even for a single repetition. The
    #: result is truncated without an error message.
    OVERSIZE_RETRY_EXHAUSTED = "oversize-retry-exhausted"
    #: The walk was stopped by an error which is recorded in the response.
    ERROR = "error"


class ErrorAccumulator:
    """
    Append-only list of diagnostic messages.

    >>> errors = ErrorAccumulator()
    >>> errors.add("SNMP request error: timeout")
    >>> errors.messages
    ('SNMP request error: timeout',)
    """

    def __init__(self) -> None:
        self._messages: List[str] = []

    def add(self, message: str) -> None:
        """
        Record *message* after all previously recorded ones.
        """
        self._messages.append(message)

    @property
    def messages(self) -> Tuple[str, ...]:
        """
        All messages in the order they were recorded.
        """
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)


class BulkwalkResponse:
    """
    Values and errors collected by one walk.

    The response belongs to the caller. :py:meth:`~.release` drops the
    collected data once it is no longer needed; the response can also be used
    as a context manager to do so automatically.
    """

    def __init__(
        self,
        values: Sequence[OidValue] = (),
        errors: Sequence[str] = (),
        termination: Termination = Termination.RUNNING,
    ) -> None:
        #: Collected values in walk order
        self.values: List[OidValue] = list(values)
        #: Error messages in the order they occurred
        self.errors: List[str] = list(errors)
        #: Why the walk stopped
        self.termination = termination
        self.released = False

    @property
    def is_complete(self) -> bool:
        """
        Values were collected and nothing went wrong.
        """
        return bool(self.values) and not self.errors

    @property
    def is_partial(self) -> bool:
        """
        Some values were collected before an error stopped the walk.
        """
        return bool(self.values) and bool(self.errors)

    @property
    def is_failure(self) -> bool:
        """
        The walk produced errors and no values at all.
        """
        return not self.values and bool(self.errors)

    def release(self) -> None:
        """
        Drop the collected values and errors. Calling this more than once has
        no effect.
        """
        self.values = []
        self.errors = []
        self.released = True

    def __iter__(self) -> Iterator[OidValue]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __enter__(self) -> "BulkwalkResponse":
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, BulkwalkResponse)
            and self.values == other.values
            and self.errors == other.errors
            and self.termination == other.termination
        )

    def __repr__(self) -> str:
        return "<BulkwalkResponse %d values, %d errors, %s>" % (
            len(self.values),
            len(self.errors),
            self.termination.value,
        )


def materialize(
    values: Sequence[OidValue],
    errors: ErrorAccumulator,
    termination: Termination,
) -> BulkwalkResponse:
    """
    Package the state of a finished walk for the caller.
    """
    return BulkwalkResponse(values, errors.messages, termination)
