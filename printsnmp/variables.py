"""
Ordered lookups over the values of a finished walk.
"""
from bisect import bisect_left
from typing import Iterable, List, Optional, Tuple

from x690.types import ObjectIdentifier

from .util import has_prefix
from .varbind import OidValue


class VariableSet:
    """
    An ordered set of :py:class:`~printsnmp.varbind.OidValue` items.

    Variables must be added in increasing OID order, which is the order a
    walk returns them in. Lookups rely on that to use a binary search.

    >>> vs = VariableSet.from_values([
    ...     OidValue(ObjectIdentifier("1.3.6.1.2.1.43.5.1.1.17.1"), "CN123"),
    ...     OidValue(ObjectIdentifier("1.3.6.1.2.1.43.6.1.1.2.1.1"), "Front"),
    ... ])
    >>> vs.get_value(ObjectIdentifier("1.3.6.1.2.1.43.5.1.1.17.1"))
    'CN123'
    >>> vs.get_subtree(ObjectIdentifier("1.3.6.1.2.1.43.6")).size
    1
    """

    def __init__(self, variables: Optional[List[OidValue]] = None) -> None:
        self._vars: List[OidValue] = list(variables or [])
        self._keys: List[Tuple[int, ...]] = [
            oid.nodes for oid, _ in self._vars
        ]

    @staticmethod
    def from_values(values: Iterable[OidValue]) -> "VariableSet":
        """
        Build a set from the values of a walk.
        """
        output = VariableSet()
        for oid, value in values:
            output.add_variable(oid, value)
        return output

    @property
    def size(self) -> int:
        """
        The number of variables in this set.
        """
        return len(self._vars)

    @property
    def variables(self) -> List[OidValue]:
        """
        The variables in this set, in order.
        """
        return list(self._vars)

    @property
    def values(self) -> List[str]:
        """
        All values in this set, in order.
        """
        return [value for _, value in self._vars]

    def add_variable(self, oid: ObjectIdentifier, value: str) -> None:
        """
        Append a variable. One pair of enclosing double quotes is removed
        from *value*.
        """
        if len(value) > 1 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        self._vars.append(OidValue(oid, value))
        self._keys.append(oid.nodes)

    def get_subtree(self, prefix: ObjectIdentifier) -> "VariableSet":
        """
        The variables whose OID starts with *prefix*, *prefix* included.
        """
        head = bisect_left(self._keys, prefix.nodes)
        tail = head
        while tail < len(self._vars) and has_prefix(
            self._vars[tail].oid, prefix
        ):
            tail += 1
        return VariableSet(self._vars[head:tail])

    def get_variable(self, oid: ObjectIdentifier) -> Optional[OidValue]:
        """
        The variable with exactly this OID, or ``None``.
        """
        index = bisect_left(self._keys, oid.nodes)
        if index < len(self._keys) and self._keys[index] == oid.nodes:
            return self._vars[index]
        return None

    def get_value(self, oid: ObjectIdentifier) -> Optional[str]:
        """
        The value of the variable with exactly this OID, or ``None``.
        """
        variable = self.get_variable(oid)
        if variable is None:
            return None
        return variable.value

    def __len__(self) -> int:
        return len(self._vars)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, VariableSet) and self._vars == other._vars

    def __repr__(self) -> str:
        return f"<VariableSet {len(self._vars)} variables>"
