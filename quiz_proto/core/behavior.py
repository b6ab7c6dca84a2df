"""
core/behavior.py

One copy of every behavior, shared by every entity of a kind.

A BehaviorSet never changes after it is built.
It may extend one parent set; lookups walk upward
until something answers or the chain runs out.

Inspired by:
- Prototype chains (delegation over copying)
- Single inheritance (one parent, never a loop)
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional
import logging

from .errors import CyclicExtension

logger = logging.getLogger(__name__)

# fn(receiver, *args, **kwargs)
Operation = Callable[..., Any]


class BehaviorSet:
    """
    A named, immutable bundle of operations.

    Principles embodied:
    - Behavior is shared by reference, never copied per entity
    - The extension chain is finite and acyclic
    """

    __slots__ = ("_name", "_operations", "_extends")

    def __init__(
        self,
        name: str,
        operations: Optional[Mapping[str, Operation]] = None,
        extends: Optional[BehaviorSet] = None
    ):
        ops = dict(operations or {})
        for op_name, op in ops.items():
            if not callable(op):
                raise TypeError(f"Operation '{op_name}' of '{name}' is not callable")

        self._name = name
        self._operations: Mapping[str, Operation] = MappingProxyType(ops)
        self._extends = extends

        self._check_acyclic()
        logger.debug(
            f"BehaviorSet '{name}' built with {len(ops)} operations"
            + (f", extends '{extends.name}'" if extends is not None else "")
        )

    # ==================== Identity ====================

    @property
    def name(self) -> str:
        return self._name

    @property
    def operations(self) -> Mapping[str, Operation]:
        """This level's own operations (read-only view)."""
        return self._operations

    @property
    def extends(self) -> Optional[BehaviorSet]:
        return self._extends

    # ==================== Lookup ====================

    def lineage(self) -> Iterator[BehaviorSet]:
        """This set, then each ancestor in resolution order."""
        current: Optional[BehaviorSet] = self
        while current is not None:
            yield current
            current = current._extends

    def find(self, name: str) -> Optional[Operation]:
        """
        Walk the chain for an operation.

        Returns the first body found, or None.
        """
        for level in self.lineage():
            op = level._operations.get(name)
            if op is not None:
                return op
        return None

    def defining_level(self, name: str) -> Optional[BehaviorSet]:
        """Which set in the chain supplies `name`."""
        for level in self.lineage():
            if name in level._operations:
                return level
        return None

    def operation_names(self) -> List[str]:
        """Every operation name visible from this set, own and inherited."""
        names = set()
        for level in self.lineage():
            names.update(level._operations)
        return sorted(names)

    def is_a(self, other: BehaviorSet) -> bool:
        """True if `other` is this set or one of its ancestors."""
        return any(level is other for level in self.lineage())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    # ==================== Derivation ====================

    def extend(self, name: str, operations: Optional[Mapping[str, Operation]] = None) -> BehaviorSet:
        """Build a child set whose lookups fall back to this one."""
        return BehaviorSet(name, operations, extends=self)

    def _check_acyclic(self) -> None:
        """Kind names identify kinds: no name may appear twice in a chain."""
        seen: Dict[str, None] = {self._name: None}
        ancestor = self._extends
        while ancestor is not None:
            if ancestor is self or ancestor._name in seen:
                raise CyclicExtension(list(seen) + [ancestor._name])
            seen[ancestor._name] = None
            ancestor = ancestor._extends

    def __repr__(self) -> str:
        parent = self._extends.name if self._extends is not None else None
        return (
            f"BehaviorSet(name={self._name}, "
            f"operations={sorted(self._operations)}, "
            f"extends={parent})"
        )
