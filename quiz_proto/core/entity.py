"""
core/entity.py

An entity owns its data and nothing else.

Its behavior lives elsewhere, in the BehaviorSet it points to.
Millions of users, one copy of `increment`.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional
import functools
import logging
import threading

if TYPE_CHECKING:
    from .behavior import BehaviorSet, Operation

logger = logging.getLogger(__name__)


class Entity:
    """
    A mutable record of named fields plus one reference to its kind.

    Fields read and write as attributes (`user.score += 1`).
    Unknown attributes fall through to the kind: `user.increment()`
    resolves `increment` and runs it with this entity as receiver.
    """

    def __init__(self, kind: BehaviorSet, fields: Optional[Mapping[str, Any]] = None):
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_fields", {})
        object.__setattr__(self, "_own", {})
        # Re-entrant: operations may invoke other operations on the same receiver
        object.__setattr__(self, "_lock", threading.RLock())
        for name, value in (fields or {}).items():
            self._store(name, value)

    # ==================== Kind ====================

    @property
    def kind(self) -> BehaviorSet:
        return self._kind

    def set_kind(self, kind: BehaviorSet) -> None:
        """Re-point this entity at another BehaviorSet. Fields are untouched."""
        with self._lock:
            previous = self._kind
            object.__setattr__(self, "_kind", kind)
        logger.debug(f"Entity relinked: {previous.name} -> {kind.name}")

    # ==================== Own State ====================

    @property
    def lock(self) -> threading.RLock:
        """Guards read-modify-write on this entity's fields."""
        return self._lock

    @property
    def own_operations(self) -> Mapping[str, Operation]:
        return dict(self._own)

    def define(self, name: str, operation: Operation) -> None:
        """Attach an operation to this entity alone, overriding its kind."""
        if not callable(operation):
            raise TypeError(f"Operation '{name}' is not callable")
        self._store(name, operation)

    def undefine(self, name: str) -> None:
        """Drop an entity-level override; the kind answers again."""
        with self._lock:
            if name not in self._own:
                raise AttributeError(f"No entity-level operation '{name}' to remove")
            del self._own[name]

    def has_own(self, name: str) -> bool:
        """True if the entity itself stores `name`, as a field or operation."""
        return name in self._fields or name in self._own

    def as_dict(self) -> Dict[str, Any]:
        """Snapshot of the fields."""
        with self._lock:
            return dict(self._fields)

    # ==================== Attribute Protocol ====================

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)

        fields = object.__getattribute__(self, "_fields")
        if name in fields:
            return fields[name]

        from .resolution import invoke, resolve_or_none

        if resolve_or_none(self, name) is not None:
            return functools.partial(invoke, self, name)

        raise AttributeError(
            f"'{self._kind.name}' entity has no field or operation '{name}'"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or hasattr(type(self), name):
            raise AttributeError(f"Cannot assign reserved attribute '{name}'")
        self._store(name, value)

    def _store(self, name: str, value: Any) -> None:
        # Callables stored on the entity are its own operations, checked before the kind
        with self._lock:
            if callable(value):
                self._fields.pop(name, None)
                self._own[name] = value
            else:
                self._own.pop(name, None)
                self._fields[name] = value

    def __delattr__(self, name: str) -> None:
        with self._lock:
            if name in self._fields:
                del self._fields[name]
            elif name in self._own:
                del self._own[name]
            else:
                raise AttributeError(name)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._fields.items())
        return f"Entity(kind={self._kind.name}, {fields})"
