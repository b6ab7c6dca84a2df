"""
core/resolution.py

Finding who answers, and making sure the right entity is "self".

Resolution order for an entity:
1. The entity's own operations (per-entity override)
2. Its BehaviorSet
3. That set's parent, and so on up the chain

Whichever level supplies the body, the original entity is the receiver.
Nested calls inside an operation go through `invoke(receiver, ...)`
and keep that receiver too.
"""

from __future__ import annotations
from contextlib import nullcontext
from typing import Any, Dict, Optional, Sequence
import logging

from .behavior import BehaviorSet, Operation
from .entity import Entity
from .errors import MissingOperation

logger = logging.getLogger(__name__)


def resolve_or_none(entity: Entity, name: str) -> Optional[Operation]:
    """Like `resolve`, but returns None instead of raising."""
    own = object.__getattribute__(entity, "_own")
    if name in own:
        return own[name]
    return entity.kind.find(name)


def resolve(entity: Entity, name: str) -> Operation:
    """
    Find the operation body that answers `name` for `entity`.

    Read-only. Raises MissingOperation when no level defines it.
    """
    op = resolve_or_none(entity, name)
    if op is None:
        raise MissingOperation(name, entity.kind.name)
    return op


def invoke(entity: Entity, name: str, *args: Any, **kwargs: Any) -> Any:
    """
    Resolve `name` on `entity` and run it with `entity` as receiver.

    The entity's lock is held for the call, so concurrent increments
    on one entity cannot lose updates.
    """
    op = resolve(entity, name)
    logger.debug(f"invoke {entity.kind.name}.{name}")
    with entity.lock:
        return op(entity, *args, **kwargs)


def invoke_with(
    behaviors: BehaviorSet,
    name: str,
    receiver: Any,
    *args: Any,
    **kwargs: Any
) -> Any:
    """
    Borrow `name` from `behaviors` and run it on `receiver`.

    The receiver's own kind (if it has one) plays no part in the lookup
    and is never changed. Any object with attribute fields will do.
    """
    op = behaviors.find(name)
    if op is None:
        raise MissingOperation(name, behaviors.name)

    logger.debug(f"invoke_with {behaviors.name}.{name} on {type(receiver).__name__}")
    guard = receiver.lock if isinstance(receiver, Entity) else nullcontext()
    with guard:
        return op(receiver, *args, **kwargs)


def apply_with(
    behaviors: BehaviorSet,
    name: str,
    receiver: Any,
    args: Sequence[Any] = (),
    kwargs: Optional[Dict[str, Any]] = None
) -> Any:
    """`invoke_with` taking its arguments as a sequence."""
    return invoke_with(behaviors, name, receiver, *args, **(kwargs or {}))
