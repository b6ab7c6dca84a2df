"""
Core of the delegation model.

- behavior: BehaviorSet - shared, immutable, single-parent
- entity: Entity - fields plus one kind reference
- resolution: resolve / invoke / invoke_with
- registry: kinds declared by name
"""

from .behavior import BehaviorSet, Operation
from .entity import Entity
from .errors import (
    BehaviorError,
    MissingOperation,
    CyclicExtension,
    InvalidInitialState,
    UnknownBehaviorSet,
)
from .registry import BehaviorRegistry
from .resolution import resolve, invoke, invoke_with, apply_with

__all__ = [
    "BehaviorSet",
    "Operation",
    "Entity",
    "BehaviorError",
    "MissingOperation",
    "CyclicExtension",
    "InvalidInitialState",
    "UnknownBehaviorSet",
    "BehaviorRegistry",
    "resolve",
    "invoke",
    "invoke_with",
    "apply_with",
]
