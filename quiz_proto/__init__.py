"""
Quiz-Proto: Shared Behavior by Delegation

Many users, one copy of each behavior. Entities hold data and a single
reference to the BehaviorSet that knows what to do with it; specialised
kinds extend a parent set instead of duplicating it.
"""

__version__ = "0.1.0"

from .core import (
    BehaviorSet,
    Entity,
    BehaviorError,
    MissingOperation,
    CyclicExtension,
    InvalidInitialState,
    UnknownBehaviorSet,
    BehaviorRegistry,
    resolve,
    invoke,
    invoke_with,
    apply_with,
)
from .users import create_base_user, create_paid_user

__all__ = [
    "BehaviorSet",
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
    "create_base_user",
    "create_paid_user",
]
