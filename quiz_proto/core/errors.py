"""
core/errors.py

What can go wrong when an entity asks its kind for help.

Every failure is local to one call. Nothing is retried,
nothing is partially applied. The caller decides.
"""

from __future__ import annotations
from typing import Any, Sequence


class BehaviorError(Exception):
    """Base for all errors raised by the delegation model."""


class MissingOperation(BehaviorError, LookupError):
    """No level of the resolution chain defines the operation."""

    def __init__(self, operation: str, kind: str):
        self.operation = operation
        self.kind = kind
        super().__init__(f"'{kind}' has no operation '{operation}'")


class CyclicExtension(BehaviorError, ValueError):
    """A behavior set would (transitively) extend itself."""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__(f"Cyclic extension: {' -> '.join(self.chain)}")


class InvalidInitialState(BehaviorError, ValueError):
    """A factory was asked to build an entity from unusable field values."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}={value!r}: {reason}")


class UnknownBehaviorSet(BehaviorError, LookupError):
    """A registry lookup named a behavior set nobody declared."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown behavior set: {name}")
