"""
users/factory.py

Constructors for quiz users.

A base user gets fields and a link to USER_BEHAVIORS.
A paid user is a base user first (same construction path, no duplication),
then gains a balance and is re-linked to PAID_USER_BEHAVIORS.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union
import logging
import numbers

import yaml

from quiz_proto.core.behavior import BehaviorSet
from quiz_proto.core.entity import Entity
from quiz_proto.core.errors import InvalidInitialState

from .behaviors import PAID_USER_BEHAVIORS, USER_BEHAVIORS

logger = logging.getLogger(__name__)


@dataclass
class FactoryConfig:
    """
    Construction policy, shared by the base and paid factories.

    Negative balances are accepted by default: nothing in the
    paid-user model forbids them. Turn on the check to harden.
    """
    reject_negative_balance: bool = False
    allow_empty_name: bool = True

    @classmethod
    def from_yaml(cls, path: Union[str, Path], section: str = "factory") -> "FactoryConfig":
        """Load the `factory` section of a YAML file (missing keys keep defaults)."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data.get(section, {}))


def _check_number(field: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        raise InvalidInitialState(field, value, "must be numeric")


class UserFactory:
    """Builds base users linked to a shared BehaviorSet."""

    def __init__(
        self,
        config: Optional[FactoryConfig] = None,
        behaviors: BehaviorSet = USER_BEHAVIORS
    ):
        self.config = config or FactoryConfig()
        self.behaviors = behaviors

    def create(self, name: str, score: int) -> Entity:
        if not isinstance(name, str):
            raise InvalidInitialState("name", name, "must be a string")
        if not name and not self.config.allow_empty_name:
            raise InvalidInitialState("name", name, "must not be empty")
        _check_number("score", score)

        user = Entity(self.behaviors, {"name": name, "score": score})
        logger.debug(f"Created {self.behaviors.name}: {name} (score={score})")
        return user

    def __call__(self, name: str, score: int) -> Entity:
        return self.create(name, score)


class PaidUserFactory:
    """
    Builds paid users on top of a base factory.

    The paid BehaviorSet must extend the base factory's set, so every base
    operation still resolves for paid users through the chain alone.

    Both factories share one FactoryConfig: name and score checks run in
    the base factory, so a differing `config` next to `base` is refused.
    """

    def __init__(
        self,
        base: Optional[UserFactory] = None,
        config: Optional[FactoryConfig] = None,
        behaviors: BehaviorSet = PAID_USER_BEHAVIORS
    ):
        if base is not None and config is not None and config != base.config:
            raise ValueError("config differs from the base factory's config")
        self.base = base or UserFactory(config)
        self.config = self.base.config
        if not behaviors.is_a(self.base.behaviors):
            raise ValueError(
                f"'{behaviors.name}' does not extend '{self.base.behaviors.name}'"
            )
        self.behaviors = behaviors

    def create(self, name: str, score: int, balance: int) -> Entity:
        _check_number("accountBalance", balance)
        if balance < 0 and self.config.reject_negative_balance:
            raise InvalidInitialState("accountBalance", balance, "must not be negative")

        user = self.base.create(name, score)
        user.accountBalance = balance
        user.set_kind(self.behaviors)
        logger.debug(f"Created {self.behaviors.name}: {name} (balance={balance})")
        return user

    def __call__(self, name: str, score: int, balance: int) -> Entity:
        return self.create(name, score, balance)


_users = UserFactory()
_paid_users = PaidUserFactory(_users)


def create_base_user(name: str, score: int) -> Entity:
    """Build a base user with the default factory."""
    return _users.create(name, score)


def create_paid_user(name: str, score: int, balance: int) -> Entity:
    """Build a paid user with the default factory."""
    return _paid_users.create(name, score, balance)
