"""
users/behaviors.py

What every quiz user can do, written once.

Operations take the receiver first. They never name a specific user,
so one copy serves all of them, and paid users reach these same
bodies through the chain.
"""

from __future__ import annotations
from typing import Any
import logging
import numbers

from quiz_proto.core.behavior import BehaviorSet

logger = logging.getLogger(__name__)


def _require_number(receiver: Any, field: str) -> None:
    value = getattr(receiver, field)
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        raise TypeError(f"{field} must be numeric, got {type(value).__name__}")


# ==================== Base User ====================

def increment(user: Any) -> None:
    """Add one to the score. No upper bound."""
    _require_number(user, "score")
    user.score += 1


def login(user: Any) -> str:
    """Stub. Nobody is authenticated; the user is simply told so."""
    message = "You are logged in"
    logger.info(f"{getattr(user, 'name', '<anonymous>')} logged in")
    return message


def say_name(user: Any) -> str:
    return f"I am {user.name}"


# ==================== Paid User ====================

def increase_balance(user: Any) -> None:
    """Add one to the account balance. The score is left alone."""
    _require_number(user, "accountBalance")
    user.accountBalance += 1


USER_BEHAVIORS = BehaviorSet(
    "user",
    {
        "increment": increment,
        "login": login,
        "say_name": say_name,
        "sayName": say_name,
    },
)

PAID_USER_BEHAVIORS = USER_BEHAVIORS.extend(
    "paid_user",
    {
        "increase_balance": increase_balance,
        "increaseBalance": increase_balance,
    },
)

# Every operation above, by name, for kinds declared from YAML
CATALOG = {
    **USER_BEHAVIORS.operations,
    **PAID_USER_BEHAVIORS.operations,
}
