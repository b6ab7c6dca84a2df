"""
Quiz users built on the delegation model.

- behaviors: USER_BEHAVIORS and PAID_USER_BEHAVIORS
- factory: create_base_user / create_paid_user
"""

from .behaviors import USER_BEHAVIORS, PAID_USER_BEHAVIORS, CATALOG
from .factory import (
    FactoryConfig,
    UserFactory,
    PaidUserFactory,
    create_base_user,
    create_paid_user,
)

__all__ = [
    "USER_BEHAVIORS",
    "PAID_USER_BEHAVIORS",
    "CATALOG",
    "FactoryConfig",
    "UserFactory",
    "PaidUserFactory",
    "create_base_user",
    "create_paid_user",
]
