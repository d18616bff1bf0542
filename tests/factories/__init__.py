"""Test factories for generating test data."""

from tests.factories.role import RoleCreateFactory
from tests.factories.user import UserCreateFactory


__all__ = [
    "RoleCreateFactory",
    "UserCreateFactory",
]
