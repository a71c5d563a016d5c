"""Test factories for generating test data."""

from tests.factories.permissions import (
    PermissionRowFactory,
    ProfileCreateFactory,
    RoleCreateFactory,
    create_profile,
    create_role,
)


__all__ = [
    "PermissionRowFactory",
    "ProfileCreateFactory",
    "RoleCreateFactory",
    "create_profile",
    "create_role",
]
