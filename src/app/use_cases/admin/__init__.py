"""Admin use cases for role and permission administration."""

from .assign_roles_use_case import AssignRolesUseCase
from .permission_use_cases import (
    CreatePermissionUseCase,
    GetPermissionUseCase,
    ListPermissionsUseCase,
)
from .role_use_cases import (
    AssignPermissionsUseCase,
    CreateRoleUseCase,
    GetRoleUseCase,
    ListRolesUseCase,
)

__all__ = [
    "CreateRoleUseCase",
    "ListRolesUseCase",
    "GetRoleUseCase",
    "AssignPermissionsUseCase",
    "CreatePermissionUseCase",
    "ListPermissionsUseCase",
    "GetPermissionUseCase",
    "AssignRolesUseCase",
]
