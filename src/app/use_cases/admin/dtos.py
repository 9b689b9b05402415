"""
Admin Use Case DTOs

Commands and responses for role and permission administration.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Permission, Role

# ============================================================================
# Command DTOs
# ============================================================================


class CreateRoleCommand(BaseModel):
    name: str
    description: Optional[str] = None


class CreatePermissionCommand(BaseModel):
    code: str
    module: str
    description: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class PermissionResponse(BaseModel):
    """Permission as returned by admin endpoints"""

    id: str
    code: str
    module: str
    description: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, permission: Permission) -> "PermissionResponse":
        return cls(
            id=str(permission.id),
            code=permission.code,
            module=permission.module,
            description=permission.description,
            created_at=permission.created_at,
        )


class RoleResponse(BaseModel):
    """Role with the permissions it grants"""

    id: str
    name: str
    description: Optional[str] = None
    status: str
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    permissions: List[PermissionResponse] = []

    @classmethod
    def from_entity(cls, role: Role, permissions: List[Permission]) -> "RoleResponse":
        return cls(
            id=str(role.id),
            name=role.name,
            description=role.description,
            status=role.status.value,
            created_by=role.created_by,
            created_at=role.created_at,
            updated_at=role.updated_at,
            permissions=[PermissionResponse.from_entity(p) for p in permissions],
        )


class UserRolesResponse(BaseModel):
    """Roles assigned to a user after replacement"""

    user_id: str
    roles: List[str]


def missing_ids(requested: List[UUID], found: List[UUID]) -> List[UUID]:
    """IDs from requested that are not in found, in request order"""
    found_set = set(found)
    return [item for item in requested if item not in found_set]
