"""
Admin API Routes - Role and Permission Administration

Authentication is via user JWT; each endpoint requires a permission code.
Super admins pass every check.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, raise_for_store
from src.api.utils.permissions import require_any_permission
from src.app.services.authentication_gate import AuthenticatedPrincipal
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    AssignPermissionsUseCase,
    AssignRolesUseCase,
    CreatePermissionUseCase,
    CreateRoleUseCase,
    GetPermissionUseCase,
    GetRoleUseCase,
    ListPermissionsUseCase,
    ListRolesUseCase,
)
from src.app.use_cases.admin.dtos import (
    CreatePermissionCommand,
    CreateRoleCommand,
    PermissionResponse,
    RoleResponse,
    UserRolesResponse,
)
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])

ROLE_MANAGE = "ROLE_MANAGE"
ROLE_VIEW = "ROLE_VIEW"
PERMISSION_MANAGE = "PERMISSION_MANAGE"
PERMISSION_VIEW = "PERMISSION_VIEW"


def _raise_admin_error(error):
    if error.code in ("ROLE_EXISTS", "PERMISSION_EXISTS"):
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    elif error.code in ("ROLE_NOT_FOUND", "PERMISSION_NOT_FOUND", "USER_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise_for_store(error)


class CreateRoleRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Unique role name")
    description: Optional[str] = Field(None, max_length=500, description="Role description")


class CreatePermissionRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=100, description="Unique permission code")
    module: str = Field(..., min_length=1, max_length=100, description="Module grouping")
    description: Optional[str] = Field(None, max_length=500, description="Permission description")


class AssignPermissionsRequest(BaseModel):
    permission_ids: List[UUID] = Field(..., description="Full set of permissions for the role")


class AssignRolesRequest(BaseModel):
    role_ids: List[UUID] = Field(..., description="Full set of roles for the user")


# ============================================================================
# Roles
# ============================================================================


@router.post("/roles", status_code=status.HTTP_201_CREATED, response_model=RoleResponse)
async def create_role(
    request: CreateRoleRequest,
    actor: AuthenticatedPrincipal = Depends(require_any_permission(ROLE_MANAGE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Role

    Raises:
        - 409 Conflict: Role name already exists
        - 403 Forbidden: Missing ROLE_MANAGE
    """
    use_case = CreateRoleUseCase(uow)
    result = await use_case.execute(
        CreateRoleCommand(name=request.name, description=request.description), actor
    )

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


@router.get(
    "/roles",
    status_code=status.HTTP_200_OK,
    response_model=List[RoleResponse],
    dependencies=[Depends(require_any_permission(ROLE_VIEW, ROLE_MANAGE))],
)
async def list_roles(uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await ListRolesUseCase(uow).execute()

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


@router.get(
    "/roles/{role_id}",
    status_code=status.HTTP_200_OK,
    response_model=RoleResponse,
    dependencies=[Depends(require_any_permission(ROLE_VIEW, ROLE_MANAGE))],
)
async def get_role(role_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await GetRoleUseCase(uow).execute(role_id)

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


@router.post("/roles/{role_id}/permissions", status_code=status.HTTP_200_OK, response_model=RoleResponse)
async def assign_permissions(
    role_id: UUID,
    request: AssignPermissionsRequest,
    actor: AuthenticatedPrincipal = Depends(require_any_permission(ROLE_MANAGE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Replace Role Permissions

    Raises:
        - 404 Not Found: Role or any permission does not exist
    """
    use_case = AssignPermissionsUseCase(uow)
    result = await use_case.execute(role_id, request.permission_ids, actor)

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


@router.post("/users/{user_id}/roles", status_code=status.HTTP_200_OK, response_model=UserRolesResponse)
async def assign_roles(
    user_id: UUID,
    request: AssignRolesRequest,
    actor: AuthenticatedPrincipal = Depends(require_any_permission(ROLE_MANAGE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Replace User Roles

    Raises:
        - 404 Not Found: User or any role does not exist
    """
    use_case = AssignRolesUseCase(uow)
    result = await use_case.execute(user_id, request.role_ids, actor)

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


# ============================================================================
# Permissions
# ============================================================================


@router.post("/permissions", status_code=status.HTTP_201_CREATED, response_model=PermissionResponse)
async def create_permission(
    request: CreatePermissionRequest,
    actor: AuthenticatedPrincipal = Depends(require_any_permission(PERMISSION_MANAGE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Permission

    Raises:
        - 409 Conflict: Permission code already exists
    """
    use_case = CreatePermissionUseCase(uow)
    result = await use_case.execute(
        CreatePermissionCommand(
            code=request.code, module=request.module, description=request.description
        ),
        actor,
    )

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


@router.get(
    "/permissions",
    status_code=status.HTTP_200_OK,
    response_model=List[PermissionResponse],
    dependencies=[Depends(require_any_permission(PERMISSION_VIEW, PERMISSION_MANAGE))],
)
async def list_permissions(uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await ListPermissionsUseCase(uow).execute()

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


@router.get(
    "/permissions/module/{module}",
    status_code=status.HTTP_200_OK,
    response_model=List[PermissionResponse],
    dependencies=[Depends(require_any_permission(PERMISSION_VIEW, PERMISSION_MANAGE))],
)
async def list_permissions_by_module(module: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await ListPermissionsUseCase(uow).execute(module=module)

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


@router.get(
    "/permissions/{permission_id}",
    status_code=status.HTTP_200_OK,
    response_model=PermissionResponse,
    dependencies=[Depends(require_any_permission(PERMISSION_VIEW, PERMISSION_MANAGE))],
)
async def get_permission(permission_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await GetPermissionUseCase(uow).execute(permission_id)

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value
