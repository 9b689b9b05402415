"""
Unit tests for role and permission administration use cases
"""
from uuid import uuid4

import pytest

from src.app.services.authentication_gate import AuthenticatedPrincipal
from src.app.use_cases.admin import (
    AssignPermissionsUseCase,
    AssignRolesUseCase,
    CreatePermissionUseCase,
    CreateRoleUseCase,
    GetRoleUseCase,
    ListPermissionsUseCase,
)
from src.app.use_cases.admin.dtos import CreatePermissionCommand, CreateRoleCommand
from src.domain.entities import Permission, Role, RoleStatus


@pytest.fixture
def actor():
    return AuthenticatedPrincipal(
        user_id=uuid4(),
        username="principal",
        email="principal@school.edu",
        roles=["administrator"],
        permissions=frozenset({"ROLE_MANAGE", "PERMISSION_MANAGE"}),
    )


@pytest.mark.asyncio
async def test_create_role(mock_uow, actor):
    result = await CreateRoleUseCase(mock_uow).execute(
        CreateRoleCommand(name="teacher", description="Teaching staff"), actor
    )

    assert result.is_ok()
    assert result.value.name == "teacher"
    assert result.value.status == "active"
    assert result.value.created_by == "principal"
    assert result.value.permissions == []
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_role_duplicate_name(mock_uow, actor):
    mock_uow.roles.get_by_name.return_value = Role(id=uuid4(), name="teacher")

    result = await CreateRoleUseCase(mock_uow).execute(CreateRoleCommand(name="teacher"), actor)

    assert result.error.code == "ROLE_EXISTS"
    mock_uow.roles.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_role_not_found(mock_uow):
    result = await GetRoleUseCase(mock_uow).execute(uuid4())

    assert result.error.code == "ROLE_NOT_FOUND"


@pytest.mark.asyncio
async def test_create_permission_normalizes_code(mock_uow, actor):
    result = await CreatePermissionUseCase(mock_uow).execute(
        CreatePermissionCommand(code=" grade_view ", module="ACADEMIC"), actor
    )

    assert result.is_ok()
    assert result.value.code == "GRADE_VIEW"
    mock_uow.permissions.get_by_code.assert_awaited_once_with("GRADE_VIEW")


@pytest.mark.asyncio
async def test_create_permission_duplicate(mock_uow, actor):
    mock_uow.permissions.get_by_code.return_value = Permission(id=uuid4(), code="GRADE_VIEW", module="ACADEMIC")

    result = await CreatePermissionUseCase(mock_uow).execute(
        CreatePermissionCommand(code="GRADE_VIEW", module="ACADEMIC"), actor
    )

    assert result.error.code == "PERMISSION_EXISTS"


@pytest.mark.asyncio
async def test_list_permissions_by_module(mock_uow):
    mock_uow.permissions.list_all.return_value = [
        Permission(id=uuid4(), code="GRADE_VIEW", module="ACADEMIC")
    ]

    result = await ListPermissionsUseCase(mock_uow).execute(module="ACADEMIC")

    assert [p.code for p in result.value] == ["GRADE_VIEW"]
    mock_uow.permissions.list_all.assert_awaited_once_with(module="ACADEMIC")


@pytest.mark.asyncio
async def test_assign_permissions_replaces_set(mock_uow, actor):
    # Arrange
    role = Role(id=uuid4(), name="teacher", status=RoleStatus.active)
    view = Permission(id=uuid4(), code="GRADE_VIEW", module="ACADEMIC")
    edit = Permission(id=uuid4(), code="GRADE_EDIT", module="ACADEMIC")
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.permissions.get_by_ids.return_value = [view, edit]
    mock_uow.permissions.get_by_role_ids.return_value = [view, edit]

    # Act
    result = await AssignPermissionsUseCase(mock_uow).execute(role.id, [view.id, edit.id, view.id], actor)

    # Assert
    assert result.is_ok()
    mock_uow.roles.replace_permissions.assert_awaited_once_with(role.id, [view.id, edit.id])
    assert role.updated_at is not None
    assert {p.code for p in result.value.permissions} == {"GRADE_VIEW", "GRADE_EDIT"}


@pytest.mark.asyncio
async def test_assign_permissions_unknown_permission(mock_uow, actor):
    role = Role(id=uuid4(), name="teacher")
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.permissions.get_by_ids.return_value = []

    result = await AssignPermissionsUseCase(mock_uow).execute(role.id, [uuid4()], actor)

    assert result.error.code == "PERMISSION_NOT_FOUND"
    mock_uow.roles.replace_permissions.assert_not_awaited()


@pytest.mark.asyncio
async def test_assign_roles(mock_uow, actor, make_user):
    # Arrange
    user = make_user()
    teacher = Role(id=uuid4(), name="teacher")
    mock_uow.users.get_by_id.return_value = user
    mock_uow.roles.get_by_ids.return_value = [teacher]
    mock_uow.roles.get_by_user_id.return_value = [teacher]

    # Act
    result = await AssignRolesUseCase(mock_uow).execute(user.id, [teacher.id], actor)

    # Assert
    assert result.is_ok()
    assert result.value.roles == ["teacher"]
    mock_uow.users.replace_roles.assert_awaited_once_with(user.id, [teacher.id])
    assert mock_uow.audit_events.create.call_args[0][0].action == "user_roles_assigned"


@pytest.mark.asyncio
async def test_assign_roles_unknown_user(mock_uow, actor):
    result = await AssignRolesUseCase(mock_uow).execute(uuid4(), [uuid4()], actor)

    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_assign_roles_unknown_role(mock_uow, actor, make_user):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    result = await AssignRolesUseCase(mock_uow).execute(user.id, [uuid4()], actor)

    assert result.error.code == "ROLE_NOT_FOUND"
    mock_uow.users.replace_roles.assert_not_awaited()
