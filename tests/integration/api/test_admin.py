"""
Integration tests for role and permission administration
"""
import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from tests.integration.helpers import bearer, create_role_with_permissions, create_user


@pytest.mark.asyncio
async def test_admin_requires_permission(client: AsyncClient, db_session: AsyncSession):
    """
    Given a signed-in user without ROLE_MANAGE
    When they try to create a role
    Then the request is forbidden
    """
    user_id, username = await create_user(db_session)

    response = await client.post(
        "/admin/roles", json={"name": "teacher"}, headers=bearer(username, user_id, ["ROLE_VIEW"])
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_admin_rejects_invalid_token(client: AsyncClient):
    response = await client.get("/admin/roles", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_super_admin_bypasses_permission_checks(client: AsyncClient, db_session: AsyncSession):
    user_id, username = await create_user(db_session, is_super_admin=True)

    response = await client.post(
        "/admin/roles", json={"name": "teacher"}, headers=bearer(username, user_id, is_super_admin=True)
    )

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_role_and_permission_lifecycle(client: AsyncClient, db_session: AsyncSession):
    """
    Given an administrator with role and permission management rights
    When they create a role and a permission and grant one to the other
    Then the role lists the permission and the permission is listed by module
    """
    admin_id, admin_name = await create_user(db_session, username="admin", email="admin@school.edu")
    headers = bearer(admin_name, admin_id, ["ROLE_MANAGE", "ROLE_VIEW", "PERMISSION_MANAGE", "PERMISSION_VIEW"])

    role = await client.post("/admin/roles", json={"name": "teacher", "description": "Staff"}, headers=headers)
    permission = await client.post(
        "/admin/permissions", json={"code": "grade_view", "module": "ACADEMIC"}, headers=headers
    )
    assert role.status_code == 201
    assert permission.status_code == 201
    assert permission.json()["code"] == "GRADE_VIEW"
    role_id = role.json()["id"]
    permission_id = permission.json()["id"]

    duplicate = await client.post("/admin/roles", json={"name": "teacher"}, headers=headers)
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "ROLE_EXISTS"

    assigned = await client.post(
        f"/admin/roles/{role_id}/permissions", json={"permission_ids": [permission_id]}, headers=headers
    )
    assert assigned.status_code == 200
    assert [p["code"] for p in assigned.json()["permissions"]] == ["GRADE_VIEW"]

    fetched = await client.get(f"/admin/roles/{role_id}", headers=headers)
    assert fetched.json()["permissions"][0]["id"] == permission_id
    assert fetched.json()["updated_at"] is not None

    by_module = await client.get("/admin/permissions/module/ACADEMIC", headers=headers)
    other_module = await client.get("/admin/permissions/module/FINANCE", headers=headers)
    assert [p["code"] for p in by_module.json()] == ["GRADE_VIEW"]
    assert other_module.json() == []

    single = await client.get(f"/admin/permissions/{permission_id}", headers=headers)
    assert single.status_code == 200

    listed = await client.get("/admin/roles", headers=headers)
    assert [r["name"] for r in listed.json()] == ["teacher"]


@pytest.mark.asyncio
async def test_unknown_ids_are_not_found(client: AsyncClient, db_session: AsyncSession):
    admin_id, admin_name = await create_user(db_session, username="admin", email="admin@school.edu")
    headers = bearer(admin_name, admin_id, ["ROLE_MANAGE", "PERMISSION_VIEW"])
    missing = "00000000-0000-0000-0000-000000000000"

    role = await client.get(f"/admin/roles/{missing}", headers=headers)
    permission = await client.get(f"/admin/permissions/{missing}", headers=headers)
    grant = await client.post(f"/admin/roles/{missing}/permissions", json={"permission_ids": []}, headers=headers)

    assert role.status_code == 404
    assert permission.status_code == 404
    assert grant.json()["error"]["code"] == "ROLE_NOT_FOUND"


@pytest.mark.asyncio
async def test_role_change_visible_without_new_signin(client: AsyncClient, db_session: AsyncSession):
    """
    Given a signed-in student with no roles
    When an administrator assigns them a role
    Then /me shows the role's permissions on the same token
    """
    admin_id, admin_name = await create_user(db_session, username="admin", email="admin@school.edu")
    await create_user(db_session, username="student", email="student@school.edu")
    role_id = await create_role_with_permissions(db_session, "monitor", ["ATTENDANCE_VIEW"], module="ACADEMIC")

    signin = await client.post("/auth/signin", json={"username": "student", "password": "OldPass123!"})
    student_headers = {"Authorization": f"Bearer {signin.json()['access_token']}"}
    student_id = signin.json()["user"]["id"]

    before = await client.get("/me", headers=student_headers)
    assert before.json()["permissions"] == []

    assigned = await client.post(
        f"/admin/users/{student_id}/roles",
        json={"role_ids": [role_id]},
        headers=bearer(admin_name, admin_id, ["ROLE_MANAGE"]),
    )
    assert assigned.status_code == 200
    assert assigned.json()["roles"] == ["monitor"]

    after = await client.get("/me", headers=student_headers)
    assert after.json()["permissions"] == ["ATTENDANCE_VIEW"]
    assert after.json()["role"] == "MONITOR"
