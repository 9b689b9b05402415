"""
Unit tests for SigninUseCase
"""
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from src.api.utils.jwt import verify_jwt
from src.app.services.authentication_gate import AuthenticationGate
from src.app.use_cases.auth import SigninUseCase
from src.domain.entities import Permission, Role, UserStatus


@pytest.mark.asyncio
async def test_signin_returns_token_with_roles_and_permissions(mock_uow, hasher, make_user):
    # Arrange
    user = make_user()
    mock_uow.users.get_by_username.return_value = user
    mock_uow.users.get_by_id.return_value = user
    mock_uow.roles.get_by_user_id.return_value = [Role(id=uuid4(), name="teacher")]
    mock_uow.permissions.get_by_role_ids.return_value = [
        Permission(id=uuid4(), code="GRADE_VIEW", module="ACADEMIC")
    ]
    use_case = SigninUseCase(mock_uow, AuthenticationGate(mock_uow, hasher))

    # Act
    result = await use_case.execute("jdoe", "OldPass123!")

    # Assert
    assert result.is_ok()
    response = result.value
    assert response.token_type == "Bearer"
    assert response.expires_in > 0
    assert response.user.username == "jdoe"

    claims = verify_jwt(response.access_token)
    assert claims["user_id"] == str(user.id)
    assert claims["role"] == "TEACHER"
    assert claims["roles"] == ["teacher"]
    assert claims["permissions"] == ["GRADE_VIEW"]
    assert mock_uow.audit_events.create.call_args[0][0].action == "signin"


@pytest.mark.asyncio
async def test_signin_wrong_password(mock_uow, hasher, make_user):
    mock_uow.users.get_by_username.return_value = make_user()

    result = await SigninUseCase(mock_uow, AuthenticationGate(mock_uow, hasher)).execute(
        "jdoe", "Nope1234!"
    )

    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.audit_events.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_signin_blocked_account(mock_uow, hasher, make_user):
    mock_uow.users.get_by_username.return_value = make_user(status=UserStatus.blocked)

    result = await SigninUseCase(mock_uow, AuthenticationGate(mock_uow, hasher)).execute(
        "jdoe", "OldPass123!"
    )

    assert result.error.code == "ACCOUNT_BLOCKED"


@pytest.mark.asyncio
async def test_signin_store_unreachable_after_authentication(mock_uow, hasher, make_user):
    user = make_user()
    mock_uow.users.get_by_username.return_value = user
    mock_uow.users.get_by_id.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))

    result = await SigninUseCase(mock_uow, AuthenticationGate(mock_uow, hasher)).execute(
        "jdoe", "OldPass123!"
    )

    assert result.is_err()
    assert result.error.code == "STORE_UNAVAILABLE"
    mock_uow.audit_events.create.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()
