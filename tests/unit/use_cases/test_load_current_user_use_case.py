from uuid import uuid4

import pytest

from src.app.use_cases.users import LoadCurrentUserUseCase
from src.domain.entities import Permission, Role


@pytest.mark.asyncio
async def test_load_current_user_reads_fresh_permissions(mock_uow, make_user):
    # Arrange
    user = make_user(phone="555-0100")
    mock_uow.users.get_by_id.return_value = user
    mock_uow.roles.get_by_user_id.return_value = [Role(id=uuid4(), name="counselor")]
    mock_uow.permissions.get_by_role_ids.return_value = [
        Permission(id=uuid4(), code="STUDENT_VIEW", module="ACADEMIC"),
        Permission(id=uuid4(), code="ATTENDANCE_VIEW", module="ACADEMIC"),
    ]

    # Act
    result = await LoadCurrentUserUseCase(mock_uow).execute(user.id)

    # Assert
    assert result.is_ok()
    profile = result.value
    assert profile.username == "jdoe"
    assert profile.phone == "555-0100"
    assert profile.role == "COUNSELOR"
    assert profile.roles == ["counselor"]
    assert profile.permissions == ["ATTENDANCE_VIEW", "STUDENT_VIEW"]


@pytest.mark.asyncio
async def test_load_current_user_deleted(mock_uow):
    result = await LoadCurrentUserUseCase(mock_uow).execute(uuid4())

    assert result.error.code == "USER_NOT_FOUND"
