from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.app.services.password_hasher import BcryptPasswordHasher
from src.app.services.password_policy import StrengthPasswordPolicy
from src.domain.entities import User, UserStatus


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_username = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.exists_by_username = AsyncMock(return_value=False)
    uow.users.exists_by_email = AsyncMock(return_value=False)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.replace_roles = AsyncMock()

    uow.roles = MagicMock()
    uow.roles.get_by_id = AsyncMock(return_value=None)
    uow.roles.get_by_name = AsyncMock(return_value=None)
    uow.roles.get_by_ids = AsyncMock(return_value=[])
    uow.roles.get_by_user_id = AsyncMock(return_value=[])
    uow.roles.list_all = AsyncMock(return_value=[])
    uow.roles.create = AsyncMock(side_effect=lambda role: role)
    uow.roles.update = AsyncMock(side_effect=lambda role: role)
    uow.roles.replace_permissions = AsyncMock()

    uow.permissions = MagicMock()
    uow.permissions.get_by_id = AsyncMock(return_value=None)
    uow.permissions.get_by_code = AsyncMock(return_value=None)
    uow.permissions.get_by_ids = AsyncMock(return_value=[])
    uow.permissions.get_by_role_ids = AsyncMock(return_value=[])
    uow.permissions.list_all = AsyncMock(return_value=[])
    uow.permissions.create = AsyncMock(side_effect=lambda permission: permission)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.exists_by_token_hash = AsyncMock(return_value=False)
    uow.password_reset_tokens.mark_used_if_unused = AsyncMock(return_value=True)
    uow.password_reset_tokens.invalidate_outstanding = AsyncMock(return_value=0)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()
    return uow

@pytest.fixture
def hasher():
    # Minimum bcrypt cost keeps the suite fast
    return BcryptPasswordHasher(rounds=4)

@pytest.fixture
def policy():
    return StrengthPasswordPolicy(min_length=8)

@pytest.fixture
def make_user(hasher):
    def _make_user(password: str = "OldPass123!", **overrides) -> User:
        fields = dict(
            id=uuid4(),
            username="jdoe",
            email="jdoe@school.edu",
            password_hash=hasher.hash(password),
            first_name="Jane",
            last_name="Doe",
            status=UserStatus.active,
            is_super_admin=False,
            is_deleted=False,
        )
        fields.update(overrides)
        return User(**fields)

    return _make_user
