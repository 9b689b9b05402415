"""Shared builders for integration tests"""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple
from uuid import UUID

import bcrypt
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.utils.jwt import generate_jwt
from src.app.services.authentication_gate import AuthenticatedPrincipal
from src.app.services.password_reset_token_manager import hash_reset_token
from src.domain.base import utcnow
from src.domain.entities import (
    PasswordResetToken,
    Permission,
    Role,
    RolePermission,
    User,
    UserRole,
    UserStatus,
)

DEFAULT_PASSWORD = "OldPass123!"


async def create_user(
    db_session: AsyncSession,
    username: str = "jdoe",
    email: str = "jdoe@school.edu",
    password: str = DEFAULT_PASSWORD,
    status: UserStatus = UserStatus.active,
    is_super_admin: bool = False,
    is_deleted: bool = False,
) -> Tuple[str, str]:
    """Insert a user and return (user_id, username) as plain values"""
    user = User(
        username=username,
        email=email,
        password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode(),
        first_name="Jane",
        last_name="Doe",
        status=status,
        is_super_admin=is_super_admin,
        is_deleted=is_deleted,
    )
    db_session.add(user)
    await db_session.commit()
    return str(user.id), user.username


async def create_reset_token(
    db_session: AsyncSession,
    user_id: str,
    token: str = "reset-token-123",
    used: bool = False,
    expires_at: Optional[datetime] = None,
) -> str:
    record = PasswordResetToken(
        user_id=UUID(user_id),
        token_hash=hash_reset_token(token),
        used=used,
        expires_at=expires_at or utcnow() + timedelta(hours=24),
    )
    db_session.add(record)
    await db_session.commit()
    return str(record.id)


async def create_role_with_permissions(
    db_session: AsyncSession, name: str, codes: Iterable[str], module: str = "IDENTITY"
) -> str:
    role = Role(name=name)
    db_session.add(role)
    await db_session.flush()
    for code in codes:
        permission = Permission(code=code, module=module)
        db_session.add(permission)
        await db_session.flush()
        db_session.add(RolePermission(role_id=role.id, permission_id=permission.id))
    await db_session.commit()
    return str(role.id)


async def assign_role(db_session: AsyncSession, user_id: str, role_id: str):
    db_session.add(UserRole(user_id=UUID(user_id), role_id=UUID(role_id)))
    await db_session.commit()


def bearer(username: str, user_id: str, permissions: Iterable[str] = (), is_super_admin: bool = False) -> dict:
    principal = AuthenticatedPrincipal(
        user_id=UUID(user_id),
        username=username,
        email=f"{username}@school.edu",
        is_super_admin=is_super_admin,
        permissions=frozenset(permissions),
    )
    token, _ = generate_jwt(principal)
    return {"Authorization": f"Bearer {token}"}
