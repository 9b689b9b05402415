from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User, UserRole


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get non-deleted user by ID"""
        stmt = select(User).where(User.id == user_id, User.is_deleted == False)  # noqa: E712
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get non-deleted user by username"""
        stmt = select(User).where(User.username == username, User.is_deleted == False)  # noqa: E712
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get non-deleted user by email address"""
        stmt = select(User).where(User.email == email, User.is_deleted == False)  # noqa: E712
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def exists_by_username(self, username: str) -> bool:
        stmt = select(User.id).where(User.username == username)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def replace_roles(self, user_id: UUID, role_ids: List[UUID]) -> None:
        """Replace the full set of roles assigned to a user"""
        await self.session.exec(delete(UserRole).where(UserRole.user_id == user_id))
        for role_id in role_ids:
            self.session.add(UserRole(user_id=user_id, role_id=role_id))
        await self.session.flush()
