from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer

    Lookups by username or email only see non-deleted accounts.
    """

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get non-deleted user by ID"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get non-deleted user by username"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get non-deleted user by email address"""
        pass

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        """Check whether any account, deleted or not, holds this username"""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check whether any account, deleted or not, holds this email"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def replace_roles(self, user_id: UUID, role_ids: List[UUID]) -> None:
        """Replace the full set of roles assigned to a user"""
        pass
