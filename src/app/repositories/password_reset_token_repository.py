from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        pass

    @abstractmethod
    async def exists_by_token_hash(self, token_hash: str) -> bool:
        """Check whether a token with this hash was ever issued"""
        pass

    @abstractmethod
    async def mark_used_if_unused(self, token_id: UUID, used_at: datetime) -> bool:
        """
        Atomically flip used from False to True.

        Returns True for exactly one caller per token; every later or
        concurrent caller gets False.
        """
        pass

    @abstractmethod
    async def invalidate_outstanding(self, user_id: UUID, now: datetime) -> int:
        """Mark every unused, unexpired token of a user as used; returns the count"""
        pass
