from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        stmt = select(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def exists_by_token_hash(self, token_hash: str) -> bool:
        stmt = select(PasswordResetToken.id).where(PasswordResetToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def mark_used_if_unused(self, token_id: UUID, used_at: datetime) -> bool:
        """Flip used in a single conditional UPDATE; the WHERE clause is the guard"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.id == token_id,
                PasswordResetToken.used == False,  # noqa: E712
            )
            .values(used=True, used_at=used_at)
        )
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def invalidate_outstanding(self, user_id: UUID, now: datetime) -> int:
        """Mark every unused, unexpired token of a user as used"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.user_id == user_id,
                PasswordResetToken.used == False,  # noqa: E712
                PasswordResetToken.expires_at > now,
            )
            .values(used=True, used_at=now)
        )
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount
