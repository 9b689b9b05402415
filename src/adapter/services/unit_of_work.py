from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from src.adapter.repositories.permission_repository import PermissionRepository
from src.adapter.repositories.role_repository import RoleRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern

    Re-entrant: a nested ``async with`` joins the outermost transaction and
    only the outermost exit rolls back, so a use case can call services
    that open the same unit of work themselves.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self._depth = 0

    async def __aenter__(self):
        if self._depth == 0:
            # Initialize all repositories with the session
            self.users = UserRepository(self.session)
            self.roles = RoleRepository(self.session)
            self.permissions = PermissionRepository(self.session)
            self.password_reset_tokens = PasswordResetTokenRepository(self.session)
            self.audit_events = AuditEventRepository(self.session)
        self._depth += 1
        return self

    async def __aexit__(self, *args):
        self._depth -= 1
        if self._depth == 0:
            # Discard whatever was not committed, on every exit path
            await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
