from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.repositories.permission_repository import IPermissionRepository
from src.app.repositories.role_repository import IRoleRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management

    Usage is always ``async with uow: ... await uow.commit()``; leaving the
    outermost block rolls back whatever was not committed. Nested blocks
    join the outer transaction.
    """

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    roles: IRoleRepository
    permissions: IPermissionRepository
    password_reset_tokens: IPasswordResetTokenRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
