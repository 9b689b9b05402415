"""
Authentication Gate

Verifies a login/password pair and gates sign-in on account status.
Session and JWT minting are the caller's concern.
"""

import logging
from typing import FrozenSet, List, Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.errors import TRANSIENT_STORE_ERRORS, store_unavailable
from src.app.services.password_hasher import BcryptPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserStatus

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid username or password")


class AuthenticatedPrincipal(BaseModel):
    """Identity, roles and effective permissions of a signed-in account"""

    user_id: UUID
    username: str
    email: str
    is_super_admin: bool = False
    roles: List[str] = []
    permissions: FrozenSet[str] = frozenset()

    @property
    def primary_role(self) -> str:
        return self.roles[0].upper() if self.roles else "USER"


async def load_principal(uow: UnitOfWork, user: User) -> AuthenticatedPrincipal:
    """
    Build the principal for a user from the role/permission store.

    Must run inside an open unit of work. Permissions are the union over
    every assigned role, so a code granted by two roles appears once.
    """
    roles = await uow.roles.get_by_user_id(user.id)
    permissions = await uow.permissions.get_by_role_ids([role.id for role in roles])

    return AuthenticatedPrincipal(
        user_id=user.id,
        username=user.username,
        email=user.email,
        is_super_admin=user.is_super_admin,
        roles=[role.name for role in roles],
        permissions=frozenset(permission.code for permission in permissions),
    )


class AuthenticationGate:
    """
    Business Rules:
    - Login is a username, falling back to email; deleted accounts never match
    - Unknown login and wrong password yield the same INVALID_CREDENTIALS error
    - Password is checked before status, so status is only revealed to
      someone holding the right password
    - Only active accounts may authenticate
    """

    def __init__(self, uow: UnitOfWork, hasher: BcryptPasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def authenticate(self, login: str, password: str) -> Result[AuthenticatedPrincipal]:
        try:
            async with self.uow:
                user = await self._find_account(login)

                if user is None:
                    self.hasher.dummy_verify()
                    return Return.err(INVALID_CREDENTIALS)

                if not self.hasher.verify(password, user.password_hash):
                    return Return.err(INVALID_CREDENTIALS)

                if user.status == UserStatus.blocked:
                    logger.info("Sign-in refused for blocked account %s", user.id)
                    return Return.err(Error("ACCOUNT_BLOCKED", "User account is blocked"))

                if user.status != UserStatus.active:
                    logger.info("Sign-in refused for inactive account %s", user.id)
                    return Return.err(Error("ACCOUNT_INACTIVE", "User account is not active"))

                principal = await load_principal(self.uow, user)
        except TRANSIENT_STORE_ERRORS:
            logger.exception("Identity store unavailable during authentication")
            return Return.err(store_unavailable())

        return Return.ok(principal)

    async def _find_account(self, login: str) -> Optional[User]:
        user = await self.uow.users.get_by_username(login)
        if user is None:
            user = await self.uow.users.get_by_email(login)
        return user
