"""
Signin Use Case

Authenticates a user and mints a bearer token carrying roles and permissions.
"""

import logging

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.authentication_gate import AuthenticationGate
from src.app.services.errors import TRANSIENT_STORE_ERRORS, store_unavailable
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from .dtos import SigninResponse, UserInfo

logger = logging.getLogger(__name__)


class SigninUseCase:
    """
    Use case for user sign-in and JWT issuance.

    Business Rules:
    - Credentials and account status are checked by the AuthenticationGate
    - JWT carries user id, username, roles and permission codes
    - Successful sign-ins are audited
    """

    def __init__(self, uow: UnitOfWork, gate: AuthenticationGate):
        self.uow = uow
        self.gate = gate

    async def execute(self, login: str, password: str) -> Result[SigninResponse]:
        """
        Execute signin use case.

        Args:
            login: Username or email
            password: Plain text password

        Returns:
            Result with SigninResponse, or Error INVALID_CREDENTIALS /
            ACCOUNT_INACTIVE / ACCOUNT_BLOCKED / STORE_UNAVAILABLE
        """

        try:
            async with self.uow:
                authenticated = await self.gate.authenticate(login, password)
                if authenticated.is_err():
                    return Return.err(authenticated.error)
                principal = authenticated.value

                user = await self.uow.users.get_by_id(principal.user_id)
                if user is None:
                    return Return.err(Error("USER_NOT_FOUND", "User not found"))

                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=user.id,
                        action="signin",
                        event_metadata={"username": user.username},
                    )
                )
                await self.uow.commit()

                access_token, expires_in = generate_jwt(principal)

                return Return.ok(
                    SigninResponse(
                        access_token=access_token,
                        expires_in=expires_in,
                        user=UserInfo(
                            id=str(user.id),
                            username=user.username,
                            email=user.email,
                            first_name=user.first_name,
                            last_name=user.last_name,
                            status=user.status.value,
                        ),
                    )
                )
        except TRANSIENT_STORE_ERRORS:
            logger.exception("Identity store unavailable during signin")
            return Return.err(store_unavailable())
