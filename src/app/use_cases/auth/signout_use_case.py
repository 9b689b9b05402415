from typing import Optional

from libs.result import Result, Return
from src.app.services.authentication_gate import AuthenticatedPrincipal
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from .dtos import SignoutResponse


class SignoutUseCase:
    """
    Sign out of a stateless session.

    Tokens are not stored server-side, so signing out only records the
    event; the client discards its token.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Optional[AuthenticatedPrincipal]) -> Result[SignoutResponse]:
        if principal is not None:
            async with self.uow:
                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=principal.user_id,
                        action="signout",
                        event_metadata={"username": principal.username},
                    )
                )
                await self.uow.commit()

        return Return.ok(SignoutResponse(status="success", message="Signed out successfully"))
