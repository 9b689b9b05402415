from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authentication_gate import AuthenticatedPrincipal
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent
from .dtos import UserRolesResponse, missing_ids


class AssignRolesUseCase:
    """
    Replace the roles assigned to a user.

    Business Rules:
    - The user must exist and not be deleted
    - Every requested role must exist; inactive roles may still be assigned
    - The new set replaces the old one entirely
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, role_ids: List[UUID], actor: AuthenticatedPrincipal
    ) -> Result[UserRolesResponse]:
        requested = list(dict.fromkeys(role_ids))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            roles = await self.uow.roles.get_by_ids(requested)
            unknown = missing_ids(requested, [role.id for role in roles])
            if unknown:
                return Return.err(Error("ROLE_NOT_FOUND", f"Role not found: {unknown[0]}"))

            await self.uow.users.replace_roles(user.id, requested)
            user.last_modified_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=actor.user_id,
                    action="user_roles_assigned",
                    event_metadata={
                        "target_user_id": str(user.id),
                        "role_ids": [str(item) for item in requested],
                    },
                )
            )
            await self.uow.commit()

            assigned = await self.uow.roles.get_by_user_id(user.id)
            return Return.ok(UserRolesResponse(user_id=str(user.id), roles=[role.name for role in assigned]))
