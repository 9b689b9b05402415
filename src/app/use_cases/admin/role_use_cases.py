"""
Role Administration Use Cases

Create, read and re-permission roles.
"""

import logging
from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authentication_gate import AuthenticatedPrincipal
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, Role, RoleStatus
from .dtos import CreateRoleCommand, RoleResponse, missing_ids

logger = logging.getLogger(__name__)


def _role_not_found() -> Error:
    return Error("ROLE_NOT_FOUND", "Role not found")


class CreateRoleUseCase:
    """
    Business Rules:
    - Role names are unique
    - New roles start active with no permissions
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateRoleCommand, actor: AuthenticatedPrincipal) -> Result[RoleResponse]:
        async with self.uow:
            if await self.uow.roles.get_by_name(command.name):
                return Return.err(Error("ROLE_EXISTS", f"Role '{command.name}' already exists"))

            role = await self.uow.roles.create(
                Role(
                    name=command.name,
                    description=command.description,
                    status=RoleStatus.active,
                    created_by=actor.username,
                )
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=actor.user_id,
                    action="role_created",
                    event_metadata={"role_id": str(role.id), "name": role.name},
                )
            )
            await self.uow.commit()

            logger.info("Role %s created by %s", role.name, actor.username)
            return Return.ok(RoleResponse.from_entity(role, []))


class ListRolesUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[RoleResponse]]:
        async with self.uow:
            roles = await self.uow.roles.list_all()
            responses = []
            for role in roles:
                permissions = await self.uow.permissions.get_by_role_ids([role.id])
                responses.append(RoleResponse.from_entity(role, permissions))
            return Return.ok(responses)


class GetRoleUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: UUID) -> Result[RoleResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if not role:
                return Return.err(_role_not_found())

            permissions = await self.uow.permissions.get_by_role_ids([role.id])
            return Return.ok(RoleResponse.from_entity(role, permissions))


class AssignPermissionsUseCase:
    """
    Replace the permissions a role grants.

    Business Rules:
    - The role and every requested permission must exist
    - The new set replaces the old one entirely; an empty list clears it
    - Holders of the role see the change on their next sign-in or /me call
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, role_id: UUID, permission_ids: List[UUID], actor: AuthenticatedPrincipal
    ) -> Result[RoleResponse]:
        requested = list(dict.fromkeys(permission_ids))

        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if not role:
                return Return.err(_role_not_found())

            permissions = await self.uow.permissions.get_by_ids(requested)
            unknown = missing_ids(requested, [p.id for p in permissions])
            if unknown:
                return Return.err(Error("PERMISSION_NOT_FOUND", f"Permission not found: {unknown[0]}"))

            await self.uow.roles.replace_permissions(role.id, requested)
            role.updated_at = utcnow()
            role = await self.uow.roles.update(role)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=actor.user_id,
                    action="role_permissions_assigned",
                    event_metadata={
                        "role_id": str(role.id),
                        "permission_ids": [str(item) for item in requested],
                    },
                )
            )
            await self.uow.commit()

            granted = await self.uow.permissions.get_by_role_ids([role.id])
            return Return.ok(RoleResponse.from_entity(role, granted))
