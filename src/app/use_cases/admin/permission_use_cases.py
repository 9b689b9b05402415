"""
Permission Administration Use Cases
"""

import logging
from typing import List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authentication_gate import AuthenticatedPrincipal
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Permission
from .dtos import CreatePermissionCommand, PermissionResponse

logger = logging.getLogger(__name__)


class CreatePermissionUseCase:
    """
    Business Rules:
    - Permission codes are unique and stored upper-case
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: CreatePermissionCommand, actor: AuthenticatedPrincipal
    ) -> Result[PermissionResponse]:
        code = command.code.strip().upper()

        async with self.uow:
            if await self.uow.permissions.get_by_code(code):
                return Return.err(Error("PERMISSION_EXISTS", f"Permission '{code}' already exists"))

            permission = await self.uow.permissions.create(
                Permission(code=code, module=command.module, description=command.description)
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=actor.user_id,
                    action="permission_created",
                    event_metadata={"permission_id": str(permission.id), "code": code},
                )
            )
            await self.uow.commit()

            logger.info("Permission %s created by %s", code, actor.username)
            return Return.ok(PermissionResponse.from_entity(permission))


class ListPermissionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, module: Optional[str] = None) -> Result[List[PermissionResponse]]:
        async with self.uow:
            permissions = await self.uow.permissions.list_all(module=module)
            return Return.ok([PermissionResponse.from_entity(p) for p in permissions])


class GetPermissionUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, permission_id: UUID) -> Result[PermissionResponse]:
        async with self.uow:
            permission = await self.uow.permissions.get_by_id(permission_id)
            if not permission:
                return Return.err(Error("PERMISSION_NOT_FOUND", "Permission not found"))
            return Return.ok(PermissionResponse.from_entity(permission))
