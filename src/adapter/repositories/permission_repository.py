from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.permission_repository import IPermissionRepository
from src.domain.entities import Permission, RolePermission


class PermissionRepository(IPermissionRepository):
    """Permission repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, permission_id: UUID) -> Optional[Permission]:
        stmt = select(Permission).where(Permission.id == permission_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_code(self, code: str) -> Optional[Permission]:
        stmt = select(Permission).where(Permission.code == code)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_ids(self, permission_ids: List[UUID]) -> List[Permission]:
        if not permission_ids:
            return []
        stmt = select(Permission).where(col(Permission.id).in_(permission_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_role_ids(self, role_ids: List[UUID]) -> List[Permission]:
        if not role_ids:
            return []
        stmt = (
            select(Permission)
            .join(RolePermission, col(RolePermission.permission_id) == col(Permission.id))
            .where(col(RolePermission.role_id).in_(role_ids))
            .distinct()
            .order_by(col(Permission.code))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_all(self, module: Optional[str] = None) -> List[Permission]:
        stmt = select(Permission)
        if module is not None:
            stmt = stmt.where(Permission.module == module)
        stmt = stmt.order_by(col(Permission.code))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, permission: Permission) -> Permission:
        self.session.add(permission)
        await self.session.flush()
        await self.session.refresh(permission)
        return permission
