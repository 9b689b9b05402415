from typing import List, Optional
from uuid import UUID

from sqlmodel import col, delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.role_repository import IRoleRepository
from src.domain.entities import Role, RolePermission, UserRole


class RoleRepository(IRoleRepository):
    """Role repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        stmt = select(Role).where(Role.id == role_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_name(self, name: str) -> Optional[Role]:
        stmt = select(Role).where(Role.name == name)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_ids(self, role_ids: List[UUID]) -> List[Role]:
        if not role_ids:
            return []
        stmt = select(Role).where(col(Role.id).in_(role_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_user_id(self, user_id: UUID) -> List[Role]:
        stmt = (
            select(Role)
            .join(UserRole, col(UserRole.role_id) == col(Role.id))
            .where(UserRole.user_id == user_id)
            .order_by(col(Role.name))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_all(self) -> List[Role]:
        stmt = select(Role).order_by(col(Role.name))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, role: Role) -> Role:
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def update(self, role: Role) -> Role:
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def replace_permissions(self, role_id: UUID, permission_ids: List[UUID]) -> None:
        await self.session.exec(delete(RolePermission).where(RolePermission.role_id == role_id))
        for permission_id in permission_ids:
            self.session.add(RolePermission(role_id=role_id, permission_id=permission_id))
        await self.session.flush()
