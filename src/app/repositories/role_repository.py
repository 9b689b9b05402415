from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Role


class IRoleRepository(ABC):
    """Role repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        """Get role by ID"""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get role by unique name"""
        pass

    @abstractmethod
    async def get_by_ids(self, role_ids: List[UUID]) -> List[Role]:
        """Get every role whose ID is in role_ids"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[Role]:
        """Get roles assigned to a user"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Role]:
        """List all roles ordered by name"""
        pass

    @abstractmethod
    async def create(self, role: Role) -> Role:
        """Create a new role"""
        pass

    @abstractmethod
    async def update(self, role: Role) -> Role:
        """Update existing role"""
        pass

    @abstractmethod
    async def replace_permissions(self, role_id: UUID, permission_ids: List[UUID]) -> None:
        """Replace the full set of permissions granted by a role"""
        pass
