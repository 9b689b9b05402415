from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Permission


class IPermissionRepository(ABC):
    """Permission repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, permission_id: UUID) -> Optional[Permission]:
        """Get permission by ID"""
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[Permission]:
        """Get permission by unique code"""
        pass

    @abstractmethod
    async def get_by_ids(self, permission_ids: List[UUID]) -> List[Permission]:
        """Get every permission whose ID is in permission_ids"""
        pass

    @abstractmethod
    async def get_by_role_ids(self, role_ids: List[UUID]) -> List[Permission]:
        """Get the distinct permissions granted by any of the given roles"""
        pass

    @abstractmethod
    async def list_all(self, module: Optional[str] = None) -> List[Permission]:
        """List permissions ordered by code, optionally filtered by module"""
        pass

    @abstractmethod
    async def create(self, permission: Permission) -> Permission:
        """Create a new permission"""
        pass
