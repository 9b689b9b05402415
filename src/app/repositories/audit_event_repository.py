from abc import ABC, abstractmethod

from src.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, event: AuditEvent) -> AuditEvent:
        """Append an audit event"""
        pass
