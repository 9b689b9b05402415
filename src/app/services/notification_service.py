from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class INotificationService(ABC):
    """Outbound account notifications (email delivery lives behind this)"""

    @abstractmethod
    async def send_password_reset(
        self, email: str, first_name: Optional[str], reset_link: str, expires_at: datetime
    ) -> None:
        pass

    @abstractmethod
    async def send_password_changed(self, email: str, first_name: Optional[str]) -> None:
        pass
