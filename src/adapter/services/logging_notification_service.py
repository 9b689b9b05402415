import logging
from datetime import datetime
from typing import Optional

from src.app.services.notification_service import INotificationService

logger = logging.getLogger(__name__)


class LoggingNotificationService(INotificationService):
    """
    Simulated email delivery: writes the message to the log.

    Stands in until a mail gateway is wired; the reset link is the only
    place a plaintext reset token is ever written.
    """

    async def send_password_reset(
        self, email: str, first_name: Optional[str], reset_link: str, expires_at: datetime
    ) -> None:
        logger.info(
            "Simulated email to %s: Dear %s, reset your password at %s (expires %s UTC)",
            email,
            first_name or email,
            reset_link,
            expires_at.isoformat(timespec="seconds"),
        )

    async def send_password_changed(self, email: str, first_name: Optional[str]) -> None:
        logger.info(
            "Simulated email to %s: Dear %s, your password has been reset successfully",
            email,
            first_name or email,
        )
