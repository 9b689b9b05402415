"""
Request Password Reset Use Case

Starts the forgot-password flow: issues a reset token and hands the reset
link to the notification service.
"""

import logging

from libs.result import Result, Return
from src.app.services.errors import TRANSIENT_STORE_ERRORS, store_unavailable
from src.app.services.notification_service import INotificationService
from src.app.services.password_reset_token_manager import PasswordResetTokenManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If the email exists, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Business Rules:
    - Lookup is by email among non-deleted accounts
    - Unknown email reports the same success as a known one
    - Plaintext token only leaves through the reset link
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_manager: PasswordResetTokenManager,
        notifier: INotificationService,
        reset_url_template: str,
    ):
        self.uow = uow
        self.token_manager = token_manager
        self.notifier = notifier
        self.reset_url_template = reset_url_template

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        accepted = RequestPasswordResetResponse(status="accepted", message=RESET_REQUESTED_MESSAGE)

        try:
            async with self.uow:
                user = await self.uow.users.get_by_email(email)
                if user is None:
                    logger.info("Password reset requested for unknown email")
                    return Return.ok(accepted)

                issued = await self.token_manager.issue(user)
                if issued.is_err():
                    if issued.error.code == "USER_NOT_FOUND":
                        return Return.ok(accepted)
                    return Return.err(issued.error)

                email_address = user.email
                first_name = user.first_name
        except TRANSIENT_STORE_ERRORS:
            logger.exception("Identity store unavailable while requesting password reset")
            return Return.err(store_unavailable())

        reset_link = self.reset_url_template.format(token=issued.value.token)
        await self.notifier.send_password_reset(
            email=email_address,
            first_name=first_name,
            reset_link=reset_link,
            expires_at=issued.value.record.expires_at,
        )

        return Return.ok(accepted)
