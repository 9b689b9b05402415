"""
Confirm Password Reset Use Case

Redeems a reset token and notifies the account owner of the change.
"""

from libs.result import Result, Return
from src.app.services.notification_service import INotificationService
from src.app.services.password_reset_token_manager import PasswordResetTokenManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ConfirmPasswordResetResponse


class ConfirmPasswordResetUseCase:
    """
    Business Rules:
    - Token consumption and password change happen atomically
    - A "password changed" notice is sent only after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_manager: PasswordResetTokenManager,
        notifier: INotificationService,
    ):
        self.uow = uow
        self.token_manager = token_manager
        self.notifier = notifier

    async def execute(self, token: str, new_password: str) -> Result[ConfirmPasswordResetResponse]:
        async with self.uow:
            consumed = await self.token_manager.consume(token, new_password)
            if consumed.is_err():
                return Return.err(consumed.error)

            email = consumed.value.email
            first_name = consumed.value.first_name

        await self.notifier.send_password_changed(email=email, first_name=first_name)

        return Return.ok(
            ConfirmPasswordResetResponse(
                status="success",
                message="Password has been reset successfully",
            )
        )
