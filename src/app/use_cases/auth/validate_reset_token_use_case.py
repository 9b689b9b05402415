from libs.result import Result, Return
from src.app.services.password_reset_token_manager import PasswordResetTokenManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ValidateResetTokenResponse


class ValidateResetTokenUseCase:
    """Pre-check a reset token so the client can show the new-password form"""

    def __init__(self, uow: UnitOfWork, token_manager: PasswordResetTokenManager):
        self.uow = uow
        self.token_manager = token_manager

    async def execute(self, token: str) -> Result[ValidateResetTokenResponse]:
        async with self.uow:
            validated = await self.token_manager.validate(token)
            if validated.is_err():
                return Return.err(validated.error)

            return Return.ok(ValidateResetTokenResponse(valid=True, email=validated.value.email))
