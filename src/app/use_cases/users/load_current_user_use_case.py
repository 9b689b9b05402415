from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authentication_gate import load_principal
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import CurrentUserResponse


class LoadCurrentUserUseCase:
    """
    Use case for loading the signed-in user's profile.

    Business Rules:
    - Roles and permissions are re-read from the store on every call, so
      assignment changes show up without signing in again
    - Deleted accounts are reported as USER_NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[CurrentUserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            principal = await load_principal(self.uow, user)

            return Return.ok(
                CurrentUserResponse(
                    id=str(user.id),
                    username=user.username,
                    email=user.email,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    phone=user.phone,
                    status=user.status.value,
                    is_super_admin=user.is_super_admin,
                    role=principal.primary_role,
                    roles=principal.roles,
                    permissions=sorted(principal.permissions),
                    created_at=user.created_at,
                )
            )
