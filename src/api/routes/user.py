from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, raise_for_store
from src.app.services.authentication_gate import AuthenticatedPrincipal
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import CurrentUserResponse
from src.app.use_cases.users import LoadCurrentUserUseCase
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=CurrentUserResponse)
async def get_me(
    current_user: AuthenticatedPrincipal = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current User

    Returns the profile with roles and permissions read fresh from the store.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT, or the account was deleted
    """
    use_case = LoadCurrentUserUseCase(uow)
    result = await use_case.execute(current_user.user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise_for_store(error)

    return result.value
