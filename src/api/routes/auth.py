from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from libs.result import Error
from src.api.error import ClientError, raise_for_store
from src.app.services.authentication_gate import AuthenticatedPrincipal, AuthenticationGate
from src.app.services.notification_service import INotificationService
from src.app.services.password_hasher import BcryptPasswordHasher
from src.app.services.password_policy import PasswordPolicy
from src.app.services.password_reset_token_manager import PasswordResetTokenManager
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    SigninResponse,
    SigninUseCase,
    SignoutResponse,
    SignoutUseCase,
    SignupCommand,
    SignupResponse,
    SignupUseCase,
    ValidateResetTokenResponse,
    ValidateResetTokenUseCase,
)
from src.depends import (
    get_authentication_gate,
    get_notification_service,
    get_optional_user,
    get_password_hasher,
    get_password_policy,
    get_token_manager,
    get_unit_of_work,
)
from config import ApplicationConfig

router = APIRouter(prefix="/auth", tags=["Authentication"])

# Reset token failures and the status each maps to
TOKEN_ERROR_STATUS = {
    "TOKEN_NOT_FOUND": status.HTTP_400_BAD_REQUEST,
    "USER_NOT_FOUND": status.HTTP_400_BAD_REQUEST,
    "WEAK_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "TOKEN_ALREADY_USED": status.HTTP_409_CONFLICT,
    "TOKEN_EXPIRED": status.HTTP_410_GONE,
}


def _raise_token_error(error: Error):
    if error.code in TOKEN_ERROR_STATUS:
        raise ClientError(error, status_code=TOKEN_ERROR_STATUS[error.code])
    raise_for_store(error)


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    API layer responsibility: HTTP validation and serialization.
    """

    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")
    phone: Optional[str] = Field(None, max_length=20, description="Phone number")


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse)
async def signup(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: BcryptPasswordHasher = Depends(get_password_hasher),
    policy: PasswordPolicy = Depends(get_password_policy),
):
    """
    User Signup

    Creates an active account with no roles.

    Raises:
        - 409 Conflict: Username or email already exists
        - 400 Bad Request: Password does not satisfy the policy
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = SignupCommand(
        username=request.username,
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        phone=request.phone,
    )

    use_case = SignupUseCase(uow, hasher, policy)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("USERNAME_EXISTS", "EMAIL_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "WEAK_PASSWORD":
            raise ClientError(error)
        raise_for_store(error)

    return result.value


class SigninRequest(BaseModel):
    """Signin HTTP request payload"""

    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/signin", status_code=status.HTTP_200_OK, response_model=SigninResponse)
async def signin(
    request: SigninRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    gate: AuthenticationGate = Depends(get_authentication_gate),
):
    """
    User Signin

    Authenticates user and returns a bearer JWT carrying roles and permissions.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account inactive or blocked
    """
    use_case = SigninUseCase(uow, gate)
    result = await use_case.execute(request.username, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("ACCOUNT_INACTIVE", "ACCOUNT_BLOCKED"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise_for_store(error)

    return result.value


@router.post("/signout", status_code=status.HTTP_200_OK, response_model=SignoutResponse)
async def signout(
    principal: Optional[AuthenticatedPrincipal] = Depends(get_optional_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Signout

    Raises:
        - 401 Unauthorized: A bearer token was sent but is invalid or expired
    """
    use_case = SignoutUseCase(uow)
    result = await use_case.execute(principal)

    if result.is_err():
        raise_for_store(result.error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    """Forgot-password HTTP request payload"""

    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/forgot-password", status_code=status.HTTP_200_OK, response_model=RequestPasswordResetResponse
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_manager: PasswordResetTokenManager = Depends(get_token_manager),
    notifier: INotificationService = Depends(get_notification_service),
):
    """
    Request Password Reset

    Issues a reset token and sends the reset link by email. The response is
    identical whether or not the email belongs to an account.

    Raises:
        - 503 Service Unavailable: Identity store unreachable
    """
    use_case = RequestPasswordResetUseCase(
        uow, token_manager, notifier, ApplicationConfig.PASSWORD_RESET_URL
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_store(result.error)

    return result.value


class ValidateResetTokenRequest(BaseModel):
    """Reset token pre-validation payload"""

    token: str = Field(..., min_length=1, description="Password reset token from email")


@router.post(
    "/validate-reset-token", status_code=status.HTTP_200_OK, response_model=ValidateResetTokenResponse
)
async def validate_reset_token(
    request: ValidateResetTokenRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_manager: PasswordResetTokenManager = Depends(get_token_manager),
):
    """
    Validate Password Reset Token

    Raises:
        - 400 Bad Request: Unknown token
        - 409 Conflict: Token already used
        - 410 Gone: Token expired
    """
    use_case = ValidateResetTokenUseCase(uow, token_manager)
    result = await use_case.execute(request.token)

    if result.is_err():
        _raise_token_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    token: str = Field(..., min_length=1, description="Password reset token from email")
    new_password: str = Field(..., description="New password")


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=ConfirmPasswordResetResponse)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_manager: PasswordResetTokenManager = Depends(get_token_manager),
    notifier: INotificationService = Depends(get_notification_service),
):
    """
    Confirm Password Reset

    Consumes the token and replaces the password in one transaction.

    Raises:
        - 400 Bad Request: Unknown token or weak password
        - 409 Conflict: Token already used
        - 410 Gone: Token expired
    """
    use_case = ConfirmPasswordResetUseCase(uow, token_manager, notifier)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        _raise_token_error(result.error)

    return result.value
