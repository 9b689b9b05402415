"""
Authentication Use Cases

Signup, signin and the forgot-password flow.
"""

from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    ConfirmPasswordResetResponse,
    CurrentUserResponse,
    RequestPasswordResetResponse,
    SigninResponse,
    SignoutResponse,
    SignupResponse,
    UserInfo,
    ValidateResetTokenResponse,
)
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .signin_use_case import SigninUseCase
from .signout_use_case import SignoutUseCase
from .signup_dto import SignupCommand
from .signup_use_case import SignupUseCase
from .validate_reset_token_use_case import ValidateResetTokenUseCase

__all__ = [
    "SignupUseCase",
    "SignupCommand",
    "SignupResponse",
    "SigninUseCase",
    "SigninResponse",
    "SignoutUseCase",
    "SignoutResponse",
    "UserInfo",
    "RequestPasswordResetUseCase",
    "RequestPasswordResetResponse",
    "ValidateResetTokenUseCase",
    "ValidateResetTokenResponse",
    "ConfirmPasswordResetUseCase",
    "ConfirmPasswordResetResponse",
    "CurrentUserResponse",
]
