"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User information in authentication responses"""

    id: str
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: str


class SignupResponse(BaseModel):
    """Response for signup use case"""

    user: UserInfo
    created_at: datetime


class SigninResponse(BaseModel):
    """Response for signin use case"""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserInfo


class RequestPasswordResetResponse(BaseModel):
    """Response for forgot-password use case"""

    status: str
    message: str


class ValidateResetTokenResponse(BaseModel):
    """Response for reset token pre-validation"""

    valid: bool
    email: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for reset-password use case"""

    status: str
    message: str


class CurrentUserResponse(BaseModel):
    """Profile of the signed-in user with freshly resolved permissions"""

    id: str
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    status: str
    is_super_admin: bool
    role: str
    roles: List[str]
    permissions: List[str]
    created_at: datetime


class SignoutResponse(BaseModel):
    """Response for signout use case"""

    status: str
    message: str
