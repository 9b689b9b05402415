from datetime import timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.logging_notification_service import LoggingNotificationService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import principal_from_claims, verify_jwt
from src.app.services.authentication_gate import AuthenticatedPrincipal, AuthenticationGate
from src.app.services.notification_service import INotificationService
from src.app.services.password_hasher import BcryptPasswordHasher
from src.app.services.password_policy import PasswordPolicy, StrengthPasswordPolicy
from src.app.services.password_reset_token_manager import (
    PasswordResetSettings,
    PasswordResetTokenManager,
)
from src.app.services.unit_of_work import UnitOfWork

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_password_policy() -> PasswordPolicy:
    return StrengthPasswordPolicy(min_length=ApplicationConfig.PASSWORD_MIN_LENGTH)


def get_password_reset_settings() -> PasswordResetSettings:
    return PasswordResetSettings(
        token_ttl=timedelta(hours=ApplicationConfig.PASSWORD_RESET_TOKEN_TTL_HOURS),
        max_issue_attempts=ApplicationConfig.PASSWORD_RESET_MAX_ISSUE_ATTEMPTS,
        invalidate_outstanding=ApplicationConfig.PASSWORD_RESET_INVALIDATE_OUTSTANDING,
    )


def get_notification_service() -> INotificationService:
    return LoggingNotificationService()


def get_token_manager(
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: BcryptPasswordHasher = Depends(get_password_hasher),
    policy: PasswordPolicy = Depends(get_password_policy),
    settings: PasswordResetSettings = Depends(get_password_reset_settings),
) -> PasswordResetTokenManager:
    return PasswordResetTokenManager(uow, hasher, policy, settings)


def get_authentication_gate(
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: BcryptPasswordHasher = Depends(get_password_hasher),
) -> AuthenticationGate:
    return AuthenticationGate(uow, hasher)


def _principal_or_401(token: str) -> AuthenticatedPrincipal:
    payload = verify_jwt(token)
    principal = principal_from_claims(payload) if payload is not None else None

    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return principal


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AuthenticatedPrincipal:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Principal carried by the token (user id, roles, permissions)

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    return _principal_or_401(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> Optional[AuthenticatedPrincipal]:
    """Like get_current_user, but a missing Authorization header yields None"""
    if credentials is None:
        return None
    return _principal_or_401(credentials.credentials)
