from datetime import UTC, datetime, timedelta
from typing import Optional, Tuple
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig
from src.app.services.authentication_gate import AuthenticatedPrincipal


def generate_jwt(principal: AuthenticatedPrincipal) -> Tuple[str, int]:
    """
    Generate JWT access token

    Args:
        principal: Authenticated user with roles and permissions

    Returns:
        (token, expires_in seconds)
    """
    now = datetime.now(UTC)
    expires_in = ApplicationConfig.JWT_EXPIRATION_MINUTES * 60
    payload = {
        "sub": principal.username,
        "user_id": str(principal.user_id),
        "username": principal.username,
        "email": principal.email,
        "role": principal.primary_role,
        "roles": principal.roles,
        "permissions": sorted(principal.permissions),
        "is_super_admin": principal.is_super_admin,
        "exp": now + timedelta(seconds=expires_in),
        "iat": now,
    }
    token = jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM)
    return token, expires_in


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=[ApplicationConfig.JWT_ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def principal_from_claims(payload: dict) -> Optional[AuthenticatedPrincipal]:
    """Rebuild the principal carried by a decoded token, None if claims are malformed"""
    try:
        return AuthenticatedPrincipal(
            user_id=UUID(payload["user_id"]),
            username=payload["username"],
            email=payload["email"],
            is_super_admin=bool(payload.get("is_super_admin", False)),
            roles=list(payload.get("roles", [])),
            permissions=frozenset(payload.get("permissions", [])),
        )
    except (KeyError, TypeError, ValueError):
        return None
