"""
Permission Guards

FastAPI dependencies that gate admin endpoints on permission codes.
"""

import logging

from fastapi import Depends, status

from libs.result import Error
from src.api.error import ClientError
from src.app.services.authentication_gate import AuthenticatedPrincipal
from src.app.services.permission_evaluator import PermissionEvaluator
from src.depends import get_current_user

logger = logging.getLogger(__name__)


def require_any_permission(*codes: str):
    """
    Build a dependency that admits the current user when they hold any of
    the given permission codes. Super admins always pass.

    Raises:
        ClientError: 403 FORBIDDEN otherwise
    """

    async def guard(principal: AuthenticatedPrincipal = Depends(get_current_user)) -> AuthenticatedPrincipal:
        if not PermissionEvaluator().has_any_permission(principal, codes):
            logger.warning("User %s denied, requires one of %s", principal.username, codes)
            raise ClientError(
                Error("FORBIDDEN", "You do not have permission to perform this action"),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return principal

    return guard
