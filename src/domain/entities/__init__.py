"""
Identity Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import RoleStatus, UserStatus

# Export all entities
from .user import User
from .role import Role
from .permission import Permission
from .role_assignments import RolePermission, UserRole
from .password_reset_token import PasswordResetToken
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "UserStatus",
    "RoleStatus",
    # Entities
    "User",
    "Role",
    "Permission",
    "UserRole",
    "RolePermission",
    "PasswordResetToken",
    "AuditEvent",
]
