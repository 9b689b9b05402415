"""
Identity Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    inactive = "inactive"
    blocked = "blocked"


class RoleStatus(str, Enum):
    """Role status"""

    active = "active"
    inactive = "inactive"
