from typing import Iterable

from src.app.services.authentication_gate import AuthenticatedPrincipal


class PermissionEvaluator:
    """
    Permission checks over a principal taken from a verified bearer token.

    Super admins pass every check. Codes and role names compare
    case-insensitively.
    """

    def has_permission(self, principal: AuthenticatedPrincipal, permission: str) -> bool:
        if principal.is_super_admin:
            return True
        return permission.upper() in self._codes(principal)

    def has_any_permission(self, principal: AuthenticatedPrincipal, permissions: Iterable[str]) -> bool:
        if principal.is_super_admin:
            return True
        codes = self._codes(principal)
        return any(p.upper() in codes for p in permissions)

    def has_all_permissions(self, principal: AuthenticatedPrincipal, permissions: Iterable[str]) -> bool:
        if principal.is_super_admin:
            return True
        codes = self._codes(principal)
        return all(p.upper() in codes for p in permissions)

    def has_role(self, principal: AuthenticatedPrincipal, role: str) -> bool:
        if principal.is_super_admin:
            return True
        return role.lower() in {r.lower() for r in principal.roles}

    def is_super_admin(self, principal: AuthenticatedPrincipal) -> bool:
        return principal.is_super_admin

    @staticmethod
    def _codes(principal: AuthenticatedPrincipal) -> set:
        return {code.upper() for code in principal.permissions}
