"""
Security guards for role-based and permission-based access control.

Provides dependency factories for protecting endpoints. These are the
authoritative checks; any client-side gating is cosmetic.
"""

import logging
from typing import List
from fastapi import Depends
from backend.app.core.dependencies import CurrentOfficer, get_current_officer
from backend.app.core.exceptions import ForbiddenError
from backend.app.core.permissions import (
    PermissionLike,
    has_permission,
    has_any_permission,
)
from backend.app.core.roles import parse_role
from backend.app.models.enums import OfficerRole

logger = logging.getLogger("fleet.access")


def require_role(allowed_roles: List[OfficerRole]):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.get("/auth/officers")
        async def list_officers(
            current: CurrentOfficer = Depends(require_role([OfficerRole.FLEET_MANAGER]))
        ):
            ...

    Args:
        allowed_roles: List of OfficerRole enums that are allowed to access the endpoint

    Returns:
        FastAPI dependency function that validates the officer's role

    Raises:
        ForbiddenError if the role is unknown or not in allowed_roles
    """
    allowed = frozenset(allowed_roles)

    async def role_checker(current: CurrentOfficer = Depends(get_current_officer)) -> CurrentOfficer:
        role = parse_role(current.role)
        if role is None or role not in allowed:
            logger.info("Role gate denied officer %s (role=%s)", current.id, current.role)
            raise ForbiddenError()
        return current

    return role_checker


def require_permission(permission: PermissionLike):
    """
    Dependency factory for permission-based access control.

    Usage:
        @router.post("/vehicles")
        async def create_vehicle(
            current: CurrentOfficer = Depends(require_permission(Permission.CREATE_VEHICLE))
        ):
            ...

    The 403 body never names the missing permission.
    """
    async def permission_checker(current: CurrentOfficer = Depends(get_current_officer)) -> CurrentOfficer:
        if not has_permission(current.role, permission):
            logger.info("Permission gate denied officer %s (role=%s)", current.id, current.role)
            raise ForbiddenError()
        return current

    return permission_checker


def require_any_permission(permissions: List[PermissionLike]):
    """Like require_permission, passing if any one of the permissions is held."""
    async def permission_checker(current: CurrentOfficer = Depends(get_current_officer)) -> CurrentOfficer:
        if not has_any_permission(current.role, permissions):
            logger.info("Permission gate denied officer %s (role=%s)", current.id, current.role)
            raise ForbiddenError()
        return current

    return permission_checker
