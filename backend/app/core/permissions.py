"""
Permission table and permission queries.

The single source of truth for what each role may do. Server guards and the
client session both read from here. All functions are pure.
"""

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Union
from backend.app.core.roles import parse_role
from backend.app.models.enums import OfficerRole


class Permission(str, enum.Enum):
    """Closed set of capabilities a role may hold."""
    VIEW_DASHBOARD = "view_dashboard"
    VIEW_VEHICLES = "view_vehicles"
    VIEW_TRIPS = "view_trips"
    VIEW_DRIVERS = "view_drivers"
    VIEW_MAINTENANCE = "view_maintenance"
    VIEW_FUEL_LOGS = "view_fuel_logs"
    VIEW_ANALYTICS = "view_analytics"

    CREATE_VEHICLE = "create_vehicle"
    EDIT_VEHICLE = "edit_vehicle"
    DELETE_VEHICLE = "delete_vehicle"

    CREATE_TRIP = "create_trip"
    EDIT_TRIP = "edit_trip"
    DELETE_TRIP = "delete_trip"

    CREATE_DRIVER = "create_driver"
    EDIT_DRIVER = "edit_driver"
    DELETE_DRIVER = "delete_driver"

    CREATE_MAINTENANCE = "create_maintenance"
    EDIT_MAINTENANCE = "edit_maintenance"
    DELETE_MAINTENANCE = "delete_maintenance"

    CREATE_FUEL_LOG = "create_fuel_log"
    EDIT_FUEL_LOG = "edit_fuel_log"
    DELETE_FUEL_LOG = "delete_fuel_log"

    MANAGE_CALENDAR = "manage_calendar"
    VIEW_COMPLAINTS = "view_complaints"
    MANAGE_SAFETY_SCORES = "manage_safety_scores"
    VIEW_DRIVER_LICENSE_EXPIRY = "view_driver_license_expiry"
    CALCULATE_ROI = "calculate_roi"


RoleLike = Union[OfficerRole, str, None]
PermissionLike = Union[Permission, str]


ROLE_PERMISSIONS: Dict[OfficerRole, FrozenSet[Permission]] = {
    # Fleet Manager - admin with all rights
    OfficerRole.FLEET_MANAGER: frozenset(Permission),

    # Dispatcher - view-only for vehicles/drivers, can only create trips
    OfficerRole.DISPATCHER: frozenset({
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_VEHICLES,
        Permission.VIEW_TRIPS,
        Permission.VIEW_DRIVERS,
        Permission.CREATE_TRIP,
    }),

    # Safety Officer - maintenance, licenses, complaints, safety scores
    OfficerRole.SAFETY_OFFICER: frozenset({
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_MAINTENANCE,
        Permission.VIEW_DRIVERS,
        Permission.VIEW_VEHICLES,
        Permission.VIEW_DRIVER_LICENSE_EXPIRY,
        Permission.VIEW_COMPLAINTS,
        Permission.MANAGE_SAFETY_SCORES,
    }),

    # Financial Analyst - read-only financial data and analytics
    OfficerRole.FINANCIAL_ANALYST: frozenset({
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_FUEL_LOGS,
        Permission.VIEW_MAINTENANCE,
        Permission.VIEW_ANALYTICS,
        Permission.VIEW_VEHICLES,
        Permission.CALCULATE_ROI,
    }),
}


@dataclass(frozen=True)
class NavItem:
    """Dashboard navigation entry and the permission that reveals it."""
    to: str
    label: str
    icon: str
    permission: Permission


NAV_ITEMS: List[NavItem] = [
    NavItem("/app", "Dashboard", "LayoutDashboard", Permission.VIEW_DASHBOARD),
    NavItem("/app/vehicles", "Vehicles", "Truck", Permission.VIEW_VEHICLES),
    NavItem("/app/trips", "Trips", "Route", Permission.VIEW_TRIPS),
    NavItem("/app/drivers", "Drivers", "Users", Permission.VIEW_DRIVERS),
    NavItem("/app/maintenance", "Maintenance", "Wrench", Permission.VIEW_MAINTENANCE),
    NavItem("/app/fuel", "Fuel Logs", "Fuel", Permission.VIEW_FUEL_LOGS),
    NavItem("/app/analytics", "Analytics", "BarChart3", Permission.VIEW_ANALYTICS),
]


def _parse_permission(permission: PermissionLike) -> Optional[Permission]:
    if isinstance(permission, Permission):
        return permission
    try:
        return Permission(permission)
    except ValueError:
        return None


def get_role_permissions(role: RoleLike) -> FrozenSet[Permission]:
    """
    Get all permissions for a role.

    Unknown or missing roles get an empty set so callers fail closed.
    """
    parsed = parse_role(role)
    if parsed is None:
        return frozenset()
    return ROLE_PERMISSIONS.get(parsed, frozenset())


def has_permission(role: RoleLike, permission: PermissionLike) -> bool:
    """Check if a role holds a specific permission."""
    if not role:
        return False
    parsed = _parse_permission(permission)
    if parsed is None:
        return False
    return parsed in get_role_permissions(role)


def has_any_permission(role: RoleLike, permissions: Iterable[PermissionLike]) -> bool:
    """Check if a role holds at least one of the given permissions."""
    if not role:
        return False
    return any(has_permission(role, p) for p in permissions)


def has_all_permissions(role: RoleLike, permissions: Iterable[PermissionLike]) -> bool:
    """Check if a role holds every one of the given permissions."""
    if not role:
        return False
    return all(has_permission(role, p) for p in permissions)


def is_admin(role: RoleLike) -> bool:
    return parse_role(role) == OfficerRole.FLEET_MANAGER


def navigation_items_for(role: RoleLike) -> List[NavItem]:
    """Navigation entries visible to a role, in NAV_ITEMS order."""
    if not role:
        return []
    return [item for item in NAV_ITEMS if has_permission(role, item.permission)]
