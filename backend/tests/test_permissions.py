"""
Unit tests for the permission table, permission queries and role catalog.
"""

import pytest
from backend.app.core.permissions import (
    Permission,
    ROLE_PERMISSIONS,
    NAV_ITEMS,
    has_permission,
    has_any_permission,
    has_all_permissions,
    get_role_permissions,
    is_admin,
    navigation_items_for,
)
from backend.app.core.roles import format_role, get_role_color, get_all_roles, parse_role, DEFAULT_ROLE_COLOR
from backend.app.models.enums import OfficerRole


DISPATCHER_PERMISSIONS = {
    "view_dashboard", "view_vehicles", "view_trips", "view_drivers", "create_trip",
}
SAFETY_OFFICER_PERMISSIONS = {
    "view_dashboard", "view_maintenance", "view_drivers", "view_vehicles",
    "view_driver_license_expiry", "view_complaints", "manage_safety_scores",
}
FINANCIAL_ANALYST_PERMISSIONS = {
    "view_dashboard", "view_fuel_logs", "view_maintenance", "view_analytics",
    "view_vehicles", "calculate_roi",
}


@pytest.mark.parametrize("role", list(OfficerRole))
@pytest.mark.parametrize("permission", list(Permission))
def test_has_permission_matches_table(role, permission):
    """has_permission is true exactly when the table lists the permission."""
    expected = permission in ROLE_PERMISSIONS[role]
    assert has_permission(role, permission) is expected
    assert has_permission(role.value, permission.value) is expected


def test_every_role_has_a_table_entry():
    assert set(ROLE_PERMISSIONS) == set(OfficerRole)


def test_fleet_manager_holds_everything():
    assert get_role_permissions("fleet_manager") == frozenset(Permission)


@pytest.mark.parametrize("role, expected", [
    ("dispatcher", DISPATCHER_PERMISSIONS),
    ("safety_officer", SAFETY_OFFICER_PERMISSIONS),
    ("financial_analyst", FINANCIAL_ANALYST_PERMISSIONS),
])
def test_restricted_role_permission_sets(role, expected):
    assert {p.value for p in get_role_permissions(role)} == expected


@pytest.mark.parametrize("permission", list(Permission))
def test_missing_or_unknown_role_has_nothing(permission):
    assert has_permission(None, permission) is False
    assert has_permission("", permission) is False
    assert has_permission("unknown_role", permission) is False
    assert has_permission("FLEET_MANAGER", permission) is False


def test_unknown_permission_is_never_held():
    assert has_permission("fleet_manager", "launch_rockets") is False


def test_unknown_role_gets_empty_permission_set():
    assert get_role_permissions("unknown_role") == frozenset()
    assert get_role_permissions(None) == frozenset()


def test_has_any_permission():
    assert has_any_permission("dispatcher", ["create_vehicle", "create_trip"]) is True
    assert has_any_permission("dispatcher", ["create_vehicle", "delete_trip"]) is False
    assert has_any_permission("dispatcher", []) is False
    assert has_any_permission(None, ["view_dashboard"]) is False


def test_has_all_permissions():
    assert has_all_permissions("financial_analyst", ["view_analytics", "calculate_roi"]) is True
    assert has_all_permissions("financial_analyst", ["view_analytics", "create_trip"]) is False
    assert has_all_permissions("financial_analyst", []) is True
    assert has_all_permissions(None, []) is False
    assert has_all_permissions("unknown_role", ["view_dashboard"]) is False


def test_is_admin_only_for_fleet_manager():
    assert is_admin(OfficerRole.FLEET_MANAGER) is True
    assert is_admin("fleet_manager") is True
    for role in ("dispatcher", "safety_officer", "financial_analyst", None, "admin"):
        assert is_admin(role) is False


def test_navigation_preserves_fixed_order():
    assert navigation_items_for("fleet_manager") == NAV_ITEMS

    labels = [item.label for item in navigation_items_for("financial_analyst")]
    assert labels == ["Dashboard", "Vehicles", "Maintenance", "Fuel Logs", "Analytics"]

    labels = [item.label for item in navigation_items_for("dispatcher")]
    assert labels == ["Dashboard", "Vehicles", "Trips", "Drivers"]


def test_navigation_empty_without_role():
    assert navigation_items_for(None) == []
    assert navigation_items_for("unknown_role") == []


def test_role_catalog_display():
    assert format_role("safety_officer") == "Safety Officer"
    assert format_role(OfficerRole.FLEET_MANAGER) == "Fleet Manager"
    assert format_role(None) == "User"
    assert format_role("night_shift_lead") == "Night Shift Lead"

    assert get_role_color("dispatcher").startswith("bg-green-100")
    assert get_role_color("nobody") == DEFAULT_ROLE_COLOR

    assert [r.value for r in get_all_roles()] == list(OfficerRole)


def test_parse_role():
    assert parse_role("dispatcher") is OfficerRole.DISPATCHER
    assert parse_role(OfficerRole.DISPATCHER) is OfficerRole.DISPATCHER
    assert parse_role("Dispatcher") is None
    assert parse_role(None) is None
