"""
Role catalog.

Display metadata for each officer role, shared by the API and the client.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union
from backend.app.models.enums import OfficerRole


@dataclass(frozen=True)
class RoleInfo:
    """Display metadata for a single role."""
    value: OfficerRole
    label: str
    description: str
    color: str


ROLES: Dict[OfficerRole, RoleInfo] = {
    OfficerRole.FLEET_MANAGER: RoleInfo(
        value=OfficerRole.FLEET_MANAGER,
        label="Fleet Manager",
        description="Oversee fleet operations",
        color="bg-blue-100 text-blue-800 border-blue-200",
    ),
    OfficerRole.DISPATCHER: RoleInfo(
        value=OfficerRole.DISPATCHER,
        label="Dispatcher",
        description="Coordinate trips and logistics",
        color="bg-green-100 text-green-800 border-green-200",
    ),
    OfficerRole.SAFETY_OFFICER: RoleInfo(
        value=OfficerRole.SAFETY_OFFICER,
        label="Safety Officer",
        description="Monitor compliance and safety",
        color="bg-orange-100 text-orange-800 border-orange-200",
    ),
    OfficerRole.FINANCIAL_ANALYST: RoleInfo(
        value=OfficerRole.FINANCIAL_ANALYST,
        label="Financial Analyst",
        description="Track costs and analytics",
        color="bg-purple-100 text-purple-800 border-purple-200",
    ),
}

DEFAULT_ROLE_COLOR = "bg-gray-100 text-gray-800 border-gray-200"


def parse_role(role: Union[OfficerRole, str, None]) -> Optional[OfficerRole]:
    """
    Coerce a role value into an OfficerRole.

    Returns None for None or for strings outside the closed enumeration.
    """
    if role is None:
        return None
    if isinstance(role, OfficerRole):
        return role
    try:
        return OfficerRole(role)
    except ValueError:
        return None


def get_role_info(role: Union[OfficerRole, str, None]) -> Optional[RoleInfo]:
    parsed = parse_role(role)
    return ROLES.get(parsed) if parsed else None


def format_role(role: Union[OfficerRole, str, None]) -> str:
    """Human readable label, e.g. 'safety_officer' -> 'Safety Officer'."""
    if not role:
        return "User"

    info = get_role_info(role)
    if info:
        return info.label

    # Unknown roles still render as title case words
    raw = role.value if isinstance(role, OfficerRole) else str(role)
    return " ".join(word.capitalize() for word in raw.split("_"))


def get_role_color(role: Union[OfficerRole, str, None]) -> str:
    info = get_role_info(role)
    return info.color if info else DEFAULT_ROLE_COLOR


def get_all_roles() -> List[RoleInfo]:
    """All catalog entries in declaration order."""
    return list(ROLES.values())
