"""
Officer roles enumeration.

Defines the role types for the fleet management system.
"""

import enum


class OfficerRole(str, enum.Enum):
    """
    Officer role enumeration.

    Roles:
        FLEET_MANAGER: Oversees fleet operations, holds every permission
        DISPATCHER: Coordinates trips, read-only on vehicles and drivers
        SAFETY_OFFICER: Monitors maintenance, licenses and safety scores
        FINANCIAL_ANALYST: Read-only access to costs and analytics
    """
    FLEET_MANAGER = "fleet_manager"
    DISPATCHER = "dispatcher"
    SAFETY_OFFICER = "safety_officer"
    FINANCIAL_ANALYST = "financial_analyst"
