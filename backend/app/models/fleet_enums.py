"""
Fleet-related enumerations.
"""

import enum


class VehicleStatus(str, enum.Enum):
    """Vehicle availability."""
    AVAILABLE = "Available"
    ON_TRIP = "On Trip"
    IN_SHOP = "In Shop"  # Under maintenance
    RETIRED = "Retired"


class DriverStatus(str, enum.Enum):
    """Driver duty status."""
    ON_DUTY = "on_duty"
    OFF_DUTY = "off_duty"
    SUSPENDED = "suspended"


class TripStatus(str, enum.Enum):
    """Trip status enumeration."""
    DRAFT = "draft"  # Created, vehicle not yet committed
    DISPATCHED = "dispatched"  # Vehicle is on the road
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MaintenanceStatus(str, enum.Enum):
    """Maintenance log status."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def enum_values(enum_cls):
    return [member.value for member in enum_cls]
