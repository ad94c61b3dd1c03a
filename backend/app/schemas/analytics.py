"""
Analytics Schemas.
"""

from pydantic import BaseModel
from typing import List, Optional


class DashboardKpis(BaseModel):
    """Headline numbers for the dashboard."""
    active_fleet: int
    in_shop: int
    available: int
    total_vehicles: int
    utilization_rate: float  # percent of non-retired vehicles on a trip
    pending_trips: int
    active_trips: int


class VehicleOperationalStats(BaseModel):
    """Cost and return per vehicle."""
    vehicle_id: int
    name: str
    license_plate: str
    total_trips: int
    total_distance: float
    total_revenue: float
    fuel_cost: float
    maintenance_cost: float
    operational_cost: float
    roi: Optional[float]  # None when acquisition cost is unknown
