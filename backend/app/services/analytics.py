"""
Analytics Service.

Handles data aggregation for dashboards.
Focused on READ-ONLY operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Dict, List

from backend.app.models.vehicle import Vehicle
from backend.app.models.trip import Trip
from backend.app.models.fuel_log import FuelLog
from backend.app.models.maintenance_log import MaintenanceLog
from backend.app.models.fleet_enums import VehicleStatus, TripStatus
from backend.app.schemas.analytics import DashboardKpis, VehicleOperationalStats


def calculate_roi(revenue: float, fuel_cost: float, maintenance_cost: float, acquisition_cost: float):
    """
    ROI = (revenue - (fuel + maintenance)) / acquisition cost.

    Returns None when the acquisition cost is zero or unknown.
    """
    if not acquisition_cost:
        return None
    return round((revenue - (fuel_cost + maintenance_cost)) / acquisition_cost, 4)


class AnalyticsService:

    @staticmethod
    async def get_dashboard_kpis(db: AsyncSession) -> DashboardKpis:
        """Vehicle and trip counts for the dashboard."""

        # 1. Vehicles grouped by status
        rows = (await db.execute(
            select(Vehicle.status, func.count(Vehicle.id)).group_by(Vehicle.status)
        )).all()
        by_status: Dict[VehicleStatus, int] = {status: count for status, count in rows}

        on_trip = by_status.get(VehicleStatus.ON_TRIP, 0)
        in_shop = by_status.get(VehicleStatus.IN_SHOP, 0)
        available = by_status.get(VehicleStatus.AVAILABLE, 0)
        total = sum(by_status.values())
        in_service = total - by_status.get(VehicleStatus.RETIRED, 0)

        # 2. Trips waiting for dispatch / on the road
        pending_trips = (await db.execute(
            select(func.count(Trip.id)).where(Trip.status == TripStatus.DRAFT)
        )).scalar() or 0
        active_trips = (await db.execute(
            select(func.count(Trip.id)).where(Trip.status == TripStatus.DISPATCHED)
        )).scalar() or 0

        utilization = round(on_trip / in_service * 100, 2) if in_service else 0.0

        return DashboardKpis(
            active_fleet=on_trip,
            in_shop=in_shop,
            available=available,
            total_vehicles=total,
            utilization_rate=utilization,
            pending_trips=pending_trips,
            active_trips=active_trips,
        )

    @staticmethod
    async def get_vehicle_operational_stats(db: AsyncSession) -> List[VehicleOperationalStats]:
        """Get cost and revenue breakdown by vehicle."""
        vehicles = (await db.execute(select(Vehicle).order_by(Vehicle.id))).scalars().all()

        trip_rows = (await db.execute(
            select(
                Trip.vehicle_id,
                func.count(Trip.id),
                func.coalesce(func.sum(Trip.distance), 0.0),
                func.coalesce(func.sum(Trip.revenue), 0.0),
            )
            .where(Trip.status == TripStatus.COMPLETED)
            .group_by(Trip.vehicle_id)
        )).all()
        trips_by_vehicle = {row[0]: row[1:] for row in trip_rows}

        fuel_rows = (await db.execute(
            select(FuelLog.vehicle_id, func.sum(FuelLog.cost)).group_by(FuelLog.vehicle_id)
        )).all()
        fuel_by_vehicle = dict(fuel_rows)

        maintenance_rows = (await db.execute(
            select(MaintenanceLog.vehicle_id, func.sum(MaintenanceLog.cost)).group_by(MaintenanceLog.vehicle_id)
        )).all()
        maintenance_by_vehicle = dict(maintenance_rows)

        stats = []
        for vehicle in vehicles:
            trip_count, distance, revenue = trips_by_vehicle.get(vehicle.id, (0, 0.0, 0.0))
            fuel_cost = float(fuel_by_vehicle.get(vehicle.id) or 0.0)
            maintenance_cost = float(maintenance_by_vehicle.get(vehicle.id) or 0.0)

            stats.append(VehicleOperationalStats(
                vehicle_id=vehicle.id,
                name=vehicle.name,
                license_plate=vehicle.license_plate,
                total_trips=trip_count,
                total_distance=float(distance),
                total_revenue=float(revenue),
                fuel_cost=fuel_cost,
                maintenance_cost=maintenance_cost,
                operational_cost=fuel_cost + maintenance_cost,
                roi=calculate_roi(float(revenue), fuel_cost, maintenance_cost, vehicle.acquisition_cost),
            ))

        return stats
