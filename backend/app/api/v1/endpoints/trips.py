"""
Trip Dispatcher API Endpoints.

Creating a trip checks cargo against vehicle capacity and keeps the
vehicle status in step with the trip lifecycle.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
from datetime import date
from backend.app.db.session import get_db
from backend.app.models.trip import Trip
from backend.app.models.vehicle import Vehicle
from backend.app.models.driver import Driver
from backend.app.models.fleet_enums import TripStatus, VehicleStatus, DriverStatus
from backend.app.schemas.trip import TripCreate, TripUpdate, TripResponse, TripData, TripListData
from backend.app.schemas.common import ApiResponse, ok
from backend.app.core.dependencies import CurrentOfficer
from backend.app.core.exceptions import ValidationError, ResourceNotFoundError
from backend.app.core.guards import require_permission
from backend.app.core.permissions import Permission
from backend.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/trips", tags=["Trips"])

# Allowed trip status transitions
TRIP_TRANSITIONS = {
    TripStatus.DRAFT: {TripStatus.DISPATCHED, TripStatus.CANCELLED},
    TripStatus.DISPATCHED: {TripStatus.COMPLETED, TripStatus.CANCELLED},
    TripStatus.COMPLETED: set(),
    TripStatus.CANCELLED: set(),
}


def _ensure_trip_can_run(vehicle: Vehicle, driver: Driver, cargo_weight: float) -> None:
    """Checks shared by trip creation and dispatch of a draft."""
    if vehicle.status != VehicleStatus.AVAILABLE:
        raise ValidationError(f"Vehicle is not available (status: {vehicle.status.value})")

    if cargo_weight > vehicle.max_capacity:
        raise ValidationError(
            "Cargo weight exceeds vehicle capacity",
            details={"cargo_weight": cargo_weight, "max_capacity": vehicle.max_capacity}
        )

    if driver.status != DriverStatus.ON_DUTY:
        raise ValidationError("Driver is not on duty")

    if driver.license_expiry < date.today():
        raise ValidationError("Driver license has expired")


@router.get("", response_model=ApiResponse[TripListData])
async def list_trips(
    trip_status: Optional[TripStatus] = Query(None, alias="status", description="Filter by status"),
    current: CurrentOfficer = Depends(require_permission(Permission.VIEW_TRIPS)),
    db: AsyncSession = Depends(get_db)
):
    query = select(Trip)
    if trip_status:
        query = query.where(Trip.status == trip_status)
    result = await db.execute(query.order_by(Trip.created_at.desc(), Trip.id.desc()))
    trips = result.scalars().all()
    return ok(
        "Trips fetched",
        TripListData(trips=[TripResponse.model_validate(t) for t in trips], total=len(trips))
    )


@router.post("", response_model=ApiResponse[TripData], status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current: CurrentOfficer = Depends(require_permission(Permission.CREATE_TRIP)),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a trip.

    Rules:
    - Vehicle and driver must exist.
    - Vehicle must be Available and able to carry the cargo.
    - Driver must be on duty with an unexpired license.
    - Only draft or dispatched are valid initial statuses.
    """
    vehicle = (await db.execute(select(Vehicle).where(Vehicle.id == trip_data.vehicle_id))).scalar_one_or_none()
    if not vehicle:
        raise ResourceNotFoundError("Vehicle", trip_data.vehicle_id)

    driver = (await db.execute(select(Driver).where(Driver.id == trip_data.driver_id))).scalar_one_or_none()
    if not driver:
        raise ResourceNotFoundError("Driver", trip_data.driver_id)

    if trip_data.status not in (TripStatus.DRAFT, TripStatus.DISPATCHED):
        raise ValidationError("A new trip must start as draft or dispatched")

    _ensure_trip_can_run(vehicle, driver, trip_data.cargo_weight)

    trip = Trip(
        vehicle_id=vehicle.id,
        driver_id=driver.id,
        created_by=current.id,
        origin=trip_data.origin,
        destination=trip_data.destination,
        cargo_weight=trip_data.cargo_weight,
        distance=trip_data.distance,
        revenue=trip_data.revenue or 0.0,
        status=trip_data.status,
    )
    db.add(trip)

    if trip.status == TripStatus.DISPATCHED:
        vehicle.status = VehicleStatus.ON_TRIP

    await db.commit()
    await db.refresh(trip)

    await log_event(
        db=db,
        action=AuditAction.TRIP_CREATED,
        actor_id=current.id,
        metadata={"trip_id": trip.id, "vehicle_id": vehicle.id, "driver_id": driver.id}
    )

    return ok("Trip created successfully", {"trip": TripResponse.model_validate(trip)})


@router.put("/{trip_id}", response_model=ApiResponse[TripData])
async def update_trip(
    trip_data: TripUpdate,
    trip_id: int = Path(..., description="Trip ID"),
    current: CurrentOfficer = Depends(require_permission(Permission.EDIT_TRIP)),
    db: AsyncSession = Depends(get_db)
):
    """Advance a trip (draft -> dispatched -> completed, or cancel) and record distance/revenue."""
    trip = (await db.execute(select(Trip).where(Trip.id == trip_id))).scalar_one_or_none()
    if not trip:
        raise ResourceNotFoundError("Trip", trip_id)

    previous = trip.status
    if trip_data.status and trip_data.status != trip.status:
        if trip_data.status not in TRIP_TRANSITIONS[trip.status]:
            raise ValidationError(
                f"Cannot move trip from {trip.status.value} to {trip_data.status.value}"
            )
        vehicle = (await db.execute(select(Vehicle).where(Vehicle.id == trip.vehicle_id))).scalar_one()

        if trip_data.status == TripStatus.DISPATCHED:
            # The vehicle may have been taken or sent to the shop since the draft was saved
            driver = (await db.execute(select(Driver).where(Driver.id == trip.driver_id))).scalar_one()
            _ensure_trip_can_run(vehicle, driver, trip.cargo_weight)
            vehicle.status = VehicleStatus.ON_TRIP
        elif previous == TripStatus.DISPATCHED and vehicle.status == VehicleStatus.ON_TRIP:
            vehicle.status = VehicleStatus.AVAILABLE

        trip.status = trip_data.status

    if trip_data.distance is not None:
        trip.distance = trip_data.distance
    if trip_data.revenue is not None:
        trip.revenue = trip_data.revenue

    await db.commit()
    await db.refresh(trip)

    await log_event(
        db=db,
        action=AuditAction.TRIP_UPDATED,
        actor_id=current.id,
        metadata={"trip_id": trip.id, "status": [previous.value, trip.status.value]}
    )

    return ok("Trip updated successfully", {"trip": TripResponse.model_validate(trip)})
