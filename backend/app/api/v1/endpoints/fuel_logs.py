"""
Fuel Logs API Endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
from backend.app.db.session import get_db
from backend.app.models.fuel_log import FuelLog
from backend.app.models.vehicle import Vehicle
from backend.app.models.trip import Trip
from backend.app.schemas.logs import FuelLogCreate, FuelLogResponse, FuelLogListData
from backend.app.schemas.common import ApiResponse, ok
from backend.app.core.dependencies import CurrentOfficer
from backend.app.core.exceptions import ResourceNotFoundError, ValidationError
from backend.app.core.guards import require_permission
from backend.app.core.permissions import Permission

router = APIRouter(prefix="/fuel-logs", tags=["Fuel Logs"])


@router.get("", response_model=ApiResponse[FuelLogListData])
async def list_fuel_logs(
    vehicle_id: Optional[int] = Query(None, description="Filter by vehicle"),
    current: CurrentOfficer = Depends(require_permission(Permission.VIEW_FUEL_LOGS)),
    db: AsyncSession = Depends(get_db)
):
    query = select(FuelLog)
    if vehicle_id is not None:
        query = query.where(FuelLog.vehicle_id == vehicle_id)
    result = await db.execute(query.order_by(FuelLog.date.desc(), FuelLog.id.desc()))
    logs = result.scalars().all()
    return ok(
        "Fuel logs fetched",
        FuelLogListData(logs=[FuelLogResponse.model_validate(log) for log in logs], total=len(logs))
    )


@router.post("", response_model=ApiResponse[dict], status_code=status.HTTP_201_CREATED)
async def create_fuel_log(
    log_data: FuelLogCreate,
    current: CurrentOfficer = Depends(require_permission(Permission.CREATE_FUEL_LOG)),
    db: AsyncSession = Depends(get_db)
):
    """Record a refuel. If a trip is given it must belong to the same vehicle."""
    vehicle = (await db.execute(select(Vehicle).where(Vehicle.id == log_data.vehicle_id))).scalar_one_or_none()
    if not vehicle:
        raise ResourceNotFoundError("Vehicle", log_data.vehicle_id)

    if log_data.trip_id is not None:
        trip = (await db.execute(select(Trip).where(Trip.id == log_data.trip_id))).scalar_one_or_none()
        if not trip:
            raise ResourceNotFoundError("Trip", log_data.trip_id)
        if trip.vehicle_id != vehicle.id:
            raise ValidationError("Trip does not belong to this vehicle")

    log = FuelLog(**log_data.model_dump())
    db.add(log)
    await db.commit()
    await db.refresh(log)

    return ok("Fuel log recorded", {"log": FuelLogResponse.model_validate(log)})
