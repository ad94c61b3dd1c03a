"""
Maintenance Logs API Endpoints.

Opening a log sends the vehicle to the shop; completing the last open
log brings the vehicle back to Available.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from backend.app.db.session import get_db
from backend.app.models.maintenance_log import MaintenanceLog
from backend.app.models.vehicle import Vehicle
from backend.app.models.fleet_enums import MaintenanceStatus, VehicleStatus
from backend.app.schemas.logs import (
    MaintenanceLogCreate, MaintenanceLogUpdate, MaintenanceLogResponse, MaintenanceLogListData
)
from backend.app.schemas.common import ApiResponse, ok
from backend.app.core.dependencies import CurrentOfficer
from backend.app.core.exceptions import ResourceNotFoundError, ValidationError
from backend.app.core.guards import require_permission
from backend.app.core.permissions import Permission

router = APIRouter(prefix="/maintenance-logs", tags=["Maintenance Logs"])


@router.get("", response_model=ApiResponse[MaintenanceLogListData])
async def list_maintenance_logs(
    current: CurrentOfficer = Depends(require_permission(Permission.VIEW_MAINTENANCE)),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(select(MaintenanceLog).order_by(MaintenanceLog.date.desc(), MaintenanceLog.id.desc()))
    logs = result.scalars().all()
    return ok(
        "Maintenance logs fetched",
        MaintenanceLogListData(logs=[MaintenanceLogResponse.model_validate(log) for log in logs], total=len(logs))
    )


@router.post("", response_model=ApiResponse[dict], status_code=status.HTTP_201_CREATED)
async def create_maintenance_log(
    log_data: MaintenanceLogCreate,
    current: CurrentOfficer = Depends(require_permission(Permission.CREATE_MAINTENANCE)),
    db: AsyncSession = Depends(get_db)
):
    vehicle = (await db.execute(select(Vehicle).where(Vehicle.id == log_data.vehicle_id))).scalar_one_or_none()
    if not vehicle:
        raise ResourceNotFoundError("Vehicle", log_data.vehicle_id)

    if vehicle.status == VehicleStatus.ON_TRIP and log_data.status != MaintenanceStatus.COMPLETED:
        raise ValidationError("Vehicle is on a trip and cannot go to the shop")

    log = MaintenanceLog(**log_data.model_dump())
    db.add(log)

    if log.status != MaintenanceStatus.COMPLETED and vehicle.status != VehicleStatus.RETIRED:
        vehicle.status = VehicleStatus.IN_SHOP

    await db.commit()
    await db.refresh(log)

    return ok("Maintenance log created", {"log": MaintenanceLogResponse.model_validate(log)})


@router.put("/{log_id}", response_model=ApiResponse[dict])
async def update_maintenance_log(
    log_data: MaintenanceLogUpdate,
    log_id: int = Path(..., description="Maintenance log ID"),
    current: CurrentOfficer = Depends(require_permission(Permission.EDIT_MAINTENANCE)),
    db: AsyncSession = Depends(get_db)
):
    log = (await db.execute(select(MaintenanceLog).where(MaintenanceLog.id == log_id))).scalar_one_or_none()
    if not log:
        raise ResourceNotFoundError("Maintenance log", log_id)

    changes = log_data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(log, field, value)

    if changes.get("status") == MaintenanceStatus.COMPLETED:
        vehicle = (await db.execute(select(Vehicle).where(Vehicle.id == log.vehicle_id))).scalar_one()
        still_open = (await db.execute(
            select(MaintenanceLog.id).where(
                MaintenanceLog.vehicle_id == log.vehicle_id,
                MaintenanceLog.id != log.id,
                MaintenanceLog.status != MaintenanceStatus.COMPLETED,
            )
        )).first()
        if vehicle.status == VehicleStatus.IN_SHOP and not still_open:
            vehicle.status = VehicleStatus.AVAILABLE

    await db.commit()
    await db.refresh(log)

    return ok("Maintenance log updated", {"log": MaintenanceLogResponse.model_validate(log)})
