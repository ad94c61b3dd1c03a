"""
Vehicle Registry API Endpoints.

Every route is permission-gated; reads need view_vehicles, writes need the
matching create/edit/delete permission.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from backend.app.db.session import get_db
from backend.app.models.vehicle import Vehicle
from backend.app.models.fleet_enums import VehicleStatus
from backend.app.schemas.vehicle import (
    VehicleCreate, VehicleUpdate, VehicleStatusUpdate, VehicleResponse, VehicleData, VehicleListData
)
from backend.app.schemas.common import ApiResponse, ok
from backend.app.core.dependencies import CurrentOfficer
from backend.app.core.exceptions import ConflictError, ResourceNotFoundError
from backend.app.core.guards import require_permission
from backend.app.core.permissions import Permission
from backend.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


async def _get_vehicle_or_404(db: AsyncSession, vehicle_id: int) -> Vehicle:
    result = await db.execute(select(Vehicle).where(Vehicle.id == vehicle_id))
    vehicle = result.scalar_one_or_none()
    if not vehicle:
        raise ResourceNotFoundError("Vehicle", vehicle_id)
    return vehicle


async def _ensure_plate_free(db: AsyncSession, license_plate: str, exclude_id: int = None):
    query = select(Vehicle.id).where(Vehicle.license_plate == license_plate)
    if exclude_id is not None:
        query = query.where(Vehicle.id != exclude_id)
    if (await db.execute(query)).first():
        raise ConflictError("A vehicle with this license plate already exists")


@router.get("", response_model=ApiResponse[VehicleListData])
async def list_vehicles(
    current: CurrentOfficer = Depends(require_permission(Permission.VIEW_VEHICLES)),
    db: AsyncSession = Depends(get_db)
):
    """List all vehicles, newest first."""
    result = await db.execute(select(Vehicle).order_by(Vehicle.created_at.desc(), Vehicle.id.desc()))
    vehicles = result.scalars().all()
    return ok(
        "Vehicles fetched",
        VehicleListData(vehicles=[VehicleResponse.model_validate(v) for v in vehicles], total=len(vehicles))
    )


@router.get("/available", response_model=ApiResponse[VehicleListData])
async def list_available_vehicles(
    current: CurrentOfficer = Depends(require_permission(Permission.VIEW_VEHICLES)),
    db: AsyncSession = Depends(get_db)
):
    """Vehicles a dispatcher can put on a trip right now, by name."""
    result = await db.execute(
        select(Vehicle).where(Vehicle.status == VehicleStatus.AVAILABLE).order_by(Vehicle.name.asc())
    )
    vehicles = result.scalars().all()
    return ok(
        "Available vehicles fetched",
        VehicleListData(vehicles=[VehicleResponse.model_validate(v) for v in vehicles], total=len(vehicles))
    )


@router.post("", response_model=ApiResponse[VehicleData], status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    current: CurrentOfficer = Depends(require_permission(Permission.CREATE_VEHICLE)),
    db: AsyncSession = Depends(get_db)
):
    """Register a new vehicle."""
    await _ensure_plate_free(db, vehicle_data.license_plate)

    vehicle = Vehicle(**vehicle_data.model_dump())
    db.add(vehicle)
    await db.commit()
    await db.refresh(vehicle)

    await log_event(
        db=db,
        action=AuditAction.VEHICLE_CREATED,
        actor_id=current.id,
        metadata={"vehicle_id": vehicle.id, "license_plate": vehicle.license_plate}
    )

    return ok("Vehicle registered successfully", {"vehicle": VehicleResponse.model_validate(vehicle)})


@router.get("/{vehicle_id}", response_model=ApiResponse[VehicleData])
async def get_vehicle(
    vehicle_id: int = Path(..., description="Vehicle ID"),
    current: CurrentOfficer = Depends(require_permission(Permission.VIEW_VEHICLES)),
    db: AsyncSession = Depends(get_db)
):
    vehicle = await _get_vehicle_or_404(db, vehicle_id)
    return ok("Vehicle fetched", {"vehicle": VehicleResponse.model_validate(vehicle)})


@router.put("/{vehicle_id}", response_model=ApiResponse[VehicleData])
async def update_vehicle(
    vehicle_data: VehicleUpdate,
    vehicle_id: int = Path(..., description="Vehicle ID"),
    current: CurrentOfficer = Depends(require_permission(Permission.EDIT_VEHICLE)),
    db: AsyncSession = Depends(get_db)
):
    """Update vehicle details. Only supplied fields change."""
    vehicle = await _get_vehicle_or_404(db, vehicle_id)

    changes = vehicle_data.model_dump(exclude_unset=True, exclude_none=True)
    if "license_plate" in changes and changes["license_plate"] != vehicle.license_plate:
        await _ensure_plate_free(db, changes["license_plate"], exclude_id=vehicle.id)

    for field, value in changes.items():
        setattr(vehicle, field, value)

    await db.commit()
    await db.refresh(vehicle)

    await log_event(
        db=db,
        action=AuditAction.VEHICLE_UPDATED,
        actor_id=current.id,
        metadata={"vehicle_id": vehicle.id, "fields": sorted(changes)}
    )

    return ok("Vehicle updated successfully", {"vehicle": VehicleResponse.model_validate(vehicle)})


@router.patch("/{vehicle_id}/status", response_model=ApiResponse[VehicleData])
async def update_vehicle_status(
    status_data: VehicleStatusUpdate,
    vehicle_id: int = Path(..., description="Vehicle ID"),
    current: CurrentOfficer = Depends(require_permission(Permission.EDIT_VEHICLE)),
    db: AsyncSession = Depends(get_db)
):
    """Move a vehicle between Available / On Trip / In Shop / Retired."""
    vehicle = await _get_vehicle_or_404(db, vehicle_id)
    previous = vehicle.status
    vehicle.status = status_data.status

    await db.commit()
    await db.refresh(vehicle)

    await log_event(
        db=db,
        action=AuditAction.VEHICLE_UPDATED,
        actor_id=current.id,
        metadata={"vehicle_id": vehicle.id, "status": [previous.value, vehicle.status.value]}
    )

    return ok("Vehicle status updated", {"vehicle": VehicleResponse.model_validate(vehicle)})


@router.delete("/{vehicle_id}", response_model=ApiResponse[dict])
async def delete_vehicle(
    vehicle_id: int = Path(..., description="Vehicle ID"),
    current: CurrentOfficer = Depends(require_permission(Permission.DELETE_VEHICLE)),
    db: AsyncSession = Depends(get_db)
):
    """Delete a vehicle. Vehicles referenced by trips or logs cannot be deleted (409)."""
    vehicle = await _get_vehicle_or_404(db, vehicle_id)
    plate = vehicle.license_plate

    await db.delete(vehicle)
    await db.commit()

    await log_event(
        db=db,
        action=AuditAction.VEHICLE_DELETED,
        actor_id=current.id,
        metadata={"vehicle_id": vehicle_id, "license_plate": plate}
    )

    return ok("Vehicle deleted successfully")
