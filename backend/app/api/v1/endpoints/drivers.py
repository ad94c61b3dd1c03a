"""
Driver Profiles API Endpoints.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from backend.app.db.session import get_db
from backend.app.models.driver import Driver
from backend.app.schemas.driver import DriverCreate, DriverUpdate, DriverResponse, DriverData, DriverListData
from backend.app.schemas.common import ApiResponse, ok
from backend.app.core.dependencies import CurrentOfficer
from backend.app.core.exceptions import ConflictError, ResourceNotFoundError
from backend.app.core.guards import require_permission
from backend.app.core.permissions import Permission

router = APIRouter(prefix="/drivers", tags=["Drivers"])


async def _get_driver_or_404(db: AsyncSession, driver_id: int) -> Driver:
    result = await db.execute(select(Driver).where(Driver.id == driver_id))
    driver = result.scalar_one_or_none()
    if not driver:
        raise ResourceNotFoundError("Driver", driver_id)
    return driver


async def _ensure_license_free(db: AsyncSession, license_number: str, exclude_id: int = None):
    query = select(Driver.id).where(Driver.license_number == license_number)
    if exclude_id is not None:
        query = query.where(Driver.id != exclude_id)
    if (await db.execute(query)).first():
        raise ConflictError("A driver with this license number already exists")


@router.get("", response_model=ApiResponse[DriverListData])
async def list_drivers(
    current: CurrentOfficer = Depends(require_permission(Permission.VIEW_DRIVERS)),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(select(Driver).order_by(Driver.full_name.asc()))
    drivers = result.scalars().all()
    return ok(
        "Drivers fetched",
        DriverListData(drivers=[DriverResponse.model_validate(d) for d in drivers], total=len(drivers))
    )


@router.post("", response_model=ApiResponse[DriverData], status_code=status.HTTP_201_CREATED)
async def create_driver(
    driver_data: DriverCreate,
    current: CurrentOfficer = Depends(require_permission(Permission.CREATE_DRIVER)),
    db: AsyncSession = Depends(get_db)
):
    await _ensure_license_free(db, driver_data.license_number)

    driver = Driver(**driver_data.model_dump())
    db.add(driver)
    await db.commit()
    await db.refresh(driver)

    return ok("Driver added successfully", {"driver": DriverResponse.model_validate(driver)})


@router.put("/{driver_id}", response_model=ApiResponse[DriverData])
async def update_driver(
    driver_data: DriverUpdate,
    driver_id: int = Path(..., description="Driver ID"),
    current: CurrentOfficer = Depends(require_permission(Permission.EDIT_DRIVER)),
    db: AsyncSession = Depends(get_db)
):
    driver = await _get_driver_or_404(db, driver_id)

    changes = driver_data.model_dump(exclude_unset=True, exclude_none=True)
    if "license_number" in changes and changes["license_number"] != driver.license_number:
        await _ensure_license_free(db, changes["license_number"], exclude_id=driver.id)

    for field, value in changes.items():
        setattr(driver, field, value)

    await db.commit()
    await db.refresh(driver)

    return ok("Driver updated successfully", {"driver": DriverResponse.model_validate(driver)})


@router.delete("/{driver_id}", response_model=ApiResponse[dict])
async def delete_driver(
    driver_id: int = Path(..., description="Driver ID"),
    current: CurrentOfficer = Depends(require_permission(Permission.DELETE_DRIVER)),
    db: AsyncSession = Depends(get_db)
):
    driver = await _get_driver_or_404(db, driver_id)
    await db.delete(driver)
    await db.commit()
    return ok("Driver deleted successfully")
