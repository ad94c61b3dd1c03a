"""
Fuel and maintenance log Pydantic schemas.
"""

from pydantic import BaseModel, ConfigDict, Field
import datetime as dt
from typing import Optional, List
from backend.app.models.fleet_enums import MaintenanceStatus


class FuelLogCreate(BaseModel):
    vehicle_id: int
    trip_id: Optional[int] = None
    cost: float = Field(..., gt=0)
    liters: Optional[float] = Field(None, gt=0)
    date: dt.date


class FuelLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    vehicle_id: int
    trip_id: Optional[int]
    cost: float
    liters: Optional[float]
    date: dt.date
    created_at: dt.datetime


class FuelLogListData(BaseModel):
    logs: List[FuelLogResponse]
    total: int


class MaintenanceLogCreate(BaseModel):
    vehicle_id: int
    description: str = Field(..., min_length=1, max_length=500)
    cost: float = Field(0.0, ge=0)
    date: dt.date
    status: MaintenanceStatus = MaintenanceStatus.SCHEDULED


class MaintenanceLogUpdate(BaseModel):
    status: Optional[MaintenanceStatus] = None
    cost: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, min_length=1, max_length=500)


class MaintenanceLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    vehicle_id: int
    description: str
    cost: float
    date: dt.date
    status: MaintenanceStatus
    created_at: dt.datetime
    updated_at: dt.datetime


class MaintenanceLogListData(BaseModel):
    logs: List[MaintenanceLogResponse]
    total: int
