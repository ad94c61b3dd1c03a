"""
Driver Pydantic schemas.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import Optional, List
from backend.app.models.fleet_enums import DriverStatus


class DriverCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    license_number: str = Field(..., min_length=1, max_length=100)
    license_expiry: date
    phone: Optional[str] = Field(None, max_length=50)
    safety_score: float = Field(100.0, ge=0, le=100)
    status: DriverStatus = DriverStatus.ON_DUTY


class DriverUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    license_number: Optional[str] = Field(None, min_length=1, max_length=100)
    license_expiry: Optional[date] = None
    phone: Optional[str] = Field(None, max_length=50)
    safety_score: Optional[float] = Field(None, ge=0, le=100)
    status: Optional[DriverStatus] = None


class DriverResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    license_number: str
    license_expiry: date
    phone: Optional[str]
    safety_score: float
    status: DriverStatus
    created_at: datetime


class DriverData(BaseModel):
    driver: DriverResponse


class DriverListData(BaseModel):
    drivers: List[DriverResponse]
    total: int
