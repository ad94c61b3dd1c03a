"""
Vehicle Pydantic schemas.

Defines request and response models for vehicle management.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional, List
from backend.app.models.fleet_enums import VehicleStatus


class VehicleCreate(BaseModel):
    """Schema for registering a new vehicle."""
    name: str = Field(..., min_length=3, max_length=100, description="Display name (min 3 characters)")
    model: Optional[str] = Field(None, max_length=100)
    license_plate: str = Field(..., min_length=1, max_length=50, description="Unique registration plate")
    max_capacity: float = Field(..., gt=0, description="Maximum cargo weight in kg")
    odometer: float = Field(0.0, ge=0)
    acquisition_cost: float = Field(0.0, ge=0)
    vehicle_type: Optional[str] = Field(None, max_length=50)
    region: Optional[str] = Field(None, max_length=50)
    status: VehicleStatus = VehicleStatus.AVAILABLE

    @field_validator("license_plate")
    @classmethod
    def upper_plate(cls, value: str) -> str:
        return value.strip().upper()


class VehicleUpdate(BaseModel):
    """Schema for updating an existing vehicle."""
    name: Optional[str] = Field(None, min_length=3, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    license_plate: Optional[str] = Field(None, min_length=1, max_length=50)
    max_capacity: Optional[float] = Field(None, gt=0)
    odometer: Optional[float] = Field(None, ge=0)
    acquisition_cost: Optional[float] = Field(None, ge=0)
    vehicle_type: Optional[str] = Field(None, max_length=50)
    region: Optional[str] = Field(None, max_length=50)
    status: Optional[VehicleStatus] = None

    @field_validator("license_plate")
    @classmethod
    def upper_plate(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().upper() if value else value


class VehicleStatusUpdate(BaseModel):
    status: VehicleStatus


class VehicleResponse(BaseModel):
    """Schema for vehicle response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    model: Optional[str]
    license_plate: str
    max_capacity: float
    odometer: float
    acquisition_cost: float
    vehicle_type: Optional[str]
    region: Optional[str]
    status: VehicleStatus
    created_at: datetime
    updated_at: datetime


class VehicleData(BaseModel):
    vehicle: VehicleResponse


class VehicleListData(BaseModel):
    vehicles: List[VehicleResponse]
    total: int
