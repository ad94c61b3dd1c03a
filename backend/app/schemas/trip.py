"""
Trip Pydantic schemas.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List
from backend.app.models.fleet_enums import TripStatus


class TripCreate(BaseModel):
    """Schema for dispatching a trip."""
    vehicle_id: int
    driver_id: int
    origin: str = Field(..., min_length=1, max_length=255)
    destination: str = Field(..., min_length=1, max_length=255)
    cargo_weight: float = Field(..., gt=0, description="Cargo weight in kg")
    distance: Optional[float] = Field(None, ge=0)
    revenue: Optional[float] = Field(None, ge=0)
    status: TripStatus = TripStatus.DRAFT


class TripUpdate(BaseModel):
    status: Optional[TripStatus] = None
    distance: Optional[float] = Field(None, ge=0)
    revenue: Optional[float] = Field(None, ge=0)


class TripResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    vehicle_id: int
    driver_id: int
    created_by: Optional[int]
    origin: str
    destination: str
    cargo_weight: float
    distance: Optional[float]
    revenue: float
    status: TripStatus
    created_at: datetime
    updated_at: datetime


class TripData(BaseModel):
    trip: TripResponse


class TripListData(BaseModel):
    trips: List[TripResponse]
    total: int
