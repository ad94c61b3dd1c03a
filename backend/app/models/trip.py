"""
Trip database model.

Trips are created by dispatchers and commit a vehicle and a driver.
"""

from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Enum
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.fleet_enums import TripStatus, enum_values


class Trip(Base):
    """
    Trip model.

    Cargo weight never exceeds the vehicle's max_capacity (checked on create).
    """
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    driver_id = Column(Integer, ForeignKey("drivers.id"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("officers.id"), nullable=True)

    origin = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=False)
    cargo_weight = Column(Float, nullable=False)
    distance = Column(Float, nullable=True)
    revenue = Column(Float, nullable=False, default=0.0)

    status = Column(
        Enum(TripStatus, values_callable=enum_values, name="trip_status"),
        default=TripStatus.DRAFT,
        nullable=False,
        index=True,
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Trip(id={self.id}, vehicle_id={self.vehicle_id}, status='{self.status.value}')>"
