"""
Vehicle database model.

Vehicles are registered by fleet managers and committed to trips by dispatchers.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Enum
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.fleet_enums import VehicleStatus, enum_values


class Vehicle(Base):
    """
    Vehicle model.

    ``max_capacity`` (kg) is the authoritative cargo limit checked at trip creation.
    """
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Identification
    name = Column(String(100), nullable=False)
    model = Column(String(100), nullable=True)
    license_plate = Column(String(50), unique=True, nullable=False, index=True)
    vehicle_type = Column(String(50), nullable=True)  # e.g., "Truck", "Van"
    region = Column(String(50), nullable=True)

    # Capacity and usage
    max_capacity = Column(Float, nullable=False)
    odometer = Column(Float, nullable=False, default=0.0)
    acquisition_cost = Column(Float, nullable=False, default=0.0)

    status = Column(
        Enum(VehicleStatus, values_callable=enum_values, name="vehicle_status"),
        default=VehicleStatus.AVAILABLE,
        nullable=False,
        index=True,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Vehicle(id={self.id}, plate='{self.license_plate}', status='{self.status.value}')>"
