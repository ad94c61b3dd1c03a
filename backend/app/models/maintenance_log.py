"""
Maintenance log database model.

An open maintenance log keeps its vehicle "In Shop".
"""

from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey, DateTime, Enum
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.fleet_enums import MaintenanceStatus, enum_values


class MaintenanceLog(Base):
    __tablename__ = "maintenance_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)

    description = Column(String(500), nullable=False)
    cost = Column(Float, nullable=False, default=0.0)
    date = Column(Date, nullable=False)

    status = Column(
        Enum(MaintenanceStatus, values_callable=enum_values, name="maintenance_status"),
        default=MaintenanceStatus.SCHEDULED,
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<MaintenanceLog(id={self.id}, vehicle_id={self.vehicle_id}, status='{self.status.value}')>"
