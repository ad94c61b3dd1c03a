"""
Driver database model.
"""

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Enum
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.fleet_enums import DriverStatus, enum_values


class Driver(Base):
    __tablename__ = "drivers"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    full_name = Column(String(255), nullable=False)
    license_number = Column(String(100), unique=True, nullable=False, index=True)
    license_expiry = Column(Date, nullable=False)
    phone = Column(String(50), nullable=True)

    # 0-100, maintained by safety officers
    safety_score = Column(Float, nullable=False, default=100.0)

    status = Column(
        Enum(DriverStatus, values_callable=enum_values, name="driver_status"),
        default=DriverStatus.ON_DUTY,
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Driver(id={self.id}, license='{self.license_number}')>"
