"""
Officer database model.

This module defines the Officer SQLAlchemy model for authentication.
"""

from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.enums import OfficerRole


class Officer(Base):
    """
    Officer model for authentication and role assignment.

    Permissions are never stored here; they derive from ``role``.
    """
    __tablename__ = "officers"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Exactly one role per officer
    role = Column(
        Enum(OfficerRole, values_callable=lambda roles: [r.value for r in roles], name="officer_role"),
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Officer(id={self.id}, email='{self.email}', role='{self.role.value}')>"
