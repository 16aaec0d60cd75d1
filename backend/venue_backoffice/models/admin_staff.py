"""
Admin Staff Model: platform employee accounts holding one admin role
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from venue_backoffice.database import Base
from venue_backoffice.models.vendor_staff import Gender


class AdminStaff(Base):
    __tablename__ = "admin_staff"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    role_id = Column(UUID(as_uuid=True), ForeignKey("admin_roles.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    location = Column(String, nullable=True)
    gender = Column(Enum(Gender, values_callable=lambda x: [e.value for e in x]), nullable=True)
    img = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    last_login = Column(DateTime, nullable=True)

    role = relationship("AdminRole", back_populates="staff")

    def __repr__(self):
        return f"<AdminStaff {self.email}>"
