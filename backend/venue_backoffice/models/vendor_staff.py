"""
Vendor Staff Model: employee accounts scoped to one vendor and one role
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Enum, UniqueConstraint, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from venue_backoffice.database import Base


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class VendorStaff(Base):
    __tablename__ = "vendor_staff"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    vendor_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # Nullable only so a role can be removed once no live staff use it; soft-deleted rows keep history
    role_id = Column(UUID(as_uuid=True), ForeignKey("vendor_roles.id", ondelete="SET NULL"), nullable=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    location = Column(String, nullable=True)
    gender = Column(Enum(Gender, values_callable=lambda x: [e.value for e in x]), nullable=True)
    img = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    last_login = Column(DateTime, nullable=True)

    # Relationships
    vendor = relationship("User", back_populates="vendor_staff")
    role = relationship("VendorRole", back_populates="staff")

    __table_args__ = (
        UniqueConstraint("vendor_id", "email", name="uq_vendor_staff_email"),
        Index("ix_vendor_staff_vendor_role", "vendor_id", "role_id"),
    )

    def __repr__(self):
        return f"<VendorStaff {self.email} vendor={self.vendor_id}>"
