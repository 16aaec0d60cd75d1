"""
User Model for customers, vendor owners and the other platform accounts
"""
from sqlalchemy import Column, String, Boolean, DateTime, Enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from venue_backoffice.database import Base


class UserRole(str, enum.Enum):
    """Account kinds stored in the users table"""
    CUSTOMER = "customer"
    VENDOR = "vendor"
    AFFILIATE = "affiliate"
    ADMIN = "admin"


class VendorStatus(str, enum.Enum):
    """Approval state of a vendor account"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    role = Column(Enum(UserRole, values_callable=lambda x: [e.value for e in x]), nullable=False, default=UserRole.CUSTOMER)
    vendor_status = Column(
        Enum(VendorStatus, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=VendorStatus.PENDING,
    )
    verified = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    last_login = Column(DateTime, nullable=True)

    # Relationships
    vendor_roles = relationship("VendorRole", back_populates="vendor", cascade="all, delete-orphan")
    vendor_staff = relationship("VendorStaff", back_populates="vendor", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"

    @property
    def role_value(self) -> str:
        return self.role.value if isinstance(self.role, UserRole) else str(self.role)

    def is_vendor(self) -> bool:
        return self.role == UserRole.VENDOR

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
