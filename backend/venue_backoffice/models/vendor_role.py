"""Vendor Role model: named permission bundles owned by a single vendor."""
import uuid as uuid_lib
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON, UniqueConstraint, Index
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship

from venue_backoffice.database import Base


class VendorRole(Base):
    __tablename__ = "vendor_roles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid_lib.uuid4)
    vendor_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    # Trimmed, lower-cased name; carries the per-vendor uniqueness constraint
    name_key = Column(String, nullable=False)
    description = Column(String, nullable=True)
    permissions = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    vendor = relationship("User", back_populates="vendor_roles")
    staff = relationship("VendorStaff", back_populates="role")

    __table_args__ = (
        UniqueConstraint("vendor_id", "name_key", name="uq_vendor_role_name"),
        Index("ix_vendor_roles_vendor_created", "vendor_id", "created_at"),
    )

    def __repr__(self):
        return f"<VendorRole {self.name} vendor={self.vendor_id}>"
