"""Admin Role model: platform-wide permission bundles assigned to platform staff."""
import uuid as uuid_lib
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, JSON
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship

from venue_backoffice.database import Base


class AdminRole(Base):
    __tablename__ = "admin_roles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid_lib.uuid4)
    name = Column(String, nullable=False)
    # Trimmed, lower-cased name; unique across the platform
    name_key = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=True)
    permissions = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    staff = relationship("AdminStaff", back_populates="role")

    def __repr__(self):
        return f"<AdminRole {self.name}>"
