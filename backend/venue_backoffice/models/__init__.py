"""
Models package; importing it registers every table on Base.metadata
"""
from venue_backoffice.database import Base

# Users first: roles and staff both reference users.id
from venue_backoffice.models.user import User, UserRole, VendorStatus
from venue_backoffice.models.vendor_role import VendorRole
from venue_backoffice.models.vendor_staff import VendorStaff, Gender
from venue_backoffice.models.admin_role import AdminRole
from venue_backoffice.models.admin_staff import AdminStaff

__all__ = [
    "Base",
    "User",
    "UserRole",
    "VendorStatus",
    "VendorRole",
    "VendorStaff",
    "Gender",
    "AdminRole",
    "AdminStaff",
]
