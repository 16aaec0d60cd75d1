"""
Vendor Staff Schemas
"""
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class StaffRoleSummary(BaseModel):
    """Role as embedded in staff responses"""
    id: str
    name: str
    permissions: List[str]
    is_active: bool


class VendorStaffCreate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role_id: Optional[str] = None
    location: Optional[str] = None
    gender: Optional[str] = None
    img: Optional[str] = None


class VendorStaffUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied"""
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role_id: Optional[str] = None
    location: Optional[str] = None
    gender: Optional[str] = None
    img: Optional[str] = None
    is_active: Optional[bool] = None


class VendorStaffResponse(BaseModel):
    id: str
    vendor_id: str
    name: str
    phone: str
    email: str
    location: Optional[str] = None
    gender: Optional[str] = None
    img: Optional[str] = None
    role: Optional[StaffRoleSummary] = None
    is_active: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


class VendorStaffList(BaseModel):
    staff: List[VendorStaffResponse]
    total: int


class StaffProfileResponse(BaseModel):
    """Profile a staff member sees about themselves"""
    id: str
    vendor_id: str
    name: str
    email: str
    phone: str
    location: Optional[str] = None
    gender: Optional[str] = None
    img: Optional[str] = None
    role: Optional[StaffRoleSummary] = None
    is_active: bool
