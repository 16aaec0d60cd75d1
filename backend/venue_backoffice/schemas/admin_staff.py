"""
Admin Staff Schemas
"""
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from venue_backoffice.schemas.vendor_staff import StaffRoleSummary


class AdminStaffCreate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role_id: Optional[str] = None
    location: Optional[str] = None
    gender: Optional[str] = None
    img: Optional[str] = None


class AdminStaffUpdate(BaseModel):
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


class AdminStaffResponse(BaseModel):
    id: str
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


class AdminStaffList(BaseModel):
    staff: List[AdminStaffResponse]
    total: int


class AdminStaffProfileResponse(BaseModel):
    """Profile a platform staff member sees about themselves"""
    id: str
    name: str
    email: str
    phone: str
    location: Optional[str] = None
    gender: Optional[str] = None
    img: Optional[str] = None
    role: Optional[StaffRoleSummary] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AdminStaffLoginResponse(BaseModel):
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    staff: AdminStaffProfileResponse
