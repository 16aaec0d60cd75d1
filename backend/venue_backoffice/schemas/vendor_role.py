"""
Vendor Role Schemas
"""
from typing import Any, Optional, List
from datetime import datetime
from pydantic import BaseModel


class VendorRoleCreate(BaseModel):
    """Missing fields are reported by the service with a single message"""
    name: Optional[str] = None
    permissions: Optional[Any] = None
    description: Optional[str] = None


class VendorRoleUpdate(BaseModel):
    name: Optional[str] = None
    permissions: Optional[Any] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class VendorRoleResponse(BaseModel):
    id: str
    vendor_id: str
    name: str
    description: Optional[str] = None
    permissions: List[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class VendorRoleList(BaseModel):
    roles: List[VendorRoleResponse]
    total: int
