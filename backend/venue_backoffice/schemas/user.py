"""
User Schemas
"""
from pydantic import BaseModel
from typing import Literal, Optional
from datetime import datetime


class VendorStatusUpdate(BaseModel):
    """Admin decision on a vendor account"""
    vendor_status: Literal["pending", "approved", "rejected"]


class VendorAccountResponse(BaseModel):
    """Vendor account as seen by platform admins"""
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    vendor_status: str
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime] = None
