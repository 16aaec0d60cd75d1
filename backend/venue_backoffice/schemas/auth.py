"""
Authentication Schemas
"""
import uuid
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List

from venue_backoffice.schemas.vendor_staff import StaffProfileResponse


class LoginRequest(BaseModel):
    """Login request schema"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Registration request schema"""
    name: str = Field(..., min_length=1, max_length=100)
    email: str
    password: str
    phone: Optional[str] = None
    role: str = "customer"


class ChangePasswordRequest(BaseModel):
    """Change password request schema"""
    current_password: str
    new_password: str


class PrincipalResponse(BaseModel):
    """Identity returned alongside a freshly issued token"""
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    vendor_id: Optional[str] = None
    role_id: Optional[str] = None
    verified: Optional[bool] = None
    permissions: Optional[List[str]] = None


class LoginResponse(BaseModel):
    """Login response schema"""
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user: PrincipalResponse


class StaffLoginResponse(BaseModel):
    """Vendor staff login response schema"""
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    staff: StaffProfileResponse


class UserProfileResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    vendor_status: Optional[str] = None
    verified: bool
    is_active: bool


class MyPermissionsResponse(BaseModel):
    role: str
    permissions: List[str]


class TokenPayload(BaseModel):
    """Claims carried by an access token; the authenticated principal of a request"""
    sub: str
    email: str
    role: str
    vendor_id: Optional[str] = None
    role_id: Optional[str] = None
    permissions: List[str] = []
    exp: int
    type: str

    @field_validator("sub", "vendor_id", "role_id")
    @classmethod
    def _must_be_uuid(cls, value):
        if value is not None:
            uuid.UUID(value)
        return value

    @property
    def principal_uuid(self) -> uuid.UUID:
        return uuid.UUID(self.sub)

    @property
    def vendor_uuid(self) -> Optional[uuid.UUID]:
        return uuid.UUID(self.vendor_id) if self.vendor_id else None
