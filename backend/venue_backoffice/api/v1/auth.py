"""
Authentication API Routes
"""
from typing import Any, Dict, Union

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from venue_backoffice.api.v1.admin_staff import build_admin_staff_profile
from venue_backoffice.api.v1.vendor_staff import build_staff_profile
from venue_backoffice.config import settings
from venue_backoffice.database import get_db
from venue_backoffice.dependencies import get_current_principal
from venue_backoffice.limiter import limiter
from venue_backoffice.models.admin_staff import AdminStaff
from venue_backoffice.models.user import User
from venue_backoffice.models.vendor_staff import VendorStaff
from venue_backoffice.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MyPermissionsResponse,
    PrincipalResponse,
    RegisterRequest,
    TokenPayload,
    UserProfileResponse,
)
from venue_backoffice.schemas.admin_staff import AdminStaffProfileResponse
from venue_backoffice.schemas.vendor_staff import StaffProfileResponse
from venue_backoffice.services import auth_service
from venue_backoffice.services.permission_service import effective_permissions

router = APIRouter()


def _principal_response(principal: Union[User, VendorStaff], claims: Dict[str, Any]) -> PrincipalResponse:
    if isinstance(principal, VendorStaff):
        return PrincipalResponse(
            id=str(principal.id),
            name=principal.name,
            email=principal.email,
            phone=principal.phone,
            role=claims["role"],
            vendor_id=claims["vendor_id"],
            role_id=claims["role_id"],
            permissions=claims["permissions"],
        )
    return PrincipalResponse(
        id=str(principal.id),
        name=principal.name,
        email=principal.email,
        phone=principal.phone,
        role=claims["role"],
        vendor_id=claims.get("vendor_id"),
        verified=principal.verified,
        permissions=claims.get("permissions"),
    )


def _user_profile(user: User) -> UserProfileResponse:
    return UserProfileResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        phone=user.phone,
        role=user.role_value,
        vendor_status=user.vendor_status.value if user.is_vendor() and user.vendor_status else None,
        verified=user.verified,
        is_active=user.is_active,
    )


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Login with email and password

    Platform users are looked up first, then vendor staff. Vendor owners and
    staff receive their resolved permissions in both the token and the body.
    """
    principal = auth_service.authenticate(db, credentials.email, credentials.password)
    token, claims = auth_service.issue_token(db, principal)
    return LoginResponse(token=token, user=_principal_response(principal, claims))


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def register(
    request: Request,
    data: RegisterRequest,
    db: Session = Depends(get_db),
):
    user = auth_service.register_user(db, data)
    token, claims = auth_service.issue_token(db, user)
    return LoginResponse(
        message="Registration successful",
        token=token,
        user=_principal_response(user, claims),
    )


@router.get("/profile", response_model=Union[UserProfileResponse, StaffProfileResponse, AdminStaffProfileResponse])
async def get_profile(
    current_user: TokenPayload = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    record = auth_service.load_principal(db, current_user)
    if isinstance(record, VendorStaff):
        return build_staff_profile(record)
    if isinstance(record, AdminStaff):
        return build_admin_staff_profile(record)
    return _user_profile(record)


@router.put("/change-password")
async def change_password(
    data: ChangePasswordRequest,
    current_user: TokenPayload = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    auth_service.change_password(db, current_user, data.current_password, data.new_password)
    return {"message": "Password changed successfully"}


@router.get("/permissions/me", response_model=MyPermissionsResponse)
async def get_my_permissions(
    current_user: TokenPayload = Depends(get_current_principal),
):
    """Permissions carried by the caller's token, as the client gate sees them"""
    return MyPermissionsResponse(
        role=current_user.role,
        permissions=effective_permissions(current_user.role, current_user.permissions),
    )
