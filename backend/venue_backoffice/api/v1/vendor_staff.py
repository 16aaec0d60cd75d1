"""
Vendor Staff API Routes

Login and the staff member's own profile are served here; everything else is
reserved for the vendor owner.
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from venue_backoffice.config import settings
from venue_backoffice.config.permissions import VENDOR_STAFF_ROLE
from venue_backoffice.database import get_db
from venue_backoffice.dependencies import get_vendor_owner, require_role, vendor_scope
from venue_backoffice.exceptions import AuthorizationError
from venue_backoffice.limiter import limiter
from venue_backoffice.models.vendor_staff import VendorStaff
from venue_backoffice.schemas.auth import LoginRequest, StaffLoginResponse, TokenPayload
from venue_backoffice.schemas.vendor_staff import (
    StaffProfileResponse,
    StaffRoleSummary,
    VendorStaffCreate,
    VendorStaffList,
    VendorStaffResponse,
    VendorStaffUpdate,
)
from venue_backoffice.services import auth_service, vendor_staff_service

router = APIRouter(prefix="/vendor-staff", tags=["vendor-staff"])


def role_summary(staff) -> Optional[StaffRoleSummary]:
    """Embedded role of a vendor or platform staff record"""
    if staff.role is None:
        return None
    return StaffRoleSummary(
        id=str(staff.role.id),
        name=staff.role.name,
        permissions=list(staff.role.permissions or []),
        is_active=staff.role.is_active,
    )


def gender_value(staff) -> Optional[str]:
    return staff.gender.value if staff.gender is not None else None


def build_staff_response(staff: VendorStaff) -> VendorStaffResponse:
    """Build a VendorStaffResponse; the password hash is never included."""
    return VendorStaffResponse(
        id=str(staff.id),
        vendor_id=str(staff.vendor_id),
        name=staff.name,
        phone=staff.phone,
        email=staff.email,
        location=staff.location,
        gender=gender_value(staff),
        img=staff.img,
        role=role_summary(staff),
        is_active=staff.is_active,
        is_deleted=staff.is_deleted,
        created_at=staff.created_at,
        updated_at=staff.updated_at,
    )


def build_staff_profile(staff: VendorStaff) -> StaffProfileResponse:
    return StaffProfileResponse(
        id=str(staff.id),
        vendor_id=str(staff.vendor_id),
        name=staff.name,
        email=staff.email,
        phone=staff.phone,
        location=staff.location,
        gender=gender_value(staff),
        img=staff.img,
        role=role_summary(staff),
        is_active=staff.is_active,
    )


@router.post("/login", response_model=StaffLoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def staff_login(
    request: Request,
    credentials: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Login for vendor staff only

    Returns a token carrying the permissions of the staff member's role.
    """
    staff = auth_service.authenticate_staff(db, credentials.email, credentials.password)
    token, _ = auth_service.issue_token(db, staff)
    return StaffLoginResponse(token=token, staff=build_staff_profile(staff))


@router.get("/profile", response_model=StaffProfileResponse)
async def get_staff_profile(
    current_user: TokenPayload = Depends(require_role([VENDOR_STAFF_ROLE])),
    db: Session = Depends(get_db),
):
    staff = auth_service.load_principal(db, current_user)
    if staff.is_deleted:
        raise AuthorizationError(auth_service.ACCOUNT_DELETED)
    return build_staff_profile(staff)


@router.get("", response_model=VendorStaffList)
async def list_vendor_staff(
    is_active: Optional[bool] = Query(None),
    role_id: Optional[uuid.UUID] = Query(None),
    current_user: TokenPayload = Depends(get_vendor_owner),
    db: Session = Depends(get_db),
):
    """List the vendor's staff, newest first. Soft-deleted staff are never listed."""
    staff = vendor_staff_service.list_staff(
        db, vendor_scope(current_user), is_active=is_active, role_id=role_id
    )
    return VendorStaffList(staff=[build_staff_response(s) for s in staff], total=len(staff))


@router.get("/{staff_id}", response_model=VendorStaffResponse)
async def get_vendor_staff(
    staff_id: str,
    current_user: TokenPayload = Depends(get_vendor_owner),
    db: Session = Depends(get_db),
):
    staff = vendor_staff_service.get_staff(db, vendor_scope(current_user), staff_id)
    return build_staff_response(staff)


@router.post("", response_model=VendorStaffResponse, status_code=status.HTTP_201_CREATED)
async def create_vendor_staff(
    data: VendorStaffCreate,
    current_user: TokenPayload = Depends(get_vendor_owner),
    db: Session = Depends(get_db),
):
    staff = vendor_staff_service.create_staff(db, vendor_scope(current_user), data)
    return build_staff_response(staff)


@router.put("/{staff_id}", response_model=VendorStaffResponse)
async def update_vendor_staff(
    staff_id: str,
    data: VendorStaffUpdate,
    current_user: TokenPayload = Depends(get_vendor_owner),
    db: Session = Depends(get_db),
):
    changes = data.model_dump(exclude_unset=True)
    staff = vendor_staff_service.update_staff(db, vendor_scope(current_user), staff_id, changes)
    return build_staff_response(staff)


@router.delete("/{staff_id}")
async def delete_vendor_staff(
    staff_id: str,
    current_user: TokenPayload = Depends(get_vendor_owner),
    db: Session = Depends(get_db),
):
    """Soft delete: the record is kept but can no longer log in or be listed."""
    vendor_staff_service.soft_delete_staff(db, vendor_scope(current_user), staff_id)
    return {"message": "Staff deleted successfully"}
