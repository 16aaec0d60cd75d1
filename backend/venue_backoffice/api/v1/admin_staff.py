"""
Admin Staff API: platform staff accounts managed from the admin panel
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from venue_backoffice.api.v1.vendor_staff import gender_value, role_summary
from venue_backoffice.database import get_db
from venue_backoffice.dependencies import require_admin_permission
from venue_backoffice.models.admin_staff import AdminStaff
from venue_backoffice.schemas.admin_staff import (
    AdminStaffCreate,
    AdminStaffList,
    AdminStaffProfileResponse,
    AdminStaffResponse,
    AdminStaffUpdate,
)
from venue_backoffice.schemas.auth import TokenPayload
from venue_backoffice.services import admin_staff_service

router = APIRouter(prefix="/staff", tags=["admin-staff"])


def build_admin_staff_response(staff: AdminStaff) -> AdminStaffResponse:
    return AdminStaffResponse(
        id=str(staff.id),
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


def build_admin_staff_profile(staff: AdminStaff) -> AdminStaffProfileResponse:
    return AdminStaffProfileResponse(
        id=str(staff.id),
        name=staff.name,
        email=staff.email,
        phone=staff.phone,
        location=staff.location,
        gender=gender_value(staff),
        img=staff.img,
        role=role_summary(staff),
        is_active=staff.is_active,
        created_at=staff.created_at,
        updated_at=staff.updated_at,
    )


@router.get("", response_model=AdminStaffList)
async def list_admin_staff(
    is_active: Optional[bool] = Query(None),
    role_id: Optional[uuid.UUID] = Query(None),
    current_user: TokenPayload = Depends(require_admin_permission("view_staff")),
    db: Session = Depends(get_db),
):
    """List platform staff, newest first. Soft-deleted staff are never listed."""
    staff = admin_staff_service.list_staff(db, is_active=is_active, role_id=role_id)
    return AdminStaffList(staff=[build_admin_staff_response(s) for s in staff], total=len(staff))


@router.get("/{staff_id}", response_model=AdminStaffResponse)
async def get_admin_staff(
    staff_id: str,
    current_user: TokenPayload = Depends(require_admin_permission("view_staff")),
    db: Session = Depends(get_db),
):
    return build_admin_staff_response(admin_staff_service.get_staff(db, staff_id))


@router.post("", response_model=AdminStaffResponse, status_code=status.HTTP_201_CREATED)
async def create_admin_staff(
    data: AdminStaffCreate,
    current_user: TokenPayload = Depends(require_admin_permission("create_staff")),
    db: Session = Depends(get_db),
):
    return build_admin_staff_response(admin_staff_service.create_staff(db, data))


@router.put("/{staff_id}", response_model=AdminStaffResponse)
async def update_admin_staff(
    staff_id: str,
    data: AdminStaffUpdate,
    current_user: TokenPayload = Depends(require_admin_permission("edit_staff")),
    db: Session = Depends(get_db),
):
    staff = admin_staff_service.update_staff(db, staff_id, data.model_dump(exclude_unset=True))
    return build_admin_staff_response(staff)


@router.delete("/{staff_id}")
async def delete_admin_staff(
    staff_id: str,
    current_user: TokenPayload = Depends(require_admin_permission("delete_staff")),
    db: Session = Depends(get_db),
):
    """Soft delete: the record is kept but can no longer log in or be listed."""
    admin_staff_service.soft_delete_staff(db, staff_id)
    return {"message": "Staff deleted successfully"}
