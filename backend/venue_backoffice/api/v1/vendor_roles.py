"""
Vendor Roles API: vendor owners manage the roles they assign to staff
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from venue_backoffice.database import get_db
from venue_backoffice.dependencies import get_vendor_owner, vendor_scope
from venue_backoffice.models.vendor_role import VendorRole
from venue_backoffice.schemas.auth import TokenPayload
from venue_backoffice.schemas.permission import AvailablePermissionsResponse
from venue_backoffice.schemas.vendor_role import (
    VendorRoleCreate,
    VendorRoleUpdate,
    VendorRoleResponse,
    VendorRoleList,
)
from venue_backoffice.services import vendor_role_service
from venue_backoffice.services.permission_service import available_permissions

router = APIRouter(prefix="/vendor-roles", tags=["vendor-roles"])


def _build_role_response(role: VendorRole) -> VendorRoleResponse:
    return VendorRoleResponse(
        id=str(role.id),
        vendor_id=str(role.vendor_id),
        name=role.name,
        description=role.description,
        permissions=list(role.permissions or []),
        is_active=role.is_active,
        created_at=role.created_at,
        updated_at=role.updated_at,
    )


@router.get("/permissions/available", response_model=AvailablePermissionsResponse)
async def get_available_permissions(
    current_user: TokenPayload = Depends(get_vendor_owner),
):
    """Permission catalog grouped by category, plus the predefined role templates."""
    return AvailablePermissionsResponse(**available_permissions())


@router.get("", response_model=VendorRoleList)
async def list_vendor_roles(
    is_active: Optional[bool] = Query(None),
    current_user: TokenPayload = Depends(get_vendor_owner),
    db: Session = Depends(get_db),
):
    """List the vendor's roles, newest first."""
    roles = vendor_role_service.list_roles(db, vendor_scope(current_user), is_active=is_active)
    return VendorRoleList(roles=[_build_role_response(r) for r in roles], total=len(roles))


@router.get("/{role_id}", response_model=VendorRoleResponse)
async def get_vendor_role(
    role_id: str,
    current_user: TokenPayload = Depends(get_vendor_owner),
    db: Session = Depends(get_db),
):
    role = vendor_role_service.get_role(db, vendor_scope(current_user), role_id)
    return _build_role_response(role)


@router.post("", response_model=VendorRoleResponse, status_code=status.HTTP_201_CREATED)
async def create_vendor_role(
    data: VendorRoleCreate,
    current_user: TokenPayload = Depends(get_vendor_owner),
    db: Session = Depends(get_db),
):
    """Create a role for the vendor. Names are unique per vendor, ignoring case."""
    role = vendor_role_service.create_role(
        db,
        vendor_scope(current_user),
        name=data.name,
        permissions=data.permissions,
        description=data.description,
    )
    return _build_role_response(role)


@router.put("/{role_id}", response_model=VendorRoleResponse)
async def update_vendor_role(
    role_id: str,
    data: VendorRoleUpdate,
    current_user: TokenPayload = Depends(get_vendor_owner),
    db: Session = Depends(get_db),
):
    changes = data.model_dump(exclude_unset=True)
    role = vendor_role_service.update_role(db, vendor_scope(current_user), role_id, changes)
    return _build_role_response(role)


@router.delete("/{role_id}")
async def delete_vendor_role(
    role_id: str,
    current_user: TokenPayload = Depends(get_vendor_owner),
    db: Session = Depends(get_db),
):
    """Delete a role. Refused while any non-deleted staff member still uses it."""
    vendor_role_service.delete_role(db, vendor_scope(current_user), role_id)
    return {"message": "Role deleted successfully"}
