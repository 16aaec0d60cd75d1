"""
Admin Roles API: platform roles for the admin panel staff

Admins always pass the permission checks; platform staff need the matching
``*_roles`` permission in their token.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from venue_backoffice.database import get_db
from venue_backoffice.dependencies import require_admin_permission
from venue_backoffice.models.admin_role import AdminRole
from venue_backoffice.schemas.admin_role import (
    AdminRoleCreate,
    AdminRoleList,
    AdminRoleResponse,
    AdminRoleUpdate,
)
from venue_backoffice.schemas.auth import TokenPayload
from venue_backoffice.schemas.permission import AvailablePermissionsResponse
from venue_backoffice.services import admin_role_service
from venue_backoffice.services.permission_service import available_admin_permissions

router = APIRouter(prefix="/roles", tags=["admin-roles"])


def _build_role_response(role: AdminRole) -> AdminRoleResponse:
    return AdminRoleResponse(
        id=str(role.id),
        name=role.name,
        description=role.description,
        permissions=list(role.permissions or []),
        is_active=role.is_active,
        created_at=role.created_at,
        updated_at=role.updated_at,
    )


@router.get("/permissions/available", response_model=AvailablePermissionsResponse)
async def get_available_permissions(
    current_user: TokenPayload = Depends(require_admin_permission("view_roles")),
):
    """Admin catalog grouped by category, plus the predefined admin role templates."""
    return AvailablePermissionsResponse(**available_admin_permissions())


@router.get("", response_model=AdminRoleList)
async def list_admin_roles(
    is_active: Optional[bool] = Query(None),
    current_user: TokenPayload = Depends(require_admin_permission("view_roles")),
    db: Session = Depends(get_db),
):
    roles = admin_role_service.list_roles(db, is_active=is_active)
    return AdminRoleList(roles=[_build_role_response(r) for r in roles], total=len(roles))


@router.get("/{role_id}", response_model=AdminRoleResponse)
async def get_admin_role(
    role_id: str,
    current_user: TokenPayload = Depends(require_admin_permission("view_roles")),
    db: Session = Depends(get_db),
):
    return _build_role_response(admin_role_service.get_role(db, role_id))


@router.post("", response_model=AdminRoleResponse, status_code=status.HTTP_201_CREATED)
async def create_admin_role(
    data: AdminRoleCreate,
    current_user: TokenPayload = Depends(require_admin_permission("create_roles")),
    db: Session = Depends(get_db),
):
    role = admin_role_service.create_role(
        db, name=data.name, permissions=data.permissions, description=data.description
    )
    return _build_role_response(role)


@router.put("/{role_id}", response_model=AdminRoleResponse)
async def update_admin_role(
    role_id: str,
    data: AdminRoleUpdate,
    current_user: TokenPayload = Depends(require_admin_permission("edit_roles")),
    db: Session = Depends(get_db),
):
    role = admin_role_service.update_role(db, role_id, data.model_dump(exclude_unset=True))
    return _build_role_response(role)


@router.delete("/{role_id}")
async def delete_admin_role(
    role_id: str,
    current_user: TokenPayload = Depends(require_admin_permission("delete_roles")),
    db: Session = Depends(get_db),
):
    admin_role_service.delete_role(db, role_id)
    return {"message": "Role deleted successfully"}
