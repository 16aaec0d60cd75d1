"""
Platform Admin API Routes
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from venue_backoffice.database import get_db
from venue_backoffice.dependencies import require_role
from venue_backoffice.exceptions import NotFoundError
from venue_backoffice.models.user import User, UserRole, VendorStatus
from venue_backoffice.schemas.auth import TokenPayload
from venue_backoffice.schemas.user import VendorAccountResponse, VendorStatusUpdate
from venue_backoffice.utils.security import parse_uuid

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])

ADMIN_ONLY = require_role([UserRole.ADMIN.value])


def _build_vendor_response(user: User) -> VendorAccountResponse:
    return VendorAccountResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        phone=user.phone,
        vendor_status=user.vendor_status.value,
        is_active=user.is_active,
        created_at=user.created_at,
        last_login=user.last_login,
    )


@router.get("/vendors", response_model=List[VendorAccountResponse])
async def list_vendors(
    vendor_status: Optional[VendorStatus] = Query(None),
    current_user: TokenPayload = Depends(ADMIN_ONLY),
    db: Session = Depends(get_db),
):
    query = db.query(User).filter(User.role == UserRole.VENDOR, User.is_deleted.is_(False))
    if vendor_status is not None:
        query = query.filter(User.vendor_status == vendor_status)
    return [_build_vendor_response(u) for u in query.order_by(User.created_at.desc()).all()]


@router.put("/vendors/{vendor_id}/status", response_model=VendorAccountResponse)
async def update_vendor_status(
    vendor_id: str,
    data: VendorStatusUpdate,
    current_user: TokenPayload = Depends(ADMIN_ONLY),
    db: Session = Depends(get_db),
):
    """
    Approve or reject a vendor account.

    A rejected vendor can no longer log in; tokens already issued stay valid
    until they expire.
    """
    vendor = (
        db.query(User)
        .filter(User.id == parse_uuid(vendor_id, "vendor"), User.role == UserRole.VENDOR)
        .first()
    )
    if not vendor:
        raise NotFoundError("Vendor not found")

    vendor.vendor_status = VendorStatus(data.vendor_status)
    db.commit()
    db.refresh(vendor)
    logger.info("Vendor %s status set to %s by admin %s", vendor.id, data.vendor_status, current_user.sub)
    return _build_vendor_response(vendor)
