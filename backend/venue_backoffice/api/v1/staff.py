"""
Platform Staff API Routes: login and own profile for admin panel staff
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from venue_backoffice.api.v1.admin_staff import build_admin_staff_profile
from venue_backoffice.config import settings
from venue_backoffice.config.permissions import PLATFORM_STAFF_ROLE
from venue_backoffice.database import get_db
from venue_backoffice.dependencies import require_role
from venue_backoffice.exceptions import AuthorizationError
from venue_backoffice.limiter import limiter
from venue_backoffice.schemas.admin_staff import AdminStaffLoginResponse, AdminStaffProfileResponse
from venue_backoffice.schemas.auth import LoginRequest, TokenPayload
from venue_backoffice.services import auth_service

router = APIRouter(prefix="/staff", tags=["staff"])


@router.post("/login", response_model=AdminStaffLoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def staff_login(
    request: Request,
    credentials: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Login for platform staff

    The token carries role ``staff`` and the permissions of the staff member's
    admin role at this moment.
    """
    staff = auth_service.authenticate_admin_staff(db, credentials.email, credentials.password)
    token, _ = auth_service.issue_token(db, staff)
    return AdminStaffLoginResponse(token=token, staff=build_admin_staff_profile(staff))


@router.get("/profile", response_model=AdminStaffProfileResponse)
async def get_staff_profile(
    current_user: TokenPayload = Depends(require_role([PLATFORM_STAFF_ROLE])),
    db: Session = Depends(get_db),
):
    staff = auth_service.load_principal(db, current_user)
    if staff.is_deleted:
        raise AuthorizationError(auth_service.ACCOUNT_DELETED)
    return build_admin_staff_profile(staff)
