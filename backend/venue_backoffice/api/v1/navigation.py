"""
Vendor navigation: the menu a vendor principal is allowed to see
"""
from fastapi import APIRouter, Depends

from venue_backoffice.dependencies import get_vendor_principal
from venue_backoffice.schemas.auth import TokenPayload
from venue_backoffice.schemas.permission import NavigationResponse
from venue_backoffice.services.permission_service import filter_navigation

router = APIRouter(tags=["navigation"])


@router.get("/navigation", response_model=NavigationResponse)
async def get_vendor_navigation(
    current_user: TokenPayload = Depends(get_vendor_principal),
):
    """
    Navigation tree filtered by the caller's token permissions.

    Owner-only entries are dropped for staff, and groups whose children are
    all hidden are dropped as well.
    """
    items = filter_navigation(current_user.role, current_user.permissions)
    return NavigationResponse(role=current_user.role, items=items)
