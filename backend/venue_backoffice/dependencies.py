"""
Common Dependencies for FastAPI Routes

Authorization is decided from the claims embedded in the bearer token; no
database lookup happens per request. A change to a staff member's role is
therefore seen only once that staff member logs in again (or the old token
expires).
"""
import uuid
from typing import Callable, List, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError as PydanticValidationError

from venue_backoffice.config.permissions import (
    PLATFORM_ADMIN_ROLE,
    PLATFORM_STAFF_ROLE,
    VENDOR_OWNER_ROLE,
    VENDOR_STAFF_ROLE,
)
from venue_backoffice.schemas.auth import TokenPayload
from venue_backoffice.services.auth_service import decode_access_token
from venue_backoffice.services.permission_service import has_permission

security = HTTPBearer(auto_error=False)

VENDOR_PRINCIPAL_ROLES = (VENDOR_OWNER_ROLE, VENDOR_STAFF_ROLE)
ADMIN_PRINCIPAL_ROLES = (PLATFORM_ADMIN_ROLE, PLATFORM_STAFF_ROLE)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenPayload:
    """
    Dependency to get the authenticated principal from the bearer token
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Unauthorized")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid token")

    try:
        principal = TokenPayload(**payload)
    except PydanticValidationError:
        raise _unauthorized("Invalid token")

    return principal


def require_role(allowed_roles: List[str]) -> Callable:
    """
    Dependency factory to require specific role labels

    Usage:
        @router.get("/", dependencies=[Depends(require_role(["vendor"]))])
        or
        principal: TokenPayload = Depends(require_role(["vendor"]))
    """
    async def role_checker(principal: TokenPayload = Depends(get_current_principal)) -> TokenPayload:
        if principal.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {', '.join(allowed_roles)}",
            )
        return principal

    return role_checker


def _permission_gate(keys, allowed_roles) -> Callable:
    async def permission_checker(principal: TokenPayload = Depends(get_current_principal)) -> TokenPayload:
        for key in keys:
            if principal.role not in allowed_roles or not has_permission(principal.role, principal.permissions, key):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Permission required: {key}",
                )
        return principal

    return permission_checker


def require_permission(*keys: str) -> Callable:
    """
    Dependency factory to require specific vendor permission(s).
    Vendor owners always pass; vendor staff need every key in their token.
    Platform principals never pass, whatever their token carries.

    Usage:
        principal: TokenPayload = Depends(require_permission("vendor_edit_venues"))
        or
        @router.put("/{id}", dependencies=[Depends(require_permission("vendor_edit_venues"))])
    """
    return _permission_gate(keys, VENDOR_PRINCIPAL_ROLES)


def require_admin_permission(*keys: str) -> Callable:
    """Same as require_permission for the admin catalog: admins always pass, platform staff need every key"""
    return _permission_gate(keys, ADMIN_PRINCIPAL_ROLES)


async def get_vendor_owner(
    principal: TokenPayload = Depends(require_role([VENDOR_OWNER_ROLE])),
) -> TokenPayload:
    """Require the vendor owner account (not vendor staff)"""
    return principal


async def get_vendor_principal(
    principal: TokenPayload = Depends(require_role(list(VENDOR_PRINCIPAL_ROLES))),
) -> TokenPayload:
    """Require a vendor owner or one of the vendor's staff"""
    return principal


def vendor_scope(principal: TokenPayload) -> uuid.UUID:
    """Vendor id every vendor-scoped query must be filtered by"""
    if principal.vendor_uuid is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Vendor access required")
    return principal.vendor_uuid
