"""
Authentication Service

Login runs the same steps for every principal kind: identify the account,
gate it on its stored state, verify the password, resolve permissions and
sign a token. The specific reason for a failure is logged; the caller only
sees the flattened message carried by the raised error.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from venue_backoffice.config.permissions import PLATFORM_STAFF_ROLE, VENDOR_STAFF_ROLE
from venue_backoffice.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from venue_backoffice.models.admin_staff import AdminStaff
from venue_backoffice.models.user import User, UserRole, VendorStatus
from venue_backoffice.models.vendor_staff import VendorStaff
from venue_backoffice.schemas.auth import RegisterRequest, TokenPayload
from venue_backoffice.services.permission_service import effective_permissions
from venue_backoffice.utils.security import (
    create_access_token,
    decode_token,
    hash_password,
    normalize_email,
    pwd_context,
    validate_email,
    validate_password,
    verify_password,
    verify_token_type,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
ACCOUNT_DELETED = "Your account has been deleted. Please contact support."
ACCOUNT_INACTIVE = "Your account is inactive. Please contact support."
ROLE_INACTIVE = "Your role is inactive. Please contact support."
VENDOR_REJECTED = "Your vendor account has been rejected. Please contact support."

SELF_REGISTER_ROLES = {UserRole.CUSTOMER.value, UserRole.VENDOR.value, UserRole.AFFILIATE.value}

Principal = Union[User, VendorStaff, AdminStaff]


def _find_user(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def _find_staff(db: Session, email: str) -> Optional[VendorStaff]:
    """
    Staff emails are unique per vendor only, so several rows may match.
    A live account wins over a deleted one, the newest over older ones.
    """
    return (
        db.query(VendorStaff)
        .options(joinedload(VendorStaff.role))
        .filter(VendorStaff.email == email)
        .order_by(VendorStaff.is_deleted.asc(), VendorStaff.created_at.desc())
        .first()
    )


def _find_admin_staff(db: Session, email: str) -> Optional[AdminStaff]:
    return (
        db.query(AdminStaff)
        .options(joinedload(AdminStaff.role))
        .filter(AdminStaff.email == email)
        .first()
    )


def _reject(cause: str, email: str, error: Exception):
    logger.warning("Login attempt failed: %s for email: %s", cause, email)
    raise error


def _gate_user(user: User, email: str) -> None:
    if user.is_deleted:
        _reject("account deleted", email, AuthorizationError(ACCOUNT_DELETED))
    if not user.is_active:
        _reject("account inactive", email, AuthorizationError(ACCOUNT_INACTIVE))
    if user.role == UserRole.VENDOR and user.vendor_status == VendorStatus.REJECTED:
        _reject("vendor rejected", email, AuthorizationError(VENDOR_REJECTED))


def _gate_staff(staff: Union[VendorStaff, AdminStaff], email: str) -> None:
    if staff.is_deleted:
        _reject("staff account deleted", email, AuthorizationError(ACCOUNT_DELETED))
    if not staff.is_active:
        _reject("staff account inactive", email, AuthorizationError(ACCOUNT_INACTIVE))
    if staff.role is None or not staff.role.is_active:
        _reject("staff role inactive", email, AuthorizationError(ROLE_INACTIVE))


def _verify(password: str, password_hash: Optional[str], email: str) -> None:
    if not verify_password(password, password_hash):
        _reject("invalid password", email, AuthenticationError(INVALID_CREDENTIALS))


def build_claims(principal: Principal) -> Dict[str, Any]:
    """Token claims for a principal, with permissions resolved at this moment"""
    if isinstance(principal, VendorStaff):
        return {
            "sub": str(principal.id),
            "email": principal.email,
            "role": VENDOR_STAFF_ROLE,
            "vendor_id": str(principal.vendor_id),
            "role_id": str(principal.role_id),
            "permissions": effective_permissions(VENDOR_STAFF_ROLE, principal.role.permissions or []),
        }
    if isinstance(principal, AdminStaff):
        return {
            "sub": str(principal.id),
            "email": principal.email,
            "role": PLATFORM_STAFF_ROLE,
            "role_id": str(principal.role_id),
            "permissions": effective_permissions(PLATFORM_STAFF_ROLE, principal.role.permissions or []),
        }

    role = principal.role_value
    claims: Dict[str, Any] = {
        "sub": str(principal.id),
        "email": principal.email,
        "role": role,
    }
    if principal.is_vendor():
        claims["vendor_id"] = str(principal.id)
        claims["permissions"] = effective_permissions(role)
    elif principal.is_admin():
        claims["permissions"] = effective_permissions(role)
    return claims


def issue_token(db: Session, principal: Principal) -> Tuple[str, Dict[str, Any]]:
    """Record the login and sign an access token. Returns (token, claims)."""
    principal.last_login = datetime.utcnow()
    db.commit()
    claims = build_claims(principal)
    return create_access_token(claims), claims


def authenticate(db: Session, email: str, password: str) -> Principal:
    """
    Resolve and check credentials across users and vendor staff.

    Raises AuthenticationError for unknown accounts and wrong passwords
    (indistinguishable to the caller) and AuthorizationError when the
    account exists but may not log in.
    """
    normalized = normalize_email(email)

    user = _find_user(db, normalized)
    if user is not None:
        _gate_user(user, normalized)
        _verify(password, user.password_hash, normalized)
        return user

    return authenticate_staff(db, normalized, password)


def _check_staff(staff, email: str, password: str):
    if staff is None:
        # Spend comparable time to a real verification
        pwd_context.dummy_verify()
        _reject("account not found", email, AuthenticationError(INVALID_CREDENTIALS))

    _gate_staff(staff, email)
    _verify(password, staff.password_hash, email)
    return staff


def authenticate_staff(db: Session, email: str, password: str) -> VendorStaff:
    normalized = normalize_email(email)
    staff = _check_staff(_find_staff(db, normalized), normalized, password)
    logger.info(
        "Vendor staff login: staff=%s vendor=%s role=%s permissions=%d",
        staff.id, staff.vendor_id, staff.role.name, len(staff.role.permissions or []),
    )
    return staff


def authenticate_admin_staff(db: Session, email: str, password: str) -> AdminStaff:
    """Platform staff only log in through their own endpoint, never through /auth/login"""
    normalized = normalize_email(email)
    staff = _check_staff(_find_admin_staff(db, normalized), normalized, password)
    logger.info(
        "Platform staff login: staff=%s role=%s permissions=%d",
        staff.id, staff.role.name, len(staff.role.permissions or []),
    )
    return staff


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode and validate an access token

    Returns:
        Decoded payload or None if invalid, expired or not an access token
    """
    payload = decode_token(token)

    if payload is None:
        return None

    if not verify_token_type(payload, "access"):
        return None

    return payload


def register_user(db: Session, data: RegisterRequest) -> User:
    """
    Create a customer, vendor or affiliate account

    Admin accounts cannot be self-registered.
    """
    if not data.name.strip() or not data.email or not data.password:
        raise ValidationError("Name, email, and password are required")

    email = validate_email(data.email)
    validate_password(data.password)

    if data.role not in SELF_REGISTER_ROLES:
        raise ValidationError(
            f"Invalid role. Must be one of: {', '.join(sorted(SELF_REGISTER_ROLES))}"
        )

    existing = _find_user(db, email)
    if existing:
        if existing.role_value != data.role:
            raise ConflictError(
                f"This email is already registered as a {existing.role_value}. "
                "You cannot register with a different role."
            )
        raise ConflictError("User with this email already exists")

    user = User(
        name=data.name.strip(),
        email=email,
        password_hash=hash_password(data.password),
        phone=data.phone.strip() if data.phone and data.phone.strip() else None,
        role=UserRole(data.role),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User with this email already exists")
    db.refresh(user)

    logger.info("Registered %s account %s", user.role_value, user.id)
    return user


def load_principal(db: Session, principal: TokenPayload) -> Principal:
    """Load the stored account behind a token"""
    if principal.role == VENDOR_STAFF_ROLE:
        record = (
            db.query(VendorStaff)
            .options(joinedload(VendorStaff.role))
            .filter(VendorStaff.id == principal.principal_uuid)
            .first()
        )
        if not record:
            raise NotFoundError("Staff not found")
        return record

    if principal.role == PLATFORM_STAFF_ROLE:
        record = (
            db.query(AdminStaff)
            .options(joinedload(AdminStaff.role))
            .filter(AdminStaff.id == principal.principal_uuid)
            .first()
        )
        if not record:
            raise NotFoundError("Staff not found")
        return record

    record = db.query(User).filter(User.id == principal.principal_uuid).first()
    if not record:
        raise NotFoundError("User not found")
    return record


def change_password(db: Session, principal: TokenPayload, current_password: str, new_password: str) -> None:
    if not current_password or not new_password:
        raise ValidationError("Current password and new password are required")
    validate_password(new_password, field="New password")

    record = load_principal(db, principal)
    if not verify_password(current_password, record.password_hash):
        raise AuthenticationError("Current password is incorrect")

    record.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Password changed for %s %s", principal.role, record.id)
