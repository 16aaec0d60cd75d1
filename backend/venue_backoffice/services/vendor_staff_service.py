"""
Vendor Staff Service

Staff accounts belong to exactly one vendor. Every lookup is scoped by the
vendor id of the authenticated owner, and deletion only flags the row.

The field validation and update helpers here are shared with platform staff.
"""
import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from venue_backoffice.exceptions import ConflictError, NotFoundError, ValidationError
from venue_backoffice.models.vendor_role import VendorRole
from venue_backoffice.models.vendor_staff import Gender, VendorStaff
from venue_backoffice.schemas.vendor_staff import VendorStaffCreate
from venue_backoffice.utils.security import (
    hash_password,
    parse_uuid,
    validate_email,
    validate_password,
)
from venue_backoffice.utils.uploads import remove_upload, staff_image_path

logger = logging.getLogger(__name__)

VALID_GENDERS = {g.value for g in Gender}

DUPLICATE_EMAIL_MESSAGE = "Staff with this email already exists"
EMAIL_EXISTS_MESSAGE = "Email already exists"


def clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def clean_gender(value: Optional[str]) -> Optional[Gender]:
    value = clean_optional(value)
    if value is None:
        return None
    if value.lower() not in VALID_GENDERS:
        raise ValidationError(f"Invalid gender. Must be one of: {', '.join(sorted(VALID_GENDERS))}")
    return Gender(value.lower())


def check_assignable(role) -> None:
    if not role:
        raise NotFoundError("Role not found")
    if not role.is_active:
        raise ValidationError("Cannot assign inactive role")


def check_new_staff(data) -> str:
    """Validate the required fields of a create request; returns the normalized email"""
    required = (data.name, data.phone, data.email, data.password, data.role_id)
    if not all(value and str(value).strip() for value in required):
        raise ValidationError("Name, phone, email, password, and role are required")

    email = validate_email(data.email)
    validate_password(data.password)
    return email


def new_staff_fields(data, email: str, gender: Optional[Gender], image_prefix: Optional[str] = None) -> Dict[str, Any]:
    """Column values for a freshly validated staff record, role excluded"""
    return {
        "name": data.name.strip(),
        "phone": data.phone.strip(),
        "email": email,
        "password_hash": hash_password(data.password),
        "location": clean_optional(data.location),
        "gender": gender,
        "img": staff_image_path(clean_optional(data.img), image_prefix),
    }


def apply_staff_changes(
    staff,
    changes: Dict[str, Any],
    email_taken: Callable[[str], bool],
    resolve_role: Callable[[Any], Any],
    image_prefix: Optional[str] = None,
) -> Optional[str]:
    """
    Apply the fields present in ``changes`` to a vendor or platform staff record.

    Everything is validated before any field is touched. Returns the image
    path that was replaced, if any, so the caller can remove it once the
    change is committed.
    """
    email = None
    if changes.get("email"):
        email = validate_email(changes["email"])
        if email_taken(email):
            raise ConflictError(EMAIL_EXISTS_MESSAGE)

    role = None
    if changes.get("role_id"):
        role = resolve_role(changes["role_id"])

    if changes.get("password"):
        validate_password(changes["password"])

    gender = clean_gender(changes["gender"]) if "gender" in changes else None

    for field in ("name", "phone"):
        if changes.get(field) is not None and not changes[field].strip():
            raise ValidationError(f"{field.capitalize()} cannot be empty")

    if changes.get("name") is not None:
        staff.name = changes["name"].strip()
    if changes.get("phone") is not None:
        staff.phone = changes["phone"].strip()
    if email is not None:
        staff.email = email
    if "location" in changes:
        staff.location = clean_optional(changes["location"])
    if "gender" in changes:
        staff.gender = gender
    if role is not None:
        staff.role_id = role.id
    if changes.get("is_active") is not None:
        staff.is_active = changes["is_active"]
    if changes.get("password"):
        staff.password_hash = hash_password(changes["password"])

    replaced_img = None
    if "img" in changes:
        new_img = staff_image_path(clean_optional(changes["img"]), image_prefix)
        if new_img != staff.img:
            replaced_img = staff.img
            staff.img = new_img
    return replaced_img


def _assignable_role(db: Session, vendor_id: uuid.UUID, role_id) -> VendorRole:
    """Resolve a role the vendor owns and that is active"""
    role_uuid = parse_uuid(role_id, "role")
    role = db.query(VendorRole).filter(
        VendorRole.id == role_uuid,
        VendorRole.vendor_id == vendor_id,
    ).first()
    check_assignable(role)
    return role


def _email_taken(db: Session, vendor_id: uuid.UUID, email: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
    query = db.query(VendorStaff).filter(
        VendorStaff.vendor_id == vendor_id,
        VendorStaff.email == email,
    )
    if exclude_id is not None:
        query = query.filter(VendorStaff.id != exclude_id)
    return query.first() is not None


def _commit(db: Session, staff: VendorStaff, conflict_message: str) -> VendorStaff:
    # The unique (vendor_id, email) constraint settles concurrent writers
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(conflict_message)
    db.refresh(staff)
    return staff


def create_staff(db: Session, vendor_id: uuid.UUID, data: VendorStaffCreate) -> VendorStaff:
    email = check_new_staff(data)
    role = _assignable_role(db, vendor_id, data.role_id)
    gender = clean_gender(data.gender)

    if _email_taken(db, vendor_id, email):
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

    staff = VendorStaff(vendor_id=vendor_id, role_id=role.id, **new_staff_fields(data, email, gender))
    db.add(staff)
    staff = _commit(db, staff, DUPLICATE_EMAIL_MESSAGE)
    logger.info("Vendor %s created staff %s with role %s", vendor_id, staff.id, role.id)
    return staff


def list_staff(
    db: Session,
    vendor_id: uuid.UUID,
    is_active: Optional[bool] = None,
    role_id: Optional[uuid.UUID] = None,
) -> List[VendorStaff]:
    query = (
        db.query(VendorStaff)
        .options(joinedload(VendorStaff.role))
        .filter(
            VendorStaff.vendor_id == vendor_id,
            VendorStaff.is_deleted == False,  # noqa: E712
        )
    )
    if is_active is not None:
        query = query.filter(VendorStaff.is_active == is_active)
    if role_id is not None:
        query = query.filter(VendorStaff.role_id == role_id)
    return query.order_by(VendorStaff.created_at.desc()).all()


def get_staff(db: Session, vendor_id: uuid.UUID, staff_id) -> VendorStaff:
    """Fetch a staff record; one owned by another vendor is reported as not found"""
    staff_uuid = parse_uuid(staff_id, "staff")
    staff = (
        db.query(VendorStaff)
        .options(joinedload(VendorStaff.role))
        .filter(VendorStaff.id == staff_uuid, VendorStaff.vendor_id == vendor_id)
        .first()
    )
    if not staff:
        raise NotFoundError("Staff not found")
    return staff


def update_staff(db: Session, vendor_id: uuid.UUID, staff_id, changes: Dict[str, Any]) -> VendorStaff:
    staff = get_staff(db, vendor_id, staff_id)
    replaced_img = apply_staff_changes(
        staff,
        changes,
        email_taken=lambda email: _email_taken(db, vendor_id, email, exclude_id=staff.id),
        resolve_role=lambda role_id: _assignable_role(db, vendor_id, role_id),
    )

    staff = _commit(db, staff, EMAIL_EXISTS_MESSAGE)
    if replaced_img:
        remove_upload(replaced_img)

    logger.info("Vendor %s updated staff %s", vendor_id, staff.id)
    return staff


def soft_delete_staff(db: Session, vendor_id: uuid.UUID, staff_id) -> VendorStaff:
    staff = get_staff(db, vendor_id, staff_id)
    staff.is_deleted = True
    staff.is_active = False
    db.commit()
    logger.info("Vendor %s soft-deleted staff %s", vendor_id, staff.id)
    return staff
