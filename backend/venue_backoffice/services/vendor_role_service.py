"""
Vendor Role Service

All functions take the vendor id of the authenticated owner; every query is
scoped by it so one vendor can never see or touch another vendor's roles.
"""
import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from venue_backoffice.config.permissions import unknown_permissions
from venue_backoffice.exceptions import ConflictError, DependencyError, NotFoundError, ValidationError
from venue_backoffice.models.vendor_role import VendorRole
from venue_backoffice.models.vendor_staff import VendorStaff
from venue_backoffice.utils.security import parse_uuid

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "Role with this name already exists"


def name_key(name: str) -> str:
    return name.strip().lower()


def clean_description(description: Optional[str]) -> Optional[str]:
    return description.strip() if description and description.strip() else None


def clean_permissions(permissions, unknown: Callable[[List[str]], List[str]] = unknown_permissions) -> List[str]:
    """
    Trim, de-duplicate (first occurrence wins) and validate permission keys
    against a catalog (the vendor catalog unless ``unknown`` says otherwise).
    Order is otherwise preserved.
    """
    if not isinstance(permissions, list) or not permissions:
        raise ValidationError("Permissions must be a non-empty array")

    cleaned: List[str] = []
    seen = set()
    for permission in permissions:
        key = str(permission).strip()
        if key and key not in seen:
            seen.add(key)
            cleaned.append(key)

    if not cleaned:
        raise ValidationError("Permissions must be a non-empty array")

    not_in_catalog = unknown(cleaned)
    if not_in_catalog:
        raise ValidationError(f"Unknown permissions: {', '.join(not_in_catalog)}")
    return cleaned


def _name_taken(db: Session, vendor_id: uuid.UUID, key: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
    query = db.query(VendorRole).filter(
        VendorRole.vendor_id == vendor_id,
        VendorRole.name_key == key,
    )
    if exclude_id is not None:
        query = query.filter(VendorRole.id != exclude_id)
    return query.first() is not None


def _commit(db: Session, role: VendorRole) -> VendorRole:
    # The unique (vendor_id, name_key) constraint settles concurrent writers
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_NAME_MESSAGE)
    db.refresh(role)
    return role


def create_role(
    db: Session,
    vendor_id: uuid.UUID,
    name: str,
    permissions,
    description: Optional[str] = None,
) -> VendorRole:
    if not name or not name.strip() or permissions is None:
        raise ValidationError("Name and permissions are required")
    cleaned = clean_permissions(permissions)

    key = name_key(name)
    if _name_taken(db, vendor_id, key):
        raise ConflictError(DUPLICATE_NAME_MESSAGE)

    role = VendorRole(
        vendor_id=vendor_id,
        name=name.strip(),
        name_key=key,
        permissions=cleaned,
        description=clean_description(description),
    )
    db.add(role)
    role = _commit(db, role)
    logger.info("Vendor %s created role %s (%d permissions)", vendor_id, role.id, len(cleaned))
    return role


def list_roles(db: Session, vendor_id: uuid.UUID, is_active: Optional[bool] = None) -> List[VendorRole]:
    query = db.query(VendorRole).filter(VendorRole.vendor_id == vendor_id)
    if is_active is not None:
        query = query.filter(VendorRole.is_active == is_active)
    return query.order_by(VendorRole.created_at.desc()).all()


def get_role(db: Session, vendor_id: uuid.UUID, role_id) -> VendorRole:
    """Fetch a role; a role owned by another vendor is reported as not found"""
    role_uuid = parse_uuid(role_id, "role")
    role = db.query(VendorRole).filter(
        VendorRole.id == role_uuid,
        VendorRole.vendor_id == vendor_id,
    ).first()
    if not role:
        raise NotFoundError("Role not found")
    return role


def apply_role_changes(
    role,
    changes: Dict[str, Any],
    name_taken: Callable[[str], bool],
    unknown: Callable[[List[str]], List[str]] = unknown_permissions,
) -> None:
    """
    Apply the fields present in ``changes`` (name, permissions, description,
    is_active) to a vendor or admin role. ``name_taken`` reports whether a
    name key already belongs to another role in the same scope.
    """
    name = changes.get("name")
    if name is not None:
        if not name.strip():
            raise ValidationError("Name cannot be empty")
        key = name_key(name)
        if key != role.name_key and name_taken(key):
            raise ConflictError(DUPLICATE_NAME_MESSAGE)
        role.name = name.strip()
        role.name_key = key

    if "permissions" in changes:
        role.permissions = clean_permissions(changes["permissions"], unknown)

    if "description" in changes:
        role.description = clean_description(changes["description"])

    if changes.get("is_active") is not None:
        role.is_active = changes["is_active"]


def update_role(db: Session, vendor_id: uuid.UUID, role_id, changes: Dict[str, Any]) -> VendorRole:
    role = get_role(db, vendor_id, role_id)
    apply_role_changes(role, changes, lambda key: _name_taken(db, vendor_id, key, exclude_id=role.id))
    role = _commit(db, role)
    logger.info("Vendor %s updated role %s", vendor_id, role.id)
    return role


def role_in_use_message(staff_count: int) -> str:
    return (
        f"Cannot delete role. {staff_count} staff member(s) are using this role. "
        "Please reassign them first."
    )


def count_assigned_staff(db: Session, vendor_id: uuid.UUID, role_id: uuid.UUID) -> int:
    """Number of non-deleted staff of this vendor currently assigned the role"""
    return db.query(VendorStaff).filter(
        VendorStaff.vendor_id == vendor_id,
        VendorStaff.role_id == role_id,
        VendorStaff.is_deleted == False,  # noqa: E712
    ).count()


def delete_role(db: Session, vendor_id: uuid.UUID, role_id) -> None:
    role = get_role(db, vendor_id, role_id)

    staff_count = count_assigned_staff(db, vendor_id, role.id)
    if staff_count > 0:
        raise DependencyError(role_in_use_message(staff_count))

    db.delete(role)
    db.commit()
    logger.info("Vendor %s deleted role %s", vendor_id, role_id)
