"""
Admin Role Service

Platform roles bundle permissions from the admin catalog. Unlike vendor roles
they are not scoped: names are unique across the whole platform.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from venue_backoffice.config.permissions import unknown_admin_permissions
from venue_backoffice.exceptions import ConflictError, DependencyError, NotFoundError, ValidationError
from venue_backoffice.models.admin_role import AdminRole
from venue_backoffice.models.admin_staff import AdminStaff
from venue_backoffice.services.vendor_role_service import (
    DUPLICATE_NAME_MESSAGE,
    apply_role_changes,
    clean_description,
    clean_permissions,
    name_key,
    role_in_use_message,
)
from venue_backoffice.utils.security import parse_uuid

logger = logging.getLogger(__name__)


def _name_taken(db: Session, key: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
    query = db.query(AdminRole).filter(AdminRole.name_key == key)
    if exclude_id is not None:
        query = query.filter(AdminRole.id != exclude_id)
    return query.first() is not None


def _commit(db: Session, role: AdminRole) -> AdminRole:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_NAME_MESSAGE)
    db.refresh(role)
    return role


def create_role(db: Session, name: str, permissions, description: Optional[str] = None) -> AdminRole:
    if not name or not name.strip() or permissions is None:
        raise ValidationError("Name and permissions are required")
    cleaned = clean_permissions(permissions, unknown_admin_permissions)

    key = name_key(name)
    if _name_taken(db, key):
        raise ConflictError(DUPLICATE_NAME_MESSAGE)

    role = AdminRole(
        name=name.strip(),
        name_key=key,
        permissions=cleaned,
        description=clean_description(description),
    )
    db.add(role)
    role = _commit(db, role)
    logger.info("Created admin role %s (%d permissions)", role.id, len(cleaned))
    return role


def list_roles(db: Session, is_active: Optional[bool] = None) -> List[AdminRole]:
    query = db.query(AdminRole)
    if is_active is not None:
        query = query.filter(AdminRole.is_active == is_active)
    return query.order_by(AdminRole.created_at.desc()).all()


def get_role(db: Session, role_id) -> AdminRole:
    role = db.query(AdminRole).filter(AdminRole.id == parse_uuid(role_id, "role")).first()
    if not role:
        raise NotFoundError("Role not found")
    return role


def update_role(db: Session, role_id, changes: Dict[str, Any]) -> AdminRole:
    role = get_role(db, role_id)
    apply_role_changes(
        role,
        changes,
        lambda key: _name_taken(db, key, exclude_id=role.id),
        unknown_admin_permissions,
    )
    role = _commit(db, role)
    logger.info("Updated admin role %s", role.id)
    return role


def count_assigned_staff(db: Session, role_id: uuid.UUID) -> int:
    return db.query(AdminStaff).filter(
        AdminStaff.role_id == role_id,
        AdminStaff.is_deleted == False,  # noqa: E712
    ).count()


def delete_role(db: Session, role_id) -> None:
    """Delete a role; refused while any non-deleted platform staff member holds it"""
    role = get_role(db, role_id)

    staff_count = count_assigned_staff(db, role.id)
    if staff_count > 0:
        raise DependencyError(role_in_use_message(staff_count))

    db.delete(role)
    db.commit()
    logger.info("Deleted admin role %s", role_id)
