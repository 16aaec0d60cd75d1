"""
Admin Staff Service

Platform staff log in to the admin panel with the permissions of one admin
role. Emails are unique across all platform staff; deletion only flags the row.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from venue_backoffice.config import settings
from venue_backoffice.exceptions import ConflictError, NotFoundError
from venue_backoffice.models.admin_role import AdminRole
from venue_backoffice.models.admin_staff import AdminStaff
from venue_backoffice.services.vendor_staff_service import (
    DUPLICATE_EMAIL_MESSAGE,
    EMAIL_EXISTS_MESSAGE,
    apply_staff_changes,
    check_assignable,
    check_new_staff,
    clean_gender,
    new_staff_fields,
)
from venue_backoffice.utils.security import parse_uuid
from venue_backoffice.utils.uploads import remove_upload

logger = logging.getLogger(__name__)


def _assignable_role(db: Session, role_id) -> AdminRole:
    role = db.query(AdminRole).filter(AdminRole.id == parse_uuid(role_id, "role")).first()
    check_assignable(role)
    return role


def _email_taken(db: Session, email: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
    query = db.query(AdminStaff).filter(AdminStaff.email == email)
    if exclude_id is not None:
        query = query.filter(AdminStaff.id != exclude_id)
    return query.first() is not None


def _commit(db: Session, staff: AdminStaff, conflict_message: str) -> AdminStaff:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(conflict_message)
    db.refresh(staff)
    return staff


def create_staff(db: Session, data) -> AdminStaff:
    email = check_new_staff(data)
    role = _assignable_role(db, data.role_id)
    gender = clean_gender(data.gender)

    if _email_taken(db, email):
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

    staff = AdminStaff(
        role_id=role.id,
        **new_staff_fields(data, email, gender, settings.ADMIN_STAFF_IMAGE_URL_PREFIX),
    )
    db.add(staff)
    staff = _commit(db, staff, DUPLICATE_EMAIL_MESSAGE)
    logger.info("Created platform staff %s with role %s", staff.id, role.id)
    return staff


def list_staff(
    db: Session,
    is_active: Optional[bool] = None,
    role_id: Optional[uuid.UUID] = None,
) -> List[AdminStaff]:
    query = (
        db.query(AdminStaff)
        .options(joinedload(AdminStaff.role))
        .filter(AdminStaff.is_deleted == False)  # noqa: E712
    )
    if is_active is not None:
        query = query.filter(AdminStaff.is_active == is_active)
    if role_id is not None:
        query = query.filter(AdminStaff.role_id == role_id)
    return query.order_by(AdminStaff.created_at.desc()).all()


def get_staff(db: Session, staff_id) -> AdminStaff:
    staff = (
        db.query(AdminStaff)
        .options(joinedload(AdminStaff.role))
        .filter(AdminStaff.id == parse_uuid(staff_id, "staff"))
        .first()
    )
    if not staff:
        raise NotFoundError("Staff not found")
    return staff


def update_staff(db: Session, staff_id, changes: Dict[str, Any]) -> AdminStaff:
    staff = get_staff(db, staff_id)
    replaced_img = apply_staff_changes(
        staff,
        changes,
        email_taken=lambda email: _email_taken(db, email, exclude_id=staff.id),
        resolve_role=lambda role_id: _assignable_role(db, role_id),
        image_prefix=settings.ADMIN_STAFF_IMAGE_URL_PREFIX,
    )

    staff = _commit(db, staff, EMAIL_EXISTS_MESSAGE)
    if replaced_img:
        remove_upload(replaced_img)

    logger.info("Updated platform staff %s", staff.id)
    return staff


def soft_delete_staff(db: Session, staff_id) -> AdminStaff:
    staff = get_staff(db, staff_id)
    staff.is_deleted = True
    staff.is_active = False
    db.commit()
    logger.info("Soft-deleted platform staff %s", staff.id)
    return staff
