"""
Permission resolution and the vendor navigation gate
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from venue_backoffice.config.navigation import ALWAYS_VISIBLE_PERMISSIONS, VENDOR_NAVIGATION
from venue_backoffice.config.permissions import (
    ADMIN_PERMISSIONS,
    ADMIN_PERMISSION_KEYS,
    ADMIN_PERMISSIONS_BY_CATEGORY,
    ADMIN_ROLE_TEMPLATES,
    ALL_PERMISSIONS,
    ALL_PERMISSION_KEYS,
    PERMISSIONS_BY_CATEGORY,
    PLATFORM_ADMIN_ROLE,
    PLATFORM_STAFF_ROLE,
    ROLE_TEMPLATES,
    VENDOR_OWNER_ROLE,
    VENDOR_STAFF_ROLE,
)

# Account roles that hold their whole catalog without any grant
OWNER_CATALOGS: Mapping[str, Tuple[str, ...]] = {
    VENDOR_OWNER_ROLE: ALL_PERMISSION_KEYS,
    PLATFORM_ADMIN_ROLE: ADMIN_PERMISSION_KEYS,
}

STAFF_ROLES = (VENDOR_STAFF_ROLE, PLATFORM_STAFF_ROLE)


def effective_permissions(role: str, granted: Iterable[str] = ()) -> List[str]:
    """
    Resolve the permission set a principal actually holds.

    Vendor owners and platform admins hold their whole catalog regardless of
    what they were granted, staff of either kind hold exactly what their role
    grants, and any other principal (customer, affiliate) holds nothing.
    """
    if role in OWNER_CATALOGS:
        return list(OWNER_CATALOGS[role])
    if role in STAFF_ROLES:
        return list(granted)
    return []


def has_permission(role: str, granted: Iterable[str], key: str) -> bool:
    if role in OWNER_CATALOGS:
        return True
    if role in STAFF_ROLES:
        return key in set(granted)
    return False


def _catalog_payload(permissions, keys, by_category, templates) -> Dict[str, Any]:
    return {
        "all_permissions": list(keys),
        "permissions": [
            {"key": key, "label": info["label"], "category": info["category"]}
            for key, info in permissions.items()
        ],
        "permissions_by_category": {category: list(ks) for category, ks in by_category.items()},
        "role_templates": {name: list(ks) for name, ks in templates.items()},
    }


def available_permissions() -> Dict[str, Any]:
    """Vendor catalog, category grouping and role templates as plain lists"""
    return _catalog_payload(ALL_PERMISSIONS, ALL_PERMISSION_KEYS, PERMISSIONS_BY_CATEGORY, ROLE_TEMPLATES)


def available_admin_permissions() -> Dict[str, Any]:
    return _catalog_payload(
        ADMIN_PERMISSIONS, ADMIN_PERMISSION_KEYS, ADMIN_PERMISSIONS_BY_CATEGORY, ADMIN_ROLE_TEMPLATES
    )


def _filter_item(item: Mapping[str, Any], role: str, granted: frozenset) -> Optional[Dict[str, Any]]:
    is_owner = role == VENDOR_OWNER_ROLE
    if item["owner_only"] and not is_owner:
        return None

    permission = item["permission"]
    if permission and not is_owner:
        if permission not in ALWAYS_VISIBLE_PERMISSIONS and permission not in granted:
            return None

    children = []
    for child in item["children"]:
        visible = _filter_item(child, role, granted)
        if visible is not None:
            children.append(visible)

    # A group with nothing left to show is hidden as well
    if item["children"] and not children:
        return None

    return {
        "name": item["name"],
        "href": item["href"],
        "permission": permission,
        "owner_only": item["owner_only"],
        "children": children,
    }


def filter_navigation(
    role: str,
    permissions: Iterable[str],
    items: Iterable[Mapping[str, Any]] = VENDOR_NAVIGATION,
) -> List[Dict[str, Any]]:
    """
    Return the part of the navigation tree the principal should be shown.

    This only decides what to display; route dependencies remain the
    authority on what a principal may actually do.
    """
    granted = frozenset(effective_permissions(role, permissions))
    result = []
    for item in items:
        visible = _filter_item(item, role, granted)
        if visible is not None:
            result.append(visible)
    return result
