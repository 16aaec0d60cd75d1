"""
Permission registry: the single source of truth for every permission key,
its label and category, and the predefined role templates.

Two independent catalogs live here. The vendor catalog governs vendor owners
and their staff; the admin catalog governs platform admins and platform staff.

The tables are built once at import and exposed read-only.
"""
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

VENDOR_OWNER_ROLE = "vendor"
VENDOR_STAFF_ROLE = "vendor_staff"
PLATFORM_ADMIN_ROLE = "admin"
PLATFORM_STAFF_ROLE = "staff"

_PERMISSION_TABLE = (
    # Dashboard
    ("vendor_view_dashboard",       "View Dashboard",        "dashboard"),

    # Calendar
    ("vendor_view_calendar",        "View Calendar",         "calendar"),
    ("vendor_manage_calendar",      "Manage Calendar",       "calendar"),

    # Venues
    ("vendor_view_venues",          "View Venues",           "venues"),
    ("vendor_create_venues",        "Create Venues",         "venues"),
    ("vendor_edit_venues",          "Edit Venues",           "venues"),
    ("vendor_delete_venues",        "Delete Venues",         "venues"),
    ("vendor_toggle_venues",        "Toggle Venues",         "venues"),

    # Bookings
    ("vendor_view_bookings",        "View Bookings",         "bookings"),
    ("vendor_create_bookings",      "Create Bookings",       "bookings"),
    ("vendor_edit_bookings",        "Edit Bookings",         "bookings"),
    ("vendor_approve_bookings",     "Approve Bookings",      "bookings"),
    ("vendor_reject_bookings",      "Reject Bookings",       "bookings"),
    ("vendor_cancel_bookings",      "Cancel Bookings",       "bookings"),

    # Payouts
    ("vendor_view_payouts",         "View Payouts",          "payouts"),
    ("vendor_edit_payouts",         "Edit Payouts",          "payouts"),
    ("vendor_request_payouts",      "Request Payouts",       "payouts"),

    # Ledger
    ("vendor_view_ledger",          "View Ledger",           "ledger"),
    ("vendor_create_ledger",        "Create Ledger Entries", "ledger"),
    ("vendor_edit_ledger",          "Edit Ledger Entries",   "ledger"),
    ("vendor_delete_ledger",        "Delete Ledger Entries", "ledger"),

    # Blocked dates
    ("vendor_view_blocked_dates",   "View Blocked Dates",    "blocked_dates"),
    ("vendor_create_blocked_dates", "Create Blocked Dates",  "blocked_dates"),
    ("vendor_edit_blocked_dates",   "Edit Blocked Dates",    "blocked_dates"),
    ("vendor_delete_blocked_dates", "Delete Blocked Dates",  "blocked_dates"),

    # Reviews
    ("vendor_view_reviews",         "View Reviews",          "reviews"),
    ("vendor_reply_reviews",        "Reply to Reviews",      "reviews"),
    ("vendor_edit_reviews",         "Edit Reviews",          "reviews"),
    ("vendor_delete_reviews",       "Delete Reviews",        "reviews"),

    # Profile
    ("vendor_view_profile",         "View Profile",          "profile"),
    ("vendor_edit_profile",         "Edit Profile",          "profile"),
    ("vendor_change_password",      "Change Password",       "profile"),
)

ALL_PERMISSIONS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    key: MappingProxyType({"label": label, "category": category})
    for key, label, category in _PERMISSION_TABLE
})

ALL_PERMISSION_KEYS: Tuple[str, ...] = tuple(key for key, _, _ in _PERMISSION_TABLE)


def _group_by_category(table) -> Dict[str, Tuple[str, ...]]:
    grouped: Dict[str, List[str]] = {}
    for key, _, category in table:
        grouped.setdefault(category, []).append(key)
    return {category: tuple(keys) for category, keys in grouped.items()}


PERMISSIONS_BY_CATEGORY: Mapping[str, Tuple[str, ...]] = MappingProxyType(_group_by_category(_PERMISSION_TABLE))

# Predefined permission bundles offered as shortcuts when creating a role
ROLE_TEMPLATES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "VENDOR_OWNER": ALL_PERMISSION_KEYS,
    "VENUE_MANAGER": (
        "vendor_view_dashboard",
        "vendor_view_venues", "vendor_create_venues", "vendor_edit_venues",
        "vendor_delete_venues", "vendor_toggle_venues",
        "vendor_view_bookings", "vendor_create_bookings", "vendor_edit_bookings",
        "vendor_approve_bookings", "vendor_reject_bookings",
        "vendor_view_blocked_dates", "vendor_create_blocked_dates", "vendor_delete_blocked_dates",
        "vendor_view_reviews", "vendor_reply_reviews",
    ),
    "BOOKING_MANAGER": (
        "vendor_view_dashboard",
        "vendor_view_bookings", "vendor_create_bookings", "vendor_edit_bookings",
        "vendor_approve_bookings", "vendor_reject_bookings",
        "vendor_view_blocked_dates", "vendor_create_blocked_dates", "vendor_delete_blocked_dates",
        "vendor_view_venues",
    ),
    "ACCOUNTANT": (
        "vendor_view_dashboard",
        "vendor_view_payouts",
        "vendor_view_ledger", "vendor_create_ledger", "vendor_edit_ledger", "vendor_delete_ledger",
    ),
    "SUPPORT": (
        "vendor_view_dashboard",
        "vendor_view_bookings",
        "vendor_view_reviews", "vendor_reply_reviews",
    ),
})


def is_known_permission(key: str) -> bool:
    return key in ALL_PERMISSIONS


def unknown_permissions(keys: Iterable[str]) -> List[str]:
    """Return the keys that are not part of the catalog, in input order."""
    return [key for key in keys if key not in ALL_PERMISSIONS]



# Platform admin catalog

def _crud(category: str, label: str, actions=("view", "create", "edit", "delete")):
    return tuple(
        (f"{action}_{category}", f"{action.capitalize()} {label}", category)
        for action in actions
    )


_ADMIN_PERMISSION_TABLE = (
    (("view_dashboard", "View Dashboard", "dashboard"),)
    + _crud("users", "Users")
    + _crud("vendors", "Vendors", ("view", "create", "edit", "approve", "reject", "delete"))
    + _crud("venues", "Venues", ("view", "create", "edit", "approve", "reject", "delete"))
    + _crud("bookings", "Bookings", ("view", "edit", "approve", "reject"))
    + _crud("leads", "Leads", ("view", "edit", "convert"))
    + _crud("payouts", "Payouts", ("view", "edit"))
    + (("view_analytics", "View Analytics", "analytics"),)
    + _crud("settings", "Settings", ("view", "edit"))
    + _crud("banners", "Banners")
    + _crud("videos", "Videos")
    + _crud("testimonials", "Testimonials")
    + _crud("faqs", "FAQs")
    + _crud("company", "Company", ("view", "edit"))
    + _crud("legal_pages", "Legal Pages", ("view", "edit"))
    + _crud("contacts", "Contacts", ("view", "edit", "delete"))
    + _crud("reviews", "Reviews", ("view", "edit", "delete", "approve", "reject"))
    + _crud("review_replies", "Review Replies")
    + _crud("categories", "Categories")
    + _crud("menus", "Menus")
    + _crud("roles", "Roles")
    + _crud("staff", "Staff")
)

ADMIN_PERMISSIONS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    key: MappingProxyType({"label": label, "category": category})
    for key, label, category in _ADMIN_PERMISSION_TABLE
})

ADMIN_PERMISSION_KEYS: Tuple[str, ...] = tuple(key for key, _, _ in _ADMIN_PERMISSION_TABLE)

ADMIN_PERMISSIONS_BY_CATEGORY: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    _group_by_category(_ADMIN_PERMISSION_TABLE)
)

ADMIN_ROLE_TEMPLATES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "SUPER_ADMIN": ADMIN_PERMISSION_KEYS,
    # Everything day to day, but no role or staff management
    "MANAGER": (
        "view_dashboard",
        "view_users", "edit_users",
        "view_vendors", "edit_vendors", "approve_vendors", "reject_vendors",
        "view_venues", "edit_venues", "approve_venues", "reject_venues",
        "view_bookings", "edit_bookings", "approve_bookings", "reject_bookings",
        "view_leads", "edit_leads", "convert_leads",
        "view_payouts", "edit_payouts",
        "view_analytics",
        "view_banners", "edit_banners",
        "view_videos", "edit_videos",
        "view_testimonials", "edit_testimonials",
        "view_faqs", "edit_faqs",
        "view_company",
        "view_legal_pages",
        "view_contacts", "edit_contacts",
        "view_reviews", "edit_reviews", "delete_reviews",
        "view_categories", "create_categories", "edit_categories", "delete_categories",
        "view_menus", "create_menus", "edit_menus", "delete_menus",
    ),
    "SUPPORT": (
        "view_dashboard",
        "view_users",
        "view_bookings",
        "view_leads", "edit_leads",
        "view_contacts", "edit_contacts",
        "view_reviews",
    ),
    "CONTENT_MANAGER": (
        ("view_dashboard",)
        + tuple(
            key for key, _, category in _ADMIN_PERMISSION_TABLE
            if category in ("banners", "videos", "testimonials", "faqs", "categories", "menus")
        )
    ),
    "BOOKING_MANAGER": (
        "view_dashboard",
        "view_bookings", "edit_bookings", "approve_bookings", "reject_bookings",
        "view_leads", "edit_leads", "convert_leads",
        "view_venues", "view_vendors",
        "approve_venues", "reject_venues",
        "approve_vendors", "reject_vendors",
        "view_reviews", "edit_reviews", "delete_reviews",
        "view_review_replies", "create_review_replies", "edit_review_replies", "delete_review_replies",
    ),
})


def unknown_admin_permissions(keys: Iterable[str]) -> List[str]:
    """Return the keys that are not part of the admin catalog, in input order."""
    return [key for key in keys if key not in ADMIN_PERMISSIONS]
