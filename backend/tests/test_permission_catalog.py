import pytest

from venue_backoffice.config.permissions import (
    ADMIN_PERMISSIONS,
    ADMIN_PERMISSION_KEYS,
    ADMIN_PERMISSIONS_BY_CATEGORY,
    ADMIN_ROLE_TEMPLATES,
    ALL_PERMISSIONS,
    ALL_PERMISSION_KEYS,
    PERMISSIONS_BY_CATEGORY,
    ROLE_TEMPLATES,
    is_known_permission,
    unknown_admin_permissions,
    unknown_permissions,
)
from venue_backoffice.services.permission_service import (
    available_admin_permissions,
    available_permissions,
    effective_permissions,
    has_permission,
)


def test_catalog_keys_are_unique_and_categorised():
    assert len(ALL_PERMISSION_KEYS) == len(set(ALL_PERMISSION_KEYS))
    grouped = [key for keys in PERMISSIONS_BY_CATEGORY.values() for key in keys]
    assert sorted(grouped) == sorted(ALL_PERMISSION_KEYS)
    for key, info in ALL_PERMISSIONS.items():
        assert key in PERMISSIONS_BY_CATEGORY[info["category"]]
        assert info["label"]


def test_role_templates_only_reference_catalog_keys():
    for name, keys in ROLE_TEMPLATES.items():
        assert unknown_permissions(keys) == [], name
    assert tuple(ROLE_TEMPLATES["VENDOR_OWNER"]) == ALL_PERMISSION_KEYS


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        ALL_PERMISSIONS["vendor_fly_drones"] = {"label": "x", "category": "x"}
    with pytest.raises(TypeError):
        ROLE_TEMPLATES["NEW"] = ()


def test_unknown_permissions_keeps_input_order():
    assert is_known_permission("vendor_view_bookings")
    assert not is_known_permission("vendor_fly_drones")
    assert unknown_permissions(["zz", "vendor_view_bookings", "aa"]) == ["zz", "aa"]


def test_owner_holds_full_catalog_regardless_of_grant():
    assert effective_permissions("vendor") == list(ALL_PERMISSION_KEYS)
    assert effective_permissions("vendor", ["vendor_view_bookings"]) == list(ALL_PERMISSION_KEYS)
    assert has_permission("vendor", [], "vendor_delete_venues")


def test_owner_check_short_circuits_for_keys_outside_the_catalog():
    assert has_permission("vendor", [], "vendor_fly_drones")
    assert has_permission("admin", [], "fly_drones")
    assert not has_permission("vendor_staff", ["vendor_view_bookings"], "vendor_fly_drones")


def test_staff_hold_exactly_their_grant():
    granted = ["vendor_view_bookings", "vendor_view_reviews"]
    assert effective_permissions("vendor_staff", granted) == granted
    assert has_permission("vendor_staff", granted, "vendor_view_reviews")
    assert not has_permission("vendor_staff", granted, "vendor_edit_venues")


@pytest.mark.parametrize("role", ["customer", "affiliate"])
def test_other_principals_hold_no_permissions(role):
    assert effective_permissions(role, ["vendor_view_bookings"]) == []
    assert not has_permission(role, ["vendor_view_bookings"], "vendor_view_bookings")


def test_available_permissions_payload():
    payload = available_permissions()
    assert payload["all_permissions"] == list(ALL_PERMISSION_KEYS)
    assert {p["key"] for p in payload["permissions"]} == set(ALL_PERMISSION_KEYS)
    assert payload["permissions_by_category"]["payouts"] == [
        "vendor_view_payouts", "vendor_edit_payouts", "vendor_request_payouts",
    ]
    assert set(payload["role_templates"]) == {
        "VENDOR_OWNER", "VENUE_MANAGER", "BOOKING_MANAGER", "ACCOUNTANT", "SUPPORT",
    }


def test_admin_catalog_is_grouped_and_separate_from_vendor_catalog():
    assert len(ADMIN_PERMISSION_KEYS) == len(set(ADMIN_PERMISSION_KEYS))
    assert not set(ADMIN_PERMISSION_KEYS) & set(ALL_PERMISSION_KEYS)
    grouped = [key for keys in ADMIN_PERMISSIONS_BY_CATEGORY.values() for key in keys]
    assert sorted(grouped) == sorted(ADMIN_PERMISSION_KEYS)
    assert ADMIN_PERMISSIONS_BY_CATEGORY["reviews"] == (
        "view_reviews", "edit_reviews", "delete_reviews", "approve_reviews", "reject_reviews",
    )
    assert ADMIN_PERMISSIONS["edit_legal_pages"]["label"] == "Edit Legal Pages"
    assert unknown_admin_permissions(["view_roles", "vendor_view_bookings"]) == ["vendor_view_bookings"]


def test_admin_role_templates():
    assert set(ADMIN_ROLE_TEMPLATES) == {
        "SUPER_ADMIN", "MANAGER", "SUPPORT", "CONTENT_MANAGER", "BOOKING_MANAGER",
    }
    assert tuple(ADMIN_ROLE_TEMPLATES["SUPER_ADMIN"]) == ADMIN_PERMISSION_KEYS
    for name, keys in ADMIN_ROLE_TEMPLATES.items():
        assert unknown_admin_permissions(keys) == [], name
    assert "view_roles" not in ADMIN_ROLE_TEMPLATES["MANAGER"]
    assert ADMIN_ROLE_TEMPLATES["CONTENT_MANAGER"][:5] == (
        "view_dashboard", "view_banners", "create_banners", "edit_banners", "delete_banners",
    )


def test_admin_and_platform_staff_resolution():
    assert effective_permissions("admin", ["view_roles"]) == list(ADMIN_PERMISSION_KEYS)
    assert effective_permissions("staff", ["view_roles"]) == ["view_roles"]
    assert has_permission("staff", ["view_roles"], "view_roles")
    assert not has_permission("staff", ["view_roles"], "create_roles")


def test_available_admin_permissions_payload():
    payload = available_admin_permissions()
    assert payload["all_permissions"] == list(ADMIN_PERMISSION_KEYS)
    assert payload["permissions_by_category"]["staff"] == [
        "view_staff", "create_staff", "edit_staff", "delete_staff",
    ]
    assert payload["role_templates"]["SUPPORT"][0] == "view_dashboard"
