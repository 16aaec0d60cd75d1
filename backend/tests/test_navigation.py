from venue_backoffice.services.permission_service import filter_navigation
from conftest import auth_headers, login, make_role, make_staff


def _names(items):
    return [item["name"] for item in items]


def _find(items, name):
    return next(item for item in items if item["name"] == name)


def test_owner_sees_everything():
    items = filter_navigation("vendor", [])
    names = _names(items)
    assert "Staff" in names
    assert "Payouts" in names
    assert _names(_find(items, "Staff")["children"]) == ["Roles", "Staff"]


def test_staff_never_see_owner_only_entries():
    items = filter_navigation("vendor_staff", ["vendor_view_bookings"])
    assert "Staff" not in _names(items)


def test_staff_menu_follows_granted_permissions():
    items = filter_navigation("vendor_staff", ["vendor_view_bookings", "vendor_view_reviews"])
    names = _names(items)
    assert "Bookings" in names
    assert "Reviews" in names
    assert "Venues" not in names
    assert "Payouts" not in names


def test_dashboard_is_always_visible_and_hides_ledger_without_grant():
    items = filter_navigation("vendor_staff", [])
    dashboard = _find(items, "Dashboard")
    assert _names(dashboard["children"]) == ["Overview"]

    items = filter_navigation("vendor_staff", ["vendor_view_ledger"])
    assert _names(_find(items, "Dashboard")["children"]) == ["Overview", "Ledger"]


def test_group_with_no_visible_children_is_hidden():
    tree = [{
        "name": "Group",
        "href": "/g",
        "permission": None,
        "owner_only": False,
        "children": [{
            "name": "Child",
            "href": "/g/c",
            "permission": "vendor_view_payouts",
            "owner_only": False,
            "children": [],
        }],
    }]
    assert filter_navigation("vendor_staff", [], items=tree) == []
    assert _names(filter_navigation("vendor_staff", ["vendor_view_payouts"], items=tree)) == ["Group"]


def test_navigation_endpoint_for_staff(client, db, vendor):
    role = make_role(db, vendor, "Support", ["vendor_view_bookings"])
    make_staff(db, vendor, role, "s@x.com")
    token = login(client, "s@x.com")["token"]

    response = client.get("/api/v1/vendor/navigation", headers=auth_headers(token))

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "vendor_staff"
    assert "Bookings" in _names(body["items"])
    assert "Staff" not in _names(body["items"])


def test_navigation_endpoint_rejects_non_vendor(client, db):
    from venue_backoffice.models.user import UserRole
    from conftest import make_user

    make_user(db, "buyer@example.com", role=UserRole.CUSTOMER)
    token = login(client, "buyer@example.com")["token"]

    response = client.get("/api/v1/vendor/navigation", headers=auth_headers(token))
    assert response.status_code == 403
