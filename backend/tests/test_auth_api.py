import pytest

from venue_backoffice.config.permissions import ALL_PERMISSION_KEYS
from venue_backoffice.models.user import UserRole, VendorStatus
from venue_backoffice.services.auth_service import decode_access_token
from conftest import auth_headers, login, make_role, make_staff, make_user

LOGIN_URL = "/api/v1/auth/login"
STAFF_LOGIN_URL = "/api/v1/vendor-staff/login"


def test_owner_creates_role_and_staff_then_staff_logs_in(client, owner_headers, vendor):
    role = client.post(
        "/api/v1/vendor-roles",
        json={"name": "Support", "permissions": ["vendor_view_bookings", "vendor_view_reviews"]},
        headers=owner_headers,
    )
    assert role.status_code == 201

    staff = client.post(
        "/api/v1/vendor-staff",
        json={
            "name": "Sam",
            "phone": "555-0101",
            "email": "s@x.com",
            "password": "secret123",
            "role_id": role.json()["id"],
        },
        headers=owner_headers,
    )
    assert staff.status_code == 201

    response = client.post(STAFF_LOGIN_URL, json={"email": "s@x.com", "password": "secret123"})

    assert response.status_code == 200
    claims = decode_access_token(response.json()["token"])
    assert claims["permissions"] == ["vendor_view_bookings", "vendor_view_reviews"]
    assert claims["role"] == "vendor_staff"
    assert claims["vendor_id"] == str(vendor.id)
    assert claims["role_id"] == role.json()["id"]


def test_staff_can_log_in_through_general_login(client, db, vendor):
    role = make_role(db, vendor, "Support", ["vendor_view_bookings"])
    make_staff(db, vendor, role, "s@x.com")

    body = login(client, "S@X.com")

    assert body["user"]["role"] == "vendor_staff"
    assert body["user"]["permissions"] == ["vendor_view_bookings"]


def test_wrong_password_and_unknown_email_look_the_same(client, db, vendor):
    role = make_role(db, vendor, "Support", ["vendor_view_bookings"])
    make_staff(db, vendor, role, "s@x.com")

    wrong = client.post(STAFF_LOGIN_URL, json={"email": "s@x.com", "password": "nope-nope"})
    unknown = client.post(STAFF_LOGIN_URL, json={"email": "ghost@x.com", "password": "nope-nope"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"error": "Invalid credentials"}

    general = client.post(LOGIN_URL, json={"email": "ghost@x.com", "password": "nope-nope"})
    assert general.status_code == 401
    assert general.json() == {"error": "Invalid credentials"}


def test_staff_login_ignores_platform_users(client, vendor):
    response = client.post(STAFF_LOGIN_URL, json={"email": vendor.email, "password": "secret123"})
    assert response.status_code == 401


@pytest.mark.parametrize("fields, role_active, message", [
    ({"is_deleted": True}, True, "Your account has been deleted. Please contact support."),
    ({"is_active": False}, True, "Your account is inactive. Please contact support."),
    ({}, False, "Your role is inactive. Please contact support."),
])
def test_blocked_staff_cannot_log_in(client, db, vendor, fields, role_active, message):
    role = make_role(db, vendor, "Support", ["vendor_view_bookings"], is_active=role_active)
    make_staff(db, vendor, role, "s@x.com", **fields)

    response = client.post(STAFF_LOGIN_URL, json={"email": "s@x.com", "password": "secret123"})

    assert response.status_code == 403
    assert response.json() == {"error": message}


def test_live_staff_account_wins_over_deleted_one(client, db, vendor):
    other = make_user(db, "other@example.com")
    old_role = make_role(db, vendor, "Old", ["vendor_view_bookings"])
    new_role = make_role(db, other, "New", ["vendor_view_payouts"])
    make_staff(db, vendor, old_role, "s@x.com", is_deleted=True, is_active=False)
    make_staff(db, other, new_role, "s@x.com")

    body = login(client, "s@x.com", path=STAFF_LOGIN_URL)

    assert body["staff"]["vendor_id"] == str(other.id)


def test_owner_login_carries_full_catalog(client, vendor):
    body = login(client, vendor.email)

    assert body["user"]["role"] == "vendor"
    assert body["user"]["vendor_id"] == str(vendor.id)
    assert body["user"]["permissions"] == list(ALL_PERMISSION_KEYS)
    claims = decode_access_token(body["token"])
    assert claims["permissions"] == list(ALL_PERMISSION_KEYS)
    assert claims["type"] == "access"


def test_customer_login_has_no_vendor_permissions(client, db):
    make_user(db, "buyer@example.com", role=UserRole.CUSTOMER)

    body = login(client, "buyer@example.com")

    assert body["user"]["permissions"] is None
    assert "permissions" not in decode_access_token(body["token"])


def test_rejected_vendor_cannot_log_in(client, db):
    make_user(db, "rejected@example.com", vendor_status=VendorStatus.REJECTED)

    response = client.post(LOGIN_URL, json={"email": "rejected@example.com", "password": "secret123"})

    assert response.status_code == 403
    assert "rejected" in response.json()["error"]


def test_role_change_reaches_staff_on_next_login_only(client, db, vendor, owner_headers):
    role = make_role(db, vendor, "Support", ["vendor_view_bookings"])
    make_staff(db, vendor, role, "s@x.com")
    old_token = login(client, "s@x.com")["token"]

    updated = client.put(
        f"/api/v1/vendor-roles/{role.id}",
        json={"permissions": ["vendor_view_bookings", "vendor_view_payouts"]},
        headers=owner_headers,
    )
    assert updated.status_code == 200

    stale = client.get("/api/v1/auth/permissions/me", headers=auth_headers(old_token)).json()
    assert stale["permissions"] == ["vendor_view_bookings"]

    new_token = login(client, "s@x.com")["token"]
    fresh = client.get("/api/v1/auth/permissions/me", headers=auth_headers(new_token)).json()
    assert fresh["permissions"] == ["vendor_view_bookings", "vendor_view_payouts"]


def test_register_customer_and_vendor(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Vera", "email": "Vera@Example.com", "password": "secret123", "role": "vendor"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Registration successful"
    assert body["user"]["email"] == "vera@example.com"
    assert body["user"]["permissions"] == list(ALL_PERMISSION_KEYS)

    again = client.post(
        "/api/v1/auth/register",
        json={"name": "Vera", "email": "vera@example.com", "password": "secret123", "role": "customer"},
    )
    assert again.status_code == 409


@pytest.mark.parametrize("payload, message", [
    ({"name": "A", "email": "a@example.com", "password": "secret123", "role": "admin"}, "Invalid role"),
    ({"name": "A", "email": "bad", "password": "secret123"}, "Invalid email format"),
    ({"name": "A", "email": "a@venue.local", "password": "secret123"}, "Invalid email format"),
    ({"name": "A", "email": "a@example.com", "password": "123"}, "at least 6 characters"),
])
def test_register_validation(client, payload, message):
    response = client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 400
    assert message in response.json()["error"]


def test_profile_for_owner_and_staff(client, db, vendor, owner_headers):
    owner = client.get("/api/v1/auth/profile", headers=owner_headers).json()
    assert owner["email"] == vendor.email
    assert owner["vendor_status"] == "approved"

    role = make_role(db, vendor, "Support", ["vendor_view_bookings"])
    make_staff(db, vendor, role, "s@x.com", name="Sam")
    staff_headers = auth_headers(login(client, "s@x.com")["token"])

    staff = client.get("/api/v1/auth/profile", headers=staff_headers).json()
    assert staff["name"] == "Sam"
    assert staff["role"]["name"] == "Support"


def test_change_password(client, vendor, owner_headers):
    wrong = client.put(
        "/api/v1/auth/change-password",
        json={"current_password": "not-it", "new_password": "brandnew"},
        headers=owner_headers,
    )
    assert wrong.status_code == 401
    assert wrong.json() == {"error": "Current password is incorrect"}

    short = client.put(
        "/api/v1/auth/change-password",
        json={"current_password": "secret123", "new_password": "new"},
        headers=owner_headers,
    )
    assert short.status_code == 400

    ok = client.put(
        "/api/v1/auth/change-password",
        json={"current_password": "secret123", "new_password": "brandnew"},
        headers=owner_headers,
    )
    assert ok.status_code == 200
    login(client, vendor.email, "brandnew")


def test_missing_and_invalid_tokens(client):
    missing = client.get("/api/v1/auth/permissions/me")
    assert missing.status_code == 401
    assert missing.json() == {"error": "Unauthorized"}

    invalid = client.get("/api/v1/auth/permissions/me", headers=auth_headers("garbage"))
    assert invalid.status_code == 401
    assert invalid.json() == {"error": "Invalid token"}


def test_admin_sets_vendor_status(client, db, vendor):
    make_user(db, "admin@example.com", role=UserRole.ADMIN)
    admin_headers = auth_headers(login(client, "admin@example.com")["token"])

    response = client.put(
        f"/api/v1/admin/vendors/{vendor.id}/status",
        json={"vendor_status": "rejected"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["vendor_status"] == "rejected"

    blocked = client.post(LOGIN_URL, json={"email": vendor.email, "password": "secret123"})
    assert blocked.status_code == 403

    listed = client.get("/api/v1/admin/vendors", params={"vendor_status": "rejected"}, headers=admin_headers)
    assert [v["email"] for v in listed.json()] == [vendor.email]


def test_vendor_cannot_use_admin_routes(client, vendor, owner_headers):
    response = client.put(
        f"/api/v1/admin/vendors/{vendor.id}/status",
        json={"vendor_status": "approved"},
        headers=owner_headers,
    )
    assert response.status_code == 403


def test_health_and_security_headers(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
