import asyncio
import uuid

import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient

from venue_backoffice.dependencies import (
    require_admin_permission,
    require_permission,
    require_role,
    vendor_scope,
)
from venue_backoffice.exceptions import register_exception_handlers
from venue_backoffice.schemas.auth import TokenPayload
from venue_backoffice.utils.security import create_access_token
from conftest import auth_headers, login, make_role, make_staff


def _principal(role: str, permissions=(), vendor_id=None) -> TokenPayload:
    return TokenPayload(
        sub=str(uuid.uuid4()),
        email="someone@example.com",
        role=role,
        vendor_id=vendor_id,
        permissions=list(permissions),
        exp=9999999999,
        type="access",
    )


def _build_client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.put("/venues/{venue_id}")
    async def edit_venue(venue_id: str, principal: TokenPayload = Depends(require_permission("vendor_edit_venues"))):
        return {"venue_id": venue_id, "by": principal.sub}

    return TestClient(app)


def test_require_role_denies_other_roles():
    checker = require_role(["vendor"])

    with pytest.raises(HTTPException) as exc:
        asyncio.run(checker(principal=_principal("vendor_staff")))

    assert exc.value.status_code == 403
    assert exc.value.detail == "Access denied. Required roles: vendor"


def test_require_role_allows_listed_role():
    principal = _principal("vendor")
    assert asyncio.run(require_role(["vendor", "vendor_staff"])(principal=principal)) is principal


def test_require_permission_names_the_missing_key():
    checker = require_permission("vendor_view_bookings", "vendor_edit_venues")

    with pytest.raises(HTTPException) as exc:
        asyncio.run(checker(principal=_principal("vendor_staff", ["vendor_view_bookings"])))

    assert exc.value.status_code == 403
    assert exc.value.detail == "Permission required: vendor_edit_venues"


def test_require_permission_owner_always_passes():
    principal = _principal("vendor")
    assert asyncio.run(require_permission("vendor_delete_venues")(principal=principal)) is principal


def test_require_permission_ignores_claims_on_non_vendor_roles():
    checker = require_permission("vendor_view_bookings")

    with pytest.raises(HTTPException):
        asyncio.run(checker(principal=_principal("customer", ["vendor_view_bookings"])))


def test_vendor_permission_gate_refuses_platform_principals():
    checker = require_permission("vendor_view_bookings")

    for role in ("admin", "staff"):
        with pytest.raises(HTTPException) as exc:
            asyncio.run(checker(principal=_principal(role, ["vendor_view_bookings"])))
        assert exc.value.detail == "Permission required: vendor_view_bookings"


def test_admin_permission_gate():
    checker = require_admin_permission("view_roles", "create_roles")

    admin = _principal("admin")
    assert asyncio.run(checker(principal=admin)) is admin

    with pytest.raises(HTTPException) as exc:
        asyncio.run(checker(principal=_principal("staff", ["view_roles"])))
    assert exc.value.status_code == 403
    assert exc.value.detail == "Permission required: create_roles"

    with pytest.raises(HTTPException):
        asyncio.run(checker(principal=_principal("vendor")))


def test_vendor_scope_requires_vendor_claim():
    vendor_id = str(uuid.uuid4())
    assert str(vendor_scope(_principal("vendor", vendor_id=vendor_id))) == vendor_id

    with pytest.raises(HTTPException) as exc:
        vendor_scope(_principal("customer"))
    assert exc.value.status_code == 403


def test_staff_without_permission_is_refused(client, db, vendor):
    role = make_role(db, vendor, "Support", ["vendor_view_bookings", "vendor_view_reviews"])
    make_staff(db, vendor, role, "s@x.com")
    token = login(client, "s@x.com")["token"]

    response = _build_client().put("/venues/1", headers=auth_headers(token))

    assert response.status_code == 403
    assert response.json() == {"error": "Permission required: vendor_edit_venues"}


def test_staff_with_permission_and_owner_are_allowed(client, db, vendor, owner_headers):
    role = make_role(db, vendor, "Venues", ["vendor_edit_venues"])
    make_staff(db, vendor, role, "v@x.com")
    staff_token = login(client, "v@x.com")["token"]
    gate = _build_client()

    assert gate.put("/venues/1", headers=auth_headers(staff_token)).status_code == 200
    assert gate.put("/venues/1", headers=owner_headers).status_code == 200


def test_token_with_malformed_claims_is_rejected():
    token = create_access_token({"sub": "not-a-uuid", "email": "x@example.com", "role": "vendor"})

    response = _build_client().put("/venues/1", headers=auth_headers(token))

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_unhandled_error_becomes_generic_500():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    response = TestClient(app, raise_server_exceptions=False).get("/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
