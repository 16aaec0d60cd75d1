"""
Pytest configuration and shared fixtures for testing.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from typing import Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from venue_backoffice.database import Base, get_db
from venue_backoffice.main import app
from venue_backoffice.models.user import User, UserRole, VendorStatus
from venue_backoffice.models.vendor_role import VendorRole
from venue_backoffice.models.vendor_staff import VendorStaff
from venue_backoffice.utils.security import hash_password

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """In-memory database shared by the test and the app under test."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(
    db: Session,
    email: str,
    role: UserRole = UserRole.VENDOR,
    password: str = DEFAULT_PASSWORD,
    vendor_status: VendorStatus = VendorStatus.APPROVED,
    **fields,
) -> User:
    user = User(
        email=email,
        name=fields.pop("name", email.split("@")[0]),
        password_hash=hash_password(password),
        role=role,
        vendor_status=vendor_status,
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_role(db: Session, vendor: User, name: str, permissions: List[str], is_active: bool = True) -> VendorRole:
    role = VendorRole(
        vendor_id=vendor.id,
        name=name,
        name_key=name.strip().lower(),
        permissions=permissions,
        is_active=is_active,
    )
    db.add(role)
    db.commit()
    db.refresh(role)
    return role


def make_staff(
    db: Session,
    vendor: User,
    role: Optional[VendorRole],
    email: str,
    password: str = DEFAULT_PASSWORD,
    **fields,
) -> VendorStaff:
    staff = VendorStaff(
        vendor_id=vendor.id,
        role_id=role.id if role is not None else None,
        name=fields.pop("name", "Staff Member"),
        phone=fields.pop("phone", "555-0100"),
        email=email,
        password_hash=hash_password(password),
        **fields,
    )
    db.add(staff)
    db.commit()
    db.refresh(staff)
    return staff


def login(client: TestClient, email: str, password: str = DEFAULT_PASSWORD, path: str = "/api/v1/auth/login") -> dict:
    """Log in and return the response body; fails the test on a non-200 answer."""
    response = client.post(path, json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def vendor(db) -> User:
    return make_user(db, "owner@example.com")


@pytest.fixture
def owner_headers(client, vendor) -> dict:
    return auth_headers(login(client, vendor.email)["token"])
