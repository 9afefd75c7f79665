"""Shared fixtures: in-memory database, app, authenticated clients and a fixed clock."""

from collections.abc import Iterator
from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.api.dependencies import get_now
from app.core.database import Database
from app.main import create_app
from app.models.user import User
from app.services.auth import get_password_hash
from app.services.ownership import OwnedRecords

# Test clock: "now" is the first of April 2024
FIXED_NOW = datetime(2024, 4, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def database() -> Iterator[Database]:
    """Create an in-memory test database."""
    database = Database("sqlite://", poolclass=StaticPool)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database: Database) -> Iterator[Session]:
    """A session for service-level tests."""
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def owner(db: Session) -> User:
    """A landlord account for service-level tests."""
    user = User(
        username="landlord",
        email="landlord@example.com",
        hashed_password=get_password_hash("landlord-password"),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def records(db: Session, owner: User) -> OwnedRecords:
    return OwnedRecords(db, owner.id)


@pytest.fixture
def app(database: Database) -> FastAPI:
    """Application bound to the test database with the clock pinned."""
    application = create_app(database)
    application.dependency_overrides[get_now] = lambda: FIXED_NOW
    return application


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create a test client with proper lifespan handling."""
    with TestClient(app) as c:
        yield c


def register_and_login(client: TestClient, username: str) -> dict[str, str]:
    """Helper: create an account and return its Authorization header."""
    password = f"{username}-password"
    response = client.post(
        "/api/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert response.status_code == 201
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    return register_and_login(client, "alice")


@pytest.fixture
def other_headers(client: TestClient) -> dict[str, str]:
    return register_and_login(client, "mallory")


PROPERTY_PAYLOAD = {
    "address": "12 Elm Street",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "property_type": "apartment",
    "bedrooms": 2,
    "bathrooms": 1,
    "square_feet": 850,
    "monthly_rent": "1000.00",
}


def create_property(client: TestClient, headers: dict[str, str], **overrides) -> dict:
    """Helper: create a property through the API."""
    payload = {**PROPERTY_PAYLOAD, **overrides}
    response = client.post("/api/properties", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_tenant(
    client: TestClient,
    headers: dict[str, str],
    move_in_date: str | None = "2024-01-15",
    **overrides,
) -> dict:
    """Helper: create a tenant through the API."""
    payload = {"name": "Jordan Smith", "phone": "555-0142", "move_in_date": move_in_date}
    response = client.post("/api/tenants", json={**payload, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
