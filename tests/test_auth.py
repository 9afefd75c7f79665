"""Tests for authentication endpoints and services."""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.errors import AuthenticationError, PreconditionFailedError
from app.models.user import User
from app.schemas.user import UserCreate
from app.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    decode_token,
    get_password_hash,
    get_user_by_email,
    get_user_by_username,
    verify_password,
)


@pytest.fixture
def test_user(db):
    """Create a test user in the database."""
    user = User(
        username="testuser",
        email="test@example.com",
        hashed_password=get_password_hash("testpassword123"),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


# =============================================================================
# Unit Tests: Password Hashing
# =============================================================================


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_get_password_hash_returns_bcrypt_format(self):
        """Test that hash is in bcrypt format."""
        hashed = get_password_hash("password123")
        assert isinstance(hashed, str)
        # bcrypt hashes start with $2b$ or $2a$
        assert hashed.startswith("$2")

    def test_get_password_hash_different_for_same_input(self):
        """Test that same password produces different hashes (due to salt)."""
        assert get_password_hash("password123") != get_password_hash("password123")

    def test_verify_password_correct(self):
        """Test verify_password returns True for correct password."""
        hashed = get_password_hash("mysecretpassword")
        assert verify_password("mysecretpassword", hashed) is True

    def test_verify_password_incorrect(self):
        """Test verify_password returns False for wrong password."""
        hashed = get_password_hash("correctpassword")
        assert verify_password("wrongpassword", hashed) is False
        assert verify_password("", hashed) is False


# =============================================================================
# Unit Tests: JWT Tokens
# =============================================================================


class TestJWTTokens:
    """Tests for JWT token functions."""

    def test_decode_token_valid(self):
        """Test decode_token with valid token."""
        token = create_access_token(data={"sub": "testuser"}, expires_delta=timedelta(hours=1))
        assert decode_token(token).username == "testuser"

    def test_decode_token_invalid(self):
        """Test decode_token with invalid token."""
        with pytest.raises(AuthenticationError) as exc_info:
            decode_token("invalid.token.here")
        assert exc_info.value.http_status == 401
        assert "Could not validate credentials" in exc_info.value.message

    def test_decode_token_expired(self):
        """Test decode_token with an expired token."""
        token = create_access_token(data={"sub": "testuser"}, expires_delta=timedelta(minutes=-1))
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_decode_token_missing_subject(self):
        """Test decode_token with token missing subject."""
        token = create_access_token(data={"other": "data"})
        with pytest.raises(AuthenticationError):
            decode_token(token)


# =============================================================================
# Unit Tests: User Database Operations
# =============================================================================


class TestUserDatabaseOperations:
    """Tests for user database operations."""

    def test_get_user_by_username_and_email(self, db, test_user):
        """Test lookups for existing and missing users."""
        assert get_user_by_username(db, "testuser").id == test_user.id
        assert get_user_by_email(db, "test@example.com").id == test_user.id
        assert get_user_by_username(db, "nonexistent") is None
        assert get_user_by_email(db, "nonexistent@example.com") is None

    def test_authenticate_user(self, db, test_user):
        """Test authenticate_user with valid and invalid credentials."""
        assert authenticate_user(db, "testuser", "testpassword123").id == test_user.id
        assert authenticate_user(db, "testuser", "wrongpassword") is None
        assert authenticate_user(db, "nonexistent", "password") is None

    def test_create_user_success(self, db):
        """Test create_user successfully creates a user."""
        user = create_user(
            db,
            UserCreate(username="newuser", email="newuser@example.com", password="newpassword123"),
        )
        assert user.username == "newuser"
        assert user.is_active is True
        assert user.hashed_password != "newpassword123"

    def test_create_user_duplicate_username(self, db, test_user):
        """Test create_user with duplicate username."""
        user_data = UserCreate(
            username="testuser", email="different@example.com", password="password123"
        )
        with pytest.raises(PreconditionFailedError) as exc_info:
            create_user(db, user_data)
        assert "Username already registered" in exc_info.value.message

    def test_create_user_duplicate_email(self, db, test_user):
        """Test create_user with duplicate email."""
        user_data = UserCreate(
            username="differentuser", email="test@example.com", password="password123"
        )
        with pytest.raises(PreconditionFailedError) as exc_info:
            create_user(db, user_data)
        assert "Email already registered" in exc_info.value.message


# =============================================================================
# Integration Tests: Endpoints
# =============================================================================


class TestAuthEndpoints:
    """Tests for /api/auth endpoints."""

    def test_register_success(self, client: TestClient):
        """Test successful user registration."""
        response = client.post(
            "/api/auth/register",
            json={"username": "newuser", "email": "newuser@example.com", "password": "password123"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "newuser"
        assert data["is_active"] is True
        assert "password" not in data
        assert "hashed_password" not in data

    def test_register_duplicate_username(self, client: TestClient):
        """Test registration with duplicate username."""
        payload = {"username": "dupe", "email": "dupe@example.com", "password": "password123"}
        assert client.post("/api/auth/register", json=payload).status_code == 201

        response = client.post(
            "/api/auth/register", json={**payload, "email": "other@example.com"}
        )
        assert response.status_code == 400
        assert "Username already registered" in response.json()["message"]

    def test_register_invalid_email(self, client: TestClient):
        """Test registration with invalid email format."""
        response = client.post(
            "/api/auth/register",
            json={"username": "newuser", "email": "not-an-email", "password": "password123"},
        )
        assert response.status_code == 422
        assert response.json()["message"] == "Request validation failed"

    def test_login_wrong_password(self, client: TestClient, auth_headers):
        """Test login with wrong password."""
        response = client.post(
            "/api/auth/login", json={"username": "alice", "password": "wrongpassword"}
        )
        assert response.status_code == 401
        assert "Incorrect username or password" in response.json()["message"]

    def test_me_returns_current_user(self, client: TestClient, auth_headers):
        """Test that a login token resolves back to its user."""
        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["username"] == "alice"
