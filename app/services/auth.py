"""Authentication service: password hashing, JWT tokens and user accounts."""

import logging
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AuthenticationError, PreconditionFailedError
from app.models.user import User
from app.schemas.user import TokenData, UserCreate

logger = logging.getLogger(__name__)

CREDENTIALS_ERROR_MESSAGE = "Could not validate credentials"


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its bcrypt hash."""
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a signed JWT carrying ``data`` plus an expiry claim."""
    to_encode = data.copy()
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> TokenData:
    """Decode a JWT and return its subject."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError(CREDENTIALS_ERROR_MESSAGE) from exc

    username = payload.get("sub")
    if not username:
        raise AuthenticationError(CREDENTIALS_ERROR_MESSAGE)
    return TokenData(username=username)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    """Return the user if the credentials match, otherwise None."""
    user = get_user_by_username(db, username)
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_user(db: Session, user_data: UserCreate) -> User:
    """Register a new user."""
    if get_user_by_username(db, user_data.username):
        raise PreconditionFailedError("Username already registered")
    if get_user_by_email(db, user_data.email):
        raise PreconditionFailedError("Email already registered")

    user = User(
        username=user_data.username,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def get_user_from_token(db: Session, token: str) -> User:
    """Resolve a bearer token to an active user."""
    token_data = decode_token(token)
    user = get_user_by_username(db, token_data.username or "")
    if not user or not user.is_active:
        raise AuthenticationError(CREDENTIALS_ERROR_MESSAGE)
    return user
