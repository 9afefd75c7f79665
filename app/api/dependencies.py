"""Request dependencies: current user, owner scope and clock."""

from datetime import UTC, datetime

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import AuthenticationError
from app.models.user import User
from app.services.auth import CREDENTIALS_ERROR_MESSAGE, get_user_from_token
from app.services.ownership import OwnedRecords

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to the calling user."""
    if credentials is None:
        raise AuthenticationError(CREDENTIALS_ERROR_MESSAGE)
    return get_user_from_token(db, credentials.credentials)


def get_records(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> OwnedRecords:
    """Records visible to the calling user."""
    return OwnedRecords(db, user.id)


def get_now() -> datetime:
    """Current moment; overridden in tests to pin the calendar."""
    return datetime.now(UTC)
