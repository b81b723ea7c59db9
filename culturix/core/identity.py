# culturix/core/identity.py

import logging
from dataclasses import dataclass
from datetime import timedelta
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from culturix.config import SESSION_TTL_MINUTES
from culturix.core.errors import (
    ConflictError,
    CredentialsError,
    InternalError,
    ValidationError,
)
from culturix.core.security import get_password_hash, new_session_token, verify_password
from culturix.models.log import as_utc, utcnow
from culturix.models.session import UserSession
from culturix.models.user import User


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


@dataclass(frozen=True)
class SessionContext:
    """Authenticated request context passed explicitly to handlers."""
    token: str
    user_id: int
    username: str


def _require_credentials(username: str | None, password: str | None):
    if not username or not password:
        raise ValidationError("Username and password are required")


# -------------------------------
# Users
# -------------------------------

def register_user(db: Session, username: str | None, password: str | None) -> None:
    _require_credentials(username, password)

    db.add(User(username=username, hashed_password=get_password_hash(password)))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Registration rejected, username taken: %s", username)
        raise ConflictError("Username already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to register user %s", username, exc_info=True)
        raise InternalError("Internal Server Error")


def authenticate_user(db: Session, username: str | None, password: str | None) -> User:
    """
    Returns the user whose credentials match. Unknown usernames and wrong
    passwords raise the same CredentialsError.
    """
    _require_credentials(username, password)

    try:
        user = db.query(User).filter(User.username == username).first()
    except SQLAlchemyError:
        logger.error("User lookup failed for %s", username, exc_info=True)
        raise InternalError("Internal Server Error")

    if not user or not verify_password(password, user.hashed_password):
        logger.info("Failed login for username: %s", username)
        raise CredentialsError(INVALID_CREDENTIALS)
    return user


# -------------------------------
# Sessions
# -------------------------------

def create_session(db: Session, user: User, ttl: timedelta | None = None) -> SessionContext:
    """
    Opens a new session for user. Sessions that have already expired are
    purged in the same commit.
    """
    now = utcnow()
    record = UserSession(
        token=new_session_token(),
        user_id=user.id,
        username=user.username,
        created_at=now,
        expires_at=now + (ttl or timedelta(minutes=SESSION_TTL_MINUTES)),
    )
    try:
        db.query(UserSession).filter(UserSession.expires_at <= now).delete(synchronize_session=False)
        db.add(record)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to create session for user %s", user.id, exc_info=True)
        raise InternalError("Internal Server Error")
    return SessionContext(token=record.token, user_id=record.user_id, username=record.username)


def resolve_session(db: Session, token: str | None) -> SessionContext | None:
    """
    Looks up a live session by token. Expired sessions are deleted and
    reported as absent.
    """
    if not token:
        return None

    try:
        record = db.query(UserSession).filter(UserSession.token == token).first()
        if record is None:
            return None
        if as_utc(record.expires_at) <= utcnow():
            db.delete(record)
            db.commit()
            return None
    except SQLAlchemyError:
        db.rollback()
        logger.error("Session lookup failed", exc_info=True)
        raise InternalError("Internal Server Error")

    return SessionContext(token=record.token, user_id=record.user_id, username=record.username)


def destroy_session(db: Session, token: str | None) -> None:
    """Deletes the session if it exists; unknown tokens are ignored."""
    if not token:
        return
    try:
        db.query(UserSession).filter(UserSession.token == token).delete()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to destroy session", exc_info=True)
        raise InternalError("Could not log out")
