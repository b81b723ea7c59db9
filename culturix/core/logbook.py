# culturix/core/logbook.py

import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from culturix.core.errors import InternalError, ValidationError
from culturix.models.log import LogEntry, as_utc


logger = logging.getLogger(__name__)


def create_entry(db: Session, user_id: int, content: str | None) -> None:
    if not content or not content.strip():
        raise ValidationError("Content is required")

    db.add(LogEntry(user_id=user_id, content=content))
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to create log entry for user %s", user_id, exc_info=True)
        raise InternalError("Internal Server Error")


def list_entries(db: Session, user_id: int) -> list[LogEntry]:
    """Entries owned by user_id, newest first."""
    try:
        return (
            db.query(LogEntry)
            .filter(LogEntry.user_id == user_id)
            .order_by(LogEntry.timestamp.desc(), LogEntry.id.desc())
            .all()
        )
    except SQLAlchemyError:
        logger.error("Failed to list log entries for user %s", user_id, exc_info=True)
        raise InternalError("Internal Server Error")


def serialize_entry(entry: LogEntry) -> dict:
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "content": entry.content,
        "timestamp": as_utc(entry.timestamp).isoformat() if entry.timestamp else None,
    }
