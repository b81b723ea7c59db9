# culturix/models/session.py

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from . import Base
from .log import utcnow


class UserSession(Base):
    """
    Server-side session record. The token is the opaque value carried
    (signed) in the session cookie.
    """
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    username = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False)
