# culturix/core/security.py

import secrets
from jose import JWTError, jwt
from passlib.context import CryptContext
from culturix.config import SESSION_SECRET, SESSION_ALGORITHM


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def sign_session_token(token: str) -> str:
    """
    Wraps the opaque session token in a signed cookie value so that a
    forged cookie is rejected before any database lookup.
    """
    return jwt.encode({"sid": token}, SESSION_SECRET, algorithm=SESSION_ALGORITHM)


def read_session_token(cookie_value: str | None) -> str | None:
    if not cookie_value:
        return None
    try:
        payload = jwt.decode(cookie_value, SESSION_SECRET, algorithms=[SESSION_ALGORITHM])
    except JWTError:
        return None
    token = payload.get("sid")
    return token if isinstance(token, str) and token else None
