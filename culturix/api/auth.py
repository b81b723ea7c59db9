# culturix/api/auth.py

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from culturix.config import COOKIE_SECURE, SESSION_COOKIE_NAME, SESSION_TTL_MINUTES
from culturix.core.errors import AuthError
from culturix.core.identity import (
    SessionContext,
    authenticate_user,
    create_session,
    destroy_session,
    register_user,
    resolve_session,
)
from culturix.core.security import read_session_token, sign_session_token
from culturix.database import get_db


router = APIRouter(prefix="/api")


class Credentials(BaseModel):
    username: str | None = None
    password: str | None = None


class User(BaseModel):
    username: str


# -------------------------------
# Session dependencies
# -------------------------------

def get_session_context(request: Request, db: Session = Depends(get_db)) -> SessionContext | None:
    token = read_session_token(request.cookies.get(SESSION_COOKIE_NAME))
    return resolve_session(db, token)


def require_auth(context: SessionContext | None = Depends(get_session_context)) -> SessionContext:
    if context is None:
        raise AuthError("Unauthorized")
    return context


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=sign_session_token(token),
        max_age=SESSION_TTL_MINUTES * 60,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
    )


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(credentials: Credentials, db: Session = Depends(get_db)):
    register_user(db, credentials.username, credentials.password)
    return {"message": "User registered successfully"}


@router.post("/login")
def login(credentials: Credentials, response: Response, request: Request, db: Session = Depends(get_db)):
    user = authenticate_user(db, credentials.username, credentials.password)
    # A browser logging in again replaces the session its cookie points at.
    destroy_session(db, read_session_token(request.cookies.get(SESSION_COOKIE_NAME)))
    context = create_session(db, user)
    _set_session_cookie(response, context.token)
    return {"message": "Login successful"}


@router.post("/logout")
def logout(response: Response, request: Request, db: Session = Depends(get_db)):
    token = read_session_token(request.cookies.get(SESSION_COOKIE_NAME))
    destroy_session(db, token)
    response.delete_cookie(SESSION_COOKIE_NAME, httponly=True, secure=COOKIE_SECURE, samesite="lax")
    return {"message": "Logout successful"}


@router.get("/user", response_model=User)
def current_user(context: SessionContext | None = Depends(get_session_context)):
    if context is None:
        raise AuthError("Not authenticated")
    return {"username": context.username}
