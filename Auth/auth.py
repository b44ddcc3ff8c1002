# Auth/auth.py
from typing import Annotated, Optional

from fastapi import Depends, Request, Response
from sqlmodel import Session

from Auth.models import User
from Auth.security import CredentialVerifier, LocalCredentials
from Auth.sessions import SessionRecord, SessionStore, sign, unsign
from Core.database import get_session
from Core.errors import Unauthorized
from Core.settings import Settings


# ---------------------------------------------------------------------------
# 1. Shared objects hung on app.state by create_app
# ---------------------------------------------------------------------------
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_verifier(
    db: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CredentialVerifier:
    return LocalCredentials(db, settings.password_pepper)


def session_id_from(request: Request, settings: Settings) -> Optional[str]:
    """Session id carried by the request cookie, if its signature checks out."""
    return unsign(request.cookies.get(settings.session_cookie_name), settings.session_secret)


def public_user(user: User) -> dict:
    """User as sent to clients; the password hash never leaves the server."""
    return {"id": user.id, "username": user.username, "isAdmin": user.is_admin}


# ---------------------------------------------------------------------------
# 2. Session lifecycle: Anonymous -> Authenticated -> Anonymous
# ---------------------------------------------------------------------------
def login(
    response: Response,
    verifier: CredentialVerifier,
    store: SessionStore,
    settings: Settings,
    username: str,
    password: str,
    current_sid: Optional[str] = None,
) -> Optional[User]:
    """Verify credentials and open a session; None means invalid credentials.

    A previous session carried by the same browser is replaced.
    """
    user = verifier.verify(username, password)
    if user is None:
        return None
    store.destroy(current_sid)
    record = store.create(user.id)
    set_session_cookie(response, record, settings)
    return user


def logout(response: Response, store: SessionStore, settings: Settings, sid: Optional[str]) -> None:
    store.destroy(sid)
    response.delete_cookie(settings.session_cookie_name, path="/")


def set_session_cookie(response: Response, record: SessionRecord, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign(record.session_id, settings.session_secret),
        max_age=settings.session_max_age,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict" if settings.is_production else "lax",
    )


# ---------------------------------------------------------------------------
# 3. Gate for protected routes
# ---------------------------------------------------------------------------
def get_current_user(
    request: Request,
    db: Annotated[Session, Depends(get_session)],
    store: Annotated[SessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """
    Resolve the session cookie to a User.
    Missing, unknown and expired sessions all give the same 401.
    """
    record = store.get(session_id_from(request, settings))
    if record is None:
        raise Unauthorized()

    user = db.get(User, record.user_id)
    if user is None:
        store.destroy(record.session_id)
        raise Unauthorized()
    return user


def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    if not user.is_admin:
        raise Unauthorized()
    return user
