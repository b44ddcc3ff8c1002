# Routes/auth.py
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from Auth.auth import (
    get_current_user,
    get_session_store,
    get_settings,
    get_verifier,
    login,
    logout,
    public_user,
    session_id_from,
)
from Auth.models import User
from Auth.security import CredentialVerifier
from Auth.sessions import SessionStore
from Core.errors import RateLimited, Unauthorized
from Core.middleware import client_ip
from Core.settings import Settings
from Portfolio.schemas import LoginRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

INVALID_CREDENTIALS = "Invalid username or password"


@router.post("/login", summary="Open an admin session")
def login_route(
    creds: LoginRequest,
    request: Request,
    response: Response,
    verifier: Annotated[CredentialVerifier, Depends(get_verifier)],
    store: Annotated[SessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Check username/password and set the HTTP-only session cookie.

    Unknown user and wrong password give the same 401 body.
    """
    limiter = request.app.state.limiters["login"]
    ip = client_ip(request)
    if limiter.blocked(ip):
        logger.warning("Auth rate limit exceeded ip=%s username=%s", ip, creds.username)
        raise RateLimited(limiter.message)

    current_sid = session_id_from(request, settings)
    user = login(response, verifier, store, settings, creds.username, creds.password, current_sid)
    if user is None:
        limiter.hit(ip)
        logger.warning("Failed login ip=%s username=%s", ip, creds.username)
        raise Unauthorized(INVALID_CREDENTIALS)

    logger.info("Login user=%s", user.username)
    return {"message": "Login successful", "user": public_user(user)}


@router.post("/logout", summary="Close the current session")
def logout_route(
    request: Request,
    response: Response,
    store: Annotated[SessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    logout(response, store, settings, session_id_from(request, settings))
    return {"message": "Logout successful"}


@router.get("/user", summary="Current admin user")
def current_user(user: Annotated[User, Depends(get_current_user)]):
    return public_user(user)
