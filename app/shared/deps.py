from datetime import datetime, timezone

from fastapi import Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import AuthDenied, denial_response
from app.modules.auth.constants import UNAUTHORIZED_MESSAGE
from app.modules.auth.session import SessionFamily, admin_sessions, user_sessions


def get_now() -> datetime:
    """Clock read once per request; every check in that request shares it."""
    return datetime.now(timezone.utc)


def get_admin_sessions() -> SessionFamily:
    return admin_sessions(settings)


def get_user_sessions() -> SessionFamily:
    return user_sessions(settings)


async def guard_request(
    request: Request, sessions: SessionFamily, now: datetime
) -> JSONResponse | None:
    """
    Return a denial response for an unauthenticated request, or `None` to let
    the caller proceed. Never touches the session cookie itself.
    """
    if sessions.is_authenticated(request.cookies, now):
        return None
    return denial_response(UNAUTHORIZED_MESSAGE, status.HTTP_401_UNAUTHORIZED)


async def require_admin(
    request: Request,
    sessions: SessionFamily = Depends(get_admin_sessions),
    now: datetime = Depends(get_now),
) -> None:
    """Guard dependency for privileged routes; raises `AuthDenied` on failure."""
    denied = await guard_request(request, sessions, now)
    if denied is not None:
        raise AuthDenied(UNAUTHORIZED_MESSAGE, status_code=denied.status_code)


async def require_user(
    request: Request,
    sessions: SessionFamily = Depends(get_user_sessions),
    now: datetime = Depends(get_now),
) -> None:
    """Same guard for routes that need a signed-in end user."""
    denied = await guard_request(request, sessions, now)
    if denied is not None:
        raise AuthDenied(UNAUTHORIZED_MESSAGE, status_code=denied.status_code)


async def get_current_user_id(
    request: Request,
    sessions: SessionFamily = Depends(get_user_sessions),
    now: datetime = Depends(get_now),
) -> str | None:
    """Soft check for the end-user cookie: the user id, or None."""
    claims = sessions.authenticate(request.cookies, now)
    if claims is None:
        return None
    subject = claims.get("sub")
    return str(subject) if subject else None
