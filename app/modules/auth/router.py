from datetime import datetime
from typing import Any

import structlog
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import RedirectResponse

from app.core.exceptions import AuthDenied
from app.modules.auth.constants import (
    ADMIN_LOGOUT_PATH,
    ADMIN_ROLE,
    BAD_PASSWORD_MESSAGE,
)
from app.modules.auth.schemas import (
    AdminMeResponse,
    AdminPasswordForm,
    ErrorResponse,
    OkResponse,
    UserMeResponse,
)
from app.modules.auth.service import AdminAuthService, get_admin_auth_service
from app.modules.auth.session import SessionFamily
from app.shared.deps import (
    get_admin_sessions,
    get_current_user_id,
    get_now,
    get_user_sessions,
    require_admin,
)

log = structlog.get_logger()

router = APIRouter()
# Browser-facing routes served outside the API prefix.
ui_router = APIRouter()

_DENIAL_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
}


@router.post(
    "/admin/login",
    response_model=OkResponse,
    responses=_DENIAL_RESPONSES,
    summary="Admin password login",
)
async def admin_login(
    response: Response,
    form_data: AdminPasswordForm = Depends(),
    auth_service: AdminAuthService = Depends(get_admin_auth_service),
    sessions: SessionFamily = Depends(get_admin_sessions),
    now: datetime = Depends(get_now),
) -> Any:
    """
    Check the submitted password against the configured admin password and, on
    a match, set the signed admin session cookie. A mismatch sets no cookie.
    """
    if not auth_service.authenticate(form_data.password):
        raise AuthDenied(BAD_PASSWORD_MESSAGE)

    token = auth_service.create_session_token(sessions, now)
    sessions.attach(response, token)
    return {"ok": True}


@router.post(
    "/admin/logout",
    response_model=OkResponse,
    responses=_DENIAL_RESPONSES,
    dependencies=[Depends(require_admin)],
    summary="Clear the admin session cookie",
)
async def admin_logout(
    response: Response,
    sessions: SessionFamily = Depends(get_admin_sessions),
) -> Any:
    """
    Expire the admin cookie on the client. The token itself stays valid until
    its own expiry; there is no server-side session to revoke.
    """
    sessions.clear(response)
    log.info("auth.logout", role=ADMIN_ROLE)
    return {"ok": True}


@router.get(
    "/admin/me",
    response_model=AdminMeResponse,
    responses=_DENIAL_RESPONSES,
    dependencies=[Depends(require_admin)],
    summary="Check the admin session",
)
async def admin_me() -> Any:
    return {"authed": True, "role": ADMIN_ROLE}


@router.get("/user/me", response_model=UserMeResponse, summary="Current end user")
async def user_me(user_id: str | None = Depends(get_current_user_id)) -> Any:
    if user_id is None:
        return {"user": None}
    return {"user": {"id": user_id}}


@router.post(
    "/user/logout", response_model=OkResponse, summary="Clear the end-user cookie"
)
async def user_logout(
    response: Response,
    sessions: SessionFamily = Depends(get_user_sessions),
) -> Any:
    sessions.clear(response)
    return {"ok": True}


@ui_router.get(ADMIN_LOGOUT_PATH, include_in_schema=False)
async def admin_logout_page(
    sessions: SessionFamily = Depends(get_admin_sessions),
) -> RedirectResponse:
    redirect = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    sessions.clear(redirect)
    log.info("auth.logout", role=ADMIN_ROLE, via="ui")
    return redirect
