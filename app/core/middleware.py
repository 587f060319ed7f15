import time
import uuid
from typing import Awaitable, Callable, Iterable
from urllib.parse import urlencode

import structlog
from fastapi import Request, Response
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.config import settings
from app.modules.auth.constants import ADMIN_LOGIN_PATH, ADMIN_LOGOUT_PATH

ADMIN_AREA_PREFIX = "/admin"
REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = ("/health",)

log = structlog.get_logger()


def in_admin_area(path: str) -> bool:
    return path == ADMIN_AREA_PREFIX or path.startswith(f"{ADMIN_AREA_PREFIX}/")


class StructlogMiddleware(BaseHTTPMiddleware):
    """
    Bind a request id for every log line of the request and emit one
    `request_finished` event.

    The context records whether an admin cookie came along (presence only,
    never the value) so guard denials can be told apart from anonymous
    traffic. Health checks on `/health` are served without logging.
    """

    def __init__(
        self,
        app: ASGIApp,
        admin_cookie_name: str | None = None,
        quiet_paths: Iterable[str] = QUIET_PATHS,
    ) -> None:
        super().__init__(app)
        self.admin_cookie_name = admin_cookie_name or settings.ADMIN_COOKIE_NAME
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
            client_ip=request.client.host if request.client else None,
            has_admin_cookie=bool(request.cookies.get(self.admin_cookie_name)),
        )

        if path in self.quiet_paths:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            log.exception("request_failed", duration_ms=_elapsed_ms(start_time))
            raise

        log.info(
            "request_finished",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(start_time),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


class AdminAreaMiddleware(BaseHTTPMiddleware):
    """
    Send browsers without an admin cookie from the admin UI to the login page.

    Only cookie presence is checked here; the API guard does the real
    verification on every privileged call.
    """

    def __init__(self, app: ASGIApp, cookie_name: str | None = None) -> None:
        super().__init__(app)
        self.cookie_name = cookie_name or settings.ADMIN_COOKIE_NAME

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        path = request.url.path
        if not in_admin_area(path) or path in (ADMIN_LOGIN_PATH, ADMIN_LOGOUT_PATH):
            return await call_next(request)

        if request.cookies.get(self.cookie_name):
            return await call_next(request)

        log.info("auth.admin_area_redirect", target=path)
        query = urlencode({"next": path})
        return RedirectResponse(url=f"{ADMIN_LOGIN_PATH}?{query}", status_code=307)
