from datetime import datetime, timezone

import httpx

ADMIN_SECRET = "test-admin-signing-secret"
USER_SECRET = "test-user-signing-secret"
ADMIN_PASSWORD = "correct horse battery staple"
ADMIN_COOKIE = "admin_session"
USER_COOKIE = "user_session"
FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def set_cookie_headers(response) -> list[str]:
    """Lower-cased Set-Cookie headers from an httpx or Starlette response."""
    if isinstance(response, httpx.Response):
        return [value.lower() for value in response.headers.get_list("set-cookie")]
    return [
        value.decode().lower()
        for header, value in response.raw_headers
        if header.decode().lower() == "set-cookie"
    ]
