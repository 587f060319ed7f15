from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

import structlog
from fastapi import Response

from app.core import security
from app.core.config import Settings
from app.modules.auth.constants import ADMIN_ROLE, USER_ROLE
from app.modules.auth.cookies import CookieProfile

log = structlog.get_logger()


class SessionFamily:
    """
    One cookie-borne, stateless session kind: a cookie name, a signing secret,
    a fixed lifetime and the role claim its tokens must carry.

    Admin and end-user sessions are two instances of this class.
    """

    def __init__(
        self,
        name: str,
        secret: str,
        lifetime: timedelta,
        role: str,
        is_production: bool = False,
    ) -> None:
        if not secret:
            raise security.SessionConfigError(
                f"Missing signing secret for the '{name}' cookie"
            )
        self.secret = secret
        self.lifetime = lifetime
        self.role = role
        self.cookie = CookieProfile(name=name, is_production=is_production)

    @property
    def name(self) -> str:
        return self.cookie.name

    def issue(self, now: datetime, subject: str | None = None) -> str:
        return security.create_session_token(
            self.secret, now, self.lifetime, self.role, subject=subject
        )

    def authenticate(
        self, cookies: Mapping[str, str], now: datetime
    ) -> dict[str, Any] | None:
        token = cookies.get(self.name)
        if not token:
            return None

        try:
            claims = security.decode_session_token(self.secret, token, now)
            if claims.get("role") != self.role:
                raise security.RoleMismatch("Token issued for another role")
        except security.CredentialError as exc:
            log.info(
                "auth.session_rejected", cookie_name=self.name, reason=exc.reason
            )
            return None
        return claims

    def is_authenticated(self, cookies: Mapping[str, str], now: datetime) -> bool:
        return self.authenticate(cookies, now) is not None

    def attach(self, response: Response, token: str) -> None:
        self.cookie.attach(response, token, self.lifetime)

    def clear(self, response: Response) -> None:
        self.cookie.clear(response)


def admin_sessions(settings: Settings) -> SessionFamily:
    return SessionFamily(
        name=settings.ADMIN_COOKIE_NAME,
        secret=settings.ADMIN_COOKIE_SECRET,
        lifetime=timedelta(minutes=settings.ADMIN_SESSION_EXPIRE_MINUTES),
        role=ADMIN_ROLE,
        is_production=settings.is_production,
    )


def user_sessions(settings: Settings) -> SessionFamily:
    return SessionFamily(
        name=settings.USER_COOKIE_NAME,
        secret=settings.USER_COOKIE_SECRET,
        lifetime=timedelta(days=settings.USER_SESSION_EXPIRE_DAYS),
        role=USER_ROLE,
        is_production=settings.is_production,
    )
