from datetime import datetime

import structlog

from app.core import security
from app.core.config import settings
from app.modules.auth.session import SessionFamily

log = structlog.get_logger()


class AdminAuthService:
    def __init__(self, admin_password: str) -> None:
        self.admin_password = admin_password

    def authenticate(self, password: str) -> bool:
        if not self.admin_password:
            log.error("auth.login_failed", reason="password_not_configured")
            return False

        if not security.verify_password(password, self.admin_password):
            log.warning("auth.login_failed", reason="bad_password")
            return False

        log.info("auth.login_success", role="admin")
        return True

    def create_session_token(self, sessions: SessionFamily, now: datetime) -> str:
        return sessions.issue(now)


def get_admin_auth_service() -> AdminAuthService:
    return AdminAuthService(settings.ADMIN_PASSWORD)
