from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    PROJECT_NAME: str = "Tournament Registrations"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = ""  # local, dev, prod (from .env)

    # Server (from .env)
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # CORS (from .env, comma-separated)
    BACKEND_CORS_ORIGINS: List[str] = []

    # Logging & Sentry
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: str | None = None

    # Admin session (from .env). The signing secret has no default on purpose.
    ADMIN_PASSWORD: str = ""
    ADMIN_COOKIE_SECRET: str = ""
    ADMIN_COOKIE_NAME: str = "admin_session"
    ADMIN_SESSION_EXPIRE_MINUTES: int = 60 * 24 * 7

    # End-user identity cookie (from .env)
    USER_COOKIE_SECRET: str = ""
    USER_COOKIE_NAME: str = "user_session"
    USER_SESSION_EXPIRE_DAYS: int = 30

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "prod"


settings = Settings()
