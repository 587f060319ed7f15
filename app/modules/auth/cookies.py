from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from fastapi import Response

COOKIE_SAMESITE = "lax"
COOKIE_PATH = "/"


def build_set_attributes(
    name: str, lifetime: timedelta, is_production: bool
) -> dict[str, Any]:
    return {
        "key": name,
        "httponly": True,
        "samesite": COOKIE_SAMESITE,
        "secure": is_production,
        "path": COOKIE_PATH,
        "max_age": int(lifetime.total_seconds()),
    }


def build_clear_attributes(name: str, is_production: bool) -> dict[str, Any]:
    """Same attributes as when setting, with max_age=0 so the client drops it."""
    return {
        "key": name,
        "httponly": True,
        "samesite": COOKIE_SAMESITE,
        "secure": is_production,
        "path": COOKIE_PATH,
        "max_age": 0,
    }


@dataclass(frozen=True)
class CookieProfile:
    name: str
    is_production: bool = False

    def set_attributes(self, lifetime: timedelta) -> dict[str, Any]:
        return build_set_attributes(self.name, lifetime, self.is_production)

    def clear_attributes(self) -> dict[str, Any]:
        return build_clear_attributes(self.name, self.is_production)

    def attach(self, response: Response, token: str, lifetime: timedelta) -> None:
        response.set_cookie(value=token, **self.set_attributes(lifetime))

    def clear(self, response: Response) -> None:
        response.set_cookie(value="", **self.clear_attributes())
