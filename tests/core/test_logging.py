import pytest
import structlog

from app.core import logging as logging_module
from app.core.config import Settings
from app.core.logging import (
    build_logging_config,
    redact_sensitive,
    scrub_sentry_event,
    shared_processors,
)


def test_redact_sensitive_masks_credentials():
    event = {
        "event": "auth.login_failed",
        "password": "hunter2",
        "token": "abc.def.ghi",
        "reason": "bad_password",
    }

    result = redact_sensitive(None, "warning", event)

    assert result["password"] == "[redacted]"
    assert result["token"] == "[redacted]"
    assert result["reason"] == "bad_password"
    assert result["event"] == "auth.login_failed"


def test_redact_sensitive_leaves_other_events_alone():
    event = {"event": "request_finished", "status_code": 200}

    assert redact_sensitive(None, "info", dict(event)) == event


def test_redact_sensitive_keeps_cookie_name():
    event = {"event": "auth.session_rejected", "cookie_name": "admin_session"}

    assert redact_sensitive(None, "info", dict(event)) == event


def test_redact_sensitive_matches_suffixes_case_insensitively():
    event = {
        "event": "settings.loaded",
        "ADMIN_PASSWORD": "hunter2",
        "admin_cookie_secret": "s3cret",
        "session_token": "abc",
        "Set-Cookie": "admin_session=abc",
        "token_count": 3,
    }

    result = redact_sensitive(None, "info", event)

    assert result["ADMIN_PASSWORD"] == "[redacted]"
    assert result["admin_cookie_secret"] == "[redacted]"
    assert result["session_token"] == "[redacted]"
    assert result["Set-Cookie"] == "[redacted]"
    assert result["token_count"] == 3


def test_scrub_sentry_event_drops_session_cookies():
    event = {
        "request": {
            "url": "http://test.local/api/admin/me",
            "cookies": {"admin_session": "abc.def.ghi"},
            "headers": {"Cookie": "admin_session=abc.def.ghi", "Accept": "*/*"},
        }
    }

    result = scrub_sentry_event(event, {})

    assert result["request"]["cookies"] == "[redacted]"
    assert result["request"]["headers"]["Cookie"] == "[redacted]"
    assert result["request"]["headers"]["Accept"] == "*/*"
    assert result["request"]["url"] == "http://test.local/api/admin/me"


def test_scrub_sentry_event_without_request():
    event = {"message": "boom"}

    assert scrub_sentry_event(event, {}) == {"message": "boom"}


def test_build_logging_config_routes_uvicorn_through_one_handler():
    renderer = structlog.processors.JSONRenderer()
    pre_chain = shared_processors()

    config = build_logging_config("DEBUG", renderer, pre_chain)

    formatter = config["formatters"]["structured"]
    assert formatter["processor"] is renderer
    assert formatter["foreign_pre_chain"] is pre_chain
    assert redact_sensitive in pre_chain
    assert config["handlers"]["stdout"]["level"] == "DEBUG"
    assert config["loggers"][""]["level"] == "DEBUG"
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        assert config["loggers"][name] == {
            "handlers": ["stdout"],
            "level": "DEBUG",
            "propagate": False,
        }


@pytest.mark.parametrize(
    ("environment", "renderer_type"),
    [
        ("local", structlog.dev.ConsoleRenderer),
        ("dev", structlog.dev.ConsoleRenderer),
        ("prod", structlog.processors.JSONRenderer),
        ("", structlog.processors.JSONRenderer),
    ],
)
def test_setup_logging_picks_renderer_per_environment(
    monkeypatch, environment: str, renderer_type: type
):
    applied = []
    monkeypatch.setattr(logging_module.structlog, "configure", lambda **kw: None)
    monkeypatch.setattr(logging_module.logging.config, "dictConfig", applied.append)

    logging_module.setup_logging(
        Settings(_env_file=None, ENVIRONMENT=environment, LOG_LEVEL="warning")
    )

    (config,) = applied
    assert isinstance(config["formatters"]["structured"]["processor"], renderer_type)
    assert config["handlers"]["stdout"]["level"] == "WARNING"
