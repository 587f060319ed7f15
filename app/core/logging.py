import logging
import logging.config
import sys
from typing import Any, Dict, List

import sentry_sdk
import structlog

from app.core.config import Settings, settings

REDACTED = "[redacted]"

# Exact event keys that must never reach a log sink.
SENSITIVE_KEYS = frozenset({"password", "secret", "token", "cookie", "set-cookie"})
# Covers admin_password, cookie_secret, session_token and friends.
SENSITIVE_SUFFIXES = ("_password", "_secret", "_token")

CONSOLE_ENVIRONMENTS = ("local", "dev")


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return lowered in SENSITIVE_KEYS or lowered.endswith(SENSITIVE_SUFFIXES)


def redact_sensitive(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    for key in [key for key in event_dict if is_sensitive_key(key)]:
        event_dict[key] = REDACTED
    return event_dict


def scrub_sentry_event(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """Drop session cookies from error reports before they leave the process."""
    request = event.get("request")
    if isinstance(request, dict):
        if "cookies" in request:
            request["cookies"] = REDACTED
        headers = request.get("headers")
        if isinstance(headers, dict):
            for name in list(headers):
                if name.lower() in ("cookie", "set-cookie"):
                    headers[name] = REDACTED
    return event


def shared_processors() -> List[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_sensitive,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def build_logging_config(
    log_level: str,
    renderer: structlog.types.Processor,
    pre_chain: List[structlog.types.Processor],
) -> Dict[str, Any]:
    """
    stdlib `dictConfig` payload that routes uvicorn and every other stdlib
    logger through the structlog formatter, so auth events and access lines
    share one format and one redaction pass.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": renderer,
                "foreign_pre_chain": pre_chain,
            },
        },
        "handlers": {
            "stdout": {
                "level": log_level,
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "structured",
            },
        },
        "loggers": {
            "": {"handlers": ["stdout"], "level": log_level, "propagate": True},
            **{
                name: {"handlers": ["stdout"], "level": log_level, "propagate": False}
                for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
            },
        },
    }


def setup_logging(config: Settings = settings) -> None:
    """
    Configure structured logging for the service.

    Console output in local and dev, JSON lines elsewhere. Errors go to Sentry
    when a DSN is configured, with session cookies scrubbed.
    """
    processors = shared_processors()

    if config.SENTRY_DSN:
        sentry_sdk.init(
            dsn=config.SENTRY_DSN,
            environment=config.ENVIRONMENT,
            send_default_pii=False,
            before_send=scrub_sentry_event,
            traces_sample_rate=1.0 if config.ENVIRONMENT == "local" else 0.1,
        )

    structlog.configure(
        processors=[
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer: structlog.types.Processor = (
        structlog.dev.ConsoleRenderer()
        if config.ENVIRONMENT in CONSOLE_ENVIRONMENTS
        else structlog.processors.JSONRenderer()
    )
    logging.config.dictConfig(
        build_logging_config(config.LOG_LEVEL.upper(), renderer, processors)
    )
