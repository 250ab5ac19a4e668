"""
Structured logging for the Forum backend.

Every log event carries the current request id and, once the bearer token
has been verified, the caller's user id.
"""

import logging
import secrets
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)


def add_request_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor adding request_id and user_id when present."""
    _ = logger, method_name

    for key, var in (("request_id", request_id_ctx), ("user_id", user_id_ctx)):
        value = var.get()
        if value:
            event_dict.setdefault(key, value)

    return event_dict


def _resolve_level(debug: bool, level: str | None) -> int:
    if debug:
        return logging.DEBUG
    if level is None:
        from .config import settings

        level = settings.log_level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure structlog on top of the stdlib root logger.

    Args:
        debug: Human-readable console output at DEBUG level. Otherwise JSON.
        level: Level name for non-debug output; defaults to FORUM_LOG_LEVEL.
    """
    log_level = _resolve_level(debug, level)

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_context,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def new_request_id() -> str:
    """Return a short random request id (14 url-safe characters)."""
    return secrets.token_urlsafe(10)


@contextmanager
def request_scope(
    request_id: str | None = None, user_id: str | None = None
) -> Iterator[str]:
    """Bind the request id and the caller's user id for the duration of a request."""
    request_token = request_id_ctx.set(request_id or new_request_id())
    user_token = user_id_ctx.set(user_id)
    try:
        yield request_id_ctx.get()
    finally:
        user_id_ctx.reset(user_token)
        request_id_ctx.reset(request_token)

