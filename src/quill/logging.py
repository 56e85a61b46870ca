"""
structlog setup and per-request log context

Every event logged while serving a request carries the request id, the
acting user and, once known, the post or draft the request works on.
"""

import logging
import re
import sys
import uuid
from contextvars import ContextVar
from typing import Any
from uuid import UUID

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)
post_id_ctx: ContextVar[str | None] = ContextVar("post_id", default=None)
draft_id_ctx: ContextVar[str | None] = ContextVar("draft_id", default=None)

CONTEXT_FIELDS: dict[str, ContextVar[str | None]] = {
    "request_id": request_id_ctx,
    "user_id": user_id_ctx,
    "post_id": post_id_ctx,
    "draft_id": draft_id_ctx,
}

# Caller supplied request ids are kept only when they look like one
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")


def add_request_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Processor copying the current request context into the event."""
    _ = logger, method_name
    for key, var in CONTEXT_FIELDS.items():
        value = var.get()
        if value is not None:
            event_dict.setdefault(key, value)
    return event_dict


def configure_logging(debug: bool = False) -> None:
    """Send structlog events through stdlib logging to stdout.

    Debug mode renders coloured console lines at DEBUG level; otherwise each
    event is one JSON object at INFO level.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    renderer = structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_context,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def set_request_context(request_id: str | None = None) -> str:
    """Start a fresh context for one request and return its id.

    ``request_id`` is usually the caller's X-Request-ID header; a missing or
    malformed one is replaced by a generated id.
    """
    clear_request_context()
    if not request_id or not _REQUEST_ID_RE.fullmatch(request_id):
        request_id = uuid.uuid4().hex[:16]
    request_id_ctx.set(request_id)
    return request_id


def bind_post_context(
    *, post_id: UUID | str | None = None, draft_id: UUID | str | None = None
) -> None:
    """Attach the post or draft being worked on to later events."""
    if post_id is not None:
        post_id_ctx.set(str(post_id))
    if draft_id is not None:
        draft_id_ctx.set(str(draft_id))


def clear_request_context() -> None:
    for var in CONTEXT_FIELDS.values():
        var.set(None)
