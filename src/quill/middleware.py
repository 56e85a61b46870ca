"""
Request logging for the Quill API
"""

import json
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import bind_post_context, clear_request_context, get_logger, set_request_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
REDACTED = "[REDACTED]"

# Post and draft content; titles and slugs stay readable in the logs
CONTENT_FIELDS = frozenset({"body"})

_OPERATION_RE = re.compile(r"^\s*(query|mutation|subscription)\s+(\w+)")


@dataclass
class GraphQLCall:
    """What a /graphql request asks for, as far as logging cares."""

    operation: str | None
    variables: dict[str, Any] = field(default_factory=dict)

    @property
    def post_id(self) -> UUID | None:
        lookup = self.variables.get("input")
        if isinstance(lookup, dict) and "id" in lookup:
            return _as_uuid(lookup["id"])
        return _as_uuid(self.variables.get("id"))

    @property
    def draft_id(self) -> UUID | None:
        return _as_uuid(self.variables.get("draftId"))


def _as_uuid(value: Any) -> UUID | None:
    if not isinstance(value, str):
        return None
    try:
        return UUID(value)
    except ValueError:
        return None


def redact_content(value: Any) -> Any:
    """Mask post and draft bodies at any depth of a GraphQL variables object."""
    if isinstance(value, dict):
        return {
            key: REDACTED if key in CONTENT_FIELDS and item is not None else redact_content(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact_content(item) for item in value]
    return value


def _operation_from_query(query: Any) -> str | None:
    if not isinstance(query, str) or not query:
        return None
    if "__schema" in query:
        return "__introspection"

    match = _OPERATION_RE.match(query)
    if match is None:
        return "unnamed_operation"
    kind, name = match.groups()
    return name if kind == "query" else f"{kind}:{name}"


async def read_graphql_call(request: Request) -> GraphQLCall | None:
    """Operation and variables of a GET or POST /graphql request, if readable."""
    if request.url.path != "/graphql":
        return None

    if request.method == "GET":
        payload: Any = dict(request.query_params)
        try:
            payload["variables"] = json.loads(payload.get("variables") or "{}")
        except json.JSONDecodeError:
            payload["variables"] = {}
    elif request.method == "POST":
        try:
            payload = json.loads(await request.body() or b"{}")
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
    else:
        return None

    if not isinstance(payload, dict):
        return None

    operation = payload.get("operationName")
    if not isinstance(operation, str) or not operation:
        operation = _operation_from_query(payload.get("query"))

    variables = payload.get("variables")
    return GraphQLCall(operation, variables if isinstance(variables, dict) else {})


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Give each request an id and log which post operation it ran and how it ended."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(request.headers.get(REQUEST_ID_HEADER))
        started = time.perf_counter()

        try:
            call = await read_graphql_call(request)
            details: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "remote_addr": request.client.host if request.client else None,
            }
            if call is not None:
                bind_post_context(post_id=call.post_id, draft_id=call.draft_id)
                details["graphql_operation"] = call.operation
                details["variables"] = redact_content(call.variables)

            logger.info("Request started", **details)

            response = await call_next(request)

            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
                graphql_operation=call.operation if call else None,
            )
            return response

        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise

        finally:
            clear_request_context()
