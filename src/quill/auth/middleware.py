"""Authentication dependencies for FastAPI and GraphQL resolvers."""

from __future__ import annotations

from fastapi import Header, HTTPException

from ..logging import get_logger, user_id_ctx
from .adapters.base import AuthenticationError
from .adapters.none import DEV_TOKEN, NoAuthAdapter
from .context import ANONYMOUS, AuthContext
from .factory import get_auth_adapter

logger = get_logger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


async def get_auth_context(authorization: str | None = Header(None)) -> AuthContext:
    """
    Resolve the Authorization header to the acting user.

    A missing header is an anonymous caller, except in no-auth mode where it
    acts as the development user. Whether that user exists is left to the
    resolver guards.
    """
    adapter = get_auth_adapter()

    if not authorization:
        if not isinstance(adapter, NoAuthAdapter):
            return ANONYMOUS
        authorization = f"Bearer {DEV_TOKEN}"

    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token:
        logger.warning("Malformed authorization header", scheme=scheme)
        raise _unauthorized("Invalid authorization format. Expected: Bearer <token>")

    try:
        principal = await adapter.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=str(e))
        raise _unauthorized(str(e)) from e

    user_id_ctx.set(str(principal.user_id))
    logger.debug("Request authenticated", provider=principal.provider)

    return AuthContext(principal=principal, token=token)


async def get_auth_context_optional(authorization: str | None = Header(None)) -> AuthContext:
    """Like ``get_auth_context`` but a bad token yields an anonymous caller."""
    try:
        return await get_auth_context(authorization)
    except HTTPException:
        return ANONYMOUS
