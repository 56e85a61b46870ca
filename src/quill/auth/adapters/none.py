"""No-auth mode: every request acts as one configured development user."""

from __future__ import annotations

import os
from uuid import UUID

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)

DEV_USER_ID = "00000000-0000-0000-0000-000000000001"
DEV_TOKEN = "dev-token"


class NoAuthAdapter:
    """
    Accepts any non-empty bearer token as ``default_user_id``.

    The token's contents are never read, so it can only ever stand for that
    one user. Refuses to start when ENVIRONMENT is production.
    """

    def __init__(self, default_user_id: str = DEV_USER_ID):
        if os.getenv("ENVIRONMENT", "").lower() in ("production", "prod"):
            logger.error("No-auth mode requested in production")
            raise RuntimeError(
                "NoAuthAdapter cannot be used in production environments. "
                "Set QUILL_AUTH_PROVIDER=jwt."
            )

        self.default_user_id = default_user_id
        self.user_id = UUID(default_user_id)
        logger.warning("Authentication is disabled", acting_user_id=default_user_id)

    async def verify_token(self, token: str) -> Principal:
        if not token:
            raise AuthenticationError("Token required (even in no-auth mode)")
        return Principal(provider="none", user_id=self.user_id)

    async def issue_token(self, user_id: UUID) -> str:
        """Issue a placeholder token; only the default user can be named."""
        if user_id != self.user_id:
            raise ValueError(
                f"No-auth mode always acts as {self.default_user_id}; "
                f"a token for {user_id} would not authenticate as that user"
            )
        return f"{DEV_TOKEN}|{user_id}"
