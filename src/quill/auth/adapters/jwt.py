"""HS256 bearer tokens signed by Quill itself; ``sub`` carries the user id."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError

from ...logging import get_logger
from .base import AuthenticationError, Principal, user_id_from_subject

logger = get_logger(__name__)


class JWTAuthAdapter:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "quill",
        audience: str = "quill-api",
        token_expiry_hours: int = 24,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.lifetime = timedelta(hours=token_expiry_hours)

    async def verify_token(self, token: str) -> Principal:
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={"require": ["sub"]},
            )
        except InvalidTokenError as e:
            logger.warning("Rejected bearer token", error=str(e))
            raise AuthenticationError("Invalid token") from e

        return Principal(provider="jwt", user_id=user_id_from_subject(claims["sub"]))

    async def issue_token(self, user_id: UUID) -> str:
        issued_at = datetime.now(UTC)
        claims = {
            "iss": self.issuer,
            "aud": self.audience,
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
