"""Base authentication adapter interface and types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol
from uuid import UUID


class AuthenticationError(Exception):
    """Raised when a token cannot be verified."""


@dataclass(frozen=True)
class Principal:
    """The Quill user a verified token speaks for."""

    provider: Literal["jwt", "none"]
    user_id: UUID


def user_id_from_subject(subject: object) -> UUID:
    """Read a token subject as a user id."""
    try:
        return UUID(str(subject))
    except ValueError as e:
        raise AuthenticationError("Token subject is not a valid user id") from e


class AuthAdapter(Protocol):
    """Turns bearer tokens into principals and back."""

    async def verify_token(self, token: str) -> Principal:
        """
        Verify a token and return the user it authenticates.

        Raises:
            AuthenticationError: If token is invalid, expired or has no user id
        """
        ...

    async def issue_token(self, user_id: UUID) -> str:
        """Issue a token that authenticates as ``user_id``."""
        ...
