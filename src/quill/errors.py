"""
Typed errors surfaced to GraphQL clients.

Each error carries an ``extensions.code`` so clients can branch on the kind
of failure without parsing messages.
"""

from __future__ import annotations

from typing import Any

from graphql import GraphQLError


class QuillError(GraphQLError):
    """Base class for errors raised by Quill services."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        *,
        original_error: Exception | None = None,
        extensions: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            original_error=original_error,
            extensions={**(extensions or {}), "code": self.code},
        )


class AuthenticationError(QuillError):
    """The request carries no identity, or the identity does not resolve to a user."""

    code = "UNAUTHENTICATED"


class ForbiddenError(QuillError):
    """The acting user is not allowed to touch the target entity."""

    code = "FORBIDDEN"


class UserInputError(QuillError):
    """Bad input: unknown ids, invalid values or a rejected write."""

    code = "BAD_USER_INPUT"
