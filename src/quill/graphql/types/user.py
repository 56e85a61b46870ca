"""
User GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

from ...dbmodels import Users

if TYPE_CHECKING:
    from .post import Post


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: UUID
    username: str
    display_name: str | None
    created_at: strawberry.Private[datetime]

    model: strawberry.Private[Users | None] = None

    @strawberry.field
    async def posts(
        self, info: strawberry.Info
    ) -> list[Annotated["Post", strawberry.lazy(".post")]]:  # noqa: E501
        """Get posts written by this user."""
        from ..resolvers.user import resolve_user_posts

        return await resolve_user_posts(self, info)
