"""
Type (post category) GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

from ...dbmodels import Types

if TYPE_CHECKING:
    from .post import Post


@strawberry.type
class Type:
    """Post category type for GraphQL API."""

    id: UUID
    name: str
    description: str | None
    created_at: strawberry.Private[datetime]
    updated_at: strawberry.Private[datetime]

    model: strawberry.Private[Types | None] = None

    @strawberry.field
    async def posts(
        self, info: strawberry.Info
    ) -> list[Annotated["Post", strawberry.lazy(".post")]]:  # noqa: E501
        """Get posts of this type."""
        from ..resolvers.type import resolve_type_posts

        return await resolve_type_posts(self, info)
