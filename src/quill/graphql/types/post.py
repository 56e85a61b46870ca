"""
Post GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

from ...dbmodels import Posts

if TYPE_CHECKING:
    from .type import Type
    from .user import User


@strawberry.type
class Post:
    """Published post type for GraphQL API."""

    id: UUID
    title: str
    slug: str
    body: str | None
    created_at: datetime
    updated_at: datetime
    type_id: strawberry.Private[UUID]
    writer_id: strawberry.Private[UUID]

    # ORM row this object was built from; relation fields reuse whatever it preloaded
    model: strawberry.Private[Posts | None] = None

    @strawberry.field
    async def type(self, info: strawberry.Info) -> Annotated["Type", strawberry.lazy(".type")]:
        """Get the type (category) of this post."""
        from ..resolvers.post import resolve_post_type

        return await resolve_post_type(self, info)

    @strawberry.field
    async def writer(self, info: strawberry.Info) -> Annotated["User", strawberry.lazy(".user")]:
        """Get the user who wrote this post."""
        from ..resolvers.post import resolve_post_writer

        return await resolve_post_writer(self, info)
