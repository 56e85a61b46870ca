"""
Root GraphQL query definitions
"""

from uuid import UUID

import strawberry

from ..types.post import Post


# Input for single post query
@strawberry.input
class PostQueryInput:
    """Criteria for a single post. Given fields must all match."""

    id: UUID | None = None
    slug: str | None = None
    title: str | None = None


# Input for multiple post query
@strawberry.input
class PostsQueryInput:
    """Filters for a page of posts."""

    type: UUID | None = None
    writer: UUID | None = None


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def post(self, info: strawberry.Info, input: PostQueryInput) -> Post | None:
        """Get the most recent post matching the given id, slug and/or title."""
        from ..resolvers.post import resolve_post

        return await resolve_post(info, input)

    @strawberry.field
    async def posts(
        self,
        info: strawberry.Info,
        input: PostsQueryInput | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        """Get a page of posts, optionally filtered by type and writer."""
        from ..resolvers.post import resolve_posts

        return await resolve_posts(info, input, limit, offset)
