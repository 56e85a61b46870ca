"""
Root GraphQL mutation definitions
"""

from uuid import UUID

import strawberry

from ..types.post import Post


@strawberry.input
class PostMutationInput:
    """Input for updating a post. All fields are overwritten."""

    title: str
    slug: str
    body: str | None = None


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createPost")
    async def create_post(self, info: strawberry.Info, draft_id: UUID, slug: str) -> Post:
        """Publish one of your drafts as a post."""
        from ..resolvers.post import create_post

        return await create_post(info, draft_id, slug)

    @strawberry.mutation(name="updatePost")
    async def update_post(
        self, info: strawberry.Info, id: UUID, input: PostMutationInput
    ) -> Post:
        """Update one of your posts."""
        from ..resolvers.post import update_post

        return await update_post(info, id, input)

    @strawberry.mutation(name="deletePost")
    async def delete_post(self, info: strawberry.Info, id: UUID) -> bool:
        """Delete one of your posts."""
        from ..resolvers.post import delete_post

        return await delete_post(info, id)
