from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from ...auth.guards import require_user
from ...database.connection import get_async_session
from ...logging import get_logger
from ...posts import (
    Page,
    PostContent,
    PostFilter,
    PostLookup,
    PostService,
    PublishDraft,
    parse_input,
)
from ..access_control import get_auth_context_from_info, get_loaders, is_preloaded
from .convert import to_post, to_type, to_user

if TYPE_CHECKING:
    from ..mutations.root import PostMutationInput
    from ..queries.root import PostQueryInput, PostsQueryInput
    from ..types.post import Post
    from ..types.type import Type
    from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_post(info: strawberry.Info, input: PostQueryInput) -> Post | None:
    """
    Resolve a single post by id, slug and/or title.

    Public: no authentication required.
    """
    criteria = parse_input(PostLookup, id=input.id, slug=input.slug, title=input.title)

    async with get_async_session() as session:
        post = await PostService(session).get_post(criteria)
        return to_post(post) if post else None


async def resolve_posts(
    info: strawberry.Info,
    input: PostsQueryInput | None,
    limit: int,
    offset: int,
) -> list[Post]:
    """
    Resolve a page of posts, optionally filtered by type and writer.

    Public: no authentication required.
    """
    filters = parse_input(
        PostFilter,
        type=input.type if input else None,
        writer=input.writer if input else None,
    )
    page = parse_input(Page, limit=limit, offset=offset)

    async with get_async_session() as session:
        posts = await PostService(session).list_posts(filters, page)
        return [to_post(post) for post in posts]


# Post field resolvers
async def resolve_post_type(post: Post, info: strawberry.Info) -> Type:
    if is_preloaded(post.model, "type"):
        return to_type(post.model.type)

    db_type = await get_loaders(info).type_loader.load(post.type_id)
    if db_type is None:
        raise RuntimeError("Post type not found")
    return to_type(db_type)


async def resolve_post_writer(post: Post, info: strawberry.Info) -> User:
    if is_preloaded(post.model, "writer"):
        return to_user(post.model.writer)

    writer = await get_loaders(info).user_loader.load(post.writer_id)
    if writer is None:
        raise RuntimeError("Post writer not found")
    return to_user(writer)


# Mutation resolvers
async def create_post(info: strawberry.Info, draft_id: UUID, slug: str) -> Post:
    """
    Publish a draft as a post.

    Only the writer of the draft can publish it. The draft is deleted.
    """
    args = parse_input(PublishDraft, draft_id=draft_id, slug=slug)
    auth_context = await get_auth_context_from_info(info)

    async with get_async_session() as session:
        user = await require_user(session, auth_context)
        post = await PostService(session).create_post(user, args.draft_id, args.slug)
        return to_post(post)


async def update_post(info: strawberry.Info, id: UUID, input: PostMutationInput) -> Post:
    """
    Update the title, slug and body of a post.

    Only the writer of the post can update it.
    """
    content = parse_input(PostContent, title=input.title, slug=input.slug, body=input.body)
    auth_context = await get_auth_context_from_info(info)

    async with get_async_session() as session:
        user = await require_user(session, auth_context)
        post = await PostService(session).update_post(user, id, content)
        return to_post(post)


async def delete_post(info: strawberry.Info, id: UUID) -> bool:
    """
    Delete a post.

    Only the writer of the post can delete it.
    """
    auth_context = await get_auth_context_from_info(info)

    async with get_async_session() as session:
        user = await require_user(session, auth_context)
        return await PostService(session).delete_post(user, id)
