from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ..access_control import get_loaders, is_preloaded
from .convert import to_post

if TYPE_CHECKING:
    from ..types.post import Post
    from ..types.user import User


async def resolve_user_posts(user: User, info: strawberry.Info) -> list[Post]:
    """Resolve the posts written by a user, reusing the preloaded collection when present."""
    if is_preloaded(user.model, "posts"):
        return [to_post(post) for post in user.model.posts]

    posts = await get_loaders(info).posts_by_writer_loader.load(user.id)
    return [to_post(post) for post in posts]
