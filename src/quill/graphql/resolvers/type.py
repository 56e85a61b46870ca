from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ..access_control import get_loaders, is_preloaded
from .convert import to_post

if TYPE_CHECKING:
    from ..types.post import Post
    from ..types.type import Type


async def resolve_type_posts(type_: Type, info: strawberry.Info) -> list[Post]:
    """Resolve the posts of a type, reusing the preloaded collection when present."""
    if is_preloaded(type_.model, "posts"):
        return [to_post(post) for post in type_.model.posts]

    posts = await get_loaders(info).posts_by_type_loader.load(type_.id)
    return [to_post(post) for post in posts]
