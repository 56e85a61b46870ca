from collections import defaultdict
from uuid import UUID

from sqlalchemy import select
from strawberry.dataloader import DataLoader

from ..database.connection import get_async_session
from ..dbmodels import Posts, Types, Users


async def load_types(keys: list[UUID]) -> list[Types | None]:
    """Batch load types by ID."""
    async with get_async_session() as session:
        result = await session.execute(select(Types).where(Types.id.in_(keys)))
        types_map = {t.id: t for t in result.scalars().all()}
        return [types_map.get(key) for key in keys]


async def load_users(keys: list[UUID]) -> list[Users | None]:
    """Batch load users by ID."""
    async with get_async_session() as session:
        result = await session.execute(select(Users).where(Users.id.in_(keys)))
        users_map = {user.id: user for user in result.scalars().all()}
        return [users_map.get(key) for key in keys]


async def load_posts_by_type(keys: list[UUID]) -> list[list[Posts]]:
    """Batch load the posts of several types, in store order."""
    async with get_async_session() as session:
        stmt = (
            select(Posts)
            .where(Posts.type_id.in_(keys))
            .order_by(Posts.created_at.asc(), Posts.id.asc())
        )
        result = await session.execute(stmt)
        grouped: dict[UUID, list[Posts]] = defaultdict(list)
        for post in result.scalars().all():
            grouped[post.type_id].append(post)
        return [grouped[key] for key in keys]


async def load_posts_by_writer(keys: list[UUID]) -> list[list[Posts]]:
    """Batch load the posts of several writers, in store order."""
    async with get_async_session() as session:
        stmt = (
            select(Posts)
            .where(Posts.writer_id.in_(keys))
            .order_by(Posts.created_at.asc(), Posts.id.asc())
        )
        result = await session.execute(stmt)
        grouped: dict[UUID, list[Posts]] = defaultdict(list)
        for post in result.scalars().all():
            grouped[post.writer_id].append(post)
        return [grouped[key] for key in keys]


class Loaders:
    def __init__(self):
        self.type_loader = DataLoader(load_fn=load_types)
        self.user_loader = DataLoader(load_fn=load_users)
        self.posts_by_type_loader = DataLoader(load_fn=load_posts_by_type)
        self.posts_by_writer_loader = DataLoader(load_fn=load_posts_by_writer)
