"""
PostService: queries and mutations over published posts.

The service works inside one request-scoped AsyncSession. Mutations commit
their own changes and roll the session back before raising, so a failed
call never leaves half of its writes pending. Sessions must be created with
expire_on_commit=False, as `get_async_session` does.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..auth.guards import ensure_writer
from ..dbmodels import Drafts, Posts, Types, Users, utcnow
from ..errors import UserInputError
from ..logging import bind_post_context, get_logger
from .schemas import Page, PostContent, PostFilter, PostLookup

logger = get_logger(__name__)


def _with_relations():
    return (
        selectinload(Posts.type).selectinload(Types.posts),
        selectinload(Posts.writer).selectinload(Users.posts),
    )


class PostService:
    def __init__(self, session: AsyncSession):
        self.session = session

    # Queries

    async def get_post(self, criteria: PostLookup) -> Posts | None:
        """
        Return the most recent post matching every given criterion, or None.

        The post's type and writer are loaded together with their posts.
        """
        conditions = []
        if criteria.id is not None:
            conditions.append(Posts.id == criteria.id)
        if criteria.slug is not None:
            conditions.append(Posts.slug == criteria.slug)
        if criteria.title is not None:
            conditions.append(Posts.title == criteria.title)

        stmt = (
            select(Posts)
            .where(*conditions)
            .options(*_with_relations())
            .order_by(Posts.created_at.desc(), Posts.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        post = result.scalar_one_or_none()

        if post is None:
            logger.info("Post not found", **criteria.model_dump(exclude_none=True, mode="json"))

        return post

    async def list_posts(self, filters: PostFilter, page: Page | None = None) -> Sequence[Posts]:
        """
        Return one page of posts in store order.

        Raises:
            UserInputError: If a type or writer filter names a missing row.
        """
        page = page or Page()

        conditions = []
        if filters.type is not None:
            await self._get_or_fail(Types, filters.type, "Type")
            conditions.append(Posts.type_id == filters.type)
        if filters.writer is not None:
            await self._get_or_fail(Users, filters.writer, "User")
            conditions.append(Posts.writer_id == filters.writer)

        stmt = (
            select(Posts)
            .where(*conditions)
            .options(*_with_relations())
            .order_by(Posts.created_at.asc(), Posts.id.asc())
            .limit(page.limit)
            .offset(page.offset)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    # Mutations

    async def create_post(self, user: Users, draft_id: UUID, slug: str) -> Posts:
        """
        Publish a draft as a post and delete the draft, atomically.

        The draft row is locked while it is read, and the delete only
        succeeds while the draft still exists for the same writer, so a
        draft is published at most once.
        """
        bind_post_context(draft_id=draft_id)
        result = await self.session.execute(
            select(Drafts).where(Drafts.id == draft_id).with_for_update()
        )
        draft = result.scalar_one_or_none()
        if draft is None:
            raise UserInputError(f"Draft {draft_id} not found")

        ensure_writer(draft, user, "User is not the writer of this draft")

        post = Posts.from_draft(draft, slug)
        self.session.add(post)
        await self._flush_or_rollback("Could not save post")
        post_id = post.id
        bind_post_context(post_id=post_id)

        result = await self.session.execute(
            delete(Drafts).where(Drafts.id == draft.id, Drafts.writer_id == user.id)
        )
        if result.rowcount != 1:
            await self.session.rollback()
            logger.warning("Draft vanished during publish")
            raise UserInputError(f"Draft {draft_id} was already published")

        await self._commit_or_rollback("Could not publish draft")

        logger.info("Post created", user_id=str(user.id), slug=slug)
        return await self._reload(post_id)

    async def update_post(self, user: Users, post_id: UUID, content: PostContent) -> Posts:
        """Overwrite title, slug and body of a post owned by ``user``."""
        bind_post_context(post_id=post_id)
        post = await self._get_or_fail(Posts, post_id, "Post")
        ensure_writer(post, user, "User is not the writer of this post")

        post.title = content.title
        post.slug = content.slug
        post.body = content.body
        post.updated_at = utcnow()

        await self._commit_or_rollback("Could not update post")

        logger.info("Post updated", user_id=str(user.id))
        return await self._reload(post_id)

    async def delete_post(self, user: Users, post_id: UUID) -> bool:
        """Delete a post owned by ``user``. Every failure raises; there is no False result."""
        bind_post_context(post_id=post_id)
        post = await self._get_or_fail(Posts, post_id, "Post")
        ensure_writer(post, user, "User is not the writer of this post")

        await self.session.delete(post)
        await self._commit_or_rollback("Could not delete post")

        logger.info("Post deleted", user_id=str(user.id))
        return True

    # Helpers

    async def _get_or_fail(self, model, entity_id: UUID, label: str):
        result = await self.session.execute(select(model).where(model.id == entity_id))
        entity = result.scalar_one_or_none()
        if entity is None:
            logger.info(f"{label} not found", entity_id=str(entity_id))
            raise UserInputError(f"{label} {entity_id} not found")
        return entity

    async def _reload(self, post_id: UUID) -> Posts:
        stmt = select(Posts).where(Posts.id == post_id).options(*_with_relations())
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def _flush_or_rollback(self, message: str) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(message, error=str(e))
            raise UserInputError(message, original_error=e) from e

    async def _commit_or_rollback(self, message: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(message, error=str(e))
            raise UserInputError(message, original_error=e) from e
