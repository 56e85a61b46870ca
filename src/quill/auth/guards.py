"""Authentication guard and ownership checks used by post mutations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from sqlalchemy import select

from ..dbmodels import Users
from ..errors import AuthenticationError, ForbiddenError
from ..logging import get_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from .context import AuthContext

logger = get_logger(__name__)


class Owned(Protocol):
    id: UUID
    writer_id: UUID


async def require_user(session: AsyncSession, auth_context: AuthContext | None) -> Users:
    """
    Resolve the acting user for a mutation.

    Raises:
        AuthenticationError: If the request is unauthenticated or its user id
            does not match an existing user.
    """
    if auth_context is None or not auth_context.is_authenticated:
        raise AuthenticationError("Authentication required")

    result = await session.execute(select(Users).where(Users.id == auth_context.user_id))
    user = result.scalar_one_or_none()

    if user is None:
        logger.info("Authenticated user not found", user_id=str(auth_context.user_id))
        raise AuthenticationError(f"User {auth_context.user_id} does not exist")

    return user


def is_writer(entity: Owned, user: Users) -> bool:
    """Compare ownership by key so distinct instances of the same row still match."""
    return entity.writer_id == user.id


def ensure_writer(entity: Owned, user: Users, message: str) -> None:
    """Raise ForbiddenError unless ``user`` wrote ``entity``."""
    if not is_writer(entity, user):
        logger.info(
            "Access denied: not the writer",
            entity_id=str(entity.id),
            writer_id=str(entity.writer_id),
            user_id=str(user.id),
        )
        raise ForbiddenError(message)
