"""
Reusable seed data functions for database initialization.

This module provides functions to seed initial data into the database:
the development user that the no-auth adapter authenticates as, and the
default post types.
"""

from __future__ import annotations

import os
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.adapters.none import DEV_USER_ID
from ..dbmodels import Types, Users
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_TYPES: dict[str, str] = {
    "article": "Long-form writing",
    "note": "Short update",
    "tutorial": "Step-by-step guide",
}


async def ensure_user(
    db: AsyncSession,
    *,
    username: str,
    user_id: UUID | None = None,
    email: str | None = None,
    display_name: str | None = None,
) -> UUID:
    """
    Ensure a user exists in the database.

    Creates the user if no user with ``username`` exists, otherwise returns
    the existing user's ID.

    Args:
        db: Database session
        username: Unique username
        user_id: UUID for the user (if None, auto-generated)
        email: Optional email address
        display_name: Optional display name

    Returns:
        UUID of the user (existing or newly created)
    """
    result = await db.execute(select(Users).where(Users.username == username))
    existing_user = result.scalar_one_or_none()

    if existing_user:
        logger.debug("User already exists", user_id=str(existing_user.id), username=username)
        return existing_user.id

    new_user = Users(username=username, email=email, display_name=display_name)
    if user_id:
        new_user.id = user_id

    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)

    logger.info("Created new user", user_id=str(new_user.id), username=username)
    return new_user.id


async def ensure_type(db: AsyncSession, *, name: str, description: str | None = None) -> UUID:
    """Ensure a post type named ``name`` exists and return its ID."""
    result = await db.execute(select(Types).where(Types.name == name))
    existing_type = result.scalar_one_or_none()

    if existing_type:
        logger.debug("Type already exists", type_id=str(existing_type.id), name=name)
        return existing_type.id

    new_type = Types(name=name, description=description)
    db.add(new_type)
    await db.commit()
    await db.refresh(new_type)

    logger.info("Created new type", type_id=str(new_type.id), name=name)
    return new_type.id


async def seed_initial_data(db: AsyncSession) -> None:
    """
    Seed all initial data required for the application.

    Args:
        db: Database session
    """
    logger.info("Starting database seeding")

    user_id = await ensure_user(
        db,
        username=os.getenv("QUILL_DEV_USERNAME", "dev"),
        user_id=UUID(DEV_USER_ID),
        email="dev@example.com",
        display_name="Development User",
    )
    logger.info("Ensured development user exists", user_id=str(user_id))

    for name, description in DEFAULT_TYPES.items():
        await ensure_type(db, name=name, description=description)

    logger.info("Database seeding completed", types=list(DEFAULT_TYPES))
