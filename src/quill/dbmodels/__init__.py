"""
Database models for Quill (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    DateTime,
    ForeignKeyConstraint,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Users(Base):
    __tablename__ = "users"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="users_pkey"),
        UniqueConstraint("username", name="users_username_key"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    display_name: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)

    posts: Mapped[list["Posts"]] = relationship(
        "Posts",
        uselist=True,
        back_populates="writer",
        order_by="(Posts.created_at, Posts.id)",
    )
    drafts: Mapped[list["Drafts"]] = relationship("Drafts", uselist=True, back_populates="writer")


class Types(Base):
    __tablename__ = "types"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="types_pkey"),
        UniqueConstraint("name", name="types_name_key"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)

    posts: Mapped[list["Posts"]] = relationship(
        "Posts",
        uselist=True,
        back_populates="type",
        order_by="(Posts.created_at, Posts.id)",
    )
    drafts: Mapped[list["Drafts"]] = relationship("Drafts", uselist=True, back_populates="type")


class Drafts(Base):
    __tablename__ = "drafts"
    __table_args__ = (
        ForeignKeyConstraint(
            ["writer_id"], ["users.id"], ondelete="CASCADE", name="drafts_writer_id_fkey"
        ),
        ForeignKeyConstraint(["type_id"], ["types.id"], name="drafts_type_id_fkey"),
        PrimaryKeyConstraint("id", name="drafts_pkey"),
        Index("idx_drafts_writer", "writer_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(20), nullable=False)
    body: Mapped[str | None] = mapped_column(Text)
    type_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    writer_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)

    type: Mapped["Types"] = relationship("Types", back_populates="drafts")
    writer: Mapped["Users"] = relationship("Users", back_populates="drafts")


class Posts(Base):
    __tablename__ = "posts"
    __table_args__ = (
        ForeignKeyConstraint(
            ["writer_id"], ["users.id"], ondelete="CASCADE", name="posts_writer_id_fkey"
        ),
        ForeignKeyConstraint(["type_id"], ["types.id"], name="posts_type_id_fkey"),
        PrimaryKeyConstraint("id", name="posts_pkey"),
        UniqueConstraint("slug", name="posts_slug_key"),
        Index("idx_posts_type", "type_id"),
        Index("idx_posts_writer", "writer_id"),
        Index("idx_posts_created_at", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(20), nullable=False)
    body: Mapped[str | None] = mapped_column(Text)
    type_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    writer_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)

    type: Mapped["Types"] = relationship("Types", back_populates="posts")
    writer: Mapped["Users"] = relationship("Users", back_populates="posts")

    @classmethod
    def from_draft(cls, draft: Drafts, slug: str) -> "Posts":
        """Build an unsaved post carrying the draft's content and ownership."""
        return cls(
            title=draft.title,
            slug=slug,
            body=draft.body,
            type_id=draft.type_id,
            writer_id=draft.writer_id,
        )


target_metadata = Base.metadata

__all__ = [
    "Base",
    "Drafts",
    "Posts",
    "Types",
    "Users",
    "target_metadata",
]
