"""
Initial schema: users, types, drafts and posts.

Revision ID: 20261001_000000_initial_schema
Revises:
Create Date: 2026-10-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20261001_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    # users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
        sa.UniqueConstraint("username", name="users_username_key"),
    )

    # types
    op.create_table(
        "types",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="types_pkey"),
        sa.UniqueConstraint("name", name="types_name_key"),
    )

    # drafts
    op.create_table(
        "drafts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=20), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("type_id", sa.Uuid(), nullable=False),
        sa.Column("writer_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["writer_id"], ["users.id"], ondelete="CASCADE", name="drafts_writer_id_fkey"
        ),
        sa.ForeignKeyConstraint(["type_id"], ["types.id"], name="drafts_type_id_fkey"),
        sa.PrimaryKeyConstraint("id", name="drafts_pkey"),
    )
    op.create_index("idx_drafts_writer", "drafts", ["writer_id"])

    # posts
    op.create_table(
        "posts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=20), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("type_id", sa.Uuid(), nullable=False),
        sa.Column("writer_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["writer_id"], ["users.id"], ondelete="CASCADE", name="posts_writer_id_fkey"
        ),
        sa.ForeignKeyConstraint(["type_id"], ["types.id"], name="posts_type_id_fkey"),
        sa.PrimaryKeyConstraint("id", name="posts_pkey"),
        sa.UniqueConstraint("slug", name="posts_slug_key"),
    )
    op.create_index("idx_posts_type", "posts", ["type_id"])
    op.create_index("idx_posts_writer", "posts", ["writer_id"])
    op.create_index("idx_posts_created_at", "posts", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_posts_created_at", table_name="posts")
    op.drop_index("idx_posts_writer", table_name="posts")
    op.drop_index("idx_posts_type", table_name="posts")
    op.drop_table("posts")
    op.drop_index("idx_drafts_writer", table_name="drafts")
    op.drop_table("drafts")
    op.drop_table("types")
    op.drop_table("users")
