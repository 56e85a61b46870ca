"""Conversion of ORM rows into GraphQL types."""

from __future__ import annotations

from ...dbmodels import Posts, Types, Users
from ..types.post import Post
from ..types.type import Type
from ..types.user import User


def to_post(post: Posts) -> Post:
    return Post(
        id=post.id,
        title=post.title,
        slug=post.slug,
        body=post.body,
        type_id=post.type_id,
        writer_id=post.writer_id,
        created_at=post.created_at,
        updated_at=post.updated_at,
        model=post,
    )


def to_type(type_: Types) -> Type:
    return Type(
        id=type_.id,
        name=type_.name,
        description=type_.description,
        created_at=type_.created_at,
        updated_at=type_.updated_at,
        model=type_,
    )


def to_user(user: Users) -> User:
    return User(
        id=user.id,
        username=user.username,
        display_name=user.display_name,
        created_at=user.created_at,
        model=user,
    )
