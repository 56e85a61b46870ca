"""
Boundary validation for post inputs.

GraphQL inputs are converted into these models before any session is
opened, so out-of-range values never reach the database.
"""

from __future__ import annotations

from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..config import settings
from ..errors import UserInputError

TITLE_MAX_LENGTH = 255
SLUG_MAX_LENGTH = 20

ModelT = TypeVar("ModelT", bound=BaseModel)


class PostContent(BaseModel):
    """Editable fields of a post. All three are overwritten on update."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    slug: str = Field(min_length=1, max_length=SLUG_MAX_LENGTH)
    body: str | None = None


class PublishDraft(BaseModel):
    """Arguments for turning a draft into a post."""

    draft_id: UUID
    slug: str = Field(min_length=1, max_length=SLUG_MAX_LENGTH)


class PostLookup(BaseModel):
    """Criteria for fetching a single post. Given fields are combined with AND."""

    id: UUID | None = None
    slug: str | None = None
    title: str | None = None

    @model_validator(mode="after")
    def require_criterion(self) -> PostLookup:
        if self.id is None and self.slug is None and self.title is None:
            raise ValueError("At least one of id, slug or title is required")
        return self


class PostFilter(BaseModel):
    """Optional filters for listing posts."""

    type: UUID | None = None
    writer: UUID | None = None


class Page(BaseModel):
    limit: int = Field(default=settings.default_page_size, ge=1, le=settings.max_page_size)
    offset: int = Field(default=0, ge=0)


def parse_input(model: type[ModelT], **data: Any) -> ModelT:
    """
    Validate raw input against ``model``.

    Raises:
        UserInputError: With the offending fields listed in ``extensions.fields``.
    """
    try:
        return model(**data)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) or "input" for err in e.errors()})
        first = e.errors()[0]["msg"] if e.errors() else "Invalid input"
        raise UserInputError(
            f"Invalid input: {first}",
            original_error=e,
            extensions={"fields": fields},
        ) from e
