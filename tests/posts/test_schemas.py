"""
Tests for boundary validation of post inputs
"""

import uuid

import pytest

from quill.errors import UserInputError
from quill.posts import Page, PostContent, PostFilter, PostLookup, PublishDraft, parse_input


@pytest.mark.unit
class TestPostContent:
    def test_accepts_bounds(self):
        content = parse_input(PostContent, title="t" * 255, slug="s" * 20, body=None)
        assert len(content.title) == 255
        assert len(content.slug) == 20
        assert content.body is None

    @pytest.mark.parametrize(
        "title, slug, field",
        [
            ("", "ok", "title"),
            ("t" * 256, "ok", "title"),
            ("ok", "", "slug"),
            ("ok", "s" * 21, "slug"),
        ],
    )
    def test_rejects_out_of_range(self, title, slug, field):
        with pytest.raises(UserInputError) as exc_info:
            parse_input(PostContent, title=title, slug=slug, body="x")

        error = exc_info.value
        assert error.extensions["code"] == "BAD_USER_INPUT"
        assert error.extensions["fields"] == [field]
        assert error.message.startswith("Invalid input:")


@pytest.mark.unit
class TestPublishDraft:
    def test_valid(self):
        draft_id = uuid.uuid4()
        args = parse_input(PublishDraft, draft_id=draft_id, slug="hello")
        assert args.draft_id == draft_id

    def test_slug_too_long(self):
        with pytest.raises(UserInputError):
            parse_input(PublishDraft, draft_id=uuid.uuid4(), slug="x" * 21)


@pytest.mark.unit
class TestPostLookup:
    def test_requires_a_criterion(self):
        with pytest.raises(UserInputError, match="At least one of id, slug or title"):
            parse_input(PostLookup, id=None, slug=None, title=None)

    def test_any_single_criterion_is_enough(self):
        assert parse_input(PostLookup, slug="x").slug == "x"
        assert parse_input(PostLookup, title="x").title == "x"


@pytest.mark.unit
class TestPage:
    def test_defaults(self):
        page = Page()
        assert page.limit == 10
        assert page.offset == 0

    @pytest.mark.parametrize("limit, offset", [(0, 0), (101, 0), (10, -1)])
    def test_rejects_out_of_range(self, limit, offset):
        with pytest.raises(UserInputError):
            parse_input(Page, limit=limit, offset=offset)

    def test_max_page_size_is_allowed(self):
        assert parse_input(Page, limit=100, offset=0).limit == 100


@pytest.mark.unit
def test_filter_fields_are_optional():
    filters = parse_input(PostFilter, type=None, writer=None)
    assert filters.type is None
    assert filters.writer is None
