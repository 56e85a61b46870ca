"""Tests for the per-request log context."""

import uuid

import pytest

from quill.logging import (
    add_request_context,
    bind_post_context,
    clear_request_context,
    request_id_ctx,
    set_request_context,
    user_id_ctx,
)


@pytest.fixture(autouse=True)
def fresh_context():
    clear_request_context()
    yield
    clear_request_context()


@pytest.mark.unit
class TestRequestContext:
    def test_generates_request_id(self):
        request_id = set_request_context()

        assert request_id
        assert request_id_ctx.get() == request_id

        clear_request_context()
        assert request_id_ctx.get() is None

    def test_keeps_well_formed_caller_id(self):
        assert set_request_context("edge-7f3a.1") == "edge-7f3a.1"

    @pytest.mark.parametrize("header", ["has spaces", "x" * 65, "line\nbreak", ""])
    def test_replaces_malformed_caller_id(self, header):
        assert set_request_context(header) != header

    def test_new_request_drops_previous_post(self):
        set_request_context("first")
        bind_post_context(post_id=uuid.uuid4())

        set_request_context("second")

        event = add_request_context(None, "info", {"event": "hello"})
        assert event == {"event": "hello", "request_id": "second"}


@pytest.mark.unit
class TestAddRequestContext:
    def test_adds_user_post_and_draft(self):
        post_id, draft_id = uuid.uuid4(), uuid.uuid4()
        set_request_context("req-1")
        user_id_ctx.set("user-1")
        bind_post_context(post_id=post_id, draft_id=draft_id)

        event = add_request_context(None, "info", {"event": "Post created"})

        assert event["request_id"] == "req-1"
        assert event["user_id"] == "user-1"
        assert event["post_id"] == str(post_id)
        assert event["draft_id"] == str(draft_id)

    def test_explicit_fields_win(self):
        bind_post_context(post_id="from-context")

        event = add_request_context(None, "info", {"event": "x", "post_id": "explicit"})

        assert event["post_id"] == "explicit"
