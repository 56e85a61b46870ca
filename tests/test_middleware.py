"""Tests for the request logging middleware."""

import json
import uuid

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from quill.logging import draft_id_ctx, post_id_ctx, request_id_ctx
from quill.middleware import (
    REDACTED,
    LoggingContextMiddleware,
    _operation_from_query,
    redact_content,
)


@pytest_asyncio.fixture
async def client():
    app = FastAPI()
    app.add_middleware(LoggingContextMiddleware)

    @app.api_route("/graphql", methods=["GET", "POST"])
    async def context():  # pyright: ignore [reportUnusedFunction]
        return {
            "request_id": request_id_ctx.get(),
            "post_id": post_id_ctx.get(),
            "draft_id": draft_id_ctx.get(),
        }

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.mark.unit
class TestRedactContent:
    def test_masks_bodies_at_any_depth(self):
        variables = {
            "id": "p-1",
            "input": {"title": "Launch", "slug": "launch", "body": "secret words"},
            "batch": [{"body": "more words"}],
        }

        redacted = redact_content(variables)

        assert redacted == {
            "id": "p-1",
            "input": {"title": "Launch", "slug": "launch", "body": REDACTED},
            "batch": [{"body": REDACTED}],
        }
        assert variables["input"]["body"] == "secret words"

    def test_null_body_stays_visible(self):
        assert redact_content({"body": None}) == {"body": None}


@pytest.mark.unit
@pytest.mark.parametrize(
    "query, expected",
    [
        ('query GetPost { post(input: {slug: "x"}) { id } }', "GetPost"),
        (
            "\n  mutation CreatePost { createPost(draftId: \"1\", slug: \"s\") { id } }",
            "mutation:CreatePost",
        ),
        ("{ posts { id } }", "unnamed_operation"),
        ("query IntrospectionQuery { __schema { types { name } } }", "__introspection"),
        ("", None),
        (None, None),
    ],
)
def test_operation_from_query(query, expected):
    assert _operation_from_query(query) == expected


@pytest.mark.unit
class TestLoggingContextMiddleware:
    @pytest.mark.asyncio
    async def test_binds_post_and_draft_from_variables(self, client):
        post_id, draft_id = uuid.uuid4(), uuid.uuid4()
        payload = {
            "query": "mutation CreatePost($draftId: UUID!) { createPost(draftId: $draftId) }",
            "variables": {"draftId": str(draft_id), "id": str(post_id)},
        }

        response = await client.post("/graphql", json=payload)

        assert response.json()["draft_id"] == str(draft_id)
        assert response.json()["post_id"] == str(post_id)

    @pytest.mark.asyncio
    async def test_binds_post_from_lookup_input_on_get(self, client):
        post_id = uuid.uuid4()
        params = {
            "query": "query GetPost($input: PostQueryInput!) { post(input: $input) { id } }",
            "variables": json.dumps({"input": {"id": str(post_id)}}),
        }

        response = await client.get("/graphql", params=params)

        assert response.json()["post_id"] == str(post_id)
        assert response.json()["draft_id"] is None

    @pytest.mark.asyncio
    async def test_ignores_ids_that_are_not_uuids(self, client):
        response = await client.post(
            "/graphql", json={"query": "{ posts { id } }", "variables": {"id": "../etc"}}
        )

        assert response.json()["post_id"] is None

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client):
        response = await client.post(
            "/graphql", json={"query": "{ posts { id } }"}, headers={"X-Request-ID": "trace-42"}
        )

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, client):
        response = await client.post("/graphql", content=b"not json")

        assert response.headers["X-Request-ID"] == response.json()["request_id"]
        assert response.json()["post_id"] is None
