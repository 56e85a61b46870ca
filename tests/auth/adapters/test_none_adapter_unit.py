"""Unit tests for NoAuth authentication adapter."""

import os
from unittest.mock import patch
from uuid import UUID, uuid4

import pytest

from quill.auth.adapters.base import AuthenticationError, Principal
from quill.auth.adapters.none import DEV_USER_ID, NoAuthAdapter

ACTING_USER = "7b1e4c52-0000-4000-8000-000000000007"


@pytest.fixture
def none_adapter():
    return NoAuthAdapter(default_user_id=ACTING_USER)


class TestNoAuthAdapter:
    """Test NoAuth authentication adapter."""

    @pytest.mark.asyncio
    async def test_any_token_acts_as_default_user(self, none_adapter):
        principal = await none_adapter.verify_token("any-token-works")

        assert principal == Principal(provider="none", user_id=UUID(ACTING_USER))

    @pytest.mark.asyncio
    async def test_verify_empty_token_fails(self, none_adapter):
        """Test that empty token is rejected."""
        with pytest.raises(AuthenticationError, match="Token required"):
            await none_adapter.verify_token("")

    @pytest.mark.asyncio
    async def test_issue_token_for_default_user(self, none_adapter):
        token = await none_adapter.issue_token(UUID(ACTING_USER))

        assert token == f"dev-token|{ACTING_USER}"
        assert (await none_adapter.verify_token(token)).user_id == UUID(ACTING_USER)

    @pytest.mark.asyncio
    async def test_issue_token_for_other_user_is_refused(self, none_adapter):
        with pytest.raises(ValueError, match="always acts as"):
            await none_adapter.issue_token(uuid4())

    def test_default_user_id(self):
        assert NoAuthAdapter().user_id == UUID(DEV_USER_ID)

    @patch.dict(os.environ, {"ENVIRONMENT": "production"})
    def test_refuses_production(self):
        with pytest.raises(RuntimeError, match="cannot be used in production"):
            NoAuthAdapter()
