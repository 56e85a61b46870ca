"""Tests for the quill command line."""

import os
from unittest.mock import patch
from uuid import uuid4

import jwt
import pytest
from click.testing import CliRunner

from quill.auth.adapters.none import DEV_USER_ID
from quill.cli import cli


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch("quill.cli.configure_logging"):
        yield


class TestTokenCommand:
    @patch.dict(os.environ, {"QUILL_AUTH_PROVIDER": "none", "QUILL_AUTH_CONFIG": "{}"})
    def test_dev_token_for_default_user(self):
        result = CliRunner().invoke(cli, ["token", "--user-id", DEV_USER_ID])

        assert result.exit_code == 0
        token = result.output.strip().splitlines()[-1]
        assert token == f"dev-token|{DEV_USER_ID}"

    @patch.dict(os.environ, {"QUILL_AUTH_PROVIDER": "none", "QUILL_AUTH_CONFIG": "{}"})
    def test_dev_token_for_other_user_is_refused(self):
        result = CliRunner().invoke(cli, ["token", "--user-id", str(uuid4())])

        assert result.exit_code == 1
        assert "always acts as" in result.output
        assert "dev-token|" not in result.output

    def test_help_mentions_no_auth_restriction(self):
        result = CliRunner().invoke(cli, ["token", "--help"])

        assert "only the default user" in " ".join(result.output.split())

    @patch.dict(os.environ, {"QUILL_AUTH_PROVIDER": "jwt", "QUILL_JWT_SECRET": "cli-secret"})
    def test_jwt_token(self):
        user_id = uuid4()
        result = CliRunner().invoke(cli, ["token", "--user-id", str(user_id)])

        assert result.exit_code == 0
        token = result.output.strip().splitlines()[-1]
        payload = jwt.decode(token, "cli-secret", algorithms=["HS256"], audience="quill-api")
        assert payload["sub"] == str(user_id)

    def test_user_id_must_be_a_uuid(self):
        result = CliRunner().invoke(cli, ["token", "--user-id", "nope"])

        assert result.exit_code != 0


class TestServeCommand:
    def test_passes_options_to_uvicorn(self):
        with patch("quill.cli.uvicorn.run") as mock_run:
            result = CliRunner().invoke(cli, ["serve", "--port", "9000", "--reload"])

        assert result.exit_code == 0
        args, kwargs = mock_run.call_args
        assert args == ("quill.api.app:app",)
        assert kwargs["port"] == 9000
        assert kwargs["reload"] is True


class TestMigrateCommand:
    def test_upgrade_runs_alembic(self):
        from quill.database import cli as migrate_cli

        with patch("quill.database.cli.configure_logging"):
            with patch.object(migrate_cli.command, "upgrade") as mock_upgrade:
                result = CliRunner().invoke(migrate_cli.main, ["upgrade"])

        assert result.exit_code == 0
        config = mock_upgrade.call_args.args[0]
        assert config.get_main_option("script_location").endswith("alembic")
        assert mock_upgrade.call_args.kwargs == {"revision": "head"}

    def test_failure_exits_non_zero(self):
        from quill.database import cli as migrate_cli

        with patch("quill.database.cli.configure_logging"):
            with patch.object(migrate_cli.command, "downgrade", side_effect=RuntimeError("boom")):
                result = CliRunner().invoke(migrate_cli.main, ["downgrade"])

        assert result.exit_code == 1
