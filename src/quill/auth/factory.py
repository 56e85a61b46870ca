"""Build the auth adapter named by QUILL_AUTH_PROVIDER."""

from __future__ import annotations

import json
import os

from ..config import settings
from .adapters.base import AuthAdapter
from .adapters.jwt import JWTAuthAdapter
from .adapters.none import DEV_USER_ID, NoAuthAdapter


def _auth_config() -> dict:
    raw = os.getenv("QUILL_AUTH_CONFIG")
    if raw is None:
        return dict(settings.auth_config)
    try:
        config = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"QUILL_AUTH_CONFIG is not valid JSON: {e}") from e
    if not isinstance(config, dict):
        raise ValueError("QUILL_AUTH_CONFIG must be a JSON object")
    return config


def _jwt_adapter(config: dict) -> JWTAuthAdapter:
    secret = config.get("secret_key") or os.getenv("QUILL_JWT_SECRET") or settings.jwt_secret
    if not secret:
        raise ValueError("JWT secret key is required. Set QUILL_JWT_SECRET or provide in config.")
    return JWTAuthAdapter(
        secret_key=secret,
        algorithm=config.get("algorithm", settings.jwt_algorithm),
        issuer=config.get("issuer", "quill"),
        audience=config.get("audience", "quill-api"),
        token_expiry_hours=int(config.get("token_expiry_hours", 24)),
    )


def get_auth_adapter() -> AuthAdapter:
    """Adapter for the provider configured right now; read on every request."""
    provider = os.getenv("QUILL_AUTH_PROVIDER", settings.auth_provider)
    config = _auth_config()

    if provider == "none":
        return NoAuthAdapter(default_user_id=config.get("default_user_id", DEV_USER_ID))
    if provider == "jwt":
        return _jwt_adapter(config)
    raise ValueError(f"Unsupported auth provider: {provider}")
