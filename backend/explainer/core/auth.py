"""
Bearer-token caller identity.

Tokens are `<user_id>.<hex hmac-sha256(secret, user_id)>`. Issuing tokens
belongs to the account service; this module only verifies them. Setting
AUTH_ENABLED=false skips verification for local development and every request
is attributed to LOCAL_USER_ID.
"""

from __future__ import annotations

import hashlib
import hmac
import os

from fastapi import Request

from .runtime import parse_bool_env

AUTH_BEARER_PREFIX = "Bearer "
LOCAL_USER_ID = "local-dev"

PUBLIC_PATHS_EXACT = {
    "/",
    "/health",
    "/api/manim/readiness",
    "/openapi.json",
    "/docs",
    "/redoc",
}

PUBLIC_PATH_PREFIXES = (
    "/docs/",
    "/redoc/",
)


def _auth_secret() -> str:
    return os.getenv("AUTH_SECRET", "explainer-auth-secret").strip()


def is_auth_enabled() -> bool:
    return parse_bool_env(os.getenv("AUTH_ENABLED"), default=True)


def is_public_path(path: str) -> bool:
    if path in PUBLIC_PATHS_EXACT:
        return True
    return any(path.startswith(prefix) for prefix in PUBLIC_PATH_PREFIXES)


def _signature(user_id: str) -> str:
    return hmac.new(_auth_secret().encode("utf-8"), user_id.encode("utf-8"), hashlib.sha256).hexdigest()


def issue_auth_token(user_id: str) -> str:
    return f"{user_id}.{_signature(user_id)}"


def verify_auth_token(token: str) -> str | None:
    """Return the user id a token was issued for, or None if it does not verify."""
    user_id, sep, signature = token.rpartition(".")
    if not sep or not user_id or not signature:
        return None
    if not hmac.compare_digest(signature, _signature(user_id)):
        return None
    return user_id


def _extract_bearer_token(authorization_header: str | None) -> str | None:
    if not authorization_header or not authorization_header.startswith(AUTH_BEARER_PREFIX):
        return None
    return authorization_header[len(AUTH_BEARER_PREFIX):].strip() or None


def authenticate_request(request: Request) -> str | None:
    """Resolve the caller's user id, or None if the request is unauthenticated."""
    if not is_auth_enabled():
        return LOCAL_USER_ID
    token = _extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        return None
    return verify_auth_token(token)
