"""
SariWais HTTP API Auth - Session Resolver
=========================================
Resolve the session principal from request headers.
"""

from __future__ import annotations

from typing import Any

from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.auth.provider import SessionPrincipal

HEADER_SESSION_TOKEN = "x-session-token"


def _normalize_headers(headers: dict[str, Any] | None) -> dict[str, str]:
    normalized: dict[str, str] = {}
    for key, value in (headers or {}).items():
        normalized[str(key).strip().lower()] = str(value).strip()
    return normalized


def _reject(code: str, message: str) -> RejectionReason:
    return RejectionReason(
        code=code,
        message=message,
        policy_name="http_api_session_resolver",
    )


def session_token_from_headers(headers: dict[str, Any] | None) -> str:
    return _normalize_headers(headers).get(HEADER_SESSION_TOKEN, "")


def resolve_session_principal(
    headers: dict[str, Any] | None,
    session_provider,
) -> SessionPrincipal | RejectionReason:
    token = session_token_from_headers(headers)
    if not token:
        return _reject(
            ReasonCode.SESSION_REQUIRED,
            f"Missing {HEADER_SESSION_TOKEN} header.",
        )
    principal = session_provider.resolve_token(token)
    if principal is None:
        return _reject(ReasonCode.SESSION_INVALID, "Session is invalid or has ended.")
    return principal
