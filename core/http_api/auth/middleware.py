"""
SariWais HTTP API Auth - Request Context Middleware Utility
===========================================================
Framework-agnostic session resolution and authorization.
"""

from __future__ import annotations

from typing import Any

from core.admin.accounts import StoreAccount
from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.auth.provider import SessionPrincipal
from core.http_api.auth.resolver import resolve_session_principal


def resolve_request_context(
    headers: dict[str, Any] | None,
    dependencies,
    *,
    require_admin: bool = False,
) -> tuple[SessionPrincipal, StoreAccount] | RejectionReason:
    """
    Session → (principal, account).

    A session whose account was deleted is invalid. Subscription is
    checked at login only; an open session outlives a later expiry.
    """
    principal = resolve_session_principal(headers, dependencies.session_provider)
    if isinstance(principal, RejectionReason):
        return principal

    directory = dependencies.directory
    account = directory.find_by_username(principal.username)
    if account is None:
        return RejectionReason(
            code=ReasonCode.SESSION_INVALID,
            message="Session account no longer exists.",
            policy_name="http_api_auth_middleware",
        )

    if require_admin and not directory.is_admin(principal.username):
        return RejectionReason(
            code=ReasonCode.PERMISSION_DENIED,
            message="Administrator access required.",
            policy_name="http_api_auth_middleware",
        )

    return (principal, account)
