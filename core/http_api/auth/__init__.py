"""
SariWais HTTP API Auth - Public API
===================================
"""

from core.http_api.auth.middleware import resolve_request_context
from core.http_api.auth.provider import (
    InMemorySessionProvider,
    SessionPrincipal,
    SessionProvider,
)
from core.http_api.auth.resolver import (
    HEADER_SESSION_TOKEN,
    resolve_session_principal,
    session_token_from_headers,
)

__all__ = [
    "HEADER_SESSION_TOKEN",
    "InMemorySessionProvider",
    "SessionPrincipal",
    "SessionProvider",
    "resolve_request_context",
    "resolve_session_principal",
    "session_token_from_headers",
]
