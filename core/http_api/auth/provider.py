"""
SariWais HTTP API Auth - Session Provider and Principal Model
=============================================================
Bearer-token sessions opened by a successful login.
"""

from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol


@dataclass(frozen=True)
class SessionPrincipal:
    token: str
    username: str
    opened_at: datetime

    def __post_init__(self):
        if not self.token or not isinstance(self.token, str):
            raise ValueError("token must be a non-empty string.")
        if not self.username or not isinstance(self.username, str):
            raise ValueError("username must be a non-empty string.")
        if not isinstance(self.opened_at, datetime):
            raise ValueError("opened_at must be datetime.")


class SessionProvider(Protocol):
    def open_session(self, username: str, opened_at: datetime) -> SessionPrincipal:
        ...

    def resolve_token(self, token: str) -> Optional[SessionPrincipal]:
        ...

    def close_session(self, token: str) -> bool:
        ...

    def rename_user(self, old_username: str, new_username: str) -> int:
        ...

    def revoke_user(self, username: str) -> int:
        ...


def _default_token() -> str:
    return secrets.token_urlsafe(32)


class InMemorySessionProvider:
    """
    Process-local session store. Tokens die with the process.
    """

    def __init__(self, token_factory: Optional[Callable[[], str]] = None):
        self._token_factory = token_factory or _default_token
        self._sessions: dict[str, SessionPrincipal] = {}
        self._lock = threading.Lock()

    def open_session(self, username: str, opened_at: datetime) -> SessionPrincipal:
        with self._lock:
            token = self._token_factory()
            while token in self._sessions:
                token = self._token_factory()
            principal = SessionPrincipal(token=token, username=username, opened_at=opened_at)
            self._sessions[token] = principal
        return principal

    def resolve_token(self, token: str) -> Optional[SessionPrincipal]:
        if not isinstance(token, str):
            return None
        with self._lock:
            return self._sessions.get(token)

    def close_session(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def rename_user(self, old_username: str, new_username: str) -> int:
        """Point every session of `old_username` at `new_username`."""
        with self._lock:
            renamed = 0
            for token, principal in list(self._sessions.items()):
                if principal.username == old_username:
                    self._sessions[token] = SessionPrincipal(
                        token=token, username=new_username, opened_at=principal.opened_at,
                    )
                    renamed += 1
            return renamed

    def revoke_user(self, username: str) -> int:
        with self._lock:
            tokens = [t for t, p in self._sessions.items() if p.username == username]
            for token in tokens:
                del self._sessions[token]
            return len(tokens)
