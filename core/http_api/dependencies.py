"""
SariWais HTTP API - Dependencies
================================
Handler wiring: the account directory and the session store.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.admin.directory import StoreDirectory
from core.http_api.auth.provider import SessionProvider


@dataclass(frozen=True)
class HttpApiDependencies:
    directory: StoreDirectory
    session_provider: SessionProvider
