"""
SariWais Django Adapter Wiring
==============================
Constructs HttpApiDependencies for the running Django process.

This module is adapter-only glue:
- one StoreDirectory per process, configured from settings.SARIWAIS
- in-memory sessions; a restart logs everyone out
"""

from __future__ import annotations

import threading

from django.conf import settings

from core.admin.directory import StoreDirectory, get_default_directory, set_default_directory
from core.config.rules import rules_from_mapping
from core.http_api.auth import InMemorySessionProvider
from core.http_api.dependencies import HttpApiDependencies

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _configured_directory() -> StoreDirectory:
    rules = rules_from_mapping(getattr(settings, "SARIWAIS", None))
    set_default_directory(StoreDirectory(rules=rules))
    return get_default_directory()


def _create_dependencies() -> HttpApiDependencies:
    return HttpApiDependencies(
        directory=_configured_directory(),
        session_provider=InMemorySessionProvider(),
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def get_directory() -> StoreDirectory:
    return build_dependencies().directory


def reset_dependencies(dependencies: HttpApiDependencies | None = None) -> None:
    """Swap in (or with None, drop) the wired dependencies (testing only)."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = dependencies
        if dependencies is not None:
            set_default_directory(dependencies.directory)
