"""
SariWais Bootstrap — Startup Seeding
=======================================
"""

from core.bootstrap.seed import preload_accounts

__all__ = [
    "preload_accounts",
]
