"""
SariWais Core Security — Public API
======================================
"""

from core.security.credentials import ALGORITHM, PasswordHasher

__all__ = [
    "ALGORITHM",
    "PasswordHasher",
]
