"""
SariWais Core Security — Password Credentials
================================================
Salted PBKDF2-SHA256 hashes for store account passwords.

Encoded form: pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>

The directory never keeps plaintext; login and reset_password go
through hash()/verify() only.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
_SALT_BYTES = 16


def _ensure_password(password: str) -> str:
    if not isinstance(password, str) or not password:
        raise ValueError("password must be a non-empty string.")
    return password


class PasswordHasher:
    def __init__(self, iterations: int = 120_000):
        if not isinstance(iterations, int) or iterations < 1:
            raise ValueError("iterations must be a positive integer.")
        self._iterations = iterations

    def _digest(self, password: str, salt: str, iterations: int) -> str:
        return hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            bytes.fromhex(salt),
            iterations,
        ).hex()

    def hash(self, password: str) -> str:
        password = _ensure_password(password)
        salt = secrets.token_hex(_SALT_BYTES)
        digest = self._digest(password, salt, self._iterations)
        return f"{ALGORITHM}${self._iterations}${salt}${digest}"

    def verify(self, password: str, encoded: str) -> bool:
        if not isinstance(password, str) or not isinstance(encoded, str):
            return False
        try:
            algorithm, iterations_raw, salt, expected = encoded.split("$")
            if algorithm != ALGORITHM:
                return False
            actual = self._digest(password, salt, int(iterations_raw))
        except ValueError:
            return False
        return hmac.compare_digest(actual, expected)
