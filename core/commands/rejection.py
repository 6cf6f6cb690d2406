"""
SariWais Command Layer — Rejection Model
===========================================
Structured rejection reasons for refused operations.

Every refused command in the core returns one of these instead of
raising. Callers inspect `code` to decide the user-facing message.

Every rejection must be:
- Deterministic (same input → same rejection)
- Machine-readable (code)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for a refused operation.

    Fields:
        code:        Machine-readable rejection code (e.g. 'USERNAME_TAKEN').
        message:     Human-readable explanation.
        policy_name: Name of the operation or policy that refused.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Validation ────────────────────────────────────────────
    INVALID_ITEM_FIELDS = "INVALID_ITEM_FIELDS"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_ACCOUNT_FIELDS = "INVALID_ACCOUNT_FIELDS"
    INVALID_SUBSCRIPTION_STATUS = "INVALID_SUBSCRIPTION_STATUS"
    EMPTY_TRANSACTION = "EMPTY_TRANSACTION"

    # ── Not found ─────────────────────────────────────────────
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"

    # ── Conflict ──────────────────────────────────────────────
    USERNAME_TAKEN = "USERNAME_TAKEN"

    # ── Insufficient resource ─────────────────────────────────
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"

    # ── Illegal operation ─────────────────────────────────────
    ADMIN_ACCOUNT_PROTECTED = "ADMIN_ACCOUNT_PROTECTED"

    # ── Authentication ────────────────────────────────────────
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    SUBSCRIPTION_EXPIRED = "SUBSCRIPTION_EXPIRED"
    SESSION_REQUIRED = "SESSION_REQUIRED"
    SESSION_INVALID = "SESSION_INVALID"
    PERMISSION_DENIED = "PERMISSION_DENIED"
