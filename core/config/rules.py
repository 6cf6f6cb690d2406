"""
SariWais Core Config — Store Rules
=====================================
Operator-configurable constants: currency tag on reports, the reserved
administrator username, the UI default subscription length and the
password hashing cost. Domain code reads these from a StoreRules
instance instead of hardcoding them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


# ══════════════════════════════════════════════════════════════
# STORE RULES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StoreRules:
    """Process-level settings shared by every tenant of a directory."""

    currency_tag: str = "PHP"
    admin_username: str = "admin"
    default_subscription_days: int = 30
    report_product_limit: int = 5
    password_hash_iterations: int = 120_000

    def __post_init__(self) -> None:
        if not self.currency_tag or not isinstance(self.currency_tag, str):
            raise ValueError("currency_tag must be a non-empty string.")
        if not self.admin_username or not isinstance(self.admin_username, str):
            raise ValueError("admin_username must be a non-empty string.")
        if not isinstance(self.default_subscription_days, int) or self.default_subscription_days <= 0:
            raise ValueError("default_subscription_days must be a positive integer.")
        if not isinstance(self.report_product_limit, int) or self.report_product_limit <= 0:
            raise ValueError("report_product_limit must be a positive integer.")
        if not isinstance(self.password_hash_iterations, int) or self.password_hash_iterations < 1:
            raise ValueError("password_hash_iterations must be a positive integer.")


DEFAULT_RULES = StoreRules()


def rules_from_mapping(values: Optional[Mapping[str, Any]]) -> StoreRules:
    """
    Build StoreRules from a plain mapping (e.g. the Django SARIWAIS setting).

    Keys are matched case-insensitively; unknown keys are rejected so a
    typo in settings does not silently fall back to a default.
    """
    if not values:
        return DEFAULT_RULES
    known = {f.name for f in fields(StoreRules)}
    kwargs: dict[str, Any] = {}
    for key, value in values.items():
        name = str(key).lower()
        if name not in known:
            raise ValueError(f"Unknown store rule: {key}.")
        kwargs[name] = value
    return StoreRules(**kwargs)
