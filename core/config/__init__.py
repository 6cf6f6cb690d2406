"""
SariWais Core Config — Public API
====================================
Operator-configurable rules shared by all tenants.
"""

from core.config.rules import (
    DEFAULT_RULES,
    StoreRules,
    rules_from_mapping,
)

__all__ = [
    "DEFAULT_RULES",
    "StoreRules",
    "rules_from_mapping",
]
