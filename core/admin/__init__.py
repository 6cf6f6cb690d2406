"""
SariWais Admin - Public API
===========================
"""

from core.admin.accounts import (
    AccountSummary,
    StoreAccount,
    SubscriptionInfo,
    SubscriptionStatus,
    parse_subscription_status,
)
from core.admin.commands import (
    AccountCreateRequest,
    AccountDeleteRequest,
    AccountUpdateRequest,
    LoginRequest,
    PasswordResetRequest,
)
from core.admin.directory import (
    StoreDirectory,
    get_default_directory,
    set_default_directory,
)
from core.admin.events import ADMIN_EVENT_TYPES

__all__ = [
    "AccountSummary",
    "StoreAccount",
    "SubscriptionInfo",
    "SubscriptionStatus",
    "parse_subscription_status",
    "AccountCreateRequest",
    "AccountDeleteRequest",
    "AccountUpdateRequest",
    "LoginRequest",
    "PasswordResetRequest",
    "StoreDirectory",
    "get_default_directory",
    "set_default_directory",
    "ADMIN_EVENT_TYPES",
]
