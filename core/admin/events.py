"""
SariWais Admin - Event Types and Payload Builders
=================================================
Admin builds payload only. Sequence and timestamp come from the journal.
Payloads never carry credentials.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional


ADMIN_ACCOUNT_CREATED_V1 = "admin.account.created.v1"
ADMIN_ACCOUNT_UPDATED_V1 = "admin.account.updated.v1"
ADMIN_ACCOUNT_DELETED_V1 = "admin.account.deleted.v1"
ADMIN_PASSWORD_RESET_V1 = "admin.account.password_reset.v1"
AUTH_LOGIN_SUCCEEDED_V1 = "admin.session.login_succeeded.v1"
AUTH_LOGIN_REJECTED_V1 = "admin.session.login_rejected.v1"
AUTH_LOGGED_OUT_V1 = "admin.session.logged_out.v1"

ADMIN_EVENT_TYPES = (
    ADMIN_ACCOUNT_CREATED_V1,
    ADMIN_ACCOUNT_UPDATED_V1,
    ADMIN_ACCOUNT_DELETED_V1,
    ADMIN_PASSWORD_RESET_V1,
    AUTH_LOGIN_SUCCEEDED_V1,
    AUTH_LOGIN_REJECTED_V1,
    AUTH_LOGGED_OUT_V1,
)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def build_account_payload(
    username: str,
    store_name: str,
    subscription_status: str,
    subscription_expiry: Optional[datetime],
) -> dict:
    return {
        "username": username,
        "store_name": store_name,
        "subscription_status": subscription_status,
        "subscription_expiry": _iso(subscription_expiry),
    }


def build_account_updated_payload(
    original_username: str,
    username: str,
    password_changed: bool,
    subscription_status: str,
    subscription_expiry: Optional[datetime],
) -> dict:
    return {
        "original_username": original_username,
        "username": username,
        "password_changed": password_changed,
        "subscription_status": subscription_status,
        "subscription_expiry": _iso(subscription_expiry),
    }


def build_username_payload(username: str) -> dict:
    return {"username": username}


def build_login_rejected_payload(username: str, code: str) -> dict:
    return {"username": username, "code": code}
