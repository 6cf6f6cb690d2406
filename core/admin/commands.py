"""
SariWais Admin - Request Commands
=================================
Typed admin and auth requests parsed from form/JSON input.

Construction checks types and parses dates. Business rules (blank
fields, taken usernames, protected admin) stay with the StoreDirectory
so they come back as rejections rather than exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Optional

from core.admin.accounts import parse_subscription_status


def _text(value: Any, field_name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string.")
    return value.strip()


def _parse_expiry(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValueError("subscription_expiry must be an ISO date or datetime.") from exc
    raise ValueError("subscription_expiry must be an ISO date or datetime.")


@dataclass(frozen=True)
class LoginRequest:
    username: str
    password: str

    def __post_init__(self):
        object.__setattr__(self, "username", _text(self.username, "username"))
        if not isinstance(self.password, str):
            raise ValueError("password must be a string.")


@dataclass(frozen=True)
class AccountCreateRequest:
    username: str
    password: str
    store_name: str
    store_address: str = ""
    contact_number: str = ""
    subscription_status: str = "active"
    subscription_expiry: Optional[datetime] = None

    def __post_init__(self):
        for name in ("username", "store_name", "store_address", "contact_number"):
            object.__setattr__(self, name, _text(getattr(self, name), name))
        if not isinstance(self.password, str):
            raise ValueError("password must be a string.")
        object.__setattr__(
            self, "subscription_status",
            parse_subscription_status(self.subscription_status or "active").value,
        )
        object.__setattr__(
            self, "subscription_expiry", _parse_expiry(self.subscription_expiry),
        )

    @classmethod
    def from_mapping(cls, data: dict) -> "AccountCreateRequest":
        return cls(
            username=data["username"],
            password=data["password"],
            store_name=data["store_name"],
            store_address=data.get("store_address", ""),
            contact_number=data.get("contact_number", ""),
            subscription_status=data.get("subscription_status", "active"),
            subscription_expiry=data.get("subscription_expiry"),
        )


@dataclass(frozen=True)
class AccountUpdateRequest:
    original_username: str
    username: str
    store_name: str
    store_address: str
    contact_number: str
    subscription_status: str
    subscription_expiry: Optional[datetime] = None
    password: Optional[str] = None

    def __post_init__(self):
        for name in (
            "original_username", "username", "store_name",
            "store_address", "contact_number",
        ):
            object.__setattr__(self, name, _text(getattr(self, name), name))
        if self.password is not None and not isinstance(self.password, str):
            raise ValueError("password must be a string or null.")
        object.__setattr__(
            self, "subscription_status",
            parse_subscription_status(self.subscription_status).value,
        )
        object.__setattr__(
            self, "subscription_expiry", _parse_expiry(self.subscription_expiry),
        )

    @classmethod
    def from_mapping(cls, data: dict) -> "AccountUpdateRequest":
        return cls(
            original_username=data["original_username"],
            username=data.get("username", data["original_username"]),
            store_name=data["store_name"],
            store_address=data.get("store_address", ""),
            contact_number=data.get("contact_number", ""),
            subscription_status=data["subscription_status"],
            subscription_expiry=data.get("subscription_expiry"),
            password=data.get("password"),
        )


@dataclass(frozen=True)
class AccountDeleteRequest:
    username: str

    def __post_init__(self):
        object.__setattr__(self, "username", _text(self.username, "username"))


@dataclass(frozen=True)
class PasswordResetRequest:
    username: str
    new_password: str

    def __post_init__(self):
        object.__setattr__(self, "username", _text(self.username, "username"))
        if not isinstance(self.new_password, str):
            raise ValueError("new_password must be a string.")
