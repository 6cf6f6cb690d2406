"""
SariWais Admin - Store Accounts
===============================
One tenant: credentials, store profile, its own inventory catalog, the
transactions it recorded and its subscription.

Subscription status never changes on its own; an expiry date passing
does not flip an account to expired. Only the admin does that.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Union

from core.config.rules import DEFAULT_RULES, StoreRules
from core.time.clock import Clock, get_default_clock
from core.time.temporal import days_until, ensure_aware
from engines.inventory.services import InventoryController
from engines.reporting.services import Sales
from engines.retail.transactions import Transaction, TransactionSequence

EventSink = Callable[[str, dict], None]


# ══════════════════════════════════════════════════════════════
# SUBSCRIPTION
# ══════════════════════════════════════════════════════════════

class SubscriptionStatus(Enum):
    ACTIVE = "active"
    TRIAL = "trial"
    EXPIRED = "expired"


def parse_subscription_status(value: Union[SubscriptionStatus, str]) -> SubscriptionStatus:
    if isinstance(value, SubscriptionStatus):
        return value
    if isinstance(value, str):
        try:
            return SubscriptionStatus(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(s.value for s in SubscriptionStatus)
    raise ValueError(f"Subscription status must be one of: {allowed}.")


@dataclass(frozen=True)
class SubscriptionInfo:
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    expiry_date: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "status", parse_subscription_status(self.status))
        if self.expiry_date is not None:
            if not isinstance(self.expiry_date, datetime):
                raise ValueError("expiry_date must be a datetime or None.")
            object.__setattr__(self, "expiry_date", ensure_aware(self.expiry_date))

    @property
    def is_expired(self) -> bool:
        return self.status is SubscriptionStatus.EXPIRED

    def days_remaining(self, now: datetime) -> Optional[int]:
        return days_until(self.expiry_date, now)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
        }


# ══════════════════════════════════════════════════════════════
# STORE ACCOUNT
# ══════════════════════════════════════════════════════════════

class StoreAccount:
    """
    A tenant. Normally created through StoreDirectory.create_account(),
    which wires the shared transaction sequence, clock and journal.

    `lock` is held by every inventory command and for the whole of a
    checkout; the directory hands each account its own lock.
    """

    def __init__(
        self,
        username: str,
        password_hash: str,
        store_name: str,
        store_address: str,
        contact_number: str,
        subscription: Optional[SubscriptionInfo] = None,
        *,
        sequence: Optional[TransactionSequence] = None,
        clock: Optional[Clock] = None,
        rules: StoreRules = DEFAULT_RULES,
        event_sink: Optional[EventSink] = None,
        lock: Optional[threading.RLock] = None,
    ):
        self._username = username
        self._password_hash = password_hash
        self.store_name = store_name
        self.store_address = store_address
        self.contact_number = contact_number
        self._subscription = subscription or SubscriptionInfo()
        self._sequence = sequence or TransactionSequence()
        self._clock = clock or get_default_clock()
        self._rules = rules
        self._emit = event_sink
        self._lock = lock or threading.RLock()
        self._inventory = InventoryController(
            owner=username, event_sink=event_sink, lock=self._lock,
        )
        self._transactions: List[Transaction] = []

    # ── Identity / credentials ─────────────────────────────────

    @property
    def username(self) -> str:
        return self._username

    @username.setter
    def username(self, value: str) -> None:
        self._username = value
        self._inventory.owner = value

    @property
    def password_hash(self) -> str:
        return self._password_hash

    def set_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash

    # ── Inventory / transactions ───────────────────────────────

    def get_inventory_controller(self) -> InventoryController:
        return self._inventory

    @property
    def inventory(self) -> InventoryController:
        return self._inventory

    def new_transaction(
        self,
        customer_name: str = "",
        transaction_date: Optional[datetime] = None,
    ) -> Transaction:
        """Mint an empty transaction; it is not recorded until add_transaction()."""
        return Transaction(
            transaction_id=self._sequence.next_id(),
            customer_name=customer_name,
            transaction_date=transaction_date or self._clock.now_utc(),
        )

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def add_transaction(self, transaction: Transaction) -> None:
        with self._lock:
            self._transactions.append(transaction)

    def get_transactions(self) -> List[Transaction]:
        with self._lock:
            return list(self._transactions)

    def sales(self) -> Sales:
        return Sales(self, rules=self._rules, clock=self._clock)

    def emit(self, event_type: str, payload: dict) -> None:
        if self._emit is not None:
            self._emit(event_type, payload)

    # ── Subscription ───────────────────────────────────────────

    def get_subscription(self) -> SubscriptionInfo:
        return self._subscription

    def set_subscription(
        self,
        status: Union[SubscriptionStatus, str],
        expiry_date: Optional[datetime],
    ) -> None:
        self._subscription = SubscriptionInfo(status=status, expiry_date=expiry_date)

    def summary(self) -> "AccountSummary":
        return AccountSummary(
            username=self._username,
            store_name=self.store_name,
            store_address=self.store_address,
            contact_number=self.contact_number,
            subscription_status=self._subscription.status.value,
            subscription_expiry=self._subscription.expiry_date,
        )

    def __repr__(self) -> str:
        return f"StoreAccount({self._username!r}, {self._subscription.status.value})"


# ══════════════════════════════════════════════════════════════
# ACCOUNT SUMMARY (admin listing row)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AccountSummary:
    """Listing view of an account. No credentials, inventory or sales."""
    username: str
    store_name: str
    store_address: str
    contact_number: str
    subscription_status: str
    subscription_expiry: Optional[datetime]

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "store_name": self.store_name,
            "store_address": self.store_address,
            "contact_number": self.contact_number,
            "subscription_status": self.subscription_status,
            "subscription_expiry": (
                self.subscription_expiry.isoformat()
                if self.subscription_expiry else None
            ),
        }
