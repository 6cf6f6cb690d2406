"""
SariWais Admin - Store Directory
================================
The account directory: the ordered list of tenants, authentication and
the admin's account-management commands.

Rules:
- Usernames are unique; listing order is creation order
- The reserved admin account cannot be deleted and logs in regardless
  of its subscription
- Every command returns Optional[RejectionReason] (None = success) and
  a refused command mutates nothing
- All mutation happens under one re-entrant lock
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import List, Optional, Union

from core.admin.accounts import (
    AccountSummary,
    StoreAccount,
    SubscriptionInfo,
    SubscriptionStatus,
)
from core.admin.events import (
    ADMIN_ACCOUNT_CREATED_V1,
    ADMIN_ACCOUNT_DELETED_V1,
    ADMIN_ACCOUNT_UPDATED_V1,
    ADMIN_PASSWORD_RESET_V1,
    AUTH_LOGGED_OUT_V1,
    AUTH_LOGIN_REJECTED_V1,
    AUTH_LOGIN_SUCCEEDED_V1,
    build_account_payload,
    build_account_updated_payload,
    build_login_rejected_payload,
    build_username_payload,
)
from core.commands.rejection import ReasonCode, RejectionReason
from core.config.rules import DEFAULT_RULES, StoreRules
from core.events.journal import EventJournal
from core.security.credentials import PasswordHasher
from core.time.clock import Clock, get_default_clock
from engines.retail.transactions import TransactionSequence

logger = logging.getLogger("sariwais.admin")


def _blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def _invalid_fields(message: str, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.INVALID_ACCOUNT_FIELDS,
        message=message,
        policy_name=policy_name,
    )


def _account_not_found(username: str, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.ACCOUNT_NOT_FOUND,
        message=f"Account '{username}' not found.",
        policy_name=policy_name,
    )


def _username_taken(username: str, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.USERNAME_TAKEN,
        message=f"Username '{username}' already exists.",
        policy_name=policy_name,
    )


def _check_subscription(
    status: Union[SubscriptionStatus, str],
    expiry: Optional[datetime],
    policy_name: str,
) -> Optional[RejectionReason]:
    try:
        SubscriptionInfo(status=status, expiry_date=expiry)
    except ValueError as exc:
        return RejectionReason(
            code=ReasonCode.INVALID_SUBSCRIPTION_STATUS,
            message=str(exc),
            policy_name=policy_name,
        )
    return None


class StoreDirectory:
    """
    In-memory repository of store accounts.

    Owns the transaction sequence shared by every account, so
    transaction IDs are unique across tenants.
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        rules: StoreRules = DEFAULT_RULES,
        hasher: Optional[PasswordHasher] = None,
        journal: Optional[EventJournal] = None,
        sequence: Optional[TransactionSequence] = None,
    ):
        self._clock = clock or get_default_clock()
        self._rules = rules
        self._hasher = hasher or PasswordHasher(rules.password_hash_iterations)
        self._journal = journal or EventJournal()
        self._sequence = sequence or TransactionSequence()
        self._accounts: List[StoreAccount] = []
        self._lock = threading.RLock()

    # ── Wiring ─────────────────────────────────────────────────

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def rules(self) -> StoreRules:
        return self._rules

    @property
    def journal(self) -> EventJournal:
        return self._journal

    @property
    def sequence(self) -> TransactionSequence:
        return self._sequence

    def _record(self, event_type: str, payload: dict) -> None:
        self._journal.record(event_type, payload, self._clock.now_utc())

    def is_admin(self, username: str) -> bool:
        return username == self._rules.admin_username

    def default_subscription_expiry(self) -> datetime:
        """What the admin form pre-fills: now + default_subscription_days."""
        return self._clock.now_utc() + timedelta(days=self._rules.default_subscription_days)

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)

    # ── Commands ───────────────────────────────────────────────

    def create_account(
        self,
        username: str,
        password: str,
        store_name: str,
        store_address: str,
        contact_number: str,
        subscription_status: Union[SubscriptionStatus, str] = SubscriptionStatus.ACTIVE,
        subscription_expiry: Optional[datetime] = None,
    ) -> Optional[RejectionReason]:
        if _blank(username) or _blank(password) or _blank(store_name):
            return _invalid_fields(
                "Username, password and store name are required.", "create_account",
            )
        rejection = _check_subscription(
            subscription_status, subscription_expiry, "create_account",
        )
        if rejection is not None:
            return rejection

        with self._lock:
            if self._find(username) is not None:
                logger.warning("Account creation failed. Username already exists.")
                return _username_taken(username, "create_account")

            account = StoreAccount(
                username=username,
                password_hash=self._hasher.hash(password),
                store_name=store_name,
                store_address=store_address or "",
                contact_number=contact_number or "",
                subscription=SubscriptionInfo(
                    status=subscription_status, expiry_date=subscription_expiry,
                ),
                sequence=self._sequence,
                clock=self._clock,
                rules=self._rules,
                event_sink=self._record,
            )
            self._accounts.append(account)

        logger.info(f"Account created successfully for store: {store_name}")
        subscription = account.get_subscription()
        self._record(
            ADMIN_ACCOUNT_CREATED_V1,
            build_account_payload(
                username, store_name,
                subscription.status.value, subscription.expiry_date,
            ),
        )
        return None

    def update_account(
        self,
        original_username: str,
        new_username: str,
        new_password: Optional[str],
        store_name: str,
        store_address: str,
        contact_number: str,
        subscription_status: Union[SubscriptionStatus, str],
        subscription_expiry: Optional[datetime],
    ) -> Optional[RejectionReason]:
        """
        Overwrite an account's profile and subscription.

        The password changes only when `new_password` is non-blank.
        """
        if _blank(new_username) or _blank(store_name):
            return _invalid_fields("Username and store name are required.", "update_account")
        rejection = _check_subscription(
            subscription_status, subscription_expiry, "update_account",
        )
        if rejection is not None:
            return rejection

        with self._lock:
            account = self._find(original_username)
            if account is None:
                logger.warning("Account update failed. Account not found.")
                return _account_not_found(original_username, "update_account")
            if new_username != original_username and self._find(new_username) is not None:
                logger.warning("Account update failed. New username already exists.")
                return _username_taken(new_username, "update_account")

            password_changed = not _blank(new_password)
            account.username = new_username
            if password_changed:
                account.set_password_hash(self._hasher.hash(new_password))
            account.store_name = store_name
            account.store_address = store_address or ""
            account.contact_number = contact_number or ""
            account.set_subscription(subscription_status, subscription_expiry)

        logger.info(f"Account updated successfully for store: {store_name}")
        subscription = account.get_subscription()
        self._record(
            ADMIN_ACCOUNT_UPDATED_V1,
            build_account_updated_payload(
                original_username, new_username, password_changed,
                subscription.status.value, subscription.expiry_date,
            ),
        )
        return None

    def delete_account(self, username: str) -> Optional[RejectionReason]:
        if self.is_admin(username):
            logger.warning("Cannot delete admin account.")
            return RejectionReason(
                code=ReasonCode.ADMIN_ACCOUNT_PROTECTED,
                message="Cannot delete admin account.",
                policy_name="delete_account",
            )
        with self._lock:
            account = self._find(username)
            if account is None:
                logger.warning("Account deletion failed. Account not found.")
                return _account_not_found(username, "delete_account")
            self._accounts = [a for a in self._accounts if a is not account]

        logger.info(f"Account deleted successfully: {username}")
        self._record(ADMIN_ACCOUNT_DELETED_V1, build_username_payload(username))
        return None

    def reset_password(self, username: str, new_password: str) -> Optional[RejectionReason]:
        """Unknown account is reported before a blank password."""
        with self._lock:
            account = self._find(username)
            if account is None:
                logger.warning("Password reset failed. Account not found.")
                return _account_not_found(username, "reset_password")
            if _blank(new_password):
                return _invalid_fields("New password is required.", "reset_password")
            account.set_password_hash(self._hasher.hash(new_password))

        logger.info(f"Password reset successful for store: {account.store_name}")
        self._record(ADMIN_PASSWORD_RESET_V1, build_username_payload(username))
        return None

    # ── Authentication ─────────────────────────────────────────

    def login(self, username: str, password: str) -> Optional[RejectionReason]:
        """
        Check credentials, then the subscription.

        The admin account skips the subscription check. Trial and active
        accounts are both allowed in.
        """
        account = self.find_by_username(username)
        if account is None or not self._hasher.verify(password, account.password_hash):
            logger.warning("Invalid username or password.")
            return self._login_rejected(
                username,
                RejectionReason(
                    code=ReasonCode.INVALID_CREDENTIALS,
                    message="Invalid username or password.",
                    policy_name="login",
                ),
            )

        if not self.is_admin(username) and account.get_subscription().is_expired:
            logger.warning(f"Subscription expired for {username}.")
            return self._login_rejected(
                username,
                RejectionReason(
                    code=ReasonCode.SUBSCRIPTION_EXPIRED,
                    message="Your subscription has expired. Please contact the administrator.",
                    policy_name="login",
                ),
            )

        logger.info(f"Login successful for store: {account.store_name}")
        self._record(AUTH_LOGIN_SUCCEEDED_V1, build_username_payload(username))
        return None

    def _login_rejected(self, username: str, rejection: RejectionReason) -> RejectionReason:
        self._record(
            AUTH_LOGIN_REJECTED_V1,
            build_login_rejected_payload(username or "", rejection.code),
        )
        return rejection

    def logout(self, username: str) -> None:
        logger.info(f"Logged out: {username}")
        self._record(AUTH_LOGGED_OUT_V1, build_username_payload(username))

    # ── Queries ────────────────────────────────────────────────

    def _find(self, username: str) -> Optional[StoreAccount]:
        for account in self._accounts:
            if account.username == username:
                return account
        return None

    def find_by_username(self, username: str) -> Optional[StoreAccount]:
        with self._lock:
            return self._find(username)

    def get_all_accounts(self) -> List[AccountSummary]:
        with self._lock:
            return [account.summary() for account in self._accounts]

    def accounts(self) -> List[StoreAccount]:
        with self._lock:
            return list(self._accounts)


# ══════════════════════════════════════════════════════════════
# DEFAULT DIRECTORY (process-wide, for adapters)
# ══════════════════════════════════════════════════════════════

_default_directory: Optional[StoreDirectory] = None
_default_lock = threading.Lock()


def get_default_directory() -> StoreDirectory:
    global _default_directory
    if _default_directory is None:
        with _default_lock:
            if _default_directory is None:
                _default_directory = StoreDirectory()
    return _default_directory


def set_default_directory(directory: Optional[StoreDirectory]) -> None:
    """Replace (or with None, reset) the process-wide directory."""
    global _default_directory
    with _default_lock:
        _default_directory = directory
