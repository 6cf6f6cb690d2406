"""
SariWais Retail Engine — Transactions
========================================
A sale record that mutates inventory stock the moment a line is added.

RULES:
- Transaction IDs are "T" + n from one TransactionSequence shared by
  every account of a directory (globally unique, never reused)
- Naive transaction dates are taken as UTC
- add_item() decrements the shared InventoryItem's stock immediately
- total_amount is NOT kept in sync: it changes only on recompute_total(),
  and it uses each item's price at recompute time, not at sale time
- No void/refund: once appended to an account a transaction is not
  mutated by any flow in this package
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from threading import Lock
from typing import List, Optional

from core.commands.rejection import RejectionReason
from core.time.temporal import ensure_aware
from engines.inventory.items import InventoryItem
from engines.inventory.policies import positive_quantity_policy, sufficient_stock_policy

logger = logging.getLogger("sariwais.retail")

WALK_IN_CUSTOMER = "Walk-in Customer"


# ══════════════════════════════════════════════════════════════
# TRANSACTION SEQUENCE
# ══════════════════════════════════════════════════════════════

class TransactionSequence:
    """Monotonic "T" + n generator; one instance per directory."""

    def __init__(self, start: int = 1):
        if start < 1:
            raise ValueError("start must be >= 1.")
        self._next = start
        self._lock = Lock()

    def next_id(self) -> str:
        with self._lock:
            value = self._next
            self._next += 1
        return f"T{value}"

    @property
    def issued_count(self) -> int:
        with self._lock:
            return self._next - 1


# ══════════════════════════════════════════════════════════════
# TRANSACTION ITEM
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TransactionItem:
    """One sold line. `item` is the catalog object itself, not a copy."""
    item: InventoryItem
    quantity: int

    def line_total(self) -> Decimal:
        return self.item.price * self.quantity

    def line_cost(self) -> Decimal:
        return self.item.purchase_price * self.quantity


# ══════════════════════════════════════════════════════════════
# TRANSACTION
# ══════════════════════════════════════════════════════════════

class Transaction:
    def __init__(
        self,
        transaction_id: str,
        customer_name: str,
        transaction_date: datetime,
    ):
        if not transaction_id:
            raise ValueError("transaction_id must be non-empty.")
        if not isinstance(transaction_date, datetime):
            raise ValueError("transaction_date must be a datetime.")
        self._transaction_id = transaction_id
        self._transaction_date = ensure_aware(transaction_date)
        self._items_sold: List[TransactionItem] = []
        self._total_amount = Decimal("0")
        self.customer_name = customer_name or ""

    # ── Commands ───────────────────────────────────────────────

    def add_item(self, item: InventoryItem, quantity: int) -> Optional[RejectionReason]:
        """
        Sell `quantity` units of `item`.

        On success the item's stock drops right away and a line is
        appended. On refusal nothing changes and the reason is returned.
        """
        rejection = (
            positive_quantity_policy(quantity, "transaction_add_item")
            or sufficient_stock_policy(item, quantity, "transaction_add_item")
        )
        if rejection is not None:
            logger.warning(
                f"{self._transaction_id}: cannot add {quantity} of "
                f"{item.product_name}: {rejection.message}"
            )
            return rejection

        item.remove_stock(quantity)
        self._items_sold.append(TransactionItem(item=item, quantity=quantity))
        logger.info(
            f"{self._transaction_id}: added {quantity} of {item.product_name}."
        )
        return None

    def recompute_total(self) -> Decimal:
        """Sum price × quantity using the items' current prices."""
        self._total_amount = sum(
            (line.line_total() for line in self._items_sold), Decimal("0")
        )
        return self._total_amount

    def calculate_total(self) -> Decimal:
        return self.recompute_total()

    # ── Accessors ──────────────────────────────────────────────

    @property
    def transaction_id(self) -> str:
        return self._transaction_id

    @property
    def transaction_date(self) -> datetime:
        return self._transaction_date

    @property
    def items_sold(self) -> List[TransactionItem]:
        return list(self._items_sold)

    @property
    def total_amount(self) -> Decimal:
        """Value as of the last recompute_total() call."""
        return self._total_amount

    @property
    def display_customer_name(self) -> str:
        return self.customer_name or WALK_IN_CUSTOMER

    def to_dict(self) -> dict:
        return {
            "transaction_id": self._transaction_id,
            "transaction_date": self._transaction_date.isoformat(),
            "customer_name": self.display_customer_name,
            "items": [
                {
                    "product_id": line.item.get_product_id(),
                    "product_name": line.item.product_name,
                    "quantity": line.quantity,
                    "price": str(line.item.price),
                }
                for line in self._items_sold
            ],
            "total_amount": str(self._total_amount),
        }

    def __repr__(self) -> str:
        return (
            f"Transaction({self._transaction_id!r}, lines={len(self._items_sold)}, "
            f"total={self._total_amount})"
        )
