"""
SariWais Retail Engine — Checkout Service
============================================
Turns a basket of (product_id, quantity) lines into a recorded
Transaction on a store account.

RULES:
- The whole basket is validated before any stock moves
- Validation, ID minting and stock removal run under the account lock
- A transaction ID is minted only for a sale that will be recorded
- The stored total is computed once, at checkout, from current prices
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Protocol

from core.commands.rejection import RejectionReason
from core.time.temporal import as_date
from engines.inventory.services import InventoryController
from engines.retail.commands import RecordSaleRequest
from engines.retail.events import (
    RETAIL_SALE_RECORDED_V1,
    RETAIL_SALE_REJECTED_V1,
    build_sale_recorded_payload,
    build_sale_rejected_payload,
)
from engines.retail.policies import non_empty_sale_policy, sale_lines_policy
from engines.retail.transactions import Transaction

logger = logging.getLogger("sariwais.retail")


# ══════════════════════════════════════════════════════════════
# PROTOCOLS
# ══════════════════════════════════════════════════════════════

class SellingAccount(Protocol):
    username: str

    @property
    def lock(self) -> threading.RLock:
        ...

    def get_inventory_controller(self) -> InventoryController:
        ...

    def new_transaction(
        self, customer_name: str = "", transaction_date: Optional[datetime] = None,
    ) -> Transaction:
        ...

    def add_transaction(self, transaction: Transaction) -> None:
        ...

    def emit(self, event_type: str, payload: dict) -> None:
        ...


# ══════════════════════════════════════════════════════════════
# RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SaleResult:
    transaction: Optional[Transaction]
    rejection: Optional[RejectionReason]

    @property
    def ok(self) -> bool:
        return self.rejection is None


# ══════════════════════════════════════════════════════════════
# CHECKOUT
# ══════════════════════════════════════════════════════════════

def record_sale(
    account: SellingAccount,
    customer_name: str,
    lines: Iterable[Any],
    transaction_date: Optional[datetime] = None,
) -> SaleResult:
    """
    Record one sale on `account`.

    `lines` may hold SaleLine objects, (product_id, quantity) pairs or
    mappings. Malformed lines raise ValueError; business refusals come
    back as SaleResult.rejection with nothing mutated.
    """
    request = RecordSaleRequest(
        customer_name=customer_name,
        lines=tuple(lines),
        transaction_date=transaction_date,
    )
    return record_sale_request(account, request)


def record_sale_request(account: SellingAccount, request: RecordSaleRequest) -> SaleResult:
    controller = account.get_inventory_controller()
    with account.lock:
        rejection = (
            non_empty_sale_policy(request.lines)
            or sale_lines_policy(controller, request.lines)
        )
        if rejection is None:
            transaction = account.new_transaction(
                request.customer_name, request.transaction_date,
            )
            # Stock was checked under this same lock, so no line is refused.
            for line in request.lines:
                transaction.add_item(controller.find_item(line.product_id), line.quantity)
            transaction.recompute_total()
            account.add_transaction(transaction)

    if rejection is not None:
        logger.warning(f"[{account.username}] Sale refused: {rejection.message}")
        account.emit(
            RETAIL_SALE_REJECTED_V1,
            build_sale_rejected_payload(
                account.username, rejection.code, request.customer_name,
            ),
        )
        return SaleResult(transaction=None, rejection=rejection)

    logger.info(
        f"[{account.username}] Recorded {transaction.transaction_id} for "
        f"{transaction.display_customer_name}: {transaction.total_amount}."
    )
    account.emit(
        RETAIL_SALE_RECORDED_V1,
        build_sale_recorded_payload(account.username, transaction),
    )
    return SaleResult(transaction=transaction, rejection=None)


# ══════════════════════════════════════════════════════════════
# SEARCH
# ══════════════════════════════════════════════════════════════

def search_transactions(
    transactions: Iterable[Transaction],
    term: str = "",
    on: Optional[date] = None,
) -> List[Transaction]:
    """
    Filter by transaction ID or customer name substring and by exact
    calendar date. Newest first; equal dates keep their recorded order.
    """
    needle = (term or "").strip().lower()
    wanted = as_date(on) if on is not None else None
    matches = []
    for transaction in transactions:
        if needle and needle not in transaction.transaction_id.lower() \
                and needle not in transaction.display_customer_name.lower():
            continue
        if wanted is not None and as_date(transaction.transaction_date) != wanted:
            continue
        matches.append(transaction)
    matches.sort(key=lambda t: t.transaction_date, reverse=True)
    return matches
