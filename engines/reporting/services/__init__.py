"""
SariWais Reporting Engine — Sales Analytics
==============================================
Read-only figures over one store account's transactions and catalog,
parameterized by an inclusive calendar-date window [start, end].

RULES:
- Only the bound account's data is read; nothing is mutated
- Datetimes are compared by their calendar date
- Revenue sums the stored (possibly stale) transaction totals
- COGS uses each item's purchase price at query time
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Protocol, Tuple

from core.config.rules import DEFAULT_RULES, StoreRules
from core.time.clock import Clock, get_default_clock
from core.time.temporal import DateLike, DateWindow
from engines.inventory.items import InventoryItem
from engines.inventory.services import InventoryController
from engines.reporting.reports import generate_expenses_report, generate_sales_report
from engines.retail.transactions import Transaction

logger = logging.getLogger("sariwais.reporting")

ZERO = Decimal("0")
CENT = Decimal("0.01")


class ReportableAccount(Protocol):
    def get_transactions(self) -> List[Transaction]:
        ...

    def get_inventory_controller(self) -> InventoryController:
        ...


class Sales:
    """Analytics engine bound to one account."""

    def __init__(
        self,
        account: ReportableAccount,
        *,
        rules: StoreRules = DEFAULT_RULES,
        clock: Optional[Clock] = None,
    ):
        self._account = account
        self._rules = rules
        self._clock = clock or get_default_clock()

    @property
    def rules(self) -> StoreRules:
        return self._rules

    @property
    def clock(self) -> Clock:
        return self._clock

    # ── Window selection ───────────────────────────────────────

    def transactions_in(self, start: DateLike, end: DateLike) -> List[Transaction]:
        window = DateWindow.of(start, end)
        return [
            t for t in self._account.get_transactions()
            if window.contains(t.transaction_date)
        ]

    def tally_quantities(
        self, start: DateLike, end: DateLike
    ) -> List[Tuple[InventoryItem, int]]:
        """Quantity sold per distinct catalog item, in first-seen order."""
        tally: Dict[int, List] = {}
        for transaction in self.transactions_in(start, end):
            for line in transaction.items_sold:
                key = id(line.item)
                if key not in tally:
                    tally[key] = [line.item, 0]
                tally[key][1] += line.quantity
        return [(item, quantity) for item, quantity in tally.values()]

    # ── Rankings ───────────────────────────────────────────────

    def get_top_selling_products(
        self, n: int, start: DateLike, end: DateLike
    ) -> List[InventoryItem]:
        """Highest quantity first. Ties keep first-seen order."""
        ranked = sorted(
            self.tally_quantities(start, end), key=lambda pair: pair[1], reverse=True,
        )
        return [item for item, _ in ranked[:max(n, 0)]]

    def get_least_selling_products(
        self, n: int, start: DateLike, end: DateLike
    ) -> List[InventoryItem]:
        """Lowest quantity first, among items sold at least once in the window."""
        ranked = sorted(self.tally_quantities(start, end), key=lambda pair: pair[1])
        return [item for item, _ in ranked[:max(n, 0)]]

    # ── Money ──────────────────────────────────────────────────

    def get_total_revenue(self, start: DateLike, end: DateLike) -> Decimal:
        return sum(
            (t.total_amount for t in self.transactions_in(start, end)), ZERO
        )

    def get_total_transactions(self, start: DateLike, end: DateLike) -> int:
        return len(self.transactions_in(start, end))

    def get_cogs(self, start: DateLike, end: DateLike) -> Decimal:
        """Cost of goods sold: Σ quantity × current purchase price."""
        return sum(
            (
                line.line_cost()
                for t in self.transactions_in(start, end)
                for line in t.items_sold
            ),
            ZERO,
        )

    def get_cogp(self, start: DateLike, end: DateLike) -> Decimal:
        """
        Cost of goods purchased.

        Purchase value (purchase_price × current stock) of every catalog
        item bought in the window, PLUS get_cogs() for the same window.
        Adding COGS on top double counts goods that were bought and sold
        in the window; the figure is kept as store owners have always
        seen it until the intended meaning is confirmed.
        """
        window = DateWindow.of(start, end)
        purchased = sum(
            (
                item.purchase_price * item.stock
                for item in self._account.get_inventory_controller().view_inventory()
                if window.contains(item.purchase_date)
            ),
            ZERO,
        )
        return purchased + self.get_cogs(start, end)

    def get_total_profit(self, start: DateLike, end: DateLike) -> Decimal:
        return self.get_total_revenue(start, end) - self.get_cogs(start, end)

    def get_daily_average_revenue(self, start: DateLike, end: DateLike) -> Decimal:
        """Revenue over the inclusive day count, half-up to 2 dp; 0 if days <= 0."""
        days = DateWindow.of(start, end).day_count()
        if days <= 0:
            return Decimal("0.00")
        average = self.get_total_revenue(start, end) / Decimal(days)
        return average.quantize(CENT, rounding=ROUND_HALF_UP)

    # ── Breakdown ──────────────────────────────────────────────

    def get_sales_by_category(self, start: DateLike, end: DateLike) -> Dict[str, int]:
        """Quantity sold per category name, in first-appearance order."""
        totals: Dict[str, int] = {}
        for item, quantity in self.tally_quantities(start, end):
            name = item.category_name
            totals[name] = totals.get(name, 0) + quantity
        return totals

    # ── Reports ────────────────────────────────────────────────

    def generate_sales_report(self, start: DateLike, end: DateLike) -> str:
        logger.debug(f"Generating sales report {start} .. {end}")
        return generate_sales_report(self, start, end)

    def generate_expenses_report(self, start: DateLike, end: DateLike) -> str:
        logger.debug(f"Generating expenses report {start} .. {end}")
        return generate_expenses_report(self, start, end)

    def metrics(self, start: DateLike, end: DateLike) -> dict:
        """All figures for one window as strings/ints, for JSON responses."""
        limit = self._rules.report_product_limit
        return {
            "total_revenue": str(self.get_total_revenue(start, end)),
            "daily_average_revenue": str(self.get_daily_average_revenue(start, end)),
            "total_profit": str(self.get_total_profit(start, end)),
            "total_transactions": self.get_total_transactions(start, end),
            "cogs": str(self.get_cogs(start, end)),
            "cogp": str(self.get_cogp(start, end)),
            "top_selling": [
                i.product_name for i in self.get_top_selling_products(limit, start, end)
            ],
            "least_selling": [
                i.product_name for i in self.get_least_selling_products(limit, start, end)
            ],
            "sales_by_category": self.get_sales_by_category(start, end),
        }


__all__ = ["Sales", "ReportableAccount"]
