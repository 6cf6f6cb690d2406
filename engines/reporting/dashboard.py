"""
SariWais Reporting Engine — Dashboard Summary
================================================
The landing-page snapshot for a logged-in store: subscription, low
stock and all-time sales figures.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from core.time.clock import Clock, get_default_clock
from core.time.temporal import as_date


def build_dashboard(account: Any, clock: Optional[Clock] = None) -> dict:
    """
    Summarize an account over its whole history.

    `revenue_by_date` is keyed by ISO date, ascending. `stock_by_category`
    follows catalog order of first appearance.
    """
    clock = clock or get_default_clock()
    controller = account.get_inventory_controller()
    transactions = account.get_transactions()
    subscription = account.get_subscription()

    total_revenue = sum((t.total_amount for t in transactions), Decimal("0"))
    total_cogs = sum(
        (line.line_cost() for t in transactions for line in t.items_sold),
        Decimal("0"),
    )

    revenue_by_date: Dict[str, Decimal] = {}
    for transaction in transactions:
        key = as_date(transaction.transaction_date).isoformat()
        revenue_by_date[key] = revenue_by_date.get(key, Decimal("0")) + transaction.total_amount

    stock_by_category: Dict[str, int] = {}
    for item in controller.view_inventory():
        stock_by_category[item.category_name] = (
            stock_by_category.get(item.category_name, 0) + item.stock
        )

    return {
        "store_name": account.store_name,
        "subscription_status": subscription.status.value,
        "subscription_expiry": (
            subscription.expiry_date.isoformat() if subscription.expiry_date else None
        ),
        "days_remaining": subscription.days_remaining(clock.now_utc()),
        "product_count": len(controller),
        "low_stock": [item.to_dict() for item in controller.check_low_stock()],
        "total_transactions": len(transactions),
        "total_revenue": str(total_revenue),
        "total_cogs": str(total_cogs),
        "revenue_by_date": {
            day: str(revenue_by_date[day]) for day in sorted(revenue_by_date)
        },
        "stock_by_category": stock_by_category,
    }
