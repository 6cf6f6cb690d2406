"""
SariWais Reporting Engine — Plain-Text Reports
=================================================
Fixed-layout text exports. Line order and labels are a compatibility
contract for downloaded report files; every line ends in "\\n".
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from core.time.temporal import DateLike, as_date

_CENT = Decimal("0.01")


def format_money(amount: Decimal, currency_tag: str) -> str:
    """Decimal("1234.5") → 'PHP1234.50' (no grouping)."""
    return f"{currency_tag}{Decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)}"


def _header(title: str, sales: Any, start: DateLike, end: DateLike) -> str:
    timestamp = as_date(sales.clock.now_utc()).isoformat()
    return (
        f"{title}\n"
        f"From: {as_date(start).isoformat()} To: {as_date(end).isoformat()}\n"
        f"Timestamp: {timestamp}\n"
    )


def generate_sales_report(sales: Any, start: DateLike, end: DateLike) -> str:
    tag = sales.rules.currency_tag
    limit = sales.rules.report_product_limit
    report = _header("Sales Report", sales, start, end)
    report += f"Total Revenue: {format_money(sales.get_total_revenue(start, end), tag)}\n"
    report += (
        "Daily Average Revenue: "
        f"{format_money(sales.get_daily_average_revenue(start, end), tag)}\n"
    )
    report += f"Total Profit: {format_money(sales.get_total_profit(start, end), tag)}\n"
    report += f"Total Transactions: {sales.get_total_transactions(start, end)}\n"

    report += "Top Selling Products:\n"
    for item in sales.get_top_selling_products(limit, start, end):
        report += f"- {item.product_name}\n"
    report += "Least Selling Products:\n"
    for item in sales.get_least_selling_products(limit, start, end):
        report += f"- {item.product_name}\n"
    return report


def generate_expenses_report(sales: Any, start: DateLike, end: DateLike) -> str:
    tag = sales.rules.currency_tag
    report = _header("Expenses Report", sales, start, end)
    report += f"Total COGS: {format_money(sales.get_cogs(start, end), tag)}\n"
    report += f"Total COGP: {format_money(sales.get_cogp(start, end), tag)}\n"
    return report
