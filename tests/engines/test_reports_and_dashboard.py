"""
SariWais Reporting Engine Tests — Text Reports and Dashboard
===============================================================
Report layout is byte-for-byte; the timestamp comes from the clock.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from core.admin.accounts import StoreAccount, SubscriptionInfo
from core.config.rules import StoreRules
from core.time.clock import FixedClock
from engines.inventory.items import Category, InventoryItem
from engines.reporting.dashboard import build_dashboard
from engines.reporting.reports import format_money
from engines.reporting.services import Sales
from engines.retail.services import record_sale

NOW = datetime(2025, 2, 14, 8, 0, tzinfo=timezone.utc)
START = date(2023, 1, 1)
END = date(2023, 12, 31)


def _item(name, stock, purchase_price, price, category=Category.FOOD, threshold=5):
    return InventoryItem(
        product_name=name,
        stock=stock,
        purchase_price=purchase_price,
        price=price,
        low_stock_threshold=threshold,
        purchase_date=date(2023, 1, 1),
        category=category,
    )


def _account(**kwargs):
    account = StoreAccount(
        "store1", "unused-hash", "Juan's Sari-Sari Store", "Manila", "0912",
        clock=FixedClock(NOW), **kwargs,
    )
    controller = account.get_inventory_controller()
    controller.add_inventory_item(_item("Bigas", 100, "38", "40"))
    controller.add_inventory_item(_item("Tuyo", 50, "9", "10"))
    controller.add_inventory_item(_item("Kape", 8, "10", "12", Category.BEVERAGES, threshold=10))
    record_sale(account, "Juan", [("P1", 5), ("P2", 10)],
                transaction_date=datetime(2023, 1, 5, tzinfo=timezone.utc))
    record_sale(account, "Maria", [("P3", 2)],
                transaction_date=datetime(2023, 3, 15, tzinfo=timezone.utc))
    return account


class TestFormatMoney:
    def test_two_decimals(self):
        assert format_money(Decimal("5"), "PHP") == "PHP5.00"
        assert format_money(Decimal("1234.565"), "PHP") == "PHP1234.57"
        assert format_money(Decimal("-3.5"), "USD") == "USD-3.50"


class TestSalesReport:
    def test_exact_layout(self):
        report = _account().sales().generate_sales_report(START, END)
        # revenue 300 + 24 = 324; cogs 190 + 90 + 20 = 300; 365 days
        assert report == (
            "Sales Report\n"
            "From: 2023-01-01 To: 2023-12-31\n"
            "Timestamp: 2025-02-14\n"
            "Total Revenue: PHP324.00\n"
            "Daily Average Revenue: PHP0.89\n"
            "Total Profit: PHP24.00\n"
            "Total Transactions: 2\n"
            "Top Selling Products:\n"
            "- Tuyo\n"
            "- Bigas\n"
            "- Kape\n"
            "Least Selling Products:\n"
            "- Kape\n"
            "- Bigas\n"
            "- Tuyo\n"
        )

    def test_empty_window_still_has_every_label(self):
        report = _account().sales().generate_sales_report(date(2024, 1, 1), date(2024, 1, 1))
        assert report.endswith(
            "Total Transactions: 0\nTop Selling Products:\nLeast Selling Products:\n"
        )

    def test_currency_and_limit_from_rules(self):
        account = _account(rules=StoreRules(currency_tag="USD", report_product_limit=1))
        report = account.sales().generate_sales_report(START, END)
        assert "Total Revenue: USD324.00\n" in report
        assert report.count("- ") == 2


class TestExpensesReport:
    def test_exact_layout(self):
        report = _account().sales().generate_expenses_report(START, END)
        # COGP: 38*95 + 9*40 + 10*6 = 4030, plus COGS 300
        assert report == (
            "Expenses Report\n"
            "From: 2023-01-01 To: 2023-12-31\n"
            "Timestamp: 2025-02-14\n"
            "Total COGS: PHP300.00\n"
            "Total COGP: PHP4330.00\n"
        )

    def test_datetime_bounds_render_as_dates(self):
        sales = Sales(_account(), clock=FixedClock(NOW))
        report = sales.generate_expenses_report(
            datetime(2023, 1, 1, 13, 0), datetime(2023, 6, 30, 18, 0)
        )
        assert report.splitlines()[1] == "From: 2023-01-01 To: 2023-06-30"


class TestDashboard:
    def test_summary(self):
        account = _account(
            subscription=SubscriptionInfo("trial", NOW + timedelta(days=7)),
        )
        summary = build_dashboard(account, FixedClock(NOW))

        assert summary["store_name"] == "Juan's Sari-Sari Store"
        assert summary["subscription_status"] == "trial"
        assert summary["days_remaining"] == 7
        assert summary["total_revenue"] == "324"
        assert summary["total_cogs"] == "300"
        assert summary["total_transactions"] == 2
        assert [row["product_name"] for row in summary["low_stock"]] == ["Kape"]
        assert summary["revenue_by_date"] == {"2023-01-05": "300", "2023-03-15": "24"}
        assert summary["stock_by_category"] == {"FOOD": 135, "BEVERAGES": 6}

    def test_untracked_expiry(self):
        summary = build_dashboard(_account(), FixedClock(NOW))
        assert summary["days_remaining"] is None
