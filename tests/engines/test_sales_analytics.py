"""
SariWais Reporting Engine Tests — Sales Analytics
====================================================
Window filtering, rankings, revenue/COGS/COGP/profit and daily averages
over one account.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.admin.accounts import StoreAccount
from core.time.clock import FixedClock
from engines.inventory.items import Category, InventoryItem
from engines.reporting.services import Sales
from engines.retail.services import record_sale

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)
JAN_1 = date(2023, 1, 1)
DEC_31 = date(2023, 12, 31)


def _item(name, stock, purchase_price, price, category=Category.FOOD, purchased=JAN_1):
    return InventoryItem(
        product_name=name,
        stock=stock,
        purchase_price=purchase_price,
        price=price,
        low_stock_threshold=0,
        purchase_date=purchased,
        category=category,
    )


def _on(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def account():
    return StoreAccount(
        "store1", "unused-hash", "Store", "Addr", "0912", clock=FixedClock(NOW),
    )


def _sell(account, when, *lines, customer=""):
    result = record_sale(account, customer, list(lines), transaction_date=when)
    assert result.ok, result.rejection
    return result.transaction


class TestRankings:
    def test_top_one_of_two(self, account):
        controller = account.get_inventory_controller()
        a = controller.add_inventory_item(_item("A", 50, "1", "2"))
        b = controller.add_inventory_item(_item("B", 50, "1", "2"))
        _sell(account, _on(2023, 2, 1), (a.product_id, 5))
        _sell(account, _on(2023, 2, 2), (b.product_id, 10))

        assert Sales(account).get_top_selling_products(1, JAN_1, DEC_31) == [b]
        assert Sales(account).get_least_selling_products(1, JAN_1, DEC_31) == [a]

    def test_quantities_tallied_across_transactions(self, account):
        controller = account.get_inventory_controller()
        a = controller.add_inventory_item(_item("A", 50, "1", "2"))
        b = controller.add_inventory_item(_item("B", 50, "1", "2"))
        _sell(account, _on(2023, 2, 1), (a.product_id, 4), (b.product_id, 6))
        _sell(account, _on(2023, 2, 2), (a.product_id, 4))

        tally = Sales(account).tally_quantities(JAN_1, DEC_31)
        assert [(item.product_name, qty) for item, qty in tally] == [("A", 8), ("B", 6)]

    def test_ties_keep_first_seen_order(self, account):
        controller = account.get_inventory_controller()
        a = controller.add_inventory_item(_item("A", 50, "1", "2"))
        b = controller.add_inventory_item(_item("B", 50, "1", "2"))
        c = controller.add_inventory_item(_item("C", 50, "1", "2"))
        _sell(account, _on(2023, 2, 1), (b.product_id, 3), (a.product_id, 3), (c.product_id, 1))

        sales = Sales(account)
        assert sales.get_top_selling_products(3, JAN_1, DEC_31) == [b, a, c]
        assert sales.get_least_selling_products(3, JAN_1, DEC_31) == [c, b, a]

    def test_n_larger_than_items(self, account):
        controller = account.get_inventory_controller()
        a = controller.add_inventory_item(_item("A", 50, "1", "2"))
        _sell(account, _on(2023, 2, 1), (a.product_id, 1))
        assert Sales(account).get_top_selling_products(5, JAN_1, DEC_31) == [a]
        assert Sales(account).get_top_selling_products(0, JAN_1, DEC_31) == []

    def test_out_of_window_ignored(self, account):
        controller = account.get_inventory_controller()
        a = controller.add_inventory_item(_item("A", 50, "1", "2"))
        _sell(account, _on(2022, 12, 31, 23), (a.product_id, 9))
        assert Sales(account).get_top_selling_products(5, JAN_1, DEC_31) == []


class TestMoney:
    def _setup(self, account):
        controller = account.get_inventory_controller()
        rice = controller.add_inventory_item(_item("Bigas", 100, "38", "40"))
        fish = controller.add_inventory_item(_item("Tuyo", 50, "9", "10"))
        _sell(account, _on(2023, 1, 5), (rice.product_id, 5), (fish.product_id, 10))
        _sell(account, _on(2023, 3, 15), (rice.product_id, 1))
        return rice, fish

    def test_revenue_and_count(self, account):
        self._setup(account)
        sales = Sales(account)
        assert sales.get_total_revenue(JAN_1, DEC_31) == Decimal("340")
        assert sales.get_total_transactions(JAN_1, DEC_31) == 2
        assert sales.get_total_revenue(date(2023, 1, 5), date(2023, 1, 5)) == Decimal("300")

    def test_revenue_uses_stored_totals(self, account):
        rice, _ = self._setup(account)
        rice.price = Decimal("100")
        assert Sales(account).get_total_revenue(JAN_1, DEC_31) == Decimal("340")

    def test_cogs_uses_live_purchase_price(self, account):
        rice, _ = self._setup(account)
        sales = Sales(account)
        assert sales.get_cogs(JAN_1, DEC_31) == Decimal("318")
        rice.purchase_price = Decimal("40")
        assert sales.get_cogs(JAN_1, DEC_31) == Decimal("330")

    def test_profit(self, account):
        self._setup(account)
        assert Sales(account).get_total_profit(JAN_1, DEC_31) == Decimal("22")

    def test_cogp_double_counts_cogs(self, account):
        # Purchase value of in-window stock PLUS cost of goods sold.
        self._setup(account)
        sales = Sales(account)
        purchased = Decimal("38") * 94 + Decimal("9") * 40
        assert sales.get_cogp(JAN_1, DEC_31) == purchased + Decimal("318")

    def test_cogp_filters_by_purchase_date(self, account):
        controller = account.get_inventory_controller()
        controller.add_inventory_item(_item("Old", 10, "5", "6", purchased=date(2022, 6, 1)))
        controller.add_inventory_item(_item("New", 10, "5", "6", purchased=date(2023, 6, 1)))
        assert Sales(account).get_cogp(JAN_1, DEC_31) == Decimal("50")

    def test_sales_by_category(self, account):
        controller = account.get_inventory_controller()
        soda = controller.add_inventory_item(_item("Soda", 10, "1", "2", Category.BEVERAGES))
        rice = controller.add_inventory_item(_item("Rice", 10, "1", "2"))
        coffee = controller.add_inventory_item(_item("Kape", 10, "1", "2", Category.BEVERAGES))
        _sell(account, _on(2023, 2, 1), (soda.product_id, 2), (rice.product_id, 1), (coffee.product_id, 3))
        assert Sales(account).get_sales_by_category(JAN_1, DEC_31) == {
            "BEVERAGES": 5, "FOOD": 1,
        }


class TestDailyAverage:
    def test_single_day_window_equals_revenue(self, account):
        controller = account.get_inventory_controller()
        item = controller.add_inventory_item(_item("A", 50, "1", "100"))
        _sell(account, _on(2023, 5, 1, 15), (item.product_id, 1))
        day = date(2023, 5, 1)
        assert Sales(account).get_daily_average_revenue(day, day) == Decimal("100.00")

    def test_rounds_half_up(self, account):
        controller = account.get_inventory_controller()
        item = controller.add_inventory_item(_item("A", 50, "1", "0.05"))
        _sell(account, _on(2023, 5, 1), (item.product_id, 1))
        # 0.05 / 2 days = 0.025 → 0.03
        assert Sales(account).get_daily_average_revenue(
            date(2023, 5, 1), date(2023, 5, 2)
        ) == Decimal("0.03")

    def test_non_positive_days_gives_zero(self, account):
        assert Sales(account).get_daily_average_revenue(
            date(2023, 5, 3), date(2023, 5, 1)
        ) == Decimal("0")

    def test_empty_history(self, account):
        sales = Sales(account)
        assert sales.get_total_revenue(JAN_1, DEC_31) == Decimal("0")
        assert sales.get_daily_average_revenue(JAN_1, DEC_31) == Decimal("0.00")


class TestAccountBinding:
    def test_account_sales_is_bound(self, account):
        controller = account.get_inventory_controller()
        item = controller.add_inventory_item(_item("A", 50, "1", "2"))
        _sell(account, _on(2023, 2, 1), (item.product_id, 2))
        assert account.sales().get_total_transactions(JAN_1, DEC_31) == 1
