"""
SariWais Inventory Engine Tests
==================================
Covers catalog items, the category registry, the controller and the
request DTOs.
"""

import sys
import threading
from datetime import date, datetime
from decimal import Decimal

import pytest

from core.commands.rejection import ReasonCode
from engines.inventory.commands import (
    ItemRegisterRequest,
    StockUpdateRequest,
)
from engines.inventory.events import (
    INVENTORY_ITEM_ADDED_V1,
    INVENTORY_ITEM_DELETED_V1,
    INVENTORY_STOCK_REMOVED_V1,
)
from engines.inventory.items import (
    Category,
    CategoryRegistry,
    InventoryItem,
    normalize_category_name,
)
from engines.inventory.services import InventoryController

PURCHASED = date(2023, 1, 1)


def make_item(name="Bigas", stock=100, purchase_price="38", price="40",
              threshold=20, category=Category.FOOD):
    return InventoryItem(
        product_name=name,
        stock=stock,
        purchase_price=purchase_price,
        price=price,
        low_stock_threshold=threshold,
        purchase_date=PURCHASED,
        category=category,
    )


# ══════════════════════════════════════════════════════════════
# INVENTORY ITEM
# ══════════════════════════════════════════════════════════════

class TestInventoryItem:
    def test_money_is_decimal(self):
        item = make_item(purchase_price=55.5, price="70")
        assert item.purchase_price == Decimal("55.5")
        assert item.price == Decimal("70")

    def test_product_id_absent_reads_empty(self):
        assert make_item().get_product_id() == ""

    def test_remove_stock_within_stock(self):
        item = make_item(stock=10)
        assert item.remove_stock(10) is True
        assert item.stock == 0

    def test_remove_stock_beyond_stock_refused(self):
        item = make_item(stock=10)
        assert item.remove_stock(11) is False
        assert item.stock == 10

    def test_add_stock(self):
        item = make_item(stock=10)
        item.add_stock(5)
        assert item.stock == 15

    def test_add_stock_refuses_negative(self):
        item = make_item(stock=10)
        with pytest.raises(ValueError):
            item.add_stock(-5)
        assert item.stock == 10

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_remove_stock_requires_positive_quantity(self, quantity):
        item = make_item(stock=10)
        with pytest.raises(ValueError):
            item.remove_stock(quantity)
        assert item.stock == 10

    def test_update_stock_zero_is_a_no_op(self):
        controller = InventoryController()
        controller.add_inventory_item(make_item(stock=10))
        assert controller.update_stock("P1", 0) is None
        assert controller.find_item("P1").stock == 10

    def test_low_stock_is_strict(self):
        assert not make_item(stock=20, threshold=20).is_low_stock()
        assert make_item(stock=19, threshold=20).is_low_stock()

    def test_datetime_purchase_date_collapses(self):
        item = InventoryItem("Kape", 1, 1, 1, 0, datetime(2023, 1, 1, 9, 30))
        assert item.purchase_date == date(2023, 1, 1)

    @pytest.mark.parametrize("field,value", [
        ("product_name", ""),
        ("stock", -1),
        ("stock", 1.5),
        ("price", "-1"),
        ("purchase_price", "abc"),
        ("low_stock_threshold", True),
    ])
    def test_construction_validates(self, field, value):
        kwargs = dict(
            product_name="Tuyo", stock=1, purchase_price=1, price=1,
            low_stock_threshold=0, purchase_date=PURCHASED,
        )
        kwargs[field] = value
        with pytest.raises(ValueError):
            InventoryItem(**kwargs)

    def test_update_is_all_or_nothing(self):
        item = make_item()
        with pytest.raises(ValueError):
            item.update(price="50", stock=-3)
        assert item.price == Decimal("40")
        assert item.stock == 100

    def test_update_rejects_unknown_fields(self):
        with pytest.raises(ValueError, match="Unknown"):
            make_item().update(colour="red")

    def test_built_in_category_string_becomes_enum(self):
        assert make_item(category="SNACKS").category is Category.SNACKS
        assert make_item(category="DRIED_GOODS").category == "DRIED_GOODS"

    def test_to_dict(self):
        data = make_item().to_dict()
        assert data["price"] == "40"
        assert data["purchase_date"] == "2023-01-01"
        assert data["category"] == "FOOD"
        assert data["low_stock"] is False


# ══════════════════════════════════════════════════════════════
# CATEGORY REGISTRY
# ══════════════════════════════════════════════════════════════

class TestCategoryRegistry:
    def test_normalization(self):
        assert normalize_category_name("  dried   goods ") == "DRIED_GOODS"

    def test_rejects_empty_name(self):
        with pytest.raises(ValueError):
            CategoryRegistry().add_custom_category("   ")

    def test_built_ins_first_then_customs_in_order(self):
        registry = CategoryRegistry()
        registry.add_custom_category("frozen")
        registry.add_custom_category("school supplies")
        assert registry.get_all_categories() == [
            "FOOD", "BEVERAGES", "HOUSEHOLD", "SNACKS", "TOILETRIES", "OTHER",
            "FROZEN", "SCHOOL_SUPPLIES",
        ]

    def test_duplicates_and_built_ins_ignored(self):
        registry = CategoryRegistry()
        registry.add_custom_category("Frozen")
        registry.add_custom_category("FROZEN")
        registry.add_custom_category("food")
        assert registry.custom_categories() == ["FROZEN"]


# ══════════════════════════════════════════════════════════════
# CONTROLLER
# ══════════════════════════════════════════════════════════════

class TestInventoryController:
    def test_sequential_ids_never_reused(self):
        controller = InventoryController()
        first = controller.add_inventory_item(make_item("A"))
        second = controller.add_inventory_item(make_item("B"))
        assert (first.product_id, second.product_id) == ("P1", "P2")
        assert controller.delete_inventory_item("P2") is None
        third = controller.add_inventory_item(make_item("C"))
        assert third.product_id == "P3"

    def test_add_overwrites_existing_id(self):
        item = make_item()
        item.product_id = "P99"
        stored = InventoryController().add_inventory_item(item)
        assert stored.product_id == "P1"

    def test_add_accepts_mapping(self):
        controller = InventoryController()
        stored = controller.add_inventory_item({
            "product_name": "Kape", "stock": 75, "purchase_price": "10",
            "price": "12", "low_stock_threshold": 10, "purchase_date": PURCHASED,
            "category": "BEVERAGES",
        })
        assert stored.product_id == "P1"
        assert stored.category is Category.BEVERAGES

    def test_duplicate_names_allowed(self):
        controller = InventoryController()
        controller.add_inventory_item(make_item("Bigas"))
        controller.add_inventory_item(make_item("Bigas"))
        assert len(controller) == 2

    def test_update_stock_add_and_remove(self):
        controller = InventoryController()
        controller.add_inventory_item(make_item(stock=10))
        assert controller.update_stock("P1", 5) is None
        assert controller.update_stock("P1", -15) is None
        assert controller.find_item("P1").stock == 0

    def test_update_stock_insufficient(self):
        controller = InventoryController()
        controller.add_inventory_item(make_item(stock=10))
        rejection = controller.update_stock("P1", -11)
        assert rejection.code == ReasonCode.INSUFFICIENT_STOCK
        assert controller.find_item("P1").stock == 10

    def test_update_stock_unknown_product(self):
        rejection = InventoryController().update_stock("P7", 1)
        assert rejection.code == ReasonCode.PRODUCT_NOT_FOUND

    def test_update_stock_to_below_threshold_flags_low_stock(self):
        controller = InventoryController()
        controller.add_inventory_item(make_item(stock=100, threshold=20))
        assert controller.check_low_stock() == []
        controller.update_stock("P1", -81)
        assert [i.product_id for i in controller.check_low_stock()] == ["P1"]

    def test_delete_unknown(self):
        rejection = InventoryController().delete_inventory_item("P1")
        assert rejection.code == ReasonCode.PRODUCT_NOT_FOUND

    def test_view_inventory_is_a_copy(self):
        controller = InventoryController()
        controller.add_inventory_item(make_item())
        snapshot = controller.view_inventory()
        snapshot.clear()
        assert len(controller.view_inventory()) == 1

    def test_update_item_validates(self):
        controller = InventoryController()
        controller.add_inventory_item(make_item())
        rejection = controller.update_item("P1", price="-5")
        assert rejection.code == ReasonCode.INVALID_ITEM_FIELDS
        assert controller.update_item("P1", price="45", category="SNACKS") is None
        assert controller.find_item("P1").price == Decimal("45")
        assert controller.update_item("P9", price="1").code == ReasonCode.PRODUCT_NOT_FOUND

    def test_search(self):
        controller = InventoryController()
        controller.add_inventory_item(make_item("Bigas"))
        controller.add_inventory_item(make_item("Kape", category=Category.BEVERAGES))
        assert [i.product_name for i in controller.search("big")] == ["Bigas"]
        assert [i.product_name for i in controller.search("p2")] == ["Kape"]
        assert [i.product_name for i in controller.search(category="BEVERAGES")] == ["Kape"]
        assert len(controller.search()) == 2

    def test_events_emitted(self):
        events = []
        controller = InventoryController(
            owner="store1", event_sink=lambda t, p: events.append((t, p)),
        )
        controller.add_inventory_item(make_item(stock=10))
        controller.update_stock("P1", -3)
        controller.update_stock("P1", -30)
        controller.delete_inventory_item("P1")
        assert [t for t, _ in events] == [
            INVENTORY_ITEM_ADDED_V1,
            INVENTORY_STOCK_REMOVED_V1,
            INVENTORY_ITEM_DELETED_V1,
        ]
        assert events[1][1]["stock_after"] == 7
        assert events[0][1]["owner"] == "store1"


class TestControllerConcurrency:
    WORKERS = 8
    PER_WORKER = 250

    def test_concurrent_adds_get_unique_ids(self):
        controller = InventoryController()
        added = []

        def worker(n):
            for i in range(self.PER_WORKER):
                added.append(controller.add_inventory_item(make_item(f"W{n}-{i}")).product_id)

        previous = sys.getswitchinterval()
        sys.setswitchinterval(1e-6)
        try:
            threads = [
                threading.Thread(target=worker, args=(n,)) for n in range(self.WORKERS)
            ]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()
        finally:
            sys.setswitchinterval(previous)

        total = self.WORKERS * self.PER_WORKER
        assert len(controller) == total
        assert sorted(added, key=lambda pid: int(pid[1:])) == [
            f"P{n}" for n in range(1, total + 1)
        ]
        assert controller.next_product_id == f"P{total + 1}"

    def test_controller_uses_the_lock_it_is_given(self):
        lock = threading.RLock()
        controller = InventoryController(lock=lock)
        assert controller.lock is lock

        done = threading.Event()
        with lock:
            thread = threading.Thread(
                target=lambda: (controller.add_inventory_item(make_item()), done.set()),
            )
            thread.start()
            assert not done.wait(0.05)
            assert len(controller) == 0
        thread.join()
        assert len(controller) == 1


# ══════════════════════════════════════════════════════════════
# REQUEST DTOs
# ══════════════════════════════════════════════════════════════

class TestInventoryRequests:
    def test_register_request_parses_strings(self):
        request = ItemRegisterRequest(
            product_name=" Yakult ", stock="50", purchase_price="6",
            price="8", low_stock_threshold="10", purchase_date="2023-01-01",
            category="BEVERAGES",
        )
        item = request.to_item()
        assert item.product_name == "Yakult"
        assert item.stock == 50
        assert item.purchase_date == date(2023, 1, 1)
        assert item.category is Category.BEVERAGES

    def test_register_request_rejects_bad_date(self):
        with pytest.raises(ValueError, match="purchase_date"):
            ItemRegisterRequest("Yakult", 1, 1, 1, 1, "01/01/2023")

    def test_stock_request_requires_integer(self):
        assert StockUpdateRequest("P1", "-3").quantity == -3
        with pytest.raises(ValueError):
            StockUpdateRequest("P1", "three")
        with pytest.raises(ValueError):
            StockUpdateRequest("", 1)
