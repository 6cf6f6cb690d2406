"""
SariWais Bootstrap — Demo Data
=================================
Fills an empty StoreDirectory with the admin store (ten staple products
and three 2023 sales) and three sample tenants, one per subscription
status.

Rules:
- Idempotent: a directory that already has any account is left alone
- Sample expiries are relative to the directory's clock
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone

from core.admin.accounts import SubscriptionStatus
from core.admin.directory import StoreDirectory
from engines.inventory.items import Category, InventoryItem
from engines.retail.services import record_sale

logger = logging.getLogger("sariwais.bootstrap")

ADMIN_PASSWORD = "admin123"
SAMPLE_STORE_PASSWORD = "password123"
SEED_PURCHASE_DATE = date(2023, 1, 1)

# name, stock, purchase price, price, low-stock threshold, category
SEED_ITEMS = (
    ("Bigas", 100, "38.00", "40.00", 20, Category.FOOD),
    ("Tuyo", 50, "9.00", "10.00", 5, Category.FOOD),
    ("Sardinas", 80, "20.00", "25.00", 10, Category.FOOD),
    ("Sabon Panglaba", 60, "10.00", "15.00", 10, Category.TOILETRIES),
    ("Toothpaste", 40, "45.00", "50.00", 5, Category.TOILETRIES),
    ("Softdrinks", 100, "18.00", "20.00", 10, Category.BEVERAGES),
    ("Kape", 75, "10.00", "12.00", 10, Category.BEVERAGES),
    ("Chicharon", 30, "20.00", "30.00", 5, Category.SNACKS),
    ("Yakult", 50, "6.00", "8.00", 10, Category.BEVERAGES),
    ("Cooking Oil", 20, "55.50", "70.00", 5, Category.HOUSEHOLD),
)

# date, customer, [(index into SEED_ITEMS, quantity)]
SEED_SALES = (
    (date(2023, 1, 5), "Juan Dela Cruz", ((0, 5), (1, 10))),
    (date(2023, 3, 15), "Maria Clara", ((2, 3), (5, 2))),
    (date(2023, 6, 10), "Jose Rizal", ((7, 4), (9, 1))),
)

# username, store name, address, contact, status, expiry offset in days
SAMPLE_STORES = (
    ("store1", "Juan's Sari-Sari Store", "123 Main St., Manila", "0912-345-6789",
     SubscriptionStatus.ACTIVE, 30),
    ("store2", "Maria's Mini Mart", "456 Second St., Cebu", "0923-456-7890",
     SubscriptionStatus.TRIAL, 7),
    ("store3", "Pedro's Pantry", "789 Third St., Davao", "0934-567-8901",
     SubscriptionStatus.EXPIRED, -10),
)


def _at_midnight(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def _seed_admin(directory: StoreDirectory) -> None:
    admin_username = directory.rules.admin_username
    directory.create_account(
        admin_username, ADMIN_PASSWORD, "Admin Store", "123 Admin St.", "123-456-7890",
    )
    admin = directory.find_by_username(admin_username)
    controller = admin.get_inventory_controller()

    items = [
        controller.add_inventory_item(
            InventoryItem(
                product_name=name,
                stock=stock,
                purchase_price=purchase_price,
                price=price,
                low_stock_threshold=threshold,
                purchase_date=SEED_PURCHASE_DATE,
                category=category,
            )
        )
        for name, stock, purchase_price, price, threshold, category in SEED_ITEMS
    ]

    for day, customer, lines in SEED_SALES:
        result = record_sale(
            admin,
            customer,
            [(items[index].get_product_id(), quantity) for index, quantity in lines],
            transaction_date=_at_midnight(day),
        )
        if not result.ok:
            raise RuntimeError(f"Seed sale refused: {result.rejection.message}")


def preload_accounts(directory: StoreDirectory) -> bool:
    """Seed `directory` if it is empty. Returns True when data was added."""
    if len(directory) > 0:
        logger.debug("Directory already populated; seed skipped.")
        return False

    _seed_admin(directory)

    now = directory.clock.now_utc()
    for username, store_name, address, contact, status, offset in SAMPLE_STORES:
        directory.create_account(
            username,
            SAMPLE_STORE_PASSWORD,
            store_name,
            address,
            contact,
            subscription_status=status,
            subscription_expiry=now + timedelta(days=offset),
        )

    logger.info(f"Seeded {len(directory)} store accounts.")
    return True
