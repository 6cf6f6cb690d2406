"""
SariWais Inventory Engine — Catalog Items
============================================
A single product record with stock and pricing, plus the category
registry shared by every store in the process.

RULES:
- Money is Decimal (never float); quantities are int
- stock never goes negative: remove_stock() refuses instead
- Stock moves never take a negative quantity; that is a ValueError
- Low stock is strict: stock < low_stock_threshold
- product_id is None until an InventoryController assigns one
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from threading import Lock
from typing import Any, List, Optional, Union

logger = logging.getLogger("sariwais.inventory")


# ══════════════════════════════════════════════════════════════
# CATEGORIES — built-in variants + registered custom names
# ══════════════════════════════════════════════════════════════

class Category(Enum):
    FOOD = "FOOD"
    BEVERAGES = "BEVERAGES"
    HOUSEHOLD = "HOUSEHOLD"
    SNACKS = "SNACKS"
    TOILETRIES = "TOILETRIES"
    OTHER = "OTHER"


CategoryValue = Union[Category, str]

_BUILT_IN_NAMES = tuple(c.value for c in Category)
_WHITESPACE = re.compile(r"\s+")


def normalize_category_name(name: str) -> str:
    """'dried goods ' → 'DRIED_GOODS'."""
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Category name cannot be empty.")
    return _WHITESPACE.sub("_", name.strip()).upper()


def coerce_category(value: CategoryValue) -> CategoryValue:
    """Map built-in names to Category members; keep custom names as str."""
    if isinstance(value, Category):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("category must be a Category or a non-empty string.")
    if value in _BUILT_IN_NAMES:
        return Category(value)
    return value


def category_name(value: CategoryValue) -> str:
    return value.value if isinstance(value, Category) else value


class CategoryRegistry:
    """
    Built-in categories plus custom names added at runtime.

    Built-ins always come first (declaration order), customs follow in
    registration order.
    """

    def __init__(self) -> None:
        self._custom: List[str] = []
        self._lock = Lock()

    def add_custom_category(self, name: str) -> str:
        """
        Register a custom category and return its normalized name.

        Re-registering a known name (built-in or custom) is a no-op.
        """
        normalized = normalize_category_name(name)
        with self._lock:
            if normalized in _BUILT_IN_NAMES or normalized in self._custom:
                return normalized
            self._custom.append(normalized)
        logger.info(f"Custom category registered: {normalized}")
        return normalized

    def get_all_categories(self) -> List[str]:
        with self._lock:
            return list(_BUILT_IN_NAMES) + list(self._custom)

    def custom_categories(self) -> List[str]:
        with self._lock:
            return list(self._custom)


_default_registry = CategoryRegistry()


def get_category_registry() -> CategoryRegistry:
    return _default_registry


def set_category_registry(registry: CategoryRegistry) -> None:
    """Swap the process-wide registry (testing only)."""
    global _default_registry
    _default_registry = registry


def add_custom_category(name: str) -> str:
    return _default_registry.add_custom_category(name)


def get_all_categories() -> List[str]:
    return _default_registry.get_all_categories()


# ══════════════════════════════════════════════════════════════
# FIELD NORMALIZATION
# ══════════════════════════════════════════════════════════════

def to_money(value: Any, *, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number.")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"{field_name} must be a number.") from exc
    if not amount.is_finite():
        raise ValueError(f"{field_name} must be a number.")
    if amount < 0:
        raise ValueError(f"{field_name} cannot be negative.")
    return amount


def to_count(value: Any, *, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer.")
    if value < 0:
        raise ValueError(f"{field_name} cannot be negative.")
    return value


def to_purchase_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValueError("purchase_date must be a date.")


# ══════════════════════════════════════════════════════════════
# INVENTORY ITEM
# ══════════════════════════════════════════════════════════════

@dataclass(eq=False)
class InventoryItem:
    """
    One product in a store's catalog.

    Compared by identity: two items with the same fields are still two
    catalog entries. Transactions hold references to these objects, so a
    price change here is visible to every transaction that sold it.
    """

    product_name: str
    stock: int
    purchase_price: Decimal
    price: Decimal
    low_stock_threshold: int
    purchase_date: date
    category: CategoryValue = Category.OTHER
    product_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.product_name, str) or not self.product_name.strip():
            raise ValueError("product_name must be a non-empty string.")
        self.stock = to_count(self.stock, field_name="stock")
        self.purchase_price = to_money(self.purchase_price, field_name="purchase_price")
        self.price = to_money(self.price, field_name="price")
        self.low_stock_threshold = to_count(
            self.low_stock_threshold, field_name="low_stock_threshold"
        )
        self.purchase_date = to_purchase_date(self.purchase_date)
        self.category = coerce_category(self.category)

    @classmethod
    def from_mapping(cls, data: dict) -> "InventoryItem":
        """Build an item from a plain dict (form/JSON payload)."""
        return cls(
            product_name=data["product_name"],
            stock=data["stock"],
            purchase_price=data["purchase_price"],
            price=data["price"],
            low_stock_threshold=data["low_stock_threshold"],
            purchase_date=data["purchase_date"],
            category=data.get("category", Category.OTHER),
            product_id=data.get("product_id"),
        )

    # ── Stock ──────────────────────────────────────────────────

    def add_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValueError(f"add_stock quantity must be >= 0, got {quantity}.")
        self.stock += quantity

    def remove_stock(self, quantity: int) -> bool:
        if quantity <= 0:
            raise ValueError(f"remove_stock quantity must be > 0, got {quantity}.")
        if self.stock >= quantity:
            self.stock -= quantity
            return True
        logger.warning(
            f"Insufficient stock to remove {quantity} units of "
            f"{self.product_name} ({self.stock} on hand)."
        )
        return False

    def is_low_stock(self) -> bool:
        return self.stock < self.low_stock_threshold

    # ── Accessors ──────────────────────────────────────────────

    def get_product_id(self) -> str:
        return self.product_id or ""

    @property
    def category_name(self) -> str:
        return category_name(self.category)

    def update(self, **changes: Any) -> None:
        """
        Overwrite several fields at once.

        All values are validated before any field changes, so a bad value
        leaves the item untouched.
        """
        allowed = {
            "product_name", "stock", "purchase_price", "price",
            "low_stock_threshold", "purchase_date", "category",
        }
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Unknown item fields: {', '.join(sorted(unknown))}.")
        current = {name: getattr(self, name) for name in allowed}
        current.update(changes)
        candidate = InventoryItem(**current)
        for name in changes:
            setattr(self, name, getattr(candidate, name))

    def to_dict(self) -> dict:
        return {
            "product_id": self.get_product_id(),
            "product_name": self.product_name,
            "stock": self.stock,
            "purchase_price": str(self.purchase_price),
            "price": str(self.price),
            "low_stock_threshold": self.low_stock_threshold,
            "purchase_date": self.purchase_date.isoformat(),
            "category": self.category_name,
            "low_stock": self.is_low_stock(),
        }
