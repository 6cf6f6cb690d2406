"""
SariWais Inventory Engine — Request Commands
===============================================
Typed requests parsed from form/JSON input. Construction validates;
a bad request raises ValueError before anything is mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from engines.inventory.items import (
    InventoryItem,
    coerce_category,
    to_count,
    to_money,
    to_purchase_date,
)


def _require_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be non-empty.")
    return value.strip()


def _require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be an integer.")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as exc:
            raise ValueError(f"{field_name} must be an integer.") from exc
    if not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer.")
    return value


def _parse_date(value: Any) -> date:
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as exc:
            raise ValueError("purchase_date must be an ISO date (YYYY-MM-DD).") from exc
    return to_purchase_date(value)


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ItemRegisterRequest:
    """Request to add a new product to a catalog."""
    product_name: str
    stock: Any
    purchase_price: Any
    price: Any
    low_stock_threshold: Any
    purchase_date: date
    category: Any = "OTHER"

    def __post_init__(self):
        object.__setattr__(self, "product_name", _require_text(self.product_name, "product_name"))
        object.__setattr__(self, "stock", to_count(_require_int(self.stock, "stock"), field_name="stock"))
        object.__setattr__(
            self, "purchase_price",
            to_money(self.purchase_price, field_name="purchase_price"),
        )
        object.__setattr__(self, "price", to_money(self.price, field_name="price"))
        object.__setattr__(
            self, "low_stock_threshold",
            to_count(
                _require_int(self.low_stock_threshold, "low_stock_threshold"),
                field_name="low_stock_threshold",
            ),
        )
        object.__setattr__(self, "purchase_date", _parse_date(self.purchase_date))
        object.__setattr__(self, "category", coerce_category(self.category))

    def to_item(self) -> InventoryItem:
        return InventoryItem(
            product_name=self.product_name,
            stock=self.stock,
            purchase_price=self.purchase_price,
            price=self.price,
            low_stock_threshold=self.low_stock_threshold,
            purchase_date=self.purchase_date,
            category=self.category,
        )


@dataclass(frozen=True)
class StockUpdateRequest:
    """Signed stock movement: positive adds, negative removes."""
    product_id: str
    quantity: Any

    def __post_init__(self):
        object.__setattr__(self, "product_id", _require_text(self.product_id, "product_id"))
        object.__setattr__(self, "quantity", _require_int(self.quantity, "quantity"))


@dataclass(frozen=True)
class ItemDeleteRequest:
    product_id: str

    def __post_init__(self):
        object.__setattr__(self, "product_id", _require_text(self.product_id, "product_id"))


__all__ = [
    "ItemDeleteRequest",
    "ItemRegisterRequest",
    "StockUpdateRequest",
]
