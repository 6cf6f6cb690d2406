"""
SariWais Inventory Engine — Inventory Controller
===================================================
Owns one store's catalog: assigns product IDs, moves stock, deletes
items and reports low stock.

RULES:
- Product IDs are "P" + n, n starting at 1, never reused after delete
- Catalog order is insertion order
- Refused operations return a RejectionReason and mutate nothing
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Union

from core.commands.rejection import ReasonCode, RejectionReason
from engines.inventory.events import (
    INVENTORY_ITEM_ADDED_V1,
    INVENTORY_ITEM_DELETED_V1,
    INVENTORY_ITEM_UPDATED_V1,
    INVENTORY_STOCK_ADDED_V1,
    INVENTORY_STOCK_REMOVED_V1,
    build_item_added_payload,
    build_item_deleted_payload,
    build_item_updated_payload,
    build_stock_moved_payload,
)
from engines.inventory.items import CategoryValue, InventoryItem, category_name
from engines.inventory.policies import product_not_found, sufficient_stock_policy

logger = logging.getLogger("sariwais.inventory")

EventSink = Callable[[str, dict], None]


def _discard_event(event_type: str, payload: dict) -> None:
    return None


class InventoryController:
    """
    Catalog for exactly one store account.

    `owner` is the account username, used only for logging and journal
    payloads. `event_sink` receives (event_type, payload) for every change.
    `lock` guards the counter and the catalog; the owning account passes
    in the lock it also holds during checkout.
    """

    def __init__(
        self,
        owner: str = "",
        event_sink: Optional[EventSink] = None,
        lock: Optional[threading.RLock] = None,
    ):
        self._inventory: List[InventoryItem] = []
        self._item_counter: int = 1
        self._owner = owner
        self._emit = event_sink or _discard_event
        self._lock = lock or threading.RLock()

    @property
    def owner(self) -> str:
        return self._owner

    @owner.setter
    def owner(self, value: str) -> None:
        self._owner = value

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    # ── Commands ───────────────────────────────────────────────

    def add_inventory_item(
        self, item: Union[InventoryItem, Dict[str, Any]]
    ) -> InventoryItem:
        """
        Add an item and assign it the next product ID.

        Any product_id already on the item is overwritten. Names may repeat.
        """
        inventory_item = (
            item if isinstance(item, InventoryItem) else InventoryItem.from_mapping(item)
        )
        with self._lock:
            inventory_item.product_id = f"P{self._item_counter}"
            self._item_counter += 1
            self._inventory.append(inventory_item)

            logger.info(
                f"[{self._owner}] Added {inventory_item.product_name} "
                f"as {inventory_item.product_id}."
            )
            self._emit(
                INVENTORY_ITEM_ADDED_V1,
                build_item_added_payload(self._owner, inventory_item),
            )
        return inventory_item

    def update_stock(self, product_id: str, quantity: int) -> Optional[RejectionReason]:
        """
        Add (quantity >= 0) or remove (quantity < 0) stock.

        Removal that would go below zero is refused without mutation.
        """
        with self._lock:
            item = self.find_item(product_id)
            if item is None:
                logger.warning(f"[{self._owner}] Product with ID {product_id} not found.")
                return product_not_found(product_id, "update_stock")

            if quantity >= 0:
                item.add_stock(quantity)
                logger.info(f"[{self._owner}] Added {quantity} units to {item.product_name}.")
                self._emit(
                    INVENTORY_STOCK_ADDED_V1,
                    build_stock_moved_payload(self._owner, item, quantity),
                )
                return None

            rejection = sufficient_stock_policy(item, -quantity, "update_stock")
            if rejection is not None:
                logger.warning(
                    f"[{self._owner}] Failed to remove {-quantity} units "
                    f"from {item.product_name}."
                )
                return rejection

            item.remove_stock(-quantity)
            logger.info(f"[{self._owner}] Removed {-quantity} units from {item.product_name}.")
            self._emit(
                INVENTORY_STOCK_REMOVED_V1,
                build_stock_moved_payload(self._owner, item, -quantity),
            )
            return None

    def update_item(self, product_id: str, **changes: Any) -> Optional[RejectionReason]:
        """Overwrite editable fields of one item; validated all-or-nothing."""
        with self._lock:
            item = self.find_item(product_id)
            if item is None:
                return product_not_found(product_id, "update_item")
            try:
                item.update(**changes)
            except ValueError as exc:
                logger.warning(f"[{self._owner}] Rejected edit of {product_id}: {exc}")
                return RejectionReason(
                    code=ReasonCode.INVALID_ITEM_FIELDS,
                    message=str(exc),
                    policy_name="update_item",
                )
            logger.info(f"[{self._owner}] Updated {product_id}: {', '.join(sorted(changes))}.")
            self._emit(
                INVENTORY_ITEM_UPDATED_V1,
                build_item_updated_payload(self._owner, item, changes),
            )
            return None

    def delete_inventory_item(self, product_id: str) -> Optional[RejectionReason]:
        with self._lock:
            item = self.find_item(product_id)
            if item is None:
                logger.warning(f"[{self._owner}] Product with ID {product_id} not found.")
                return product_not_found(product_id, "delete_inventory_item")

            self._inventory = [i for i in self._inventory if i is not item]
            logger.info(
                f"[{self._owner}] Deleted product: {item.product_name} (ID: {product_id})."
            )
            self._emit(
                INVENTORY_ITEM_DELETED_V1,
                build_item_deleted_payload(self._owner, item),
            )
            return None

    # ── Queries ────────────────────────────────────────────────

    def view_inventory(self) -> List[InventoryItem]:
        """Snapshot list; the items inside are shared, the list is not."""
        with self._lock:
            return list(self._inventory)

    def check_low_stock(self) -> List[InventoryItem]:
        with self._lock:
            return [item for item in self._inventory if item.is_low_stock()]

    def find_item(self, product_id: str) -> Optional[InventoryItem]:
        with self._lock:
            for item in self._inventory:
                if item.product_id == product_id:
                    return item
            return None

    def search(
        self,
        term: str = "",
        category: Optional[CategoryValue] = None,
    ) -> List[InventoryItem]:
        """Case-insensitive match on name or product ID, optional category."""
        needle = (term or "").strip().lower()
        wanted = category_name(category) if category is not None else None
        results = []
        for item in self.view_inventory():
            if needle and needle not in item.product_name.lower() \
                    and needle not in item.get_product_id().lower():
                continue
            if wanted is not None and item.category_name != wanted:
                continue
            results.append(item)
        return results

    @property
    def next_product_id(self) -> str:
        with self._lock:
            return f"P{self._item_counter}"

    def __len__(self) -> int:
        with self._lock:
            return len(self._inventory)
