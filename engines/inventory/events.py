"""
SariWais Inventory Engine — Event Types and Payload Builders
===============================================================
Journal entries emitted by InventoryController. The controller builds
payloads only; the EventJournal stamps sequence and time.
"""

from __future__ import annotations

from engines.inventory.items import InventoryItem


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

INVENTORY_ITEM_ADDED_V1 = "inventory.item.added.v1"
INVENTORY_ITEM_UPDATED_V1 = "inventory.item.updated.v1"
INVENTORY_ITEM_DELETED_V1 = "inventory.item.deleted.v1"
INVENTORY_STOCK_ADDED_V1 = "inventory.stock.added.v1"
INVENTORY_STOCK_REMOVED_V1 = "inventory.stock.removed.v1"

INVENTORY_EVENT_TYPES = (
    INVENTORY_ITEM_ADDED_V1,
    INVENTORY_ITEM_UPDATED_V1,
    INVENTORY_ITEM_DELETED_V1,
    INVENTORY_STOCK_ADDED_V1,
    INVENTORY_STOCK_REMOVED_V1,
)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_item_added_payload(owner: str, item: InventoryItem) -> dict:
    payload = {"owner": owner}
    payload.update(item.to_dict())
    payload.pop("low_stock")
    return payload


def build_item_updated_payload(owner: str, item: InventoryItem, changes: dict) -> dict:
    return {
        "owner": owner,
        "product_id": item.get_product_id(),
        "changed_fields": sorted(changes),
    }


def build_item_deleted_payload(owner: str, item: InventoryItem) -> dict:
    return {
        "owner": owner,
        "product_id": item.get_product_id(),
        "product_name": item.product_name,
    }


def build_stock_moved_payload(owner: str, item: InventoryItem, quantity: int) -> dict:
    return {
        "owner": owner,
        "product_id": item.get_product_id(),
        "quantity": quantity,
        "stock_after": item.stock,
    }
