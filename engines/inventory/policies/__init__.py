"""
SariWais Inventory Engine — Policies
=======================================
Stock checks shared by the inventory controller and the retail checkout.
Each policy returns None when the operation may proceed.
"""

from __future__ import annotations

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason
from engines.inventory.items import InventoryItem


def product_not_found(product_id: str, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.PRODUCT_NOT_FOUND,
        message=f"Product with ID {product_id or '<empty>'} not found.",
        policy_name=policy_name,
    )


def positive_quantity_policy(
    quantity: int,
    policy_name: str,
) -> Optional[RejectionReason]:
    """Reject zero, negative or non-integer quantities."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        return RejectionReason(
            code=ReasonCode.INVALID_QUANTITY,
            message="Quantity must be a positive number.",
            policy_name=policy_name,
        )
    return None


def sufficient_stock_policy(
    item: InventoryItem,
    quantity: int,
    policy_name: str,
) -> Optional[RejectionReason]:
    """Reject removals that would take stock below zero."""
    if item.stock < quantity:
        return RejectionReason(
            code=ReasonCode.INSUFFICIENT_STOCK,
            message=(
                f"Insufficient stock. Only {item.stock} available "
                f"for {item.product_name}."
            ),
            policy_name=policy_name,
        )
    return None
