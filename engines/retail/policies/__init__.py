"""
SariWais Retail Engine — Policies
====================================
Checkout validation. Runs against the whole basket before any stock
moves, so a refused sale leaves the catalog exactly as it was.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from core.commands.rejection import ReasonCode, RejectionReason
from engines.inventory.policies import (
    positive_quantity_policy,
    product_not_found,
    sufficient_stock_policy,
)
from engines.inventory.services import InventoryController
from engines.retail.commands import SaleLine


def non_empty_sale_policy(lines: Sequence[SaleLine]) -> Optional[RejectionReason]:
    if not lines:
        return RejectionReason(
            code=ReasonCode.EMPTY_TRANSACTION,
            message="A transaction needs at least one item.",
            policy_name="non_empty_sale_policy",
        )
    return None


def sale_lines_policy(
    controller: InventoryController,
    lines: Sequence[SaleLine],
) -> Optional[RejectionReason]:
    """
    Every product must exist and every quantity be positive.

    Quantities for the same product are summed before the stock check,
    so two lines of 3 against a stock of 5 are refused together.
    """
    requested: Dict[str, int] = {}
    for line in lines:
        rejection = positive_quantity_policy(line.quantity, "sale_lines_policy")
        if rejection is not None:
            return rejection
        if controller.find_item(line.product_id) is None:
            return product_not_found(line.product_id, "sale_lines_policy")
        requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity

    for product_id, quantity in requested.items():
        item = controller.find_item(product_id)
        rejection = sufficient_stock_policy(item, quantity, "sale_lines_policy")
        if rejection is not None:
            return rejection
    return None
