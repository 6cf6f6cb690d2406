"""
SariWais Retail Engine — Event Types and Payload Builders
============================================================
Retail owns the checkout: a recorded sale has already decremented
inventory stock, so inventory emits no separate stock event for it.
"""

from __future__ import annotations

from engines.retail.transactions import Transaction


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

RETAIL_SALE_RECORDED_V1 = "retail.sale.recorded.v1"
RETAIL_SALE_REJECTED_V1 = "retail.sale.rejected.v1"

RETAIL_EVENT_TYPES = (
    RETAIL_SALE_RECORDED_V1,
    RETAIL_SALE_REJECTED_V1,
)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_sale_recorded_payload(owner: str, transaction: Transaction) -> dict:
    payload = {"owner": owner}
    payload.update(transaction.to_dict())
    return payload


def build_sale_rejected_payload(owner: str, code: str, customer_name: str) -> dict:
    return {
        "owner": owner,
        "customer_name": customer_name,
        "code": code,
    }
