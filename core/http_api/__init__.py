"""
SariWais HTTP API - Public API
==============================
"""

from core.http_api.contracts import (
    HttpApiErrorBody,
    HttpApiResponse,
    InventoryReadRequest,
    TransactionsReadRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    error_response,
    map_rejection_reason,
    rejection_response,
    status_for_payload,
    success_response,
)
from core.http_api.handlers import (
    get_dashboard,
    get_expenses_report,
    get_sales_report,
    list_accounts,
    list_categories,
    list_inventory,
    list_low_stock,
    list_transactions,
    post_account_create,
    post_account_delete,
    post_account_update,
    post_category,
    post_inventory_delete,
    post_inventory_item,
    post_inventory_stock,
    post_login,
    post_logout,
    post_password_reset,
    post_transaction,
)

__all__ = [
    "HttpApiErrorBody",
    "HttpApiResponse",
    "InventoryReadRequest",
    "TransactionsReadRequest",
    "HttpApiDependencies",
    "error_response",
    "success_response",
    "map_rejection_reason",
    "rejection_response",
    "status_for_payload",
    "post_login",
    "post_logout",
    "list_inventory",
    "list_low_stock",
    "post_inventory_item",
    "post_inventory_stock",
    "post_inventory_delete",
    "list_categories",
    "post_category",
    "list_transactions",
    "post_transaction",
    "get_sales_report",
    "get_expenses_report",
    "get_dashboard",
    "list_accounts",
    "post_account_create",
    "post_account_update",
    "post_account_delete",
    "post_password_reset",
]
