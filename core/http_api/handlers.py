"""
SariWais HTTP API - Framework-Agnostic Handlers
===============================================
Pure handler functions over request DTOs and injected dependencies.
Every handler returns the {"ok": ..., "data" | "error": ...} envelope.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from core.admin.commands import (
    AccountCreateRequest,
    AccountDeleteRequest,
    AccountUpdateRequest,
    LoginRequest,
    PasswordResetRequest,
)
from core.commands.rejection import RejectionReason
from core.http_api.auth.middleware import resolve_request_context
from core.http_api.auth.resolver import session_token_from_headers
from core.http_api.contracts import InventoryReadRequest, TransactionsReadRequest
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    INVALID_REQUEST,
    error_response,
    rejection_response,
    success_response,
)
from engines.inventory.commands import (
    ItemDeleteRequest,
    ItemRegisterRequest,
    StockUpdateRequest,
)
from engines.inventory.items import add_custom_category, get_all_categories
from engines.reporting.commands import ReportWindowRequest
from engines.reporting.dashboard import build_dashboard
from engines.retail.commands import RecordSaleRequest
from engines.retail.services import record_sale_request, search_transactions

logger = logging.getLogger("sariwais.http")


def _run(call: Callable[[], dict[str, Any]]) -> dict[str, Any]:
    try:
        return call()
    except ValueError as exc:
        return error_response(code=INVALID_REQUEST, message=str(exc))
    except Exception as exc:
        logger.exception("Handler failed.")
        return error_response(
            code="HANDLER_EXECUTION_FAILED",
            message="Failed to execute request.",
            details={"error_type": type(exc).__name__},
        )


def _with_account(
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None,
    action: Callable[[Any], dict[str, Any]],
    *,
    require_admin: bool = False,
) -> dict[str, Any]:
    resolved = resolve_request_context(
        headers, dependencies, require_admin=require_admin,
    )
    if isinstance(resolved, RejectionReason):
        return rejection_response(resolved)
    _, account = resolved
    return _run(lambda: action(account))


def _write_result(rejection: RejectionReason | None, data: Any) -> dict[str, Any]:
    if rejection is not None:
        return rejection_response(rejection)
    return success_response(data)


def _serialize_items(items) -> dict[str, Any]:
    rows = [item.to_dict() for item in items]
    return {"items": rows, "count": len(rows)}


# ══════════════════════════════════════════════════════════════
# AUTH
# ══════════════════════════════════════════════════════════════

def post_login(
    request: LoginRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    directory = dependencies.directory
    rejection = directory.login(request.username, request.password)
    if rejection is not None:
        return rejection_response(rejection)

    account = directory.find_by_username(request.username)
    principal = dependencies.session_provider.open_session(
        account.username, directory.clock.now_utc(),
    )
    return success_response(
        {
            "token": principal.token,
            "username": account.username,
            "store_name": account.store_name,
            "is_admin": directory.is_admin(account.username),
            "subscription": account.get_subscription().to_dict(),
        }
    )


def post_logout(
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _logout(account) -> dict[str, Any]:
        dependencies.session_provider.close_session(session_token_from_headers(headers))
        dependencies.directory.logout(account.username)
        return success_response({"username": account.username})

    return _with_account(dependencies, headers, _logout)


# ══════════════════════════════════════════════════════════════
# INVENTORY
# ══════════════════════════════════════════════════════════════

def list_inventory(
    request: InventoryReadRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _list(account) -> dict[str, Any]:
        controller = account.get_inventory_controller()
        return success_response(
            _serialize_items(controller.search(request.term, request.category))
        )

    return _with_account(dependencies, headers, _list)


def list_low_stock(
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return _with_account(
        dependencies,
        headers,
        lambda account: success_response(
            _serialize_items(account.get_inventory_controller().check_low_stock())
        ),
    )


def post_inventory_item(
    request: ItemRegisterRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _add(account) -> dict[str, Any]:
        item = account.get_inventory_controller().add_inventory_item(request.to_item())
        return success_response(item.to_dict())

    return _with_account(dependencies, headers, _add)


def post_inventory_stock(
    request: StockUpdateRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _update(account) -> dict[str, Any]:
        controller = account.get_inventory_controller()
        rejection = controller.update_stock(request.product_id, request.quantity)
        if rejection is not None:
            return rejection_response(rejection)
        return success_response(controller.find_item(request.product_id).to_dict())

    return _with_account(dependencies, headers, _update)


def post_inventory_delete(
    request: ItemDeleteRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _delete(account) -> dict[str, Any]:
        rejection = account.get_inventory_controller().delete_inventory_item(
            request.product_id
        )
        return _write_result(rejection, {"product_id": request.product_id})

    return _with_account(dependencies, headers, _delete)


def list_categories(
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return _with_account(
        dependencies,
        headers,
        lambda account: success_response({"categories": get_all_categories()}),
    )


def post_category(
    name: str,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _add(account) -> dict[str, Any]:
        normalized = add_custom_category(name)
        return success_response(
            {"category": normalized, "categories": get_all_categories()}
        )

    return _with_account(dependencies, headers, _add)


# ══════════════════════════════════════════════════════════════
# TRANSACTIONS
# ══════════════════════════════════════════════════════════════

def list_transactions(
    request: TransactionsReadRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _list(account) -> dict[str, Any]:
        matches = search_transactions(account.get_transactions(), request.term, request.on)
        rows = [t.to_dict() for t in matches]
        return success_response({"items": rows, "count": len(rows)})

    return _with_account(dependencies, headers, _list)


def post_transaction(
    request: RecordSaleRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _record(account) -> dict[str, Any]:
        result = record_sale_request(account, request)
        if not result.ok:
            return rejection_response(result.rejection)
        return success_response(result.transaction.to_dict())

    return _with_account(dependencies, headers, _record)


# ══════════════════════════════════════════════════════════════
# REPORTS
# ══════════════════════════════════════════════════════════════

def get_sales_report(
    request: ReportWindowRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _report(account) -> dict[str, Any]:
        sales = account.sales()
        return success_response(
            {
                "start": request.start.isoformat(),
                "end": request.end.isoformat(),
                "report": sales.generate_sales_report(request.start, request.end),
                "metrics": sales.metrics(request.start, request.end),
            }
        )

    return _with_account(dependencies, headers, _report)


def get_expenses_report(
    request: ReportWindowRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _report(account) -> dict[str, Any]:
        sales = account.sales()
        return success_response(
            {
                "start": request.start.isoformat(),
                "end": request.end.isoformat(),
                "report": sales.generate_expenses_report(request.start, request.end),
                "cogs": str(sales.get_cogs(request.start, request.end)),
                "cogp": str(sales.get_cogp(request.start, request.end)),
            }
        )

    return _with_account(dependencies, headers, _report)


def get_dashboard(
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return _with_account(
        dependencies,
        headers,
        lambda account: success_response(
            build_dashboard(account, dependencies.directory.clock)
        ),
    )


# ══════════════════════════════════════════════════════════════
# ADMIN
# ══════════════════════════════════════════════════════════════

def list_accounts(
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _list(account) -> dict[str, Any]:
        rows = [s.to_dict() for s in dependencies.directory.get_all_accounts()]
        return success_response({"items": rows, "count": len(rows)})

    return _with_account(dependencies, headers, _list, require_admin=True)


def post_account_create(
    request: AccountCreateRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _create(account) -> dict[str, Any]:
        rejection = dependencies.directory.create_account(
            request.username,
            request.password,
            request.store_name,
            request.store_address,
            request.contact_number,
            subscription_status=request.subscription_status,
            subscription_expiry=request.subscription_expiry,
        )
        if rejection is not None:
            return rejection_response(rejection)
        created = dependencies.directory.find_by_username(request.username)
        return success_response(created.summary().to_dict())

    return _with_account(dependencies, headers, _create, require_admin=True)


def post_account_update(
    request: AccountUpdateRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _update(account) -> dict[str, Any]:
        directory = dependencies.directory
        rejection = directory.update_account(
            request.original_username,
            request.username,
            request.password,
            request.store_name,
            request.store_address,
            request.contact_number,
            request.subscription_status,
            request.subscription_expiry,
        )
        if rejection is not None:
            return rejection_response(rejection)
        if request.username != request.original_username:
            dependencies.session_provider.rename_user(
                request.original_username, request.username,
            )
        updated = directory.find_by_username(request.username)
        return success_response(updated.summary().to_dict())

    return _with_account(dependencies, headers, _update, require_admin=True)


def post_account_delete(
    request: AccountDeleteRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _delete(account) -> dict[str, Any]:
        rejection = dependencies.directory.delete_account(request.username)
        if rejection is not None:
            return rejection_response(rejection)
        revoked = dependencies.session_provider.revoke_user(request.username)
        return success_response(
            {"username": request.username, "sessions_revoked": revoked}
        )

    return _with_account(dependencies, headers, _delete, require_admin=True)


def post_password_reset(
    request: PasswordResetRequest,
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    def _reset(account) -> dict[str, Any]:
        rejection = dependencies.directory.reset_password(
            request.username, request.new_password,
        )
        return _write_result(rejection, {"username": request.username})

    return _with_account(dependencies, headers, _reset, require_admin=True)
