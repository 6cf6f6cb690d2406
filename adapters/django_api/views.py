"""
SariWais Django Adapter Views
=============================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.admin.commands import (
    AccountCreateRequest,
    AccountDeleteRequest,
    AccountUpdateRequest,
    LoginRequest,
    PasswordResetRequest,
)
from core.http_api.contracts import InventoryReadRequest, TransactionsReadRequest
from core.http_api.errors import INVALID_REQUEST, error_response, status_for_payload
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
from engines.inventory.commands import (
    ItemDeleteRequest,
    ItemRegisterRequest,
    StockUpdateRequest,
)
from engines.reporting.commands import ReportWindowRequest
from engines.retail.commands import RecordSaleRequest


def _headers_from_request(request: HttpRequest) -> dict[str, str]:
    return {str(key): str(value) for key, value in request.headers.items()}


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _respond(payload: dict[str, Any]) -> JsonResponse:
    return JsonResponse(payload, status=status_for_payload(payload))


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


def _dispatch_query(handler, contract_factory: Callable[[Any], Any], request: HttpRequest):
    headers = _headers_from_request(request)
    try:
        contract = contract_factory(request.GET)
    except (ValueError, KeyError) as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)
    return _respond(handler(contract, build_dependencies(), headers=headers))


def _dispatch_write(handler, contract_factory: Callable[[dict], Any], request: HttpRequest):
    headers = _headers_from_request(request)
    try:
        body = _parse_json_body(request)
        contract = contract_factory(body)
    except KeyError as exc:
        return _json_error(INVALID_REQUEST, f"{exc.args[0]} is required.", status=400)
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)
    return _respond(handler(contract, build_dependencies(), headers=headers))


def _dispatch_plain(handler, request: HttpRequest):
    return _respond(handler(build_dependencies(), headers=_headers_from_request(request)))


# ── Contract factories ────────────────────────────────────────

def _login_contract(body):
    return LoginRequest(username=body["username"], password=body["password"])


def _inventory_query_contract(query):
    return InventoryReadRequest(
        term=query.get("q", ""),
        category=query.get("category") or None,
    )


def _item_register_contract(body):
    return ItemRegisterRequest(
        product_name=body["product_name"],
        stock=body["stock"],
        purchase_price=body["purchase_price"],
        price=body["price"],
        low_stock_threshold=body["low_stock_threshold"],
        purchase_date=body["purchase_date"],
        category=body.get("category", "OTHER"),
    )


def _stock_update_contract(body):
    return StockUpdateRequest(product_id=body["product_id"], quantity=body["quantity"])


def _item_delete_contract(body):
    return ItemDeleteRequest(product_id=body["product_id"])


def _transactions_query_contract(query):
    return TransactionsReadRequest(term=query.get("q", ""), on=query.get("date") or None)


def _report_window_contract(query):
    return ReportWindowRequest(start=query.get("start"), end=query.get("end"))


def _account_delete_contract(body):
    return AccountDeleteRequest(username=body["username"])


def _password_reset_contract(body):
    return PasswordResetRequest(username=body["username"], new_password=body["new_password"])


# ── Auth ──────────────────────────────────────────────────────

@csrf_exempt
def login_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_login, _login_contract, request)


@csrf_exempt
def logout_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_plain(post_logout, request)


# ── Inventory ─────────────────────────────────────────────────

@csrf_exempt
def inventory_list_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_query(list_inventory, _inventory_query_contract, request)


@csrf_exempt
def inventory_low_stock_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_plain(list_low_stock, request)


@csrf_exempt
def inventory_items_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_inventory_item, _item_register_contract, request)


@csrf_exempt
def inventory_stock_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_inventory_stock, _stock_update_contract, request)


@csrf_exempt
def inventory_delete_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_inventory_delete, _item_delete_contract, request)


@csrf_exempt
def inventory_categories_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch_plain(list_categories, request)
    if request.method == "POST":
        return _dispatch_write(post_category, lambda body: body["name"], request)
    return _method_not_allowed()


# ── Transactions ──────────────────────────────────────────────

@csrf_exempt
def transactions_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch_query(list_transactions, _transactions_query_contract, request)
    if request.method == "POST":
        return _dispatch_write(post_transaction, RecordSaleRequest.from_mapping, request)
    return _method_not_allowed()


# ── Reports ───────────────────────────────────────────────────

@csrf_exempt
def sales_report_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_query(get_sales_report, _report_window_contract, request)


@csrf_exempt
def expenses_report_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_query(get_expenses_report, _report_window_contract, request)


@csrf_exempt
def dashboard_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_plain(get_dashboard, request)


# ── Admin ─────────────────────────────────────────────────────

@csrf_exempt
def accounts_list_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_plain(list_accounts, request)


@csrf_exempt
def accounts_create_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_account_create, AccountCreateRequest.from_mapping, request)


@csrf_exempt
def accounts_update_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_account_update, AccountUpdateRequest.from_mapping, request)


@csrf_exempt
def accounts_delete_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_account_delete, _account_delete_contract, request)


@csrf_exempt
def accounts_reset_password_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_password_reset, _password_reset_contract, request)
