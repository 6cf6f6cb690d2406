"""
SariWais HTTP API - Error Mapping
=================================
Stable transport error mapping for rejections and handler failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse

INVALID_REQUEST = "INVALID_REQUEST"

# Transport status per rejection code; anything unlisted is a 400.
_STATUS_BY_CODE = {
    ReasonCode.INVALID_CREDENTIALS: 401,
    ReasonCode.SESSION_REQUIRED: 401,
    ReasonCode.SESSION_INVALID: 401,
    ReasonCode.SUBSCRIPTION_EXPIRED: 403,
    ReasonCode.PERMISSION_DENIED: 403,
    ReasonCode.ADMIN_ACCOUNT_PROTECTED: 403,
    ReasonCode.PRODUCT_NOT_FOUND: 404,
    ReasonCode.ACCOUNT_NOT_FOUND: 404,
    ReasonCode.USERNAME_TAKEN: 409,
    ReasonCode.INSUFFICIENT_STOCK: 409,
}


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def map_rejection_reason(reason: RejectionReason) -> HttpApiErrorBody:
    return HttpApiErrorBody(
        code=reason.code,
        message=reason.message,
        details={
            "policy_name": reason.policy_name,
            "message_key": f"rejection.{reason.code.lower()}",
        },
    )


def rejection_response(
    reason: RejectionReason,
    *,
    extra_details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    mapped = map_rejection_reason(reason)
    details = dict(mapped.details)
    if extra_details:
        details.update(extra_details)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=details,
    )


def status_for_payload(payload: dict[str, Any]) -> int:
    """HTTP status for a handler envelope."""
    if payload.get("ok"):
        return 200
    code = payload.get("error", {}).get("code")
    if code == "HANDLER_EXECUTION_FAILED":
        return 500
    return _STATUS_BY_CODE.get(code, 400)
