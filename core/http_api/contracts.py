"""
SariWais HTTP API - Contracts
=============================
Framework-agnostic response envelope and the read-request DTOs that
have no engine-level command of their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from engines.inventory.items import coerce_category


@dataclass(frozen=True)
class InventoryReadRequest:
    term: str = ""
    category: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.term, str):
            raise ValueError("term must be a string.")
        object.__setattr__(self, "term", self.term.strip())
        if self.category is not None and self.category != "":
            object.__setattr__(self, "category", coerce_category(self.category))
        else:
            object.__setattr__(self, "category", None)


@dataclass(frozen=True)
class TransactionsReadRequest:
    term: str = ""
    on: Optional[date] = None

    def __post_init__(self):
        if not isinstance(self.term, str):
            raise ValueError("term must be a string.")
        object.__setattr__(self, "term", self.term.strip())
        if isinstance(self.on, str):
            raw = self.on.strip()
            if not raw:
                object.__setattr__(self, "on", None)
                return
            try:
                object.__setattr__(self, "on", date.fromisoformat(raw[:10]))
            except ValueError as exc:
                raise ValueError("on must be an ISO date (YYYY-MM-DD).") from exc
        elif self.on is not None and not isinstance(self.on, date):
            raise ValueError("on must be a date or None.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
