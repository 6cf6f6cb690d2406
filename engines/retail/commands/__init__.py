"""
SariWais Retail Engine — Request Commands
============================================
Typed checkout requests. Construction validates shape only; stock and
catalog checks belong to the retail policies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional, Tuple


def _parse_quantity(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("quantity must be an integer.")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise ValueError("quantity must be an integer.") from exc
    if not isinstance(value, int):
        raise ValueError("quantity must be an integer.")
    return value


def _parse_transaction_date(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValueError(
                "transaction_date must be an ISO date or datetime."
            ) from exc
        return parsed
    raise ValueError("transaction_date must be an ISO date or datetime.")


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SaleLine:
    """One basket line: which product and how many."""
    product_id: str
    quantity: Any

    def __post_init__(self):
        if not isinstance(self.product_id, str) or not self.product_id.strip():
            raise ValueError("product_id must be non-empty.")
        object.__setattr__(self, "product_id", self.product_id.strip())
        object.__setattr__(self, "quantity", _parse_quantity(self.quantity))

    @classmethod
    def coerce(cls, value: Any) -> "SaleLine":
        """Accept a SaleLine, a (product_id, quantity) pair or a mapping."""
        if isinstance(value, SaleLine):
            return value
        if isinstance(value, dict):
            try:
                return cls(product_id=value["product_id"], quantity=value["quantity"])
            except KeyError as exc:
                raise ValueError(f"Sale line is missing {exc.args[0]}.") from exc
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(product_id=value[0], quantity=value[1])
        raise ValueError("Sale line must be a mapping or a (product_id, quantity) pair.")


@dataclass(frozen=True)
class RecordSaleRequest:
    customer_name: str = ""
    lines: Tuple[SaleLine, ...] = ()
    transaction_date: Optional[datetime] = None

    def __post_init__(self):
        name = self.customer_name if self.customer_name is not None else ""
        if not isinstance(name, str):
            raise ValueError("customer_name must be a string.")
        object.__setattr__(self, "customer_name", name.strip())
        object.__setattr__(
            self, "lines", tuple(SaleLine.coerce(line) for line in self.lines or ())
        )
        object.__setattr__(
            self, "transaction_date", _parse_transaction_date(self.transaction_date)
        )

    @classmethod
    def from_mapping(cls, data: dict) -> "RecordSaleRequest":
        lines: Iterable[Any] = data.get("lines") or data.get("items") or ()
        if not isinstance(lines, (list, tuple)):
            raise ValueError("lines must be a list.")
        return cls(
            customer_name=data.get("customer_name", ""),
            lines=tuple(lines),
            transaction_date=data.get("transaction_date"),
        )


__all__ = [
    "RecordSaleRequest",
    "SaleLine",
]
