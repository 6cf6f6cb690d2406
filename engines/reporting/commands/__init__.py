"""
SariWais Reporting Engine — Request Commands
===============================================
Report window requests parsed from query strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any


def _parse_day(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as exc:
            raise ValueError(f"{field_name} must be an ISO date (YYYY-MM-DD).") from exc
    raise ValueError(f"{field_name} is required.")


@dataclass(frozen=True)
class ReportWindowRequest:
    """Inclusive [start, end]. start after end is accepted and yields empty figures."""
    start: date
    end: date

    def __post_init__(self):
        object.__setattr__(self, "start", _parse_day(self.start, "start"))
        object.__setattr__(self, "end", _parse_day(self.end, "end"))


__all__ = ["ReportWindowRequest"]
