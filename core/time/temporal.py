"""
SariWais Core Time — Date Windows
====================================
Pure helpers for the inclusive calendar-date windows used by the
analytics engine. All functions take explicit arguments; no hidden clock.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional, Union

DateLike = Union[date, datetime]


def as_date(value: DateLike) -> date:
    """Collapse a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValueError(f"Expected date or datetime, got {type(value).__name__}.")


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ══════════════════════════════════════════════════════════════
# DATE WINDOW — Closed interval [start, end] over calendar dates
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DateWindow:
    """
    A closed calendar-date interval [start, end].

    Unlike a strict time window, start > end is allowed: such a window
    contains nothing and has a non-positive day count.
    """

    start: date
    end: date

    @classmethod
    def of(cls, start: DateLike, end: DateLike) -> "DateWindow":
        return cls(start=as_date(start), end=as_date(end))

    def contains(self, value: DateLike) -> bool:
        day = as_date(value)
        return self.start <= day <= self.end

    def day_count(self) -> int:
        """Inclusive number of days; 1 when start == end."""
        return (self.end - self.start).days + 1


def days_until(expiry: Optional[datetime], now: datetime) -> Optional[int]:
    """
    Whole days left before `expiry`, rounded up.

    None when no expiry is tracked. Negative once the expiry has passed.
    """
    if expiry is None:
        return None
    delta = ensure_aware(expiry) - ensure_aware(now)
    return math.ceil(delta.total_seconds() / 86400)
