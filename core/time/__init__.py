"""
SariWais Core Time — Public API
==================================
Explicit clock protocol and date-window helpers.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    now_utc,
    set_default_clock,
)
from core.time.temporal import (
    DateWindow,
    as_date,
    days_until,
    ensure_aware,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "now_utc",
    "DateWindow",
    "as_date",
    "days_until",
    "ensure_aware",
]
