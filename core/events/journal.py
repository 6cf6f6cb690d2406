"""
SariWais Event Journal — Append-Only Domain Log
==================================================
Every state change in the core (item added, stock moved, sale recorded,
account created, ...) is appended here as a plain dict.

Rules:
- Append-only, in memory, lost on restart
- Event types follow area.noun.verb.vN (e.g. 'inventory.item.added.v1')
- Entries are returned as copies; callers cannot rewrite history
- Thread-safe
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime
from threading import Lock
from typing import Any, Dict, List, Optional

from core.events.errors import InvalidEventTypeFormat

logger = logging.getLogger("sariwais.events")


def _validate_event_type_format(event_type: str) -> None:
    if not event_type or not isinstance(event_type, str):
        raise InvalidEventTypeFormat(event_type or "")
    parts = event_type.strip().split(".")
    if len(parts) < 4 or not parts[-1].startswith("v"):
        raise InvalidEventTypeFormat(event_type)


class EventJournal:
    """In-memory append-only journal of domain events."""

    def __init__(self) -> None:
        self._entries: List[dict] = []
        self._lock = Lock()

    def record(
        self,
        event_type: str,
        payload: Dict[str, Any],
        occurred_at: datetime,
    ) -> dict:
        _validate_event_type_format(event_type)
        entry = {
            "sequence": 0,
            "event_type": event_type,
            "payload": dict(payload),
            "occurred_at": occurred_at,
        }
        with self._lock:
            entry["sequence"] = len(self._entries) + 1
            self._entries.append(entry)

        logger.debug(f"Journal #{entry['sequence']}: {event_type}")
        return copy.deepcopy(entry)

    def entries(self, event_type: Optional[str] = None) -> List[dict]:
        with self._lock:
            selected = [
                e for e in self._entries
                if event_type is None or e["event_type"] == event_type
            ]
            return copy.deepcopy(selected)

    @property
    def event_count(self) -> int:
        with self._lock:
            return len(self._entries)
