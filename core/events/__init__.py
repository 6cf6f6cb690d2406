"""
SariWais Event Journal — Public API
======================================
"""

from core.events.errors import EventJournalError, InvalidEventTypeFormat
from core.events.journal import EventJournal

__all__ = [
    "EventJournal",
    "EventJournalError",
    "InvalidEventTypeFormat",
]
