"""
SariWais Event Journal — Errors
==================================
"""


class EventJournalError(Exception):
    """Base error for journal operations."""
    pass


class InvalidEventTypeFormat(EventJournalError):
    """Event type does not follow area.noun.verb.vN format."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Event type '{event_type}' does not follow "
            f"area.noun.verb.vN format."
        )
