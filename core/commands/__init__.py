"""
SariWais Command Layer
=========================
Refused operations are first-class values, not exceptions.
"""

from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    "ReasonCode",
    "RejectionReason",
]
