"""Record models for the subject and ticket sheets."""

from ticketsync.models._base import SheetRecord, SheetStr, coerce_sheet_str
from ticketsync.models.subject import Subject
from ticketsync.models.ticket import Ticket

__all__ = [
    "SheetRecord",
    "SheetStr",
    "Subject",
    "Ticket",
    "coerce_sheet_str",
]
