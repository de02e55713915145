"""Status enum for oil-change urgency levels."""

from enum import Enum


class Status(Enum):
    """Oil-change status categories. Lower value = more urgent."""

    OVERDUE = 1
    DUE_SOON = 2
    OK = 3
    UNKNOWN = 4  # Can't calculate (no oil change on record)
