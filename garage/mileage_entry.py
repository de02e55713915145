"""MileageEntry class for odometer readings."""
from typing import Optional


class MileageEntry:
    """An odometer reading taken on a given date."""

    def __init__(
            self,
            date: str,
            mileage: float,
            notes: Optional[str] = None,
    ):
        self.date = date
        self.mileage = mileage
        self.notes = notes
