"""OilChangeDue dataclass for calculated oil-change status."""

from dataclasses import dataclass
from typing import Optional

from .mileage import format_days_remaining, format_miles_remaining
from .status import Status


@dataclass
class OilChangeDue:
    """Calculated oil-change due information for a vehicle."""

    status: Status
    interval_miles: float
    last_service_miles: Optional[float] = None
    last_service_date: Optional[str] = None
    due_miles: Optional[float] = None
    due_date: Optional[str] = None
    miles_remaining: Optional[float] = None
    days_remaining: Optional[int] = None
    weekly_mileage_avg: int = 0

    @property
    def is_due(self) -> bool:
        return self.status in (Status.OVERDUE, Status.DUE_SOON)

    @property
    def miles_display(self) -> str:
        return format_miles_remaining(self.miles_remaining)

    @property
    def days_display(self) -> str:
        return format_days_remaining(self.days_remaining)
