"""Due points and urgency for the next oil change."""

from datetime import date
from dateutil.relativedelta import relativedelta
from typing import Optional

from .maintenance_event import MaintenanceEvent
from .mileage import parse_timestamp
from .status import Status

# Fractional months count as 30-day months
DAYS_PER_MONTH = 30


def next_due_mileage(
    last_oil_change: Optional[MaintenanceEvent], interval_miles: Optional[float]
) -> Optional[float]:
    """Odometer reading at which the next oil change falls due."""
    if last_oil_change is None or interval_miles is None:
        return None
    return last_oil_change.mileage + interval_miles


def next_due_date(
    last_oil_change: Optional[MaintenanceEvent], interval_months: Optional[float]
) -> Optional[date]:
    """
    Calendar date of the next oil change.

    None without a month interval or when the last change has no usable date.
    """
    if last_oil_change is None or interval_months is None:
        return None
    serviced = parse_timestamp(last_oil_change.date)
    if serviced is None:
        return None
    whole_months = int(interval_months)
    extra_days = int((interval_months - whole_months) * DAYS_PER_MONTH)
    return serviced.date() + relativedelta(months=whole_months, days=extra_days)


def urgency(remaining: Optional[float], due_soon: float) -> Status:
    """
    Status from what is left before a due point, in miles or days.

    Nothing left is OVERDUE, up to `due_soon` left is DUE_SOON.
    """
    if remaining is None:
        return Status.UNKNOWN
    if remaining <= 0:
        return Status.OVERDUE
    if remaining <= due_soon:
        return Status.DUE_SOON
    return Status.OK


def most_urgent(*statuses: Status) -> Status:
    return min(statuses, key=lambda s: s.value)
