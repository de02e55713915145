"""Vehicle class - the main aggregate for a car's mileage and maintenance."""

import uuid
from datetime import datetime
from typing import List, Optional

from .garage_note import GarageNote, find_note
from .maintenance_event import MaintenanceEvent
from .mileage import (
    DEFAULT_OIL_CHANGE_INTERVAL,
    calc_miles_until_oil_change,
    calc_weekly_mileage_avg,
    estimate_days_until_oil_change,
    last_oil_change,
    parse_timestamp,
    timestamp_now,
    utc_now,
)
from .mileage_entry import MileageEntry
from .oil_change import most_urgent, next_due_date, next_due_mileage, urgency
from .oil_change_due import OilChangeDue
from .status import Status

DUE_SOON_MILES = 500
DUE_SOON_DAYS = 30


class Vehicle:
    """A vehicle in the garage with its mileage log and maintenance history."""

    def __init__(
        self,
        id: str,
        name: str,
        make: str,
        model: str,
        year: Optional[int] = None,
        current_mileage: Optional[float] = None,
        created_at: Optional[str] = None,
        updated_at: Optional[str] = None,
        mileage_log: Optional[List[MileageEntry]] = None,
        maintenance: Optional[List[MaintenanceEvent]] = None,
        garage_notes: Optional[List[GarageNote]] = None,
    ):
        self.id = id
        self.name = name
        self.make = make
        self.model = model
        self.year = year
        self._current_mileage = current_mileage
        self.created_at = created_at
        self.updated_at = updated_at
        self.mileage_log = mileage_log or []
        self.maintenance = maintenance or []
        self.garage_notes = garage_notes or []

    @property
    def display_name(self) -> str:
        """Name plus year/make/model, e.g. 'Daily (2015 Subaru BRZ)'."""
        parts = [str(p) for p in (self.year, self.make, self.model) if p]
        if not parts:
            return self.name
        return f"{self.name} ({' '.join(parts)})"

    @property
    def current_mileage(self) -> float:
        """Current mileage, auto-computed from records if not explicitly set."""
        if self._current_mileage is not None:
            return self._current_mileage
        readings = [e.mileage for e in self.mileage_log if e.mileage is not None]
        readings += [e.mileage for e in self.maintenance if e.mileage]
        if readings:
            return max(readings)
        return 0

    def get_weekly_mileage_avg(self, now: Optional[datetime] = None) -> int:
        """Weekly mileage average from the mileage log."""
        return calc_weekly_mileage_avg(self.mileage_log, now=now)

    @property
    def weekly_mileage_avg(self) -> int:
        return self.get_weekly_mileage_avg()

    @property
    def last_oil_change(self) -> Optional[MaintenanceEvent]:
        return last_oil_change(self.maintenance)

    @property
    def last_service(self) -> Optional[MaintenanceEvent]:
        """Get the most recent maintenance event overall."""
        if not self.maintenance:
            return None
        return max(self.maintenance, key=lambda e: (e.date, e.mileage or 0))

    @property
    def open_notes(self) -> List[GarageNote]:
        """Garage notes not yet marked resolved."""
        return [n for n in self.garage_notes if not n.resolved]

    def get_note(self, note_id: str) -> Optional[GarageNote]:
        return find_note(self.garage_notes, note_id)

    def get_maintenance_sorted(
        self, sort_by: str = "date", reverse: bool = True
    ) -> List[MaintenanceEvent]:
        """
        Get maintenance events sorted by specified field.

        Args:
            sort_by: "date", "miles", or "type"
            reverse: If True, newest/highest first (default)
        """
        if sort_by == "date":
            return sorted(self.maintenance, key=lambda e: e.date, reverse=reverse)
        elif sort_by == "miles":
            return sorted(
                self.maintenance, key=lambda e: e.mileage or 0, reverse=reverse
            )
        elif sort_by == "type":
            return sorted(
                self.maintenance, key=lambda e: (e.type_key, e.date), reverse=reverse
            )
        return self.maintenance

    def oil_change_status(
        self,
        interval_miles: float = DEFAULT_OIL_CHANGE_INTERVAL,
        interval_months: Optional[float] = None,
        due_soon_miles: float = DUE_SOON_MILES,
        now: Optional[datetime] = None,
    ) -> OilChangeDue:
        """
        Calculate when the next oil change is due.

        Logic:
        - No oil change on record: status = UNKNOWN
        - Due at last oil change miles + interval_miles
        - With interval_months, also due at last oil change date + months,
          whichever comes first
        - Days remaining estimated from the weekly mileage average
        """
        now = parse_timestamp(now) or utc_now()
        current_miles = self.current_mileage
        weekly_avg = self.get_weekly_mileage_avg(now=now)

        last = self.last_oil_change
        if last is None:
            return OilChangeDue(
                status=Status.UNKNOWN,
                interval_miles=interval_miles,
                weekly_mileage_avg=weekly_avg,
            )

        due_miles = next_due_mileage(last, interval_miles)
        due_date = next_due_date(last, interval_months)

        miles_remaining = calc_miles_until_oil_change(
            current_miles, self.maintenance, interval_miles
        )
        days_remaining = estimate_days_until_oil_change(miles_remaining, weekly_avg)

        status = urgency(due_miles - current_miles, due_soon_miles)
        if due_date is not None:
            days_to_date = (due_date - now.date()).days
            # Escalate status if date check is worse
            status = most_urgent(status, urgency(days_to_date, DUE_SOON_DAYS))
            days_to_date = max(0, days_to_date)
            if days_remaining is None or days_to_date < days_remaining:
                days_remaining = days_to_date

        return OilChangeDue(
            status=status,
            interval_miles=interval_miles,
            last_service_miles=last.mileage,
            last_service_date=last.date,
            due_miles=due_miles,
            due_date=due_date.isoformat() if due_date else None,
            miles_remaining=miles_remaining,
            days_remaining=days_remaining,
            weekly_mileage_avg=weekly_avg,
        )


def create_vehicle(
    name: str,
    make: str,
    model: str,
    year: Optional[int] = None,
    current_mileage: Optional[float] = None,
) -> Vehicle:
    """Create a new vehicle with a fresh id and timestamps."""
    now = timestamp_now()
    return Vehicle(
        id=str(uuid.uuid4()),
        name=name.strip(),
        make=make.strip(),
        model=model.strip(),
        year=year,
        current_mileage=current_mileage if current_mileage is not None else 0,
        created_at=now,
        updated_at=now,
    )


def clone_vehicle(source: Vehicle, new_name: str) -> Vehicle:
    """
    Copy a vehicle's details under a new name and id.

    The mileage log and maintenance history stay with the source.
    """
    now = timestamp_now()
    return Vehicle(
        id=str(uuid.uuid4()),
        name=new_name.strip(),
        make=source.make,
        model=source.model,
        year=source.year,
        current_mileage=source.current_mileage,
        created_at=now,
        updated_at=now,
    )
