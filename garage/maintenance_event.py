"""MaintenanceEvent class for service records."""
from typing import Optional

from .mileage import normalize_event_type

# Labels offered when logging a service; stored as given.
MAINTENANCE_TYPES = [
    "Oil Change",
    "Brake Pads",
    "Brake Rotors",
    "Brake Fluid Added",
    "Brake Fluid Flush",
    "Brake Line/Hose Repair",
    "Air Filter",
    "Cabin Filter",
    "Spark Plugs",
    "Transmission Fluid",
    "Coolant Flush",
    "Battery Replacement",
    "Tire Rotation",
    "Tire Replacement",
    "Other",
]


class MaintenanceEvent:
    """A record of maintenance performed on a vehicle."""

    def __init__(
            self,
            type: str,
            date: str,
            mileage: float = 0,
            notes: Optional[str] = None,
            id: Optional[str] = None,
    ):
        self.id = id
        self.type = type
        self.date = date
        self.mileage = mileage or 0
        self.notes = notes

    @property
    def type_key(self) -> str:
        """Normalized type tag, e.g. 'Oil Change' -> 'oil_change'."""
        return normalize_event_type(self.type)

    @property
    def display_type(self) -> str:
        """Human-readable type, e.g. 'oil_change' -> 'Oil Change'."""
        if not self.type_key:
            return self.type or "-"
        for label in MAINTENANCE_TYPES:
            if normalize_event_type(label) == self.type_key:
                return label
        return self.type
