"""Garage class - the set of vehicles kept in one garage file."""

from typing import List, Optional

from .vehicle import Vehicle


class Garage:
    """All vehicles in a garage file plus the currently selected one."""

    def __init__(
        self,
        vehicles: Optional[List[Vehicle]] = None,
        active_vehicle_id: Optional[str] = None,
    ):
        self.vehicles = vehicles or []
        self.active_vehicle_id = active_vehicle_id

    def get_vehicle(self, id_or_name: str) -> Optional[Vehicle]:
        """Find a vehicle by id, falling back to a case-insensitive name match."""
        for vehicle in self.vehicles:
            if vehicle.id == id_or_name:
                return vehicle
        wanted = id_or_name.strip().lower()
        for vehicle in self.vehicles:
            if vehicle.name.lower() == wanted:
                return vehicle
        return None

    @property
    def active_vehicle(self) -> Optional[Vehicle]:
        """The selected vehicle, or the only vehicle if there is just one."""
        if self.active_vehicle_id:
            for vehicle in self.vehicles:
                if vehicle.id == self.active_vehicle_id:
                    return vehicle
        if len(self.vehicles) == 1:
            return self.vehicles[0]
        return None
