"""YAML loading and saving utilities for garage data."""

import json
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .garage import Garage
from .garage_note import GarageNote
from .maintenance_event import MaintenanceEvent
from .mileage import timestamp_now
from .mileage_entry import MileageEntry
from .vehicle import Vehicle


def _parse_object(
    dct: Dict[str, Any]
) -> Union[Vehicle, MaintenanceEvent, MileageEntry, GarageNote, Garage, dict]:
    """Parse dictionary into appropriate object type."""
    # Vehicle object (inside 'vehicles' list)
    if "make" in dct and "model" in dct:
        return Vehicle(
            dct["id"],
            dct.get("name") or f"{dct['make']} {dct['model']}",
            dct["make"],
            dct["model"],
            dct.get("year"),
            dct.get("currentMileage"),
            dct.get("createdAt"),
            dct.get("updatedAt"),
            dct.get("mileageLog"),
            dct.get("maintenance"),
            dct.get("garageNotes"),
        )
    # Maintenance event
    elif "type" in dct and "date" in dct:
        return MaintenanceEvent(
            dct["type"],
            dct["date"],
            dct.get("mileage"),
            dct.get("notes"),
            dct.get("id"),
        )
    # Garage note
    elif "text" in dct and "category" in dct:
        return GarageNote(
            dct["text"],
            dct["category"],
            dct.get("dateNoticed"),
            dct.get("isIntermittent", False),
            dct.get("conditions"),
            dct.get("resolved", False),
            dct.get("id"),
            dct.get("createdAt"),
            dct.get("updatedAt"),
        )
    # Mileage log entry
    elif "date" in dct and "mileage" in dct:
        return MileageEntry(
            dct["date"],
            dct["mileage"],
            dct.get("notes"),
        )
    # Top-level garage object
    elif "vehicles" in dct:
        return Garage(dct["vehicles"], dct.get("activeVehicle"))
    else:
        return dct


def load_garage(filename: Union[str, Path]) -> Garage:
    """Load a garage from a YAML file."""
    with open(filename, "rb") as fp:
        # default=str turns unquoted YAML dates back into ISO strings
        json_data = json.dumps(
            yaml.load(fp, Loader=yaml.SafeLoader), indent=4, default=str
        )
    garage = json.loads(json_data, object_hook=_parse_object)
    if not isinstance(garage, Garage):
        # Empty file, or a file with only activeVehicle set
        active = garage.get("activeVehicle") if isinstance(garage, dict) else None
        return Garage([], active)
    return garage


def _read_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    """Load the raw YAML data (not parsed into objects)."""
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    data = data or {}
    if data.get("vehicles") is None:
        data["vehicles"] = []
    return data


def _write_raw(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def _find_vehicle(data: Dict[str, Any], vehicle_id: str) -> Dict[str, Any]:
    for vehicle in data["vehicles"]:
        if vehicle.get("id") == vehicle_id:
            return vehicle
    raise KeyError(f"Unknown vehicle id '{vehicle_id}'")


def _vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    """Serialize a Vehicle to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": vehicle.id,
        "name": vehicle.name,
        "make": vehicle.make,
        "model": vehicle.model,
    }
    if vehicle.year is not None:
        d["year"] = vehicle.year
    d["currentMileage"] = vehicle.current_mileage
    if vehicle.created_at is not None:
        d["createdAt"] = vehicle.created_at
    if vehicle.updated_at is not None:
        d["updatedAt"] = vehicle.updated_at
    d["mileageLog"] = [_entry_to_dict(e) for e in vehicle.mileage_log]
    d["maintenance"] = [_event_to_dict(e) for e in vehicle.maintenance]
    d["garageNotes"] = [_note_to_dict(n) for n in vehicle.garage_notes]
    return d


def _entry_to_dict(entry: MileageEntry) -> Dict[str, Any]:
    d: Dict[str, Any] = {"date": entry.date, "mileage": entry.mileage}
    if entry.notes is not None:
        d["notes"] = entry.notes
    return d


def _event_to_dict(event: MaintenanceEvent) -> Dict[str, Any]:
    d: Dict[str, Any] = {}
    if event.id is not None:
        d["id"] = event.id
    d["type"] = event.type
    d["date"] = event.date
    d["mileage"] = event.mileage
    if event.notes is not None:
        d["notes"] = event.notes
    return d


def _note_to_dict(note: GarageNote) -> Dict[str, Any]:
    d: Dict[str, Any] = {}
    if note.id is not None:
        d["id"] = note.id
    d["text"] = note.text
    d["category"] = note.category
    if note.date_noticed is not None:
        d["dateNoticed"] = note.date_noticed
    if note.is_intermittent:
        d["isIntermittent"] = True
    if note.conditions:
        d["conditions"] = dict(note.conditions)
    d["resolved"] = note.resolved
    if note.created_at is not None:
        d["createdAt"] = note.created_at
    if note.updated_at is not None:
        d["updatedAt"] = note.updated_at
    return d


def _effective_mileage(vehicle_dict: Dict[str, Any]) -> float:
    """currentMileage, or the highest recorded reading when it is not set."""
    if vehicle_dict.get("currentMileage") is not None:
        return vehicle_dict["currentMileage"]
    records = (vehicle_dict.get("mileageLog") or []) + (vehicle_dict.get("maintenance") or [])
    return max((r.get("mileage") or 0 for r in records), default=0)



def _touch(vehicle_dict: Dict[str, Any]) -> None:
    vehicle_dict["updatedAt"] = timestamp_now()


def create_garage(filename: Union[str, Path]) -> None:
    """Create an empty garage YAML file."""
    _write_raw(filename, {"activeVehicle": None, "vehicles": []})


def add_vehicle(
    filename: Union[str, Path], vehicle: Vehicle, make_active: bool = False
) -> None:
    """
    Append a vehicle to a garage YAML file.

    The first vehicle added to a garage becomes the active one.
    """
    data = _read_raw(filename)
    data["vehicles"].append(_vehicle_to_dict(vehicle))
    if make_active or not data.get("activeVehicle"):
        data["activeVehicle"] = vehicle.id
    _write_raw(filename, data)


def update_vehicle_meta(
    filename: Union[str, Path],
    vehicle_id: str,
    name: Optional[str] = None,
    make: Optional[str] = None,
    model: Optional[str] = None,
    year: Optional[int] = None,
) -> None:
    """
    Update name/make/model/year of a vehicle in a garage YAML file.

    Only updates fields that are provided (non-None).
    """
    data = _read_raw(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    if name is not None:
        vehicle["name"] = name.strip()
    if make is not None:
        vehicle["make"] = make.strip()
    if model is not None:
        vehicle["model"] = model.strip()
    if year is not None:
        vehicle["year"] = year
    _touch(vehicle)
    _write_raw(filename, data)


def delete_vehicle(filename: Union[str, Path], vehicle_id: str) -> None:
    """Remove a vehicle, along with its mileage log, maintenance and notes."""
    data = _read_raw(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    data["vehicles"].remove(vehicle)
    if data.get("activeVehicle") == vehicle_id:
        data["activeVehicle"] = None
    _write_raw(filename, data)


def set_active_vehicle(filename: Union[str, Path], vehicle_id: Optional[str]) -> None:
    """Select the active vehicle (None clears the selection)."""
    data = _read_raw(filename)
    if vehicle_id is not None:
        _find_vehicle(data, vehicle_id)
    data["activeVehicle"] = vehicle_id
    _write_raw(filename, data)


def update_current_mileage(
    filename: Union[str, Path], vehicle_id: str, miles: float
) -> None:
    """Set the current mileage of a vehicle."""
    data = _read_raw(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    vehicle["currentMileage"] = miles
    _touch(vehicle)
    _write_raw(filename, data)


def add_mileage_entry(
    filename: Union[str, Path], vehicle_id: str, entry: MileageEntry
) -> None:
    """
    Append an odometer reading to a vehicle's mileage log.

    Raises currentMileage to the reading when the reading is higher.
    """
    data = _read_raw(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    if vehicle.get("mileageLog") is None:
        vehicle["mileageLog"] = []
    current = _effective_mileage(vehicle)
    vehicle["mileageLog"].append(_entry_to_dict(entry))
    if entry.mileage > current:
        vehicle["currentMileage"] = entry.mileage
    _touch(vehicle)
    _write_raw(filename, data)


def add_maintenance_event(
    filename: Union[str, Path], vehicle_id: str, event: MaintenanceEvent
) -> str:
    """
    Append a maintenance event to a vehicle.

    Assigns a new id when the event has none. Returns the event id.
    """
    data = _read_raw(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    if vehicle.get("maintenance") is None:
        vehicle["maintenance"] = []
    if event.id is None:
        event.id = str(uuid.uuid4())
    vehicle["maintenance"].append(_event_to_dict(event))
    _touch(vehicle)
    _write_raw(filename, data)
    return event.id


def update_maintenance_event(
    filename: Union[str, Path], vehicle_id: str, index: int, event: MaintenanceEvent
) -> None:
    """Replace the maintenance event at the given index, keeping its id."""
    data = _read_raw(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    maintenance = vehicle.get("maintenance") or []
    if index < 0 or index >= len(maintenance):
        raise IndexError(
            f"Maintenance index {index} out of range (0..{len(maintenance) - 1})"
        )

    if event.id is None:
        event.id = maintenance[index].get("id")
    maintenance[index] = _event_to_dict(event)
    _touch(vehicle)
    _write_raw(filename, data)


def delete_maintenance_event(
    filename: Union[str, Path], vehicle_id: str, index: int
) -> None:
    """Remove the maintenance event at the given index."""
    data = _read_raw(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    maintenance = vehicle.get("maintenance") or []
    if index < 0 or index >= len(maintenance):
        raise IndexError(
            f"Maintenance index {index} out of range (0..{len(maintenance) - 1})"
        )

    del maintenance[index]
    _touch(vehicle)
    _write_raw(filename, data)


def _find_note(vehicle_dict: Dict[str, Any], note_id: str) -> Dict[str, Any]:
    for note in vehicle_dict.get("garageNotes") or []:
        if note.get("id") == note_id:
            return note
    raise KeyError(f"Unknown note id '{note_id}'")


def add_garage_note(
    filename: Union[str, Path], vehicle_id: str, note: GarageNote
) -> str:
    """
    Append a garage note to a vehicle.

    Assigns a new id and timestamps when missing. Returns the note id.
    """
    data = _read_raw(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    if vehicle.get("garageNotes") is None:
        vehicle["garageNotes"] = []
    if note.id is None:
        note.id = str(uuid.uuid4())
    now = timestamp_now()
    note.created_at = note.created_at or now
    note.updated_at = note.updated_at or now
    vehicle["garageNotes"].append(_note_to_dict(note))
    _touch(vehicle)
    _write_raw(filename, data)
    return note.id


def update_garage_note(
    filename: Union[str, Path],
    vehicle_id: str,
    note_id: str,
    text: Optional[str] = None,
    category: Optional[str] = None,
    date_noticed: Optional[str] = None,
    is_intermittent: Optional[bool] = None,
    conditions: Optional[Dict[str, Any]] = None,
    resolved: Optional[bool] = None,
) -> None:
    """
    Update fields of a garage note in a garage YAML file.

    Only updates fields that are provided (non-None).
    """
    data = _read_raw(filename)
    note = _find_note(_find_vehicle(data, vehicle_id), note_id)
    if text is not None:
        note["text"] = text.strip()
    if category is not None:
        note["category"] = category
    if date_noticed is not None:
        note["dateNoticed"] = date_noticed
    if is_intermittent is not None:
        note["isIntermittent"] = is_intermittent
    if conditions is not None:
        note["conditions"] = conditions
    if resolved is not None:
        note["resolved"] = resolved
    note["updatedAt"] = timestamp_now()
    _write_raw(filename, data)


def resolve_garage_note(
    filename: Union[str, Path], vehicle_id: str, note_id: str, resolved: bool = True
) -> None:
    """Mark a garage note resolved (or reopen it with resolved=False)."""
    update_garage_note(filename, vehicle_id, note_id, resolved=resolved)


def delete_garage_note(
    filename: Union[str, Path], vehicle_id: str, note_id: str
) -> None:
    """Remove a garage note by id."""
    data = _read_raw(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    vehicle["garageNotes"].remove(_find_note(vehicle, note_id))
    _write_raw(filename, data)
