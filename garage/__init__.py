"""
Vehicle garage models and checks.

This package provides:
- ChargingStatus / classify_charging_voltage: charging-voltage rules
- check_measurement_exception: one-hop measurement exception eligibility
- Mileage helpers: weekly average, oil-change miles/days, display formatting
- MileageEntry, MaintenanceEvent: dated records
- GarageNote: things noticed about a vehicle, open until resolved
- Vehicle: main aggregate combining the records
- OilChangeDue, Status: calculated oil-change status
- Garage + loader: YAML persistence
"""

from .status import Status
from .charging import (
    CHARGING_VOLTAGE_HIGH_MIN,
    CHARGING_VOLTAGE_OK_MIN,
    ChargingMeasurement,
    ChargingStatus,
    MeasurementException,
    check_measurement_exception,
    classify_charging_voltage,
    evaluate_measurement,
)
from .mileage import (
    DEFAULT_OIL_CHANGE_INTERVAL,
    calc_miles_until_oil_change,
    calc_weekly_mileage_avg,
    estimate_days_until_oil_change,
    format_days_remaining,
    format_miles_remaining,
)
from .oil_change import most_urgent, next_due_date, next_due_mileage, urgency
from .mileage_entry import MileageEntry
from .maintenance_event import MAINTENANCE_TYPES, MaintenanceEvent
from .garage_note import NOTE_CATEGORIES, GarageNote, create_garage_note
from .oil_change_due import OilChangeDue
from .vehicle import Vehicle, clone_vehicle, create_vehicle
from .garage import Garage
from .loader import (
    add_garage_note,
    add_maintenance_event,
    add_mileage_entry,
    add_vehicle,
    create_garage,
    delete_garage_note,
    delete_maintenance_event,
    delete_vehicle,
    load_garage,
    resolve_garage_note,
    set_active_vehicle,
    update_current_mileage,
    update_garage_note,
    update_maintenance_event,
    update_vehicle_meta,
)

__all__ = [
    "Status",
    "CHARGING_VOLTAGE_HIGH_MIN",
    "CHARGING_VOLTAGE_OK_MIN",
    "ChargingMeasurement",
    "ChargingStatus",
    "MeasurementException",
    "check_measurement_exception",
    "classify_charging_voltage",
    "evaluate_measurement",
    "DEFAULT_OIL_CHANGE_INTERVAL",
    "calc_miles_until_oil_change",
    "calc_weekly_mileage_avg",
    "estimate_days_until_oil_change",
    "format_days_remaining",
    "format_miles_remaining",
    "most_urgent",
    "next_due_date",
    "next_due_mileage",
    "urgency",
    "MileageEntry",
    "MAINTENANCE_TYPES",
    "MaintenanceEvent",
    "NOTE_CATEGORIES",
    "GarageNote",
    "create_garage_note",
    "OilChangeDue",
    "Vehicle",
    "clone_vehicle",
    "create_vehicle",
    "Garage",
    "add_garage_note",
    "add_maintenance_event",
    "add_mileage_entry",
    "add_vehicle",
    "create_garage",
    "delete_garage_note",
    "delete_maintenance_event",
    "delete_vehicle",
    "load_garage",
    "resolve_garage_note",
    "set_active_vehicle",
    "update_current_mileage",
    "update_garage_note",
    "update_maintenance_event",
    "update_vehicle_meta",
]
