"""Flask web application for the car-diagnostics garage (JSON API)."""

import math
import os
from datetime import date
from pathlib import Path

from flask import Flask, abort, current_app, jsonify, request

# Add parent directory to path for garage imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from garage.charging import (
    ChargingMeasurement,
    check_measurement_exception,
    classify_charging_voltage,
)
from garage.garage_note import NOTE_CATEGORIES, create_garage_note
from garage.loader import (
    add_garage_note,
    add_maintenance_event,
    add_mileage_entry,
    delete_garage_note,
    delete_maintenance_event,
    load_garage,
    update_garage_note,
    update_vehicle_meta,
)
from garage.maintenance_event import MaintenanceEvent
from garage.mileage import DEFAULT_OIL_CHANGE_INTERVAL, to_iso_date
from garage.mileage_entry import MileageEntry

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Path to garage file (relative to project root unless set in the environment)
app.config["GARAGE_FILE"] = Path(
    os.environ.get("GARAGE_FILE", Path(__file__).parent.parent / "garages" / "garage.yaml")
)


class InvalidRequest(Exception):
    """Request body or query string could not be used."""


def get_garage_path() -> Path:
    return Path(current_app.config["GARAGE_FILE"])


def get_vehicle_or_404(vehicle_id: str):
    """Load the garage and return the vehicle, or abort with 404."""
    path = get_garage_path()
    if not path.exists():
        abort(404, description="Garage file not found")
    vehicle = load_garage(path).get_vehicle(vehicle_id)
    if vehicle is None:
        abort(404, description=f"Vehicle '{vehicle_id}' not found")
    return vehicle


def parse_number(value, field: str, required: bool = False):
    """Parse a numeric field from JSON or a query string."""
    if value is None or value == "":
        if required:
            raise InvalidRequest(f"'{field}' is required")
        return None
    if isinstance(value, bool):
        raise InvalidRequest(f"'{field}' must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f"'{field}' must be a number")
    if not math.isfinite(number):
        raise InvalidRequest(f"'{field}' must be a finite number")
    return number


def parse_date(value, field: str, required: bool = False):
    """Parse an ISO date field, normalized to YYYY-MM-DD."""
    if value is None or value == "":
        if required:
            raise InvalidRequest(f"'{field}' is required")
        return None
    parsed = to_iso_date(value)
    if parsed is None:
        raise InvalidRequest(f"'{field}' must be an ISO date (YYYY-MM-DD)")
    return parsed


def parse_text(value, field: str, required: bool = False):
    if value is None:
        if required:
            raise InvalidRequest(f"'{field}' is required")
        return None
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequest(f"'{field}' must be a non-empty string")
    return value.strip()


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequest("Expected a JSON object")
    return data


@app.errorhandler(InvalidRequest)
def handle_bad_request(error):
    app.logger.warning("Rejected %s %s: %s", request.method, request.path, error)
    return jsonify({"error": str(error)}), 400


@app.errorhandler(404)
def handle_not_found(error):
    return jsonify({"error": error.description}), 404


def vehicle_summary(vehicle, oil) -> dict:
    return {
        "id": vehicle.id,
        "name": vehicle.name,
        "make": vehicle.make,
        "model": vehicle.model,
        "year": vehicle.year,
        "currentMileage": vehicle.current_mileage,
        "weeklyMileageAvg": oil.weekly_mileage_avg,
        "oilChange": oil.miles_display,
    }


def note_payload(note) -> dict:
    return {
        "id": note.id,
        "text": note.text,
        "category": note.category,
        "dateNoticed": note.date_noticed,
        "isIntermittent": note.is_intermittent,
        "conditions": note.conditions,
        "resolved": note.resolved,
        "createdAt": note.created_at,
        "updatedAt": note.updated_at,
    }


def oil_change_payload(oil) -> dict:
    return {
        "status": oil.status.name,
        "intervalMiles": oil.interval_miles,
        "lastServiceDate": oil.last_service_date,
        "lastServiceMiles": oil.last_service_miles,
        "dueMiles": oil.due_miles,
        "dueDate": oil.due_date,
        "milesRemaining": oil.miles_remaining,
        "daysRemaining": oil.days_remaining,
        "weeklyMileageAvg": oil.weekly_mileage_avg,
        "milesDisplay": oil.miles_display,
        "daysDisplay": oil.days_display,
    }


@app.route("/api/vehicles")
def list_vehicles():
    """All vehicles with their oil-change outlook."""
    path = get_garage_path()
    if not path.exists():
        return jsonify({"activeVehicle": None, "vehicles": []})

    garage = load_garage(path)
    vehicles = [vehicle_summary(v, v.oil_change_status()) for v in garage.vehicles]
    return jsonify({"activeVehicle": garage.active_vehicle_id, "vehicles": vehicles})


@app.route("/api/vehicles/<vehicle_id>")
def vehicle_detail(vehicle_id: str):
    """Vehicle details with mileage log and maintenance history."""
    vehicle = get_vehicle_or_404(vehicle_id)
    payload = vehicle_summary(vehicle, vehicle.oil_change_status())
    payload["mileageLog"] = [
        {"date": e.date, "mileage": e.mileage, "notes": e.notes}
        for e in vehicle.mileage_log
    ]
    payload["maintenance"] = [
        {
            "id": e.id,
            "type": e.type,
            "date": e.date,
            "mileage": e.mileage,
            "notes": e.notes,
        }
        for e in vehicle.maintenance
    ]
    payload["garageNotes"] = [note_payload(n) for n in vehicle.garage_notes]
    return jsonify(payload)


@app.route("/api/vehicles/<vehicle_id>/oil-change")
def oil_change(vehicle_id: str):
    """Oil-change outlook for a vehicle."""
    vehicle = get_vehicle_or_404(vehicle_id)
    interval = parse_number(request.args.get("interval"), "interval")
    months = parse_number(request.args.get("months"), "months")
    if interval is not None and interval <= 0:
        raise InvalidRequest("'interval' must be positive")

    oil = vehicle.oil_change_status(
        interval_miles=interval or DEFAULT_OIL_CHANGE_INTERVAL,
        interval_months=months,
    )
    return jsonify(oil_change_payload(oil))


@app.route("/api/vehicles/<vehicle_id>/mileage", methods=["POST"])
def log_mileage(vehicle_id: str):
    """Record an odometer reading."""
    vehicle = get_vehicle_or_404(vehicle_id)
    data = json_body()
    mileage = parse_number(data.get("mileage"), "mileage", required=True)
    if mileage < 0:
        raise InvalidRequest("'mileage' must not be negative")

    entry_date = parse_date(data.get("date"), "date") or date.today().isoformat()
    entry = MileageEntry(date=entry_date, mileage=mileage)
    add_mileage_entry(get_garage_path(), vehicle.id, entry)
    app.logger.info("Logged %s mi for vehicle %s", mileage, vehicle.id)

    vehicle = get_vehicle_or_404(vehicle.id)
    return jsonify(vehicle_summary(vehicle, vehicle.oil_change_status())), 201


@app.route("/api/vehicles/<vehicle_id>/maintenance", methods=["POST"])
def log_maintenance(vehicle_id: str):
    """Add a maintenance event."""
    vehicle = get_vehicle_or_404(vehicle_id)
    data = json_body()

    event_type = parse_text(data.get("type"), "type", required=True)
    event_date = parse_date(data.get("date"), "date", required=True)
    mileage = parse_number(data.get("mileage"), "mileage")
    if mileage is not None and mileage < 0:
        raise InvalidRequest("'mileage' must not be negative")

    event = MaintenanceEvent(
        type=event_type,
        date=event_date,
        mileage=mileage or 0,
        notes=parse_text(data.get("notes"), "notes") if data.get("notes") else None,
    )
    event_id = add_maintenance_event(get_garage_path(), vehicle.id, event)
    app.logger.info("Logged %s for vehicle %s", event_type, vehicle.id)
    return jsonify({"id": event_id, "type": event.type, "date": event.date}), 201


@app.route("/api/vehicles/<vehicle_id>/maintenance/<int:index>", methods=["DELETE"])
def remove_maintenance(vehicle_id: str, index: int):
    """Remove a maintenance event by position."""
    vehicle = get_vehicle_or_404(vehicle_id)
    try:
        delete_maintenance_event(get_garage_path(), vehicle.id, index)
    except IndexError as e:
        abort(404, description=str(e))
    return "", 204


@app.route("/api/vehicles/<vehicle_id>", methods=["PATCH"])
def edit_vehicle(vehicle_id: str):
    """Partial update of name, make, model and year."""
    vehicle = get_vehicle_or_404(vehicle_id)
    data = json_body()

    year = data.get("year")
    if year is not None and (isinstance(year, bool) or not isinstance(year, int)):
        raise InvalidRequest("'year' must be an integer")

    update_vehicle_meta(
        get_garage_path(),
        vehicle.id,
        name=parse_text(data.get("name"), "name"),
        make=parse_text(data.get("make"), "make"),
        model=parse_text(data.get("model"), "model"),
        year=year,
    )
    vehicle = get_vehicle_or_404(vehicle.id)
    return jsonify(vehicle_summary(vehicle, vehicle.oil_change_status()))


def get_note_or_404(vehicle, note_id: str):
    note = vehicle.get_note(note_id)
    if note is None:
        abort(404, description=f"Note '{note_id}' not found")
    return note


def parse_note_fields(data: dict, required: bool = False) -> dict:
    """Validate garage note fields from a JSON body."""
    fields = {
        "text": parse_text(data.get("text"), "text", required=required),
        "date_noticed": parse_date(data.get("dateNoticed"), "dateNoticed"),
    }

    category = data.get("category")
    if category is not None and category not in NOTE_CATEGORIES:
        raise InvalidRequest(f"'category' must be one of {', '.join(NOTE_CATEGORIES)}")
    fields["category"] = category

    for key, field in (("isIntermittent", "is_intermittent"), ("resolved", "resolved")):
        value = data.get(key)
        if value is not None and not isinstance(value, bool):
            raise InvalidRequest(f"'{key}' must be true or false")
        fields[field] = value

    conditions = data.get("conditions")
    if conditions is not None:
        if not isinstance(conditions, dict):
            raise InvalidRequest("'conditions' must be an object")
        driving = conditions.get("driving")
        if driving is not None and not isinstance(driving, bool):
            raise InvalidRequest("'conditions.driving' must be true or false")
        for key in ("weather", "temperature", "fuelLevel"):
            value = conditions.get(key)
            if value is not None and not isinstance(value, str):
                raise InvalidRequest(f"'conditions.{key}' must be a string")
        conditions = {
            k: conditions[k]
            for k in ("driving", "weather", "temperature", "fuelLevel")
            if conditions.get(k) is not None
        }
    fields["conditions"] = conditions
    return fields


@app.route("/api/vehicles/<vehicle_id>/notes")
def list_notes(vehicle_id: str):
    """Garage notes for a vehicle; resolved ones only with ?all=1."""
    vehicle = get_vehicle_or_404(vehicle_id)
    show_all = request.args.get("all", "").lower() in ("1", "true", "yes")
    notes = vehicle.garage_notes if show_all else vehicle.open_notes
    return jsonify({"notes": [note_payload(n) for n in notes]})


@app.route("/api/vehicles/<vehicle_id>/notes", methods=["POST"])
def add_note(vehicle_id: str):
    """Add a garage note."""
    vehicle = get_vehicle_or_404(vehicle_id)
    fields = parse_note_fields(json_body(), required=True)

    note = create_garage_note(
        fields["text"],
        category=fields["category"] or "other",
        date_noticed=fields["date_noticed"],
        is_intermittent=bool(fields["is_intermittent"]),
        conditions=fields["conditions"],
    )
    add_garage_note(get_garage_path(), vehicle.id, note)
    app.logger.info("Added %s note for vehicle %s", note.category, vehicle.id)
    return jsonify(note_payload(note)), 201


@app.route("/api/vehicles/<vehicle_id>/notes/<note_id>", methods=["PATCH"])
def edit_note(vehicle_id: str, note_id: str):
    """Partial update of a garage note, including resolving it."""
    vehicle = get_vehicle_or_404(vehicle_id)
    note = get_note_or_404(vehicle, note_id)
    fields = parse_note_fields(json_body())

    update_garage_note(get_garage_path(), vehicle.id, note.id, **fields)
    note = get_note_or_404(get_vehicle_or_404(vehicle.id), note.id)
    return jsonify(note_payload(note))


@app.route("/api/vehicles/<vehicle_id>/notes/<note_id>", methods=["DELETE"])
def remove_note(vehicle_id: str, note_id: str):
    """Remove a garage note."""
    vehicle = get_vehicle_or_404(vehicle_id)
    note = get_note_or_404(vehicle, note_id)
    delete_garage_note(get_garage_path(), vehicle.id, note.id)
    return "", 204


@app.route("/api/measurements/charging", methods=["POST"])
def charging_measurement():
    """
    Classify a charging-voltage reading.

    The body goes to the classifier unvalidated: a bad voltage or a
    missing load flag is an UNKNOWN result, not a 400.
    """
    data = request.get_json(silent=True)
    status = classify_charging_voltage(data)
    measurement = (
        ChargingMeasurement.from_dict(data) if isinstance(data, dict) else None
    )

    payload = {
        "system": "charging",
        "status": status.value,
        "underLoad": bool(measurement and measurement.under_load),
    }
    if isinstance(data, dict) and "strength" in data:
        exception = check_measurement_exception(data["strength"])
        payload["exception"] = {
            "eligible": exception.eligible,
            "allowedDependents": exception.allowed_dependents,
            "notes": exception.notes,
        }
    return jsonify(payload)


if __name__ == "__main__":
    # Run with debug mode for development
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
