#!/usr/bin/env python3
"""
Unified CLI for the car-diagnostics garage.

Commands:
  vehicles       - List vehicles with mileage and oil-change outlook
  add-vehicle    - Add a vehicle to the garage
  clone-vehicle  - Copy a vehicle's details under a new name
  use            - Select the active vehicle
  oil            - Show when the next oil change is due
  history        - View maintenance history
  log-service    - Add a maintenance event
  log-mileage    - Record an odometer reading
  update-miles   - Set current vehicle mileage
  edit-vehicle   - Change a vehicle's name, make, model or year
  notes          - List garage notes (things heard, seen, felt or smelled)
  add-note       - Add a garage note
  resolve-note   - Mark a garage note resolved (or reopen it)
  delete-note    - Remove a garage note
  charging       - Classify a charging-voltage reading taken under load
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from garage import (
    DEFAULT_OIL_CHANGE_INTERVAL,
    ChargingMeasurement,
    GarageNote,
    MaintenanceEvent,
    MileageEntry,
    NOTE_CATEGORIES,
    Status,
    Vehicle,
    add_garage_note,
    add_maintenance_event,
    add_mileage_entry,
    add_vehicle,
    check_measurement_exception,
    classify_charging_voltage,
    clone_vehicle,
    create_garage,
    create_garage_note,
    create_vehicle,
    delete_garage_note,
    load_garage,
    resolve_garage_note,
    set_active_vehicle,
    update_current_mileage,
    update_vehicle_meta,
)
from garage.mileage import to_iso_date

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[float]) -> str:
    """Format mileage for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def iso_date(value: str) -> str:
    """argparse type: an ISO date, normalized to YYYY-MM-DD."""
    parsed = to_iso_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(
            f"invalid date '{value}' (expected YYYY-MM-DD)"
        )
    return parsed


STATUS_LABELS = {
    Status.OVERDUE: "OVERDUE",
    Status.DUE_SOON: "DUE SOON",
    Status.OK: "OK",
    Status.UNKNOWN: "UNKNOWN (no oil change on record)",
}


# =============================================================================
# Vehicle selection
# =============================================================================


def select_vehicle(garage, selector: Optional[str]) -> Optional[Vehicle]:
    """Pick a vehicle by --vehicle, else the active one, else the only one."""
    if selector:
        vehicle = garage.get_vehicle(selector)
        if vehicle is None:
            print(f"Error: Unknown vehicle '{selector}'")
        return vehicle

    vehicle = garage.active_vehicle
    if vehicle is None:
        if not garage.vehicles:
            print("Error: No vehicles in garage (use add-vehicle)")
        else:
            print("Error: No active vehicle, pass --vehicle")
            for v in garage.vehicles:
                print(f"  {v.name}  ({v.id})")
    return vehicle


# =============================================================================
# Vehicles command
# =============================================================================


def make_vehicles_table(vehicles: List[Vehicle], active_id: Optional[str], interval):
    """Convert vehicles to table rows."""
    rows = []
    for vehicle in vehicles:
        oil = vehicle.oil_change_status(interval_miles=interval)
        rows.append(
            [
                "*" if vehicle.id == active_id else "",
                vehicle.name,
                " ".join(str(p) for p in (vehicle.year, vehicle.make, vehicle.model) if p),
                format_miles(vehicle.current_mileage),
                format_miles(oil.weekly_mileage_avg),
                oil.miles_display,
            ]
        )
    return rows


def cmd_vehicles(args):
    """List vehicles with mileage and oil-change outlook."""
    garage = load_garage(args.garage_file)

    if not garage.vehicles:
        print("No vehicles in garage.")
        return 0

    headers = ["", "Name", "Vehicle", "Mileage", "Mi/week", "Oil change"]
    rows = make_vehicles_table(
        garage.vehicles, garage.active_vehicle_id, args.interval
    )
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Add / clone / use commands
# =============================================================================


def cmd_add_vehicle(args):
    """Add a vehicle to the garage."""
    if not args.garage_file.exists():
        create_garage(args.garage_file)

    vehicle = create_vehicle(
        args.name, args.make, args.model, year=args.year, current_mileage=args.mileage
    )

    print(f"Adding vehicle to {args.garage_file}:")
    print(f"  Name:    {vehicle.name}")
    print(f"  Vehicle: {vehicle.display_name}")
    print(f"  Mileage: {vehicle.current_mileage:,.0f}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    add_vehicle(args.garage_file, vehicle, make_active=args.use)
    print(f"Vehicle added ({vehicle.id}).")
    return 0


def cmd_clone_vehicle(args):
    """Copy a vehicle's details under a new name."""
    garage = load_garage(args.garage_file)
    source = select_vehicle(garage, args.vehicle)
    if source is None:
        return 1

    clone = clone_vehicle(source, args.new_name)
    add_vehicle(args.garage_file, clone)
    print(f"Cloned {source.name} as {clone.name} ({clone.id}).")
    return 0


def cmd_use(args):
    """Select the active vehicle."""
    garage = load_garage(args.garage_file)
    vehicle = garage.get_vehicle(args.selector)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{args.selector}'")
        return 1

    set_active_vehicle(args.garage_file, vehicle.id)
    print(f"Active vehicle: {vehicle.display_name}")
    return 0


# =============================================================================
# Oil command
# =============================================================================


def cmd_oil(args):
    """Show when the next oil change is due."""
    garage = load_garage(args.garage_file)
    vehicle = select_vehicle(garage, args.vehicle)
    if vehicle is None:
        return 1

    oil = vehicle.oil_change_status(
        interval_miles=args.interval, interval_months=args.months
    )

    print(f"Vehicle: {vehicle.display_name}")
    print(f"Current mileage: {vehicle.current_mileage:,.0f}")
    print(f"Weekly average: {oil.weekly_mileage_avg:,} mi/week")
    interval = f"{args.interval:,.0f} mi"
    if args.months:
        interval += f" / {args.months} mo"
    print(f"Interval: {interval}")
    print()

    print(f"Status: {STATUS_LABELS[oil.status]}")
    if oil.status == Status.UNKNOWN:
        return 0

    print(f"Last oil change: {oil.last_service_date} @ {format_miles(oil.last_service_miles)}")
    due = f"{format_miles(oil.due_miles)} mi"
    if oil.due_date:
        due += f" or {oil.due_date}"
    print(f"Due at: {due}")
    print(f"Remaining: {oil.miles_display}")
    if oil.days_display:
        print(f"Estimated: {oil.days_display}")
    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(events: List[MaintenanceEvent]) -> List[List[str]]:
    """Convert maintenance events to table rows."""
    rows = []
    for event in events:
        rows.append(
            [
                event.date,
                format_miles(event.mileage) if event.mileage else "-",
                event.display_type,
                truncate(event.notes),
            ]
        )
    return rows


def cmd_history(args):
    """View maintenance history."""
    garage = load_garage(args.garage_file)
    vehicle = select_vehicle(garage, args.vehicle)
    if vehicle is None:
        return 1

    events = vehicle.get_maintenance_sorted(sort_by=args.sort, reverse=not args.asc)

    if args.type:
        events = [e for e in events if args.type.lower() in e.type.lower()]

    if args.since:
        events = [e for e in events if e.date >= args.since]

    print(f"Vehicle: {vehicle.display_name}")
    print(f"Current mileage: {vehicle.current_mileage:,.0f}")
    print(f"Total services: {len(vehicle.maintenance)}")
    if args.type or args.since:
        print(f"Showing: {len(events)} (filtered)")
    print()

    if not events:
        print("No maintenance entries found.")
        return 0

    headers = ["Date", "Mileage", "Service", "Notes"]
    print(tabulate(make_history_table(events), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Log commands
# =============================================================================


def cmd_log_service(args):
    """Add a maintenance event."""
    garage = load_garage(args.garage_file)
    vehicle = select_vehicle(garage, args.vehicle)
    if vehicle is None:
        return 1

    if not args.type.strip():
        print("Error: Service type cannot be empty")
        return 1

    event = MaintenanceEvent(
        type=args.type.strip(),
        date=args.date or date.today().isoformat(),
        mileage=args.mileage if args.mileage is not None else vehicle.current_mileage,
        notes=args.notes,
    )

    print(f"Adding maintenance entry for {vehicle.name}:")
    print(f"  Service: {event.display_type}")
    print(f"  Date:    {event.date}")
    if event.mileage:
        print(f"  Mileage: {event.mileage:,.0f}")
    if event.notes:
        print(f"  Notes:   {event.notes}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    add_maintenance_event(args.garage_file, vehicle.id, event)
    print("Entry saved.")
    return 0


def cmd_log_mileage(args):
    """Record an odometer reading."""
    garage = load_garage(args.garage_file)
    vehicle = select_vehicle(garage, args.vehicle)
    if vehicle is None:
        return 1

    entry = MileageEntry(date=args.date or date.today().isoformat(), mileage=args.mileage)

    print(f"Vehicle: {vehicle.name}")
    print(f"Reading: {entry.mileage:,.0f} on {entry.date}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    add_mileage_entry(args.garage_file, vehicle.id, entry)
    print("Reading saved.")
    return 0


def cmd_update_miles(args):
    """Set current vehicle mileage."""
    garage = load_garage(args.garage_file)
    vehicle = select_vehicle(garage, args.vehicle)
    if vehicle is None:
        return 1

    print(f"Vehicle: {vehicle.name}")
    print(f"Current mileage: {vehicle.current_mileage:,.0f}")
    print(f"New mileage:     {args.mileage:,.0f}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    update_current_mileage(args.garage_file, vehicle.id, args.mileage)
    print("Mileage updated.")
    return 0


def cmd_edit_vehicle(args):
    """Change a vehicle's name, make, model or year."""
    garage = load_garage(args.garage_file)
    vehicle = select_vehicle(garage, args.vehicle)
    if vehicle is None:
        return 1

    if all(v is None for v in (args.name, args.make, args.model, args.year)):
        print("Error: Nothing to change (use --name, --make, --model or --year)")
        return 1

    update_vehicle_meta(
        args.garage_file,
        vehicle.id,
        name=args.name,
        make=args.make,
        model=args.model,
        year=args.year,
    )
    vehicle = load_garage(args.garage_file).get_vehicle(vehicle.id)
    print(f"Vehicle updated: {vehicle.display_name}")
    return 0


# =============================================================================
# Garage note commands
# =============================================================================


def make_notes_table(notes: List[GarageNote]) -> List[List[str]]:
    """Convert garage notes to table rows."""
    rows = []
    for note in notes:
        rows.append(
            [
                (note.id or "-")[:8],
                note.date_noticed or (note.created_at or "-")[:10],
                note.category,
                truncate(note.text, max_len=40),
                note.conditions_summary or "-",
                "resolved" if note.resolved else "open",
            ]
        )
    return rows


def cmd_notes(args):
    """List garage notes."""
    garage = load_garage(args.garage_file)
    vehicle = select_vehicle(garage, args.vehicle)
    if vehicle is None:
        return 1

    notes = vehicle.garage_notes if args.all else vehicle.open_notes

    print(f"Vehicle: {vehicle.display_name}")
    print(f"Open notes: {len(vehicle.open_notes)} of {len(vehicle.garage_notes)}")
    print()

    if not notes:
        print("No garage notes found.")
        return 0

    headers = ["Id", "Noticed", "Category", "Note", "Conditions", "State"]
    print(tabulate(make_notes_table(notes), headers=headers, tablefmt="simple"))
    return 0


def cmd_add_note(args):
    """Add a garage note."""
    garage = load_garage(args.garage_file)
    vehicle = select_vehicle(garage, args.vehicle)
    if vehicle is None:
        return 1

    if not args.text.strip():
        print("Error: Note text cannot be empty")
        return 1

    conditions = {
        "driving": True if args.driving else None,
        "weather": args.weather,
        "temperature": args.temperature,
        "fuelLevel": args.fuel_level,
    }
    note = create_garage_note(
        args.text,
        category=args.category,
        date_noticed=args.date,
        is_intermittent=args.intermittent,
        conditions=conditions,
    )

    print(f"Adding garage note for {vehicle.name}:")
    print(f"  Category: {note.category}")
    print(f"  Note:     {note.text}")
    if note.date_noticed:
        print(f"  Noticed:  {note.date_noticed}")
    if note.conditions_summary:
        print(f"  When:     {note.conditions_summary}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    add_garage_note(args.garage_file, vehicle.id, note)
    print(f"Note saved ({note.id[:8]}).")
    return 0


def _select_note(args):
    garage = load_garage(args.garage_file)
    vehicle = select_vehicle(garage, args.vehicle)
    if vehicle is None:
        return None, None
    note = vehicle.get_note(args.note_id)
    if note is None:
        print(f"Error: Unknown note '{args.note_id}'")
    return vehicle, note


def cmd_resolve_note(args):
    """Mark a garage note resolved (or reopen it)."""
    vehicle, note = _select_note(args)
    if note is None:
        return 1

    resolve_garage_note(args.garage_file, vehicle.id, note.id, resolved=not args.reopen)
    print(f"Note {'reopened' if args.reopen else 'resolved'}: {truncate(note.text, 40)}")
    return 0


def cmd_delete_note(args):
    """Remove a garage note."""
    vehicle, note = _select_note(args)
    if note is None:
        return 1

    delete_garage_note(args.garage_file, vehicle.id, note.id)
    print(f"Note deleted: {truncate(note.text, 40)}")
    return 0


# =============================================================================
# Charging command
# =============================================================================


def cmd_charging(args):
    """Classify a charging-voltage reading taken under load."""
    measurement = ChargingMeasurement(
        voltage=args.voltage,
        headlights=args.headlights,
        blower=args.blower,
        rear_defroster=args.defroster,
    )
    status = classify_charging_voltage(measurement)

    print(f"Voltage: {args.voltage:.2f} V")
    print(
        "Load: "
        f"headlights={'on' if args.headlights else 'off'}, "
        f"blower={'on' if args.blower else 'off'}, "
        f"rear defroster={'on' if args.defroster else 'off'}"
    )
    print(f"Charging: {status.value}")
    if not measurement.under_load:
        print("  (headlights, blower and rear defroster must all be on)")

    if args.strength:
        exception = check_measurement_exception(args.strength)
        print()
        print(f"Measurement exception: {'eligible' if exception.eligible else 'not eligible'}")
        if exception.allowed_dependents:
            print(f"  May override: {', '.join(exception.allowed_dependents)}")
        for note in exception.notes:
            print(f"  {note}")
    return 0


# =============================================================================
# Main
# =============================================================================


def add_garage_file_argument(parser):
    parser.add_argument(
        "garage_file",
        type=Path,
        help="Path to garage YAML file",
    )


def add_vehicle_option(parser):
    parser.add_argument(
        "--vehicle",
        type=str,
        help="Vehicle id or name (default: active vehicle)",
    )


def add_interval_option(parser):
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_OIL_CHANGE_INTERVAL,
        help=f"Oil change interval in miles (default: {DEFAULT_OIL_CHANGE_INTERVAL})",
    )


def add_dry_run_option(parser, help="Show what would be added without saving"):
    parser.add_argument("--dry-run", action="store_true", help=help)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Car diagnostics garage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s add-vehicle garage.yaml Daily Subaru BRZ --year 2015 --mileage 58000
  %(prog)s vehicles garage.yaml
  %(prog)s oil garage.yaml
  %(prog)s oil garage.yaml --interval 7500 --months 6
  %(prog)s log-service garage.yaml "Oil Change" --mileage 58000
  %(prog)s log-mileage garage.yaml 58250 --date 2025-01-08
  %(prog)s history garage.yaml --type brake
  %(prog)s add-note garage.yaml "Squeal when braking" --category heard --driving
  %(prog)s charging 13.9 --headlights --blower --defroster
""",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Vehicles subcommand
    vehicles_parser = subparsers.add_parser(
        "vehicles", help="List vehicles with mileage and oil-change outlook"
    )
    add_garage_file_argument(vehicles_parser)
    add_interval_option(vehicles_parser)

    # Add vehicle subcommand
    add_parser = subparsers.add_parser("add-vehicle", help="Add a vehicle")
    add_garage_file_argument(add_parser)
    add_parser.add_argument("name", type=str, help="Nickname (e.g., 'Daily')")
    add_parser.add_argument("make", type=str, help="Make (e.g., 'Subaru')")
    add_parser.add_argument("model", type=str, help="Model (e.g., 'BRZ')")
    add_parser.add_argument("--year", type=int, help="Model year")
    add_parser.add_argument("--mileage", type=float, help="Current mileage")
    add_parser.add_argument(
        "--use", action="store_true", help="Make this the active vehicle"
    )
    add_dry_run_option(add_parser)

    # Clone vehicle subcommand
    clone_parser = subparsers.add_parser(
        "clone-vehicle", help="Copy a vehicle's details under a new name"
    )
    add_garage_file_argument(clone_parser)
    clone_parser.add_argument("new_name", type=str, help="Name for the copy")
    add_vehicle_option(clone_parser)

    # Use subcommand
    use_parser = subparsers.add_parser("use", help="Select the active vehicle")
    add_garage_file_argument(use_parser)
    use_parser.add_argument("selector", type=str, help="Vehicle id or name")

    # Edit vehicle subcommand
    edit_parser = subparsers.add_parser(
        "edit-vehicle", help="Change a vehicle's name, make, model or year"
    )
    add_garage_file_argument(edit_parser)
    add_vehicle_option(edit_parser)
    edit_parser.add_argument("--name", type=str, help="New nickname")
    edit_parser.add_argument("--make", type=str, help="New make")
    edit_parser.add_argument("--model", type=str, help="New model")
    edit_parser.add_argument("--year", type=int, help="New model year")

    # Oil subcommand
    oil_parser = subparsers.add_parser(
        "oil", help="Show when the next oil change is due"
    )
    add_garage_file_argument(oil_parser)
    add_vehicle_option(oil_parser)
    add_interval_option(oil_parser)
    oil_parser.add_argument(
        "--months",
        type=float,
        help="Also due after this many months, whichever comes first",
    )

    # History subcommand
    history_parser = subparsers.add_parser("history", help="View maintenance history")
    add_garage_file_argument(history_parser)
    add_vehicle_option(history_parser)
    history_parser.add_argument(
        "--type",
        type=str,
        help="Filter to services containing text (case-insensitive, e.g., 'oil')",
    )
    history_parser.add_argument(
        "--since",
        type=iso_date,
        help="Show only entries since date (YYYY-MM-DD)",
    )
    history_parser.add_argument(
        "--sort",
        choices=["date", "miles", "type"],
        default="date",
        help="Sort order (default: date)",
    )
    history_parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )

    # Log service subcommand
    log_parser = subparsers.add_parser("log-service", help="Add a maintenance event")
    add_garage_file_argument(log_parser)
    log_parser.add_argument(
        "type",
        type=str,
        help="Service type (e.g., 'Oil Change', 'Brake Pads')",
    )
    add_vehicle_option(log_parser)
    log_parser.add_argument(
        "--date",
        type=iso_date,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument(
        "--mileage",
        type=float,
        help="Mileage at time of service (default: current mileage)",
    )
    log_parser.add_argument("--notes", type=str, help="Notes about the service")
    add_dry_run_option(log_parser)

    # Log mileage subcommand
    log_mileage_parser = subparsers.add_parser(
        "log-mileage", help="Record an odometer reading"
    )
    add_garage_file_argument(log_mileage_parser)
    log_mileage_parser.add_argument("mileage", type=float, help="Odometer reading")
    add_vehicle_option(log_mileage_parser)
    log_mileage_parser.add_argument(
        "--date",
        type=iso_date,
        help="Reading date in YYYY-MM-DD format (default: today)",
    )
    add_dry_run_option(
        log_mileage_parser, help="Show what would be recorded without saving"
    )

    # Update Miles subcommand
    update_miles_parser = subparsers.add_parser(
        "update-miles", help="Set current vehicle mileage"
    )
    add_garage_file_argument(update_miles_parser)
    update_miles_parser.add_argument("mileage", type=float, help="Current mileage")
    add_vehicle_option(update_miles_parser)
    add_dry_run_option(
        update_miles_parser, help="Show what would be updated without saving"
    )

    # Notes subcommand
    notes_parser = subparsers.add_parser("notes", help="List garage notes")
    add_garage_file_argument(notes_parser)
    add_vehicle_option(notes_parser)
    notes_parser.add_argument(
        "--all", action="store_true", help="Include resolved notes"
    )

    # Add note subcommand
    add_note_parser = subparsers.add_parser("add-note", help="Add a garage note")
    add_garage_file_argument(add_note_parser)
    add_note_parser.add_argument("text", type=str, help="What you noticed")
    add_vehicle_option(add_note_parser)
    add_note_parser.add_argument(
        "--category",
        choices=NOTE_CATEGORIES,
        default="other",
        help="What kind of observation (default: other)",
    )
    add_note_parser.add_argument(
        "--date", type=iso_date, help="Date noticed in YYYY-MM-DD format"
    )
    add_note_parser.add_argument(
        "--intermittent", action="store_true", help="Comes and goes"
    )
    add_note_parser.add_argument(
        "--driving", action="store_true", help="Noticed while driving"
    )
    add_note_parser.add_argument("--weather", type=str, help="Weather at the time")
    add_note_parser.add_argument(
        "--temperature", type=str, help="Temperature at the time (e.g., 'cold')"
    )
    add_note_parser.add_argument(
        "--fuel-level", type=str, help="Fuel level at the time (e.g., '1/4')"
    )
    add_dry_run_option(add_note_parser)

    # Resolve note subcommand
    resolve_parser = subparsers.add_parser(
        "resolve-note", help="Mark a garage note resolved"
    )
    add_garage_file_argument(resolve_parser)
    resolve_parser.add_argument("note_id", type=str, help="Note id or id prefix")
    add_vehicle_option(resolve_parser)
    resolve_parser.add_argument(
        "--reopen", action="store_true", help="Mark the note open again"
    )

    # Delete note subcommand
    delete_note_parser = subparsers.add_parser(
        "delete-note", help="Remove a garage note"
    )
    add_garage_file_argument(delete_note_parser)
    delete_note_parser.add_argument("note_id", type=str, help="Note id or id prefix")
    add_vehicle_option(delete_note_parser)

    # Charging subcommand (no garage file needed)
    charging_parser = subparsers.add_parser(
        "charging", help="Classify a charging-voltage reading taken under load"
    )
    charging_parser.add_argument("voltage", type=float, help="Measured voltage")
    charging_parser.add_argument(
        "--headlights", action="store_true", help="Headlights were on"
    )
    charging_parser.add_argument("--blower", action="store_true", help="Blower was on")
    charging_parser.add_argument(
        "--defroster", action="store_true", help="Rear defroster was on"
    )
    charging_parser.add_argument(
        "--strength",
        type=str,
        help="Measurement strength (e.g., 'strong') to check exception eligibility",
    )

    return parser


COMMANDS = {
    "vehicles": cmd_vehicles,
    "add-vehicle": cmd_add_vehicle,
    "clone-vehicle": cmd_clone_vehicle,
    "use": cmd_use,
    "edit-vehicle": cmd_edit_vehicle,
    "oil": cmd_oil,
    "history": cmd_history,
    "log-service": cmd_log_service,
    "log-mileage": cmd_log_mileage,
    "update-miles": cmd_update_miles,
    "notes": cmd_notes,
    "add-note": cmd_add_note,
    "resolve-note": cmd_resolve_note,
    "delete-note": cmd_delete_note,
    "charging": cmd_charging,
}


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Validate garage file exists (add-vehicle creates it)
    garage_file = getattr(args, "garage_file", None)
    if garage_file is not None and args.command != "add-vehicle" and not garage_file.exists():
        print(f"Error: File not found: {garage_file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except (KeyError, IndexError) as e:
        print(f"Error: {e.args[0] if e.args else e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
