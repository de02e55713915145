#!/usr/bin/env python3
"""Tests for YAML loading and saving utilities."""

import pytest
import yaml

from garage import (
    Garage,
    GarageNote,
    MaintenanceEvent,
    MileageEntry,
    Vehicle,
    add_garage_note,
    add_maintenance_event,
    add_mileage_entry,
    add_vehicle,
    create_garage,
    create_garage_note,
    create_vehicle,
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

GARAGE_YAML = """
activeVehicle: v1
vehicles:
  - id: v1
    name: Daily
    make: Subaru
    model: BRZ
    year: 2015
    currentMileage: 42000
    createdAt: '2025-01-01T00:00:00.000Z'
    updatedAt: '2025-01-01T00:00:00.000Z'
    mileageLog:
      - date: '2025-02-15'
        mileage: 41300
      - date: 2025-03-01
        mileage: 42000
        notes: fill-up
    maintenance:
      - id: e1
        type: oil_change
        date: '2025-01-01'
        mileage: 40000
        notes: 5W-30
      - id: e2
        type: Brake Pads
        date: '2025-02-01'
        mileage: 41000
    garageNotes:
      - id: n1
        text: Squeal when braking
        category: heard
        dateNoticed: '2025-02-20'
        isIntermittent: true
        conditions:
          driving: true
          weather: rain
        resolved: false
      - id: n2
        text: Oil spot on driveway
        category: saw
        resolved: true
  - id: v2
    name: Truck
    make: Ford
    model: F-150
"""


@pytest.fixture
def garage_file(tmp_path):
    path = tmp_path / "garage.yaml"
    path.write_text(GARAGE_YAML)
    return path


def raw(path):
    with open(path) as fp:
        return yaml.safe_load(fp)


# =============================================================================
# load_garage tests
# =============================================================================


class TestLoadGarage:
    """Tests for load_garage function."""

    def test_loads_vehicles(self, garage_file):
        garage = load_garage(garage_file)

        assert isinstance(garage, Garage)
        assert garage.active_vehicle_id == "v1"
        assert len(garage.vehicles) == 2
        assert all(isinstance(v, Vehicle) for v in garage.vehicles)

        daily = garage.vehicles[0]
        assert daily.name == "Daily"
        assert daily.year == 2015
        assert daily.current_mileage == 42000

    def test_loads_records(self, garage_file):
        daily = load_garage(garage_file).get_vehicle("v1")

        assert len(daily.mileage_log) == 2
        assert all(isinstance(e, MileageEntry) for e in daily.mileage_log)
        assert daily.mileage_log[1].notes == "fill-up"

        assert len(daily.maintenance) == 2
        assert all(isinstance(e, MaintenanceEvent) for e in daily.maintenance)
        assert daily.maintenance[0].id == "e1"
        assert daily.maintenance[0].notes == "5W-30"
        assert daily.maintenance[1].type == "Brake Pads"

    def test_unquoted_dates_become_strings(self, garage_file):
        daily = load_garage(garage_file).get_vehicle("v1")
        assert daily.mileage_log[1].date == "2025-03-01"

    def test_vehicle_without_records(self, garage_file):
        truck = load_garage(garage_file).get_vehicle("v2")
        assert truck.mileage_log == []
        assert truck.maintenance == []
        assert truck.year is None
        assert truck.current_mileage == 0

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        garage = load_garage(path)
        assert garage.vehicles == []
        assert garage.active_vehicle_id is None

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_garage(tmp_path / "missing.yaml")


# =============================================================================
# Vehicle write tests
# =============================================================================


class TestVehicleWrites:
    """Tests for creating, updating and removing vehicles."""

    def test_create_garage(self, tmp_path):
        path = tmp_path / "new.yaml"
        create_garage(path)
        garage = load_garage(path)
        assert garage.vehicles == []

    def test_add_first_vehicle_becomes_active(self, tmp_path):
        path = tmp_path / "new.yaml"
        create_garage(path)
        vehicle = create_vehicle("Daily", "Subaru", "BRZ", year=2015, current_mileage=100)

        add_vehicle(path, vehicle)

        garage = load_garage(path)
        assert garage.active_vehicle_id == vehicle.id
        loaded = garage.get_vehicle(vehicle.id)
        assert loaded.name == "Daily"
        assert loaded.current_mileage == 100
        assert loaded.created_at == vehicle.created_at

    def test_add_vehicle_keeps_active_unless_asked(self, garage_file):
        vehicle = create_vehicle("Spare", "Honda", "Fit")
        add_vehicle(garage_file, vehicle)
        assert load_garage(garage_file).active_vehicle_id == "v1"

        other = create_vehicle("Other", "Honda", "Civic")
        add_vehicle(garage_file, other, make_active=True)
        assert load_garage(garage_file).active_vehicle_id == other.id

    def test_update_vehicle_meta(self, garage_file):
        update_vehicle_meta(garage_file, "v2", name=" Work Truck ", year=2019)
        data = raw(garage_file)
        truck = data["vehicles"][1]
        assert truck["name"] == "Work Truck"
        assert truck["year"] == 2019
        assert truck["make"] == "Ford"
        assert "updatedAt" in truck

    def test_delete_vehicle_removes_records(self, garage_file):
        delete_vehicle(garage_file, "v1")
        data = raw(garage_file)
        assert [v["id"] for v in data["vehicles"]] == ["v2"]
        assert data["activeVehicle"] is None

    def test_delete_unknown_vehicle(self, garage_file):
        with pytest.raises(KeyError):
            delete_vehicle(garage_file, "nope")

    def test_set_active_vehicle(self, garage_file):
        set_active_vehicle(garage_file, "v2")
        assert load_garage(garage_file).active_vehicle_id == "v2"
        set_active_vehicle(garage_file, None)
        assert load_garage(garage_file).active_vehicle_id is None

    def test_set_active_unknown(self, garage_file):
        with pytest.raises(KeyError):
            set_active_vehicle(garage_file, "nope")

    def test_preserves_other_vehicles(self, garage_file):
        update_current_mileage(garage_file, "v2", 12000)
        daily = load_garage(garage_file).get_vehicle("v1")
        assert len(daily.maintenance) == 2
        assert len(daily.mileage_log) == 2


# =============================================================================
# Mileage write tests
# =============================================================================


class TestMileageWrites:
    """Tests for mileage updates."""

    def test_update_current_mileage(self, garage_file):
        update_current_mileage(garage_file, "v1", 43000)
        assert load_garage(garage_file).get_vehicle("v1").current_mileage == 43000

    def test_add_mileage_entry_raises_current(self, garage_file):
        add_mileage_entry(garage_file, "v1", MileageEntry("2025-03-08", 42400))
        daily = load_garage(garage_file).get_vehicle("v1")
        assert daily.mileage_log[-1].mileage == 42400
        assert daily.current_mileage == 42400

    def test_add_lower_mileage_entry_keeps_current(self, garage_file):
        add_mileage_entry(garage_file, "v1", MileageEntry("2025-01-20", 40500))
        daily = load_garage(garage_file).get_vehicle("v1")
        assert len(daily.mileage_log) == 3
        assert daily.current_mileage == 42000

    def test_lower_entry_without_stored_current_mileage(self, tmp_path):
        """Compares against the highest reading when currentMileage is absent."""
        path = tmp_path / "garage.yaml"
        path.write_text(
            "vehicles:\n"
            "  - id: v1\n"
            "    name: Daily\n"
            "    make: Subaru\n"
            "    model: BRZ\n"
            "    mileageLog:\n"
            "      - {date: '2025-02-01', mileage: 50000}\n"
        )
        add_mileage_entry(path, "v1", MileageEntry("2025-01-15", 45000))

        assert "currentMileage" not in raw(path)["vehicles"][0]
        assert load_garage(path).get_vehicle("v1").current_mileage == 50000

        add_mileage_entry(path, "v1", MileageEntry("2025-03-01", 51000))
        assert raw(path)["vehicles"][0]["currentMileage"] == 51000

    def test_add_mileage_entry_to_vehicle_without_log(self, garage_file):
        add_mileage_entry(garage_file, "v2", MileageEntry("2025-03-01", 800))
        truck = load_garage(garage_file).get_vehicle("v2")
        assert len(truck.mileage_log) == 1
        assert truck.current_mileage == 800

    def test_unknown_vehicle(self, garage_file):
        with pytest.raises(KeyError):
            add_mileage_entry(garage_file, "nope", MileageEntry("2025-03-01", 1))


# =============================================================================
# Maintenance write tests
# =============================================================================


class TestMaintenanceWrites:
    """Tests for maintenance event add/update/delete."""

    def test_add_assigns_id(self, garage_file):
        event = MaintenanceEvent("oil_change", "2025-03-02", 42000, notes="0W-20")
        event_id = add_maintenance_event(garage_file, "v1", event)

        assert event_id and event.id == event_id
        daily = load_garage(garage_file).get_vehicle("v1")
        assert daily.maintenance[-1].id == event_id
        assert daily.maintenance[-1].notes == "0W-20"

    def test_add_keeps_existing_id(self, garage_file):
        event = MaintenanceEvent("oil_change", "2025-03-02", 42000, id="mine")
        assert add_maintenance_event(garage_file, "v2", event) == "mine"

    def test_add_omits_none_notes(self, garage_file):
        add_maintenance_event(garage_file, "v1", MaintenanceEvent("oil_change", "2025-03-02", 42000))
        entry = raw(garage_file)["vehicles"][0]["maintenance"][-1]
        assert "notes" not in entry

    def test_update_keeps_id(self, garage_file):
        update_maintenance_event(
            garage_file, "v1", 0, MaintenanceEvent("oil_change", "2025-01-02", 40100)
        )
        event = load_garage(garage_file).get_vehicle("v1").maintenance[0]
        assert event.id == "e1"
        assert event.date == "2025-01-02"
        assert event.mileage == 40100

    def test_update_out_of_range(self, garage_file):
        with pytest.raises(IndexError):
            update_maintenance_event(
                garage_file, "v1", 5, MaintenanceEvent("oil_change", "2025-01-02")
            )

    def test_delete(self, garage_file):
        delete_maintenance_event(garage_file, "v1", 0)
        daily = load_garage(garage_file).get_vehicle("v1")
        assert [e.id for e in daily.maintenance] == ["e2"]

    def test_delete_out_of_range(self, garage_file):
        with pytest.raises(IndexError):
            delete_maintenance_event(garage_file, "v2", 0)
        with pytest.raises(IndexError):
            delete_maintenance_event(garage_file, "v1", -1)


# =============================================================================
# Garage note tests
# =============================================================================


class TestGarageNotes:
    """Tests for garage note load/add/update/resolve/delete."""

    def test_loads_notes(self, garage_file):
        daily = load_garage(garage_file).get_vehicle("v1")

        assert len(daily.garage_notes) == 2
        assert all(isinstance(n, GarageNote) for n in daily.garage_notes)
        squeal = daily.garage_notes[0]
        assert squeal.category == "heard"
        assert squeal.date_noticed == "2025-02-20"
        assert squeal.is_intermittent is True
        assert squeal.conditions == {"driving": True, "weather": "rain"}
        assert [n.id for n in daily.open_notes] == ["n1"]

    def test_vehicle_without_notes(self, garage_file):
        assert load_garage(garage_file).get_vehicle("v2").garage_notes == []

    def test_add_note(self, garage_file):
        note = create_garage_note(
            " Burning smell after highway drive ",
            category="smelled",
            conditions={"driving": True, "temperature": "hot", "weather": None},
        )
        note_id = add_garage_note(garage_file, "v2", note)

        saved = raw(garage_file)["vehicles"][1]["garageNotes"][0]
        assert saved["id"] == note_id
        assert saved["text"] == "Burning smell after highway drive"
        assert saved["resolved"] is False
        assert saved["conditions"] == {"driving": True, "temperature": "hot"}
        assert "dateNoticed" not in saved
        assert "isIntermittent" not in saved

    def test_add_assigns_id_and_timestamps(self, garage_file):
        note = GarageNote("Rattle over bumps", "heard")
        note_id = add_garage_note(garage_file, "v1", note)

        loaded = load_garage(garage_file).get_vehicle("v1").get_note(note_id)
        assert loaded.text == "Rattle over bumps"
        assert loaded.created_at and loaded.created_at == loaded.updated_at

    def test_update_only_given_fields(self, garage_file):
        update_garage_note(garage_file, "v1", "n1", text="Squeal on cold mornings")
        squeal = raw(garage_file)["vehicles"][0]["garageNotes"][0]
        assert squeal["text"] == "Squeal on cold mornings"
        assert squeal["category"] == "heard"
        assert squeal["conditions"]["weather"] == "rain"
        assert "updatedAt" in squeal

    def test_resolve_and_reopen(self, garage_file):
        resolve_garage_note(garage_file, "v1", "n1")
        assert load_garage(garage_file).get_vehicle("v1").open_notes == []

        resolve_garage_note(garage_file, "v1", "n2", resolved=False)
        open_ids = [n.id for n in load_garage(garage_file).get_vehicle("v1").open_notes]
        assert open_ids == ["n2"]

    def test_delete_note(self, garage_file):
        delete_garage_note(garage_file, "v1", "n2")
        notes = load_garage(garage_file).get_vehicle("v1").garage_notes
        assert [n.id for n in notes] == ["n1"]

    def test_unknown_note(self, garage_file):
        with pytest.raises(KeyError):
            update_garage_note(garage_file, "v1", "nope", text="x")
        with pytest.raises(KeyError):
            delete_garage_note(garage_file, "v2", "n1")

    def test_delete_vehicle_drops_notes(self, garage_file):
        delete_vehicle(garage_file, "v1")
        assert all("garageNotes" not in v for v in raw(garage_file)["vehicles"])
