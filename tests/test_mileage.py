#!/usr/bin/env python3
"""Tests for mileage averaging and oil-change helpers."""
from datetime import datetime, timezone

import pytest
from garage import (
    MaintenanceEvent,
    MileageEntry,
    calc_miles_until_oil_change,
    calc_weekly_mileage_avg,
    estimate_days_until_oil_change,
    format_days_remaining,
    format_miles_remaining,
)
from garage.mileage import (
    normalize_event_type,
    parse_timestamp,
    round_half_up,
    to_iso_date,
)

NOW = datetime(2025, 3, 1, 12, 0, 0)


class TestWeeklyMileageAvg:
    """Tests for calc_weekly_mileage_avg."""

    def test_no_entries(self):
        assert calc_weekly_mileage_avg([], now=NOW) == 0
        assert calc_weekly_mileage_avg(None, now=NOW) == 0

    def test_single_entry(self):
        assert calc_weekly_mileage_avg([MileageEntry("2025-02-20", 1000)], now=NOW) == 0

    def test_recent_window(self):
        """Two readings 14 days apart, 700 miles -> 350/week."""
        entries = [
            MileageEntry("2025-02-10", 10000),
            MileageEntry("2025-02-24", 10700),
        ]
        assert calc_weekly_mileage_avg(entries, now=NOW) == 350

    def test_recent_window_ignores_old_entries(self):
        """Entries older than 4 weeks are dropped when enough recent ones exist."""
        entries = [
            MileageEntry("2024-06-01", 0),
            MileageEntry("2025-02-10", 10000),
            MileageEntry("2025-02-24", 10700),
        ]
        assert calc_weekly_mileage_avg(entries, now=NOW) == 350

    def test_falls_back_to_full_range(self):
        """Fewer than two recent readings -> use the whole history."""
        entries = [
            MileageEntry("2025-01-01", 5000),
            MileageEntry("2025-01-29", 6000),
        ]
        # 1000 miles over 28 days = 250/week
        assert calc_weekly_mileage_avg(entries, now=NOW) == 250

    def test_fallback_with_one_recent_entry(self):
        entries = [
            MileageEntry("2025-01-01", 5000),
            MileageEntry("2025-02-26", 7000),
        ]
        # 2000 miles over 56 days = 250/week
        assert calc_weekly_mileage_avg(entries, now=NOW) == 250

    def test_reading_exactly_four_weeks_old_is_recent(self):
        """The window includes its start: now - 28 days counts as recent."""
        entries = [
            MileageEntry("2025-01-01", 0),
            MileageEntry("2025-02-01T12:00:00", 10000),
            MileageEntry("2025-02-15T12:00:00", 10700),
        ]
        # Recent pair: 700 miles over 14 days
        assert calc_weekly_mileage_avg(entries, now=NOW) == 350

    def test_reading_just_outside_window_falls_back(self):
        entries = [
            MileageEntry("2025-01-01", 0),
            MileageEntry("2025-02-01T11:59:59", 10000),
            MileageEntry("2025-02-15T12:00:00", 10700),
        ]
        # Full range: 10700 miles over 45.5 days
        assert calc_weekly_mileage_avg(entries, now=NOW) == 1646

    def test_input_order_does_not_matter(self):
        entries = [
            MileageEntry("2025-02-24", 10700),
            MileageEntry("2025-02-10", 10000),
            MileageEntry("2025-02-17", 10300),
        ]
        assert calc_weekly_mileage_avg(entries, now=NOW) == 350

    def test_same_day_clamps_to_one_day(self):
        """Zero-day span is treated as one day."""
        entries = [
            MileageEntry("2025-02-25", 1000),
            MileageEntry("2025-02-25", 1010),
        ]
        # Stable sort keeps 1000 first (newest), 1010 last: -10/day
        assert calc_weekly_mileage_avg(entries, now=NOW) == -70

    def test_rounds_half_up(self):
        # 1 mile over 2 days -> 3.5/week -> 4
        entries = [MileageEntry("2025-02-20", 100), MileageEntry("2025-02-22", 101)]
        assert calc_weekly_mileage_avg(entries, now=NOW) == 4

    def test_skips_unparseable_entries(self):
        entries = [
            MileageEntry("not a date", 99999),
            MileageEntry("2025-02-10", 10000),
            MileageEntry("2025-02-24", None),
            MileageEntry("2025-02-24", 10700),
        ]
        assert calc_weekly_mileage_avg(entries, now=NOW) == 350

    def test_only_bad_entries(self):
        entries = [MileageEntry("garbage", 1), MileageEntry(None, 2)]
        assert calc_weekly_mileage_avg(entries, now=NOW) == 0

    def test_timezone_aware_inputs(self):
        entries = [
            MileageEntry("2025-02-10T00:00:00Z", 10000),
            MileageEntry("2025-02-24T00:00:00+00:00", 10700),
        ]
        now = datetime(2025, 3, 1, tzinfo=timezone.utc)
        assert calc_weekly_mileage_avg(entries, now=now) == 350


class TestMilesUntilOilChange:
    """Tests for calc_miles_until_oil_change."""

    def test_no_oil_change_returns_none(self):
        events = [MaintenanceEvent("brake_pads", "2025-01-01", 40000)]
        assert calc_miles_until_oil_change(42000, events) is None
        assert calc_miles_until_oil_change(42000, []) is None

    def test_default_interval(self):
        events = [MaintenanceEvent("oil_change", "2025-01-01", 40000)]
        assert calc_miles_until_oil_change(42000, events) == 3000

    def test_custom_interval(self):
        events = [MaintenanceEvent("oil_change", "2025-01-01", 40000)]
        assert calc_miles_until_oil_change(42000, events, interval_miles=7500) == 5500

    def test_uses_highest_mileage_oil_change(self):
        events = [
            MaintenanceEvent("oil_change", "2025-01-01", 30000),
            MaintenanceEvent("oil_change", "2024-06-01", 40000),
            MaintenanceEvent("brake_pads", "2025-02-01", 41000),
        ]
        assert calc_miles_until_oil_change(42000, events) == 3000

    def test_overdue_clamps_to_zero(self):
        events = [MaintenanceEvent("oil_change", "2025-01-01", 30000)]
        assert calc_miles_until_oil_change(42000, events) == 0

    def test_display_label_counts_as_oil_change(self):
        events = [MaintenanceEvent("Oil Change", "2025-01-01", 40000)]
        assert calc_miles_until_oil_change(41000, events) == 4000

    def test_non_numeric_current_mileage(self):
        events = [MaintenanceEvent("oil_change", "2025-01-01", 40000)]
        assert calc_miles_until_oil_change(None, events) is None


class TestEstimateDays:
    """Tests for estimate_days_until_oil_change."""

    def test_non_positive_average(self):
        assert estimate_days_until_oil_change(1000, 0) is None
        assert estimate_days_until_oil_change(1000, -50) is None

    def test_estimate(self):
        # 350/week = 50/day; 1000 miles -> 20 days
        assert estimate_days_until_oil_change(1000, 350) == 20

    def test_rounds(self):
        # 100/week; 250 miles -> 17.5 days -> 18
        assert estimate_days_until_oil_change(250, 100) == 18

    def test_zero_remaining(self):
        assert estimate_days_until_oil_change(0, 350) == 0

    def test_unknown_remaining(self):
        assert estimate_days_until_oil_change(None, 350) is None


class TestFormatMilesRemaining:
    """Tests for format_miles_remaining."""

    def test_none(self):
        assert format_miles_remaining(None) == "Unknown"

    def test_overdue(self):
        assert format_miles_remaining(0) == "Overdue!"
        assert format_miles_remaining(-10) == "Overdue!"

    def test_thousands_separator(self):
        assert format_miles_remaining(3000) == "3,000 miles"
        assert format_miles_remaining(250) == "250 miles"

    def test_keeps_fractions(self):
        assert format_miles_remaining(1234.5) == "1,234.5 miles"
        assert format_miles_remaining(0.25) == "0.25 miles"
        assert format_miles_remaining(12.3456) == "12.346 miles"
        assert format_miles_remaining(4000.0) == "4,000 miles"


class TestFormatDaysRemaining:
    """Tests for format_days_remaining."""

    def test_none(self):
        assert format_days_remaining(None) == ""

    def test_overdue(self):
        assert format_days_remaining(0) == "Overdue!"
        assert format_days_remaining(-3) == "Overdue!"

    def test_days(self):
        assert format_days_remaining(1) == "1 day"
        assert format_days_remaining(6) == "6 days"

    def test_weeks(self):
        assert format_days_remaining(7) == "~1 week"
        assert format_days_remaining(10) == "~1 week"
        assert format_days_remaining(11) == "~2 weeks"
        assert format_days_remaining(60) == "~9 weeks"


class TestHelpers:
    """Tests for parsing and rounding helpers."""

    def test_normalize_event_type(self):
        assert normalize_event_type("Oil Change") == "oil_change"
        assert normalize_event_type("  oil_change ") == "oil_change"
        assert normalize_event_type("Oil-Change") == "oil_change"
        assert normalize_event_type(None) == ""

    def test_parse_timestamp(self):
        assert parse_timestamp("2025-01-15") == datetime(2025, 1, 15)
        assert parse_timestamp("2025-01-15T10:00:00+02:00") == datetime(2025, 1, 15, 8)
        assert parse_timestamp("nope") is None
        assert parse_timestamp(12345) is None

    def test_to_iso_date(self):
        assert to_iso_date("2025-03-01") == "2025-03-01"
        assert to_iso_date("2025-03-01T23:30:00-05:00") == "2025-03-02"
        assert to_iso_date("yesterday") is None
        assert to_iso_date(20250301) is None
        assert to_iso_date(None) is None

    @pytest.mark.parametrize(
        "value,expected", [(2.5, 3), (3.5, 4), (-2.5, -2), (2.49, 2), (0.0, 0)]
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected
