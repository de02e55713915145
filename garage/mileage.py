"""
Mileage averaging and oil-change estimates.

Pure helpers: nothing here reads files or keeps state. Bad input
(unparseable dates, missing mileage) is skipped or degrades to a
sentinel value (0, None, "Unknown") instead of raising.
"""

import math
from datetime import date, datetime, timedelta, timezone
from numbers import Real
from typing import Any, Iterable, List, Optional, Tuple

from dateutil.parser import isoparse

SECONDS_PER_DAY = 24 * 60 * 60
DAYS_IN_WEEK = 7
RECENT_WINDOW_DAYS = 28
DEFAULT_OIL_CHANGE_INTERVAL = 5000
OIL_CHANGE = "oil_change"


def normalize_event_type(value: Any) -> str:
    """Map a display label like 'Oil Change' to its tag ('oil_change')."""
    if not isinstance(value, str):
        return ""
    return "_".join(value.strip().lower().replace("-", " ").split())


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO date or datetime into a naive UTC datetime.

    Date-only strings are midnight UTC. Returns None if unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = isoparse(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_iso_date(value: Any) -> Optional[str]:
    """
    Normalize a user-supplied date to 'YYYY-MM-DD' (UTC).

    Only strings and dates are accepted. Returns None if unparseable.
    """
    if not isinstance(value, (str, date)):
        return None
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.date().isoformat()


def utc_now() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def timestamp_now() -> str:
    """ISO timestamp in UTC with millisecond precision, e.g. '...T12:00:00.000Z'."""
    return utc_now().isoformat(timespec="milliseconds") + "Z"


def round_half_up(value: float) -> int:
    """Round .5 toward positive infinity (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if not math.isfinite(value):
        return None
    return value


def _dated_readings(entries: Iterable[Any]) -> List[Tuple[datetime, float]]:
    """Extract (timestamp, mileage) pairs, newest first, skipping bad entries."""
    readings = []
    for entry in entries or []:
        timestamp = parse_timestamp(getattr(entry, "date", None))
        mileage = _as_number(getattr(entry, "mileage", None))
        if timestamp is None or mileage is None:
            continue
        readings.append((timestamp, mileage))
    # Stable sort keeps input order for entries on the same date
    return sorted(readings, key=lambda r: r[0], reverse=True)


def _weekly_rate(readings: List[Tuple[datetime, float]]) -> int:
    """Weekly rate between the newest (first) and oldest (last) readings."""
    newest_date, newest_miles = readings[0]
    oldest_date, oldest_miles = readings[-1]
    days_diff = max(1, (newest_date - oldest_date).total_seconds() / SECONDS_PER_DAY)
    mileage_diff = newest_miles - oldest_miles
    return round_half_up(mileage_diff / days_diff * DAYS_IN_WEEK)


def calc_weekly_mileage_avg(
    entries: Iterable[Any], now: Optional[datetime] = None
) -> int:
    """
    Calculate the weekly mileage average from dated odometer readings.

    Uses readings from the last 4 weeks when there are at least two of
    them, otherwise the full date range. Returns 0 with fewer than two
    usable readings.
    """
    readings = _dated_readings(entries)
    if len(readings) < 2:
        return 0

    now = parse_timestamp(now) or utc_now()
    window_start = now - timedelta(days=RECENT_WINDOW_DAYS)
    recent = [r for r in readings if r[0] >= window_start]

    if len(recent) < 2:
        # Not enough recent data, use everything
        return _weekly_rate(readings)
    return _weekly_rate(recent)


def last_oil_change(events: Iterable[Any]) -> Optional[Any]:
    """The oil-change event with the highest mileage, or None."""
    oil_changes = [
        e
        for e in events or []
        if normalize_event_type(getattr(e, "type", None)) == OIL_CHANGE
        and _as_number(getattr(e, "mileage", None)) is not None
    ]
    if not oil_changes:
        return None
    return max(oil_changes, key=lambda e: e.mileage)


def calc_miles_until_oil_change(
    current_mileage: Any,
    maintenance_events: Iterable[Any],
    interval_miles: float = DEFAULT_OIL_CHANGE_INTERVAL,
) -> Optional[float]:
    """
    Calculate miles until the next oil change.

    None when no oil change is on record. Never negative: an overdue
    change reports 0.
    """
    current = _as_number(current_mileage)
    if current is None:
        return None
    last = last_oil_change(maintenance_events)
    if last is None:
        return None
    miles_since_last = current - last.mileage
    return max(0, interval_miles - miles_since_last)


def estimate_days_until_oil_change(
    miles_remaining: Optional[float], weekly_mileage_avg: Optional[float]
) -> Optional[int]:
    """Estimate days until the next oil change from the weekly average."""
    weekly = _as_number(weekly_mileage_avg)
    remaining = _as_number(miles_remaining)
    if weekly is None or weekly <= 0 or remaining is None:
        return None
    daily_avg = weekly / DAYS_IN_WEEK
    return round_half_up(remaining / daily_avg)


def format_miles_remaining(miles: Optional[float]) -> str:
    """Format miles remaining for display."""
    if miles is None:
        return "Unknown"
    if miles <= 0:
        return "Overdue!"
    # Up to three fraction digits, trailing zeros dropped
    text = f"{miles:,.3f}".rstrip("0").rstrip(".")
    return f"{text} miles"


def format_days_remaining(days: Optional[int]) -> str:
    """Format days remaining for display."""
    if days is None:
        return ""
    if days <= 0:
        return "Overdue!"
    if days == 1:
        return "1 day"
    if days < DAYS_IN_WEEK:
        return f"{days} days"
    weeks = round_half_up(days / DAYS_IN_WEEK)
    if weeks == 1:
        return "~1 week"
    return f"~{weeks} weeks"
