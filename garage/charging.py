"""
Charging-system measurement rules.

Normalizes a single charging-voltage reading into one of four labels:
- OK: 13.2 V up to (not including) 14.8 V
- LOW: below 13.2 V
- HIGH: 14.8 V and above
- UNKNOWN: no usable reading, or the vehicle was not under load

Under-load means headlights, blower and rear defroster are all on at the
same time. A partial load context never produces a voltage verdict.

This module does not score, diagnose or make safety calls.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional

CHARGING_VOLTAGE_OK_MIN = 13.2
CHARGING_VOLTAGE_HIGH_MIN = 14.8

CHARGING_SYSTEM = "charging"
STRONG = "strong"

# Direct dependents a strong charging measurement may override (one hop).
EXCEPTION_DEPENDENTS = ("battery",)


class ChargingStatus(Enum):
    """Classification of a charging-voltage reading."""

    OK = "OK"
    LOW = "LOW"
    HIGH = "HIGH"
    UNKNOWN = "UNKNOWN"


@dataclass
class ChargingMeasurement:
    """A voltage reading and the electrical load active when it was taken."""

    voltage: Any
    headlights: bool = False
    blower: bool = False
    rear_defroster: bool = False

    @property
    def under_load(self) -> bool:
        return _is_under_load(self.headlights, self.blower, self.rear_defroster)

    @classmethod
    def from_dict(cls, dct: Mapping[str, Any]) -> "ChargingMeasurement":
        """
        Build a measurement from a loosely-shaped mapping.

        Load flags may sit at the top level or under a "load" key, with
        either camelCase or snake_case names for the defroster.
        """
        load = dct.get("load")
        if not isinstance(load, Mapping):
            load = dct
        return cls(
            voltage=dct.get("voltage"),
            headlights=load.get("headlights", False),
            blower=load.get("blower", False),
            rear_defroster=load.get(
                "rearDefroster", load.get("rear_defroster", False)
            ),
        )


@dataclass
class MeasurementException:
    """One-hop exception eligibility for a measurement."""

    eligible: bool
    allowed_dependents: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


def _is_under_load(headlights: Any, blower: Any, rear_defroster: Any) -> bool:
    # Only real booleans count; 1, "yes" and friends are not a load context.
    return headlights is True and blower is True and rear_defroster is True


def _as_voltage(value: Any) -> Optional[float]:
    """Return a finite float voltage, or None if the value is unusable."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def classify_voltage(voltage: float) -> ChargingStatus:
    """Classify a finite voltage against the charging thresholds."""
    if voltage >= CHARGING_VOLTAGE_HIGH_MIN:
        return ChargingStatus.HIGH
    if voltage >= CHARGING_VOLTAGE_OK_MIN:
        return ChargingStatus.OK
    return ChargingStatus.LOW


def classify_charging_voltage(measurement: Any) -> ChargingStatus:
    """
    Classify a charging measurement taken under load.

    Accepts a ChargingMeasurement, a mapping (see
    ChargingMeasurement.from_dict) or anything else. Never raises;
    anything that is not a finite reading under full load is UNKNOWN.
    """
    if isinstance(measurement, Mapping):
        measurement = ChargingMeasurement.from_dict(measurement)
    if not isinstance(measurement, ChargingMeasurement):
        return ChargingStatus.UNKNOWN

    if not measurement.under_load:
        return ChargingStatus.UNKNOWN

    voltage = _as_voltage(measurement.voltage)
    if voltage is None:
        return ChargingStatus.UNKNOWN
    return classify_voltage(voltage)


def evaluate_measurement(system: Any, measurement: Any) -> ChargingStatus:
    """Evaluate a measurement for a named system. Only charging is supported."""
    if system != CHARGING_SYSTEM:
        return ChargingStatus.UNKNOWN
    return classify_charging_voltage(measurement)


def check_measurement_exception(strength: Any) -> MeasurementException:
    """
    Report whether a measurement may override its direct dependents.

    Only a "strong" measurement is eligible, and then only for the
    battery. This is an eligibility flag, not a verdict.
    """
    if strength == STRONG:
        return MeasurementException(
            eligible=True,
            allowed_dependents=list(EXCEPTION_DEPENDENTS),
            notes=[
                "Strong measurement: exception applies.",
                "One hop only: may override direct dependents, nothing further.",
            ],
        )
    return MeasurementException(
        eligible=False,
        allowed_dependents=[],
        notes=[
            "Exception requires a strong measurement.",
            f"Measurement strength was {strength!r}.",
        ],
    )
