"""Unit vocabularies and the suggestedMetric to unit mapping."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

TEMPERATURE_UNITS = ("celsius", "fahrenheit", "kelvin")
PRESSURE_UNITS = ("bars", "psi", "kilopascal")
DISTANCE_UNITS = ("centimeters", "feet", "inches", "kilometers", "meters", "miles", "yards")
SPEED_UNITS = ("kilometersPerHour", "metersPerSecond", "milesPerHour")
TIME_UNITS = ("seconds", "minutes", "hours")
CURRENT_UNITS = ("amps", "kiloamps", "milliamps")
VOLTAGE_UNITS = ("volts", "kilovolts", "millivolts")
RESISTANCE_UNITS = ("ohms", "kiloohms", "megaohms", "milliohms", "microohms")
POWER_UNITS = ("watts", "kilowatts", "milliwatts")
ENERGY_UNITS = ("joules", "kilojoules", "kilowattHours", "wattHours")
BATTERY_UNITS = ("ampereHours", "kiloampereHours", "milliampereHours", "coulombs")
FREQUENCY_UNITS = (
    "hertz",
    "kilohertz",
    "megahertz",
    "gigahertz",
    "terahertz",
    "millihertz",
    "microhertz",
    "nanohertz",
    "framesPerSecond",
    "rpm",
)
VOLUME_UNITS = ("gallons", "liters")
TORQUE_UNITS = ("newtonMeters", "poundFoot", "inchPound")
FLOW_RATE_UNITS = ("gramsPerSecond", "kilogramsPerHour", "milligramsPerStroke")
ANGLE_UNITS = ("degrees", "radians")
BINARY_STATE_UNITS = ("offon", "noyes", "yesno")
MISC_UNITS = ("ascii", "gravity", "hex", "normal", "percent", "scalar", "unknown")

LEVEL_UNITS = ("percent", "liters", "gallons")

UNIT_GROUPS: Dict[str, Tuple[str, ...]] = {
    "temperature": TEMPERATURE_UNITS,
    "pressure": PRESSURE_UNITS,
    "distance": DISTANCE_UNITS,
    "speed": SPEED_UNITS,
    "time": TIME_UNITS,
    "current": CURRENT_UNITS,
    "voltage": VOLTAGE_UNITS,
    "resistance": RESISTANCE_UNITS,
    "power": POWER_UNITS,
    "energy": ENERGY_UNITS,
    "battery": BATTERY_UNITS,
    "frequency": FREQUENCY_UNITS,
    "volume": VOLUME_UNITS,
    "torque": TORQUE_UNITS,
    "flow_rate": FLOW_RATE_UNITS,
    "angle": ANGLE_UNITS,
    "binary": BINARY_STATE_UNITS,
    "misc": MISC_UNITS,
}

METRIC_UNITS: Dict[str, Tuple[str, ...]] = {
    "odometer": DISTANCE_UNITS,
    "electricRange": DISTANCE_UNITS,
    "fuelRange": DISTANCE_UNITS,
    "frontLeftTirePressure": PRESSURE_UNITS,
    "frontRightTirePressure": PRESSURE_UNITS,
    "rearLeftTirePressure": PRESSURE_UNITS,
    "rearRightTirePressure": PRESSURE_UNITS,
    "speed": SPEED_UNITS,
    "starterBatteryVoltage": VOLTAGE_UNITS,
    "fuelTankLevel": LEVEL_UNITS,
    "stateOfCharge": LEVEL_UNITS,
    "stateOfHealth": LEVEL_UNITS,
    "isCharging": BINARY_STATE_UNITS,
    "pluggedIn": BINARY_STATE_UNITS,
}


def units_for_metric(metric: str) -> Optional[Tuple[str, ...]]:
    """Allowed units for a suggestedMetric, or None when the metric is unconstrained."""
    return METRIC_UNITS.get(metric)


def unit_group(unit: str) -> Optional[str]:
    for name, units in UNIT_GROUPS.items():
        if unit in units:
            return name
    return None


__all__ = ["METRIC_UNITS", "UNIT_GROUPS", "unit_group", "units_for_metric"]
