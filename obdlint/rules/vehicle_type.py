"""Classify a signal set as EV, ICE, hybrid, or unknown."""

from __future__ import annotations

from enum import Enum
import json
import re
from typing import Optional, Sequence

from ..document.model import Command
from ..logging import get_logger

logger = get_logger("vehicle_type")


class VehicleType(str, Enum):
    EV = "EV"
    ICE = "ICE"
    HYBRID = "HYBRID"
    UNKNOWN = "UNKNOWN"


EV_COMMAND_PATTERNS: Sequence[str] = (
    "HVBAT_", "BAT_SOC", "CHRG_", "HEV_", "EHEV_", "ELECTRIC", "BATTERY", "PLUG",
    "HYBRID", "SOC", "SOH", "KILOWATTHOUR", "KWH", "VOLT_BATTERY", "AMP_BATTERY",
)
EV_SIGNAL_PATTERNS: Sequence[str] = (
    "ischarging", "pluggedin", "stateofcharge", "electricrange", "stateofhealth",
    "batterytemperature", "batteryvoltage", "chargingstate", "hybridmode", "electricmode",
)
EV_MODEL_INDICATORS: Sequence[str] = (
    "lightning", "electric", "hybrid", "plug", "ev", "phev", "bev", "e-tron", "tesla",
    "leaf", "bolt", "volt", "prius", "ioniq", "mustang-mach-e", "rav4-hybrid", "camry-hybrid",
)
ICE_MODEL_INDICATORS: Sequence[str] = ("v6", "v8", "turbo", "diesel", "gas", "gasoline", "petrol")
ICE_PATTERNS: Sequence[str] = (
    "FUEL", "O2S", "CAT", "EVAP", "EGR", "MIS", "HTR", "SPARKADV", "MAF", "TP_", "FRP",
    "LONGFT", "SHRTFT", "FUEL_RDY", "FUEL_SUP", "O2S_RDY", "O2S_SUP", "EGR_RDY", "EGR_SUP",
    "EVAP_RDY", "EVAP_SUP", "MIS_RDY", "MIS_SUP", "HTR_RDY", "HTR_SUP", "FUELSYS",
    "LOAD_PCT", "RPM", "BARO", "CATEMP",
)

EV_RATIO_THRESHOLD = 0.1
HYBRID_ICE_RATIO_THRESHOLD = 0.1
ICE_RATIO_THRESHOLD = 0.05

_SHORT_INDICATOR_LENGTH = 3


def command_text(command: Command) -> str:
    cmd = command.cmd if isinstance(command.cmd, str) else json.dumps(command.cmd, separators=(",", ":"))
    return "_".join(part for part in (command.hdr, cmd, command.rax) if part)


def signal_text(command: Command) -> str:
    parts = []
    for signal in command.signals:
        parts.append(signal.id)
        if signal.name:
            parts.append(signal.name)
    return " ".join(parts)


def model_indicator(model_name: str, indicators: Sequence[str]) -> Optional[str]:
    """First indicator present in the model name.

    Short indicators such as `ev` or `v8` only match whole name tokens.
    """
    lowered = model_name.lower()
    tokens = set(re.split(r"[^a-z0-9]+", lowered))
    for indicator in indicators:
        if len(indicator) <= _SHORT_INDICATOR_LENGTH:
            if indicator in tokens:
                return indicator
        elif indicator in lowered:
            return indicator
    return None


def is_ev_command(command: Command) -> bool:
    text = f"{command_text(command)} {signal_text(command)}"
    upper = text.upper()
    if any(pattern in upper for pattern in EV_COMMAND_PATTERNS):
        return True
    lower = text.lower()
    return any(pattern in lower for pattern in EV_SIGNAL_PATTERNS)


def is_ice_command(command: Command) -> bool:
    upper = f"{command_text(command)} {signal_text(command)}".upper()
    return any(pattern in upper for pattern in ICE_PATTERNS)


def detect_vehicle_type(model_name: Optional[str], commands: Sequence[Command]) -> VehicleType:
    if model_name:
        indicator = model_indicator(model_name, EV_MODEL_INDICATORS)
        if indicator is not None:
            logger.debug("Model name indicator '%s' implies EV", indicator)
            return VehicleType.EV
        indicator = model_indicator(model_name, ICE_MODEL_INDICATORS)
        if indicator is not None:
            logger.debug("Model name indicator '%s' implies ICE", indicator)
            return VehicleType.ICE

    if not commands:
        return VehicleType.UNKNOWN

    ev_count = 0
    ice_count = 0
    for command in commands:
        if is_ev_command(command):
            ev_count += 1
        elif is_ice_command(command):
            ice_count += 1

    total = len(commands)
    ev_ratio = ev_count / total
    ice_ratio = ice_count / total
    logger.debug("Vehicle type scan: %d EV, %d ICE of %d commands", ev_count, ice_count, total)

    if ev_ratio > EV_RATIO_THRESHOLD:
        return VehicleType.HYBRID if ice_ratio > HYBRID_ICE_RATIO_THRESHOLD else VehicleType.EV
    if ice_ratio > ICE_RATIO_THRESHOLD:
        return VehicleType.ICE
    return VehicleType.UNKNOWN


def should_filter_ev_command(command: Command, vehicle_type: VehicleType) -> bool:
    return vehicle_type is VehicleType.ICE and is_ev_command(command)


__all__ = [
    "VehicleType",
    "detect_vehicle_type",
    "is_ev_command",
    "is_ice_command",
    "model_indicator",
    "should_filter_ev_command",
]
