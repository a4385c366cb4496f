"""Spelling checks for signal display names."""

from __future__ import annotations

import json
import re
from typing import Dict, FrozenSet, Optional, Tuple

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from ..document.edits import replace_node_edit
from ..document.model import SignalTarget
from ..document.syntax import JsonNode
from ..models import LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput

AUTOMOTIVE_WORDS: Tuple[str, ...] = (
    "battery", "voltage", "current", "temperature", "sensor", "engine", "throttle",
    "brake", "fuel", "hybrid", "electric", "transmission", "pressure", "level",
    "position", "status", "control", "controller", "system", "signal", "speed",
    "torque", "coolant", "intake", "exhaust", "ignition", "catalyst", "oxygen",
    "lambda", "manifold", "injector", "pump", "valve", "solenoid", "actuator",
    "clutch", "differential", "steering", "suspension", "airbag", "seatbelt",
    "traction", "stability", "cruise", "parking", "reverse", "neutral", "drive",
    "gear", "shift", "manual", "automatic", "turbo", "supercharger", "intercooler",
    "radiator", "thermostat", "alternator", "starter", "generator", "inverter",
    "converter", "charger", "diagnostic", "trouble", "fault", "error", "warning",
    "indicator", "dashboard", "gauge", "meter", "display", "bulb", "lamp",
    "switch", "button", "pedal", "lever", "knob", "dial", "selector", "minimum",
    "maximum", "average", "actual", "target", "requested", "available", "enabled",
    "disabled", "active", "inactive", "ready",
)

# Ordinary words common in signal names; never reported, never suggested.
COMMON_WORDS: FrozenSet[str] = frozenset(
    """
    a an and at by for from in of on or per the to with without
    left right front rear back inner outer upper lower middle center centre
    driver passenger side wheel tire tyre door window seat trunk hood roof mirror
    light lights high low open closed lock locked unlock unlocked state mode value
    count counter time total trip distance range odometer rate flow cell cells pack
    charge charging discharge plugged plug cable port input output min max avg
    degree degrees angle yaw pitch roll acceleration lateral longitudinal vertical
    request command set setting limit threshold remaining estimated energy power
    air water oil ambient cabin outside inside heater heated cooling cooled fan
    blower compressor vent defrost defog climate temp cycle lifetime number id
    on off yes no true false key start stop run running idle load demand
    shifter motor module unit regen regenerative wiper washer horn
    """.split()
)

COMMON_TYPOS: Dict[str, str] = {
    "batttery": "battery", "battrey": "battery", "baterry": "battery", "batery": "battery",
    "temperatur": "temperature", "temprature": "temperature", "tempature": "temperature",
    "temerature": "temperature",
    "voltge": "voltage", "volatge": "voltage", "vltage": "voltage",
    "curent": "current", "currnt": "current", "currant": "current",
    "senser": "sensor", "sensr": "sensor", "sensro": "sensor",
    "engin": "engine", "engien": "engine", "engne": "engine",
    "throttel": "throttle", "throtle": "throttle", "throtlle": "throttle",
    "brak": "brake", "breake": "brake", "braek": "brake",
    "feul": "fuel", "fule": "fuel", "fuell": "fuel",
    "hybrd": "hybrid", "hybird": "hybrid", "hybridd": "hybrid",
    "electrc": "electric", "elecric": "electric", "eletric": "electric",
    "transmision": "transmission", "transmissio": "transmission", "tranmission": "transmission",
    "presure": "pressure", "pressue": "pressure", "pressuure": "pressure",
    "levl": "level", "lvel": "level", "levle": "level",
    "postion": "position", "positon": "position", "positsion": "position",
    "staus": "status", "satatus": "status", "statsu": "status",
    "contrl": "control", "controol": "control", "controler": "controller",
    "systm": "system", "sytem": "system", "systme": "system",
    "singal": "signal", "signel": "signal", "signl": "signal",
    "spead": "speed", "speeed": "speed", "sped": "speed",
    "minimun": "minimum", "minumum": "minimum", "minimm": "minimum",
    "maximun": "maximum", "maxium": "maximum", "maximm": "maximum",
    "availabe": "available", "availible": "available", "avaialble": "available",
}

_WORD = re.compile(r"[A-Za-z]+")
_MIN_FUZZY_LENGTH = 4


def preserve_case(original: str, correction: str) -> str:
    if original.isupper():
        return correction.upper()
    if original[0].isupper():
        return correction[0].upper() + correction[1:].lower()
    return correction.lower()


class TypoDetector:
    """Finds the first misspelled word in a display name."""

    def __init__(
        self,
        vocabulary: Tuple[str, ...] = AUTOMOTIVE_WORDS,
        allowed: FrozenSet[str] = COMMON_WORDS,
        typos: Optional[Dict[str, str]] = None,
    ) -> None:
        self._vocabulary = tuple(vocabulary)
        self._known = frozenset(vocabulary) | allowed
        self._typos = dict(COMMON_TYPOS if typos is None else typos)

    def correction_for(self, word: str) -> Optional[str]:
        lowered = word.lower()
        if lowered in self._typos:
            return self._typos[lowered]
        if self._is_known(lowered):
            return None
        if lowered.endswith("s") and lowered[:-1] in self._typos:
            return self._typos[lowered[:-1]] + "s"
        if len(lowered) < _MIN_FUZZY_LENGTH:
            return None
        limit = min(2, len(lowered) // 3)
        if limit == 0:
            return None
        # Closest first; ties keep vocabulary order.
        matches = process.extract(
            lowered,
            self._vocabulary,
            scorer=Levenshtein.distance,
            score_cutoff=limit,
            limit=None,
        )
        for candidate, distance, _ in matches:
            if distance > 0:
                return candidate
        return None

    def find(self, text: str) -> Optional[Tuple[str, str]]:
        """Return `(word, correction)` for the first suspicious word."""
        for match in _WORD.finditer(text):
            word = match.group(0)
            # All-caps tokens are acronyms or identifiers.
            if len(word) > 1 and word.isupper():
                continue
            correction = self.correction_for(word)
            if correction is not None:
                return word, correction
        return None

    def _is_known(self, lowered: str) -> bool:
        if lowered in self._known:
            return True
        return lowered.endswith("s") and lowered[:-1] in self._known


def apply_correction(text: str, word: str, correction: str) -> str:
    pattern = re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)
    return pattern.sub(lambda match: preserve_case(match.group(0), correction), text)


class SignalNameTypoRule(Rule):
    capabilities = frozenset({Granularity.SIGNAL})

    def __init__(self, config: Optional[RuleConfig] = None, detector: Optional[TypoDetector] = None) -> None:
        super().__init__(config)
        self._detector = detector or TypoDetector()

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="signal-name-typo",
            name="Signal Name Typo Detection",
            description="Detects common typos in signal names and suggests corrections",
            severity=LintSeverity.WARNING,
        )

    def validate_signal(self, target: SignalTarget, node: JsonNode) -> RuleOutput:
        name_node = node.get("name")
        if not target.name or name_node is None:
            return None
        found = self._detector.find(target.name)
        if found is None:
            return None
        word, correction = found
        fixed_word = preserve_case(word, correction)
        corrected = apply_correction(target.name, word, correction)
        return self.result(
            f'Possible typo in signal name: "{word}" should be "{fixed_word}"',
            name_node,
            title=f'Fix typo: "{word}" -> "{fixed_word}"',
            edits=[replace_node_edit(name_node, json.dumps(corrected))],
        )


__all__ = [
    "AUTOMOTIVE_WORDS",
    "COMMON_TYPOS",
    "SignalNameTypoRule",
    "TypoDetector",
    "apply_correction",
    "preserve_case",
]
