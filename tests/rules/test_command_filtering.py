"""Tests for mode 01 and EV command filtering."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from obdlint.rules import EvCommandFilteringRule, Mode01FilteringRule, VehicleType, detect_vehicle_type
from obdlint.rules.vehicle_type import is_ev_command, model_indicator
from tests._fixtures.documents import apply_fix, command, document, lint_with, signal


def _ice_commands() -> List[Dict[str, Any]]:
    return [
        command(hdr="7E0", cmd={"22": "F40C"}, signals=[signal("ENGINE_RPM", name="Engine speed")]),
        command(hdr="7E0", cmd={"22": "F410"}, signals=[signal("MAF_RATE", name="Mass air flow")]),
        command(hdr="7E0", cmd={"22": "F405"}, signals=[signal("FUEL_TEMP", name="Fuel temperature")]),
        command(hdr="7E4", cmd={"22": "4801"}, signals=[signal("HVBAT_SOC", name="High voltage battery charge")]),
    ]


def test_mode01_command_is_flagged_with_removal() -> None:
    doc = document(
        [
            command(cmd={"01": "0C"}, signals=[signal("RPM")]),
            command(cmd={"22": "1100"}, signals=[signal("OTHER")]),
        ]
    )

    results = lint_with(Mode01FilteringRule(), doc).results

    assert len(results) == 1
    assert results[0].suggestion.title == "Remove Mode 01 command"
    remaining = json.loads(apply_fix(doc, results[0]))
    assert [item["cmd"] for item in remaining["commands"]] == [{"22": "1100"}]


def test_model_indicator_matches_short_tokens_only_whole() -> None:
    assert model_indicator("Ford-F-150-Lightning", ("lightning",)) == "lightning"
    assert model_indicator("Chevrolet-Bolt-EV", ("ev",)) == "ev"
    assert model_indicator("Chevrolet-Chevelle", ("ev",)) is None


def test_detect_vehicle_type_prefers_model_name() -> None:
    doc = document(_ice_commands())

    assert detect_vehicle_type("Toyota-Prius", doc.commands) is VehicleType.EV
    assert detect_vehicle_type("Ford-Mustang-V8", []) is VehicleType.ICE
    assert detect_vehicle_type(None, []) is VehicleType.UNKNOWN


def test_detect_vehicle_type_from_command_ratios() -> None:
    ice = document(_ice_commands()[:3])
    hybrid = document(_ice_commands())

    assert detect_vehicle_type(None, ice.commands) is VehicleType.ICE
    assert detect_vehicle_type(None, hybrid.commands) is VehicleType.HYBRID


def test_ev_commands_flagged_in_ice_signalset() -> None:
    doc = document(_ice_commands())
    rule = EvCommandFilteringRule(model_name="Ford-F-150-V8")

    results = lint_with(rule, doc).results

    assert len(results) == 1
    assert is_ev_command(doc.commands[3])
    assert results[0].message == (
        "EV-specific command detected in ICE vehicle signalset: 7E4.224801. Consider removing this command."
    )
    remaining = json.loads(apply_fix(doc, results[0]))
    assert len(remaining["commands"]) == 3


def test_ev_rule_silent_for_non_ice_documents() -> None:
    doc = document(_ice_commands())

    assert lint_with(EvCommandFilteringRule(model_name="Nissan-Leaf"), doc).results == []
