"""Tests for map key, unit, and path rules."""

from __future__ import annotations

import json

from obdlint.rules import MapKeyNumericalRule, SignalPathSuggestionRule, SuggestedMetricValidationRule
from obdlint.rules.map_keys import hex_key_to_decimal
from obdlint.rules.path_suggestion import suggest_path
from tests._fixtures.documents import apply_fix, command, document, lint_with, signal


def test_hex_key_to_decimal() -> None:
    assert hex_key_to_decimal("0A") == "10"
    assert hex_key_to_decimal("FF") == "255"
    assert hex_key_to_decimal("on") is None


def test_map_key_rule_converts_first_hex_key() -> None:
    doc = document(
        [command(signals=[signal("GEAR", fmt={"map": {"0": "Park", "0A": "Drive", "0B": "Sport"}})])]
    )

    results = lint_with(MapKeyNumericalRule(), doc).results

    assert len(results) == 1
    assert results[0].message.endswith('Found: "0A", "0B"')
    assert doc.text[results[0].offset : results[0].offset + results[0].length] == '"0A"'
    fixed = json.loads(apply_fix(doc, results[0]))
    assert list(fixed["commands"][0]["signals"][0]["fmt"]["map"]) == ["0", "10", "0B"]


def test_map_key_rule_is_flag_only_on_collision() -> None:
    doc = document([command(signals=[signal("GEAR", fmt={"map": {"10": "Drive", "A": "Park"}})])])

    results = lint_with(MapKeyNumericalRule(), doc).results

    assert len(results) == 1
    assert results[0].suggestion is None


def test_map_and_unit_rules_skip_signals_without_those_fields() -> None:
    doc = document(
        [
            command(
                signals=[
                    signal("GEAR", fmt={"map": ["Park", "Drive"]}),
                    signal("SPD", bix=8, suggestedMetric="speed"),
                ]
            )
        ]
    )

    assert lint_with(MapKeyNumericalRule(), doc).results == []
    assert lint_with(SuggestedMetricValidationRule(), doc).results == []


def test_metric_unit_mismatch_is_flag_only() -> None:
    doc = document(
        [
            command(
                signals=[
                    signal("ODO", name="Odometer", suggestedMetric="odometer", fmt={"unit": "celsius"}),
                    signal("SPD", bix=8, suggestedMetric="speed", fmt={"unit": "kilometersPerHour"}),
                ]
            )
        ]
    )

    results = lint_with(SuggestedMetricValidationRule(), doc).results

    assert len(results) == 1
    assert 'Found: "celsius" (temperature unit)' in results[0].message
    assert results[0].suggestion is None


def test_suggest_path_matches_short_keywords_as_tokens() -> None:
    assert suggest_path("AC_STATUS") == "Climate"
    assert suggest_path("HV_PACK_VOLTAGE") == "Electrical"
    assert suggest_path("FRONT_DOOR_OPEN") == "Doors"
    assert suggest_path("UNRELATED") is None


def test_path_rule_suggests_replacement() -> None:
    doc = document([command(signals=[signal("ENGINE_RPM", path="Misc")])])

    results = lint_with(SignalPathSuggestionRule(), doc).results

    assert len(results) == 1
    assert results[0].suggestion.title == 'Change path to "Engine"'
    fixed = json.loads(apply_fix(doc, results[0]))
    assert fixed["commands"][0]["signals"][0]["path"] == "Engine"


def test_path_rule_passes_matching_path() -> None:
    doc = document([command(signals=[signal("ENGINE_RPM", path="Engine")])])

    assert lint_with(SignalPathSuggestionRule(), doc).results == []
