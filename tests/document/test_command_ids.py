"""Tests for command identifier helpers."""

from __future__ import annotations

from obdlint.document import (
    create_command_id,
    flatten_cmd,
    normalize_cmd,
    normalize_command_id,
    strip_receive_filter,
)


def test_create_command_id_with_and_without_rax() -> None:
    assert create_command_id("7E0", {"22": "1100"}) == "7E0.221100"
    assert create_command_id("7E0", {"22": "1100"}, "7E8") == "7E0.7E8.221100"


def test_flatten_cmd_strips_separators_from_strings() -> None:
    assert flatten_cmd("22 11:00") == "221100"
    assert flatten_cmd({"22": "1100", "23": "01"}) == "221100,2301"


def test_normalize_cmd_groups_equivalent_payloads() -> None:
    assert normalize_cmd({"22": "1100"}) == "221100"
    assert normalize_cmd("221100") == "221100"
    assert normalize_cmd({"22": "1100", "23": "01"}) == '{"22":"1100","23":"01"}'


def test_normalize_command_id_drops_signal_and_property_suffixes() -> None:
    assert normalize_command_id("7E0.221100:RPM") == "7E0.221100"
    assert normalize_command_id("7E0.221100|dbgfilter") == "7E0.221100"
    assert normalize_command_id("7E0.221100") == "7E0.221100"


def test_strip_receive_filter_only_touches_three_part_ids() -> None:
    assert strip_receive_filter("7E0.7E8.221100") == "7E0.221100"
    assert strip_receive_filter("7E0.221100") == "7E0.221100"
    assert strip_receive_filter("A.B.C.D") == "A.B.C.D"
