"""Tests for text edits over signal set documents."""

from __future__ import annotations

import json

from obdlint.document import (
    apply_edits,
    format_filter_inline,
    parse_tree,
    removal_edit,
    replace_node_edit,
)
from obdlint.models import Filter, TextEdit


def _apply(text: str, *edits: TextEdit) -> str:
    updated, skipped = apply_edits(text, edits)
    assert skipped == []
    return updated


def test_removing_middle_array_element_keeps_valid_json() -> None:
    text = '[\n  {"a": 1},\n  {"b": 2},\n  {"c": 3}\n]'
    root = parse_tree(text)

    updated = _apply(text, removal_edit(root.children[1]))

    assert json.loads(updated) == [{"a": 1}, {"c": 3}]


def test_removing_last_array_element_takes_preceding_comma() -> None:
    text = '[{"a": 1}, {"b": 2}]'
    root = parse_tree(text)

    updated = _apply(text, removal_edit(root.children[1]))

    assert updated == '[{"a": 1}]'


def test_removing_only_property_leaves_empty_object() -> None:
    text = '{"dbgfilter": {"to": 2018}}'
    root = parse_tree(text)

    updated = _apply(text, removal_edit(root.find_property("dbgfilter")))

    assert json.loads(updated) == {}


def test_removing_first_property() -> None:
    text = '{"hdr": "7E0", "dbgfilter": {"to": 2018}, "freq": 1}'
    root = parse_tree(text)

    updated = _apply(text, removal_edit(root.find_property("hdr")))

    assert json.loads(updated) == {"dbgfilter": {"to": 2018}, "freq": 1}


def test_format_filter_inline_uses_canonical_order() -> None:
    rendered = format_filter_inline(Filter(to=2018, from_=2022, years=[2020]))

    assert rendered == '{ "to": 2018, "years": [2020], "from": 2022 }'
    assert format_filter_inline(Filter()) == "{}"


def test_apply_edits_skips_overlaps_and_applies_back_to_front() -> None:
    text = '{"a": "x", "b": "y"}'
    root = parse_tree(text)
    first = replace_node_edit(root.get("a"), '"one"')
    conflicting = TextEdit(offset=root.get("a").offset, length=3, new_text='"two"')
    second = replace_node_edit(root.get("b"), '"three"')

    updated, skipped = apply_edits(text, [second, first, conflicting])

    assert json.loads(updated) == {"a": "one", "b": "three"}
    assert skipped == [conflicting]


def test_apply_edits_deduplicates_identical_edits() -> None:
    text = '["a", "b"]'
    root = parse_tree(text)
    edit = removal_edit(root.children[0])

    assert _apply(text, edit, edit) == '["b"]'
