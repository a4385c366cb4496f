"""Tests for rule dispatch in the signal linter."""

from __future__ import annotations

import json
import logging
from typing import List

import pytest

from obdlint.document import Command, JsonNode, Signal, SignalSetDocument
from obdlint.document.model import SignalTarget
from obdlint.linter import INVALID_COMMAND_RULE, PARSE_ERROR_RULE, SignalLinter
from obdlint.models import LintSeverity
from obdlint.rules import Granularity, Rule, RuleConfig, RuleOutput, RuleRegistry
from tests._fixtures.documents import command, document, signal


class _RecordingRule(Rule):
    capabilities = frozenset(Granularity)

    def __init__(self, calls: List[str], rule_id: str = "recording") -> None:
        super().__init__(
            RuleConfig(id=rule_id, name="Recording", description="", severity=LintSeverity.HINT)
        )
        self.calls = calls

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(id="recording", name="Recording", description="", severity=LintSeverity.HINT)

    def validate_document(self, document: SignalSetDocument) -> RuleOutput:
        self.calls.append("document")
        return None

    def validate_commands(self, commands_node: JsonNode, document: SignalSetDocument) -> RuleOutput:
        self.calls.append("commands")
        return None

    def validate_command(self, command: Command, node: JsonNode, signals: List[Signal]) -> RuleOutput:
        self.calls.append(f"command:{command.command_id}")
        return None

    def validate_signal(self, target: SignalTarget, node: JsonNode) -> RuleOutput:
        self.calls.append(f"signal:{target.id}")
        return self.result(f"seen {target.id}", node)


class _BrokenRule(Rule):
    capabilities = frozenset({Granularity.DOCUMENT})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(id="broken", name="Broken", description="", severity=LintSeverity.ERROR)

    def validate_document(self, document: SignalSetDocument) -> RuleOutput:
        raise RuntimeError("boom")


def test_dispatch_order() -> None:
    calls: List[str] = []
    doc = document(
        [
            command(cmd={"22": "1100"}, signals=[signal("A")]),
            command(cmd={"22": "1200"}, signals=[signal("B")]),
        ],
        signalGroups=[{"id": "GROUP", "matchingRegex": "A|B"}],
    )

    report = SignalLinter(RuleRegistry([_RecordingRule(calls)])).lint_document(doc)

    assert calls == [
        "document",
        "commands",
        "command:7E0.221100",
        "signal:A",
        "command:7E0.221200",
        "signal:B",
        "signal:GROUP",
    ]
    assert [result.message for result in report.results] == ["seen A", "seen B", "seen GROUP"]
    assert all(result.severity is LintSeverity.HINT for result in report.results)


def test_configured_severity_is_applied() -> None:
    calls: List[str] = []
    rule = _RecordingRule(calls)
    rule.configure(severity=LintSeverity.ERROR)
    doc = document([command(signals=[signal("A")])])

    report = SignalLinter(RuleRegistry([rule])).lint_document(doc)

    assert report.has_errors
    assert len(report.errors) == 1


def test_disabled_rules_are_not_run() -> None:
    calls: List[str] = []
    rule = _RecordingRule(calls)
    rule.configure(enabled=False)

    SignalLinter(RuleRegistry([rule])).lint_document(document([command(signals=[signal("A")])]))

    assert calls == []


def test_failing_rule_does_not_abort_pass(caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging.getLogger("obdlint"), "propagate", True)
    calls: List[str] = []
    registry = RuleRegistry([_BrokenRule(), _RecordingRule(calls)])

    with caplog.at_level(logging.ERROR, logger="obdlint"):
        report = SignalLinter(registry).lint_document(document([command(signals=[signal("A")])]))

    assert [result.message for result in report.results] == ["seen A"]
    assert "Rule 'broken' failed" in caplog.text


def test_parse_errors_become_a_single_result() -> None:
    report = SignalLinter(RuleRegistry([])).lint_text('{"commands": [')

    assert len(report.results) == 1
    assert report.results[0].rule_id == PARSE_ERROR_RULE
    assert report.results[0].severity is LintSeverity.ERROR
    assert report.document is None


def test_invalid_commands_are_reported_first() -> None:
    text = json.dumps({"commands": [{"hdr": "7E0", "signals": []}]}, indent=2)

    report = SignalLinter(RuleRegistry([])).lint_text(text)

    assert [result.rule_id for result in report.results] == [INVALID_COMMAND_RULE]
    assert report.has_errors
