"""Helpers for building signal set documents in rule tests."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Sequence

from obdlint.document import SignalSetDocument, apply_edits, parse_document
from obdlint.linter import LintReport, SignalLinter
from obdlint.models import LintResult
from obdlint.rules import Rule, RuleRegistry


def signal(signal_id: str, *, bix: int = 0, length: int = 8, **extra: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {"id": signal_id, "path": extra.pop("path", "Misc"), "name": extra.pop("name", "Value")}
    fmt: Dict[str, Any] = {"bix": bix, "len": length}
    fmt.update(extra.pop("fmt", {}))
    data["fmt"] = fmt
    data.update(extra)
    return data


def command(hdr: str = "7E0", cmd: Any = None, signals: Sequence[Mapping[str, Any]] = (), **extra: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {"hdr": hdr, "cmd": cmd if cmd is not None else {"22": "1100"}}
    data.update(extra)
    data["signals"] = list(signals)
    return data


def document(commands: List[Mapping[str, Any]], **extra: Any) -> SignalSetDocument:
    return parse_document(json.dumps({"commands": commands, **extra}, indent=2))


def lint_with(rule: Rule, doc: SignalSetDocument) -> LintReport:
    return SignalLinter(RuleRegistry([rule])).lint_document(doc)


def apply_fix(doc: SignalSetDocument, result: LintResult) -> str:
    assert result.suggestion is not None
    updated, skipped = apply_edits(doc.text, result.suggestion.edits)
    assert skipped == []
    return updated


__all__ = ["apply_fix", "command", "document", "lint_with", "signal"]
