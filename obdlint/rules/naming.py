"""Identifier and display-name style rules."""

from __future__ import annotations

import json
import re
from typing import Optional, Sequence

from ..document.edits import replace_node_edit
from ..document.model import SignalTarget
from ..document.syntax import JsonNode
from ..models import LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput

_ID_PATTERN = re.compile(r"^[A-Z0-9_]+$")
_ACRONYM_PATTERN = re.compile(r"^[A-Z0-9]+$")

COMMON_ACRONYMS: Sequence[str] = ("ABS", "BMS", "ECU", "PCM", "TCM", "EPS", "HVAC", "TPMS")


def snake_case_id(identifier: str) -> str:
    """Uppercase an identifier and replace anything outside `[A-Z0-9_]` with `_`."""
    upper = re.sub(r"\s+", "_", identifier.upper())
    return re.sub(r"[^A-Z0-9_]", "_", upper)


def is_acronym(word: str) -> bool:
    """All-caps alphanumerics, optionally pluralised with a trailing lowercase `s`."""
    if not word:
        return False
    if _ACRONYM_PATTERN.match(word):
        return True
    return len(word) > 1 and word.endswith("s") and bool(_ACRONYM_PATTERN.match(word[:-1]))


def to_sentence_case(text: str) -> str:
    words = text.split(" ")
    if words[0]:
        words[0] = words[0][0].upper() + words[0][1:]
    for index in range(1, len(words)):
        if not is_acronym(words[index]):
            words[index] = words[index].lower()
    return " ".join(words)


class SignalNamingConventionRule(Rule):
    capabilities = frozenset({Granularity.SIGNAL})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="signal-naming-convention",
            name="Signal Naming Convention",
            description="Signal IDs should use consistent naming conventions",
            severity=LintSeverity.ERROR,
        )

    def validate_signal(self, target: SignalTarget, node: JsonNode) -> RuleOutput:
        id_node = node.get("id")
        if id_node is None or _ID_PATTERN.match(target.id):
            return None
        suggested = snake_case_id(target.id)
        return self.result(
            "Signal IDs should use all uppercase letters, numbers, and underscores (SNAKE_CASE). "
            f'Found: "{target.id}"',
            id_node,
            title=f'Convert to SNAKE_CASE: "{suggested}"',
            edits=[replace_node_edit(id_node, json.dumps(suggested))],
        )


class SignalSentenceCaseRule(Rule):
    capabilities = frozenset({Granularity.SIGNAL})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="signal-sentence-case",
            name="Signal Sentence Case",
            description=(
                "Signal names should use sentence case (first word capitalized, "
                "remaining words lowercase), ignoring acronyms"
            ),
            severity=LintSeverity.INFORMATION,
        )

    def validate_signal(self, target: SignalTarget, node: JsonNode) -> RuleOutput:
        name_node = node.get("name")
        name = target.name
        if name_node is None or not name or not name.strip():
            return None
        expected = to_sentence_case(name)
        if expected == name:
            return None
        return self.result(
            f'Signal name "{name}" should use sentence case. Expected: "{expected}"',
            name_node,
            title=f'Convert to sentence case: "{expected}"',
            edits=[replace_node_edit(name_node, json.dumps(expected))],
        )


class AcronymAtStartOfSignalNameRule(Rule):
    """Flags names such as "ABS wheel speed"; the path should carry the system."""

    capabilities = frozenset({Granularity.SIGNAL})

    def __init__(self, config: Optional[RuleConfig] = None, acronyms: Sequence[str] = COMMON_ACRONYMS) -> None:
        super().__init__(config)
        self._acronyms = tuple(acronyms)

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="acronym-at-start-of-signal-name",
            name="Acronym at Start of Signal Name",
            description="Signal names should not start with common automotive acronyms.",
            severity=LintSeverity.WARNING,
        )

    def validate_signal(self, target: SignalTarget, node: JsonNode) -> RuleOutput:
        name = target.name
        name_node = node.get("name")
        if not name or name_node is None:
            return None
        upper = name.upper()
        for acronym in self._acronyms:
            if upper == acronym or upper.startswith(f"{acronym} ") or upper.startswith(f"{acronym}_"):
                return self.result(
                    f"Signal name '{name}' starts with an acronym '{acronym}'. Use the path property "
                    "to organize signals. Consider removing the acronym or rephrasing the name.",
                    name_node,
                )
        return None


__all__ = [
    "AcronymAtStartOfSignalNameRule",
    "COMMON_ACRONYMS",
    "SignalNamingConventionRule",
    "SignalSentenceCaseRule",
    "is_acronym",
    "snake_case_id",
    "to_sentence_case",
]
