"""Signal and signal group identifiers must be unique per document."""

from __future__ import annotations

import json
import re
from typing import Dict, List, Set

from ..document.edits import replace_node_edit
from ..document.model import SignalSetDocument
from ..models import LintResult, LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput

_VERSION_SUFFIX = re.compile(r"^(?P<base>.*)_V(?P<version>\d+)$")


def versioned_id(identifier: str, occurrence: int) -> str:
    """Candidate rename for the `occurrence`-th sighting (2 for the first repeat)."""
    match = _VERSION_SUFFIX.match(identifier)
    if match is None:
        return f"{identifier}_V{occurrence}"
    version = int(match.group("version")) + occurrence - 1
    return f"{match.group('base')}_V{version}"


def _bump(candidate: str) -> str:
    match = _VERSION_SUFFIX.match(candidate)
    if match is None:
        return f"{candidate}_V2"
    return f"{match.group('base')}_V{int(match.group('version')) + 1}"


class UniqueSignalIdRule(Rule):
    capabilities = frozenset({Granularity.DOCUMENT})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="unique-signal-id",
            name="Unique Signal ID",
            description="Validates that signal IDs are unique across all commands in a file",
            severity=LintSeverity.ERROR,
        )

    def validate_document(self, document: SignalSetDocument) -> RuleOutput:
        targets = document.identified_targets()
        taken: Set[str] = {target.id for target in targets}
        occurrences: Dict[str, int] = {}
        results: List[LintResult] = []

        for target in targets:
            count = occurrences.get(target.id, 0) + 1
            occurrences[target.id] = count
            if count == 1:
                continue
            id_node = target.id_node
            suggested = versioned_id(target.id, count)
            while suggested in taken:
                suggested = _bump(suggested)
            taken.add(suggested)
            results.append(
                self.result(
                    f'ID "{target.id}" is not unique. Another signal or signal group in this file uses the same ID.',
                    id_node,
                    title=f'Rename to "{suggested}"',
                    edits=[replace_node_edit(id_node, json.dumps(suggested))] if id_node is not None else None,
                )
            )
        return results or None


__all__ = ["UniqueSignalIdRule", "versioned_id"]
