"""Suggest a signal path from keywords in its id."""

from __future__ import annotations

import json
from typing import Optional, Sequence, Tuple

from ..document.edits import replace_node_edit
from ..document.model import SignalTarget
from ..document.syntax import JsonNode
from ..models import LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput

# Checked in order; the first match wins.
PATH_KEYWORDS: Sequence[Tuple[str, str]] = (
    ("DOOR", "Doors"),
    ("TRUNK", "Doors"),
    ("HOOD", "Doors"),
    ("WINDOW", "Windows"),
    ("TEMP", "Climate"),
    ("CLIMATE", "Climate"),
    ("AC", "Climate"),
    ("DEFOG", "Climate"),
    ("DEFROST", "Climate"),
    ("ENGINE", "Engine"),
    ("RPM", "Engine"),
    ("TRANS", "Transmission"),
    ("GEAR", "Transmission"),
    ("BRAKE", "Control"),
    ("BELT", "Seatbelts"),
    ("BATTERY", "Electrical"),
    ("VOLTAGE", "Electrical"),
    ("FUEL", "Fuel"),
    ("GAS", "Fuel"),
)

_WHOLE_TOKEN_MAX_LENGTH = 3


def suggest_path(signal_id: str, keywords: Sequence[Tuple[str, str]] = PATH_KEYWORDS) -> Optional[str]:
    """Return the path implied by the id, if any.

    Keywords of three characters or fewer only match a whole `_` token, so
    `AC` matches `AC_STATUS` but not `PACK_VOLTAGE`.
    """
    tokens = set(signal_id.split("_"))
    for keyword, path in keywords:
        if len(keyword) <= _WHOLE_TOKEN_MAX_LENGTH:
            if keyword in tokens:
                return path
        elif keyword in signal_id:
            return path
    return None


class SignalPathSuggestionRule(Rule):
    capabilities = frozenset({Granularity.SIGNAL})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="signal-path-suggestion",
            name="Signal Path Suggestion",
            description="Suggests appropriate signal paths based on the signal ID patterns",
            severity=LintSeverity.INFORMATION,
        )

    def validate_signal(self, target: SignalTarget, node: JsonNode) -> RuleOutput:
        path_node = node.get("path")
        if path_node is None:
            return None
        suggested = suggest_path(target.id)
        if suggested is None or suggested == target.path:
            return None
        return self.result(
            f'Signal ID "{target.id}" suggests it should be in path "{suggested}" instead of "{target.path}"',
            path_node,
            title=f'Change path to "{suggested}"',
            edits=[replace_node_edit(path_node, json.dumps(suggested))],
        )


__all__ = ["PATH_KEYWORDS", "SignalPathSuggestionRule", "suggest_path"]
