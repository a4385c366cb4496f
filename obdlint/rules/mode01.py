"""Standard mode 01 PIDs do not belong in vehicle-specific signal sets."""

from __future__ import annotations

from typing import List

from ..document.edits import removal_edit
from ..document.model import Command, Signal
from ..document.syntax import JsonNode
from ..models import LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput

STANDARD_SERVICE = "01"


class Mode01FilteringRule(Rule):
    capabilities = frozenset({Granularity.COMMAND})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="mode-01-filtering",
            name="Mode 01 Filtering",
            description=(
                "Detects Mode 01 (standard OBD-II) commands and suggests removal "
                "from vehicle-specific signalsets"
            ),
            severity=LintSeverity.INFORMATION,
        )

    def validate_command(self, command: Command, node: JsonNode, signals: List[Signal]) -> RuleOutput:
        if not isinstance(command.cmd, dict) or STANDARD_SERVICE not in command.cmd:
            return None
        return self.result(
            "Mode 01 command detected. Standard OBD-II PIDs should be removed from "
            "vehicle-specific signalsets.",
            node.get("cmd") or node,
            title="Remove Mode 01 command",
            edits=[removal_edit(node)],
        )


__all__ = ["Mode01FilteringRule"]
