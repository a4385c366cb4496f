"""EV-only commands in combustion-engine signal sets."""

from __future__ import annotations

from typing import List, Optional

from ..document.edits import removal_edit
from ..document.model import SignalSetDocument
from ..models import LintResult, LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput
from .vehicle_type import VehicleType, detect_vehicle_type, should_filter_ev_command


class EvCommandFilteringRule(Rule):
    capabilities = frozenset({Granularity.DOCUMENT})

    def __init__(self, config: Optional[RuleConfig] = None, model_name: Optional[str] = None) -> None:
        super().__init__(config)
        self._model_name = model_name

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="ev-command-filtering",
            name="EV Command Filtering",
            description="Detects EV-specific commands in ICE vehicle signalsets and suggests removal",
            severity=LintSeverity.WARNING,
        )

    def validate_document(self, document: SignalSetDocument) -> RuleOutput:
        vehicle_type = detect_vehicle_type(self._model_name, document.commands)
        if vehicle_type is not VehicleType.ICE:
            return None
        results: List[LintResult] = []
        for command in document.commands:
            if not should_filter_ev_command(command, vehicle_type):
                continue
            description = ".".join(
                part for part in (command.hdr, command.normalized_cmd, command.rax) if part
            )
            results.append(
                self.result(
                    f"EV-specific command detected in ICE vehicle signalset: {description}. "
                    "Consider removing this command.",
                    command.node,
                    title=f"Remove EV command: {description}",
                    edits=[removal_edit(command.node)],
                )
            )
        return results or None


__all__ = ["EvCommandFilteringRule"]
