"""Keyword-driven naming conventions for well-known signal kinds."""

from __future__ import annotations

from dataclasses import dataclass
import json
import re
from typing import Callable, Optional, Sequence

from ..document.edits import replace_node_edit
from ..document.model import SignalTarget
from ..document.syntax import JsonNode
from ..models import LintResult, LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput

NameFormatter = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class NamingPattern:
    description: str
    name_contains: Sequence[str] = ()
    suggested_metric: Optional[str] = None
    formatter: Optional[NameFormatter] = None
    id_should_contain: Optional[str] = None
    id_should_not_contain: Optional[str] = None

    def applies_to(self, name: str, suggested_metric: Optional[str]) -> bool:
        if self.suggested_metric is not None:
            return suggested_metric == self.suggested_metric
        lowered = name.lower()
        return all(term in lowered for term in self.name_contains)


def _abs_speed_name(name: str) -> Optional[str]:
    lowered = name.lower()
    if not lowered.startswith("abs speed"):
        return None
    for corner in ("front left", "front right", "rear left", "rear right"):
        if corner in lowered:
            return f"{corner.capitalize()} wheel speed"
    if "(avg)" in lowered:
        return "Average wheel speed"
    return re.sub("abs speed", "Wheel speed", name, count=1, flags=re.IGNORECASE)


def _abs_traction_control_name(name: str) -> Optional[str]:
    if not name.lower().startswith("abs traction control"):
        return None
    return re.sub("abs traction control", "Traction control", name, count=1, flags=re.IGNORECASE)


def _wheel_speed_name(name: str) -> Optional[str]:
    lowered = name.lower()
    if "abs" in lowered:
        return None
    if "front" in lowered:
        vertical = "Front"
    elif "rear" in lowered or "back" in lowered:
        vertical = "Rear"
    else:
        return None
    if "left" in lowered:
        horizontal = "left"
    elif "right" in lowered:
        horizontal = "right"
    else:
        return None
    return f"{vertical} {horizontal} wheel speed"


PATTERNS: Sequence[NamingPattern] = (
    NamingPattern(
        description='ABS speed signals should use "Wheel speed" terminology',
        name_contains=("abs", "speed"),
        formatter=_abs_speed_name,
    ),
    NamingPattern(
        description='ABS traction control signals should be named "Traction control"',
        name_contains=("abs", "traction", "control"),
        formatter=_abs_traction_control_name,
    ),
    NamingPattern(
        description='Wheel speed signal names should follow the format "[Front/Rear] [left/right] wheel speed"',
        name_contains=("speed",),
        formatter=_wheel_speed_name,
    ),
    NamingPattern(
        description='Signals with suggestedMetric "odometer" should have "ODO" in the ID but not "ODOMETER"',
        suggested_metric="odometer",
        id_should_contain="ODO",
        id_should_not_contain="ODOMETER",
    ),
    NamingPattern(
        description='Signals with "engine oil pressure" in the name should have "EOP" in the ID',
        name_contains=("engine", "oil", "pressure"),
        id_should_contain="EOP",
    ),
)


class ConsolidatedNamingRule(Rule):
    """Checks wheel speed, traction control, odometer, and oil pressure naming."""

    capabilities = frozenset({Granularity.SIGNAL})

    def __init__(self, config: Optional[RuleConfig] = None, patterns: Sequence[NamingPattern] = PATTERNS) -> None:
        super().__init__(config)
        self._patterns = tuple(patterns)

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="consolidated-naming",
            name="Consolidated Naming Convention",
            description="Enforces naming conventions for wheel speed, odometer, and engine oil pressure signals.",
            severity=LintSeverity.WARNING,
        )

    def validate_signal(self, target: SignalTarget, node: JsonNode) -> RuleOutput:
        if not target.name:
            return None
        for pattern in self._patterns:
            if not pattern.applies_to(target.name, target.suggested_metric):
                continue
            result = self._check(pattern, target, node)
            if result is not None:
                return result
        return None

    def _check(self, pattern: NamingPattern, target: SignalTarget, node: JsonNode) -> Optional[LintResult]:
        if pattern.formatter is not None:
            name_node = node.get("name")
            if name_node is None or name_node.type != "string" or not name_node.value:
                return None
            current = name_node.value
            suggested = pattern.formatter(target.name)
            if suggested and suggested != current:
                return self.result(
                    f'{pattern.description}. Current: "{current}", Suggested: "{suggested}"',
                    name_node,
                    title=f'Rename to: "{suggested}"',
                    edits=[replace_node_edit(name_node, json.dumps(suggested))],
                )

        id_node = node.get("id")
        if id_node is None:
            return None
        if pattern.id_should_contain and pattern.id_should_contain not in target.id:
            return self.result(
                f'{pattern.description}. Signal ID "{target.id}" should contain "{pattern.id_should_contain}"',
                id_node,
            )
        if pattern.id_should_not_contain and pattern.id_should_not_contain in target.id:
            edits = None
            title = None
            if pattern.id_should_contain:
                suggested_id = target.id.replace(pattern.id_should_not_contain, pattern.id_should_contain)
                title = f'Fix ID: "{suggested_id}"'
                edits = [replace_node_edit(id_node, json.dumps(suggested_id))]
            return self.result(
                f'{pattern.description}. Signal ID "{target.id}" should not contain "{pattern.id_should_not_contain}"',
                id_node,
                title=title,
                edits=edits,
            )
        return None


__all__ = ["ConsolidatedNamingRule", "NamingPattern", "PATTERNS"]
