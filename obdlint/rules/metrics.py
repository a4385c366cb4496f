"""suggestedMetric / unit consistency."""

from __future__ import annotations

from ..document.model import SignalTarget
from ..document.syntax import JsonNode, find_node_at_location
from ..models import LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput
from .units import unit_group, units_for_metric


class SuggestedMetricValidationRule(Rule):
    """Flags units outside the set allowed for a signal's suggestedMetric.

    No fix is offered: the intended unit cannot be inferred.
    """

    capabilities = frozenset({Granularity.SIGNAL})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="suggested-metric-validation",
            name="Suggested Metric Validation",
            description="Validate that signals with suggested metrics use appropriate units",
            severity=LintSeverity.WARNING,
        )

    def validate_signal(self, target: SignalTarget, node: JsonNode) -> RuleOutput:
        metric = target.suggested_metric
        if not metric or node.get("suggestedMetric") is None:
            return None
        unit_node = find_node_at_location(node, ["fmt", "unit"])
        if unit_node is None:
            return None
        allowed = units_for_metric(metric)
        unit = unit_node.value
        if allowed is None or unit in allowed:
            return None
        message = (
            f'Signals with suggestedMetric "{metric}" should use one of these units: '
            f'{", ".join(allowed)}. Found: "{unit}"'
        )
        group = unit_group(unit) if isinstance(unit, str) else None
        if group is not None:
            message += f" ({group} unit)"
        return self.result(message, unit_node)


__all__ = ["SuggestedMetricValidationRule"]
