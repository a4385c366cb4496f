"""Explicitly constructed registry of lint rules."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Callable, Dict, List, Mapping, Optional, Sequence

from ..logging import get_logger
from .base import Rule, RuleConfig
from .bit_overlap import SignalBitOverlapRule
from .consolidated_naming import ConsolidatedNamingRule
from .ev_filtering import EvCommandFilteringRule
from .formula_range import FormulaRangeValidationRule
from .map_keys import MapKeyNumericalRule
from .metrics import SuggestedMetricValidationRule
from .mode01 import Mode01FilteringRule
from .naming import AcronymAtStartOfSignalNameRule, SignalNamingConventionRule, SignalSentenceCaseRule
from .path_suggestion import SignalPathSuggestionRule
from .rax_duplication import CommandRaxDuplicationRule
from .typo import SignalNameTypoRule
from .unique_id import UniqueSignalIdRule

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..config import RuleOverride

logger = get_logger("rules")


def _builtin_factories(model_name: Optional[str]) -> List[Callable[[], Rule]]:
    return [
        ConsolidatedNamingRule,
        SignalNamingConventionRule,
        SuggestedMetricValidationRule,
        FormulaRangeValidationRule,
        SignalBitOverlapRule,
        UniqueSignalIdRule,
        SignalPathSuggestionRule,
        SignalSentenceCaseRule,
        AcronymAtStartOfSignalNameRule,
        MapKeyNumericalRule,
        CommandRaxDuplicationRule,
        SignalNameTypoRule,
        lambda: EvCommandFilteringRule(model_name=model_name),
        Mode01FilteringRule,
    ]


class RuleRegistry:
    """Fixed, ordered rule list; rules run in the order given."""

    def __init__(self, rules: Sequence[Rule]) -> None:
        self._rules: List[Rule] = []
        self._by_id: Dict[str, Rule] = {}
        for rule in rules:
            if not isinstance(rule, Rule):
                raise TypeError(f"{rule!r} is not a Rule instance")
            if rule.id in self._by_id:
                raise ValueError(f"Duplicate rule id '{rule.id}'")
            self._rules.append(rule)
            self._by_id[rule.id] = rule

    @classmethod
    def default(
        cls,
        overrides: Optional[Mapping[str, "RuleOverride"]] = None,
        *,
        model_name: Optional[str] = None,
    ) -> "RuleRegistry":
        """Build the standard rule set with per-rule enabled/severity overrides."""
        registry = cls([factory() for factory in _builtin_factories(model_name)])
        for rule_id, override in (overrides or {}).items():
            rule = registry.get(rule_id)
            if rule is None:
                logger.warning("Ignoring configuration for unknown rule '%s'", rule_id)
                continue
            rule.configure(enabled=override.enabled, severity=override.severity)
        return registry

    def all_rules(self) -> List[Rule]:
        return list(self._rules)

    def enabled_rules(self) -> List[Rule]:
        return [rule for rule in self._rules if rule.get_config().enabled]

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._by_id.get(rule_id)

    def rule_configs(self) -> List[RuleConfig]:
        return [rule.get_config() for rule in self._rules]

    def signature(self) -> str:
        """Stable digest of the enabled rules and their severities."""
        parts = [
            f"{config.id}:{config.severity.value}:{int(config.enabled)}"
            for config in self.rule_configs()
        ]
        return hashlib.sha1("|".join(parts).encode("utf-8")).hexdigest()


__all__ = ["RuleRegistry"]
