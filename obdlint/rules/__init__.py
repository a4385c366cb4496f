"""Lint rules for signal set documents."""

from .base import Granularity, Rule, RuleConfig, RuleOutput
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
from .registry import RuleRegistry
from .typo import SignalNameTypoRule
from .unique_id import UniqueSignalIdRule
from .vehicle_type import VehicleType, detect_vehicle_type

__all__ = [
    "AcronymAtStartOfSignalNameRule",
    "CommandRaxDuplicationRule",
    "ConsolidatedNamingRule",
    "EvCommandFilteringRule",
    "FormulaRangeValidationRule",
    "Granularity",
    "MapKeyNumericalRule",
    "Mode01FilteringRule",
    "Rule",
    "RuleConfig",
    "RuleOutput",
    "RuleRegistry",
    "SignalBitOverlapRule",
    "SignalNameTypoRule",
    "SignalNamingConventionRule",
    "SignalPathSuggestionRule",
    "SignalSentenceCaseRule",
    "SuggestedMetricValidationRule",
    "UniqueSignalIdRule",
    "VehicleType",
    "detect_vehicle_type",
]
