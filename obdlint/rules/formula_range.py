"""Authored min/max versus the range the decode formula can produce."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..document.edits import replace_node_edit
from ..document.model import SignalTarget
from ..document.syntax import JsonNode
from ..models import LintResult, LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput


def raw_range(length: int, signed: bool) -> Tuple[int, int]:
    if signed:
        return -(2 ** (length - 1)), 2 ** (length - 1) - 1
    return 0, 2**length - 1


def decodable_range(length: int, signed: bool, mul: float, div: float, add: float) -> Optional[Tuple[float, float]]:
    """Smallest and largest decoded values, or None when `div` is zero."""
    if div == 0:
        return None
    low_raw, high_raw = raw_range(length, signed)
    first = low_raw * mul / div + add
    second = high_raw * mul / div + add
    return min(first, second), max(first, second)


def format_number(value: float) -> str:
    rounded = round(value, 6)
    if float(rounded).is_integer():
        return str(int(rounded))
    return repr(float(rounded))


class FormulaRangeValidationRule(Rule):
    capabilities = frozenset({Granularity.SIGNAL})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="formula-range-validation",
            name="Formula Range Validation",
            description=(
                "Validates that signal min/max values are within the range of possible "
                "values based on the signal formula"
            ),
            severity=LintSeverity.WARNING,
        )

    def validate_signal(self, target: SignalTarget, node: JsonNode) -> RuleOutput:
        fmt = getattr(target, "fmt", None)
        fmt_node = node.get("fmt")
        if fmt is None or fmt_node is None or fmt.len is None or fmt.len <= 0:
            return None
        envelope = decodable_range(fmt.len, fmt.sign, fmt.mul, fmt.div, fmt.add)
        if envelope is None:
            return None
        low, high = envelope
        encoding = " with signed encoding" if fmt.sign else ""
        results: List[LintResult] = []

        min_node = fmt_node.get("min")
        if fmt.min is not None and min_node is not None and fmt.min < round(low, 6):
            suggested = format_number(low)
            results.append(
                self.result(
                    f"Signal min value ({format_number(fmt.min)}) is below the minimum possible value "
                    f"({suggested}) given the formula parameters{encoding}.",
                    min_node,
                    title=f"Change min to {suggested}",
                    edits=[replace_node_edit(min_node, suggested)],
                )
            )

        max_node = fmt_node.get("max")
        if fmt.max is not None and max_node is not None and fmt.max > round(high, 6):
            suggested = format_number(high)
            results.append(
                self.result(
                    f"Signal max value ({format_number(fmt.max)}) exceeds the maximum possible value "
                    f"({suggested}) given the formula parameters{encoding}.",
                    max_node,
                    title=f"Change max to {suggested}",
                    edits=[replace_node_edit(max_node, suggested)],
                )
            )
        return results or None


__all__ = ["FormulaRangeValidationRule", "decodable_range", "format_number", "raw_range"]
