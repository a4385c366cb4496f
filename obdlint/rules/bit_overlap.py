"""Overlapping bit ranges within one command's response."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..document.edits import removal_edit
from ..document.model import Command, Signal
from ..document.syntax import JsonNode
from ..models import LintResult, LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput

OBSOLETE_MARKERS: Sequence[str] = ("_PRE21", "_OLD", "_V1")
PREFERRED_KEYWORDS: Sequence[str] = ("TPMS",)


def overlap_groups(signals: Sequence[Signal]) -> List[List[Signal]]:
    """Group signals whose inclusive bit ranges intersect, transitively.

    Signals without a length are ignored. Groups keep document order.
    """
    ranged: List[Tuple[int, int, int, Signal]] = []
    for index, signal in enumerate(signals):
        bit_range = signal.fmt.bit_range
        if bit_range is not None:
            ranged.append((bit_range[0], bit_range[1], index, signal))
    ranged.sort(key=lambda item: (item[0], item[1], item[2]))

    groups: List[List[Tuple[int, int, int, Signal]]] = []
    group_end = -1
    for item in ranged:
        if groups and item[0] <= group_end:
            groups[-1].append(item)
            group_end = max(group_end, item[1])
        else:
            groups.append([item])
            group_end = item[1]

    return [
        [entry[3] for entry in sorted(group, key=lambda entry: entry[2])]
        for group in groups
        if len(group) > 1
    ]


def select_signal_to_remove(group: Sequence[Signal]) -> Signal:
    for signal in group:
        if any(marker in signal.id for marker in OBSOLETE_MARKERS):
            return signal
    # Least specific last: no preferred keyword, then shortest id.
    ranked = sorted(
        group,
        key=lambda signal: (
            not any(keyword in signal.id for keyword in PREFERRED_KEYWORDS),
            -len(signal.id),
        ),
    )
    return ranked[-1]


class SignalBitOverlapRule(Rule):
    """Flags one removal candidate per group of overlapping signals.

    Groups of three or more may need several fix passes to become
    overlap-free.
    """

    capabilities = frozenset({Granularity.COMMAND})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="signal-bit-overlap",
            name="Signal Bit Overlap Detection",
            description="Validates that signal bit ranges do not overlap and suggests removal of obsolete versions",
            severity=LintSeverity.WARNING,
        )

    def validate_command(self, command: Command, node: JsonNode, signals: List[Signal]) -> RuleOutput:
        if len(signals) < 2:
            return None
        results: List[LintResult] = []
        for group in overlap_groups(signals):
            candidate = select_signal_to_remove(group)
            ranges = [signal.fmt.bit_range for signal in group]
            first = min(bit_range[0] for bit_range in ranges if bit_range)
            last = max(bit_range[1] for bit_range in ranges if bit_range)
            ids = ", ".join(signal.id for signal in group)
            edits = [removal_edit(candidate.node)] if candidate.node is not None else None
            results.append(
                self.result(
                    f"Obsolete signal '{candidate.id}' overlaps with other signals ({ids}) at bits "
                    f"{first}-{last}. Consider removing this obsolete version.",
                    candidate.node,
                    title=f"Remove obsolete signal '{candidate.id}'",
                    edits=edits,
                )
            )
        return results or None


__all__ = [
    "OBSOLETE_MARKERS",
    "SignalBitOverlapRule",
    "overlap_groups",
    "select_signal_to_remove",
]
