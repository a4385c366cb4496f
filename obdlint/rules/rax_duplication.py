"""Commands sharing a `cmd` payload must be told apart by `rax`."""

from __future__ import annotations

from collections import OrderedDict
from typing import Dict, List

from ..document.model import Command, SignalSetDocument
from ..document.syntax import JsonNode
from ..models import LintResult, LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput


def _describe(command: Command) -> str:
    qualifier = f"with rax='{command.rax}'" if command.rax else "without rax filter"
    return f"{command.describe()} {qualifier}"


class CommandRaxDuplicationRule(Rule):
    capabilities = frozenset({Granularity.COMMANDS})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="command-rax-duplication",
            name="Command RAX Duplication Check",
            description=(
                'Validates that commands with the same "cmd" value have "rax" filters '
                "to avoid ambiguous responses"
            ),
            severity=LintSeverity.ERROR,
        )

    def validate_commands(self, commands_node: JsonNode, document: SignalSetDocument) -> RuleOutput:
        groups: Dict[str, List[Command]] = OrderedDict()
        for command in document.commands:
            groups.setdefault(command.normalized_cmd, []).append(command)

        results: List[LintResult] = []
        for cmd_key, group in groups.items():
            if len(group) < 2:
                continue

            if any(not command.rax for command in group):
                listing = ", ".join(_describe(command) for command in group)
                for command in group:
                    results.append(
                        self.result(
                            f"Command has the same cmd={cmd_key} as other commands: {listing}. "
                            "Each command needs a unique 'rax' filter to avoid ambiguity.",
                            command.node.get("cmd") or command.node,
                        )
                    )

            by_rax: Dict[str, List[Command]] = OrderedDict()
            for command in group:
                if command.rax:
                    by_rax.setdefault(command.rax, []).append(command)
            for rax, duplicates in by_rax.items():
                if len(duplicates) < 2:
                    continue
                for command in duplicates:
                    results.append(
                        self.result(
                            f"Commands with the same cmd={cmd_key} have duplicate 'rax={rax}' values. "
                            "Each command needs a unique 'rax' filter.",
                            command.node.get("rax") or command.node,
                        )
                    )
        return results or None


__all__ = ["CommandRaxDuplicationRule"]
