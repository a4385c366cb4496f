"""Rule dispatch over a parsed signal set document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from .document.model import SignalSetDocument, parse_document
from .document.syntax import DocumentParseError, JsonNode
from .logging import get_logger
from .models import LintResult, LintSeverity
from .rules.base import Granularity, Rule, RuleOutput
from .rules.registry import RuleRegistry

logger = get_logger("linter")

PARSE_ERROR_RULE = "parse-error"
INVALID_COMMAND_RULE = "invalid-command"


@dataclass
class LintReport:
    """Results of one lint pass, in dispatch order."""

    results: List[LintResult] = field(default_factory=list)
    document: Optional[SignalSetDocument] = None

    @property
    def errors(self) -> List[LintResult]:
        return [result for result in self.results if result.severity is LintSeverity.ERROR]

    @property
    def warnings(self) -> List[LintResult]:
        return [result for result in self.results if result.severity is LintSeverity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(result.severity is LintSeverity.ERROR for result in self.results)

    def for_rule(self, rule_id: str) -> List[LintResult]:
        return [result for result in self.results if result.rule_id == rule_id]

    def fixable(self) -> List[LintResult]:
        return [result for result in self.results if result.suggestion is not None]


class SignalLinter:
    """Runs every enabled rule of a registry against a document.

    Order: document rules, commands-array rules, then for each command its
    command rules followed by signal rules on its signals, then signal
    rules on every signal group.
    """

    def __init__(self, registry: Optional[RuleRegistry] = None) -> None:
        self._registry = registry if registry is not None else RuleRegistry.default()

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    def lint_text(self, text: str) -> LintReport:
        try:
            document = parse_document(text)
        except DocumentParseError as exc:
            logger.debug("Document failed to parse: %s", exc)
            node = JsonNode("null", exc.offset, 0)
            return LintReport(
                results=[
                    LintResult(
                        rule_id=PARSE_ERROR_RULE,
                        message=str(exc),
                        node=node,
                        severity=LintSeverity.ERROR,
                    )
                ]
            )
        return self.lint_document(document)

    def lint_document(self, document: SignalSetDocument) -> LintReport:
        rules = self._registry.enabled_rules()
        by_granularity = {
            granularity: [rule for rule in rules if rule.supports(granularity)]
            for granularity in Granularity
        }
        report = LintReport(document=document)

        for invalid in document.invalid_commands:
            report.results.append(
                LintResult(
                    rule_id=INVALID_COMMAND_RULE,
                    message=invalid.reason,
                    node=invalid.node,
                    severity=LintSeverity.ERROR,
                )
            )

        for rule in by_granularity[Granularity.DOCUMENT]:
            self._collect(report, rule, lambda rule=rule: rule.validate_document(document))

        commands_node = document.commands_node
        if commands_node is not None and commands_node.type == "array":
            for rule in by_granularity[Granularity.COMMANDS]:
                self._collect(
                    report, rule, lambda rule=rule: rule.validate_commands(commands_node, document)
                )

        signal_rules = by_granularity[Granularity.SIGNAL]
        for command in document.commands:
            for rule in by_granularity[Granularity.COMMAND]:
                self._collect(
                    report,
                    rule,
                    lambda rule=rule: rule.validate_command(command, command.node, command.signals),
                )
            for signal in command.signals:
                for rule in signal_rules:
                    self._collect(report, rule, lambda rule=rule: rule.validate_signal(signal, signal.node))

        for group in document.signal_groups:
            for rule in signal_rules:
                self._collect(report, rule, lambda rule=rule: rule.validate_signal(group, group.node))

        logger.debug("Lint pass produced %d result(s)", len(report.results))
        return report

    @staticmethod
    def _collect(report: LintReport, rule: Rule, hook: Callable[[], RuleOutput]) -> None:
        try:
            output = hook()
        except Exception:  # noqa: BLE001 - one faulty rule must not abort the pass
            logger.exception("Rule '%s' failed", rule.id)
            return
        for result in _as_results(output):
            result.severity = rule.get_config().severity
            report.results.append(result)


def _as_results(output: RuleOutput) -> Iterable[LintResult]:
    if output is None:
        return []
    if isinstance(output, LintResult):
        return [output]
    return list(output)


__all__ = ["INVALID_COMMAND_RULE", "LintReport", "PARSE_ERROR_RULE", "SignalLinter"]
