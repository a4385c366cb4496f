"""Base classes for lint rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, FrozenSet, List, Optional, Sequence, Union

from ..models import LintResult, LintSeverity, Suggestion, TextEdit

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..document.model import Command, Signal, SignalSetDocument, SignalTarget
    from ..document.syntax import JsonNode


class Granularity(str, Enum):
    """Levels of the document a rule can inspect."""

    SIGNAL = "signal"
    COMMAND = "command"
    COMMANDS = "commands"
    DOCUMENT = "document"


@dataclass
class RuleConfig:
    id: str
    name: str
    description: str
    severity: LintSeverity
    enabled: bool = True


RuleOutput = Union[None, LintResult, Sequence[LintResult]]


class Rule(ABC):
    """Contract for rules run by the signal linter.

    Subclasses list the hooks they implement in `capabilities`; the linter
    only calls hooks named there.
    """

    capabilities: ClassVar[FrozenSet[Granularity]] = frozenset()

    def __init__(self, config: Optional[RuleConfig] = None) -> None:
        self._config = replace(config) if config is not None else self.default_config()

    @classmethod
    @abstractmethod
    def default_config(cls) -> RuleConfig:
        """Return the rule's built-in id, description, and severity."""

    @property
    def id(self) -> str:
        return self._config.id

    def get_config(self) -> RuleConfig:
        return self._config

    def configure(self, *, enabled: Optional[bool] = None, severity: Optional[LintSeverity] = None) -> None:
        if enabled is not None:
            self._config.enabled = enabled
        if severity is not None:
            self._config.severity = severity

    def supports(self, granularity: Granularity) -> bool:
        return granularity in self.capabilities

    def validate_signal(self, target: "SignalTarget", node: "JsonNode") -> RuleOutput:
        return None

    def validate_command(
        self, command: "Command", node: "JsonNode", signals: List["Signal"]
    ) -> RuleOutput:
        return None

    def validate_commands(self, commands_node: "JsonNode", document: "SignalSetDocument") -> RuleOutput:
        return None

    def validate_document(self, document: "SignalSetDocument") -> RuleOutput:
        return None

    def result(
        self,
        message: str,
        node: Optional["JsonNode"],
        *,
        title: Optional[str] = None,
        edits: Optional[List[TextEdit]] = None,
    ) -> LintResult:
        suggestion = Suggestion(title=title, edits=list(edits)) if title and edits else None
        return LintResult(
            rule_id=self._config.id,
            message=message,
            node=node,
            severity=self._config.severity,
            suggestion=suggestion,
        )


__all__ = ["Granularity", "Rule", "RuleConfig", "RuleOutput"]
