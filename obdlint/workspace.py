"""Workspace flows: debug-filter optimisation, linting, and year lookups."""

from __future__ import annotations

from dataclasses import dataclass, field
import difflib
from pathlib import Path
from typing import Dict, List, Optional

from .config import ConfigError, ObdLintConfig, load_config
from .coverage import (
    REMOVE_FILTER,
    GenerationSet,
    ModelYearIndex,
    calculate_debug_filter,
    load_generations,
    optimize_debug_filter,
)
from .coverage.filters import OptimizeResult
from .document import (
    Command,
    apply_edits,
    format_filter_inline,
    normalize_command_id,
    parse_document,
    removal_edit,
    replace_node_edit,
)
from .linter import LintReport, SignalLinter
from .logging import get_logger
from .models import Filter, Generation, TextEdit
from .rules import RuleRegistry
from .stores import LintCache


@dataclass
class CommandOutcome:
    """Coverage and proposed filter change for one command."""

    index: int
    command_id: str
    supported: List[int]
    unsupported: List[int]
    current: Optional[Filter] = None
    proposed: OptimizeResult = None
    edits: List[TextEdit] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.edits)

    @property
    def removes_filter(self) -> bool:
        return self.proposed is REMOVE_FILTER


@dataclass
class OptimizeOutcome:
    """Result of an optimize pass over a signalset."""

    path: Path
    commands: List[CommandOutcome]
    diff: str
    committed: bool
    skipped: List[TextEdit] = field(default_factory=list)

    @property
    def changed_commands(self) -> List[CommandOutcome]:
        return [outcome for outcome in self.commands if outcome.changed]


@dataclass
class LintOutcome:
    """Lint report for a file plus any fixes applied to it."""

    path: Path
    report: LintReport
    fixed: int = 0
    diff: str = ""
    skipped: List[TextEdit] = field(default_factory=list)


@dataclass
class YearsOutcome:
    identifier: str
    supported: Dict[str, List[str]]
    unsupported: Dict[str, List[str]]


class Workspace:
    """A signalset repository with its test cases and generations file."""

    def __init__(
        self,
        root: Path,
        config: ObdLintConfig | None = None,
        *,
        registry: RuleRegistry | None = None,
        cache: LintCache | None = None,
    ) -> None:
        self.root = Path(root).expanduser().resolve()
        self.config = config or self._load_config(self.root)
        self.logger = get_logger("workspace")
        self._registry = registry
        self._cache = cache
        self._index: Optional[ModelYearIndex] = None
        self._generations: Optional[GenerationSet] = None

    @property
    def index(self) -> ModelYearIndex:
        if self._index is None:
            self._index = ModelYearIndex(self.config.test_cases_path)
        return self._index

    @property
    def generations(self) -> GenerationSet:
        if self._generations is None:
            self._generations = load_generations(self.config.generations_path)
        return self._generations

    @property
    def registry(self) -> RuleRegistry:
        if self._registry is None:
            self._registry = RuleRegistry.default(
                self.config.rules, model_name=self.config.model_name
            )
        return self._registry

    def run_optimize(self, signalset: Path | None = None, *, commit: bool = False) -> OptimizeOutcome:
        """Tighten existing `dbgfilter`s and derive filters for `dbg: true` commands."""
        path = self._resolve_signalset(signalset)
        text = path.read_text(encoding="utf-8")
        document = parse_document(text)
        self.logger.info("Optimizing %d command(s) in %s", len(document.commands), path)

        bounds = self.generations.bounds()
        outcomes: List[CommandOutcome] = []
        for index, command in enumerate(document.commands, start=1):
            outcome = self._plan_command(index, command, bounds)
            outcomes.append(outcome)

        edits = [edit for outcome in outcomes for edit in outcome.edits]
        updated, skipped = apply_edits(text, edits)
        if skipped:
            self.logger.warning("Skipped %d overlapping edit(s)", len(skipped))
        diff = _render_diff(text, updated, path.name)

        committed = False
        if commit and updated != text:
            path.write_text(updated, encoding="utf-8")
            committed = True
            self.logger.info("Wrote %d filter change(s) to %s", len(edits) - len(skipped), path)
        return OptimizeOutcome(path=path, commands=outcomes, diff=diff, committed=committed, skipped=skipped)

    def lint_file(self, path: Path, *, fix: bool = False) -> LintOutcome:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Signalset file not found at {path}")
        text = path.read_text(encoding="utf-8")
        report = self.lint_text(text)
        outcome = LintOutcome(path=path, report=report)
        if not fix:
            return outcome

        edits = [edit for result in report.fixable() for edit in result.suggestion.edits]
        if not edits:
            return outcome
        updated, skipped = apply_edits(text, edits)
        outcome.skipped = skipped
        outcome.diff = _render_diff(text, updated, path.name)
        if updated != text:
            path.write_text(updated, encoding="utf-8")
            outcome.fixed = len(edits) - len(skipped)
            # Report what is left after the fixes.
            outcome.report = self.lint_text(updated)
        return outcome

    def lint_text(self, text: str) -> LintReport:
        registry = self.registry
        if self._cache is not None:
            cached = self._cache.get(text, signature=registry.signature())
            if cached is not None:
                self.logger.debug("Lint cache hit")
                return cached
        report = SignalLinter(registry).lint_text(text)
        if self._cache is not None:
            self._cache.store(text, signature=registry.signature(), report=report)
        return report

    def years(self, command_id: str) -> YearsOutcome:
        """Supported and unsupported years for a command, grouped by generation."""
        command_id = normalize_command_id(command_id)
        coverage = self.index.coverage(command_id)
        generations = self.generations
        return YearsOutcome(
            identifier=command_id,
            supported=generations.group_years_by_generation(coverage.supported),
            unsupported=generations.group_years_by_generation(coverage.unsupported),
        )

    def signal_years(self, signal_id: str) -> YearsOutcome:
        """Years whose test cases mention a signal, grouped by generation."""
        signal_id = signal_id.strip()
        supported = self.index.signal_years(signal_id)
        return YearsOutcome(
            identifier=signal_id,
            supported=self.generations.group_years_by_generation(supported),
            unsupported={},
        )

    def _plan_command(
        self, index: int, command: Command, bounds: Optional[Generation]
    ) -> CommandOutcome:
        coverage = self.index.coverage(command.command_id)
        outcome = CommandOutcome(
            index=index,
            command_id=command.command_id,
            supported=list(coverage.supported),
            unsupported=list(coverage.unsupported),
            current=command.dbgfilter,
        )
        node = command.node
        if node is None:
            return outcome

        filter_node = node.get("dbgfilter")
        if command.dbgfilter is not None and filter_node is not None:
            if not coverage.supported:
                return outcome
            proposed = optimize_debug_filter(command.dbgfilter, coverage.supported)
            outcome.proposed = proposed
            if proposed is REMOVE_FILTER:
                outcome.edits.append(removal_edit(filter_node.parent))
            elif isinstance(proposed, Filter):
                outcome.edits.append(replace_node_edit(filter_node, format_filter_inline(proposed)))
            return outcome

        dbg_node = node.get("dbg")
        if command.dbg and dbg_node is not None and not coverage.is_empty():
            proposed_filter = calculate_debug_filter(coverage.supported, coverage.unsupported, bounds)
            if proposed_filter is not None:
                outcome.proposed = proposed_filter
                outcome.edits.append(
                    replace_node_edit(
                        dbg_node.parent, f'"dbgfilter": {format_filter_inline(proposed_filter)}'
                    )
                )
        return outcome

    def _resolve_signalset(self, signalset: Path | None) -> Path:
        if signalset is None:
            path = self.config.signalset_path
        else:
            path = Path(signalset)
            if not path.is_absolute():
                path = self.root / path
        if not path.is_file():
            raise FileNotFoundError(f"Signalset file not found at {path}")
        return path

    def _load_config(self, root: Path) -> ObdLintConfig:
        try:
            return load_config(root)
        except ConfigError as exc:
            get_logger("workspace").warning("Using default configuration: %s", exc)
            return ObdLintConfig(root=root)


def _render_diff(original: str, updated: str, name: str) -> str:
    diff = difflib.unified_diff(
        original.splitlines(keepends=True),
        updated.splitlines(keepends=True),
        fromfile=f"{name} (original)",
        tofile=f"{name} (updated)",
    )
    return "".join(diff)


__all__ = ["CommandOutcome", "LintOutcome", "OptimizeOutcome", "Workspace", "YearsOutcome"]
