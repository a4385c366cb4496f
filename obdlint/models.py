"""Core data models shared across obdlint components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from obdlint.document.syntax import JsonNode


class LintSeverity(str, Enum):
    """Diagnostic severity levels understood by editors and the CLI."""

    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    HINT = "hint"

    @classmethod
    def parse(cls, value: str) -> "LintSeverity":
        lowered = value.strip().lower()
        aliases = {"info": "information", "warn": "warning"}
        lowered = aliases.get(lowered, lowered)
        try:
            return cls(lowered)
        except ValueError as exc:
            raise ValueError(f"Unknown severity '{value}'") from exc


@dataclass
class Filter:
    """Model-year debug filter: `to` and below, `from` and above, plus listed years."""

    to: Optional[int] = None
    from_: Optional[int] = None
    years: List[int] = field(default_factory=list)

    def is_empty(self) -> bool:
        return self.to is None and self.from_ is None and not self.years

    def to_dict(self) -> Dict[str, Any]:
        """Serialise in the canonical `to, years, from` key order."""
        data: Dict[str, Any] = {}
        if self.to is not None:
            data["to"] = self.to
        if self.years:
            data["years"] = list(self.years)
        if self.from_ is not None:
            data["from"] = self.from_
        return data

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Filter":
        years = data.get("years")
        return cls(
            to=_as_year(data.get("to")),
            from_=_as_year(data.get("from")),
            years=[year for year in (_as_year(item) for item in years or []) if year is not None]
            if isinstance(years, list)
            else [],
        )


@dataclass
class Generation:
    """A contiguous span of model years sharing one platform."""

    name: str
    start_year: int
    end_year: Optional[int] = None
    description: Optional[str] = None

    @property
    def ongoing(self) -> bool:
        return self.end_year is None

    def contains(self, year: int) -> bool:
        if year < self.start_year:
            return False
        return self.end_year is None or year <= self.end_year


@dataclass
class TextEdit:
    """Literal splice over a byte range of the UTF-8 encoded document."""

    offset: int
    length: int
    new_text: str

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass
class Suggestion:
    """Quick-fix attached to a lint result."""

    title: str
    edits: List[TextEdit] = field(default_factory=list)


@dataclass
class LintResult:
    """A single finding produced by a rule."""

    rule_id: str
    message: str
    node: Optional["JsonNode"]
    severity: LintSeverity = LintSeverity.WARNING
    suggestion: Optional[Suggestion] = None

    @property
    def offset(self) -> int:
        return self.node.offset if self.node is not None else 0

    @property
    def length(self) -> int:
        return self.node.length if self.node is not None else 0


def _as_year(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


__all__ = [
    "Filter",
    "Generation",
    "LintResult",
    "LintSeverity",
    "Suggestion",
    "TextEdit",
]
