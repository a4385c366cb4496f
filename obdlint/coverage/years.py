"""Model-year coverage lookups over the test case fixture tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re
from typing import Dict, List, Optional, Set

from ..document.commands import normalize_command_id, strip_receive_filter
from ..logging import get_logger
from .manifest import MANIFEST_FILENAME, ManifestError, SupportManifest, load_manifest

logger = get_logger("coverage")

_FIXTURE_SUFFIXES = {".yaml", ".yml"}


@dataclass
class YearCoverage:
    """Supported and explicitly unsupported model years of one command."""

    supported: List[int] = field(default_factory=list)
    unsupported: List[int] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.supported and not self.unsupported


def command_id_forms(command_id: str) -> Set[str]:
    """The normalized identifier and its two-segment form."""
    normalized = normalize_command_id(command_id)
    return {normalized, strip_receive_filter(normalized)}


class ModelYearIndex:
    """Answers which model years support a command.

    Layout: `<test_cases>/<YEAR>/commands/<command-id>.yaml` fixtures and a
    `<test_cases>/<YEAR>/command_support.yaml` manifest per year.
    """

    def __init__(self, test_cases_dir: Path) -> None:
        self._root = test_cases_dir
        self._fixtures: Dict[str, Set[str]] = {}
        self._manifests: Dict[str, Optional[SupportManifest]] = {}

    @property
    def root(self) -> Path:
        return self._root

    def years(self) -> List[str]:
        if not self._root.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self._root.iterdir()
            if entry.is_dir() and len(entry.name) == 4 and entry.name.isdigit()
        )

    def supported_years(self, command_id: str) -> List[int]:
        forms = command_id_forms(command_id)
        supported: List[int] = []
        for year in self.years():
            if forms & self._fixture_ids(year):
                supported.append(int(year))
                continue
            manifest = self._manifest(year)
            if manifest is None:
                continue
            for ecu, entry in manifest.supported_entries():
                if f"{ecu}.{normalize_command_id(entry)}" in forms:
                    supported.append(int(year))
                    break
        return supported

    def unsupported_years(self, command_id: str) -> List[int]:
        forms = command_id_forms(command_id)
        unsupported: List[int] = []
        for year in self.years():
            manifest = self._manifest(year)
            if manifest is None:
                continue
            if any(normalize_command_id(entry) in forms for entry in manifest.unsupported_entries()):
                unsupported.append(int(year))
        return unsupported

    def signal_years(self, signal_id: str) -> List[int]:
        """Years whose fixtures, or failing that whose manifest, mention `signal_id`.

        Matches whole identifiers only, so `RPM` does not match `ENGINE_RPM`.
        """
        pattern = re.compile(rf"(?<![A-Za-z0-9_]){re.escape(signal_id)}(?![A-Za-z0-9_])")
        years: List[int] = []
        for year in self.years():
            year_dir = self._root / year
            commands_dir = year_dir / "commands"
            fixtures = sorted(commands_dir.iterdir()) if commands_dir.is_dir() else []
            candidates = [path for path in fixtures if path.is_file() and path.suffix in _FIXTURE_SUFFIXES]
            if any(_mentions(path, pattern) for path in candidates) or _mentions(
                year_dir / MANIFEST_FILENAME, pattern
            ):
                years.append(int(year))
        return years

    def coverage(self, command_id: str) -> YearCoverage:
        supported = self.supported_years(command_id)
        # Fixture evidence wins over a stale "unsupported" listing.
        unsupported = [year for year in self.unsupported_years(command_id) if year not in supported]
        return YearCoverage(supported=supported, unsupported=unsupported)

    def _fixture_ids(self, year: str) -> Set[str]:
        cached = self._fixtures.get(year)
        if cached is not None:
            return cached
        ids: Set[str] = set()
        commands_dir = self._root / year / "commands"
        if commands_dir.is_dir():
            for path in commands_dir.iterdir():
                if path.is_file() and path.suffix in _FIXTURE_SUFFIXES:
                    ids.add(normalize_command_id(path.stem))
        self._fixtures[year] = ids
        return ids

    def _manifest(self, year: str) -> Optional[SupportManifest]:
        if year in self._manifests:
            return self._manifests[year]
        path = self._root / year / MANIFEST_FILENAME
        try:
            manifest = load_manifest(path)
        except ManifestError as exc:
            logger.warning("Skipping %s support manifest: %s", year, exc)
            manifest = None
        self._manifests[year] = manifest
        return manifest


def _mentions(path: Path, pattern: "re.Pattern[str]") -> bool:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return False
    return pattern.search(text) is not None


__all__ = ["ModelYearIndex", "YearCoverage", "command_id_forms"]
