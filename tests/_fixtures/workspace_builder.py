"""Helper utilities for constructing temporary signalset workspaces in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Iterable, Mapping

SIGNALSET_PATH = "signalsets/v3/default.json"


class WorkspaceBuilder:
    """Utility for writing a signalset, test cases and generations into a tmp dir."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "workspace"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the workspace."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def signalset(self, data: Mapping[str, Any] | str) -> Path:
        """Write the default signalset; mappings are pretty-printed as JSON."""
        text = data if isinstance(data, str) else json.dumps(data, indent=2) + "\n"
        path = self.root / SIGNALSET_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def fixtures(self, command_id: str, years: Iterable[int]) -> None:
        """Add an empty test case for `command_id` in each model year."""
        for year in years:
            self.write({f"tests/test_cases/{year}/commands/{command_id}.yaml": "test_cases: []\n"})

    def manifest(self, year: int, content: str) -> None:
        self.write({f"tests/test_cases/{year}/command_support.yaml": content})

    def generations(self, content: str) -> None:
        self.write({"generations.yaml": content})

    def read_signalset(self) -> str:
        return (self.root / SIGNALSET_PATH).read_text(encoding="utf-8")

    def path(self) -> Path:
        """Return the workspace root path."""
        return self.root


__all__ = ["SIGNALSET_PATH", "WorkspaceBuilder"]
