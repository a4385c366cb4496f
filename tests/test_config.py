"""Tests for obdlint.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from obdlint.config import ConfigError, ObdLintConfig, find_workspace_root, load_config
from obdlint.models import LintSeverity


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ObdLintConfig)
    assert config.root == tmp_path.resolve()
    assert config.paths.signalset == "signalsets/v3/default.json"
    assert config.signalset_path == tmp_path.resolve() / "signalsets" / "v3" / "default.json"
    assert config.test_cases_path == tmp_path.resolve() / "tests" / "test_cases"
    assert config.generations_path == tmp_path.resolve() / "generations.yaml"
    assert config.model_name is None
    assert config.rules == {}


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".obdlint.yml"
    config_file.write_text(
        """
signalset: "signalsets/v3/custom.json"
test_cases: "fixtures/years"
generations: "meta/generations.yaml"
model_name: "Ford-F-150"
rules:
  signal-sentence-case:
    severity: hint
  signal-name-typo:
    enabled: false
  mode-01-filtering: false
disable:
  - signal-path-suggestion
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.paths.signalset == "signalsets/v3/custom.json"
    assert config.test_cases_path == tmp_path.resolve() / "fixtures" / "years"
    assert config.generations_path == tmp_path.resolve() / "meta" / "generations.yaml"
    assert config.model_name == "Ford-F-150"
    assert config.rules["signal-sentence-case"].severity is LintSeverity.HINT
    assert config.rules["signal-sentence-case"].enabled is None
    assert sorted(rule_id for rule_id, override in config.rules.items() if override.enabled is False) == [
        "mode-01-filtering",
        "signal-name-typo",
        "signal-path-suggestion",
    ]


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".obdlint.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_unknown_severity(tmp_path: Path) -> None:
    (tmp_path / ".obdlint.yml").write_text(
        "rules:\n  signal-bit-overlap:\n    severity: catastrophic\n",
        encoding="utf-8",
    )

    with pytest.raises(ConfigError, match="signal-bit-overlap"):
        load_config(tmp_path)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".obdlint.yml").write_text("rules: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".obdlint.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path / ".obdlint.yml")

    assert config.paths.test_cases == "tests/test_cases"
    assert config.rules == {}


def test_find_workspace_root_walks_up_to_config(tmp_path: Path) -> None:
    (tmp_path / ".obdlint.yml").write_text("model_name: Ford-F-150\n", encoding="utf-8")
    signalset = tmp_path / "signalsets" / "v3" / "default.json"
    signalset.parent.mkdir(parents=True)
    signalset.write_text("{}", encoding="utf-8")

    assert find_workspace_root(signalset) == tmp_path.resolve()
    assert find_workspace_root(signalset.parent) == tmp_path.resolve()


def test_find_workspace_root_without_config(tmp_path: Path) -> None:
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_workspace_root(nested) is None
