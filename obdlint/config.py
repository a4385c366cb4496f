"""Configuration loading for obdlint (.obdlint.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import LintSeverity

CONFIG_FILENAME = ".obdlint.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class PathsConfig:
    """Workspace-relative locations of the signalset and coverage data."""

    signalset: str = "signalsets/v3/default.json"
    test_cases: str = "tests/test_cases"
    generations: str = "generations.yaml"


@dataclass
class RuleOverride:
    """Per-rule knobs; unset values keep the rule's own defaults."""

    enabled: Optional[bool] = None
    severity: Optional[LintSeverity] = None


@dataclass
class ObdLintConfig:
    """Represents the settings defined in .obdlint.yml."""

    root: Path
    paths: PathsConfig = field(default_factory=PathsConfig)
    model_name: Optional[str] = None
    rules: Dict[str, RuleOverride] = field(default_factory=dict)

    @property
    def signalset_path(self) -> Path:
        return self.root / self.paths.signalset

    @property
    def test_cases_path(self) -> Path:
        return self.root / self.paths.test_cases

    @property
    def generations_path(self) -> Path:
        return self.root / self.paths.generations


def find_workspace_root(start: Path) -> Optional[Path]:
    """Nearest directory at or above `start` holding a config file."""
    current = start.expanduser().resolve()
    if current.is_file():
        current = current.parent
    for candidate in (current, *current.parents):
        if (candidate / CONFIG_FILENAME).is_file():
            return candidate
    return None


def load_config(config_path: Path) -> ObdLintConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ObdLintConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    paths = PathsConfig()
    signalset = _as_str(data.get("signalset"))
    if signalset:
        paths.signalset = signalset
    test_cases = _as_str(data.get("test_cases"))
    if test_cases:
        paths.test_cases = test_cases
    generations = _as_str(data.get("generations"))
    if generations:
        paths.generations = generations

    rules: Dict[str, RuleOverride] = {}
    for rule_id, raw in _as_dict(data.get("rules")).items():
        rules[str(rule_id)] = _parse_rule_override(str(rule_id), raw)
    for rule_id in _as_str_list(data.get("disable")):
        rules.setdefault(rule_id, RuleOverride()).enabled = False

    return ObdLintConfig(
        root=root,
        paths=paths,
        model_name=_as_str(data.get("model_name")),
        rules=rules,
    )


def _parse_rule_override(rule_id: str, raw: Any) -> RuleOverride:
    # `rule-id: false` is shorthand for disabling the rule.
    if isinstance(raw, bool):
        return RuleOverride(enabled=raw)
    settings = _as_dict(raw)
    severity = None
    severity_text = _as_str(settings.get("severity"))
    if severity_text:
        try:
            severity = LintSeverity.parse(severity_text)
        except ValueError as exc:
            raise ConfigError(f"Rule '{rule_id}': {exc}") from exc
    return RuleOverride(enabled=_as_bool(settings.get("enabled")), severity=severity)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ObdLintConfig",
    "PathsConfig",
    "RuleOverride",
    "find_workspace_root",
    "load_config",
]
