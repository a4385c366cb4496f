"""Per-model-year command support manifests (command_support.yaml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml

MANIFEST_FILENAME = "command_support.yaml"

_NULL_TAG = "tag:yaml.org,2002:null"


class ManifestError(RuntimeError):
    """Raised when a support manifest exists but cannot be parsed."""


class _StringScalarLoader(yaml.SafeLoader):
    """Safe loader that leaves every plain scalar except null as a string.

    ECU keys such as `7E0`, `700` or `0101` would otherwise resolve to
    floats, ints or octal numbers.
    """


_StringScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag == _NULL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass
class SupportManifest:
    supported_commands_by_ecu: Dict[str, List[str]] = field(default_factory=dict)
    unsupported_commands_by_ecu: Dict[str, List[str]] = field(default_factory=dict)

    def supported_entries(self) -> Iterator[Tuple[str, str]]:
        """Yield `(ecu, entry)` pairs for every supported command."""
        for ecu, entries in self.supported_commands_by_ecu.items():
            for entry in entries:
                yield ecu, entry

    def unsupported_entries(self) -> Iterator[str]:
        for entries in self.unsupported_commands_by_ecu.values():
            yield from entries


def load_manifest_text(text: str) -> SupportManifest:
    try:
        data = yaml.load(text, Loader=_StringScalarLoader)
    except yaml.YAMLError as exc:
        raise ManifestError(str(exc)) from exc
    if data is None:
        return SupportManifest()
    if not isinstance(data, dict):
        raise ManifestError("manifest root must be a mapping")
    return SupportManifest(
        supported_commands_by_ecu=_ecu_mapping(data.get("supported_commands_by_ecu")),
        unsupported_commands_by_ecu=_ecu_mapping(data.get("unsupported_commands_by_ecu")),
    )


def load_manifest(path: Path) -> Optional[SupportManifest]:
    """Return the manifest at `path`, or None when the file does not exist."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise ManifestError(f"cannot read {path}: {exc}") from exc
    return load_manifest_text(text)


def _ecu_mapping(value: Any) -> Dict[str, List[str]]:
    if not isinstance(value, dict):
        return {}
    mapping: Dict[str, List[str]] = {}
    for ecu, entries in value.items():
        if ecu is None:
            continue
        if isinstance(entries, list):
            mapping[str(ecu)] = [str(entry) for entry in entries if entry is not None]
        elif isinstance(entries, str):
            mapping[str(ecu)] = [entries]
    return mapping


__all__ = [
    "MANIFEST_FILENAME",
    "ManifestError",
    "SupportManifest",
    "load_manifest",
    "load_manifest_text",
]
