"""Command identifier helpers shared by the linter and the coverage engine."""

from __future__ import annotations

import json
import re
from typing import Any, Mapping, Optional, Union

CommandPayload = Union[str, Mapping[str, Any]]

SIGNAL_DIVIDER = ":"
PROPERTY_DIVIDER = "|"

_CMD_NOISE = re.compile(r"[\s:\"{}]")


def flatten_cmd(cmd: CommandPayload) -> str:
    """Collapse a command payload into the form used inside identifiers.

    `{"22": "1100"}` becomes `221100`; string payloads only lose colons and
    whitespace.
    """
    if isinstance(cmd, str):
        return re.sub(r"[\s:]", "", cmd)
    if isinstance(cmd, Mapping) and len(cmd) == 1:
        key, value = next(iter(cmd.items()))
        return f"{key}{value}"
    return _CMD_NOISE.sub("", json.dumps(cmd, separators=(",", ":")))


def normalize_cmd(cmd: CommandPayload) -> str:
    """Grouping key for commands that address the same service request."""
    if isinstance(cmd, str):
        return cmd
    if isinstance(cmd, Mapping) and len(cmd) == 1:
        key, value = next(iter(cmd.items()))
        return f"{key}{value}"
    return json.dumps(cmd, separators=(",", ":"))


def create_command_id(hdr: str, cmd: CommandPayload, rax: Optional[str] = None) -> str:
    """Build `hdr.[rax.]cmd`."""
    payload = flatten_cmd(cmd)
    if rax:
        return f"{hdr}.{rax}.{payload}"
    return f"{hdr}.{payload}"


def normalize_command_id(command_id: str) -> str:
    """Strip trailing `:signal` and `|property` decorations."""
    head = command_id.split(SIGNAL_DIVIDER, 1)[0]
    return head.split(PROPERTY_DIVIDER, 1)[0].strip()


def strip_receive_filter(command_id: str) -> str:
    """`hdr.rax.cmd` becomes `hdr.cmd`; anything else is returned unchanged."""
    parts = command_id.split(".")
    if len(parts) == 3:
        return f"{parts[0]}.{parts[2]}"
    return command_id


__all__ = [
    "CommandPayload",
    "create_command_id",
    "flatten_cmd",
    "normalize_cmd",
    "normalize_command_id",
    "strip_receive_filter",
]
