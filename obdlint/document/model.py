"""Typed views over a parsed signal set document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ..logging import get_logger
from ..models import Filter
from .commands import CommandPayload, create_command_id, normalize_cmd
from .syntax import DocumentParseError, JsonNode, node_value, parse_tree

logger = get_logger("document")


@dataclass
class BitFormat:
    """Bit placement and decode formula of a signal."""

    len: Optional[int] = None
    bix: int = 0
    sign: bool = False
    mul: float = 1
    div: float = 1
    add: float = 0
    min: Optional[float] = None
    max: Optional[float] = None
    unit: Optional[str] = None
    map: Optional[Dict[str, Any]] = None
    node: Optional[JsonNode] = field(default=None, repr=False, compare=False)

    @property
    def bit_range(self) -> Optional[Tuple[int, int]]:
        """Inclusive `(first, last)` bit indexes, or None without a length."""
        if self.len is None or self.len <= 0:
            return None
        return self.bix, self.bix + self.len - 1


@dataclass
class Signal:
    id: str
    name: Optional[str] = None
    path: Optional[str] = None
    suggested_metric: Optional[str] = None
    description: Optional[str] = None
    fmt: BitFormat = field(default_factory=BitFormat)
    node: Optional[JsonNode] = field(default=None, repr=False, compare=False)

    @property
    def id_node(self) -> Optional[JsonNode]:
        return self.node.get("id") if self.node is not None else None

    @property
    def name_node(self) -> Optional[JsonNode]:
        return self.node.get("name") if self.node is not None else None


@dataclass
class SignalGroup:
    """Composite signal matched by regex; shares the signal identifier namespace."""

    id: str
    matching_regex: Optional[str] = None
    name: Optional[str] = None
    path: Optional[str] = None
    suggested_metric: Optional[str] = None
    node: Optional[JsonNode] = field(default=None, repr=False, compare=False)

    @property
    def id_node(self) -> Optional[JsonNode]:
        return self.node.get("id") if self.node is not None else None

    @property
    def name_node(self) -> Optional[JsonNode]:
        return self.node.get("name") if self.node is not None else None


SignalTarget = Union[Signal, SignalGroup]


@dataclass
class Command:
    hdr: str
    cmd: CommandPayload
    rax: Optional[str] = None
    dbg: bool = False
    dbgfilter: Optional[Filter] = None
    signals: List[Signal] = field(default_factory=list)
    node: Optional[JsonNode] = field(default=None, repr=False, compare=False)

    @property
    def command_id(self) -> str:
        return create_command_id(self.hdr, self.cmd, self.rax)

    @property
    def normalized_cmd(self) -> str:
        return normalize_cmd(self.cmd)

    def describe(self) -> str:
        return f"hdr='{self.hdr}', cmd='{self.normalized_cmd}'"


@dataclass
class InvalidCommand:
    """A command entry skipped because it lacks `hdr` or `cmd`."""

    reason: str
    node: JsonNode = field(repr=False)


@dataclass
class SignalSetDocument:
    text: str
    root: JsonNode = field(repr=False)
    commands: List[Command] = field(default_factory=list)
    signal_groups: List[SignalGroup] = field(default_factory=list)
    invalid_commands: List[InvalidCommand] = field(default_factory=list)

    @property
    def commands_node(self) -> Optional[JsonNode]:
        return self.root.get("commands")

    @property
    def signal_groups_node(self) -> Optional[JsonNode]:
        return self.root.get("signalGroups")

    def signals(self) -> Iterator[Signal]:
        for command in self.commands:
            yield from command.signals

    def identified_targets(self) -> List[SignalTarget]:
        """Signals and signal groups in source order."""
        targets: List[SignalTarget] = [*self.signals(), *self.signal_groups]
        targets.sort(key=lambda target: target.node.offset if target.node is not None else 0)
        return targets


def parse_document(text: str) -> SignalSetDocument:
    """Parse JSON text into a `SignalSetDocument`.

    Raises `DocumentParseError` for malformed JSON or a non-object root.
    Malformed command entries are collected in `invalid_commands`.
    """
    root = parse_tree(text)
    if root.type != "object":
        raise DocumentParseError("Signal set root must be a JSON object", root.offset)

    document = SignalSetDocument(text=text, root=root)

    commands_node = root.get("commands")
    if commands_node is not None and commands_node.type == "array":
        for entry in commands_node.children:
            command = _parse_command(entry, document)
            if command is not None:
                document.commands.append(command)

    groups_node = root.get("signalGroups")
    if groups_node is not None and groups_node.type == "array":
        for entry in groups_node.children:
            group = _parse_signal_group(entry)
            if group is not None:
                document.signal_groups.append(group)

    return document


def _parse_command(node: JsonNode, document: SignalSetDocument) -> Optional[Command]:
    if node.type != "object":
        document.invalid_commands.append(InvalidCommand("Command must be an object", node))
        return None

    hdr = _string(node.get("hdr"))
    if hdr is None:
        document.invalid_commands.append(InvalidCommand("Command is missing 'hdr'", node))
        return None
    cmd_value = node_value(node.get("cmd"))
    if isinstance(cmd_value, dict) and cmd_value:
        cmd: CommandPayload = {str(key): str(value) for key, value in cmd_value.items()}
    elif isinstance(cmd_value, str) and cmd_value:
        cmd = cmd_value
    else:
        document.invalid_commands.append(InvalidCommand("Command is missing 'cmd'", node))
        return None

    dbgfilter = None
    filter_node = node.get("dbgfilter")
    if filter_node is not None and filter_node.type == "object":
        dbgfilter = Filter.from_mapping(node_value(filter_node))

    command = Command(
        hdr=hdr,
        cmd=cmd,
        rax=_string(node.get("rax")),
        dbg=node_value(node.get("dbg")) is True,
        dbgfilter=dbgfilter,
        node=node,
    )
    signals_node = node.get("signals")
    if signals_node is not None and signals_node.type == "array":
        for entry in signals_node.children:
            signal = _parse_signal(entry)
            if signal is not None:
                command.signals.append(signal)
            else:
                logger.debug("Skipping signal without an id in %s", command.command_id)
    return command


def _parse_signal(node: JsonNode) -> Optional[Signal]:
    if node.type != "object":
        return None
    signal_id = _string(node.get("id"))
    if signal_id is None:
        return None
    return Signal(
        id=signal_id,
        name=_string(node.get("name")),
        path=_string(node.get("path")),
        suggested_metric=_string(node.get("suggestedMetric")),
        description=_string(node.get("description")),
        fmt=_parse_format(node.get("fmt")),
        node=node,
    )


def _parse_format(node: Optional[JsonNode]) -> BitFormat:
    if node is None or node.type != "object":
        return BitFormat(node=node)
    fmt = BitFormat(node=node)
    length = _number(node.get("len"))
    fmt.len = int(length) if length is not None else None
    bix = _number(node.get("bix"))
    if bix is not None:
        fmt.bix = int(bix)
    fmt.sign = node_value(node.get("sign")) is True
    for attribute in ("mul", "div", "add", "min", "max"):
        value = _number(node.get(attribute))
        if value is not None:
            setattr(fmt, attribute, value)
    fmt.unit = _string(node.get("unit"))
    map_node = node.get("map")
    if map_node is not None and map_node.type == "object":
        fmt.map = node_value(map_node)
    return fmt


def _parse_signal_group(node: JsonNode) -> Optional[SignalGroup]:
    if node.type != "object":
        return None
    group_id = _string(node.get("id"))
    if group_id is None:
        return None
    return SignalGroup(
        id=group_id,
        matching_regex=_string(node.get("matchingRegex")),
        name=_string(node.get("name")),
        path=_string(node.get("path")),
        suggested_metric=_string(node.get("suggestedMetric")),
        node=node,
    )


def _string(node: Optional[JsonNode]) -> Optional[str]:
    if node is not None and node.type == "string":
        return node.value
    return None


def _number(node: Optional[JsonNode]) -> Optional[float]:
    if node is not None and node.type == "number":
        return node.value
    return None


__all__ = [
    "BitFormat",
    "Command",
    "InvalidCommand",
    "Signal",
    "SignalGroup",
    "SignalSetDocument",
    "SignalTarget",
    "parse_document",
]
