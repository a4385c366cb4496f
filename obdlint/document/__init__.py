"""Signal set document parsing, identifiers, and text edits."""

from .commands import (
    create_command_id,
    flatten_cmd,
    normalize_cmd,
    normalize_command_id,
    strip_receive_filter,
)
from .edits import apply_edits, format_filter_inline, removal_edit, replace_node_edit
from .model import (
    BitFormat,
    Command,
    InvalidCommand,
    Signal,
    SignalGroup,
    SignalSetDocument,
    SignalTarget,
    parse_document,
)
from .syntax import DocumentParseError, JsonNode, find_node_at_location, line_column, node_value, parse_tree

__all__ = [
    "BitFormat",
    "Command",
    "DocumentParseError",
    "InvalidCommand",
    "JsonNode",
    "Signal",
    "SignalGroup",
    "SignalSetDocument",
    "SignalTarget",
    "apply_edits",
    "create_command_id",
    "find_node_at_location",
    "flatten_cmd",
    "format_filter_inline",
    "line_column",
    "node_value",
    "normalize_cmd",
    "normalize_command_id",
    "parse_document",
    "parse_tree",
    "removal_edit",
    "replace_node_edit",
    "strip_receive_filter",
]
