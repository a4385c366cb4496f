"""Tree-sitter backed JSON syntax tree with byte offsets."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any, Iterator, List, Optional, Sequence, Union

import tree_sitter_json
from tree_sitter import Language, Node, Parser

_LANGUAGE = Language(tree_sitter_json.language())

_SCALAR_TYPES = {"string", "number"}
_LITERAL_VALUES = {"true": True, "false": False, "null": None}


class DocumentParseError(ValueError):
    """Raised when a signal set document is not well-formed JSON."""

    def __init__(self, message: str, offset: int = 0) -> None:
        super().__init__(message)
        self.offset = offset


@dataclass(eq=False)
class JsonNode:
    """A node of the JSON document, shaped like jsonc-parser's `Node`.

    `offset` and `length` are byte positions in the UTF-8 encoded source. A
    `property` node spans `"key": value` and has children `[key, value]`.
    """

    type: str
    offset: int
    length: int
    value: Any = None
    children: List["JsonNode"] = field(default_factory=list, repr=False)
    parent: Optional["JsonNode"] = field(default=None, repr=False)

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def key(self) -> Optional[str]:
        """Key of a property node, or of the property this value belongs to."""
        if self.type == "property" and self.children:
            return self.children[0].value
        if self.parent is not None and self.parent.type == "property":
            return self.parent.key
        return None

    @property
    def value_node(self) -> Optional["JsonNode"]:
        if self.type == "property" and len(self.children) > 1:
            return self.children[1]
        return None

    def properties(self) -> Iterator["JsonNode"]:
        if self.type == "object":
            yield from self.children

    def find_property(self, key: str) -> Optional["JsonNode"]:
        """Return the property node for `key` on an object node."""
        for prop in self.properties():
            if prop.key == key:
                return prop
        return None

    def get(self, key: str) -> Optional["JsonNode"]:
        """Return the value node for `key` on an object node."""
        prop = self.find_property(key)
        return prop.value_node if prop is not None else None

    def to_python(self) -> Any:
        return node_value(self)


def parse_tree(text: str) -> JsonNode:
    """Parse `text` into a `JsonNode` tree, raising on any syntax error."""
    source = text.encode("utf-8")
    parser = Parser(_LANGUAGE)
    tree = parser.parse(source)
    root = tree.root_node
    if root.has_error:
        offset = _first_error_offset(root)
        line, column = line_column(source, offset)
        raise DocumentParseError(
            f"Invalid JSON at line {line}, column {column}", offset
        )
    values = [child for child in root.named_children if child.type != "comment"]
    if len(values) != 1:
        raise DocumentParseError("Document must contain exactly one JSON value", 0)
    return _convert(values[0], source, None)


def find_node_at_location(
    root: Optional[JsonNode], path: Sequence[Union[str, int]]
) -> Optional[JsonNode]:
    """Follow object keys and array indexes from `root`."""
    node = root
    for segment in path:
        if node is None:
            return None
        if isinstance(segment, str):
            if node.type != "object":
                return None
            node = node.get(segment)
        else:
            if node.type != "array" or not 0 <= segment < len(node.children):
                return None
            node = node.children[segment]
    return node


def node_value(node: Optional[JsonNode]) -> Any:
    """Materialise the Python value represented by `node`."""
    if node is None:
        return None
    if node.type == "object":
        result = {}
        for prop in node.children:
            value = prop.value_node
            result[prop.key] = node_value(value)
        return result
    if node.type == "array":
        return [node_value(child) for child in node.children]
    if node.type == "property":
        return node_value(node.value_node)
    return node.value


def line_column(source: Union[str, bytes], offset: int) -> tuple[int, int]:
    """Return the 1-based line and character column of a byte offset."""
    data = source.encode("utf-8") if isinstance(source, str) else source
    prefix = data[: max(offset, 0)].decode("utf-8", errors="ignore")
    line = prefix.count("\n") + 1
    column = len(prefix) - (prefix.rfind("\n") + 1) + 1
    return line, column


def _convert(node: Node, source: bytes, parent: Optional[JsonNode]) -> JsonNode:
    kind = node.type
    offset = node.start_byte
    length = node.end_byte - node.start_byte

    if kind == "object":
        result = JsonNode("object", offset, length, parent=parent)
        result.children = [
            _convert(child, source, result)
            for child in node.named_children
            if child.type == "pair"
        ]
        return result
    if kind == "array":
        result = JsonNode("array", offset, length, parent=parent)
        result.children = [
            _convert(child, source, result)
            for child in node.named_children
            if child.type != "comment"
        ]
        return result
    if kind == "pair":
        key = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        if key is None or value is None:
            raise DocumentParseError("Incomplete property", offset)
        result = JsonNode("property", offset, length, parent=parent)
        result.children = [_convert(key, source, result), _convert(value, source, result)]
        return result
    if kind in _LITERAL_VALUES:
        literal_type = "null" if kind == "null" else "boolean"
        return JsonNode(literal_type, offset, length, value=_LITERAL_VALUES[kind], parent=parent)
    if kind in _SCALAR_TYPES:
        raw = source[node.start_byte : node.end_byte]
        try:
            value = json.loads(raw)
        except ValueError as exc:
            raise DocumentParseError(f"Invalid {kind} literal", offset) from exc
        return JsonNode(kind, offset, length, value=value, parent=parent)
    raise DocumentParseError(f"Unexpected syntax node '{kind}'", offset)


def _first_error_offset(node: Node) -> int:
    if node.type == "ERROR" or node.is_missing:
        return node.start_byte
    for child in node.children:
        if child.has_error or child.is_missing:
            return _first_error_offset(child)
    return node.start_byte


__all__ = [
    "DocumentParseError",
    "JsonNode",
    "find_node_at_location",
    "line_column",
    "node_value",
    "parse_tree",
]
