"""Byte-range text edits over signal set documents."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ..logging import get_logger
from ..models import Filter, TextEdit
from .syntax import JsonNode

logger = get_logger("edits")


def replace_node_edit(node: JsonNode, new_text: str) -> TextEdit:
    return TextEdit(offset=node.offset, length=node.length, new_text=new_text)


def removal_edit(node: JsonNode) -> TextEdit:
    """Remove an array element or object property, keeping the container valid.

    The element is removed with the separator that follows it; the last
    element takes the separator before it instead.
    """
    container = node.parent
    siblings = container.children if container is not None else [node]
    try:
        index = next(i for i, sibling in enumerate(siblings) if sibling is node)
    except StopIteration:
        return TextEdit(offset=node.offset, length=node.length, new_text="")

    if index + 1 < len(siblings):
        following = siblings[index + 1]
        return TextEdit(offset=node.offset, length=following.offset - node.offset, new_text="")
    if index > 0:
        previous = siblings[index - 1]
        return TextEdit(offset=previous.end, length=node.end - previous.end, new_text="")
    return TextEdit(offset=node.offset, length=node.length, new_text="")


def format_filter_inline(debug_filter: Filter) -> str:
    """Render a filter as `{ "to": 2018, "years": [2020], "from": 2022 }`."""
    parts: List[str] = []
    for key, value in debug_filter.to_dict().items():
        if isinstance(value, list):
            rendered = "[" + ", ".join(str(item) for item in value) + "]"
        else:
            rendered = str(value)
        parts.append(f'"{key}": {rendered}')
    if not parts:
        return "{}"
    return "{ " + ", ".join(parts) + " }"


def apply_edits(text: str, edits: Iterable[TextEdit]) -> Tuple[str, List[TextEdit]]:
    """Apply non-overlapping edits and return `(new_text, skipped_edits)`.

    Edits are accepted in offset order; an edit overlapping one already
    accepted is skipped. Identical edits are applied once.
    """
    source = text.encode("utf-8")
    accepted: List[TextEdit] = []
    skipped: List[TextEdit] = []
    for edit in sorted(edits, key=lambda item: (item.offset, item.length)):
        if accepted and edit == accepted[-1]:
            continue
        if accepted and _overlaps(accepted[-1], edit):
            skipped.append(edit)
            continue
        if edit.offset < 0 or edit.end > len(source):
            skipped.append(edit)
            continue
        accepted.append(edit)

    for edit in reversed(accepted):
        source = source[: edit.offset] + edit.new_text.encode("utf-8") + source[edit.end :]
    if skipped:
        logger.debug("Skipped %d conflicting edit(s)", len(skipped))
    return source.decode("utf-8"), skipped


def _overlaps(first: TextEdit, second: TextEdit) -> bool:
    # Two insertions at the same point, or any shared byte, conflict.
    if second.offset < first.end:
        return True
    return first.length == 0 and second.length == 0 and first.offset == second.offset


__all__ = [
    "apply_edits",
    "format_filter_inline",
    "removal_edit",
    "replace_node_edit",
]
