"""Value map key format."""

from __future__ import annotations

import json
import re
from typing import Optional

from ..document.edits import replace_node_edit
from ..document.model import SignalTarget
from ..document.syntax import JsonNode, find_node_at_location
from ..models import LintSeverity
from .base import Granularity, Rule, RuleConfig, RuleOutput

_DECIMAL_KEY = re.compile(r"^\d+$")


def hex_key_to_decimal(key: str) -> Optional[str]:
    try:
        return str(int(key, 16))
    except ValueError:
        return None


class MapKeyNumericalRule(Rule):
    capabilities = frozenset({Granularity.SIGNAL})

    @classmethod
    def default_config(cls) -> RuleConfig:
        return RuleConfig(
            id="map-key-numerical",
            name="Map Key Numerical",
            description="Map signal keys should be numerical values, not hexadecimal",
            severity=LintSeverity.ERROR,
        )

    def validate_signal(self, target: SignalTarget, node: JsonNode) -> RuleOutput:
        map_node = find_node_at_location(node, ["fmt", "map"])
        if map_node is None or map_node.type != "object":
            return None

        bad_keys = [prop.children[0] for prop in map_node.properties() if not _DECIMAL_KEY.match(str(prop.key))]
        if not bad_keys:
            return None

        listing = '", "'.join(str(key_node.value) for key_node in bad_keys)
        message = f'Map signal keys should be numerical values, not hexadecimal. Found: "{listing}"'
        first = bad_keys[0]
        decimal = hex_key_to_decimal(str(first.value))
        existing = {str(prop.key) for prop in map_node.properties()}
        if decimal is None or decimal in existing:
            return self.result(message, first)
        return self.result(
            message,
            first,
            title=f'Convert "{first.value}" to numerical value "{decimal}"',
            edits=[replace_node_edit(first, json.dumps(decimal))],
        )


__all__ = ["MapKeyNumericalRule", "hex_key_to_decimal"]
