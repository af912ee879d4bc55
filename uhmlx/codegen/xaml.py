"""XAML code generation from a fully resolved UHMLX AST."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from ..ast import Element, JsonValue, Node, Root, Text

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "    "


def format_value(value: Any) -> str:
    """Stringify a property or text value.

    Structured values fall back to a compact JSON dump, which does not round
    trip into XAML object syntax.
    """
    if isinstance(value, JsonValue):
        return json.dumps(value.data, separators=(",", ":"), ensure_ascii=False, default=str)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_properties(properties: Dict[str, Any]) -> str:
    if not properties:
        return ""
    pairs = [f'{name}="{format_value(value)}"' for name, value in properties.items()]
    return " " + " ".join(pairs)


class XamlGenerator:
    """Render an AST of :class:`Element` and :class:`Text` nodes as XAML."""

    def __init__(self, indent: str = DEFAULT_INDENT):
        self.indent = indent

    def generate(self, ast: Node) -> str:
        return self.generate_node(ast, 1).strip()

    def generate_node(self, node: Node, depth: int) -> str:
        space = self.indent * depth

        if isinstance(node, Root):
            return self._join(node.children, depth)

        if isinstance(node, Element):
            tag = node.tag_name or "Container"
            properties = format_properties(node.properties)
            if node.children:
                inner = self._join(node.children, depth + 1)
                return f"{space}<{tag}{properties}>\n{inner}\n{space}</{tag}>"
            if node.content is not None and format_value(node.content).strip():
                content = format_value(node.content).strip()
                return f"{space}<{tag}{properties}>{content}</{tag}>"
            return f"{space}<{tag}{properties} />"

        if isinstance(node, Text):
            return f"{space}{format_value(node.value)}"

        logger.error("Dropping unexpected %s node during XAML generation", node.type)
        return ""

    def _join(self, children: List[Node], depth: int) -> str:
        rendered = (self.generate_node(child, depth) for child in children)
        return "\n".join(part for part in rendered if part)


__all__ = ["XamlGenerator", "format_value", "format_properties", "DEFAULT_INDENT"]
