"""AST node definitions shared by the parser, resolver, and generators."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypeVar, Union


@dataclass
class JsonValue:
    """Structured value bound from a data document (object, array, or null)."""

    data: Any


Scalar = Union[str, int, float, bool]
PropertyValue = Union[Scalar, JsonValue]


def coerce_value(raw: Any) -> PropertyValue:
    """Wrap anything that is not a plain scalar into :class:`JsonValue`.

    Structured values are deep-copied so the node never shares them with the
    data document they came from.
    """
    if isinstance(raw, JsonValue):
        return raw
    if isinstance(raw, (str, bool, int, float)):
        return raw
    return JsonValue(copy.deepcopy(raw))


@dataclass
class Node:
    """Base class for all AST nodes."""

    @property
    def type(self) -> str:
        return type(self).__name__


@dataclass
class Program(Node):
    """Top-level container; nested instances appear after component inlining."""

    body: List[Node] = field(default_factory=list)


@dataclass
class DirectiveArg:
    key: str
    value: str


@dataclass
class Directive(Node):
    """``@name { ... }`` declaration.

    Resource-mapping directives carry :class:`DirectiveArg` pairs, ``@props``
    carries bare identifiers.
    """

    name: str
    args: List[Union[DirectiveArg, str]] = field(default_factory=list)


@dataclass
class Element(Node):
    tag_name: str
    properties: Dict[str, PropertyValue] = field(default_factory=dict)
    children: List[Node] = field(default_factory=list)
    content: Optional[PropertyValue] = None

    @property
    def is_component_reference(self) -> bool:
        return self.tag_name.startswith("#")


@dataclass
class Text(Node):
    value: PropertyValue


@dataclass
class Expression(Node):
    """Raw text between ``{{`` and ``}}``: a binding or a control marker."""

    content: str


@dataclass
class Root(Node):
    """Synthetic container handed to code generators."""

    children: List[Node] = field(default_factory=list)


NodeT = TypeVar("NodeT", bound=Node)


def children_of(node: Node) -> Optional[List[Node]]:
    """Return the mutable child list of ``node`` or ``None`` for leaves."""
    if isinstance(node, Program):
        return node.body
    if isinstance(node, (Element, Root)):
        return node.children
    return None


def clone(node: NodeT) -> NodeT:
    return copy.deepcopy(node)


def clone_nodes(nodes: List[NodeT]) -> List[NodeT]:
    return copy.deepcopy(nodes)


def _value_to_json(value: Any) -> Any:
    if isinstance(value, JsonValue):
        return value.data
    return value


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Serialize a node into plain JSON-compatible data for debugging dumps."""
    if isinstance(node, Program):
        return {"type": "Program", "body": [node_to_dict(child) for child in node.body]}
    if isinstance(node, Directive):
        args = [
            {"key": arg.key, "value": arg.value} if isinstance(arg, DirectiveArg) else arg
            for arg in node.args
        ]
        return {"type": "Directive", "name": node.name, "args": args}
    if isinstance(node, Element):
        payload: Dict[str, Any] = {
            "type": "Element",
            "tagName": node.tag_name,
            "properties": {key: _value_to_json(value) for key, value in node.properties.items()},
            "children": [node_to_dict(child) for child in node.children],
        }
        if node.content is not None:
            payload["content"] = _value_to_json(node.content)
        return payload
    if isinstance(node, Text):
        return {"type": "Text", "value": _value_to_json(node.value)}
    if isinstance(node, Expression):
        return {"type": "Expression", "content": node.content}
    if isinstance(node, Root):
        return {"type": "Root", "children": [node_to_dict(child) for child in node.children]}
    raise TypeError(f"Cannot serialize node of type {type(node).__name__}")


__all__ = [
    "JsonValue",
    "Scalar",
    "PropertyValue",
    "coerce_value",
    "Node",
    "Program",
    "DirectiveArg",
    "Directive",
    "Element",
    "Text",
    "Expression",
    "Root",
    "children_of",
    "clone",
    "clone_nodes",
    "node_to_dict",
]
