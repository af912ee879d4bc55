"""Dotted-path data lookup, condition truthiness, and data-binding inlining."""

from __future__ import annotations

import logging
import math
import re
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..ast import Element, Expression, Node, Text, children_of, coerce_value

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"^\{\{\s*(\w+(?:\.\w+)*)\s*\}\}$")

_MISSING = object()


def _step(current: Any, part: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(part, _MISSING)
    if isinstance(current, (list, tuple)) and part.isdecimal():
        index = int(part)
        return current[index] if index < len(current) else _MISSING
    return _MISSING


def lookup_path(context: Any, path: str, *, trim_head: bool = True) -> Tuple[bool, Any]:
    """Resolve a dotted ``path`` against ``context``.

    With ``trim_head`` a multi-segment path whose first segment is absent from
    the context is resolved without it, so ``item.title`` works when the
    context already is the item. Returns ``(found, value)``.
    """
    parts = path.split(".")
    if trim_head and len(parts) > 1 and _step(context, parts[0]) is _MISSING:
        parts = parts[1:]
    current = context
    for part in parts:
        current = _step(current, part)
        if current is _MISSING:
            return False, None
    return True, current


def is_truthy(value: Any) -> bool:
    """Falsy values are ``None``, ``False``, zero, NaN and the empty string."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def evaluate_condition(condition: str, context: Any) -> bool:
    if not condition or not is_truthy(context):
        return False
    found, value = lookup_path(context, condition)
    if not found:
        return False
    return is_truthy(value)


class BindingScope:
    """Names under which a loop item can be referenced inside a loop body."""

    def __init__(self, item: Any, loop_var: str, prop_alias: Optional[str] = None):
        self.item = item
        self.loop_var = loop_var
        self.prop_alias = prop_alias

    def resolve(self, text: str, *, allow_bare: bool = True) -> Any:
        """Return the bound value for placeholder ``text`` or ``_MISSING``.

        ``{{ alias.field }}`` and ``{{ var.path }}`` resolve ``field``/``path``
        against the item; ``{{ var }}`` yields the item itself when
        ``allow_bare`` is set.
        """
        match = _PLACEHOLDER_RE.match(text.strip())
        if match is None:
            return _MISSING
        path = match.group(1)
        head, _, rest = path.partition(".")
        if not rest:
            if allow_bare and head == self.loop_var:
                return self.item
            return _MISSING
        if head not in (self.loop_var, self.prop_alias):
            return _MISSING
        found, value = lookup_path(self.item, rest, trim_head=False)
        if not found:
            logger.warning("Binding %s left unresolved: item has no field %r", text.strip(), rest)
            return _MISSING
        return value


def _bind_properties(element: Element, scope: BindingScope) -> None:
    allow_bare = scope.prop_alias is None
    for name, value in list(element.properties.items()):
        if not isinstance(value, str):
            continue
        bound = scope.resolve(value, allow_bare=allow_bare)
        if bound is _MISSING:
            continue
        element.properties[name] = coerce_value(bound)
        logger.debug("Bound property %s of %s (loop variable %s) to %r", name, element.tag_name, scope.loop_var, bound)


def _bind_content(element: Element, scope: BindingScope) -> None:
    if not isinstance(element.content, str):
        return
    bound = scope.resolve(element.content)
    if bound is not _MISSING:
        element.content = coerce_value(bound)
        logger.debug("Bound content of %s to %r", element.tag_name, bound)


def _bind_child(children: List[Node], index: int, scope: BindingScope) -> None:
    child = children[index]
    if isinstance(child, Text) and isinstance(child.value, str):
        bound = scope.resolve(child.value)
        if bound is not _MISSING:
            child.value = coerce_value(bound)
            logger.debug("Bound text node to %r", bound)
    elif isinstance(child, Expression):
        bound = scope.resolve("{{ %s }}" % child.content)
        if bound is not _MISSING:
            children[index] = Text(value=coerce_value(bound))
            logger.debug("Bound expression %r to %r", child.content, bound)


def inline_data_binding(
    nodes: Sequence[Node],
    item: Any,
    loop_var: str,
    prop_alias: Optional[str] = None,
) -> None:
    """Substitute bindings to ``item`` in place throughout ``nodes``.

    Unresolvable bindings keep their placeholder text.
    """
    _inline(nodes, BindingScope(item, loop_var, prop_alias))


def _inline(nodes: Sequence[Node], scope: BindingScope) -> None:
    for node in nodes:
        if isinstance(node, Element):
            _bind_properties(node, scope)
            _bind_content(node, scope)
        children = children_of(node)
        if children is None:
            continue
        for index in range(len(children)):
            _bind_child(children, index, scope)
        _inline(children, scope)


__all__ = [
    "lookup_path",
    "is_truthy",
    "evaluate_condition",
    "BindingScope",
    "inline_data_binding",
]
