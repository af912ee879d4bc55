"""Tree passes run between resolution and code generation."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .ast import Directive, Element, Expression, Node, Program, children_of, clone_nodes

logger = logging.getLogger(__name__)

STYLE_PLACEHOLDER = "#__Style__"
STATIC_STRING_PLACEHOLDER = "<#__StaticString />"


def splice_style_fragments(node: Node, fragments: Sequence[Node]) -> int:
    """Replace every ``#__Style__`` element below ``node`` with ``fragments``.

    Fragments are cloned per placeholder. Returns the number of placeholders
    replaced; with no fragments the placeholders stay and a warning is logged.
    """
    children = children_of(node)
    if children is None:
        return 0
    replaced = 0
    index = 0
    while index < len(children):
        child = children[index]
        if isinstance(child, Element) and child.tag_name == STYLE_PLACEHOLDER:
            if fragments:
                children[index:index + 1] = clone_nodes(list(fragments))
                index += len(fragments)
                replaced += 1
                logger.info("Replaced %s with %d style node(s).", STYLE_PLACEHOLDER, len(fragments))
                continue
            logger.warning("Found %s but no style fragments are available to splice.", STYLE_PLACEHOLDER)
        else:
            replaced += splice_style_fragments(child, fragments)
        index += 1
    return replaced


def _cleaned(children: List[Node]) -> List[Node]:
    result: List[Node] = []
    for child in children:
        if isinstance(child, (Directive, Expression)):
            continue
        if isinstance(child, Program):
            result.extend(_cleaned(child.body))
            continue
        deep_cleanup(child)
        result.append(child)
    return result


def deep_cleanup(node: Node) -> None:
    """Flatten nested programs and drop directives and expressions, in place."""
    children = children_of(node)
    if children is None:
        return
    children[:] = _cleaned(children)


def substitute_static_strings(output: str, static_strings: Optional[str]) -> str:
    if static_strings is None or STATIC_STRING_PLACEHOLDER not in output:
        return output
    logger.info("Substituting %s with static strings.", STATIC_STRING_PLACEHOLDER)
    return output.replace(STATIC_STRING_PLACEHOLDER, static_strings, 1)


__all__ = [
    "STYLE_PLACEHOLDER",
    "STATIC_STRING_PLACEHOLDER",
    "splice_style_fragments",
    "deep_cleanup",
    "substitute_static_strings",
]
