"""Control-marker classification and sibling-list block scanning.

Loops and conditionals are written as expression blocks::

    {{ for item in items }} ... {{ end for }}
    {{ if a.b }} ... {{ else if c }} ... {{ else }} ... {{ end if }}

The parser keeps them as plain :class:`~uhmlx.ast.Expression` nodes. This
module turns marker text into typed values and locates the extent of a block
inside one child list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from ..ast import Expression, Node

_FOR_RE = re.compile(r"^for\s+(\w+)\s+in\s+(\w+(?:\.\w+)*)$")


@dataclass(frozen=True)
class ForMarker:
    var: str
    source: str


@dataclass(frozen=True)
class EndForMarker:
    pass


@dataclass(frozen=True)
class IfMarker:
    condition: str


@dataclass(frozen=True)
class ElseIfMarker:
    condition: str


@dataclass(frozen=True)
class ElseMarker:
    pass


@dataclass(frozen=True)
class EndIfMarker:
    pass


Marker = Union[ForMarker, EndForMarker, IfMarker, ElseIfMarker, ElseMarker, EndIfMarker]


def classify_marker(content: str) -> Optional[Marker]:
    """Return the control marker encoded by ``content`` or ``None`` for bindings."""
    text = content.strip()
    if text == "end for":
        return EndForMarker()
    if text == "end if":
        return EndIfMarker()
    if text == "else":
        return ElseMarker()
    if text.startswith("else if "):
        return ElseIfMarker(condition=text[len("else if "):].strip())
    if text.startswith("if "):
        return IfMarker(condition=text[len("if "):].strip())
    if text.startswith("for "):
        match = _FOR_RE.match(text)
        if match is None:
            return None
        return ForMarker(var=match.group(1), source=match.group(2))
    return None


def is_malformed_loop_header(node: Node) -> bool:
    """True for an expression that starts like a loop header but does not parse as one."""
    if not isinstance(node, Expression):
        return False
    text = node.content.strip()
    return text.startswith("for ") and _FOR_RE.match(text) is None


def marker_of(node: Node) -> Optional[Marker]:
    if isinstance(node, Expression):
        return classify_marker(node.content)
    return None


def find_end_for(nodes: Sequence[Node], start: int) -> int:
    """Index of the ``end for`` closing the loop opened at ``start``, or -1.

    Loops opened between ``start`` and the terminator are counted so that an
    inner ``end for`` closes the inner loop only.
    """
    depth = 0
    for index in range(start + 1, len(nodes)):
        marker = marker_of(nodes[index])
        if isinstance(marker, ForMarker):
            depth += 1
        elif isinstance(marker, EndForMarker):
            if depth == 0:
                return index
            depth -= 1
    return -1


@dataclass(frozen=True)
class Divider:
    """One branch head of a conditional chain."""

    kind: str  # "if", "else-if" or "else"
    index: int
    condition: Optional[str] = None


@dataclass
class ConditionalBlock:
    dividers: List[Divider] = field(default_factory=list)
    end_index: int = -1

    @property
    def start_index(self) -> int:
        return self.dividers[0].index

    def branch_range(self, position: int) -> range:
        """Sibling indices strictly between divider ``position`` and the next divider."""
        begin = self.dividers[position].index + 1
        if position + 1 < len(self.dividers):
            end = self.dividers[position + 1].index
        else:
            end = self.end_index
        return range(begin, end)


def find_conditional_block(nodes: Sequence[Node], start: int) -> Optional[ConditionalBlock]:
    """Collect the dividers of the ``if`` chain opened at ``start``.

    Returns ``None`` when no matching ``end if`` exists in ``nodes``.
    """
    opener = marker_of(nodes[start])
    if not isinstance(opener, IfMarker):
        return None
    block = ConditionalBlock(dividers=[Divider("if", start, opener.condition)])
    nested = 0
    for index in range(start + 1, len(nodes)):
        marker = marker_of(nodes[index])
        if isinstance(marker, IfMarker):
            nested += 1
        elif isinstance(marker, ElseIfMarker) and nested == 0:
            block.dividers.append(Divider("else-if", index, marker.condition))
        elif isinstance(marker, ElseMarker) and nested == 0:
            block.dividers.append(Divider("else", index))
        elif isinstance(marker, EndIfMarker):
            if nested == 0:
                block.end_index = index
                return block
            nested -= 1
    return None


__all__ = [
    "ForMarker",
    "EndForMarker",
    "IfMarker",
    "ElseIfMarker",
    "ElseMarker",
    "EndIfMarker",
    "Marker",
    "classify_marker",
    "marker_of",
    "is_malformed_loop_header",
    "find_end_for",
    "Divider",
    "ConditionalBlock",
    "find_conditional_block",
]
