"""Macro resolution engine for UHMLX ASTs.

The resolver executes directives, unrolls loops, prunes conditional branches,
inlines components and substitutes data bindings. It rewrites a clone of the
input tree in place, scanning each child list left to right and re-scanning
from the splice point after every expansion.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..ast import Directive, DirectiveArg, Element, Node, Program, children_of, clone
from .bindings import evaluate_condition, inline_data_binding, lookup_path
from .control import (
    ConditionalBlock,
    ForMarker,
    IfMarker,
    find_conditional_block,
    find_end_for,
    is_malformed_loop_header,
    marker_of,
)

logger = logging.getLogger(__name__)

ComponentLoader = Callable[[str], Union[Node, List[Node]]]
DataLoader = Callable[[str], Mapping[str, Any]]


@dataclass
class ResolutionContext:
    """Per-compilation resolver state: name maps and loader caches."""

    components: Dict[str, str] = field(default_factory=dict)
    datasets: Dict[str, List[Any]] = field(default_factory=dict)
    component_cache: Dict[str, List[Node]] = field(default_factory=dict)
    data_cache: Dict[str, Any] = field(default_factory=dict)


class ComponentResolver:
    """Resolve directives and control markers using injected loaders.

    Only exceptions raised by the loaders propagate; every other problem is
    logged and the offending construct is skipped.
    """

    def __init__(self, component_loader: ComponentLoader, data_loader: DataLoader):
        self.component_loader = component_loader
        self.data_loader = data_loader

    # ------------------------------------------------------------------
    # Cached loaders
    # ------------------------------------------------------------------

    def load_component(self, path: str, context: ResolutionContext) -> List[Node]:
        if path in context.component_cache:
            logger.debug("Component cache hit: %s", path)
            return copy.deepcopy(context.component_cache[path])
        logger.info("Loading component (cached afterwards): %s", path)
        loaded = self.component_loader(path)
        fragments = list(loaded) if isinstance(loaded, list) else [loaded]
        context.component_cache[path] = copy.deepcopy(fragments)
        return fragments

    def load_data(self, path: str, context: ResolutionContext) -> Any:
        if path in context.data_cache:
            logger.debug("Data cache hit: %s", path)
            return copy.deepcopy(context.data_cache[path])
        logger.info("Loading data (cached afterwards): %s", path)
        document = self.data_loader(path)
        context.data_cache[path] = copy.deepcopy(document)
        return document

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def resolve(
        self,
        ast: Node,
        data_context: Any = None,
        *,
        context: Optional[ResolutionContext] = None,
    ) -> Node:
        """Return a resolved clone of ``ast``; the input tree is left untouched."""
        resolved = clone(ast)
        state = context if context is not None else ResolutionContext()
        self.traverse(resolved, data_context, state)
        return resolved

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def traverse(self, node: Node, data_context: Any, context: ResolutionContext) -> None:
        children = children_of(node)
        if children is not None:
            self.traverse_children(children, data_context, context)

    def traverse_children(self, children: List[Node], data_context: Any, context: ResolutionContext) -> None:
        index = 0
        while index < len(children):
            child = children[index]
            if isinstance(child, Directive):
                self.process_directive(child, context)
            else:
                marker = marker_of(child)
                if isinstance(marker, ForMarker):
                    end_index = find_end_for(children, index)
                    if end_index == -1:
                        logger.error("Found 'for %s in %s' without a matching 'end for'.", marker.var, marker.source)
                    elif self.expand_loop(children, index, end_index, marker, data_context, context):
                        continue
                elif isinstance(marker, IfMarker):
                    block = find_conditional_block(children, index)
                    if block is None:
                        logger.error("Found 'if %s' without a matching 'end if'; block left unexpanded.", marker.condition)
                    else:
                        self.resolve_conditional(children, block, data_context)
                        continue
                elif is_malformed_loop_header(child):
                    logger.warning("Malformed loop header ignored: %r", child.content.strip())
            self.traverse(child, data_context, context)
            index += 1

    # ------------------------------------------------------------------
    # Directives
    # ------------------------------------------------------------------

    def process_directive(self, node: Directive, context: ResolutionContext) -> None:
        if node.name == "@useComponents":
            for arg in node.args:
                if not isinstance(arg, DirectiveArg):
                    logger.warning("Skipping malformed @useComponents entry: %r", arg)
                    continue
                context.components[arg.key] = arg.value
                logger.info("Component mapping: %s -> %s", arg.key, arg.value)
        elif node.name == "@useData":
            for arg in node.args:
                if not isinstance(arg, DirectiveArg):
                    logger.warning("Skipping malformed @useData entry: %r", arg)
                    continue
                document = self.load_data(arg.value, context)
                dataset = document.get(arg.key) if isinstance(document, Mapping) else None
                if isinstance(dataset, list):
                    context.datasets[arg.key] = dataset
                    logger.info("Data mapping: %s -> (array of %d)", arg.key, len(dataset))
                else:
                    logger.warning("Data file %s has no array under key %r", arg.value, arg.key)
        elif node.name in ("@useStyle", "@props"):
            pass
        else:
            logger.warning("Unknown directive %s ignored", node.name)

    # ------------------------------------------------------------------
    # Loops
    # ------------------------------------------------------------------

    def resolve_dataset(self, source: str, data_context: Any, context: ResolutionContext) -> Optional[List[Any]]:
        dataset = context.datasets.get(source)
        if dataset is not None:
            return dataset
        if data_context is None:
            return None
        found, value = lookup_path(data_context, source)
        if found and isinstance(value, list):
            logger.debug("Resolved loop source %s from the data context", source)
            return value
        return None

    def expand_loop(
        self,
        nodes: List[Node],
        start: int,
        end: int,
        marker: ForMarker,
        data_context: Any,
        context: ResolutionContext,
    ) -> bool:
        """Replace ``nodes[start:end + 1]`` by one expansion per data item.

        Returns ``False`` (and leaves ``nodes`` untouched) when the loop cannot
        be expanded.
        """
        body = nodes[start + 1] if start + 1 < end else None
        if not isinstance(body, Element):
            logger.error("Loop 'for %s in %s' has no element body.", marker.var, marker.source)
            return False

        dataset = self.resolve_dataset(marker.source, data_context, context)
        if dataset is None:
            logger.warning("Cannot find an array for loop source: %s", marker.source)
            return False

        prop_alias: Optional[str] = None
        if body.is_component_reference:
            component_name = body.tag_name[1:]
            component_path = context.components.get(component_name)
            if component_path is None:
                logger.warning("No component mapping for %s", component_name)
                return False
            template = self.load_component(component_path, context)
            prop_alias = next(iter(body.properties), None) or _declared_prop(template)
        else:
            template = [body]

        expanded: List[Node] = []
        for item in dataset:
            instance = copy.deepcopy(template)
            inline_data_binding(instance, item, marker.var, prop_alias)
            self.traverse_children(instance, item, context)
            expanded.extend(instance)

        nodes[start:end + 1] = expanded
        label = body.tag_name[1:] if body.is_component_reference else body.tag_name
        logger.info("Expanded %d %s instance(s).", len(dataset), label)
        return True

    # ------------------------------------------------------------------
    # Conditionals
    # ------------------------------------------------------------------

    def resolve_conditional(self, nodes: List[Node], block: ConditionalBlock, data_context: Any) -> None:
        winner: Optional[int] = None
        for position, divider in enumerate(block.dividers):
            if divider.kind == "else":
                passes = True
            else:
                passes = evaluate_condition(divider.condition or "", data_context)
            if passes:
                winner = position
                break

        kept: List[Node] = []
        if winner is not None:
            kept = [nodes[index] for index in block.branch_range(winner)]
            divider = block.dividers[winner]
            logger.info("Condition chain passed at %s (%s); keeping %d node(s).", divider.kind, divider.condition or "TRUE", len(kept))
        else:
            logger.info("Condition chain all false; removed the whole block.")
        nodes[block.start_index:block.end_index + 1] = kept


def _declared_prop(fragments: List[Node]) -> Optional[str]:
    """First identifier of the component's own ``@props`` directive, if any."""
    for fragment in fragments:
        candidates = fragment.body if isinstance(fragment, Program) else [fragment]
        for node in candidates:
            if isinstance(node, Directive) and node.name == "@props":
                for arg in node.args:
                    if isinstance(arg, str):
                        return arg
    return None


__all__ = [
    "ComponentLoader",
    "DataLoader",
    "ResolutionContext",
    "ComponentResolver",
]
