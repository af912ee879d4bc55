"""End-to-end compilation of UHMLX source into XAML.

source -> tokens -> AST -> resolved AST -> style discovery -> style splicing
-> cleanup -> XAML text. All I/O is delegated to the callables passed in.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .ast import Node, Program, Root, node_to_dict
from .codegen.xaml import DEFAULT_INDENT, XamlGenerator
from .errors import UhmlxCompilationError
from .lang.parser import parse_source
from .postprocess import deep_cleanup, splice_style_fragments, substitute_static_strings
from .resolver.core import ComponentLoader, ComponentResolver, DataLoader, ResolutionContext
from .resources import STYLE_EXTENSION, STYLES_PREFIX, AssetExists, find_static_resource_styles

logger = logging.getLogger(__name__)

StyleLoader = Callable[[str], Node]


@dataclass
class CompilationResult:
    """Generated XAML plus the artifacts useful for debugging a build."""

    xaml: str
    ast: Program
    styles: List[str] = field(default_factory=list)
    context: Optional[ResolutionContext] = None

    @property
    def ast_json(self) -> str:
        return json.dumps(node_to_dict(self.ast), indent=4, ensure_ascii=False)


def compile_source(
    source: str,
    *,
    component_loader: ComponentLoader,
    data_loader: DataLoader,
    style_loader: Optional[StyleLoader] = None,
    asset_exists: Optional[AssetExists] = None,
    static_strings: Optional[str] = None,
    data_context: Any = None,
    path: str = "",
    indent: str = DEFAULT_INDENT,
    styles_prefix: str = STYLES_PREFIX,
    style_extension: str = STYLE_EXTENSION,
) -> CompilationResult:
    """Compile one UHMLX unit.

    Lexer, parser, and loader errors propagate. Style discovery only runs when
    both ``asset_exists`` and ``style_loader`` are supplied.

    Raises:
        UhmlxCompilationError: if nothing renderable remains after cleanup.
    """
    logger.info("Parsing %s", path or "<source>")
    program = parse_source(source, path=path)

    context = ResolutionContext()
    resolver = ComponentResolver(component_loader, data_loader)
    resolved = resolver.resolve(program, data_context, context=context)
    logger.info("Resolution finished")

    styles: List[str] = []
    if asset_exists is not None and style_loader is not None:
        styles = find_static_resource_styles(
            resolved,
            asset_exists,
            styles_prefix=styles_prefix,
            style_extension=style_extension,
        )
        fragments = [style_loader(name) for name in styles]
        splice_style_fragments(resolved, fragments)

    deep_cleanup(resolved)
    if not resolved.body:
        raise UhmlxCompilationError(
            "Resolved AST is empty or contains only directives.",
            path=path or None,
        )

    xaml = XamlGenerator(indent).generate(Root(children=list(resolved.body)))
    xaml = substitute_static_strings(xaml, static_strings)
    return CompilationResult(xaml=xaml, ast=resolved, styles=styles, context=context)


__all__ = ["CompilationResult", "StyleLoader", "compile_source"]
