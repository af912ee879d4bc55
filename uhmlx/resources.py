"""Static-resource discovery over a resolved AST.

Two sources name style assets:

* element properties such as ``Style="{StaticResource PrimaryButton}"`` on a
  ``Button`` map to the asset ``Button.PrimaryButton``;
* ``@useStyle { _ "styles/FlowDocument.uhmls" }`` maps to ``FlowDocument``.

An identifier is reported only when ``asset_exists`` confirms the asset.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional

from .ast import Directive, DirectiveArg, Element, Node, children_of

logger = logging.getLogger(__name__)

STYLES_PREFIX = "styles/"
STYLE_EXTENSION = ".uhmls"

_STATIC_RESOURCE_RE = re.compile(r"StaticResource\s+([A-Za-z0-9_.-]+)")

AssetExists = Callable[[str], bool]


def style_identifier(tag_name: str, resource_key: str) -> str:
    """``local:Card`` + ``Dark`` -> ``local-Card.Dark``."""
    return f"{tag_name.replace(':', '-') or 'UnknownElement'}.{resource_key}"


def find_static_resource_styles(
    node: Node,
    asset_exists: AssetExists,
    *,
    styles_prefix: str = STYLES_PREFIX,
    style_extension: str = STYLE_EXTENSION,
) -> List[str]:
    """Return the style identifiers required by ``node``, in discovery order."""
    results: Dict[str, None] = {}
    _collect(node, asset_exists, results, styles_prefix, style_extension)
    logger.info("Required style assets: %s", ", ".join(results) or "(none)")
    return list(results)


def _add(identifier: str, asset_exists: AssetExists, results: Dict[str, None]) -> None:
    if identifier in results:
        return
    if asset_exists(identifier):
        results[identifier] = None
    else:
        logger.debug("No style asset for %s", identifier)


def _collect(
    node: Node,
    asset_exists: AssetExists,
    results: Dict[str, None],
    styles_prefix: str,
    style_extension: str,
) -> None:
    if isinstance(node, Element):
        for value in node.properties.values():
            if not isinstance(value, str) or "StaticResource" not in value:
                continue
            match = _STATIC_RESOURCE_RE.search(value)
            if match:
                _add(style_identifier(node.tag_name, match.group(1)), asset_exists, results)

    elif isinstance(node, Directive) and node.name == "@useStyle":
        for arg in node.args:
            resource = _style_reference(arg, styles_prefix, style_extension)
            if resource:
                _add(resource, asset_exists, results)

    for child in children_of(node) or ():
        _collect(child, asset_exists, results, styles_prefix, style_extension)


def _style_reference(arg: object, styles_prefix: str, style_extension: str) -> Optional[str]:
    if not isinstance(arg, DirectiveArg) or not arg.value.startswith(styles_prefix):
        return None
    resource = arg.value[len(styles_prefix):]
    if resource.endswith(style_extension):
        resource = resource[: -len(style_extension)]
    return resource or None


__all__ = [
    "STYLES_PREFIX",
    "STYLE_EXTENSION",
    "AssetExists",
    "style_identifier",
    "find_static_resource_styles",
]
