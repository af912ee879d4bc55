"""Filesystem-backed loaders used by the command line front end.

The compiler core only sees the callables exposed here; paths given to them
are resolved relative to the workspace root.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional

from .ast import Node
from .errors import UhmlxLoaderError
from .lang.parser import parse_source
from .resources import STYLE_EXTENSION

logger = logging.getLogger(__name__)

SOURCE_EXTENSION = ".uhmlx"


def data_key_for(reference: str) -> str:
    """``data/items.json`` -> ``items``."""
    return PurePosixPath(reference.strip()).name.replace(".json", "", 1)


class WorkspaceLoaders:
    """Component, data and style loaders rooted at one workspace directory."""

    def __init__(
        self,
        root: Path,
        *,
        encoding: str = "utf-8",
        styles_dir: Path = Path("styles"),
        style_extension: str = STYLE_EXTENSION,
    ):
        self.root = Path(root)
        self.encoding = encoding
        self.styles_dir = styles_dir if styles_dir.is_absolute() else self.root / styles_dir
        self.style_extension = style_extension

    def _read(self, path: Path, kind: str) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except OSError as exc:
            raise UhmlxLoaderError(f"Cannot read {kind} file: {exc}", path=str(path)) from exc

    def resolve_path(self, reference: str) -> Path:
        path = Path(reference.strip())
        return path if path.is_absolute() else self.root / path

    def load_component(self, reference: str) -> List[Node]:
        path = self.resolve_path(reference)
        logger.info("Reading component file: %s", path)
        return [parse_source(self._read(path, "component"), path=str(path))]

    def load_data(self, reference: str) -> Dict[str, Any]:
        path = self.resolve_path(reference)
        logger.info("Reading data file: %s", path)
        try:
            parsed = json.loads(self._read(path, "data"))
        except json.JSONDecodeError as exc:
            raise UhmlxLoaderError(f"Failed to load data from {reference}: {exc}", path=str(path)) from exc
        if isinstance(parsed, list):
            return {data_key_for(reference): parsed}
        if not isinstance(parsed, dict):
            raise UhmlxLoaderError(
                f"Data file {reference} must contain a JSON object or array",
                path=str(path),
            )
        return parsed

    def style_path(self, identifier: str) -> Path:
        return self.styles_dir / f"{identifier}{self.style_extension}"

    def style_exists(self, identifier: str) -> bool:
        return self.style_path(identifier).is_file()

    def load_style(self, identifier: str) -> Node:
        """Return the first node of the parsed style file for ``identifier``."""
        path = self.style_path(identifier)
        program = parse_source(self._read(path, "style"), path=str(path))
        if not program.body:
            raise UhmlxLoaderError(f"Style file for {identifier} is empty", path=str(path))
        return program.body[0]

    def read_static_strings(self, path: Path) -> Optional[str]:
        target = path if path.is_absolute() else self.root / path
        if not target.is_file():
            logger.info("No static strings file at %s", target)
            return None
        return self._read(target, "static strings")


__all__ = ["SOURCE_EXTENSION", "WorkspaceLoaders", "data_key_for"]
