"""Workspace configuration support for the UHMLX command line."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    tomllib = None  # type: ignore

from .codegen.xaml import DEFAULT_INDENT
from .resources import STYLE_EXTENSION, STYLES_PREFIX

CONFIG_CANDIDATES = ("uhmlx.toml", ".uhmlxrc")


@dataclass
class WorkspaceDefaults:
    """Default paths and flags applied when not explicitly configured."""

    styles_dir: Path = Path("styles")
    style_extension: str = STYLE_EXTENSION
    styles_prefix: str = STYLES_PREFIX
    static_strings: Path = Path("data") / "StaticStrings.xaml"
    output_dir: Path = Path("output")
    encoding: str = "utf-8"
    indent: str = DEFAULT_INDENT
    write_ast: bool = True
    write_stamp: bool = True


@dataclass
class WorkspaceConfig:
    """Resolved workspace configuration."""

    root: Path
    defaults: WorkspaceDefaults = field(default_factory=WorkspaceDefaults)
    raw: Dict[str, Any] = field(default_factory=dict)

    def _under_root(self, path: Path) -> Path:
        return path if path.is_absolute() else (self.root / path)

    def styles_path(self) -> Path:
        return self._under_root(self.defaults.styles_dir)

    def static_strings_path(self) -> Path:
        return self._under_root(self.defaults.static_strings)

    def output_path(self) -> Path:
        return self._under_root(self.defaults.output_dir)


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    if tomllib is None:
        raise RuntimeError("TOML parsing requires Python 3.11 or later.")
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _parse_defaults(data: Dict[str, Any]) -> WorkspaceDefaults:
    section = data.get("defaults") or {}
    base = WorkspaceDefaults()
    return WorkspaceDefaults(
        styles_dir=Path(section.get("styles_dir") or base.styles_dir),
        style_extension=str(section.get("style_extension") or base.style_extension),
        styles_prefix=str(section.get("styles_prefix") or base.styles_prefix),
        static_strings=Path(section.get("static_strings") or base.static_strings),
        output_dir=Path(section.get("output_dir") or base.output_dir),
        encoding=str(section.get("encoding") or base.encoding),
        indent=str(section.get("indent") or base.indent),
        write_ast=bool(section.get("write_ast", base.write_ast)),
        write_stamp=bool(section.get("write_stamp", base.write_stamp)),
    )


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in CONFIG_CANDIDATES:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_workspace_config(root: Path, explicit: Optional[Path] = None) -> WorkspaceConfig:
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        return WorkspaceConfig(root=root)

    if config_path.suffix == ".toml":
        data = _read_toml_config(config_path)
    else:
        data = _read_json_config(config_path)

    return WorkspaceConfig(root=root, defaults=_parse_defaults(data), raw=data)


__all__ = [
    "CONFIG_CANDIDATES",
    "WorkspaceDefaults",
    "WorkspaceConfig",
    "locate_config_file",
    "load_workspace_config",
]
