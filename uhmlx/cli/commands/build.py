"""
Build command implementation.

Compiles one ``.uhmlx`` file into ``<stem>.xaml`` plus the debugging
artifacts ``<stem>.AST.json`` and ``<stem>.xaml.ini`` (a build stamp).
"""

import argparse
import logging
import secrets
from pathlib import Path
from typing import Optional

from uhmlx.config import WorkspaceConfig, load_workspace_config
from uhmlx.loader import SOURCE_EXTENSION, WorkspaceLoaders
from uhmlx.pipeline import CompilationResult, compile_source

from ..errors import CLIBuildError, CLIFileNotFoundError
from ..output import print_info, print_success

logger = logging.getLogger(__name__)


class BuildInvocation:
    """
    Results of a build invocation.

    Attributes:
        source: Path to the compiled source file
        result: Compilation result (XAML text, resolved AST, styles)
        xaml_path: Written XAML file
        ast_path: Written AST dump, if enabled
        stamp_path: Written build stamp, if enabled
    """

    def __init__(
        self,
        source: Path,
        result: CompilationResult,
        xaml_path: Path,
        ast_path: Optional[Path] = None,
        stamp_path: Optional[Path] = None,
    ):
        self.source = source
        self.result = result
        self.xaml_path = xaml_path
        self.ast_path = ast_path
        self.stamp_path = stamp_path


def _workspace_from_args(args: argparse.Namespace) -> WorkspaceConfig:
    root = Path(args.workspace).resolve() if getattr(args, "workspace", None) else Path.cwd()
    if not root.is_dir():
        raise CLIFileNotFoundError(f"Workspace directory not found: {root}")
    explicit = Path(args.config).resolve() if getattr(args, "config", None) else None
    return load_workspace_config(root, explicit)


def _output_stem(source: Path) -> str:
    name = source.name
    if name.endswith(SOURCE_EXTENSION):
        return name[: -len(SOURCE_EXTENSION)]
    return source.stem


def run_build(args: argparse.Namespace) -> BuildInvocation:
    """Compile ``args.input`` and write all artifacts; raises on failure."""
    workspace = _workspace_from_args(args)
    defaults = workspace.defaults

    source_path = Path(args.input)
    if not source_path.is_absolute():
        source_path = workspace.root / source_path
    if not source_path.is_file():
        raise CLIFileNotFoundError(
            f"Input file not found: {source_path}",
            hint=f"Pass a {SOURCE_EXTENSION} file relative to the workspace root",
        )

    if getattr(args, "output", None):
        output_dir = Path(args.output)
        if not output_dir.is_absolute():
            output_dir = workspace.root / output_dir
    else:
        output_dir = workspace.output_path()

    loaders = WorkspaceLoaders(
        workspace.root,
        encoding=defaults.encoding,
        styles_dir=workspace.styles_path(),
        style_extension=defaults.style_extension,
    )
    logger.info("Reading main file: %s", source_path)
    source = source_path.read_text(encoding=defaults.encoding)

    result = compile_source(
        source,
        component_loader=loaders.load_component,
        data_loader=loaders.load_data,
        style_loader=loaders.load_style,
        asset_exists=loaders.style_exists,
        static_strings=loaders.read_static_strings(workspace.static_strings_path()),
        path=str(source_path),
        indent=defaults.indent,
        styles_prefix=defaults.styles_prefix,
        style_extension=defaults.style_extension,
    )

    stem = _output_stem(source_path)
    write_ast = defaults.write_ast and not getattr(args, "no_ast", False)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        xaml_path = output_dir / f"{stem}.xaml"
        xaml_path.write_text(result.xaml, encoding=defaults.encoding)
        ast_path = None
        if write_ast:
            ast_path = output_dir / f"{stem}.AST.json"
            ast_path.write_text(result.ast_json, encoding=defaults.encoding)
        stamp_path = None
        if defaults.write_stamp:
            stamp_path = output_dir / f"{stem}.xaml.ini"
            stamp_path.write_text(secrets.token_hex(8), encoding=defaults.encoding)
    except OSError as exc:
        raise CLIBuildError(
            f"Cannot write build output: {exc}",
            context={"output_dir": str(output_dir)},
        ) from exc

    return BuildInvocation(source_path, result, xaml_path, ast_path, stamp_path)


def cmd_build(args: argparse.Namespace) -> int:
    """
    Handle the 'build' subcommand.

    Returns:
        Process exit status; errors propagate to :func:`uhmlx.cli.main`.
    """
    invocation = run_build(args)
    print_success(f"XAML written to {invocation.xaml_path}")
    if invocation.ast_path is not None:
        print_success(f"Resolved AST written to {invocation.ast_path}")
    if invocation.result.styles:
        print_info(f"Styles spliced: {', '.join(invocation.result.styles)}")
    return 0
