"""
UHMLX CLI entry point.

    uhmlx build [input] [output]
    uhmlx Custom.uhmlx            # legacy form, same as 'build'
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from uhmlx import __version__
from uhmlx.errors import UhmlxError

from .commands import cmd_build
from .errors import CLIError, format_cli_error
from .output import print_error

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}

VALID_COMMANDS = {'build', 'help'}


def _configure_logging(args: argparse.Namespace) -> None:
    """Configure the ``uhmlx`` logger from --log-level or UHMLX_LOG_LEVEL."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv('UHMLX_LOG_LEVEL', 'warning')
    ).lower()
    numeric_level = LOG_LEVELS.get(log_level, logging.WARNING)

    package_logger = logging.getLogger('uhmlx')
    package_logger.setLevel(numeric_level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        package_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='uhmlx',
        description='Compile UHMLX markup into XAML',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--log-level', choices=sorted(LOG_LEVELS), help='Diagnostic log level')
    parser.add_argument('--verbose', action='store_true', help='Show error context and tracebacks')
    subparsers = parser.add_subparsers(dest='command')

    build_parser_ = subparsers.add_parser('build', help='Compile a .uhmlx file to XAML')
    build_parser_.add_argument('input', nargs='?', default='Custom.uhmlx', help='Input .uhmlx file')
    build_parser_.add_argument('output', nargs='?', default=None, help='Output directory')
    build_parser_.add_argument('--workspace', help='Workspace root (defaults to the current directory)')
    build_parser_.add_argument('--config', help='Explicit uhmlx.toml or .uhmlxrc path')
    build_parser_.add_argument('--no-ast', action='store_true', help='Skip writing the resolved AST dump')
    build_parser_.set_defaults(func=cmd_build)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entrypoint.

    Returns:
        Exit status: 0 on success, 1 on any compilation or build failure.
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    # Legacy invocation: a bare source file means 'build'
    if (
        argv
        and not argv[0].startswith('-')
        and argv[0] not in VALID_COMMANDS
        and (argv[0].endswith('.uhmlx') or Path(argv[0]).is_file())
    ):
        argv = ['build'] + argv

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command in (None, 'help'):
        parser.print_help()
        return 0

    _configure_logging(args)
    try:
        return args.func(args)
    except (CLIError, UhmlxError) as exc:
        print_error(format_cli_error(exc, verbose=args.verbose, include_traceback=args.verbose))
        return 1
    except Exception as exc:  # noqa: BLE001 - last-resort reporting for the CLI
        print_error(format_cli_error(exc, verbose=args.verbose, include_traceback=True))
        return 1


__all__ = ['main', 'build_parser']
