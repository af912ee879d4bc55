"""Subcommand implementations for the UHMLX CLI."""

from .build import BuildInvocation, cmd_build, run_build

__all__ = ["BuildInvocation", "cmd_build", "run_build"]
