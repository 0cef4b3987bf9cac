"""CLI commands for metapkg.

This package contains all subcommand implementations.
"""

from metapkg.cli.commands import (
    config,
    install,
    installed,
    managers,
    repo,
    search,
    sync,
    uninstall,
    update,
)

__all__ = [
    "config",
    "install",
    "installed",
    "managers",
    "repo",
    "search",
    "sync",
    "uninstall",
    "update",
]
