"""CLI package for metapkg.

This package contains the Typer application and all subcommands.
"""

from metapkg.cli.main import app

__all__ = ["app"]
