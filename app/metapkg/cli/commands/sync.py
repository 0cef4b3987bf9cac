"""Sync command implementation."""

import typer

from metapkg.cli.types import get_backend, report_result


def sync_repositories(ctx: typer.Context) -> None:
    """Refresh repository metadata."""
    report_result(get_backend(ctx).sync())
