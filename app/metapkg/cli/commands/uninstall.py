"""Uninstall command implementation."""

from typing import Annotated

import typer

from metapkg.cli.types import get_backend, run_package_operation
from metapkg.models.operation import Operation


def uninstall_packages(
    ctx: typer.Context,
    packages: Annotated[list[str], typer.Argument(help="Packages to uninstall.")],
) -> None:
    """Uninstall packages."""
    run_package_operation(get_backend(ctx), Operation.UNINSTALL, packages)
